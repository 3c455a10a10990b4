"""Segmented simple CMS: concentric cylinders split in r, z and phi."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .geometry import (
    Box,
    Detector,
    LogicalVolume,
    Material,
    PhysicalVolume,
    Tubs,
    cm,
    deg,
    m,
    place,
)
from .simple_cms import MaterialType, build_materials


@dataclass(frozen=True)
class SegmentDefinition:
    """Number of segments along each cylindrical axis."""

    num_theta: int
    num_r: int
    num_z: int


@dataclass(frozen=True)
class CylinderRadius:
    """Outer radius [mm] of each concentric cylinder."""

    vacuum_tube: float = 30 * cm
    si_tracker: float = 125 * cm
    em_calo: float = 175 * cm
    had_calo: float = 275 * cm
    sc_solenoid: float = 375 * cm
    muon_chambers: float = 700 * cm


class SegmentedSimpleCmsDetector(Detector):
    """Simple CMS whose layers are split into many individually placed tubes.

    Each material cylinder keeps the size it has in the unsegmented simple
    CMS; e.g. a silicon tracker split twice radially yields segments with
    r = [30, 77.5] cm and r = [77.5, 125] cm. Every segment is placed
    directly in the world volume.
    """

    world_size = 20 * m
    half_length = 7 * m

    def __init__(
        self, material_type: MaterialType, segments: SegmentDefinition
    ) -> None:
        super().__init__()
        if min(segments.num_r, segments.num_theta, segments.num_z) < 1:
            raise ValueError("Number of segments must be at least 1 in every axis")
        self.material_type = MaterialType(material_type)
        self.num_segments = segments
        self.radius = CylinderRadius()
        self.materials = build_materials(self.material_type)

    def construct(self) -> PhysicalVolume:
        materials = self.materials
        radius = self.radius

        world_def = Box(
            "world_def", self.world_size / 2, self.world_size / 2, self.world_size
        )
        world_lv = LogicalVolume("world", world_def, materials.world)
        world_pv = place(world_lv, "world")

        vacuum_tube_def = Tubs(
            "vacuum_tube_def",
            0.0,
            radius.vacuum_tube,
            self.half_length,
            0 * deg,
            360 * deg,
        )
        vacuum_tube_lv = LogicalVolume(
            "vacuum_tube", vacuum_tube_def, materials.vacuum_tube
        )
        place(vacuum_tube_lv, "vacuum_tube_pv", world_lv)

        layers = (
            ("si_tracker", radius.vacuum_tube, radius.si_tracker, materials.si_tracker),
            ("em_calorimeter", radius.si_tracker, radius.em_calo, materials.em_calorimeter),
            ("had_calorimeter", radius.em_calo, radius.had_calo, materials.had_calorimeter),
            ("sc_solenoid", radius.had_calo, radius.sc_solenoid, materials.sc_solenoid),
            ("muon_chambers", radius.sc_solenoid, radius.muon_chambers, materials.muon_chambers),
        )
        for name, inner_r, outer_r, material in layers:
            self._flat_segmented_cylinder(name, inner_r, outer_r, material, world_lv)

        return world_pv

    def construct_sd(self) -> None:
        """No volumes are flagged as sensitive."""

    def _flat_segmented_cylinder(
        self,
        name: str,
        inner_r: float,
        outer_r: float,
        material: Material,
        world_lv: LogicalVolume,
    ) -> None:
        """Place every r/z/phi segment of one cylinder in the world volume."""
        segments = self.num_segments
        segment_r = (outer_r - inner_r) / segments.num_r
        segment_theta = 2 * math.pi / segments.num_theta
        segment_z = 2 * self.half_length / segments.num_z
        half_segment_z = segment_z / 2
        init_z = -self.half_length + half_segment_z

        for r in range(segments.num_r):
            r_min = inner_r + r * segment_r
            r_max = r_min + segment_r
            for z in range(segments.num_z):
                position = (0.0, 0.0, init_z + z * segment_z)
                for theta in range(segments.num_theta):
                    segment_name = f"{name}_{r}_{z}_{theta}"
                    solid = Tubs(
                        f"{segment_name}_def",
                        r_min,
                        r_max,
                        half_segment_z,
                        theta * segment_theta,
                        segment_theta,
                    )
                    segment_lv = LogicalVolume(segment_name, solid, material)
                    place(segment_lv, f"{segment_name}_pv", world_lv, position)