"""TestEm3 sampling calorimeter: 50 layers of gap and absorber."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .geometry import (
    Box,
    Detector,
    LogicalVolume,
    Material,
    PhysicalVolume,
    SensitiveDetector,
    cm,
    mm,
    nist_material,
    place,
)

NUM_LAYERS = 50
CALOR_SIZE_YZ = 40 * cm
GAP_THICKNESS = 2.3 * mm
ABSORBER_THICKNESS = 5.7 * mm


class MaterialType(enum.Enum):
    """Gap material: pure lead or lead tungstate."""

    simple = "simple"
    composite = "composite"


class GeometryType(enum.Enum):
    """Nested layers, or every slab placed directly in the world."""

    hierarchical = "hierarchical"
    flat = "flat"


@dataclass
class _MaterialList:
    world: Material
    gap: Material
    absorber: Material


@dataclass(frozen=True)
class _Dimensions:
    layer_thickness: float
    calor_thickness: float
    world_size_x: float
    world_size_yz: float


def _dimensions() -> _Dimensions:
    layer = GAP_THICKNESS + ABSORBER_THICKNESS
    calor = NUM_LAYERS * layer
    return _Dimensions(layer, calor, 1.2 * calor, 1.2 * CALOR_SIZE_YZ)


def _renamed(nist_name: str, name: str) -> Material:
    material = nist_material(nist_name)
    material.name = name
    return material


class TestEm3Detector(Detector):
    """Calorimeter of alternating gap and liquid-argon absorber slabs."""

    __test__ = False  # not a pytest test class

    def __init__(
        self, material_type: MaterialType, geometry_type: GeometryType
    ) -> None:
        super().__init__()
        self.material_type = MaterialType(material_type)
        self.geometry_type = GeometryType(geometry_type)

    def construct(self) -> PhysicalVolume:
        if self.geometry_type is GeometryType.hierarchical:
            return self._create_testem3()
        return self._create_testem3_flat()

    def construct_sd(self) -> None:
        """Flag gap and absorber as sensitive in the hierarchical geometry."""
        if self.geometry_type is GeometryType.hierarchical:
            self.set_sensitive_detector("Gap", SensitiveDetector("sd_gap"))
            self.set_sensitive_detector("Absorber", SensitiveDetector("sd_absorber"))

    def _load_materials(self) -> _MaterialList:
        if self.material_type is MaterialType.simple:
            gap = _renamed("G4_Pb", "Pb")
        else:
            gap = _renamed("G4_PbWO4", "PbWO4")
        return _MaterialList(
            world=_renamed("G4_Galactic", "vacuum"),
            gap=gap,
            absorber=_renamed("G4_lAr", "lAr"),
        )

    def _create_testem3(self) -> PhysicalVolume:
        dims = _dimensions()
        materials = self._load_materials()
        half_yz = 0.5 * CALOR_SIZE_YZ

        world_box = Box(
            "world",
            0.5 * dims.world_size_x,
            0.5 * dims.world_size_yz,
            0.5 * dims.world_size_yz,
        )
        world_lv = LogicalVolume("world", world_box, materials.world)
        world_pv = place(world_lv, "world_pv")

        calor_box = Box("calorimeterBox", 0.5 * dims.calor_thickness, half_yz, half_yz)
        calor_lv = LogicalVolume("Calorimeter", calor_box, materials.world)
        place(calor_lv, "calorimeter_pv", world_lv)

        layer_box = Box("layerBox", 0.5 * dims.layer_thickness, half_yz, half_yz)

        gap_box = Box("gapBox", 0.5 * GAP_THICKNESS, half_yz, half_yz)
        gap_lv = LogicalVolume("Gap", gap_box, materials.gap)
        gap_position = (-0.5 * dims.layer_thickness + 0.5 * GAP_THICKNESS, 0.0, 0.0)

        absorber_box = Box("absorberBox", 0.5 * ABSORBER_THICKNESS, half_yz, half_yz)
        absorber_lv = LogicalVolume("Absorber", absorber_box, materials.absorber)
        absorber_position = (
            0.5 * dims.layer_thickness - 0.5 * ABSORBER_THICKNESS,
            0.0,
            0.0,
        )

        # Each layer gets its own logical volume so it can be scored uniquely
        x_center = -0.5 * dims.calor_thickness + 0.5 * dims.layer_thickness
        for i in range(NUM_LAYERS):
            layer_lv = LogicalVolume(f"Layer_{i}", layer_box, materials.world)
            place(layer_lv, "layer_pv", calor_lv, (x_center, 0.0, 0.0))
            place(gap_lv, "gap_pv", layer_lv, gap_position, i)
            place(absorber_lv, "absorber_pv", layer_lv, absorber_position, i)
            x_center += dims.layer_thickness

        return world_pv

    def _create_testem3_flat(self) -> PhysicalVolume:
        """Every slab placed in the world; no sensitive detectors."""
        dims = _dimensions()
        materials = self._load_materials()
        half_yz = 0.5 * CALOR_SIZE_YZ

        world_box = Box(
            "world_shape",
            0.5 * dims.world_size_x,
            0.5 * dims.world_size_yz,
            0.5 * dims.world_size_yz,
        )
        world_lv = LogicalVolume("world", world_box, materials.world)
        world_pv = place(world_lv, "world")

        gap_box = Box("gap_shape", 0.5 * GAP_THICKNESS, half_yz, half_yz)
        absorber_box = Box("absorber_shape", 0.5 * ABSORBER_THICKNESS, half_yz, half_yz)

        x_center = -0.5 * dims.calor_thickness + 0.5 * dims.layer_thickness
        for i in range(NUM_LAYERS):
            gap_name = f"gap_{i}"
            absorber_name = f"absorber_{i}"
            gap_lv = LogicalVolume(gap_name, gap_box, materials.gap)
            absorber_lv = LogicalVolume(absorber_name, absorber_box, materials.absorber)

            gap_x = x_center - 0.5 * dims.layer_thickness + 0.5 * GAP_THICKNESS
            absorber_x = (
                x_center + 0.5 * dims.layer_thickness - 0.5 * ABSORBER_THICKNESS
            )
            place(gap_lv, gap_name, world_lv, (gap_x, 0.0, 0.0))
            place(absorber_lv, absorber_name, world_lv, (absorber_x, 0.0, 0.0))
            x_center += dims.layer_thickness

        return world_pv