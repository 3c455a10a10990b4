"""An "infinite" medium: a lead cube with 500 m half-width."""

from __future__ import annotations

from .geometry import (
    Box,
    Detector,
    LogicalVolume,
    PhysicalVolume,
    SensitiveDetector,
    m,
    nist_material,
    place,
)


class BoxDetector(Detector):
    """A single lead box that is also the sensitive volume."""

    def construct(self) -> PhysicalVolume:
        material = nist_material("G4_Pb")
        material.name = "Pb"

        world_size = 500 * m
        solid = Box("world_box", world_size, world_size, world_size)
        world_lv = LogicalVolume("world", solid, material)
        return place(world_lv, "world_pv")

    def construct_sd(self) -> None:
        self.set_sensitive_detector("world", SensitiveDetector("world_sd"))