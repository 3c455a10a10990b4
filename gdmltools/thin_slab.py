"""A thin single-material slab in vacuum, for multiple-scattering studies."""

from __future__ import annotations

from dataclasses import dataclass

from .geometry import (
    Box,
    Detector,
    LogicalVolume,
    Material,
    PhysicalVolume,
    SensitiveDetector,
    Vector,
    cm,
    nist_material,
    place,
    um,
)


@dataclass
class SlabDefinition:
    """Slab material and half-dimensions [mm]."""

    material: Material
    dimension: Vector


def lead_slab_def() -> SlabDefinition:
    """Pb slab of 5 cm x 5 cm x 5 um."""
    material = nist_material("G4_Pb")
    material.name = "Pb"
    return SlabDefinition(material, (5 * cm, 5 * cm, 5 * um))


def carbon_slab_def() -> SlabDefinition:
    """Carbon slab of 5 cm x 5 cm x 50 um."""
    material = nist_material("G4_C")
    material.name = "C"
    return SlabDefinition(material, (5 * cm, 5 * cm, 50 * um))


def _create_slab(definition: SlabDefinition) -> PhysicalVolume:
    """Place the slab in a vacuum world four times as deep along z."""
    world_material = nist_material("G4_Galactic")
    world_material.name = "vacuum"

    x, y, z = definition.dimension
    world_lv = LogicalVolume("world", Box("world_box", x, y, 4 * z), world_material)
    world_pv = place(world_lv, "world_pv")

    slab_lv = LogicalVolume("slab", Box("slab_box", x, y, z), definition.material)
    place(slab_lv, "world_pv", world_lv)
    return world_pv


class ThinSlabDetector(Detector):
    """Thin carbon slab flagged as a sensitive detector."""

    def construct(self) -> PhysicalVolume:
        return _create_slab(carbon_slab_def())

    def construct_sd(self) -> None:
        self.set_sensitive_detector("slab", SensitiveDetector("slab_sd"))