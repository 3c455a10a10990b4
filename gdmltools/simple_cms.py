"""Simple CMS mock-up: single-material concentric cylinders in vacuum."""

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
    Tubs,
    cm,
    deg,
    m,
    mm,
    nist_material,
    place,
)


class MaterialType(enum.Enum):
    """Choice between single-element and composite materials."""

    simple = "simple"
    composite = "composite"


@dataclass
class MaterialList:
    """Material of each detector layer."""

    world: Material
    vacuum_tube: Material
    si_tracker: Material
    em_calorimeter: Material
    had_calorimeter: Material
    sc_solenoid: Material
    muon_chambers: Material


# (standard material, exported name) for the tracker and EM calorimeter
_TRACKER_CALO = {
    MaterialType.simple: (("G4_Si", "Si"), ("G4_Pb", "Pb")),
    MaterialType.composite: (("G4_SILICON_DIOXIDE", "SiO2"), ("G4_LEAD_OXIDE", "Pb3O4")),
}


def _renamed(nist_name: str, name: str) -> Material:
    material = nist_material(nist_name)
    material.name = name
    return material


def build_materials(material_type: MaterialType) -> MaterialList:
    """Build the material list for the given material type."""
    (si_nist, si_name), (em_nist, em_name) = _TRACKER_CALO[MaterialType(material_type)]
    vacuum = _renamed("G4_Galactic", "vacuum")
    return MaterialList(
        world=vacuum,
        vacuum_tube=vacuum,
        si_tracker=_renamed(si_nist, si_name),
        em_calorimeter=_renamed(em_nist, em_name),
        had_calorimeter=_renamed("G4_C", "C"),
        sc_solenoid=_renamed("G4_Ti", "Ti"),
        muon_chambers=_renamed("G4_Fe", "Fe"),
    )


@dataclass(frozen=True)
class VolumeGap:
    """Gaps left between neighbouring cylinders to exercise navigation."""

    overlap: float = 0.0
    millimeter: float = 1 * mm
    tolerance: float = 1e-9 * mm


class SimpleCmsDetector(Detector):
    """Concentric cylinders standing in for the CMS detector layers.

    | Volume                       | Composition | Dimensions [cm]    |
    | world                        | vacuum      | [1000, 1000, 2000] |
    | vacuum tube                  | vacuum      | [0, 30, 1400]      |
    | silicon tracker              | Si or SiO2  | [30, 125, 1400]    |
    | electromagnetic calorimeter  | Pb or Pb3O4 | [125, 175, 1400]   |
    | hadron calorimeter           | C           | [175, 275, 1400]   |
    | superconducting solenoid     | Ti          | [275, 375, 1400]   |
    | muon chambers                | Fe          | [375, 700, 1400]   |
    """

    world_size = 20 * m
    half_length = 7 * m

    def __init__(self, material_type: MaterialType) -> None:
        super().__init__()
        self.material_type = MaterialType(material_type)
        self.volume_gaps = VolumeGap()

    def _tube(self, name: str, rmin: float, rmax: float) -> Tubs:
        return Tubs(name, rmin, rmax, self.half_length, 0 * deg, 360 * deg)

    def construct(self) -> PhysicalVolume:
        materials = build_materials(self.material_type)
        gaps = self.volume_gaps

        world_def = Box(
            "world_box", self.world_size / 2, self.world_size / 2, self.world_size
        )
        layers = (
            (
                self._tube("lhc_vacuum_tube", 0, 30 * cm - gaps.tolerance),
                materials.vacuum_tube,
                "vacuum_tube",
                "vacuum_tube_pv",
            ),
            (
                self._tube("silicon_tracker", 30 * cm, 125 * cm - gaps.tolerance),
                materials.si_tracker,
                "si_tracker",
                "si_tracker_pv",
            ),
            (
                self._tube("crystal_em_calorimeter", 125 * cm, 175 * cm - gaps.overlap),
                materials.em_calorimeter,
                "em_calorimeter",
                "em_calorimeter_pv",
            ),
            (
                self._tube("hadron_calorimeter", 175 * cm, 275 * cm - gaps.overlap),
                materials.had_calorimeter,
                "had_calorimeter",
                "had_calorimeter_pv",
            ),
            (
                self._tube(
                    "superconducting_solenoid", 275 * cm, 375 * cm - gaps.millimeter
                ),
                materials.sc_solenoid,
                "sc_solenoid",
                "sc_solenoid_pv",
            ),
            (
                self._tube("iron_muon_chambers", 375 * cm, 700 * cm),
                materials.muon_chambers,
                "fe_muon_chambers",
                "iron_muon_chambers_pv",
            ),
        )

        world_lv = LogicalVolume("world", world_def, materials.world)
        world_pv = place(world_lv, "world_pv")
        for solid, material, lv_name, pv_name in layers:
            place(LogicalVolume(lv_name, solid, material), pv_name, world_lv)
        return world_pv

    def construct_sd(self) -> None:
        """Use the silicon tracker and EM calorimeter as scoring regions."""
        self.set_sensitive_detector("si_tracker", SensitiveDetector("si_tracker_sd"))
        self.set_sensitive_detector(
            "em_calorimeter", SensitiveDetector("em_calorimeter_sd")
        )