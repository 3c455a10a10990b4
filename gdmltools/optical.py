"""Optical test geometry: a scintillator slab and a water slab in vacuum."""

from __future__ import annotations

from dataclasses import dataclass, field

from .geometry import (
    Box,
    Detector,
    Element,
    LogicalVolume,
    Material,
    PhysicalVolume,
    SensitiveDetector,
    cm,
    eV,
    m,
    MeV,
    nist_element,
    nist_material,
    ns,
    place,
)

# Planck constant times the speed of light in internal units [MeV*mm]
_H_PLANCK_C_LIGHT = 1.23984198e-12
_AVOGADRO = 6.02214076e23  # [1/mole]


@dataclass
class PropertyTable:
    """Tabulated optical property: energies [MeV] and matching values."""

    energy: list[float] = field(default_factory=list)
    value: list[float] = field(default_factory=list)


def to_energy(wavelength_nm: float) -> float:
    """Convert a wavelength to a photon energy [MeV]."""
    if wavelength_nm < 0:
        raise ValueError(f"wavelength must be non-negative, got {wavelength_nm}")
    return _H_PLANCK_C_LIGHT / wavelength_nm


def to_mass_fraction(
    element_name: str, atom_density: float, material_density: float
) -> float:
    """Mass fraction of an element from its atom density [1/cm3].

    ``material_density`` is the density of the whole material [g/cm3].
    """
    if not element_name:
        raise ValueError("element name must not be empty")
    if atom_density <= 0:
        raise ValueError(f"atom density must be positive, got {atom_density}")
    if material_density <= 0:
        raise ValueError(
            f"material density must be positive, got {material_density}"
        )
    element = nist_element(element_name)
    mass_density = atom_density / _AVOGADRO * element.a
    return mass_density / material_density


_SCINT_WAVELENGTH = (
    380.000, 381.600, 383.200, 384.800, 386.400, 388.000, 389.600, 391.200,
    392.800, 394.400, 396.000, 397.600, 399.200, 400.800, 402.400, 404.000,
    405.600, 407.200, 408.800, 410.400, 412.000, 413.600, 415.200, 416.800,
    418.400, 420.000, 421.600, 423.200, 424.800, 426.400, 428.000, 429.600,
    431.200, 432.800, 434.400, 436.000, 437.600, 439.200, 440.800, 442.400,
    444.000, 445.600, 447.200, 448.800, 450.400, 452.000, 453.600, 455.200,
    456.800, 458.400, 460.000, 463.200, 464.800, 466.400, 468.000, 469.600,
    471.200, 472.800, 474.400, 476.000, 477.600, 479.200, 480.800, 482.400,
    484.000, 485.600, 487.200, 488.800, 490.400, 492.000, 493.600, 495.200,
    496.800, 498.400, 500.000,
)

_SCINT_AMPLITUDE = (
    0.041, 0.058, 0.085, 0.124, 0.176, 0.239, 0.316, 0.415, 0.519, 0.623,
    0.709, 0.780, 0.843, 0.884, 0.925, 0.958, 0.980, 0.997, 1.000, 0.989,
    0.961, 0.914, 0.832, 0.750, 0.678, 0.626, 0.590, 0.560, 0.538, 0.516,
    0.500, 0.489, 0.475, 0.461, 0.445, 0.431, 0.418, 0.401, 0.382, 0.365,
    0.349, 0.332, 0.310, 0.291, 0.269, 0.247, 0.223, 0.201, 0.181, 0.168,
    0.151, 0.127, 0.116, 0.107, 0.096, 0.088, 0.083, 0.074, 0.069, 0.066,
    0.061, 0.058, 0.055, 0.052, 0.047, 0.044, 0.041, 0.039, 0.036, 0.033,
    0.030, 0.025, 0.025, 0.022, 0.020,
)

_WATER_ENERGY_EV = (
    2.034, 2.068, 2.103, 2.139, 2.177, 2.216, 2.256, 2.298, 2.341, 2.386,
    2.433, 2.481, 2.532, 2.585, 2.640, 2.697, 2.757, 2.820, 2.885, 2.954,
    3.026, 3.102, 3.181, 3.265, 3.353, 3.446, 3.545, 3.649, 3.760, 3.877,
    4.002, 4.136,
)

_WATER_RINDEX = (
    1.3435, 1.344, 1.3445, 1.345, 1.3455, 1.346, 1.3465,
    1.347, 1.3475, 1.348, 1.3485, 1.3492, 1.35, 1.3505,
    1.351, 1.3518, 1.3522, 1.3530, 1.3535, 1.354, 1.3545,
    1.355, 1.3555, 1.356, 1.3568, 1.3572, 1.358, 1.3585,
    1.359, 1.3595, 1.36, 1.3608,
)

_WATER_ABSORPTION_M = (
    3.448, 4.082, 6.329, 9.174, 12.346,
    13.889, 15.152, 17.241, 18.868, 20.000,
    26.316, 35.714, 45.455, 47.619, 52.632,
    52.632, 55.556, 52.632, 52.632, 47.619,
    45.455, 41.667, 37.037, 33.333, 30.000,
    28.500, 27.000, 24.500, 22.000, 19.500,
    17.500, 14.500,
)


def scint_comp() -> PropertyTable:
    """Scintillation spectrum of EJ-204/NE-104/BC-404."""
    return PropertyTable(
        energy=[to_energy(wl) for wl in _SCINT_WAVELENGTH],
        value=list(_SCINT_AMPLITUDE),
    )


def scint_rindex() -> PropertyTable:
    """Constant refractive index of EJ-204/NE-104/BC-404."""
    return PropertyTable(energy=[to_energy(200), to_energy(800)], value=[1.58, 1.58])


def scint_material() -> Material:
    """Organic scintillator EJ-204/NE-104/BC-404 with optical properties."""
    density = 1.023  # [g/cm3]
    material = Material("pvt-ej-204", density)
    material.add_element(
        nist_element("H"), to_mass_fraction("H", 5.15e22, density)
    )
    material.add_element(
        nist_element("C"), to_mass_fraction("C", 4.68e22, density)
    )

    comp = scint_comp()
    rindex = scint_rindex()
    material.add_property("SCINTILLATIONCOMPONENT1", comp.energy, comp.value)
    material.add_property("RINDEX", rindex.energy, rindex.value)
    material.add_const_property("SCINTILLATIONYIELD", 10400 / MeV)
    material.add_const_property("SCINTILLATIONYIELD1", 1)
    material.add_const_property("SCINTILLATIONTIMECONSTANT1", 1.8 * ns)
    material.add_const_property("SCINTILLATIONRISETIME1", 0.7 * ns)
    material.add_const_property("RESOLUTIONSCALE", 1)
    return material


def water_energy_table() -> list[float]:
    """Energy bins [MeV] shared by the water properties."""
    return [e * eV for e in _WATER_ENERGY_EV]


def water_rindex() -> PropertyTable:
    """Refractive index of water."""
    return PropertyTable(energy=water_energy_table(), value=list(_WATER_RINDEX))


def water_absorption() -> PropertyTable:
    """Absorption length of water [mm]."""
    return PropertyTable(
        energy=water_energy_table(), value=[v * m for v in _WATER_ABSORPTION_M]
    )


def water_material() -> Material:
    """Water with refractive index, Rayleigh and absorption lengths."""
    hydrogen = Element("hydrogen", "H", 1, 1.01)
    oxygen = Element("oxygen", "O", 8, 16.00)

    material = Material("water", 1.0)
    material.add_element(hydrogen, 2)
    material.add_element(oxygen, 1)

    rindex = water_rindex()
    material.add_property("RINDEX", rindex.energy, rindex.value)

    # Fake mean free path values
    rayleigh = PropertyTable(
        energy=[rindex.energy[0], rindex.energy[-1]], value=[100 * cm, 100 * cm]
    )
    material.add_property("RAYLEIGH", rayleigh.energy, rayleigh.value)

    absorption = water_absorption()
    material.add_property("ABSLENGTH", absorption.energy, absorption.value)
    return material


class OpticalDetector(Detector):
    """Scintillator and water boxes side by side in a vacuum world."""

    world_size = 10 * m

    def construct(self) -> PhysicalVolume:
        world_material = nist_material("G4_Galactic")
        world_material.name = "vacuum"

        ws = self.world_size
        world_lv = LogicalVolume("world", Box("world_box", ws, ws, ws), world_material)
        world_pv = place(world_lv, "world_pv")

        scint_lv = LogicalVolume(
            "scint_lv", Box("scint_box", 2 * m, ws, ws), scint_material()
        )
        place(scint_lv, "scint_pv", world_lv, (-3 * m, 0.0, 0.0))

        water_lv = LogicalVolume(
            "water_lv", Box("water_box", 2 * m, ws, ws), water_material()
        )
        place(water_lv, "water_pv", world_lv, (3 * m, 0.0, 0.0))

        return world_pv

    def construct_sd(self) -> None:
        self.set_sensitive_detector("scint_lv", SensitiveDetector("scint_sd"))