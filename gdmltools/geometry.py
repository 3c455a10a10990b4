"""In-memory detector geometry: elements, materials, solids and volumes."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterator, Optional, Union

# Internal units: lengths in mm, angles in rad, energies in MeV, density g/cm3
mm = 1.0
cm = 10.0
m = 1000.0
um = 1e-3
deg = math.pi / 180
rad = 1.0
MeV = 1.0
eV = 1e-6
ns = 1.0

Vector = tuple[float, float, float]


@dataclass(eq=False)
class Element:
    """A chemical element with atomic number and molar mass [g/mole]."""

    name: str
    symbol: str
    z: int
    a: float


@dataclass(eq=False)
class Material:
    """A material made of elements, with optional optical properties."""

    name: str
    density: float
    components: list[tuple[Element, Union[int, float]]] = field(
        default_factory=list
    )
    properties: dict[str, tuple[list[float], list[float]]] = field(
        default_factory=dict
    )
    const_properties: dict[str, float] = field(default_factory=dict)

    def add_element(self, element: Element, fraction: Union[int, float]) -> None:
        """Add an element: an int is an atom count, a float a mass fraction."""
        self.components.append((element, fraction))

    def add_property(self, name: str, energies, values) -> None:
        energies, values = list(energies), list(values)
        if len(energies) != len(values):
            raise ValueError(
                f"property {name!r}: {len(energies)} energies but "
                f"{len(values)} values"
            )
        self.properties[name] = (energies, values)

    def add_const_property(self, name: str, value: float) -> None:
        self.const_properties[name] = float(value)


_ELEMENTS = {
    "H": ("Hydrogen", 1, 1.00794),
    "C": ("Carbon", 6, 12.0107),
    "O": ("Oxygen", 8, 15.9994),
    "Si": ("Silicon", 14, 28.0855),
    "Ar": ("Argon", 18, 39.948),
    "Ti": ("Titanium", 22, 47.867),
    "Cr": ("Chromium", 24, 51.9961),
    "Fe": ("Iron", 26, 55.845),
    "Ni": ("Nickel", 28, 58.6934),
    "W": ("Tungsten", 74, 183.84),
    "Pb": ("Lead", 82, 207.217),
}

_MATERIALS = {
    "G4_Galactic": (1e-25, [("H", 1.0)]),
    "G4_Pb": (11.35, [("Pb", 1.0)]),
    "G4_Si": (2.33, [("Si", 1.0)]),
    "G4_C": (2.0, [("C", 1.0)]),
    "G4_Ti": (4.54, [("Ti", 1.0)]),
    "G4_Fe": (7.874, [("Fe", 1.0)]),
    "G4_lAr": (1.396, [("Ar", 1.0)]),
    "G4_SILICON_DIOXIDE": (2.32, [("Si", 1), ("O", 2)]),
    "G4_LEAD_OXIDE": (9.53, [("O", 0.071682), ("Pb", 0.928318)]),
    "G4_PbWO4": (8.28, [("O", 4), ("W", 1), ("Pb", 1)]),
    "G4_STAINLESS-STEEL": (8.0, [("Fe", 6), ("Cr", 2), ("Ni", 1)]),
}


def nist_element(symbol: str) -> Element:
    """Return the standard element with the given symbol."""
    try:
        name, z, a = _ELEMENTS[symbol]
    except KeyError:
        raise KeyError(f"unknown element {symbol!r}") from None
    return Element(symbol, symbol, z, a)


def nist_material(name: str) -> Material:
    """Return a new copy of the named standard material."""
    try:
        density, parts = _MATERIALS[name]
    except KeyError:
        raise KeyError(f"unknown material {name!r}") from None
    material = Material(name, density)
    for symbol, fraction in parts:
        material.add_element(nist_element(symbol), fraction)
    return material


@dataclass(eq=False)
class Box:
    """Box solid given by half-lengths [mm]."""

    name: str
    x: float
    y: float
    z: float


@dataclass(eq=False)
class Tubs:
    """Cylindrical section: radii and half-length [mm], angles [rad]."""

    name: str
    rmin: float
    rmax: float
    dz: float
    sphi: float = 0.0
    dphi: float = 2 * math.pi


Solid = Union[Box, Tubs]


@dataclass(eq=False)
class SensitiveDetector:
    """Marks volumes as sensitive; scores nothing."""

    name: str

    def process_hits(self, step) -> bool:
        return False


@dataclass(eq=False)
class LogicalVolume:
    """A solid filled with a material, holding placed daughters."""

    name: str
    solid: Solid
    material: Material
    daughters: list["PhysicalVolume"] = field(default_factory=list)
    sensitive_detector: Optional[SensitiveDetector] = None

    def add_daughter(self, physvol: "PhysicalVolume") -> None:
        self.daughters.append(physvol)

    def clear_daughters(self) -> None:
        self.daughters.clear()

    def iter_tree(self) -> Iterator["LogicalVolume"]:
        """Yield this volume and every distinct descendant, depth first."""
        seen: set[int] = set()
        stack = [self]
        while stack:
            lv = stack.pop()
            if id(lv) in seen:
                continue
            seen.add(id(lv))
            yield lv
            stack.extend(pv.logical for pv in reversed(lv.daughters))


@dataclass(eq=False)
class PhysicalVolume:
    """A placement of a logical volume inside a mother."""

    name: str
    logical: LogicalVolume
    position: Vector = (0.0, 0.0, 0.0)
    copy_number: int = 0
    mother: Optional[LogicalVolume] = None


def place(
    logical: LogicalVolume,
    name: str,
    mother: Optional[LogicalVolume] = None,
    position: Vector = (0.0, 0.0, 0.0),
    copy_number: int = 0,
) -> PhysicalVolume:
    """Place a logical volume, registering it with its mother if any."""
    pv = PhysicalVolume(
        name, logical, tuple(float(c) for c in position), copy_number, mother
    )
    if mother is not None:
        mother.add_daughter(pv)
    return pv


class Detector(ABC):
    """Builds a world volume and flags sensitive volumes."""

    def __init__(self) -> None:
        self.world: Optional[PhysicalVolume] = None

    @abstractmethod
    def construct(self) -> PhysicalVolume:
        """Build and return the world volume."""

    def construct_sd(self) -> None:
        """Flag sensitive detectors; none by default."""

    def initialize(self) -> PhysicalVolume:
        """Construct the world, then attach sensitive detectors."""
        self.world = self.construct()
        self.construct_sd()
        return self.world

    def set_sensitive_detector(self, lv_name: str, sd: SensitiveDetector) -> None:
        if self.world is None:
            raise RuntimeError("geometry has not been constructed")
        found = False
        for lv in self.world.logical.iter_tree():
            if lv.name == lv_name:
                lv.sensitive_detector = sd
                found = True
        if not found:
            raise KeyError(f"no logical volume named {lv_name!r}")


@dataclass
class Region:
    """Production-cut region rooted at a logical volume."""

    name: str
    root: LogicalVolume
    production_cut: float
    in_mass_geometry: bool = True


@dataclass
class PhysicsList:
    """Minimal physics setup with a single production cut [mm]."""

    range_cuts: float = 0.7

    def construct_particles(self) -> tuple[str, ...]:
        return ("gamma", "e-", "e+", "proton")

    def set_cuts(self, world: PhysicalVolume) -> Region:
        return Region("default", world.logical, self.range_cuts)