"""Generate GDML files for the benchmark and validation geometries."""

from __future__ import annotations

import enum
import re
import sys
from os import PathLike
from typing import Optional, Sequence, Union

from .box import BoxDetector
from .four_steel_slabs import FourSteelSlabs
from .gdml import write_gdml
from .geometry import Detector, PhysicalVolume, PhysicsList
from .optical import OpticalDetector
from .segmented_cms import SegmentDefinition, SegmentedSimpleCmsDetector
from .simple_cms import MaterialType as CmsMaterialType
from .simple_cms import SimpleCmsDetector
from .testem3 import GeometryType as TestEm3GeoType
from .testem3 import MaterialType as TestEm3MatType
from .testem3 import TestEm3Detector
from .thin_slab import ThinSlabDetector

_PROG = "gdml-gen"


class GeometryID(enum.IntEnum):
    """Selectable geometries, numbered as on the command line."""

    box = 0
    four_steel_slabs = 1
    simple_cms = 2
    simple_cms_composite = 3
    segmented_simple_cms = 4
    segmented_simple_cms_composite = 5
    testem3 = 6
    testem3_composite = 7
    testem3_flat = 8
    testem3_composite_flat = 9
    optical = 10
    thin_slab = 11


_LABELS = {
    GeometryID.box: "Lead box",
    GeometryID.four_steel_slabs: "Four steel slabs",
    GeometryID.simple_cms: "Simple CMS - simple materials",
    GeometryID.simple_cms_composite: "Simple CMS - composite materials",
    GeometryID.segmented_simple_cms: "Segmented Simple CMS - simple materials",
    GeometryID.segmented_simple_cms_composite:
        "Segmented Simple CMS - composite materials",
    GeometryID.testem3: "TestEm3 - simple materials",
    GeometryID.testem3_composite: "TestEm3 - composite materials",
    GeometryID.testem3_flat: "TestEm3 flat - simple materials, for ORANGE",
    GeometryID.testem3_composite_flat:
        "TestEm3 flat - composite materials, for ORANGE",
    GeometryID.optical: "Optical - composite materials with optical properties",
    GeometryID.thin_slab: "Thin Pb slab",
}

_SEGMENTED = (GeometryID.segmented_simple_cms, GeometryID.segmented_simple_cms_composite)


def label(geometry_id: GeometryID) -> str:
    """Human-readable description of a geometry."""
    return _LABELS[GeometryID(geometry_id)]


def usage(prog: str = _PROG) -> str:
    """Help text listing the available geometries."""
    lines = ["Usage:", f"{prog} [geometry_id]", "", "Geometries:"]
    for gid in GeometryID:
        divider = " : " if gid < 10 else ": "
        lines.append(f"{int(gid)}{divider}{label(gid)}")
    lines += [
        "",
        f"For geometries {int(_SEGMENTED[0])} and {int(_SEGMENTED[1])}:",
        "3 extra parameters are needed - [num_segments_r] "
        "[num_segments_z] [num_segments_theta]",
    ]
    return "\n".join(lines) + "\n"


def _stoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    if match is None:
        raise ValueError(f"invalid integer {text!r}")
    return int(match.group(1))


def parse_segments(args: Sequence[str]) -> SegmentDefinition:
    """Read segment counts from ``[geometry_id, num_r, num_z, num_theta]``."""
    if len(args) != 4:
        first = args[0] if args else ""
        raise ValueError(
            "Missing arguments\n"
            f"{_PROG} {first} [num_segments_r] [num_segments_z] [num_segments_theta]"
        )
    return SegmentDefinition(
        num_theta=_stoi(args[3]), num_r=_stoi(args[1]), num_z=_stoi(args[2])
    )


def build_detector(
    geometry_id: GeometryID, segments: Optional[SegmentDefinition] = None
) -> tuple[Detector, str]:
    """Create the detector for a geometry and the GDML file name to use."""
    gid = GeometryID(geometry_id)
    if gid in _SEGMENTED and segments is None:
        raise ValueError(f"geometry {int(gid)} needs segment counts")

    if gid is GeometryID.box:
        return BoxDetector(), "box.gdml"
    if gid is GeometryID.four_steel_slabs:
        return FourSteelSlabs(), "four-steel-slabs.gdml"
    if gid is GeometryID.simple_cms:
        return SimpleCmsDetector(CmsMaterialType.simple), "simple-cms.gdml"
    if gid is GeometryID.simple_cms_composite:
        return (
            SimpleCmsDetector(CmsMaterialType.composite),
            "composite-simple-cms.gdml",
        )
    if gid is GeometryID.segmented_simple_cms:
        return (
            SegmentedSimpleCmsDetector(CmsMaterialType.simple, segments),
            "segmented-simple-cms.gdml",
        )
    if gid is GeometryID.segmented_simple_cms_composite:
        return (
            SegmentedSimpleCmsDetector(CmsMaterialType.composite, segments),
            "composite-segmented-simple-cms.gdml",
        )
    if gid is GeometryID.testem3:
        return (
            TestEm3Detector(TestEm3MatType.simple, TestEm3GeoType.hierarchical),
            "testem3.gdml",
        )
    if gid is GeometryID.testem3_composite:
        return (
            TestEm3Detector(TestEm3MatType.composite, TestEm3GeoType.hierarchical),
            "testem3-composite.gdml",
        )
    if gid is GeometryID.testem3_flat:
        return (
            TestEm3Detector(TestEm3MatType.simple, TestEm3GeoType.flat),
            "testem3-flat.gdml",
        )
    if gid is GeometryID.testem3_composite_flat:
        return (
            TestEm3Detector(TestEm3MatType.composite, TestEm3GeoType.flat),
            "testem3-flat-composite.gdml",
        )
    if gid is GeometryID.optical:
        return OpticalDetector(), "optical.gdml"
    return ThinSlabDetector(), "thin-slab.gdml"


def export_gdml(
    detector: Detector, gdml_filename: Union[str, PathLike]
) -> PhysicalVolume:
    """Initialize the detector and write its world, with pointer-suffixed names."""
    world = detector.world if detector.world is not None else detector.initialize()
    physics = PhysicsList(range_cuts=0.7)
    physics.construct_particles()
    physics.set_cuts(world)
    write_gdml(world, gdml_filename, append_pointers=True, export_sd=True)
    return world


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) not in (1, 4):
        print(usage(), end="")
        return 1

    try:
        raw_id = _stoi(args[0])
    except ValueError as exc:
        print(exc)
        return 1
    if not 0 <= raw_id < len(GeometryID):
        print(f"{raw_id} is an invalid geometry id.")
        return 1
    geometry_id = GeometryID(raw_id)
    if geometry_id not in _SEGMENTED and len(args) != 1:
        print("Wrong number of arguments")
        return 1

    try:
        segments = parse_segments(args) if geometry_id in _SEGMENTED else None
        detector, gdml_filename = build_detector(geometry_id, segments)
    except ValueError as exc:
        print(exc)
        return 1

    export_gdml(detector, gdml_filename)
    return 0


if __name__ == "__main__":
    sys.exit(main())