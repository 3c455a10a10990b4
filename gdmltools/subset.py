"""Extract a physical volume from a GDML file, trimmed to a given depth."""

from __future__ import annotations

import logging
import re
import sys
from os import PathLike
from typing import Iterator, Optional, Sequence, Union

from .gdml import GdmlError, read_gdml, write_gdml
from .geometry import LogicalVolume, PhysicalVolume

_log = logging.getLogger(__name__)

_PROG = "gdml-subset"


def _print_usage(exec_name: str = _PROG) -> None:
    print(
        f"usage: {exec_name} {{input}}.gdml {{physvol-name}} {{depth}} {{output}}.gdml",
        file=sys.stderr,
    )


def delete_daughters_after(lv: LogicalVolume, depth: int) -> None:
    """Remove every daughter deeper than ``depth`` levels below ``lv``."""
    if depth == 0:
        lv.clear_daughters()
        return
    for pv in lv.daughters:
        delete_daughters_after(pv.logical, depth - 1)


def _iter_physical_volumes(world: PhysicalVolume) -> Iterator[PhysicalVolume]:
    yield world
    for lv in world.logical.iter_tree():
        yield from lv.daughters


def find_physical_volume(world: PhysicalVolume, name: str) -> PhysicalVolume:
    """Return the first physical volume in the tree with the given name."""
    for pv in _iter_physical_volumes(world):
        if pv.name == name:
            return pv
    available = ", ".join(pv.name for pv in _iter_physical_volumes(world))
    raise LookupError(
        f"failed to find volume '{name}': available names are {available}"
    )


def run(
    inp_filename: Union[str, PathLike],
    vol_name: str,
    depth: int,
    out_filename: Union[str, PathLike],
) -> None:
    """Write the named volume, trimmed below ``depth``, as a new GDML world."""
    world = read_gdml(inp_filename)
    new_world = find_physical_volume(world, vol_name)
    delete_daughters_after(new_world.logical, depth)
    write_gdml(new_world, out_filename, append_pointers=False, export_sd=False)


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) == 1 and args[0] in ("--help", "-h"):
        _print_usage()
        return 0
    if len(args) != 4:
        _print_usage()
        return 2

    try:
        run(args[0], args[1], _atoi(args[2]), args[3])
    except (GdmlError, LookupError, OSError) as exc:
        _log.critical("Runtime error: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())