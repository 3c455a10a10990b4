"""Reading and writing geometries as GDML."""

from __future__ import annotations

import math
import xml.etree.ElementTree as ET
from os import PathLike
from typing import Union

from .geometry import (
    Box,
    Element,
    LogicalVolume,
    Material,
    PhysicalVolume,
    SensitiveDetector,
    Tubs,
    place,
)

_LENGTH = {"mm": 1.0, "cm": 10.0, "m": 1000.0, "um": 1e-3}
_ANGLE = {"rad": 1.0, "deg": math.pi / 180}


class GdmlError(ValueError):
    """Malformed or inconsistent GDML."""


def _fmt(value: float) -> str:
    return repr(float(value))


def _postorder(root: LogicalVolume) -> list[LogicalVolume]:
    result: list[LogicalVolume] = []
    seen: set[int] = set()

    def visit(lv: LogicalVolume) -> None:
        if id(lv) in seen:
            return
        seen.add(id(lv))
        for pv in lv.daughters:
            visit(pv.logical)
        result.append(lv)

    visit(root)
    return result


def to_xml(
    world: PhysicalVolume, append_pointers: bool = False, export_sd: bool = True
) -> ET.Element:
    """Serialize the tree under a world volume to a GDML element."""

    def name(obj, base: str) -> str:
        return f"{base}0x{id(obj):x}" if append_pointers else base

    root = ET.Element("gdml")
    define = ET.SubElement(root, "define")
    materials_el = ET.SubElement(root, "materials")
    solids_el = ET.SubElement(root, "solids")
    structure = ET.SubElement(root, "structure")

    volumes = _postorder(world.logical)
    written_elements: set[str] = set()
    written_materials: set[str] = set()
    written_solids: set[int] = set()

    def element_ref(el: Element) -> str:
        ref = name(el, el.name)
        if ref not in written_elements:
            written_elements.add(ref)
            node = ET.SubElement(
                materials_el, "element", name=ref, formula=el.symbol, Z=str(el.z)
            )
            ET.SubElement(node, "atom", value=_fmt(el.a), unit="g/mole")
        return ref

    def material_ref(mat: Material) -> str:
        ref = name(mat, mat.name)
        if ref in written_materials:
            return ref
        written_materials.add(ref)
        comps = [(element_ref(el), n) for el, n in mat.components]
        prop_nodes = []
        for pname, (energies, values) in mat.properties.items():
            mname = f"{pname}_{ref}"
            flat = " ".join(_fmt(v) for pair in zip(energies, values) for v in pair)
            ET.SubElement(define, "matrix", name=mname, coldim="2", values=flat)
            prop_nodes.append((pname, mname))
        for pname, value in mat.const_properties.items():
            mname = f"{pname}_{ref}"
            ET.SubElement(define, "matrix", name=mname, coldim="1", values=_fmt(value))
            prop_nodes.append((pname, mname))
        node = ET.SubElement(materials_el, "material", name=ref)
        for pname, mname in prop_nodes:
            ET.SubElement(node, "property", name=pname, ref=mname)
        ET.SubElement(node, "D", value=_fmt(mat.density), unit="g/cm3")
        for eref, n in comps:
            if isinstance(n, int):
                ET.SubElement(node, "composite", n=str(n), ref=eref)
            else:
                ET.SubElement(node, "fraction", n=_fmt(n), ref=eref)
        return ref

    def solid_ref(solid) -> str:
        ref = name(solid, solid.name)
        if id(solid) in written_solids:
            return ref
        written_solids.add(id(solid))
        if isinstance(solid, Box):
            ET.SubElement(
                solids_el, "box", name=ref, x=_fmt(2 * solid.x),
                y=_fmt(2 * solid.y), z=_fmt(2 * solid.z), lunit="mm",
            )
        elif isinstance(solid, Tubs):
            ET.SubElement(
                solids_el, "tube", name=ref, rmin=_fmt(solid.rmin),
                rmax=_fmt(solid.rmax), z=_fmt(2 * solid.dz),
                startphi=_fmt(solid.sphi), deltaphi=_fmt(solid.dphi),
                aunit="rad", lunit="mm",
            )
        else:
            raise GdmlError(f"unsupported solid {type(solid).__name__}")
        return ref

    for lv in volumes:
        mref = material_ref(lv.material)
        sref = solid_ref(lv.solid)
        node = ET.SubElement(structure, "volume", name=name(lv, lv.name))
        ET.SubElement(node, "materialref", ref=mref)
        ET.SubElement(node, "solidref", ref=sref)
        for pv in lv.daughters:
            pnode = ET.SubElement(
                node, "physvol", name=name(pv, pv.name), copynumber=str(pv.copy_number)
            )
            ET.SubElement(pnode, "volumeref", ref=name(pv.logical, pv.logical.name))
            if any(pv.position):
                x, y, z = pv.position
                ET.SubElement(
                    pnode, "position", name=name(pv, pv.name) + "_pos",
                    x=_fmt(x), y=_fmt(y), z=_fmt(z), unit="mm",
                )
        if export_sd and lv.sensitive_detector is not None:
            ET.SubElement(
                node, "auxiliary", auxtype="SensDet",
                auxvalue=lv.sensitive_detector.name,
            )

    setup = ET.SubElement(root, "setup", name="Default", version="1.0")
    ET.SubElement(setup, "world", ref=name(world.logical, world.logical.name))
    return root


def write_gdml(
    world: PhysicalVolume,
    path: Union[str, PathLike],
    append_pointers: bool = False,
    export_sd: bool = True,
) -> None:
    """Write a world volume to a GDML file, overwriting it."""
    tree = ET.ElementTree(to_xml(world, append_pointers, export_sd))
    ET.indent(tree)
    tree.write(path, encoding="utf-8", xml_declaration=True)


def _attr(node: ET.Element, key: str) -> str:
    value = node.get(key)
    if value is None:
        raise GdmlError(f"<{node.tag}> is missing attribute {key!r}")
    return value


def _num(node: ET.Element, key: str, scale: float = 1.0) -> float:
    try:
        return float(_attr(node, key)) * scale
    except ValueError:
        raise GdmlError(f"<{node.tag}> attribute {key!r} is not a number") from None


def _lookup(table: dict, ref: str, kind: str):
    try:
        return table[ref]
    except KeyError:
        raise GdmlError(f"undefined {kind} {ref!r}") from None


def from_xml(root: ET.Element) -> PhysicalVolume:
    """Build a geometry from a GDML element, returning the world placement."""
    matrices: dict[str, list[float]] = {}
    for node in root.iterfind("define/matrix"):
        matrices[_attr(node, "name")] = [float(v) for v in _attr(node, "values").split()]

    elements: dict[str, Element] = {}
    materials: dict[str, Material] = {}
    for node in root.iterfind("materials/element"):
        atom = node.find("atom")
        if atom is None:
            raise GdmlError("<element> has no <atom>")
        ename = _attr(node, "name")
        elements[ename] = Element(
            ename, node.get("formula", ename), int(_num(node, "Z")), _num(atom, "value")
        )
    for node in root.iterfind("materials/material"):
        d = node.find("D")
        if d is None:
            raise GdmlError("<material> has no density")
        mat = Material(_attr(node, "name"), _num(d, "value"))
        for comp in node:
            if comp.tag == "composite":
                mat.add_element(
                    _lookup(elements, _attr(comp, "ref"), "element"),
                    int(_num(comp, "n")),
                )
            elif comp.tag == "fraction":
                mat.add_element(
                    _lookup(elements, _attr(comp, "ref"), "element"), _num(comp, "n")
                )
            elif comp.tag == "property":
                values = _lookup(matrices, _attr(comp, "ref"), "matrix")
                if len(values) == 1:
                    mat.add_const_property(_attr(comp, "name"), values[0])
                else:
                    mat.add_property(_attr(comp, "name"), values[0::2], values[1::2])
        materials[mat.name] = mat

    solids: dict[str, object] = {}
    for node in root.iterfind("solids/*"):
        lunit = _LENGTH.get(node.get("lunit", "mm"))
        if lunit is None:
            raise GdmlError(f"unknown length unit {node.get('lunit')!r}")
        sname = _attr(node, "name")
        if node.tag == "box":
            solids[sname] = Box(
                sname, _num(node, "x", lunit / 2), _num(node, "y", lunit / 2),
                _num(node, "z", lunit / 2),
            )
        elif node.tag == "tube":
            aunit = _ANGLE.get(node.get("aunit", "rad"))
            if aunit is None:
                raise GdmlError(f"unknown angle unit {node.get('aunit')!r}")
            solids[sname] = Tubs(
                sname, float(node.get("rmin", 0)) * lunit, _num(node, "rmax", lunit),
                _num(node, "z", lunit / 2), float(node.get("startphi", 0)) * aunit,
                _num(node, "deltaphi", aunit),
            )
        else:
            raise GdmlError(f"unsupported solid <{node.tag}>")

    volumes: dict[str, LogicalVolume] = {}
    detectors: dict[str, SensitiveDetector] = {}
    for node in root.iterfind("structure/volume"):
        mref, sref = node.find("materialref"), node.find("solidref")
        if mref is None or sref is None:
            raise GdmlError("<volume> needs a materialref and a solidref")
        lv = LogicalVolume(
            _attr(node, "name"),
            _lookup(solids, _attr(sref, "ref"), "solid"),
            _lookup(materials, _attr(mref, "ref"), "material"),
        )
        for pnode in node.iterfind("physvol"):
            vref = pnode.find("volumeref")
            if vref is None:
                raise GdmlError("<physvol> has no volumeref")
            daughter = _lookup(volumes, _attr(vref, "ref"), "volume")
            pos = pnode.find("position")
            position = (0.0, 0.0, 0.0)
            if pos is not None:
                unit = _LENGTH.get(pos.get("unit", "mm"), 1.0)
                position = tuple(float(pos.get(k, 0)) * unit for k in "xyz")
            place(
                daughter, pnode.get("name", daughter.name), lv, position,
                int(pnode.get("copynumber", 0)),
            )
        for aux in node.iterfind("auxiliary"):
            if aux.get("auxtype") == "SensDet":
                sd_name = _attr(aux, "auxvalue")
                lv.sensitive_detector = detectors.setdefault(
                    sd_name, SensitiveDetector(sd_name)
                )
        volumes[lv.name] = lv

    world = root.find("setup/world")
    if world is None:
        raise GdmlError("no world volume in <setup>")
    world_lv = _lookup(volumes, _attr(world, "ref"), "volume")
    return PhysicalVolume(world_lv.name, world_lv)


def read_gdml(path: Union[str, PathLike]) -> PhysicalVolume:
    """Load a GDML file and return its world placement."""
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as exc:
        raise GdmlError(f"cannot parse {path}: {exc}") from exc
    return from_xml(root)