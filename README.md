# gdmltools

Build the detector geometries used for benchmarking and validation, write
them as GDML files, read GDML files back, and cut a sub-tree out of a GDML
geometry. Pure Python, no dependencies outside the standard library.

Internal units are mm for lengths, rad for angles, MeV for energies and
g/cm3 for densities.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## `gdml-gen`: writing the built-in geometries

`gdml-gen` builds one geometry, chosen by number, and writes it to a GDML
file in the current directory. Names in the written file carry a
pointer-style suffix (`world0x7f...`), and sensitive volumes are marked with
`SensDet` auxiliary tags.

```
gdml-gen 0
```

Run with the wrong number of arguments (for example none), it prints the
list of geometries and exits with status 1.

| ID | Geometry                                              | Output file                           |
|----|-------------------------------------------------------|---------------------------------------|
| 0  | Lead box                                              | `box.gdml`                            |
| 1  | Four steel slabs                                      | `four-steel-slabs.gdml`               |
| 2  | Simple CMS - simple materials                         | `simple-cms.gdml`                     |
| 3  | Simple CMS - composite materials                      | `composite-simple-cms.gdml`           |
| 4  | Segmented Simple CMS - simple materials               | `segmented-simple-cms.gdml`           |
| 5  | Segmented Simple CMS - composite materials            | `composite-segmented-simple-cms.gdml` |
| 6  | TestEm3 - simple materials                            | `testem3.gdml`                        |
| 7  | TestEm3 - composite materials                         | `testem3-composite.gdml`              |
| 8  | TestEm3 flat - simple materials, for ORANGE           | `testem3-flat.gdml`                   |
| 9  | TestEm3 flat - composite materials, for ORANGE        | `testem3-flat-composite.gdml`         |
| 10 | Optical - composite materials with optical properties | `optical.gdml`                        |
| 11 | Thin Pb slab                                          | `thin-slab.gdml`                      |

Geometry 11 keeps the label "Thin Pb slab", but `ThinSlabDetector` builds
the 5 cm x 5 cm x 50 um carbon slab; `thin_slab.lead_slab_def()` gives the
lead one for use from Python.

The segmented geometries (4 and 5) take three more arguments: the number of
segments in r, z and theta, each at least 1. Every segment is a separate
tube placed directly in the world volume.

```
gdml-gen 4 2 3 4
```

An unknown geometry number prints `N is an invalid geometry id.`; extra
arguments for a non-segmented geometry print `Wrong number of arguments`.
Both exit with status 1.

## `gdml-subset`: extracting part of a geometry

`gdml-subset` reads a GDML file, takes the first physical volume with the
given name as the new world, removes every daughter below the given depth
and writes the result without pointer suffixes and without sensitive
detector tags:

```
gdml-subset input.gdml si_tracker_pv 1 output.gdml
```

A depth of `0` keeps the chosen volume with no daughters. If the name is not
found, the error names the available physical volumes and the command exits
with status 1. `-h` or `--help` prints the usage; any other wrong number of
arguments prints the usage and exits with status 2.

## Using the library

Each detector class derives from `geometry.Detector`. `construct()` builds
and returns the world `PhysicalVolume`; `initialize()` constructs it, keeps
it as `detector.world` and then calls `construct_sd()` to attach the
sensitive detectors.

```python
from gdmltools.gdml import read_gdml, write_gdml
from gdmltools.simple_cms import MaterialType, SimpleCmsDetector

detector = SimpleCmsDetector(MaterialType.composite)
world = detector.initialize()
write_gdml(world, "simple-cms.gdml", append_pointers=False, export_sd=True)

world_again = read_gdml("simple-cms.gdml")
for lv in world_again.logical.iter_tree():
    print(lv.name, lv.material.name)
```

The modules:

- `gdmltools.geometry`: `Element`, `Material`, `nist_element`,
  `nist_material`, the `Box` and `Tubs` solids, `LogicalVolume`,
  `PhysicalVolume`, `place`, `SensitiveDetector`, `Detector` and
  `PhysicsList`, plus the unit constants (`mm`, `cm`, `m`, `um`, `deg`,
  `eV`, `MeV`, `ns`).
- `gdmltools.gdml`: `to_xml`, `write_gdml`, `from_xml`, `read_gdml` and
  `GdmlError`.
- `gdmltools.box`, `four_steel_slabs`, `thin_slab`, `simple_cms`,
  `segmented_cms`, `testem3`, `optical`: the detectors.
- `gdmltools.optical` also has the optical property tables (`scint_comp`,
  `scint_rindex`, `water_rindex`, `water_absorption`, ...) and the helpers
  `to_energy` and `to_mass_fraction`.
- `gdmltools.subset`: `find_physical_volume`, `delete_daughters_after` and
  `run`.
- `gdmltools.gdml_gen`: `GeometryID`, `label`, `usage`, `parse_segments`,
  `build_detector` and `export_gdml`.

## What this package does not do

- It does not simulate or track particles. `PhysicsList` only names the
  particles and records the production cut for the world region.
- It does not display or ray-trace geometries.
- The GDML reader and writer handle only what these geometries use: `box`
  and `tube` solids, placements by translation (no rotations), elements,
  materials with optical property matrices, and `SensDet` auxiliary tags.
  Other solids, rotations and `define` constants or expressions are not
  supported.
- `nist_material` knows only the handful of standard materials the built-in
  geometries use.