import math

import pytest

from gdmltools.gdml import from_xml, to_xml
from gdmltools.geometry import cm, m
from gdmltools.simple_cms import (
    MaterialType,
    SimpleCmsDetector,
    VolumeGap,
    build_materials,
)


def _layers(world):
    return {pv.logical.name: pv for pv in world.logical.daughters}


def test_simple_material_names():
    mats = build_materials(MaterialType.simple)
    assert mats.world.name == "vacuum"
    assert mats.vacuum_tube.name == "vacuum"
    assert mats.si_tracker.name == "Si"
    assert mats.em_calorimeter.name == "Pb"
    assert mats.had_calorimeter.name == "C"
    assert mats.sc_solenoid.name == "Ti"
    assert mats.muon_chambers.name == "Fe"


def test_composite_material_names():
    mats = build_materials(MaterialType.composite)
    assert mats.si_tracker.name == "SiO2"
    assert mats.em_calorimeter.name == "Pb3O4"
    assert mats.had_calorimeter.name == "C"
    assert len(mats.si_tracker.components) == 2


def test_volume_gap_defaults():
    gaps = VolumeGap()
    assert gaps.overlap == 0
    assert gaps.millimeter == 1.0
    assert gaps.tolerance == pytest.approx(1e-9)


def test_layer_structure():
    world = SimpleCmsDetector(MaterialType.simple).construct()
    assert world.name == "world_pv"
    assert world.logical.name == "world"
    layers = _layers(world)
    assert set(layers) == {
        "vacuum_tube",
        "si_tracker",
        "em_calorimeter",
        "had_calorimeter",
        "sc_solenoid",
        "fe_muon_chambers",
    }
    assert layers["fe_muon_chambers"].name == "iron_muon_chambers_pv"
    for pv in layers.values():
        assert pv.position == (0.0, 0.0, 0.0)
        assert pv.logical.solid.dz == 7 * m
        assert pv.logical.solid.dphi == pytest.approx(2 * math.pi)


def test_world_box_dimensions():
    world = SimpleCmsDetector(MaterialType.simple).construct()
    box = world.logical.solid
    assert (box.x, box.y, box.z) == (10 * m, 10 * m, 20 * m)


def test_radii_include_gaps():
    gaps = VolumeGap()
    layers = _layers(SimpleCmsDetector(MaterialType.simple).construct())
    assert layers["vacuum_tube"].logical.solid.rmax == 30 * cm - gaps.tolerance
    assert layers["si_tracker"].logical.solid.rmin == 30 * cm
    assert layers["si_tracker"].logical.solid.rmax == 125 * cm - gaps.tolerance
    assert layers["em_calorimeter"].logical.solid.rmax == 175 * cm
    assert layers["sc_solenoid"].logical.solid.rmax == 375 * cm - gaps.millimeter
    assert layers["fe_muon_chambers"].logical.solid.rmax == 700 * cm


def test_cylinders_do_not_overlap_in_radius():
    layers = sorted(
        (pv.logical.solid for pv in SimpleCmsDetector("composite").construct().logical.daughters),
        key=lambda s: s.rmin,
    )
    for inner, outer in zip(layers, layers[1:]):
        assert inner.rmax <= outer.rmin


def test_composite_materials_in_volumes():
    layers = _layers(SimpleCmsDetector(MaterialType.composite).construct())
    assert layers["si_tracker"].logical.material.name == "SiO2"
    assert layers["em_calorimeter"].logical.material.name == "Pb3O4"


def test_sensitive_detectors():
    detector = SimpleCmsDetector(MaterialType.simple)
    world = detector.initialize()
    layers = _layers(world)
    assert layers["si_tracker"].logical.sensitive_detector.name == "si_tracker_sd"
    assert layers["em_calorimeter"].logical.sensitive_detector.name == "em_calorimeter_sd"
    assert layers["had_calorimeter"].logical.sensitive_detector is None


def test_invalid_material_type():
    with pytest.raises(ValueError):
        SimpleCmsDetector("exotic")


def test_gdml_round_trip():
    world = SimpleCmsDetector(MaterialType.simple).initialize()
    loaded = from_xml(to_xml(world))
    original = _layers(world)
    restored = _layers(loaded)
    assert set(restored) == set(original)
    for name, pv in original.items():
        assert restored[name].logical.solid.rmax == pytest.approx(pv.logical.solid.rmax)
        assert restored[name].logical.material.name == pv.logical.material.name
    assert restored["si_tracker"].logical.sensitive_detector.name == "si_tracker_sd"