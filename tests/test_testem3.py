import pytest

from gdmltools.gdml import from_xml, to_xml
from gdmltools.testem3 import (
    ABSORBER_THICKNESS,
    GAP_THICKNESS,
    NUM_LAYERS,
    GeometryType,
    MaterialType,
    TestEm3Detector,
)


def _hier(material=MaterialType.simple):
    det = TestEm3Detector(material, GeometryType.hierarchical)
    det.initialize()
    return det


def _flat(material=MaterialType.simple):
    det = TestEm3Detector(material, GeometryType.flat)
    det.initialize()
    return det


def test_hierarchical_top_structure():
    det = _hier()
    world = det.world
    assert world.name == "world_pv"
    assert world.logical.name == "world"
    assert world.logical.material.name == "vacuum"
    assert [pv.name for pv in world.logical.daughters] == ["calorimeter_pv"]
    calor = world.logical.daughters[0].logical
    assert calor.name == "Calorimeter"
    assert len(calor.daughters) == NUM_LAYERS


def test_hierarchical_layers_have_gap_and_absorber():
    det = _hier()
    calor = det.world.logical.daughters[0].logical
    for i, layer_pv in enumerate(calor.daughters):
        assert layer_pv.name == "layer_pv"
        assert layer_pv.logical.name == f"Layer_{i}"
        gap_pv, abs_pv = layer_pv.logical.daughters
        assert (gap_pv.name, gap_pv.copy_number) == ("gap_pv", i)
        assert (abs_pv.name, abs_pv.copy_number) == ("absorber_pv", i)
        assert gap_pv.logical.name == "Gap"
        assert abs_pv.logical.name == "Absorber"


def test_layer_spacing_and_symmetry():
    det = _hier()
    calor = det.world.logical.daughters[0].logical
    xs = [pv.position[0] for pv in calor.daughters]
    layer = GAP_THICKNESS + ABSORBER_THICKNESS
    for a, b in zip(xs, xs[1:]):
        assert b - a == pytest.approx(layer)
    assert xs[0] == pytest.approx(-xs[-1])
    # Layer box half-width matches half the layer thickness
    assert calor.daughters[0].logical.solid.x == pytest.approx(0.5 * layer)


@pytest.mark.parametrize(
    "material_type, gap_name",
    [(MaterialType.simple, "Pb"), (MaterialType.composite, "PbWO4")],
)
def test_gap_material(material_type, gap_name):
    det = _hier(material_type)
    names = {lv.name: lv.material.name for lv in det.world.logical.iter_tree()}
    assert names["Gap"] == gap_name
    assert names["Absorber"] == "lAr"


def test_hierarchical_sensitive_detectors():
    det = _hier()
    sds = {
        lv.name: lv.sensitive_detector.name
        for lv in det.world.logical.iter_tree()
        if lv.sensitive_detector is not None
    }
    assert sds == {"Gap": "sd_gap", "Absorber": "sd_absorber"}


def test_flat_structure():
    det = _flat(MaterialType.composite)
    world = det.world
    assert world.name == "world"
    assert world.logical.solid.name == "world_shape"
    daughters = world.logical.daughters
    assert len(daughters) == 2 * NUM_LAYERS
    assert [pv.name for pv in daughters[:4]] == ["gap_0", "absorber_0", "gap_1", "absorber_1"]
    assert daughters[-1].name == f"absorber_{NUM_LAYERS - 1}"
    assert all(pv.copy_number == 0 for pv in daughters)
    assert daughters[0].logical.material.name == "PbWO4"


def test_flat_slabs_touch_without_overlap():
    det = _flat()
    daughters = det.world.logical.daughters
    for prev, nxt in zip(daughters, daughters[1:]):
        right = prev.position[0] + prev.logical.solid.x
        left = nxt.position[0] - nxt.logical.solid.x
        assert left == pytest.approx(right)


def test_flat_has_no_sensitive_detectors():
    det = _flat()
    assert all(lv.sensitive_detector is None for lv in det.world.logical.iter_tree())


def test_flat_matches_hierarchical_extent():
    hier = _hier().world.logical.solid
    flat = _flat().world.logical.solid
    assert (hier.x, hier.y, hier.z) == pytest.approx((flat.x, flat.y, flat.z))


def test_round_trip_through_gdml():
    det = _hier()
    world = from_xml(to_xml(det.world))
    names = {lv.name for lv in world.logical.iter_tree()}
    assert {"world", "Calorimeter", "Gap", "Absorber", "Layer_0", "Layer_49"} <= names
    gap = next(lv for lv in world.logical.iter_tree() if lv.name == "Gap")
    assert gap.sensitive_detector.name == "sd_gap"


def test_invalid_types_raise():
    with pytest.raises(ValueError):
        TestEm3Detector("bogus", GeometryType.flat)
    with pytest.raises(ValueError):
        TestEm3Detector(MaterialType.simple, "bogus")