import pytest

from gdmltools.gdml import from_xml, to_xml
from gdmltools.geometry import cm, um
from gdmltools.thin_slab import (
    ThinSlabDetector,
    carbon_slab_def,
    lead_slab_def,
)


@pytest.fixture
def world():
    return ThinSlabDetector().initialize()


def test_lead_slab_def():
    definition = lead_slab_def()
    assert definition.material.name == "Pb"
    assert definition.dimension == (5 * cm, 5 * cm, 5 * um)


def test_carbon_slab_def():
    definition = carbon_slab_def()
    assert definition.material.name == "C"
    assert definition.dimension == (5 * cm, 5 * cm, 50 * um)


def test_world_is_vacuum_four_times_deeper(world):
    slab = world.logical.daughters[0].logical
    assert world.name == "world_pv"
    assert world.logical.material.name == "vacuum"
    assert world.logical.solid.x == slab.solid.x
    assert world.logical.solid.y == slab.solid.y
    assert world.logical.solid.z == pytest.approx(4 * slab.solid.z)


def test_slab_is_carbon_and_centered(world):
    (pv,) = world.logical.daughters
    assert pv.name == "world_pv"
    assert pv.position == (0.0, 0.0, 0.0)
    assert pv.logical.name == "slab"
    assert pv.logical.solid.name == "slab_box"
    assert pv.logical.material.name == "C"
    assert pv.logical.solid.z == pytest.approx(50 * um)


def test_slab_is_sensitive(world):
    slab = world.logical.daughters[0].logical
    assert slab.sensitive_detector.name == "slab_sd"
    assert world.logical.sensitive_detector is None


def test_gdml_round_trip(world):
    loaded = from_xml(to_xml(world))
    slab = loaded.logical.daughters[0].logical
    assert slab.name == "slab"
    assert slab.solid.z == pytest.approx(50 * um)
    assert slab.sensitive_detector.name == "slab_sd"


def test_sd_export_can_be_disabled(world):
    loaded = from_xml(to_xml(world, export_sd=False))
    assert all(lv.sensitive_detector is None for lv in loaded.logical.iter_tree())