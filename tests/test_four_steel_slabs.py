import pytest

from gdmltools.four_steel_slabs import FourSteelSlabs
from gdmltools.gdml import from_xml, to_xml


@pytest.fixture
def world():
    return FourSteelSlabs().initialize()


def test_world_names(world):
    assert world.name == "world_pv"
    assert world.logical.name == "world_lv"
    assert world.logical.material.name == "G4_Galactic"


def test_four_slabs_named_box(world):
    daughters = world.logical.daughters
    assert len(daughters) == 4
    assert all(pv.name == "box" for pv in daughters)
    assert [pv.logical.solid.name for pv in daughters] == [
        "box",
        "boxReplica",
        "boxReplica2",
        "boxReplica3",
    ]
    assert [pv.logical.name for pv in daughters] == [
        "box",
        "boxReplica",
        "boxReplica",
        "boxReplica",
    ]


def test_slabs_are_steel_and_distinct_volumes(world):
    lvs = [pv.logical for pv in world.logical.daughters]
    assert all(lv.material.name == "G4_STAINLESS-STEEL" for lv in lvs)
    assert len({id(lv) for lv in lvs}) == 4


def test_slab_positions_do_not_overlap(world):
    daughters = world.logical.daughters
    half_z = daughters[0].logical.solid.z
    zs = [pv.position[2] for pv in daughters]
    assert zs == pytest.approx([0, 3 * half_z, 6 * half_z, 9 * half_z])
    for a, b in zip(zs, zs[1:]):
        assert b - a > 2 * half_z
    assert all(pv.position[:2] == (0.0, 0.0) for pv in daughters)


def test_slabs_fit_in_world(world):
    world_half = world.logical.solid.z
    for pv in world.logical.daughters:
        solid = pv.logical.solid
        assert solid.x == solid.y
        assert abs(pv.position[2]) + solid.z < world_half
        assert solid.x < world.logical.solid.x


def test_no_sensitive_detectors(world):
    assert all(lv.sensitive_detector is None for lv in world.logical.iter_tree())


def test_gdml_round_trip(world):
    loaded = from_xml(to_xml(world, append_pointers=True))
    assert len(loaded.logical.daughters) == 4
    zs = [pv.position[2] for pv in loaded.logical.daughters]
    assert zs == pytest.approx([pv.position[2] for pv in world.logical.daughters])