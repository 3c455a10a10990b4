import logging

import pytest

from gdmltools.gdml import GdmlError, read_gdml, write_gdml
from gdmltools.geometry import Box, LogicalVolume, nist_material, place
from gdmltools.subset import delete_daughters_after, find_physical_volume, main, run


def _nested_world():
    material = nist_material("G4_Fe")
    world_lv = LogicalVolume("world", Box("world_box", 100, 100, 100), material)
    outer_lv = LogicalVolume("outer", Box("outer_box", 50, 50, 50), material)
    inner_lv = LogicalVolume("inner", Box("inner_box", 20, 20, 20), material)
    core_lv = LogicalVolume("core", Box("core_box", 5, 5, 5), material)
    world = place(world_lv, "world_pv")
    place(outer_lv, "outer_pv", world_lv)
    place(inner_lv, "inner_pv", outer_lv)
    place(core_lv, "core_pv", inner_lv)
    return world


@pytest.fixture
def gdml_file(tmp_path):
    path = tmp_path / "input.gdml"
    write_gdml(_nested_world(), path)
    return path


def test_delete_daughters_depth_zero():
    world = _nested_world()
    delete_daughters_after(world.logical, 0)
    assert world.logical.daughters == []


def test_delete_daughters_depth_one():
    world = _nested_world()
    delete_daughters_after(world.logical, 1)
    outer = world.logical.daughters[0].logical
    assert outer.name == "outer"
    assert outer.daughters == []


def test_delete_daughters_negative_depth_keeps_tree():
    world = _nested_world()
    delete_daughters_after(world.logical, -1)
    names = [lv.name for lv in world.logical.iter_tree()]
    assert names == ["world", "outer", "inner", "core"]


def test_find_physical_volume():
    world = _nested_world()
    assert find_physical_volume(world, "world_pv") is world
    assert find_physical_volume(world, "inner_pv").logical.name == "inner"


def test_find_physical_volume_missing_lists_names():
    with pytest.raises(LookupError) as info:
        find_physical_volume(_nested_world(), "nowhere")
    message = str(info.value)
    assert "failed to find volume 'nowhere'" in message
    assert "outer_pv" in message and "core_pv" in message


def test_run_extracts_subtree(gdml_file, tmp_path):
    out = tmp_path / "out.gdml"
    run(gdml_file, "outer_pv", 1, out)
    world = read_gdml(out)
    assert world.logical.name == "outer"
    assert [lv.name for lv in world.logical.iter_tree()] == ["outer", "inner"]


def test_run_depth_zero(gdml_file, tmp_path):
    out = tmp_path / "out.gdml"
    run(gdml_file, "inner_pv", 0, out)
    world = read_gdml(out)
    assert world.logical.name == "inner"
    assert world.logical.daughters == []


def test_run_bad_input(tmp_path):
    bad = tmp_path / "bad.gdml"
    bad.write_text("<gdml><not closed")
    with pytest.raises(GdmlError):
        run(bad, "x", 0, tmp_path / "out.gdml")


def test_main_help(capsys):
    assert main(["--help"]) == 0
    assert "usage:" in capsys.readouterr().err


def test_main_wrong_arg_count(capsys):
    assert main(["a", "b"]) == 2
    assert "{physvol-name}" in capsys.readouterr().err


def test_main_success(gdml_file, tmp_path):
    out = tmp_path / "out.gdml"
    assert main([str(gdml_file), "outer_pv", "2", str(out)]) == 0
    names = [lv.name for lv in read_gdml(out).logical.iter_tree()]
    assert names == ["outer", "inner", "core"]


def test_main_missing_volume(gdml_file, tmp_path, caplog):
    with caplog.at_level(logging.CRITICAL):
        code = main([str(gdml_file), "nowhere", "0", str(tmp_path / "out.gdml")])
    assert code == 1
    assert "failed to find volume" in caplog.text


def test_main_non_numeric_depth_means_zero(gdml_file, tmp_path):
    out = tmp_path / "out.gdml"
    assert main([str(gdml_file), "outer_pv", "abc", str(out)]) == 0
    assert read_gdml(out).logical.daughters == []