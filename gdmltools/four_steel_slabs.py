"""Four stainless-steel slabs stacked along z in a vacuum."""

from __future__ import annotations

from .geometry import (
    Box,
    Detector,
    LogicalVolume,
    PhysicalVolume,
    cm,
    nist_material,
    place,
)

# (solid name, logical volume name, z offset in units of slab half-thickness)
_SLABS = (
    ("box", "box", 0),
    ("boxReplica", "boxReplica", 3),
    ("boxReplica2", "boxReplica", 6),
    ("boxReplica3", "boxReplica", 9),
)


class FourSteelSlabs(Detector):
    """World volume with four separately defined steel slabs (no replicas)."""

    def construct(self) -> PhysicalVolume:
        world_material = nist_material("G4_Galactic")
        slab_material = nist_material("G4_STAINLESS-STEEL")

        world_size = 1000.0 * cm
        half_world = world_size * 0.5
        world_solid = Box("world_box", half_world, half_world, half_world)
        world_lv = LogicalVolume("world_lv", world_solid, world_material)
        world_pv = place(world_lv, "world_pv")

        slabs_xy = 0.01 * world_size
        slabs_z = 0.2 * slabs_xy
        for solid_name, lv_name, offset in _SLABS:
            solid = Box(solid_name, slabs_xy, slabs_xy, slabs_z)
            slab_lv = LogicalVolume(lv_name, solid, slab_material)
            place(slab_lv, "box", world_lv, (0.0, 0.0, offset * slabs_z))

        return world_pv