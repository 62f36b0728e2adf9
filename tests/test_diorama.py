from core.vector import Vector3
from geometry.cube import Cube
from scenes.diorama import CUBE_SIZE, build_world, build_lights, build_cycle, build_camera


def test_world_layout():
    world = build_world()
    assert len(world) == 11
    assert all(isinstance(obj, Cube) for obj in world)


def test_materials_are_shared():
    world = build_world()
    materials = {id(obj.material) for obj in world}
    assert len(materials) == 5
    grass_slabs = world.objects[2:7]
    assert all(obj.material is grass_slabs[0].material for obj in grass_slabs)


def test_glass_block():
    glass = build_world().objects[-1]
    assert glass.material.refractive_index == 1.5
    assert glass.center.to_tuple() == (CUBE_SIZE * 2.0, CUBE_SIZE, CUBE_SIZE)


def test_missing_texture_dir_falls_back(tmp_path):
    world = build_world(str(tmp_path))
    assert all(t is None for obj in world for t in obj.material.textures)


def test_lights_and_cycle():
    sun, moon = build_lights()
    assert sun.position.y == 40.0
    assert moon.position.y == -40.0
    assert sun.intensity > moon.intensity
    cycle = build_cycle([sun, moon])
    cycle.advance()
    assert cycle.lights == [sun, moon]
    assert (sun.position + moon.position).length() < 1e-9


def test_camera_looks_at_origin():
    camera = build_camera()
    assert camera.forward.to_tuple() == (0.0, 0.0, -1.0)
    assert camera.center.to_tuple() == Vector3(0, 0, 0).to_tuple()
