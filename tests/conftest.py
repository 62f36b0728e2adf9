"""Pytest configuration and shared fixtures."""

import pytest

from core.vector import Vector3
from camera.camera import Camera
from geometry.cube import Cube
from geometry.world import HittableList
from lighting.light import Light
from materials.material import Material


@pytest.fixture
def matte():
    """A plain diffuse material."""
    return Material(Vector3(0.8, 0.2, 0.2), 10.0, [1.0, 0.0, 0.0, 0.0], 0.0)


@pytest.fixture
def mirror():
    """Pure reflection, no local shading."""
    return Material(Vector3(1.0, 1.0, 1.0), 50.0, [0.0, 0.0, 1.0, 0.0], 0.0)


@pytest.fixture
def unit_cube(matte):
    """Cube spanning [-1, 1] on every axis."""
    return Cube(Vector3(0, 0, 0), 1.0, 1.0, 1.0, matte)


@pytest.fixture
def camera():
    """Camera on the +z axis looking at the origin."""
    return Camera(Vector3(0, 0, 10), Vector3(0, 0, 0), Vector3(0, 1, 0))


@pytest.fixture
def white_light():
    return Light(Vector3(0, 10, 10), Vector3(1, 1, 1), 1.0)


@pytest.fixture
def small_scene(matte, mirror):
    """Floor, a matte block, a mirror block and a glass block."""
    glass = Material(Vector3(0.9, 0.9, 0.9), 125.0, [0.0, 0.5, 0.1, 0.8], 1.5)
    world = HittableList()
    world.add(Cube(Vector3(0, -2, 0), 6.0, 1.0, 6.0, matte))
    world.add(Cube(Vector3(-2, 0, 0), 0.75, 1.0, 0.75, mirror))
    world.add(Cube(Vector3(2, 0, 0.5), 0.75, 1.0, 0.75, glass))
    world.add(Cube(Vector3(0.3, 0.5, -2), 1.0, 1.5, 0.5, matte))
    return world


@pytest.fixture
def scene_camera():
    return Camera(Vector3(1.5, 3.0, 9.0), Vector3(0, 0, 0), Vector3(0, 1, 0))


@pytest.fixture
def scene_lights():
    return [
        Light(Vector3(4, 10, 6), Vector3(1.0, 1.0, 0.9), 1.5),
        Light(Vector3(-6, 5, 3), Vector3(0.7, 0.8, 1.0), 0.5),
    ]
