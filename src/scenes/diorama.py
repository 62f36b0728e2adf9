# scenes/diorama.py
from typing import List, Optional
from core.vector import Vector3
from camera.camera import Camera
from geometry.cube import Cube
from geometry.world import HittableList
from lighting.light import Light, DayNightCycle
from materials.presets import MaterialPresets, ColorPresets

CUBE_SIZE = 2.75

def build_world(texture_dir: Optional[str] = None) -> HittableList:
    """
    A small block landscape: a river and a lake, grass floor slabs around
    them, a crafting table, a furnace, a tree trunk and a glass block.
    Each material is created once and shared by all of its blocks.
    """
    print("\n=== Creating World ===")
    grass = MaterialPresets.grass(texture_dir)
    water = MaterialPresets.water(texture_dir)
    wood = MaterialPresets.wood(texture_dir)
    furnace = MaterialPresets.furnace(texture_dir)
    glass = MaterialPresets.glass()

    s = CUBE_SIZE
    world = HittableList()

    # River 2x3 and lake 7x6, sunk slightly below the grass
    world.add(Cube(Vector3(0.0, -0.6, s * -8.0), s * 2.0, s - 0.6, s * 3.0, water))
    world.add(Cube(Vector3(s * 1.0, -0.6, s * 1.0), s * 7.0, s - 0.6, s * 6.0, water))

    # Floor slabs
    world.add(Cube(Vector3(s * -6.0, 0.0, -s * 8.0), s * 4.0, s, s * 3.0, grass))
    world.add(Cube(Vector3(s * -8.0, 0.0, s * 1.0), s * 2.0, s, s * 6.0, grass))
    world.add(Cube(Vector3(0.0, 0.0, s * 8.0), s * 10.0, s, s * 1.0, grass))
    world.add(Cube(Vector3(s * 9.0, 0.0, s * 1.0), s * 1.0, s, s * 6.0, grass))
    world.add(Cube(Vector3(s * 6.0, 0.0, -s * 8.0), s * 4.0, s, s * 3.0, grass))

    # Props
    world.add(Cube(Vector3(s * -9.0, s * 2.0, s * 6.0), s, s, s, wood))         # crafting table
    world.add(Cube(Vector3(s * -9.0, s * 2.0, s * 4.0), s, s, s, furnace))      # furnace
    world.add(Cube(Vector3(s * -7.0, s * 4.0, -s * 8.0), s, s * 4.0, s, wood))  # tree trunk
    world.add(Cube(Vector3(s * 2.0, s * 1.0, s * 1.0), s * 0.5, s * 0.5, s * 0.5, glass))  # ice block

    for obj in world:
        print(f"Added {obj}")
    return world

def build_lights() -> List[Light]:
    """The sun above the scene and the moon below it, on opposite sides of the orbit."""
    sun = Light(Vector3(0.0, 40.0, 0.0), ColorPresets.from_rgb(255, 255, 224), 2.0)
    moon = Light(Vector3(0.0, -40.0, 0.0), ColorPresets.from_rgb(173, 216, 230), 0.5)
    return [sun, moon]

def build_cycle(lights: List[Light], speed: float = 0.2) -> DayNightCycle:
    sun, moon = lights
    return DayNightCycle(sun, moon, Vector3(0.0, 0.0, 0.0), radius=40.0, speed=speed)

def build_camera() -> Camera:
    return Camera(Vector3(0.0, 0.0, 100.0), Vector3(0.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0))
