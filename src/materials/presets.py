# materials/presets.py
import os
from typing import Optional
from core.vector import Vector3
from materials.material import Material
from materials.textures import CheckerTexture
from materials.texture_loader import load_face_textures

class ColorPresets:
    """Common colors, linear RGB in [0, 1]."""

    GRASS = Vector3(96 / 255, 160 / 255, 54 / 255)
    WATER = Vector3(10 / 255, 40 / 255, 225 / 255)
    WOOD = Vector3(120 / 255, 85 / 255, 50 / 255)
    STONE = Vector3(0.5, 0.5, 0.5)
    GLASS = Vector3(0.85, 0.9, 0.95)
    WHITE = Vector3(0.9, 0.9, 0.9)
    BLACK = Vector3(0.1, 0.1, 0.1)

    @staticmethod
    def from_rgb(r: int, g: int, b: int) -> Vector3:
        return Vector3(r / 255, g / 255, b / 255)

class MaterialPresets:
    """
    Predefined block materials. When a texture directory is given, the
    matching image files are used for the faces; otherwise (or when a file
    is missing) faces use the diffuse color.
    """

    @staticmethod
    def _faces(texture_dir: Optional[str], *names: str):
        if texture_dir is None:
            return None
        return load_face_textures([os.path.join(texture_dir, name) for name in names])

    @staticmethod
    def grass(texture_dir: Optional[str] = None) -> Material:
        return Material(ColorPresets.GRASS, 50.0, [1.0, 0.0, 0.0, 0.0], 0.0,
                        MaterialPresets._faces(texture_dir, "grass_top.png"))

    @staticmethod
    def water(texture_dir: Optional[str] = None) -> Material:
        return Material(ColorPresets.WATER, 50.0, [1.0, 0.1, 0.0, 0.0], 0.0,
                        MaterialPresets._faces(texture_dir, "water.png"))

    @staticmethod
    def wood(texture_dir: Optional[str] = None) -> Material:
        return Material(ColorPresets.WOOD, 50.0, [0.1, 0.1, 0.0, 0.0], 0.0,
                        MaterialPresets._faces(texture_dir, "wood.png"))

    @staticmethod
    def furnace(texture_dir: Optional[str] = None) -> Material:
        # The front (-x) face differs from the other five.
        return Material(ColorPresets.STONE, 50.0, [0.1, 0.1, 0.0, 0.0], 0.0,
                        MaterialPresets._faces(texture_dir, "furnace_front.png",
                                               "wood.png", "wood.png", "wood.png",
                                               "wood.png", "wood.png"))

    @staticmethod
    def glass(refractive_index: float = 1.5) -> Material:
        return Material(ColorPresets.GLASS, 125.0, [0.0, 0.5, 0.1, 0.8], refractive_index)

    @staticmethod
    def mirror() -> Material:
        return Material(ColorPresets.WHITE, 1425.0, [0.0, 0.1, 1.0, 0.0], 0.0)

    @staticmethod
    def checker(color1: Vector3 = None, color2: Vector3 = None, squares: int = 4) -> Material:
        """A matte material with a procedural checker pattern on every face."""
        if color1 is None:
            color1 = ColorPresets.WHITE
        if color2 is None:
            color2 = ColorPresets.BLACK
        texture = CheckerTexture(color1, color2, squares)
        return Material(color1, 10.0, [0.9, 0.1, 0.0, 0.0], 0.0, [texture] * 6)
