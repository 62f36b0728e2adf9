# materials/textures.py
from typing import Tuple
import numpy as np
from PIL import Image
from core.vector import Vector3

Texel = Tuple[int, int, int, int]

class Texture:
    """Base class for all textures."""
    width: int = 1
    height: int = 1

    def sample(self, u: float, v: float) -> Texel:
        """
        Sample the texture at UV coordinates already clamped into [0, 1).
        Returns the (r, g, b, a) bytes of the nearest texel.
        """
        raise NotImplementedError("sample() must be implemented by texture subclasses.")

    def to_rgba_array(self) -> np.ndarray:
        """The full texture as a (height, width, 4) uint8 array."""
        raise NotImplementedError("to_rgba_array() must be implemented by texture subclasses.")

class ImageTexture(Texture):
    """A texture backed by decoded image pixels, sampled nearest-neighbour."""
    def __init__(self, data: np.ndarray):
        data = np.asarray(data, dtype=np.uint8)
        if data.ndim != 3 or data.shape[2] not in (3, 4):
            raise ValueError(f"Texture data must have shape (h, w, 3|4), got {data.shape}")
        if data.shape[2] == 3:
            alpha = np.full(data.shape[:2] + (1,), 255, dtype=np.uint8)
            data = np.concatenate([data, alpha], axis=2)
        self.data = np.ascontiguousarray(data)
        self.height, self.width = data.shape[:2]

    @classmethod
    def from_file(cls, image_path: str) -> "ImageTexture":
        with Image.open(image_path) as img:
            if img.mode != 'RGBA':
                img = img.convert('RGBA')
            return cls(np.array(img))

    def sample(self, u: float, v: float) -> Texel:
        # No filtering and no wrapping: scale and truncate.
        x = int(u * self.width)
        y = int(v * self.height)
        r, g, b, a = self.data[y, x]
        return int(r), int(g), int(b), int(a)

    def to_rgba_array(self) -> np.ndarray:
        return self.data

class CheckerTexture(Texture):
    """
    A procedural checker pattern with `squares` cells per side, used where
    no image file is available.
    """
    def __init__(self, color1: Vector3, color2: Vector3, squares: int = 4):
        self.color1 = _to_texel(color1)
        self.color2 = _to_texel(color2)
        self.squares = squares
        self.width = squares
        self.height = squares

    def sample(self, u: float, v: float) -> Texel:
        x = int(u * self.squares)
        y = int(v * self.squares)
        return self.color1 if (x + y) % 2 == 0 else self.color2

    def to_rgba_array(self) -> np.ndarray:
        data = np.empty((self.squares, self.squares, 4), dtype=np.uint8)
        for y in range(self.squares):
            for x in range(self.squares):
                data[y, x] = self.color1 if (x + y) % 2 == 0 else self.color2
        return data

def _to_texel(color: Vector3) -> Texel:
    r, g, b = (int(min(max(c, 0.0), 1.0) * 255) for c in color)
    return r, g, b, 255
