# renderer/framebuffer.py
import numpy as np
from renderer.tone_mapping import unpack_rgb

class Framebuffer:
    """2D grid of packed 0xRRGGBB colors, indexed [y, x]."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.buffer = np.zeros((height, width), dtype=np.uint32)

    def clear(self, color: int = 0x000000):
        self.buffer.fill(color)

    def set_pixel(self, x: int, y: int, color: int):
        if 0 <= x < self.width and 0 <= y < self.height:
            self.buffer[y, x] = color

    def get_pixel(self, x: int, y: int) -> int:
        return int(self.buffer[y, x])

    def to_surface_array(self) -> np.ndarray:
        """(width, height, 3) uint8 array, the layout pygame.surfarray expects."""
        return np.ascontiguousarray(unpack_rgb(self.buffer).transpose(1, 0, 2))
