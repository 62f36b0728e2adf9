# renderer/tone_mapping.py
import numpy as np
from core.vector import Vector3

def to_hex(color: Vector3) -> int:
    """
    Clamp a linear color to [0, 1] and pack it as 0xRRGGBB.
    Shading can push channels past 1 (lights add up), so this is where
    colors get clamped.
    """
    r = int(min(max(color.x, 0.0), 1.0) * 255)
    g = int(min(max(color.y, 0.0), 1.0) * 255)
    b = int(min(max(color.z, 0.0), 1.0) * 255)
    return (r << 16) | (g << 8) | b

def pack_image(image: np.ndarray) -> np.ndarray:
    """
    Pack a (height, width, 3) float image into (height, width) uint32
    0xRRGGBB values, clamping like to_hex.
    """
    channels = (np.clip(image, 0.0, 1.0) * 255).astype(np.uint32)
    return (channels[..., 0] << 16) | (channels[..., 1] << 8) | channels[..., 2]

def unpack_rgb(buffer: np.ndarray) -> np.ndarray:
    """Expand packed 0xRRGGBB values into a (..., 3) uint8 array."""
    buffer = np.asarray(buffer, dtype=np.uint32)
    output = np.empty(buffer.shape + (3,), dtype=np.uint8)
    output[..., 0] = (buffer >> 16) & 0xFF
    output[..., 1] = (buffer >> 8) & 0xFF
    output[..., 2] = buffer & 0xFF
    return output
