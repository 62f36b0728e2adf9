# materials/texture_loader.py
import os
from typing import List, Optional, Sequence
from PIL import UnidentifiedImageError
from materials.textures import ImageTexture

FACE_COUNT = 6

def load_texture(image_path: str) -> ImageTexture:
    """
    Load an image file as a texture, with error handling and automatic format conversion.

    Args:
        image_path: Path to the image file

    Returns:
        ImageTexture object

    Raises:
        FileNotFoundError: If the image file doesn't exist
        ValueError: If the image format is unsupported
    """
    if not os.path.exists(image_path):
        raise FileNotFoundError(f"Texture file not found: {image_path}")

    try:
        return ImageTexture.from_file(image_path)
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Error loading texture {image_path}: {str(e)}") from e

def load_face_textures(image_paths: Sequence[Optional[str]]) -> List[Optional[ImageTexture]]:
    """
    Load the six per-face textures of a material.

    Args:
        image_paths: One path used for every face, or six paths (or None)
            in face order -x, +x, -y, +y, -z, +z.

    Returns:
        Six entries; faces whose texture is missing or unreadable get None
        and render with the material's diffuse color.
    """
    if len(image_paths) == 1:
        image_paths = list(image_paths) * FACE_COUNT
    if len(image_paths) != FACE_COUNT:
        raise ValueError(f"Expected 1 or {FACE_COUNT} texture paths, got {len(image_paths)}")

    cache = {}
    textures = []
    for path in image_paths:
        if path is None:
            textures.append(None)
            continue
        if path not in cache:
            try:
                cache[path] = load_texture(path)
            except (FileNotFoundError, ValueError) as e:
                print(f"Warning: {e}; falling back to diffuse color")
                cache[path] = None
        textures.append(cache[path])
    return textures

def load_normal_map(image_path: Optional[str]) -> Optional[ImageTexture]:
    """Load a tangent-space normal map, or None if it is missing."""
    if image_path is None:
        return None
    try:
        return load_texture(image_path)
    except (FileNotFoundError, ValueError) as e:
        print(f"Warning: {e}; using geometric normals")
        return None
