# materials/material.py
from typing import Optional, Sequence
from core.vector import Vector3
from core.uv import UV
from materials.textures import Texture

WORLD_UP = Vector3(0, 1, 0)
WORLD_RIGHT = Vector3(1, 0, 0)

class Material:
    """
    Surface description shared by every cube that uses it.

    albedo holds four weights: diffuse, specular, reflective and refractive.
    They are not required to sum to one. textures has one optional entry
    per cube face, in face order -x, +x, -y, +y, -z, +z.

    A material is never modified while rendering; the lookups below return
    new values for each hit.
    """
    def __init__(self, diffuse: Vector3, specular: float, albedo: Sequence[float],
                 refractive_index: float = 0.0,
                 textures: Optional[Sequence[Optional[Texture]]] = None,
                 normal_map: Optional[Texture] = None):
        if len(albedo) != 4:
            raise ValueError(f"albedo needs 4 weights (diffuse, specular, reflective, refractive), got {len(albedo)}")
        if textures is None:
            textures = [None] * 6
        if len(textures) != 6:
            raise ValueError(f"A material takes exactly 6 face textures, got {len(textures)}")
        self.diffuse = diffuse
        self.specular = specular
        self.albedo = tuple(float(a) for a in albedo)
        self.refractive_index = refractive_index
        self.textures = tuple(textures)
        self.normal_map = normal_map

    @classmethod
    def black(cls) -> "Material":
        return cls(Vector3(0, 0, 0), 0.0, (0.0, 0.0, 0.0, 0.0))

    def color_at(self, face: int, uv: UV) -> Vector3:
        """
        Base color for a point on the given face: the nearest texel of the
        face texture, or the diffuse color when the face has none.
        """
        texture = self.textures[face] if 0 <= face < 6 else None
        if texture is None or uv is None:
            return self.diffuse
        uv = uv.clamped()
        r, g, b, _ = texture.sample(uv.u, uv.v)
        return Vector3(r / 255.0, g / 255.0, b / 255.0)

    def shading_normal(self, normal: Vector3, uv: UV) -> Vector3:
        """
        Normal perturbed by the tangent-space normal map, or the geometric
        normal when there is no map.
        """
        if self.normal_map is None or uv is None:
            return normal
        uv = uv.clamped()
        r, g, b, _ = self.normal_map.sample(uv.u, uv.v)
        nx = r / 255.0 * 2.0 - 1.0
        ny = g / 255.0 * 2.0 - 1.0
        nz = b / 255.0 * 2.0 - 1.0

        tangent = normal.cross(WORLD_UP)
        if tangent.length() < 1e-6:
            # Normal parallel to world up (top and bottom faces).
            tangent = normal.cross(WORLD_RIGHT)
        tangent = tangent.normalize()
        bitangent = normal.cross(tangent)

        perturbed = (tangent * nx + bitangent * ny + normal * nz).normalize()
        if perturbed.length() == 0:
            return normal
        return perturbed

    def __repr__(self) -> str:
        return (f"Material(diffuse={self.diffuse}, specular={self.specular}, "
                f"albedo={self.albedo}, refractive_index={self.refractive_index})")
