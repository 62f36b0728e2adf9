# geometry/hittable.py
import math
from core.vector import Vector3
from core.uv import UV

class Intersect:
    """
    Records details of a ray-object intersection.

    A record is built fresh for every test and dropped after one shading
    pass. Misses are represented by Intersect.empty(), never by None, so a
    nearest-hit search can fold over the scene starting from it.
    """
    def __init__(self, point: Vector3 = None, normal: Vector3 = None,
                 distance: float = math.inf, material=None,
                 face: int = -1, uv: UV = None, is_intersecting: bool = True):
        self.is_intersecting = is_intersecting
        self.point = point          # Intersection point
        self.normal = normal        # Unit outward face normal
        self.distance = distance    # Ray parameter at intersection
        self.material = material    # Shared material of the primitive, never copied
        self.face = face            # 0..5 in the order -x, +x, -y, +y, -z, +z
        self.uv = uv                # Texture coordinate on that face

    @classmethod
    def empty(cls) -> "Intersect":
        return cls(is_intersecting=False)

    def __repr__(self) -> str:
        if not self.is_intersecting:
            return "Intersect(empty)"
        return f"Intersect(point={self.point}, face={self.face}, distance={self.distance})"

class Hittable:
    """
    Abstract class for objects that can be hit by a ray.
    """
    def ray_intersect(self, origin: Vector3, direction: Vector3,
                      viewer: Vector3) -> Intersect:
        raise NotImplementedError("ray_intersect() must be implemented by subclasses.")
