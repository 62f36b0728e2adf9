from geometry.hittable import Hittable, Intersect
from geometry.cube import Cube, FACE_NORMALS
from geometry.world import HittableList

__all__ = ["Hittable", "Intersect", "Cube", "FACE_NORMALS", "HittableList"]
