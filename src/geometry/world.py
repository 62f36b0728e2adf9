# src/geometry/world.py
from typing import Iterator, List
from core.vector import Vector3
from geometry.hittable import Hittable, Intersect

class HittableList(Hittable):
    """
    A flat list of Hittable objects. The scene is small, so every ray is
    tested against every object.
    """
    def __init__(self, objects: List[Hittable] = None):
        self.objects: List[Hittable] = list(objects) if objects else []

    def add(self, obj: Hittable):
        self.objects.append(obj)

    def clear(self):
        self.objects.clear()

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)

    def ray_intersect(self, origin: Vector3, direction: Vector3,
                      viewer: Vector3) -> Intersect:
        return self.nearest_hit(origin, direction, viewer)

    def nearest_hit(self, origin: Vector3, direction: Vector3,
                    viewer: Vector3) -> Intersect:
        """Closest intersection over all objects, or Intersect.empty()."""
        intersect = Intersect.empty()
        zbuffer = float("inf")
        for obj in self.objects:
            rec = obj.ray_intersect(origin, direction, viewer)
            if rec.is_intersecting and rec.distance < zbuffer:
                zbuffer = rec.distance
                intersect = rec
        return intersect
