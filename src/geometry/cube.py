# geometry/cube.py
from core.vector import Vector3
from core.uv import UV
from geometry.hittable import Hittable, Intersect

# Tolerance used to decide which face a hit point lies on.
FACE_EPSILON = 1e-4

# Outward normals in face-index order: -x, +x, -y, +y, -z, +z
FACE_NORMALS = (
    Vector3(-1, 0, 0),
    Vector3(1, 0, 0),
    Vector3(0, -1, 0),
    Vector3(0, 1, 0),
    Vector3(0, 0, -1),
    Vector3(0, 0, 1),
)

class Cube(Hittable):
    """
    Axis-aligned box given by its center and half extents on each axis.

    Many cubes usually share one material instance; the cube never copies
    or modifies it.
    """
    def __init__(self, center: Vector3, dim_x: float, dim_y: float, dim_z: float, material):
        if dim_x <= 0 or dim_y <= 0 or dim_z <= 0:
            raise ValueError(f"Cube half extents must be positive, got ({dim_x}, {dim_y}, {dim_z})")
        self.center = center
        self.dim_x = dim_x
        self.dim_y = dim_y
        self.dim_z = dim_z
        self.material = material

        half = Vector3(dim_x, dim_y, dim_z)
        self.minimum = center - half
        self.maximum = center + half

    def ray_intersect(self, origin: Vector3, direction: Vector3,
                      viewer: Vector3) -> Intersect:
        # Slab method: narrow [t_min, t_max] axis by axis.
        t_min = float("-inf")
        t_max = float("inf")
        entry_axis = -1
        for axis in range(3):
            o = origin[axis]
            d = direction[axis]
            lo = self.minimum[axis]
            hi = self.maximum[axis]
            if d == 0:
                # Parallel to this slab: either always inside it or never.
                if o < lo or o > hi:
                    return Intersect.empty()
                continue

            t0 = (lo - o) / d
            t1 = (hi - o) / d
            if t0 > t1:
                t0, t1 = t1, t0

            if t_min > t1 or t0 > t_max:
                return Intersect.empty()
            if t0 > t_min:
                t_min = t0
                entry_axis = axis
            if t1 < t_max:
                t_max = t1

        # Box behind the origin, or the origin inside / on the box.
        if t_min < 0:
            return Intersect.empty()

        point = origin + direction * t_min
        face = self.face_at(point, entry_axis, direction)
        normal = FACE_NORMALS[face]

        view_dir = (viewer - point).normalize()
        if normal.dot(view_dir) <= 0:
            return Intersect.empty()

        return Intersect(point, normal, t_min, self.material, face, self.uv_at(point, face))

    def face_at(self, point: Vector3, entry_axis: int = -1, direction: Vector3 = None) -> int:
        """
        Index of the face the point lies on. Faces are tested in the fixed
        order -x, +x, -y, +y, -z, +z and the first match wins, so points on
        edges and corners always resolve to the same face.
        """
        for axis in range(3):
            if abs(point[axis] - self.minimum[axis]) < FACE_EPSILON:
                return 2 * axis
            if abs(point[axis] - self.maximum[axis]) < FACE_EPSILON:
                return 2 * axis + 1

        # Rounding pushed the point off every face; use the entry slab.
        if entry_axis < 0 or direction is None:
            raise ValueError(f"Point {point} does not lie on the cube surface")
        return 2 * entry_axis if direction[entry_axis] > 0 else 2 * entry_axis + 1

    def uv_at(self, point: Vector3, face: int) -> UV:
        """
        Texture coordinate of a point on the given face. Side faces keep v
        growing downwards so images appear upright.
        """
        lo = self.minimum
        hi = self.maximum
        size_x = hi.x - lo.x
        size_y = hi.y - lo.y
        size_z = hi.z - lo.z

        if face == 0:
            return UV((point.z - lo.z) / size_z, (hi.y - point.y) / size_y)
        if face == 1:
            return UV((hi.z - point.z) / size_z, (hi.y - point.y) / size_y)
        if face == 2:
            return UV((point.x - lo.x) / size_x, (hi.z - point.z) / size_z)
        if face == 3:
            return UV((point.x - lo.x) / size_x, (point.z - lo.z) / size_z)
        if face == 4:
            return UV((hi.x - point.x) / size_x, (hi.y - point.y) / size_y)
        return UV((point.x - lo.x) / size_x, (hi.y - point.y) / size_y)

    def __repr__(self) -> str:
        return f"Cube(center={self.center}, dims=({self.dim_x}, {self.dim_y}, {self.dim_z}))"
