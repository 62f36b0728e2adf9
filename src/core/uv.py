# core/uv.py

# Largest coordinate used for texel lookups; int(u * width) stays below width.
UV_UPPER = 0.9999

class UV:
    """
    Texture coordinate on one cube face. (0, 0) is the top-left corner of
    the face image, u grows to the right and v grows downwards.
    """
    __slots__ = ("u", "v")

    def __init__(self, u: float, v: float):
        self.u = u
        self.v = v

    def clamped(self, upper: float = UV_UPPER) -> "UV":
        return UV(min(max(self.u, 0.0), upper), min(max(self.v, 0.0), upper))

    def __iter__(self):
        yield self.u
        yield self.v

    def __repr__(self) -> str:
        return f"UV({self.u}, {self.v})"
