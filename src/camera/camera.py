# camera/camera.py
import math
from core.vector import Vector3
from core.ray import Ray

# Keep the orbit this far (radians) from the poles so the basis stays defined.
PITCH_LIMIT = math.radians(85)
MIN_DISTANCE = 1.0

class Camera:
    """
    Orbit camera looking from eye at center. The renderer only reads it;
    input handling moves it between frames.
    """
    def __init__(self, eye: Vector3, center: Vector3, up: Vector3 = None):
        self.eye = eye
        self.center = center
        self.up = up if up is not None else Vector3(0, 1, 0)
        self.update_camera()

    def update_camera(self):
        """Updates the camera's orthonormal basis from eye, center and up."""
        self.forward = (self.center - self.eye).normalize()
        self.right = self.forward.cross(self.up).normalize()
        self.true_up = self.right.cross(self.forward).normalize()

    def base_change(self, direction: Vector3) -> Vector3:
        """
        Converts a camera-space direction (x right, y up, -z forward) into
        world space.
        """
        return (self.right * direction.x +
                self.true_up * direction.y -
                self.forward * direction.z).normalize()

    def get_ray(self, screen_x: float, screen_y: float) -> Ray:
        """Primary ray through the point (screen_x, screen_y) on the z = -1 image plane."""
        local = Vector3(screen_x, screen_y, -1.0).normalize()
        return Ray(self.eye, self.base_change(local))

    def orbit(self, delta_yaw: float, delta_pitch: float):
        """Rotate the eye around center, keeping its distance."""
        offset = self.eye - self.center
        radius = offset.length()
        yaw = math.atan2(offset.x, offset.z)
        pitch = math.asin(max(-1.0, min(1.0, offset.y / radius)))

        yaw += delta_yaw
        pitch = max(-PITCH_LIMIT, min(PITCH_LIMIT, pitch + delta_pitch))

        self.eye = self.center + Vector3(
            radius * math.cos(pitch) * math.sin(yaw),
            radius * math.sin(pitch),
            radius * math.cos(pitch) * math.cos(yaw)
        )
        self.update_camera()

    def zoom(self, delta: float):
        """Move the eye towards center by delta, never closer than MIN_DISTANCE."""
        distance = (self.center - self.eye).length()
        new_distance = max(MIN_DISTANCE, distance - delta)
        self.eye = self.center - self.forward * new_distance
        self.update_camera()

    def __repr__(self) -> str:
        return f"Camera(eye={self.eye}, center={self.center})"
