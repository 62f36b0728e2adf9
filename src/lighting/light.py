# lighting/light.py
import math
from core.vector import Vector3

class Light:
    """
    Point light. The renderer only reads lights; their positions are moved
    between frames by DayNightCycle.
    """
    def __init__(self, position: Vector3, color: Vector3, intensity: float):
        self.position = position
        self.color = color
        self.intensity = intensity

    def update_position_orbit(self, center: Vector3, radius: float, angle: float):
        """Place the light on a circle around center in the XY plane, keeping z."""
        self.position = Vector3(
            center.x + radius * math.cos(angle),
            center.y + radius * math.sin(angle),
            self.position.z
        )

    def light_condition(self) -> str:
        """Time of day implied by the light height: day, dawn, dusk or night."""
        y = self.position.y
        if 20.0 <= y < 40.0:
            return "day"
        if 0.0 <= y < 20.0:
            return "dawn" if self.position.x > 0.0 else "dusk"
        return "night"

    def __repr__(self) -> str:
        return f"Light(Position: ({self.position.x}, {self.position.y}, {self.position.z}))"

class DayNightCycle:
    """
    Moves a sun and a moon around the same orbit, half a turn apart.
    """
    def __init__(self, sun: Light, moon: Light, center: Vector3 = None,
                 radius: float = 40.0, speed: float = 0.2):
        self.sun = sun
        self.moon = moon
        self.center = center if center is not None else Vector3(0, 0, 0)
        self.radius = radius
        self.speed = speed
        self.angle = 0.0

    @property
    def lights(self):
        return [self.sun, self.moon]

    def advance(self, dt: float = 1.0):
        """Step the orbit by speed * dt radians and move both lights."""
        self.angle = (self.angle + self.speed * dt) % (2.0 * math.pi)
        self.sun.update_position_orbit(self.center, self.radius, self.angle)
        self.moon.update_position_orbit(self.center, self.radius, self.angle + math.pi)

    def phase(self) -> str:
        return self.sun.light_condition()
