import math

import pytest

from core.vector import Vector3
from lighting.light import Light, DayNightCycle


def make_light(x=0.0, y=0.0, z=0.0):
    return Light(Vector3(x, y, z), Vector3(1, 1, 1), 1.0)


def test_orbit_keeps_z():
    light = make_light(0, 0, 7)
    light.update_position_orbit(Vector3(1, 2, 0), 10.0, math.pi / 2)
    assert light.position.to_tuple() == pytest.approx((1.0, 12.0, 7.0))


@pytest.mark.parametrize("x, y, phase", [
    (0, 30, "day"),
    (0, 20, "day"),
    (0, 40, "night"),
    (5, 10, "dawn"),
    (-5, 10, "dusk"),
    (0, 0, "dusk"),
    (5, -1, "night"),
])
def test_light_condition(x, y, phase):
    assert make_light(x, y).light_condition() == phase


class TestDayNightCycle:
    def setup_method(self):
        self.sun = make_light(0, 40, 0)
        self.moon = make_light(0, -40, 0)
        self.cycle = DayNightCycle(self.sun, self.moon, radius=40.0, speed=0.3)

    def test_moon_stays_opposite(self):
        for _ in range(7):
            self.cycle.advance()
            mid = (self.sun.position + self.moon.position) * 0.5
            assert mid.to_tuple() == pytest.approx((0.0, 0.0, 0.0), abs=1e-9)

    def test_angle_wraps(self):
        self.cycle.advance(100.0)
        assert 0.0 <= self.cycle.angle < 2 * math.pi

    def test_phase_follows_sun(self):
        self.cycle.speed = math.pi / 4
        self.cycle.advance()
        assert self.cycle.phase() == "day"
        assert self.cycle.lights == [self.sun, self.moon]

    def test_full_day(self):
        self.cycle.speed = math.pi / 8
        seen = set()
        for _ in range(16):
            self.cycle.advance()
            seen.add(self.cycle.phase())
        assert seen == {"day", "dawn", "dusk", "night"}
