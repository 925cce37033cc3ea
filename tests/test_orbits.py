"""Tests for circular and elliptical orbit seeding."""
import math

import pytest

from gravsim.constants import G
from gravsim.data_models import Body
from gravsim.orbits import circular_orbit, elliptical_orbit, orbital_period, vis_viva_speed

from conftest import SUN_MASS, EARTH_ORBIT, make_sun

COLOR = (10, 20, 30)


def relative_state(body, parent):
    return (body.x - parent.x, body.y - parent.y, body.vx - parent.vx, body.vy - parent.vy)


class TestCircularOrbit:

    def test_speed_and_geometry(self):
        sun = make_sun()
        earth = circular_orbit(sun, EARTH_ORBIT, 0.0, 5.972e24, 6.371e6, COLOR, "Earth")
        assert earth.x == pytest.approx(EARTH_ORBIT)
        assert earth.y == pytest.approx(0.0)
        assert earth.vx == pytest.approx(0.0, abs=1e-9)
        assert earth.vy == pytest.approx(math.sqrt(G * SUN_MASS / EARTH_ORBIT))
        assert earth.mass == 5.972e24
        assert earth.radius == 6.371e6
        assert earth.color == COLOR
        assert earth.name == "Earth"

    def test_velocity_is_counter_clockwise_and_tangential(self):
        sun = make_sun()
        for angle in (0.3, 1.7, 4.0):
            body = circular_orbit(sun, 1.0e9, angle, 1.0, 1.0, COLOR)
            rx, ry, vx, vy = relative_state(body, sun)
            assert rx * vx + ry * vy == pytest.approx(0.0, abs=1e-6 * 1.0e9 * math.hypot(vx, vy))
            assert rx * vy - ry * vx > 0.0
            assert math.hypot(rx, ry) == pytest.approx(1.0e9)

    def test_quarter_turn(self):
        sun = make_sun()
        body = circular_orbit(sun, 2.0e9, math.pi / 2, 1.0, 1.0, COLOR)
        v = math.sqrt(G * SUN_MASS / 2.0e9)
        assert body.x == pytest.approx(0.0, abs=1e-3)
        assert body.y == pytest.approx(2.0e9)
        assert body.vx == pytest.approx(-v)
        assert body.vy == pytest.approx(0.0, abs=1e-9)

    def test_parent_state_is_added(self):
        moving = make_sun(x=1.0e10, y=-2.0e10, vx=1000.0, vy=-500.0)
        still = make_sun()
        a = circular_orbit(moving, 3.0e9, 0.8, 1.0, 1.0, COLOR)
        b = circular_orbit(still, 3.0e9, 0.8, 1.0, 1.0, COLOR)
        assert relative_state(a, moving) == pytest.approx(relative_state(b, still))

    def test_does_not_touch_parent(self):
        sun = make_sun()
        before = (sun.x, sun.y, sun.vx, sun.vy, sun.mass)
        circular_orbit(sun, 1.0e9, 1.0, 1.0e20, 1.0, COLOR)
        assert (sun.x, sun.y, sun.vx, sun.vy, sun.mass) == before

    @pytest.mark.parametrize("radius", [0.0, -1.0e9, math.nan, math.inf])
    def test_non_positive_radius_rejected(self, radius):
        with pytest.raises(ValueError):
            circular_orbit(make_sun(), radius, 0.0, 1.0, 1.0, COLOR)


class TestEllipticalOrbit:

    @pytest.mark.parametrize("angle", [0.0, 0.7, 2.5, 5.9])
    def test_zero_eccentricity_reduces_to_circular(self, angle):
        sun = make_sun(vx=12.0, vy=-3.0)
        ellipse = elliptical_orbit(sun, 1.5e11, 1.5e11, angle, 1.0, 1.0, COLOR)
        circle = circular_orbit(sun, 1.5e11, angle, 1.0, 1.0, COLOR)
        assert ellipse.x == pytest.approx(circle.x, rel=1e-12, abs=1e-3)
        assert ellipse.y == pytest.approx(circle.y, rel=1e-12, abs=1e-3)
        assert ellipse.vx == pytest.approx(circle.vx, rel=1e-12, abs=1e-9)
        assert ellipse.vy == pytest.approx(circle.vy, rel=1e-12, abs=1e-9)
        speed = math.hypot(ellipse.vx - sun.vx, ellipse.vy - sun.vy)
        assert speed == pytest.approx(math.sqrt(G * SUN_MASS / 1.5e11))

    def test_at_periapsis(self):
        sun = make_sun()
        peri, apo = 1.0e11, 3.0e11
        body = elliptical_orbit(sun, peri, apo, 0.0, 1.0, 1.0, COLOR)
        a = (peri + apo) / 2
        assert body.x == pytest.approx(peri)
        assert body.y == pytest.approx(0.0, abs=1e-3)
        assert body.vx == pytest.approx(0.0, abs=1e-9)
        assert body.vy == pytest.approx(math.sqrt(G * SUN_MASS * (2 / peri - 1 / a)))

    def test_at_apoapsis(self):
        sun = make_sun()
        peri, apo = 1.0e11, 3.0e11
        body = elliptical_orbit(sun, peri, apo, math.pi, 1.0, 1.0, COLOR)
        assert math.hypot(body.x, body.y) == pytest.approx(apo)
        assert body.x == pytest.approx(-apo)
        assert body.vy == pytest.approx(-vis_viva_speed(SUN_MASS, apo, (peri + apo) / 2))

    def test_heading_uses_flight_path_angle(self):
        sun = make_sun()
        peri, apo = 1.0e11, 3.0e11
        a = (peri + apo) / 2
        e = (apo - peri) / (apo + peri)
        theta = math.pi / 2
        body = elliptical_orbit(sun, peri, apo, theta, 1.0, 1.0, COLOR)

        r = a * (1 - e * e)
        assert body.x == pytest.approx(0.0, abs=1e-3)
        assert body.y == pytest.approx(r)

        speed = math.sqrt(G * SUN_MASS * (2 / r - 1 / a))
        heading = theta + math.pi / 2 + math.atan2(e, 1.0)
        assert body.vx == pytest.approx(speed * math.cos(heading))
        assert body.vy == pytest.approx(speed * math.sin(heading))

    def test_specific_energy_matches_semi_major_axis(self):
        sun = make_sun()
        peri, apo = 2.0e10, 9.0e10
        body = elliptical_orbit(sun, peri, apo, 1.1, 1.0, 1.0, COLOR)
        r = math.hypot(body.x, body.y)
        v2 = body.vx ** 2 + body.vy ** 2
        energy = 0.5 * v2 - G * SUN_MASS / r
        assert energy == pytest.approx(-G * SUN_MASS / (peri + apo))

    def test_parent_state_is_added(self):
        moving = make_sun(x=-4.0e9, y=7.0e9, vx=-250.0, vy=800.0)
        still = make_sun()
        a = elliptical_orbit(moving, 1.0e9, 4.0e9, 2.2, 1.0, 1.0, COLOR)
        b = elliptical_orbit(still, 1.0e9, 4.0e9, 2.2, 1.0, 1.0, COLOR)
        assert relative_state(a, moving) == pytest.approx(relative_state(b, still))

    @pytest.mark.parametrize("peri, apo", [
        (0.0, 1.0e9), (-1.0, 1.0e9), (2.0e9, 1.0e9),
        (math.nan, 2.0e11), (1.0e9, math.nan), (1.0e9, math.inf),
    ])
    def test_non_physical_geometry_rejected(self, peri, apo):
        with pytest.raises(ValueError):
            elliptical_orbit(make_sun(), peri, apo, 0.0, 1.0, 1.0, COLOR)

    def test_non_finite_angle_rejected(self):
        with pytest.raises(ValueError):
            elliptical_orbit(make_sun(), 1.0e9, 2.0e9, math.nan, 1.0, 1.0, COLOR)
        with pytest.raises(ValueError):
            circular_orbit(make_sun(), 1.0e9, math.inf, 1.0, 1.0, COLOR)


def test_orbital_period_of_earth():
    days = orbital_period(SUN_MASS, EARTH_ORBIT) / 86400.0
    assert days == pytest.approx(365.25, rel=5e-3)


def test_vis_viva_on_circle():
    assert vis_viva_speed(SUN_MASS, 1.0e11, 1.0e11) == pytest.approx(math.sqrt(G * SUN_MASS / 1.0e11))


def test_seeded_bodies_are_new_objects():
    sun = make_sun()
    body = circular_orbit(sun, 1.0e9, 0.0, 1.0, 1.0, COLOR)
    assert isinstance(body, Body)
    assert body is not sun
