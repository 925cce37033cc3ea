"""Pytest configuration and shared fixtures."""
import math

import pytest

from gravsim.config import SimulationConfig
from gravsim.constants import EARTH_MASS, EARTH_RADIUS, SOLAR_RADIUS, G
from gravsim.data_models import Body
from gravsim.simulation import SimulationState

SUN_MASS = 1.9885e30
EARTH_ORBIT = 1.496e11


def make_sun(x=0.0, y=0.0, vx=0.0, vy=0.0):
    return Body(x=x, y=y, vx=vx, vy=vy, mass=SUN_MASS, radius=SOLAR_RADIUS,
                color=(253, 249, 0), name="Sun")


def seed_sun_earth(sim):
    sun = sim.add_body(make_sun())
    sim.add_body_circular_orbit(sun, EARTH_ORBIT, 0.0, EARTH_MASS, EARTH_RADIUS, (0, 121, 241), "Earth")


def seed_triangle(sim):
    """Three unequal masses at the corners of a scalene triangle, slightly moving."""
    sim.add_body(Body(x=0.0, y=0.0, vx=10.0, vy=0.0, mass=5.0e24, name="A"))
    sim.add_body(Body(x=4.0e8, y=1.0e8, vx=0.0, vy=-20.0, mass=7.0e22, name="B"))
    sim.add_body(Body(x=-1.5e8, y=3.0e8, vx=5.0, vy=5.0, mass=1.0e23, name="C"))


def state_snapshot(sim):
    """Everything a no-op tick must leave untouched, as exact values."""
    return (
        [(b.x, b.y, b.vx, b.vy) for b in sim.bodies],
        [(t.head, t.count, t.points()) for t in sim.trails],
        sim.time_seconds,
        sim.trail_frame_counter,
    )


@pytest.fixture
def small_config():
    return SimulationConfig(arena_bytes=256 * 1024, trail_length=16)


@pytest.fixture
def sun_earth(small_config):
    return SimulationState(seed_sun_earth, small_config)


@pytest.fixture
def triangle(small_config):
    return SimulationState(seed_triangle, small_config)


@pytest.fixture
def earth_period():
    return 2.0 * math.pi * math.sqrt(EARTH_ORBIT ** 3 / (G * SUN_MASS))
