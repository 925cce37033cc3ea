#!/usr/bin/env python3
"""
Orbit seeding: initial state of a body placed in orbit around a parent.

All functions here are pure. They read the parent's position, velocity and
mass and return a brand-new Body; inserting it is the caller's job
(SimulationState.add_body_circular_orbit / add_body_elliptical_orbit).

Orbits are defined relative to the parent, so the parent's own position and
velocity are added to the relative state. Angles are in radians, measured
counter-clockwise from the +x axis.
"""
import math
from typing import Optional

from .constants import G
from .data_models import Body, Color
from .physics import circular_orbit_velocity
from .vector_utils import vec_add, vec_from_polar


def vis_viva_speed(central_mass: float, radius: float, semi_major_axis: float) -> float:
    """Orbital speed at distance r on an orbit of semi-major axis a: v^2 = GM(2/r - 1/a)."""
    return math.sqrt(G * central_mass * (2.0 / radius - 1.0 / semi_major_axis))


def orbital_period(central_mass: float, semi_major_axis: float) -> float:
    """Kepler's third law, T = 2*pi*sqrt(a^3 / (G*M))."""
    return 2.0 * math.pi * math.sqrt(semi_major_axis ** 3 / (G * central_mass))


def circular_orbit(
    parent: Body,
    radius: float,
    angle: float,
    mass: float,
    body_radius: float,
    color: Color,
    name: Optional[str] = None,
) -> Body:
    """
    Body on a counter-clockwise circular orbit of `radius` meters around `parent`,
    currently at polar angle `angle`.
    """
    if not math.isfinite(radius) or radius <= 0:
        raise ValueError(f"orbit radius must be finite and > 0, got {radius}")
    if not math.isfinite(angle):
        raise ValueError(f"orbit angle must be finite, got {angle}")

    speed = circular_orbit_velocity(parent.mass, radius)
    pos = vec_add(parent.position, vec_from_polar(radius, angle))
    vel = vec_add(parent.velocity, vec_from_polar(speed, angle + math.pi / 2))
    return Body(
        x=pos[0], y=pos[1], vx=vel[0], vy=vel[1],
        mass=mass, radius=body_radius, color=color, name=name,
    )


def elliptical_orbit(
    parent: Body,
    periapsis: float,
    apoapsis: float,
    angle: float,
    mass: float,
    body_radius: float,
    color: Color,
    name: Optional[str] = None,
) -> Body:
    """
    Body on an elliptical orbit around `parent` with the given periapsis and
    apoapsis distances (meters), at true anomaly `angle`.

    Geometry:
        a = (periapsis + apoapsis) / 2
        e = (apoapsis - periapsis) / (apoapsis + periapsis)
        r = a (1 - e^2) / (1 + e cos(angle))
    Speed comes from vis-viva. The velocity heading is angle + pi/2 + phi with the
    flight-path angle phi = atan2(e sin(angle), 1 + e cos(angle)). With
    periapsis == apoapsis this is exactly the circular orbit.
    """
    if not (math.isfinite(periapsis) and math.isfinite(apoapsis) and math.isfinite(angle)):
        raise ValueError(
            f"orbit geometry must be finite, got periapsis={periapsis}, apoapsis={apoapsis}, angle={angle}"
        )
    if periapsis <= 0:
        raise ValueError(f"periapsis must be > 0, got {periapsis}")
    if apoapsis < periapsis:
        raise ValueError(f"apoapsis ({apoapsis}) must be >= periapsis ({periapsis})")

    semi_major = (periapsis + apoapsis) / 2.0
    ecc = (apoapsis - periapsis) / (apoapsis + periapsis)
    cos_t = math.cos(angle)
    r = semi_major * (1.0 - ecc * ecc) / (1.0 + ecc * cos_t)

    speed = vis_viva_speed(parent.mass, r, semi_major)
    flight_path = math.atan2(ecc * math.sin(angle), 1.0 + ecc * cos_t)
    heading = angle + math.pi / 2 + flight_path

    pos = vec_add(parent.position, vec_from_polar(r, angle))
    vel = vec_add(parent.velocity, vec_from_polar(speed, heading))
    return Body(
        x=pos[0], y=pos[1], vx=vel[0], vy=vel[1],
        mass=mass, radius=body_radius, color=color, name=name,
    )
