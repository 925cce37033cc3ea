#!/usr/bin/env python3
"""
Core Physics Engine for Gravity Sim

Responsibilities
- Compute pairwise gravitational accelerations (direct summation, optional Plummer softening).
- Advance body states with the velocity-Verlet integrator.
- Provide conserved-quantity diagnostics (energy, momentum, angular momentum) and small
  helpers for common orbital speeds.

Units and conventions
- World space positions are in meters [m].
- Velocities are in meters per second [m/s].
- Masses are in kilograms [kg].
- Time steps are in seconds [s].
- The gravitational constant G is expressed in SI: m^3 kg^-1 s^-2.

Numerical notes
- Velocity-Verlet is second order and symplectic: energy error stays bounded instead of
  drifting, and angular momentum is conserved up to rounding for central forces.
  The step order is fixed: a0 at t, move positions with a0, a1 at the new positions,
  then update velocities with the mean of a0 and a1. Any other order degrades it to
  first order.
- Complexity: acceleration computation is O(N^2) per evaluation. Each unordered pair is
  visited once and the same dx, dy, dist feed both bodies (Newton's third law).
- Softening: adds eps^2 to r^2. The default eps = 0 is the exact Newtonian law.

Memory
- Acceleration buffers are flat [ax0, ay0, ax1, ay1, ...] double views reserved from a
  ScratchArena inside a checkpoint, so nothing is retained between steps.
"""

import logging
import math
from typing import Sequence, Tuple

from .arena import ScratchArena
from .constants import DEFAULT_SOFTENING, G
from .data_models import Body
from .vector_utils import vec_cross

logger = logging.getLogger(__name__)


class GravityEngine:
    """
    N-body gravitational physics engine.

    The acceleration of body i due to body j is:
    a_i = G * m_j * r_ij / (|r_ij|^2 + eps^2)^(3/2)

    where r_ij points from i to j and eps is the softening length.
    """

    def __init__(self, softening: float = DEFAULT_SOFTENING):
        self.softening = max(0.0, float(softening))

    def set_softening(self, softening: float) -> None:
        self.softening = max(0.0, float(softening))

    def compute_accelerations(self, bodies: Sequence[Body], out) -> None:
        """
        Fill `out` with the gravitational acceleration of every body.

        Args:
            bodies: Bodies to evaluate (positions and masses are read).
            out: Writable float buffer of length 2 * len(bodies); overwritten with
                interleaved (ax, ay) pairs in m/s^2. A body without partners gets (0, 0).
        """
        n = len(bodies)
        for k in range(2 * n):
            out[k] = 0.0

        eps_squared = self.softening * self.softening

        for i in range(n):
            bi = bodies[i]
            for j in range(i + 1, n):
                bj = bodies[j]
                dx = bj.x - bi.x
                dy = bj.y - bi.y
                dist2 = dx * dx + dy * dy + eps_squared
                dist = math.sqrt(dist2)
                denom = dist2 * dist
                if denom == 0.0:
                    # Coincident (or so close that r^3 underflows) bodies exert no defined force
                    continue
                inv_dist3 = 1.0 / denom

                accel_i = G * bj.mass * inv_dist3
                accel_j = G * bi.mass * inv_dist3

                out[2 * i] += accel_i * dx
                out[2 * i + 1] += accel_i * dy
                out[2 * j] -= accel_j * dx
                out[2 * j + 1] -= accel_j * dy

    def step(self, bodies: Sequence[Body], dt: float, arena: ScratchArena) -> bool:
        """
        Advance all bodies by one velocity-Verlet step of `dt` seconds.

        Both acceleration buffers are reserved before any body is touched. If either
        reservation fails the step is abandoned and nothing is mutated.

        Returns:
            True if the bodies were advanced, False if scratch memory ran out.
        """
        n = len(bodies)
        with arena.checkpoint():
            accels = arena.reserve_doubles(2 * n)
            new_accels = arena.reserve_doubles(2 * n)
            if accels is None or new_accels is None:
                logger.debug(
                    "Scratch arena exhausted (%d bytes free) for %d bodies; step skipped",
                    arena.remaining, n,
                )
                return False

            self.compute_accelerations(bodies, accels)

            half_dt2 = 0.5 * dt * dt
            for i, body in enumerate(bodies):
                body.x += body.vx * dt + accels[2 * i] * half_dt2
                body.y += body.vy * dt + accels[2 * i + 1] * half_dt2

            self.compute_accelerations(bodies, new_accels)

            half_dt = 0.5 * dt
            for i, body in enumerate(bodies):
                body.vx += (accels[2 * i] + new_accels[2 * i]) * half_dt
                body.vy += (accels[2 * i + 1] + new_accels[2 * i + 1]) * half_dt

            accels.release()
            new_accels.release()
        return True


def kinetic_energy(bodies: Sequence[Body]) -> float:
    return sum(0.5 * b.mass * (b.vx * b.vx + b.vy * b.vy) for b in bodies)


def potential_energy(bodies: Sequence[Body]) -> float:
    """Newtonian pair potential, summed over unordered pairs (J)."""
    total = 0.0
    n = len(bodies)
    for i in range(n):
        bi = bodies[i]
        for j in range(i + 1, n):
            bj = bodies[j]
            dist = math.hypot(bj.x - bi.x, bj.y - bi.y)
            if dist > 0.0:
                total -= G * bi.mass * bj.mass / dist
    return total


def total_energy(bodies: Sequence[Body]) -> float:
    return kinetic_energy(bodies) + potential_energy(bodies)


def total_momentum(bodies: Sequence[Body]) -> Tuple[float, float]:
    px = sum(b.mass * b.vx for b in bodies)
    py = sum(b.mass * b.vy for b in bodies)
    return (px, py)


def angular_momentum(bodies: Sequence[Body]) -> float:
    """z component of the total angular momentum about the origin (kg m^2/s)."""
    return sum(b.mass * vec_cross(b.position, b.velocity) for b in bodies)


def center_of_mass(bodies: Sequence[Body]) -> Tuple[float, float]:
    m_total = sum(b.mass for b in bodies)
    if m_total <= 0:
        return (0.0, 0.0)
    cx = sum(b.mass * b.x for b in bodies) / m_total
    cy = sum(b.mass * b.y for b in bodies) / m_total
    return (cx, cy)


def circular_orbit_velocity(central_mass: float, orbital_radius: float) -> float:
    """
    Calculate the speed needed for a circular orbit.

    For a circular orbit gravity supplies exactly the centripetal force:
    G * M / r^2 = v^2 / r, therefore v = sqrt(G * M / r).

    Args:
        central_mass: Mass of the central body in kg
        orbital_radius: Orbital radius in meters

    Returns:
        Orbital speed in m/s (0 for a non-positive radius)
    """
    if orbital_radius <= 0:
        return 0.0

    return math.sqrt(G * central_mass / orbital_radius)


def escape_velocity(total_mass: float, separation: float) -> float:
    """
    Calculate the escape velocity at a given separation.

    v_escape = sqrt(2 * G * M / r)
    """
    if separation <= 0 or total_mass <= 0:
        return 0.0

    return math.sqrt(2.0 * G * total_mass / separation)
