#!/usr/bin/env python3
"""
Data models for Gravity Sim.

This module defines the Body dataclass shared between physics, seeding and rendering.

Units and usage
- x, y are in meters [m], vx, vy in meters per second [m/s], mass in kg.
- radius [m] and color are carried for rendering only; physics never reads them.
- A BodyId is the insertion index of a Body in SimulationState. Bodies are never
  removed, so an id stays valid for the lifetime of the state it came from.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

BodyId = int
Color = Tuple[int, int, int]


@dataclass
class Body:
    """
    Represents one point mass in the simulation.

    Fields:
    - x, y: Position in meters
    - vx, vy: Velocity in meters/second
    - mass: Mass in kilograms
    - radius: Display radius in meters
    - color: RGB tuple used for rendering
    - name: Optional label drawn next to the body
    """
    x: float
    y: float
    vx: float
    vy: float
    mass: float
    radius: float = 1.0
    color: Color = (200, 200, 255)
    name: Optional[str] = None

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def velocity(self) -> Tuple[float, float]:
        return (self.vx, self.vy)

    @property
    def speed(self) -> float:
        return (self.vx * self.vx + self.vy * self.vy) ** 0.5
