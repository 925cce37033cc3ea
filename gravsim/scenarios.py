#!/usr/bin/env python3
"""
Scenarios: seed functions that populate a SimulationState.

A scenario is a Seeder, a callable taking the SimulationState to fill. It is
applied once when the state is built and again on every reset, so it must only
use the add_body* methods and must be deterministic.

Built-in scenarios are plain functions registered in BUILTIN_SCENARIOS. More can
be described as JSON templates (gravsim/templates/*.json):

{
  "name": "Human-friendly scenario name",
  "description": "Optional description",
  "time_scale": 3600.0,               # optional
  "bodies": [
    {
      "name": "Sun",
      "mass": 1.9885e30,
      "radius": 6.9634e8,
      "color": [255, 204, 0],
      "position": [0.0, 0.0],         # optional, default origin
      "velocity": [0.0, 0.0]          # optional, default at rest
    },
    {
      "name": "Earth",
      "mass": 5.972e24,
      "radius": 6.371e6,
      "color": [100, 149, 237],
      "orbit": {"parent": "Sun", "type": "circular", "radius": 1.496e11, "angle_deg": 0.0}
    },
    {
      "name": "Comet",
      "mass": 1.0e14,
      "radius": 5.0e3,
      "orbit": {"parent": "Sun", "type": "elliptical",
                "periapsis": 8.8e10, "apoapsis": 5.3e12, "angle_deg": 90.0}
    }
  ]
}

Orbit parents are referenced by name and must appear earlier in the list.
"""
import json
import logging
import math
import os
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .constants import (
    AU,
    EARTH_MASS,
    EARTH_RADIUS,
    INVALID_BODY_ID,
    MOON_MASS,
    MOON_RADIUS,
    SOLAR_MASS,
    SOLAR_RADIUS,
    G,
)
from .data_models import Body, Color
from .errors import ScenarioError
from .simulation import Seeder, SimulationState

logger = logging.getLogger(__name__)

TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), "templates")

YELLOW = (253, 249, 0)
BLUE = (0, 121, 241)
ORANGE = (255, 161, 0)
RED = (230, 41, 55)
GRAY = (130, 130, 130)
LIGHT_GRAY = (200, 200, 200)
TAN = (210, 180, 140)
DEFAULT_COLOR = (200, 200, 255)


@dataclass
class Scenario:
    """A named seeder plus the time scale it looks best at (None keeps the current one)."""
    name: str
    seed: Seeder
    time_scale: Optional[float] = None
    description: str = ""


# ============================================================
# Built-in scenarios
# ============================================================

def seed_sun(sim: SimulationState) -> int:
    return sim.add_body(Body(
        x=0.0, y=0.0, vx=0.0, vy=0.0,
        mass=SOLAR_MASS, radius=SOLAR_RADIUS, color=YELLOW, name="Sun",
    ))


def inner_solar_system(sim: SimulationState) -> None:
    """Sun with Earth, Venus and Mars on circular orbits, all starting on the +x axis."""
    sun = seed_sun(sim)
    sim.add_body_circular_orbit(sun, 1.496e11, 0.0, EARTH_MASS, EARTH_RADIUS, BLUE, "Earth")
    sim.add_body_circular_orbit(sun, 1.082e11, 0.0, 4.867e24, 6.052e6, ORANGE, "Venus")
    sim.add_body_circular_orbit(sun, 2.279e11, 0.0, 6.39e23, 3.389e6, RED, "Mars")


# (name, periapsis m, apoapsis m, true anomaly deg, mass kg, radius m, color)
PLANETS = (
    ("Mercury", 4.6001e10, 6.9818e10, 35.0, 3.3011e23, 2.4397e6, GRAY),
    ("Venus", 1.07477e11, 1.08939e11, 120.0, 4.8675e24, 6.0518e6, ORANGE),
    ("Earth", 1.47095e11, 1.52100e11, 0.0, EARTH_MASS, EARTH_RADIUS, BLUE),
    ("Mars", 2.06650e11, 2.49261e11, 250.0, 6.4171e23, 3.3895e6, RED),
    ("Jupiter", 7.40595e11, 8.16363e11, 200.0, 1.8982e27, 6.9911e7, TAN),
)

# (name, parent, periapsis m, apoapsis m, true anomaly deg, mass kg, radius m, color)
MOONS = (
    ("Moon", "Earth", 3.633e8, 4.055e8, 0.0, MOON_MASS, MOON_RADIUS, LIGHT_GRAY),
    ("Phobos", "Mars", 9.2345e6, 9.5175e6, 0.0, 1.0659e16, 1.1267e4, LIGHT_GRAY),
    ("Deimos", "Mars", 2.34556e7, 2.34709e7, 180.0, 1.4762e15, 6.2e3, LIGHT_GRAY),
)


def solar_system_with_moons(sim: SimulationState) -> None:
    """
    Sun, five planets on their real elliptical orbits and three moons.

    Moons are seeded after their planets and inherit the planet's state at that
    moment, so this must run before the first tick (it does, as a seeder).
    """
    sun = seed_sun(sim)
    ids: Dict[str, int] = {}
    for name, peri, apo, anomaly, mass, radius, color in PLANETS:
        ids[name] = sim.add_body_elliptical_orbit(
            sun, peri, apo, math.radians(anomaly), mass, radius, color, name
        )
    for name, parent, peri, apo, anomaly, mass, radius, color in MOONS:
        sim.add_body_elliptical_orbit(
            ids[parent], peri, apo, math.radians(anomaly), mass, radius, color, name
        )


def binary_star(sim: SimulationState) -> None:
    """Two solar-mass stars 1 AU apart on a shared circular orbit, plus a circumbinary planet."""
    separation = AU
    v_star = math.sqrt(G * SOLAR_MASS / (2.0 * separation))
    sim.add_body(Body(
        x=-separation / 2, y=0.0, vx=0.0, vy=-v_star,
        mass=SOLAR_MASS, radius=SOLAR_RADIUS, color=YELLOW, name="Star A",
    ))
    sim.add_body(Body(
        x=separation / 2, y=0.0, vx=0.0, vy=v_star,
        mass=SOLAR_MASS, radius=SOLAR_RADIUS, color=ORANGE, name="Star B",
    ))
    r_planet = 4.0 * AU
    v_planet = math.sqrt(G * 2.0 * SOLAR_MASS / r_planet)
    sim.add_body(Body(
        x=0.0, y=r_planet, vx=-v_planet, vy=0.0,
        mass=EARTH_MASS, radius=EARTH_RADIUS, color=BLUE, name="Circumbinary",
    ))


def empty(sim: SimulationState) -> None:
    """No bodies."""


BUILTIN_SCENARIOS: Dict[str, Scenario] = {
    s.name: s for s in (
        Scenario("inner_solar_system", inner_solar_system, 3600.0,
                 "Sun, Venus, Earth and Mars on circular orbits"),
        Scenario("solar_system_with_moons", solar_system_with_moons, 3600.0,
                 "Elliptical planet orbits with the Moon, Phobos and Deimos"),
        Scenario("binary_star", binary_star, 86400.0,
                 "Equal-mass binary with a circumbinary planet"),
        Scenario("empty", empty, None, "Nothing to simulate"),
    )
}

DEFAULT_SCENARIO = "inner_solar_system"


def get_scenario(name: str) -> Scenario:
    """Built-in scenario by name, or a JSON template by file name / path."""
    if name in BUILTIN_SCENARIOS:
        return BUILTIN_SCENARIOS[name]
    if name.lower().endswith(".json"):
        return load_template(name)
    raise ScenarioError(
        f"unknown scenario {name!r}; choose one of {', '.join(sorted(BUILTIN_SCENARIOS))}"
    )


# ============================================================
# JSON templates
# ============================================================

def _read_json(path: str) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as exc:
        raise ScenarioError(f"cannot read template {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ScenarioError(f"template {path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ScenarioError(f"template {path} must contain a JSON object")
    return data


def _coerce_color(c: Optional[Sequence]) -> Color:
    if c is None:
        return DEFAULT_COLOR
    try:
        r, g, b = int(c[0]), int(c[1]), int(c[2])
    except (TypeError, ValueError, IndexError) as exc:
        raise ScenarioError(f"invalid color {c!r}") from exc
    return (max(0, min(255, r)), max(0, min(255, g)), max(0, min(255, b)))


def _coerce_pair(v: Optional[Sequence], what: str) -> Tuple[float, float]:
    if v is None:
        return (0.0, 0.0)
    try:
        pair = (float(v[0]), float(v[1]))
    except (TypeError, ValueError, IndexError) as exc:
        raise ScenarioError(f"invalid {what} {v!r}") from exc
    if not (math.isfinite(pair[0]) and math.isfinite(pair[1])):
        raise ScenarioError(f"{what} must be finite, got {v!r}")
    return pair


def _resolve_template_path(file_name: str) -> str:
    if os.path.isfile(file_name):
        return file_name
    return os.path.join(TEMPLATES_DIR, file_name)


def list_templates() -> List[Tuple[str, str]]:
    """Return list of (file_name, display_name) for the bundled templates."""
    items: List[Tuple[str, str]] = []
    if not os.path.isdir(TEMPLATES_DIR):
        return items
    for fn in sorted(os.listdir(TEMPLATES_DIR)):
        if not fn.lower().endswith(".json"):
            continue
        try:
            data = _read_json(os.path.join(TEMPLATES_DIR, fn))
        except ScenarioError as exc:
            logger.warning("Skipping template %s: %s", fn, exc)
            continue
        items.append((fn, data.get("name") or os.path.splitext(fn)[0]))
    return items


def load_template(file_name: str) -> Scenario:
    """
    Load a JSON template by path or by file name inside TEMPLATES_DIR.

    The whole file is validated up front, so a malformed template raises
    ScenarioError here rather than halfway through seeding.
    """
    path = _resolve_template_path(file_name)
    data = _read_json(path)
    display_name = data.get("name") or os.path.splitext(os.path.basename(path))[0]
    raw_bodies = data.get("bodies")
    if not isinstance(raw_bodies, list):
        raise ScenarioError(f"template {path} needs a 'bodies' list")

    time_scale = data.get("time_scale")
    if time_scale is not None:
        try:
            time_scale = float(time_scale)
        except (TypeError, ValueError) as exc:
            raise ScenarioError(f"template {path} has a non-numeric time_scale {time_scale!r}") from exc
        if not math.isfinite(time_scale) or time_scale <= 0:
            raise ScenarioError(f"template {path} needs a finite time_scale > 0, got {time_scale}")

    steps = [_parse_body(entry, index) for index, entry in enumerate(raw_bodies)]
    known = set()
    for step in steps:
        if step["name"] in known:
            raise ScenarioError(f"body name {step['name']!r} is used more than once")
        parent = step.get("parent")
        if parent is not None and parent not in known:
            raise ScenarioError(
                f"body {step['name']!r} orbits {parent!r}, which is not defined before it"
            )
        known.add(step["name"])

    def seed(sim: SimulationState) -> None:
        for step in steps:
            step["apply"](sim)

    logger.info("Loaded template %r with %d bodies", display_name, len(steps))
    return Scenario(
        name=display_name,
        seed=seed,
        time_scale=time_scale,
        description=data.get("description", ""),
    )


def _parse_body(entry: dict, index: int) -> dict:
    if not isinstance(entry, dict):
        raise ScenarioError(f"body #{index} must be a JSON object")
    name = entry.get("name") or f"Body {index}"
    try:
        mass = float(entry["mass"])
        radius = float(entry.get("radius", 1.0))
    except (KeyError, TypeError, ValueError) as exc:
        raise ScenarioError(f"body {name!r} needs a numeric mass and radius") from exc
    if not (math.isfinite(mass) and math.isfinite(radius)):
        raise ScenarioError(f"body {name!r} has a non-finite mass or radius")
    color = _coerce_color(entry.get("color"))

    orbit = entry.get("orbit")
    if orbit is None:
        pos = _coerce_pair(entry.get("position"), "position")
        vel = _coerce_pair(entry.get("velocity"), "velocity")

        def apply(sim: SimulationState) -> None:
            sim.add_body(Body(
                x=pos[0], y=pos[1], vx=vel[0], vy=vel[1],
                mass=mass, radius=radius, color=color, name=name,
            ))

        return {"name": name, "apply": apply}

    if not isinstance(orbit, dict):
        raise ScenarioError(f"orbit of {name!r} must be a JSON object")
    return {"name": name, "parent": orbit.get("parent"),
            "apply": _orbit_step(orbit, name, mass, radius, color)}


def _orbit_step(orbit: dict, name: str, mass: float, radius: float,
                color: Color) -> Callable[[SimulationState], None]:
    parent = orbit.get("parent")
    if not parent:
        raise ScenarioError(f"orbit of {name!r} needs a parent")
    kind = orbit.get("type", "circular")
    if kind not in ("circular", "elliptical"):
        raise ScenarioError(f"unknown orbit type {kind!r} for {name!r}")
    try:
        angle = math.radians(float(orbit.get("angle_deg", 0.0)))
        if kind == "circular":
            r = float(orbit["radius"])
        else:
            peri = float(orbit["periapsis"])
            apo = float(orbit["apoapsis"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ScenarioError(f"orbit of {name!r} is missing or has invalid fields") from exc
    values = (angle, r) if kind == "circular" else (angle, peri, apo)
    if not all(math.isfinite(v) for v in values):
        raise ScenarioError(f"orbit of {name!r} has non-finite fields")
    if kind == "circular" and r <= 0:
        raise ScenarioError(f"orbit radius of {name!r} must be > 0")
    if kind == "elliptical" and (peri <= 0 or apo < peri):
        raise ScenarioError(f"orbit of {name!r} needs 0 < periapsis <= apoapsis")

    def apply(sim: SimulationState) -> None:
        parent_id = sim.find(parent)
        if kind == "circular":
            body_id = sim.add_body_circular_orbit(parent_id, r, angle, mass, radius, color, name)
        else:
            body_id = sim.add_body_elliptical_orbit(parent_id, peri, apo, angle, mass, radius, color, name)
        if body_id == INVALID_BODY_ID:
            raise ScenarioError(f"parent {parent!r} of {name!r} is not in the simulation")

    return apply
