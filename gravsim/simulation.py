#!/usr/bin/env python3
"""
Simulation state for Gravity Sim.

What this module does
- Owns the body store, the trail store, elapsed simulation time and the trail
  throttling counter.
- Keeps bodies and trails index-aligned: add_body is the only way in, and it
  appends one Body and one TrailBuffer together. Bodies are never removed, so a
  BodyId (insertion index) stays valid until reset().
- Advances time with GravityEngine.step and records trails every
  `trail_record_interval` executed ticks.

Memory model
- One ScratchArena per simulation. Trail storage is reserved from it when a
  body is added; per-tick acceleration buffers are reserved and released inside
  a checkpoint by the engine. reset() rewinds the arena to the mark taken at
  construction, so resets do not leak trail storage.

Failure semantics
- tick() is a silent no-op (returns False) for an empty store, dt <= 0, or when
  the engine cannot get its scratch buffers. Nothing is mutated in those cases.
- Orbit seeding with an unknown parent returns INVALID_BODY_ID and mutates nothing.

Threading
- Not thread-safe. The viewport wraps it in app.SimulationController, which
  serializes access with a lock.
"""
import logging
from typing import Callable, Iterator, Optional, Tuple

from .arena import ScratchArena
from .config import SimulationConfig
from .constants import INVALID_BODY_ID
from .data_models import Body, BodyId, Color
from .orbits import circular_orbit, elliptical_orbit
from .physics import GravityEngine
from .trails import TrailBuffer

logger = logging.getLogger(__name__)

Seeder = Callable[["SimulationState"], None]


class SimulationState:
    """
    Bodies, their trails and the simulation clock.

    Args:
        seed: Callable that populates the state through add_body*; applied now
            and again on every reset(). None starts (and resets to) empty.
        config: Memory, trail and softening settings. Defaults to SimulationConfig().
        engine: Force/integration engine. Defaults to GravityEngine(config.softening).
    """

    def __init__(
        self,
        seed: Optional[Seeder] = None,
        config: Optional[SimulationConfig] = None,
        engine: Optional[GravityEngine] = None,
    ):
        self.config = (config or SimulationConfig()).validate()
        self.engine = engine or GravityEngine(self.config.softening)
        self.arena = ScratchArena(self.config.arena_bytes)
        self.seed = seed
        self._base_offset = self.arena.current_offset()
        self._bodies = []
        self._trails = []
        self.time_seconds = 0.0
        self.trail_frame_counter = 0
        self.tick_count = 0
        self._apply_seed()

    def __repr__(self) -> str:
        return (
            f"SimulationState(bodies={len(self._bodies)}, time_seconds={self.time_seconds}, "
            f"arena={self.arena!r})"
        )

    def __len__(self) -> int:
        return len(self._bodies)

    def __iter__(self) -> Iterator[Tuple[Body, TrailBuffer]]:
        return iter(zip(self._bodies, self._trails))

    @property
    def bodies(self) -> Tuple[Body, ...]:
        return tuple(self._bodies)

    @property
    def trails(self) -> Tuple[TrailBuffer, ...]:
        return tuple(self._trails)

    def is_valid_id(self, body_id: BodyId) -> bool:
        return 0 <= body_id < len(self._bodies)

    def body(self, body_id: BodyId) -> Body:
        if not self.is_valid_id(body_id):
            raise IndexError(f"no body with id {body_id}")
        return self._bodies[body_id]

    def find(self, name: str) -> BodyId:
        """Id of the first body called `name`, or INVALID_BODY_ID."""
        for i, b in enumerate(self._bodies):
            if b.name == name:
                return i
        return INVALID_BODY_ID

    # -----------------------
    # Insertion
    # -----------------------

    def add_body(self, body: Body) -> BodyId:
        """Append `body` together with a fresh, empty trail and return its id."""
        trail = TrailBuffer(self.config.trail_length, self.arena)
        self._bodies.append(body)
        self._trails.append(trail)
        return len(self._bodies) - 1

    def add_body_circular_orbit(
        self,
        parent_id: BodyId,
        radius: float,
        angle: float,
        mass: float,
        body_radius: float,
        color: Color,
        name: Optional[str] = None,
    ) -> BodyId:
        """Seed a body on a circular orbit around `parent_id`; see orbits.circular_orbit."""
        parent = self._parent_for_seeding(parent_id, name)
        if parent is None:
            return INVALID_BODY_ID
        body = circular_orbit(parent, radius, angle, mass, body_radius, color, name)
        return self.add_body(body)

    def add_body_elliptical_orbit(
        self,
        parent_id: BodyId,
        periapsis: float,
        apoapsis: float,
        angle: float,
        mass: float,
        body_radius: float,
        color: Color,
        name: Optional[str] = None,
    ) -> BodyId:
        """Seed a body on an elliptical orbit around `parent_id`; see orbits.elliptical_orbit."""
        parent = self._parent_for_seeding(parent_id, name)
        if parent is None:
            return INVALID_BODY_ID
        body = elliptical_orbit(parent, periapsis, apoapsis, angle, mass, body_radius, color, name)
        return self.add_body(body)

    def _parent_for_seeding(self, parent_id: BodyId, name: Optional[str]) -> Optional[Body]:
        if not self.is_valid_id(parent_id):
            logger.debug("Cannot seed %r: parent id %r out of range", name, parent_id)
            return None
        parent = self._bodies[parent_id]
        if self.time_seconds > 0.0:
            # The parent has been integrated since seeding began; its current state is used.
            logger.warning(
                "Seeding %r around %r after %.0f s of simulation uses the parent's current state",
                name, parent.name, self.time_seconds,
            )
        return parent

    # -----------------------
    # Time stepping
    # -----------------------

    def tick(self, dt_seconds: float) -> bool:
        """
        Advance the simulation by `dt_seconds`.

        Returns:
            True if the state advanced; False for an empty store, a non-positive
            dt, or scratch exhaustion, in which case nothing changed.
        """
        if not self._bodies or dt_seconds <= 0.0:
            return False

        if not self.engine.step(self._bodies, dt_seconds, self.arena):
            return False

        self.trail_frame_counter += 1
        if self.trail_frame_counter >= self.config.trail_record_interval:
            for body, trail in zip(self._bodies, self._trails):
                trail.record(body.x, body.y)
            self.trail_frame_counter = 0

        self.time_seconds += dt_seconds
        self.tick_count += 1
        return True

    def reset(self) -> None:
        """Discard every body, trail and clock value and re-apply the seed."""
        self._bodies = []
        self._trails = []
        self.time_seconds = 0.0
        self.trail_frame_counter = 0
        self.tick_count = 0
        self.arena.restore(self._base_offset)
        self._apply_seed()

    def _apply_seed(self) -> None:
        if self.seed is not None:
            self.seed(self)
        logger.debug(
            "Seeded %d bodies (arena %d/%d bytes used)",
            len(self._bodies), self.arena.current_offset(), self.arena.size,
        )
