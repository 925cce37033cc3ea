#!/usr/bin/env python3
"""
Shared application state between the viewport thread and the control panel.

SimulationController owns one SimulationState plus the playback settings the
UI edits (pause, time scale, trail visibility). Every method takes the lock, so
the Pygame thread and the Dear PyGui main thread never interleave inside a tick.
"""
import logging
import threading
from dataclasses import replace
from typing import List, Optional, Tuple

from .config import SimulationConfig
from .constants import MAX_TIME_SCALE, MIN_TIME_SCALE
from .data_models import Body
from .physics import angular_momentum, total_energy
from .scenarios import Scenario
from .simulation import SimulationState
from .vector_utils import clamp

logger = logging.getLogger(__name__)


class SimulationController:
    """Thread-safe facade over SimulationState for the viewport and controls."""

    def __init__(self, scenario: Scenario, config: Optional[SimulationConfig] = None):
        self.lock = threading.RLock()
        self.config = config or SimulationConfig()
        self.scenario = scenario
        self.state = SimulationState(scenario.seed, self.config)
        self.running = True  # app running
        self.playing = True  # simulation running
        self.show_trails = True
        self.time_scale = self.config.time_scale
        if scenario.time_scale is not None:
            self.set_time_scale(scenario.time_scale)
        self.skipped_ticks = 0
        logger.info("Loaded scenario %r with %d bodies", scenario.name, len(self.state))

    def set_time_scale(self, s: float) -> None:
        with self.lock:
            self.time_scale = clamp(float(s), MIN_TIME_SCALE, MAX_TIME_SCALE)

    def scale_time(self, factor: float) -> None:
        with self.lock:
            self.set_time_scale(self.time_scale * factor)

    def toggle_play(self) -> bool:
        with self.lock:
            self.playing = not self.playing
            return self.playing

    def advance(self, real_dt_seconds: float) -> bool:
        """Advance by real time scaled by the time scale, when playing."""
        with self.lock:
            if not self.playing:
                return False
            return self._tick(self.time_scale * real_dt_seconds)

    def step_once(self) -> bool:
        """Advance by exactly one time-scale second, even while paused."""
        with self.lock:
            return self._tick(self.time_scale)

    def _tick(self, dt: float) -> bool:
        advanced = self.state.tick(dt)
        if not advanced and dt > 0 and len(self.state) > 0:
            self.skipped_ticks += 1
        return advanced

    def reset(self) -> None:
        with self.lock:
            self.state.reset()
            self.skipped_ticks = 0
            logger.info("Reset scenario %r", self.scenario.name)

    def load_scenario(self, scenario: Scenario) -> None:
        with self.lock:
            self.scenario = scenario
            self.state = SimulationState(scenario.seed, self.config)
            if scenario.time_scale is not None:
                self.set_time_scale(scenario.time_scale)
            self.skipped_ticks = 0
            logger.info("Loaded scenario %r with %d bodies", scenario.name, len(self.state))

    def snapshot(self) -> List[Tuple[Body, List[Tuple[float, float]]]]:
        """Copies of every body with its trail points (oldest first), for drawing."""
        with self.lock:
            return [
                (replace(body), trail.points() if self.show_trails else [])
                for body, trail in self.state
            ]

    def stats(self) -> dict:
        with self.lock:
            bodies = self.state.bodies
            return {
                "bodies": len(bodies),
                "time_seconds": self.state.time_seconds,
                "time_scale": self.time_scale,
                "playing": self.playing,
                "energy": total_energy(bodies),
                "angular_momentum": angular_momentum(bodies),
                "arena_used": self.state.arena.high_water,
                "arena_size": self.state.arena.size,
                "skipped_ticks": self.skipped_ticks,
            }
