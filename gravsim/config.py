#!/usr/bin/env python3
"""
Runtime configuration for Gravity Sim.

Defaults come from constants.py; each field can be overridden through a
GRAVSIM_* environment variable (see SimulationConfig.from_env).
"""
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .constants import (
    DEFAULT_ARENA_BYTES,
    DEFAULT_SOFTENING,
    DEFAULT_TIME_SCALE,
    MAX_TIME_SCALE,
    MIN_TIME_SCALE,
    TRAIL_LENGTH,
    TRAIL_RECORD_INTERVAL,
)

ENV_PREFIX = "GRAVSIM_"


@dataclass
class SimulationConfig:
    """
    Fields:
    - arena_bytes: Size of the simulation arena (trail storage plus per-tick scratch)
    - trail_length: Samples kept per body trail
    - trail_record_interval: Ticks between trail samples
    - softening: Plummer softening length in meters (0 disables it)
    - time_scale: Simulated seconds per real second, used by the viewport
    - log_level: Name of the logging level for the gravsim logger
    """
    arena_bytes: int = DEFAULT_ARENA_BYTES
    trail_length: int = TRAIL_LENGTH
    trail_record_interval: int = TRAIL_RECORD_INTERVAL
    softening: float = DEFAULT_SOFTENING
    time_scale: float = DEFAULT_TIME_SCALE
    log_level: str = "INFO"

    def validate(self) -> "SimulationConfig":
        if self.arena_bytes <= 0:
            raise ValueError(f"arena_bytes must be > 0, got {self.arena_bytes}")
        if self.trail_length < 0:
            raise ValueError(f"trail_length must be >= 0, got {self.trail_length}")
        if self.trail_record_interval <= 0:
            raise ValueError(
                f"trail_record_interval must be > 0, got {self.trail_record_interval}"
            )
        if self.softening < 0:
            raise ValueError(f"softening must be >= 0, got {self.softening}")
        if not MIN_TIME_SCALE <= self.time_scale <= MAX_TIME_SCALE:
            raise ValueError(
                f"time_scale must be within [{MIN_TIME_SCALE}, {MAX_TIME_SCALE}], got {self.time_scale}"
            )
        return self

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SimulationConfig":
        """Build a config from GRAVSIM_* variables, falling back to the defaults."""
        env = os.environ if environ is None else environ

        def get(key: str, default):
            return env.get(ENV_PREFIX + key, default)

        try:
            config = cls(
                arena_bytes=int(get("ARENA_BYTES", DEFAULT_ARENA_BYTES)),
                trail_length=int(get("TRAIL_LENGTH", TRAIL_LENGTH)),
                trail_record_interval=int(get("TRAIL_INTERVAL", TRAIL_RECORD_INTERVAL)),
                softening=float(get("SOFTENING", DEFAULT_SOFTENING)),
                time_scale=float(get("TIME_SCALE", DEFAULT_TIME_SCALE)),
                log_level=str(get("LOG_LEVEL", "INFO")).upper(),
            )
        except ValueError as exc:
            raise ValueError(f"invalid {ENV_PREFIX}* environment setting: {exc}") from exc
        return config.validate()
