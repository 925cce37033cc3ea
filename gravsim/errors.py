#!/usr/bin/env python3
"""
Exception types raised by Gravity Sim.

Runtime conditions the frame loop must survive (invalid parent ids, scratch
exhaustion, degenerate time steps) are reported through return values instead.
"""


class GravSimError(Exception):
    """Base class for Gravity Sim errors."""


class ScenarioError(GravSimError, ValueError):
    """A scenario template is missing, unreadable or malformed."""
