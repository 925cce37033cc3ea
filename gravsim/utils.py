#!/usr/bin/env python3
"""
General utilities for Gravity Sim.
"""
from typing import Optional


def try_float(val) -> Optional[float]:
    """float(val), or None when val does not parse as a number."""
    try:
        result = float(val)
    except (TypeError, ValueError):
        return None
    if result != result:  # NaN
        return None
    return result
