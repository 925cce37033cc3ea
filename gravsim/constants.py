#!/usr/bin/env python3
"""
Shared constants for Gravity Sim (SI units unless stated otherwise).

Physics, memory and rendering knobs live here so the simulation core, the
configuration layer and the viewport agree on the same values.
"""

# Physical constants
G = 6.67430e-11  # m^3 kg^-1 s^-2
SOLAR_MASS = 1.9885e30  # kg
SOLAR_RADIUS = 6.9634e8  # m
EARTH_MASS = 5.972e24  # kg
EARTH_RADIUS = 6.371e6  # m
MOON_MASS = 7.342e22  # kg
MOON_RADIUS = 1.7374e6  # m
AU = 1.495978707e11  # m
SECONDS_PER_DAY = 86400.0

# Body identifiers
INVALID_BODY_ID = -1

# Trails
TRAIL_LENGTH = 2000  # samples per body
TRAIL_RECORD_INTERVAL = 5  # ticks between samples

# Memory
DEFAULT_ARENA_BYTES = 10 * 1024 * 1024
ARENA_ALIGNMENT = 8  # bytes; one double

# Physics controls
DEFAULT_SOFTENING = 0.0  # m; 0 keeps the exact Newtonian law

# Time scale (simulated seconds per real second)
DEFAULT_TIME_SCALE = 3600.0
MIN_TIME_SCALE = 1.0
MAX_TIME_SCALE = SECONDS_PER_DAY * 365.0

# Rendering (viewport)
VIEW_WIDTH = 1200
VIEW_HEIGHT = 800
TARGET_FPS = 600
BACKGROUND_COLOR = (10, 12, 20)
HUD_PANEL_COLOR = (15, 18, 30, 220)
HUD_BORDER_COLOR = (90, 100, 120)
HUD_TEXT_COLOR = (245, 245, 245)
HUD_HINT_COLOR = (200, 200, 200)
LABEL_COLOR = (200, 200, 200)
TRAIL_ALPHA_MIN = 20
TRAIL_ALPHA_RANGE = 180
MIN_BODY_PIXELS = 2

# Camera zoom bounds (meters-per-pixel)
DEFAULT_METERS_PER_PIXEL = 1.0 / 3.0e-9
MIN_METERS_PER_PIXEL = 1.0e-2
MAX_METERS_PER_PIXEL = 1.0e14
ZOOM_STEP = 0.15

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
