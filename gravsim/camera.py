#!/usr/bin/env python3
"""
World-to-screen mapping for the viewport.

World coordinates are meters; world y maps straight onto screen y with no flip.
"""
from typing import Iterable, Optional, Tuple

from .constants import (
    DEFAULT_METERS_PER_PIXEL,
    MAX_METERS_PER_PIXEL,
    MIN_METERS_PER_PIXEL,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from .vector_utils import Vec2, clamp, vec_add, vec_sub

ZOOM_FACTOR_LIMITS = (0.05, 20.0)


class Camera2D:
    """
    Pan/zoom camera. `center` is the world point at the middle of the
    viewport; `mpp` is meters per pixel, so smaller means zoomed in.
    """

    def __init__(self, center: Vec2 = (0.0, 0.0), meters_per_pixel: float = DEFAULT_METERS_PER_PIXEL):
        self.center = [float(center[0]), float(center[1])]
        self.mpp = meters_per_pixel
        self.viewport_size = (VIEW_WIDTH, VIEW_HEIGHT)

    def set_viewport_size(self, width: int, height: int) -> None:
        self.viewport_size = (width, height)

    def _half_viewport(self) -> Vec2:
        return (self.viewport_size[0] / 2, self.viewport_size[1] / 2)

    def world_to_screen(self, pos: Vec2) -> Vec2:
        """Screen position in (unrounded) pixels."""
        rel = vec_sub(pos, self.center)
        return vec_add((rel[0] / self.mpp, rel[1] / self.mpp), self._half_viewport())

    def screen_to_world(self, screen: Tuple[int, int]) -> Vec2:
        offset = vec_sub(screen, self._half_viewport())
        return vec_add((offset[0] * self.mpp, offset[1] * self.mpp), self.center)

    def zoom(self, factor: float, pivot_screen: Optional[Tuple[int, int]] = None) -> None:
        """Zoom in by `factor` (>1) or out (<1), keeping the world point under the pivot fixed."""
        factor = clamp(factor, *ZOOM_FACTOR_LIMITS)
        anchor = self.screen_to_world(pivot_screen) if pivot_screen is not None else None
        self.mpp = clamp(self.mpp / factor, MIN_METERS_PER_PIXEL, MAX_METERS_PER_PIXEL)
        if anchor is not None:
            drift = vec_sub(anchor, self.screen_to_world(pivot_screen))
            self.center = list(vec_add(self.center, drift))

    def pan_pixels(self, dx_pixels: float, dy_pixels: float) -> None:
        """Move the view so the world follows a drag of (dx, dy) pixels."""
        self.center = list(vec_sub(self.center, (dx_pixels * self.mpp, dy_pixels * self.mpp)))

    def fit(self, points: Iterable[Vec2], margin: float = 1.3) -> None:
        """Center on `points` and zoom so they all fit with some margin."""
        pts = list(points)
        if not pts:
            self.center = [0.0, 0.0]
            self.mpp = DEFAULT_METERS_PER_PIXEL
            return
        xs = [p[0] for p in pts]
        ys = [p[1] for p in pts]
        span_x = (max(xs) - min(xs)) * margin + 1.0
        span_y = (max(ys) - min(ys)) * margin + 1.0
        width, height = self.viewport_size
        self.center = [(min(xs) + max(xs)) / 2, (min(ys) + max(ys)) / 2]
        self.mpp = clamp(
            max(span_x / max(width, 1), span_y / max(height, 1)),
            MIN_METERS_PER_PIXEL,
            MAX_METERS_PER_PIXEL,
        )
