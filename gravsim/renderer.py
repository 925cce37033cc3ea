#!/usr/bin/env python3
"""
Pygame viewport: steps the simulation once per frame and draws it.

Controls
- Space: pause/play, N: single step (one time-scale second), R: reset
- + / -: double / halve the time scale, F: fit camera to bodies
- Mouse wheel: zoom about the cursor, middle/right drag: pan, arrows: pan
"""
import math
import threading
import time

import pygame
from pygame import gfxdraw

from .app import SimulationController
from .camera import Camera2D
from .constants import (
    BACKGROUND_COLOR,
    HUD_BORDER_COLOR,
    HUD_HINT_COLOR,
    HUD_PANEL_COLOR,
    HUD_TEXT_COLOR,
    LABEL_COLOR,
    MIN_BODY_PIXELS,
    SAFE_COORD_LIMIT,
    SECONDS_PER_DAY,
    TARGET_FPS,
    TRAIL_ALPHA_MIN,
    TRAIL_ALPHA_RANGE,
    VIEW_HEIGHT,
    VIEW_WIDTH,
    ZOOM_STEP,
)

KEY_PAN_PIXELS_PER_SECOND = 600
PAN_BUTTONS = (2, 3)  # middle, right
ARROW_PAN = {
    pygame.K_LEFT: (1, 0),
    pygame.K_RIGHT: (-1, 0),
    pygame.K_UP: (0, 1),
    pygame.K_DOWN: (0, -1),
}


class PygameRenderer(threading.Thread):
    """
    Pygame loop: input, one simulation advance per frame, then trails, bodies and HUD.
    """

    def __init__(self, sim: SimulationController):
        super().__init__(daemon=True)
        self.sim = sim
        self.camera = Camera2D(center=(0.0, 0.0))
        self.surface = None
        self.clock = None
        self.font = None
        self.small_font = None
        self._drag_anchor = None  # last mouse position while panning
        self.running = True
        self._fit_requested = True

    def request_fit(self):
        """Ask the render thread to refit the camera on its next frame."""
        self._fit_requested = True

    def auto_frame_camera(self):
        with self.sim.lock:
            positions = [b.position for b in self.sim.state.bodies]
        self.camera.fit(positions)

    def run(self):
        pygame.init()
        pygame.display.set_caption("Gravity Sim - Viewport")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.camera.set_viewport_size(VIEW_WIDTH, VIEW_HEIGHT)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("consolas", 16)
        self.small_font = pygame.font.SysFont("consolas", 12)

        last_time = time.perf_counter()
        while self.running and self.sim.running:
            now = time.perf_counter()
            real_dt = now - last_time
            last_time = now

            if self._fit_requested:
                self._fit_requested = False
                self.auto_frame_camera()

            self.handle_events(real_dt)
            self.sim.advance(real_dt)
            self.draw()
            self.clock.tick(TARGET_FPS)

        pygame.quit()

    def _pan_with_arrows(self, real_dt):
        pressed = pygame.key.get_pressed()
        step = KEY_PAN_PIXELS_PER_SECOND * real_dt
        for key, (sx, sy) in ARROW_PAN.items():
            if pressed[key]:
                self.camera.pan_pixels(sx * step, sy * step)

    def handle_events(self, real_dt):
        self._pan_with_arrows(real_dt)
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.sim.running = False
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.camera.set_viewport_size(event.w, event.h)

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_SPACE:
                    self.sim.toggle_play()
                elif event.key == pygame.K_n:
                    self.sim.step_once()
                elif event.key == pygame.K_r:
                    self.sim.reset()
                elif event.key == pygame.K_f:
                    self.auto_frame_camera()
                elif event.key in (pygame.K_EQUALS, pygame.K_PLUS, pygame.K_KP_PLUS):
                    self.sim.scale_time(2.0)
                elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                    self.sim.scale_time(0.5)

            elif event.type == pygame.MOUSEWHEEL:
                self.camera.zoom(1.0 + event.y * ZOOM_STEP, pygame.mouse.get_pos())

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button in PAN_BUTTONS:
                self._drag_anchor = event.pos

            elif event.type == pygame.MOUSEBUTTONUP and event.button in PAN_BUTTONS:
                self._drag_anchor = None

            elif event.type == pygame.MOUSEMOTION and self._drag_anchor is not None:
                self.camera.pan_pixels(event.pos[0] - self._drag_anchor[0],
                                       event.pos[1] - self._drag_anchor[1])
                self._drag_anchor = event.pos

    def draw(self):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)

        snapshot = self.sim.snapshot()

        for body, trail in snapshot:
            self.draw_trail(surf, body.color, trail)

        for body, _ in snapshot:
            sp = _safe_point(self.camera.world_to_screen(body.position))
            if sp is None:
                continue
            vis_r = max(MIN_BODY_PIXELS, int(body.radius / self.camera.mpp))
            vis_r = min(vis_r, SAFE_COORD_LIMIT)
            gfxdraw.filled_circle(surf, sp[0], sp[1], vis_r, body.color)
            gfxdraw.aacircle(surf, sp[0], sp[1], vis_r, body.color)
            if body.name:
                img = self.small_font.render(body.name, True, LABEL_COLOR)
                surf.blit(img, (sp[0] + vis_r + 4, sp[1] - 6))

        self.draw_hud(surf)
        pygame.display.flip()

    def draw_trail(self, surf, color, trail):
        """Oldest segment faintest, newest brightest."""
        count = len(trail)
        if count < 2:
            return
        prev = self.camera.world_to_screen(trail[0])
        for j in range(1, count):
            cur = self.camera.world_to_screen(trail[j])
            a = _safe_point(prev)
            b = _safe_point(cur)
            if a is not None and b is not None and a != b:
                alpha = ((j - 1) / count * TRAIL_ALPHA_RANGE + TRAIL_ALPHA_MIN) / 255.0
                pygame.draw.line(surf, _blend(BACKGROUND_COLOR, color, alpha), a, b, 1)
            prev = cur

    def draw_hud(self, surf):
        stats = self.sim.stats()
        panel = pygame.Surface((360, 102), pygame.SRCALPHA)
        panel.fill(HUD_PANEL_COLOR)
        surf.blit(panel, (12, 12))
        pygame.draw.rect(surf, HUD_BORDER_COLOR, pygame.Rect(12, 12, 360, 102), 1)

        lines = (
            f"Bodies: {stats['bodies']}",
            f"Time: {stats['time_seconds'] / SECONDS_PER_DAY:.2f} days",
            f"Speed: {stats['time_scale']:.0f}x  [{'Playing' if stats['playing'] else 'Paused'}]",
            "Space: pause  N: step  R: reset",
        )
        for k, line in enumerate(lines):
            surf.blit(self.font.render(line, True, HUD_TEXT_COLOR), (24, 20 + 18 * k))
        hint = "+/-: speed  Wheel: zoom  Right/Middle drag: pan  F: fit"
        surf.blit(self.small_font.render(hint, True, HUD_HINT_COLOR), (24, 96))


def _blend(bg, fg, alpha):
    return tuple(int(b + (f - b) * alpha) for b, f in zip(bg, fg))


def _safe_point(pt):
    x, y = pt
    if math.isfinite(x) and math.isfinite(y):
        x, y = int(x), int(y)
        if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
            return (x, y)
    return None
