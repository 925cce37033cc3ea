#!/usr/bin/env python3
"""
Dear PyGui control panel: scenario selection, playback controls and readouts.

Runs on the main thread. All simulation access goes through the
SimulationController, which serializes it with the Pygame thread.
"""
import logging

import dearpygui.dearpygui as dpg

from .app import SimulationController
from .constants import MAX_TIME_SCALE, MIN_TIME_SCALE, SECONDS_PER_DAY
from .errors import ScenarioError
from .renderer import PygameRenderer
from .scenarios import BUILTIN_SCENARIOS, get_scenario, list_templates
from .utils import try_float

logger = logging.getLogger(__name__)

SYNC_EVERY_FRAMES = 6


class ControlPanel:
    """
    Controls window. Readouts refresh roughly ten times per second from a
    self-rescheduling frame callback.
    """

    def __init__(self, sim: SimulationController, renderer: PygameRenderer):
        self.sim = sim
        self.renderer = renderer
        self._scenario_map = {name: name for name in BUILTIN_SCENARIOS}
        for fn, display in list_templates():
            self._scenario_map[display] = fn

        self._build_ui()
        self._schedule_sync()

    def _schedule_sync(self):
        dpg.set_frame_callback(dpg.get_frame_count() + SYNC_EVERY_FRAMES, self._sync_ui_with_sim)

    # -----------------------
    # UI Construction
    # -----------------------

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title="Gravity Sim - Controls", width=440, height=620)

        with dpg.window(label="Controls", width=420, height=600, pos=(10, 10), tag="main_window"):
            with dpg.group(horizontal=True):
                dpg.add_text("Scenario:")
                dpg.add_combo(list(self._scenario_map.keys()),
                              default_value=self.sim.scenario.name,
                              width=220,
                              tag="scenario_combo")
                dpg.add_button(label="Load", callback=lambda: self.load_scenario(dpg.get_value("scenario_combo")))

            dpg.add_separator()

            with dpg.group(horizontal=True):
                dpg.add_button(label="Play/Pause", callback=self.toggle_play)
                dpg.add_button(label="Step", callback=self._step_once)
                dpg.add_button(label="Reset", callback=self._reset)
                dpg.add_button(label="Fit Camera", callback=self.renderer.request_fit)

            with dpg.group(horizontal=True):
                dpg.add_text("Speed (sim s / real s):")
                dpg.add_input_text(default_value=f"{self.sim.time_scale:.0f}", width=120,
                                   on_enter=True, callback=self._on_time_scale, tag="time_scale_input")
            with dpg.group(horizontal=True):
                dpg.add_button(label="x0.5", callback=lambda: self.sim.scale_time(0.5))
                dpg.add_button(label="x2", callback=lambda: self.sim.scale_time(2.0))
                dpg.add_checkbox(label="Show trails", default_value=self.sim.show_trails,
                                 callback=self._toggle_trails)

            dpg.add_separator()
            dpg.add_text("", tag="status_text")
            dpg.add_text("", tag="energy_text")
            dpg.add_text("", tag="arena_text")
            dpg.add_separator()
            dpg.add_text("Bodies")
            dpg.add_listbox([], tag="body_list", num_items=12, width=400)

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    # -----------------------
    # Callbacks
    # -----------------------

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value("status_text", msg)
        dpg.configure_item("status_text", color=color)

    def toggle_play(self):
        playing = self.sim.toggle_play()
        self._set_status("Playing" if playing else "Paused")

    def _step_once(self):
        if not self.sim.step_once():
            self._set_status("Step skipped (nothing to advance or scratch memory exhausted)",
                             color=(255, 180, 120))

    def _reset(self):
        self.sim.reset()
        self.renderer.request_fit()
        self._set_status("Reset")

    def _toggle_trails(self, sender, value, user_data=None):
        with self.sim.lock:
            self.sim.show_trails = bool(value)

    def _on_time_scale(self, sender, app_data, user_data=None):
        val = try_float(app_data)
        if val is None or not MIN_TIME_SCALE <= val <= MAX_TIME_SCALE:
            self._set_status(f"Speed must be a number in [{MIN_TIME_SCALE:.0f}, {MAX_TIME_SCALE:.0f}]",
                             color=(255, 120, 120))
            return
        self.sim.set_time_scale(val)

    def load_scenario(self, display_name: str):
        key = self._scenario_map.get(display_name, display_name)
        try:
            scenario = get_scenario(key)
        except ScenarioError as exc:
            logger.error("Cannot load scenario %r: %s", display_name, exc)
            self._set_status(str(exc), color=(255, 120, 120))
            return
        self.sim.load_scenario(scenario)
        self.renderer.request_fit()
        self._set_status(f"Loaded {scenario.name}")

    def _sync_ui_with_sim(self):
        stats = self.sim.stats()
        days = stats["time_seconds"] / SECONDS_PER_DAY
        dpg.set_value("energy_text",
                      f"t = {days:.2f} d   E = {stats['energy']:.4e} J   L = {stats['angular_momentum']:.4e}")
        dpg.set_value("arena_text",
                      f"Arena: {stats['arena_used'] / 1024:.0f} / {stats['arena_size'] / 1024:.0f} KiB"
                      f"   skipped ticks: {stats['skipped_ticks']}")
        if not dpg.is_item_focused("time_scale_input"):
            dpg.set_value("time_scale_input", f"{stats['time_scale']:.0f}")

        with self.sim.lock:
            rows = [
                f"{i:2d} {b.name or '?':<10} |v| = {b.speed / 1000.0:8.3f} km/s"
                for i, b in enumerate(self.sim.state.bodies)
            ]
        dpg.configure_item("body_list", items=rows)
        self._schedule_sync()
