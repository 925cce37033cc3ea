#!/usr/bin/env python3
"""
Gravity Sim application entry point.

What this module does
- Parses the command line, configures logging and builds the shared
  SimulationController for the chosen scenario.
- Starts the Pygame viewport on a background thread and, unless disabled, the
  Dear PyGui control panel on the main thread.

Threading model
- PygameRenderer runs in a background thread: input, one simulation advance per
  frame, drawing.
- ControlPanel runs in the main thread via Dear PyGui. Both go through the
  controller, which holds a re-entrant lock around every simulation access.
- With --no-controls the viewport runs on the main thread alone.

Running
1) Install dependencies: `pip install -e .`
2) Run: `python gravity_sim.py --scenario solar_system_with_moons`
"""
import argparse
import logging
import sys

import dearpygui.dearpygui as dpg

from gravsim.app import SimulationController
from gravsim.config import SimulationConfig
from gravsim.controls import ControlPanel
from gravsim.errors import ScenarioError
from gravsim.logging_config import setup_logging
from gravsim.renderer import PygameRenderer
from gravsim.scenarios import BUILTIN_SCENARIOS, DEFAULT_SCENARIO, get_scenario

logger = logging.getLogger("gravsim.main")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="2D N-body gravity simulator")
    parser.add_argument(
        "--scenario", default=DEFAULT_SCENARIO,
        help=f"built-in scenario ({', '.join(sorted(BUILTIN_SCENARIOS))}) or a JSON template",
    )
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    parser.add_argument("--log-file", default=None, help="also log to this rotating file")
    parser.add_argument("--no-controls", action="store_true", help="viewport only, no control panel")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    try:
        config = SimulationConfig.from_env()
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    setup_logging(args.log_level or config.log_level, args.log_file)

    try:
        scenario = get_scenario(args.scenario)
    except ScenarioError as exc:
        logger.error("%s", exc)
        return 2

    sim = SimulationController(scenario, config)
    renderer = PygameRenderer(sim)

    if args.no_controls:
        renderer.run()
        return 0

    renderer.start()
    panel = ControlPanel(sim, renderer)

    with dpg.handler_registry():
        def key_down(sender, app_data):
            if app_data == dpg.mvKey_Spacebar:
                panel.toggle_play()
        dpg.add_key_press_handler(callback=key_down)

    try:
        dpg.start_dearpygui()
    finally:
        sim.running = False
        renderer.running = False
        renderer.join(timeout=2.0)
        dpg.destroy_context()
    return 0


if __name__ == "__main__":
    sys.exit(main())
