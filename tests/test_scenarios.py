"""Tests for built-in scenarios and JSON templates."""
import json
import math

import pytest

from gravsim.config import SimulationConfig
from gravsim.constants import G, SOLAR_MASS
from gravsim.errors import ScenarioError
from gravsim.scenarios import (
    BUILTIN_SCENARIOS,
    MOONS,
    PLANETS,
    get_scenario,
    list_templates,
    load_template,
)
from gravsim.simulation import SimulationState

CONFIG = SimulationConfig(arena_bytes=1024 * 1024, trail_length=32)


def build(scenario):
    return SimulationState(scenario.seed, CONFIG)


def write_template(tmp_path, data, name="scene.json"):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestBuiltins:

    def test_inner_solar_system_matches_circular_orbits(self):
        sim = build(get_scenario("inner_solar_system"))
        assert [b.name for b in sim.bodies] == ["Sun", "Earth", "Venus", "Mars"]
        for body in sim.bodies[1:]:
            assert body.y == 0.0
            assert body.vx == pytest.approx(0.0, abs=1e-9)
            assert body.vy == pytest.approx(math.sqrt(G * SOLAR_MASS / body.x))

    def test_solar_system_with_moons(self):
        sim = build(get_scenario("solar_system_with_moons"))
        assert len(sim) == 1 + len(PLANETS) + len(MOONS)
        assert len(sim.bodies) == len(sim.trails)

        earth = sim.body(sim.find("Earth"))
        moon = sim.body(sim.find("Moon"))
        assert moon.x - earth.x == pytest.approx(3.633e8)
        assert moon.y - earth.y == pytest.approx(0.0, abs=1e-3)

        mars = sim.body(sim.find("Mars"))
        phobos = sim.body(sim.find("Phobos"))
        assert math.hypot(phobos.x - mars.x, phobos.y - mars.y) == pytest.approx(9.2345e6)

    def test_binary_star_has_zero_net_momentum_for_stars(self):
        sim = build(get_scenario("binary_star"))
        a, b = sim.bodies[0], sim.bodies[1]
        assert a.mass * a.vy + b.mass * b.vy == pytest.approx(0.0, abs=1e-6)

    def test_empty(self):
        assert len(build(get_scenario("empty"))) == 0

    @pytest.mark.parametrize("name", sorted(BUILTIN_SCENARIOS))
    def test_every_builtin_survives_reset_and_ticks(self, name):
        sim = build(get_scenario(name))
        count = len(sim)
        for _ in range(6):
            sim.tick(3600.0)
        sim.reset()
        assert len(sim) == count
        assert sim.time_seconds == 0.0

    def test_unknown_scenario(self):
        with pytest.raises(ScenarioError):
            get_scenario("andromeda")


class TestTemplates:

    def test_bundled_templates_listed_and_loadable(self):
        templates = dict(list_templates())
        assert "jupiter_system.json" in templates
        scenario = get_scenario("jupiter_system.json")
        assert scenario.name == templates["jupiter_system.json"]
        assert scenario.time_scale == 7200.0
        sim = build(scenario)
        assert [b.name for b in sim.bodies] == ["Jupiter", "Io", "Europa", "Ganymede", "Callisto"]

    def test_positions_and_orbits(self, tmp_path):
        path = write_template(tmp_path, {
            "name": "Custom",
            "bodies": [
                {"name": "Star", "mass": 2.0e30, "radius": 7.0e8, "color": [255, 300, -4],
                 "position": [1.0e9, 0.0], "velocity": [0.0, 10.0]},
                {"name": "Planet", "mass": 1.0e24, "radius": 1.0e6,
                 "orbit": {"parent": "Star", "type": "circular", "radius": 1.0e11, "angle_deg": 90}},
                {"name": "Comet", "mass": 1.0e14,
                 "orbit": {"parent": "Star", "type": "elliptical", "periapsis": 5.0e10, "apoapsis": 5.0e12}},
            ],
        })
        scenario = load_template(path)
        assert scenario.name == "Custom"
        assert scenario.time_scale is None
        sim = build(scenario)
        star, planet, comet = sim.bodies
        assert star.color == (255, 255, 0)
        assert (star.x, star.vy) == (1.0e9, 10.0)
        assert planet.x == pytest.approx(1.0e9, abs=1.0)
        assert planet.y == pytest.approx(1.0e11)
        assert comet.x == pytest.approx(1.0e9 + 5.0e10)
        assert comet.color == (200, 200, 255)

    @pytest.mark.parametrize("data", [
        [],
        {"name": "no bodies"},
        {"bodies": [{"name": "A"}]},
        {"bodies": [{"name": "A", "mass": "heavy"}]},
        {"bodies": [{"name": "A", "mass": 1.0, "color": "red"}]},
        {"bodies": [{"name": "A", "mass": 1.0, "orbit": {"parent": "B", "radius": 1.0}},
                    {"name": "B", "mass": 1.0}]},
        {"bodies": [{"name": "A", "mass": 1.0},
                    {"name": "B", "mass": 1.0, "orbit": {"parent": "A", "type": "hyperbolic"}}]},
        {"bodies": [{"name": "A", "mass": 1.0},
                    {"name": "B", "mass": 1.0, "orbit": {"parent": "A", "type": "circular"}}]},
        {"bodies": [{"name": "A", "mass": 1.0},
                    {"name": "B", "mass": 1.0, "orbit": {"parent": "A", "type": "elliptical",
                                                          "periapsis": 2.0, "apoapsis": 1.0}}]},
        {"bodies": [{"name": "A", "mass": 1.0},
                    {"name": "B", "mass": 1.0, "orbit": {"parent": "A", "radius": -5.0}}]},
        {"time_scale": "fast", "bodies": [{"name": "A", "mass": 1.0}]},
        {"time_scale": -60.0, "bodies": [{"name": "A", "mass": 1.0}]},
        {"bodies": [{"name": "A", "mass": 1.0}, {"name": "A", "mass": 2.0}]},
        {"bodies": [{"name": "A", "mass": float("inf")}]},
        {"bodies": [{"name": "A", "mass": 1.0, "position": ["nan", 0.0]}]},
        {"bodies": [{"name": "A", "mass": 1.0},
                    {"name": "B", "mass": 1.0, "orbit": {"parent": "A", "radius": "nan"}}]},
        {"bodies": [{"name": "A", "mass": 1.0},
                    {"name": "B", "mass": 1.0, "orbit": {"parent": "A", "type": "elliptical",
                                                          "periapsis": float("nan"), "apoapsis": 1.0}}]},
    ])
    def test_malformed_templates_rejected(self, tmp_path, data):
        with pytest.raises(ScenarioError):
            load_template(write_template(tmp_path, data))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ScenarioError):
            load_template(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ScenarioError):
            load_template(str(tmp_path / "nope.json"))

    def test_scenario_error_is_value_error(self):
        assert issubclass(ScenarioError, ValueError)
