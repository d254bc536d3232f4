"""Tests for PlanetSimulator."""

from __future__ import annotations

from robo.backtesting.simulator import PlanetSimulator
from robo.config.settings import SimulationSettings
from robo.models.planet import MAX_PLANET_ID


class TestPlanetSimulator:
    def test_same_seed_same_steps(self) -> None:
        settings = SimulationSettings(steps=300, seed=11)
        assert PlanetSimulator(settings).generate() == PlanetSimulator(settings).generate()

    def test_different_seed_differs(self) -> None:
        first = PlanetSimulator(SimulationSettings(steps=300, seed=1)).generate()
        second = PlanetSimulator(SimulationSettings(steps=300, seed=2)).generate()
        assert first != second

    def test_step_count_override(self) -> None:
        simulator = PlanetSimulator(SimulationSettings(steps=50))
        assert len(simulator.generate()) == 50
        assert len(simulator.generate(steps=7)) == 7
        assert simulator.generate(steps=0) == []

    def test_planets_are_distinct_64_bit_ids(self) -> None:
        simulator = PlanetSimulator(SimulationSettings(planets=40))
        ids = simulator.planet_ids
        assert len(ids) == 40
        assert len(set(ids)) == 40
        assert all(0 <= p <= MAX_PLANET_ID for p in ids)

    def test_visits_only_known_planets(self) -> None:
        simulator = PlanetSimulator(SimulationSettings(planets=5, steps=200))
        known = set(simulator.planet_ids)
        assert {s.planet_id for s in simulator.generate()} <= known

    def test_perfect_computer(self) -> None:
        steps = PlanetSimulator(SimulationSettings(computer_accuracy=1.0, steps=200)).generate()
        assert all(s.computer_prediction == s.actual for s in steps)

    def test_always_wrong_computer(self) -> None:
        steps = PlanetSimulator(SimulationSettings(computer_accuracy=0.0, steps=200)).generate()
        assert all(s.computer_prediction != s.actual for s in steps)

    def test_stable_routes_are_consistent(self) -> None:
        settings = SimulationSettings(planets=6, steps=500, route_stability=1.0)
        steps = PlanetSimulator(settings).generate()
        seen: dict[tuple[int, int], bool] = {}
        for prev, step in zip(steps, steps[1:]):
            key = (prev.planet_id, step.planet_id)
            assert seen.setdefault(key, step.actual) == step.actual

    def test_single_planet_universe(self) -> None:
        simulator = PlanetSimulator(SimulationSettings(planets=1, steps=10, routes_per_planet=3))
        steps = simulator.generate()
        assert {s.planet_id for s in steps} == set(simulator.planet_ids)
