"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path  # noqa: TCH003

import pytest

from robo.config.loader import ConfigLoader
from robo.engine.predictor import RoboPredictor
from robo.models.planet import Step

# Planet ids spread across the unsigned 64-bit range.
ALPHA = 1
BETA = 2**32 + 7
GAMMA = 2**63


@pytest.fixture()
def config_dir(tmp_path: Path) -> Path:
    """Create a temp config directory with default.toml."""
    config = tmp_path / "config"
    config.mkdir()

    default_toml = config / "default.toml"
    default_toml.write_text(
        """\
[predictor]
consecutive_day_limit = 2

[predictor.capacity]
singles = 0
pairs = 0
triples = 0

[simulation]
planets = 8
steps = 200
routes_per_planet = 2
computer_accuracy = 0.7
route_stability = 0.9
seed = 7
"""
    )
    return config


@pytest.fixture()
def config_loader(config_dir: Path) -> ConfigLoader:
    """ConfigLoader with test config."""
    loader = ConfigLoader(config_dir=config_dir, env="test")
    loader.load()
    return loader


@pytest.fixture()
def predictor() -> RoboPredictor:
    return RoboPredictor()


@pytest.fixture()
def sample_steps() -> list[Step]:
    """Short alternating route A → B → C → A ... with a noisy computer."""
    route = [ALPHA, BETA, GAMMA]
    steps = []
    for i in range(12):
        planet = route[i % 3]
        actual = planet != GAMMA
        steps.append(
            Step(planet_id=planet, computer_prediction=(i % 4 != 0) == actual, actual=actual)
        )
    return steps


@pytest.fixture()
def steps_csv(tmp_path: Path) -> Path:
    path = tmp_path / "steps.csv"
    path.write_text(
        "planet_id,computer_prediction,actual\n"
        "1,day,day\n"
        "2,night,night\n"
        "0x10,true,false\n"
        "18446744073709551615,1,0\n"
    )
    return path
