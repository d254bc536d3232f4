"""Typed predictor settings built from the TOML config."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from robo.engine.memory import (
    PAIR_ENTRY_BYTES,
    SINGLE_ENTRY_BYTES,
    STATE_HEADER_BYTES,
    TRIPLE_ENTRY_BYTES,
)

if TYPE_CHECKING:
    from robo.config.loader import ConfigLoader


class PredictorSettings(BaseModel):
    """Tunables for one predictor instance.

    A capacity of 0 leaves that memory unbounded.
    """

    consecutive_day_limit: int = Field(default=2, ge=1)
    single_capacity: int = Field(default=0, ge=0)
    pair_capacity: int = Field(default=0, ge=0)
    triple_capacity: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    @property
    def declared_bytes(self) -> int:
        """Packed layout size with every bounded memory full."""
        return (
            STATE_HEADER_BYTES
            + self.single_capacity * SINGLE_ENTRY_BYTES
            + self.pair_capacity * PAIR_ENTRY_BYTES
            + self.triple_capacity * TRIPLE_ENTRY_BYTES
        )

    @classmethod
    def from_config(cls, config: ConfigLoader) -> PredictorSettings:
        return cls(
            consecutive_day_limit=config.get("predictor.consecutive_day_limit", 2),
            single_capacity=config.get("predictor.capacity.singles", 0),
            pair_capacity=config.get("predictor.capacity.pairs", 0),
            triple_capacity=config.get("predictor.capacity.triples", 0),
        )


class SimulationSettings(BaseModel):
    """Parameters of the synthetic planet universe."""

    planets: int = Field(default=32, ge=1)
    steps: int = Field(default=1000, ge=0)
    routes_per_planet: int = Field(default=3, ge=1)
    computer_accuracy: float = Field(default=0.7, ge=0.0, le=1.0)
    route_stability: float = Field(default=0.8, ge=0.0, le=1.0)
    seed: int = 42

    model_config = {"frozen": True}

    @classmethod
    def from_config(cls, config: ConfigLoader) -> SimulationSettings:
        defaults = cls()
        return cls(
            planets=config.get("simulation.planets", defaults.planets),
            steps=config.get("simulation.steps", defaults.steps),
            routes_per_planet=config.get(
                "simulation.routes_per_planet", defaults.routes_per_planet
            ),
            computer_accuracy=config.get(
                "simulation.computer_accuracy", defaults.computer_accuracy
            ),
            route_stability=config.get("simulation.route_stability", defaults.route_stability),
            seed=config.get("simulation.seed", defaults.seed),
        )
