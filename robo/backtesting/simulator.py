"""Synthetic planet universe for replaying the predictor.

Each planet has a day bias and a few outgoing routes. A route carries a
fixed outcome that holds with probability ``route_stability``; otherwise
the outcome is drawn from the destination's bias. The spaceship computer
reports the true outcome with probability ``computer_accuracy``.
"""

from __future__ import annotations

import random

from robo.config.settings import SimulationSettings
from robo.core.logging import get_logger
from robo.models.planet import PairKey, Step

log = get_logger(__name__)


class PlanetSimulator:
    """Deterministic (seeded) generator of planet visit steps."""

    def __init__(self, settings: SimulationSettings | None = None) -> None:
        self._settings = settings or SimulationSettings()
        self._rng = random.Random(self._settings.seed)

        self._planet_ids: list[int] = []
        seen: set[int] = set()
        while len(self._planet_ids) < self._settings.planets:
            planet_id = self._rng.getrandbits(64)
            if planet_id not in seen:
                seen.add(planet_id)
                self._planet_ids.append(planet_id)

        self._day_bias: dict[int, float] = {p: self._rng.random() for p in self._planet_ids}
        self._routes: dict[int, list[int]] = {}
        self._route_outcome: dict[PairKey, bool] = {}
        fan_out = min(self._settings.routes_per_planet, len(self._planet_ids))
        for planet in self._planet_ids:
            destinations = self._rng.sample(self._planet_ids, fan_out)
            self._routes[planet] = destinations
            for dest in destinations:
                self._route_outcome[PairKey(planet, dest)] = (
                    self._rng.random() < self._day_bias[dest]
                )

    @property
    def planet_ids(self) -> list[int]:
        return list(self._planet_ids)

    def generate(self, steps: int | None = None) -> list[Step]:
        """Walk the route graph for ``steps`` visits.

        Args:
            steps: Number of visits; defaults to the configured count.

        Returns:
            Steps in visit order.
        """
        count = self._settings.steps if steps is None else steps
        current = self._rng.choice(self._planet_ids)
        result: list[Step] = []
        for _ in range(count):
            nxt = self._rng.choice(self._routes[current])
            if self._rng.random() < self._settings.route_stability:
                actual = self._route_outcome[PairKey(current, nxt)]
            else:
                actual = self._rng.random() < self._day_bias[nxt]
            if self._rng.random() < self._settings.computer_accuracy:
                guess = actual
            else:
                guess = not actual
            result.append(Step(planet_id=nxt, computer_prediction=guess, actual=actual))
            current = nxt

        log.info(
            "simulation_generated",
            steps=len(result),
            planets=len(self._planet_ids),
            seed=self._settings.seed,
        )
        return result

    def steps(self) -> list[Step]:
        return self.generate()
