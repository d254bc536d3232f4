"""Robo predictor: day/night prediction from planet visit history.

Combines three orders of pattern memory (per planet, per ordered pair,
per ordered triple) with a consecutive-day ceiling and the spaceship
computer's own guess. ``predict`` is a pure read of the state; ``observe``
is the only mutator and must follow ``predict`` once per step with the
true outcome.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from robo.config.settings import PredictorSettings
from robo.core.logging import get_logger
from robo.engine.memory import (
    PAIR_ENTRY_BYTES,
    SINGLE_ENTRY_BYTES,
    STATE_HEADER_BYTES,
    TRIPLE_ENTRY_BYTES,
    BoundedMemory,
    MemoryFootprint,
    check_ceiling,
)
from robo.models.planet import PairKey, SingleStats, TripleKey
from robo.models.prediction import Prediction, PredictionRule

log = get_logger(__name__)


class RoboPredictor:
    """Per-session predictor state.

    Construction fails with ``MemoryCeilingError`` when the declared layout
    (header plus every bounded memory at full capacity) exceeds 64 KiB.
    """

    def __init__(self, settings: PredictorSettings | None = None) -> None:
        self._settings = settings or PredictorSettings()
        self._singles: BoundedMemory[int, SingleStats] = BoundedMemory(
            "singles", SINGLE_ENTRY_BYTES, self._settings.single_capacity
        )
        self._pairs: BoundedMemory[PairKey, bool] = BoundedMemory(
            "pairs", PAIR_ENTRY_BYTES, self._settings.pair_capacity
        )
        self._triples: BoundedMemory[TripleKey, bool] = BoundedMemory(
            "triples", TRIPLE_ENTRY_BYTES, self._settings.triple_capacity
        )
        self._last: int | None = None
        self._second_to_last: int | None = None
        self._consecutive_days = 0

        static_bytes = self._static_bytes()
        check_ceiling(static_bytes)
        log.info(
            "predictor_init",
            static_bytes=static_bytes,
            day_limit=self._settings.consecutive_day_limit,
            bounded=[m.name for m in self._memories() if m.bounded],
        )

    # ------------------------------------------------------------------
    # Sense-predict-observe
    # ------------------------------------------------------------------

    def predict(self, next_id: int, external_guess: bool) -> bool:
        """Predict day (True) or night (False) for the next planet."""
        return self.explain(next_id, external_guess).outcome

    def explain(self, next_id: int, external_guess: bool) -> Prediction:
        """Predict and report which rule decided.

        Rules, first match wins:
            1. Two or more consecutive days → night.
            2. Triple, pair and external guess all agree → that value.
            3. Planet seen before → its day/night majority (ties → night).
            4. Otherwise → the external guess.
        """
        if self._consecutive_days >= self._settings.consecutive_day_limit:
            return Prediction(outcome=False, rule=PredictionRule.DAY_STREAK)

        triple: bool | None = None
        if self._second_to_last is not None and self._last is not None:
            triple = self._triples.get(TripleKey(self._second_to_last, self._last, next_id))

        pair: bool | None = None
        if self._last is not None:
            pair = self._pairs.get(PairKey(self._last, next_id))

        if triple is not None and pair is not None and triple == pair == external_guess:
            return Prediction(
                outcome=external_guess, rule=PredictionRule.CONSENSUS, triple=triple, pair=pair
            )

        stats = self._singles.get(next_id)
        if stats is not None:
            return Prediction(
                outcome=stats.favors_day,
                rule=PredictionRule.SINGLE_MAJORITY,
                triple=triple,
                pair=pair,
            )

        return Prediction(
            outcome=external_guess, rule=PredictionRule.FALLBACK, triple=triple, pair=pair
        )

    def observe(self, next_id: int, actual_outcome: bool) -> None:
        """Record the true outcome on ``next_id``."""
        if actual_outcome:
            self._consecutive_days += 1
        else:
            self._consecutive_days = 0

        # Pattern keys use the window as it was before this visit.
        if self._second_to_last is not None and self._last is not None:
            self._triples.upsert(
                TripleKey(self._second_to_last, self._last, next_id), actual_outcome
            )
        if self._last is not None:
            self._pairs.upsert(PairKey(self._last, next_id), actual_outcome)

        self._second_to_last = self._last
        self._last = next_id

        self._singles.upsert_with(next_id, SingleStats).record(actual_outcome)

    # ------------------------------------------------------------------
    # Read-only introspection
    # ------------------------------------------------------------------

    @property
    def settings(self) -> PredictorSettings:
        return self._settings

    @property
    def last_id(self) -> int | None:
        return self._last

    @property
    def second_to_last_id(self) -> int | None:
        return self._second_to_last

    @property
    def consecutive_days(self) -> int:
        return self._consecutive_days

    @property
    def evictions(self) -> int:
        return sum(m.evictions for m in self._memories())

    def single_stats(self, planet_id: int) -> SingleStats | None:
        """Copy of the tally for ``planet_id``, or None if never observed."""
        stats = self._singles.get(planet_id)
        return replace(stats) if stats is not None else None

    def pair_outcome(self, previous: int, next_id: int) -> bool | None:
        return self._pairs.get(PairKey(previous, next_id))

    def triple_outcome(self, second_to_last: int, last: int, next_id: int) -> bool | None:
        return self._triples.get(TripleKey(second_to_last, last, next_id))

    def sizes(self) -> dict[str, int]:
        """Entry count per memory."""
        return {m.name: len(m) for m in self._memories()}

    def footprint(self) -> MemoryFootprint:
        used = STATE_HEADER_BYTES + sum(m.used_bytes for m in self._memories())
        return MemoryFootprint(static_bytes=self._static_bytes(), used_bytes=used)

    def _static_bytes(self) -> int:
        return STATE_HEADER_BYTES + sum(m.declared_bytes for m in self._memories())

    def _memories(self) -> tuple[BoundedMemory[Any, Any], ...]:
        return (self._singles, self._pairs, self._triples)
