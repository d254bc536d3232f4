"""Replay engine — drives a predictor through a recorded visit sequence.

For each step the predictor sees only the planet id and the computer's
guess; the true outcome is revealed through ``observe`` after the
prediction is scored (no lookahead).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from robo.config.settings import PredictorSettings
from robo.core.logging import get_logger
from robo.engine.predictor import RoboPredictor
from robo.models.prediction import PredictionRule

if TYPE_CHECKING:
    from robo.interfaces import ExplainingPredictor
    from robo.models.planet import Step

log = get_logger(__name__)


class RuleStats(BaseModel):
    """How often a rule decided and how often it was right."""

    fired: int = 0
    correct: int = 0

    @property
    def accuracy(self) -> float:
        return self.correct / self.fired if self.fired else 0.0


class ReplayResult(BaseModel):
    """Container for replay output."""

    steps: int = 0
    correct: int = 0
    computer_correct: int = 0
    rules: dict[str, RuleStats] = Field(default_factory=dict)
    static_bytes: int = 0
    used_bytes: int = 0
    evictions: int = 0

    @property
    def accuracy(self) -> float:
        return self.correct / self.steps if self.steps else 0.0

    @property
    def computer_accuracy(self) -> float:
        return self.computer_correct / self.steps if self.steps else 0.0

    @property
    def edge(self) -> float:
        """Accuracy gained over trusting the computer blindly."""
        return self.accuracy - self.computer_accuracy


class ReplayEngine:
    """Run fresh predictor sessions over step sequences."""

    def __init__(
        self,
        settings: PredictorSettings | None = None,
        predictor_factory: Callable[[], ExplainingPredictor] | None = None,
        progress_every: int = 0,
    ) -> None:
        self._settings = settings or PredictorSettings()
        self._factory = predictor_factory or (lambda: RoboPredictor(self._settings))
        self._progress_every = progress_every

    def run(self, steps: Iterable[Step]) -> ReplayResult:
        """Replay ``steps`` through a new predictor session.

        Args:
            steps: Visit steps in order.

        Returns:
            ReplayResult with accuracy, computer baseline and per-rule stats.
        """
        predictor = self._factory()
        rules = {rule.value: RuleStats() for rule in PredictionRule}
        total = correct = computer_correct = 0

        log.info("replay_start")
        for step in steps:
            prediction = predictor.explain(step.planet_id, step.computer_prediction)
            predictor.observe(step.planet_id, step.actual)

            total += 1
            hit = prediction.outcome == step.actual
            correct += hit
            computer_correct += step.computer_prediction == step.actual
            stats = rules[prediction.rule.value]
            stats.fired += 1
            stats.correct += hit

            if self._progress_every and total % self._progress_every == 0:
                log.info("replay_progress", steps=total, correct=correct)

        if total == 0:
            log.warning("replay_empty", reason="no steps")

        footprint = predictor.footprint()
        result = ReplayResult(
            steps=total,
            correct=correct,
            computer_correct=computer_correct,
            rules=rules,
            static_bytes=footprint.static_bytes,
            used_bytes=footprint.used_bytes,
            evictions=predictor.evictions,
        )
        log.info(
            "replay_complete",
            steps=total,
            accuracy=round(result.accuracy, 4),
            computer_accuracy=round(result.computer_accuracy, 4),
            used_bytes=footprint.used_bytes,
        )
        return result
