"""Protocol interfaces for predictor components.

Replay drivers code against these contracts rather than a concrete
predictor class.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from robo.engine.memory import MemoryFootprint
    from robo.models.planet import Step
    from robo.models.prediction import Prediction


@runtime_checkable
class SequencePredictor(Protocol):
    """Two-call predict/observe contract for one session."""

    def predict(self, next_id: int, external_guess: bool) -> bool: ...

    def observe(self, next_id: int, actual_outcome: bool) -> None: ...


@runtime_checkable
class ExplainingPredictor(SequencePredictor, Protocol):
    """Predictor that can report the rule behind a prediction and its footprint."""

    def explain(self, next_id: int, external_guess: bool) -> Prediction: ...

    def footprint(self) -> MemoryFootprint: ...

    @property
    def evictions(self) -> int: ...


@runtime_checkable
class StepSource(Protocol):
    """Anything that yields replay steps (CSV loader, simulator)."""

    def steps(self) -> list[Step]: ...
