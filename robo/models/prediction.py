"""Prediction result and the rule that produced it."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PredictionRule(str, Enum):
    DAY_STREAK = "day_streak"
    CONSENSUS = "consensus"
    SINGLE_MAJORITY = "single_majority"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class Prediction:
    """Predicted outcome plus the evidence consulted.

    ``triple`` and ``pair`` hold the recorded outcome for the matching
    pattern, or ``None`` when no record exists or the rule fired before
    the pattern lookups ran.
    """

    outcome: bool
    rule: PredictionRule
    triple: bool | None = None
    pair: bool | None = None
