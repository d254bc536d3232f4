from robo.models.planet import (
    MAX_PLANET_ID,
    PairKey,
    SingleStats,
    Step,
    TimeOfDay,
    TripleKey,
)
from robo.models.prediction import Prediction, PredictionRule

__all__ = [
    "MAX_PLANET_ID",
    "PairKey",
    "Prediction",
    "PredictionRule",
    "SingleStats",
    "Step",
    "TimeOfDay",
    "TripleKey",
]
