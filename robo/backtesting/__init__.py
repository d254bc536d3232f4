from robo.backtesting.data_loader import CsvStepSource, DataLoadError, StepLoader
from robo.backtesting.engine import ReplayEngine, ReplayResult
from robo.backtesting.reporter import ReplayReporter
from robo.backtesting.simulator import PlanetSimulator

__all__ = [
    "CsvStepSource",
    "DataLoadError",
    "PlanetSimulator",
    "ReplayEngine",
    "ReplayReporter",
    "ReplayResult",
    "StepLoader",
]
