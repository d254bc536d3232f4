"""Top-level replay and simulation runs used by the CLI."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from robo.backtesting.data_loader import CsvStepSource, DataLoadError, StepLoader
from robo.backtesting.engine import ReplayEngine, ReplayResult
from robo.backtesting.reporter import ReplayReporter
from robo.backtesting.simulator import PlanetSimulator
from robo.config.loader import ConfigError, ConfigLoader
from robo.config.settings import PredictorSettings, SimulationSettings
from robo.core.logging import get_logger
from robo.engine.memory import MemoryCeilingError, check_ceiling
from robo.interfaces import StepSource

if TYPE_CHECKING:
    from robo.models.planet import Step

logger = get_logger(__name__)


def _load_config(config_dir: str, env: str | None) -> tuple[ConfigLoader, PredictorSettings]:
    """Load config and build predictor settings that fit the memory ceiling.

    Raises:
        ConfigError: If the config is missing or out of range.
        MemoryCeilingError: If the declared capacities exceed the ceiling.
    """
    config = ConfigLoader(config_dir=config_dir, env=env)
    config.load()
    config.validate_ranges()
    try:
        settings = PredictorSettings.from_config(config)
    except ValidationError as e:
        msg = f"Invalid predictor settings: {e}"
        raise ConfigError(msg) from e
    check_ceiling(settings.declared_bytes)
    return config, settings


def _simulation_settings(
    config: ConfigLoader, steps: int | None, seed: int | None
) -> SimulationSettings:
    """Simulation settings from config with CLI overrides, validated together.

    Raises:
        ConfigError: If any value is out of range.
    """
    try:
        settings = SimulationSettings.from_config(config)
        overrides: dict[str, int] = {}
        if steps is not None:
            overrides["steps"] = steps
        if seed is not None:
            overrides["seed"] = seed
        if overrides:
            settings = SimulationSettings.model_validate({**settings.model_dump(), **overrides})
    except ValidationError as e:
        msg = f"Invalid simulation settings: {e}"
        raise ConfigError(msg) from e
    return settings


def _replay(
    source: StepSource,
    settings: PredictorSettings,
    as_json: bool,
    report_path: str | None,
) -> ReplayResult:
    engine = ReplayEngine(settings=settings, progress_every=10_000)
    result = engine.run(source.steps())

    reporter = ReplayReporter()
    if as_json:
        print(reporter.generate_json(result))
    else:
        reporter.print_summary(result)
    if report_path:
        reporter.save_json(result, report_path)
    return result


def run_replay(
    csv_path: str,
    config_dir: str = "config",
    env: str | None = None,
    as_json: bool = False,
    report_path: str | None = None,
) -> int:
    """Replay a recorded CSV sequence through a fresh predictor.

    Returns:
        Exit code (0 = success, 1 = failure).
    """
    try:
        _, settings = _load_config(config_dir, env)
        logger.info("replay_run_start", source=csv_path)
        _replay(CsvStepSource(csv_path), settings, as_json, report_path)
    except (ConfigError, MemoryCeilingError, DataLoadError) as e:
        logger.error("replay_run_failed", error=str(e))
        print(f"Error: {e}")
        return 1
    return 0


def run_simulation(
    config_dir: str = "config",
    env: str | None = None,
    steps: int | None = None,
    seed: int | None = None,
    as_json: bool = False,
    report_path: str | None = None,
    save_steps: str | None = None,
) -> int:
    """Generate a synthetic universe and replay it.

    Args:
        config_dir: Path to config directory.
        env: Environment name.
        steps: Overrides ``simulation.steps``.
        seed: Overrides ``simulation.seed``.
        as_json: Print the JSON report instead of the console summary.
        report_path: Optional path for the JSON report.
        save_steps: Optional CSV path for the generated steps.

    Returns:
        Exit code (0 = success, 1 = failure).
    """
    try:
        config, predictor_settings = _load_config(config_dir, env)
        sim_settings = _simulation_settings(config, steps, seed)
    except (ConfigError, MemoryCeilingError) as e:
        logger.error("simulation_run_failed", error=str(e))
        print(f"Error: {e}")
        return 1

    logger.info("simulation_run_start", steps=sim_settings.steps, seed=sim_settings.seed)
    simulator = PlanetSimulator(sim_settings)
    generated = simulator.generate()
    if save_steps:
        StepLoader.write_csv(generated, Path(save_steps))

    _replay(_FixedSteps(generated), predictor_settings, as_json, report_path)
    return 0


class _FixedSteps:
    """StepSource over an already materialised list."""

    def __init__(self, steps: list[Step]) -> None:
        self._steps = steps

    def steps(self) -> list[Step]:
        return list(self._steps)
