"""Replay data loader — planet visit steps from CSV."""

from __future__ import annotations

import csv
from pathlib import Path

from pydantic import ValidationError

from robo.core.logging import get_logger
from robo.models.planet import Step, TimeOfDay

log = get_logger(__name__)

REQUIRED_COLUMNS = frozenset({"planet_id", "computer_prediction", "actual"})


class DataLoadError(Exception):
    """Raised when replay data loading or validation fails."""


class StepLoader:
    """Load and validate planet visit steps."""

    def load_csv(self, path: str | Path) -> list[Step]:
        """Load steps from a CSV file, preserving file order.

        Expected columns: planet_id, computer_prediction, actual.
        Outcome columns accept day/night, true/false or 1/0.

        Args:
            path: Path to the CSV file.

        Returns:
            List of Step objects in visit order.

        Raises:
            DataLoadError: If the file is missing or has no usable header.
        """
        path = Path(path)
        if not path.exists():
            msg = f"CSV file not found: {path}"
            raise DataLoadError(msg)

        steps: list[Step] = []
        with open(path, newline="") as f:
            reader = csv.DictReader(f)
            if reader.fieldnames is None:
                msg = f"CSV file has no header row: {path}"
                raise DataLoadError(msg)

            missing = REQUIRED_COLUMNS - {name.strip() for name in reader.fieldnames}
            if missing:
                msg = f"CSV missing required columns: {sorted(missing)}"
                raise DataLoadError(msg)

            for row_num, row in enumerate(reader, start=2):
                row = {k.strip(): v for k, v in row.items() if k is not None}
                try:
                    steps.append(self.parse_row(row))
                except (ValueError, KeyError, TypeError, AttributeError, ValidationError) as e:
                    log.warning("csv_row_skip", row=row_num, error=str(e))

        log.info("csv_loaded", path=str(path), steps=len(steps))
        return steps

    @staticmethod
    def parse_row(row: dict[str, str]) -> Step:
        """Build a Step from one CSV row.

        Raises:
            ValueError: On a non-integer id or unrecognised outcome.
            ValidationError: If the id is outside the unsigned 64-bit range.
        """
        return Step(
            planet_id=_parse_planet_id(row["planet_id"]),
            computer_prediction=TimeOfDay.parse(row["computer_prediction"]).is_day,
            actual=TimeOfDay.parse(row["actual"]).is_day,
        )

    @staticmethod
    def write_csv(steps: list[Step], path: str | Path) -> None:
        """Write steps in the format ``load_csv`` reads."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=["planet_id", "computer_prediction", "actual"])
            writer.writeheader()
            for step in steps:
                writer.writerow(
                    {
                        "planet_id": step.planet_id,
                        "computer_prediction": TimeOfDay.from_bool(step.computer_prediction).value,
                        "actual": TimeOfDay.from_bool(step.actual).value,
                    }
                )
        log.info("csv_written", path=str(path), steps=len(steps))


class CsvStepSource:
    """StepSource backed by a CSV file."""

    def __init__(self, path: str | Path, loader: StepLoader | None = None) -> None:
        self._path = Path(path)
        self._loader = loader or StepLoader()

    def steps(self) -> list[Step]:
        return self._loader.load_csv(self._path)


def _parse_planet_id(raw: str) -> int:
    """Decimal or 0x-prefixed hexadecimal planet id."""
    value = raw.strip()
    if value.lower().startswith("0x"):
        return int(value, 16)
    return int(value)
