"""Planet-level models — identifiers, outcomes, pattern keys and replay steps."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, field_validator

MAX_PLANET_ID = 2**64 - 1


class TimeOfDay(str, Enum):
    DAY = "day"
    NIGHT = "night"

    @property
    def is_day(self) -> bool:
        return self is TimeOfDay.DAY

    @classmethod
    def from_bool(cls, outcome: bool) -> TimeOfDay:
        return cls.DAY if outcome else cls.NIGHT

    @classmethod
    def parse(cls, raw: str) -> TimeOfDay:
        """Parse a textual outcome.

        Accepts ``day``/``night``, ``true``/``false`` and ``1``/``0``
        (case-insensitive, surrounding whitespace ignored).

        Raises:
            ValueError: If the value is not a recognised outcome.
        """
        value = raw.strip().lower()
        if value in ("day", "true", "1"):
            return cls.DAY
        if value in ("night", "false", "0"):
            return cls.NIGHT
        msg = f"Unrecognised time of day: {raw!r}"
        raise ValueError(msg)


@dataclass(frozen=True)
class PairKey:
    """Ordered transition previous → next."""

    previous: int
    next: int


@dataclass(frozen=True)
class TripleKey:
    """Ordered transition second_to_last → last → next."""

    second_to_last: int
    last: int
    next: int


@dataclass
class SingleStats:
    """Day/night tally for one planet.

    Counts only grow while the entry is resident; when a capacity-bounded
    singles memory evicts it, the planet starts again from zero.
    """

    day_count: int = 0
    night_count: int = 0

    def record(self, outcome: bool) -> None:
        if outcome:
            self.day_count += 1
        else:
            self.night_count += 1

    @property
    def favors_day(self) -> bool:
        # Strict: a tie resolves to night.
        return self.day_count > self.night_count

    @property
    def total(self) -> int:
        return self.day_count + self.night_count


class Step(BaseModel):
    """One sense-predict-observe step of a replay."""

    planet_id: int
    computer_prediction: bool
    actual: bool

    @field_validator("planet_id")
    @classmethod
    def unsigned_64_bit(cls, value: int) -> int:
        if not 0 <= value <= MAX_PLANET_ID:
            msg = f"planet_id must fit in an unsigned 64-bit integer, got {value}"
            raise ValueError(msg)
        return value

    model_config = {"frozen": True}
