"""Where: src/logwire/domain/rotation.py
What: Rotation policies deciding when a log file is closed and renamed.
Why: Keep boundary arithmetic independent from the file handler's I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from pathlib import Path
from typing import Final

from .errors import InvalidConfigError

WEEKDAYS: Final[tuple[str, ...]] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


class RollPeriod(str, Enum):
    """How often a rotating file handler starts a new file."""

    NEVER = "never"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"


@dataclass(slots=True, frozen=True)
class RotationPolicy:
    """Immutable rotation rule.

    ``weekday`` follows :meth:`datetime.weekday` (Monday is 0) and is only set
    for :attr:`RollPeriod.WEEKLY`. Weekly rotation happens at midnight at the
    start of that weekday.
    """

    period: RollPeriod
    weekday: int | None = None

    def __post_init__(self) -> None:
        if self.period is RollPeriod.WEEKLY:
            if self.weekday is None or not 0 <= self.weekday <= 6:
                raise ValueError("Weekly rotation needs a weekday between 0 and 6")
        elif self.weekday is not None:
            raise ValueError(f"{self.period.value} rotation does not take a weekday")

    @staticmethod
    def from_user_input(value: str) -> "RotationPolicy":
        """Translate a ``roll`` configuration value into a policy."""

        normalized = value.strip().lower()
        if normalized in WEEKDAYS:
            return RotationPolicy(RollPeriod.WEEKLY, WEEKDAYS.index(normalized))
        if normalized != RollPeriod.WEEKLY.value:
            for period in RollPeriod:
                if period.value == normalized:
                    return RotationPolicy(period)
        raise InvalidConfigError(f"Unknown logfile rolling policy: {value}", keys=[value])

    def describe(self) -> str:
        if self.period is RollPeriod.WEEKLY:
            assert self.weekday is not None
            return WEEKDAYS[self.weekday]
        return self.period.value

    def next_rollover(self, now: float, *, use_utc: bool = False) -> float | None:
        """Return the epoch time of the first boundary strictly after ``now``.

        Boundaries are computed on the UTC calendar when ``use_utc`` is set and
        on the local calendar otherwise. ``None`` means the file never rotates.
        """

        if self.period is RollPeriod.NEVER:
            return None

        current = _to_datetime(now, use_utc)
        if self.period is RollPeriod.HOURLY:
            boundary = current.replace(minute=0, second=0, microsecond=0) + timedelta(hours=1)
            return boundary.timestamp()

        midnight = current.replace(hour=0, minute=0, second=0, microsecond=0)
        if self.period is RollPeriod.DAILY:
            days_ahead = 1
        else:
            assert self.weekday is not None
            days_ahead = (self.weekday - current.weekday()) % 7 or 7
        # Naive local datetimes add wall-clock days, so DST shifts keep midnight.
        return (midnight + timedelta(days=days_ahead)).timestamp()

    def rotated_path(self, path: Path, opened_at: float, *, use_utc: bool = False) -> Path:
        """Name the archive for a file that was opened at ``opened_at``."""

        stamp_format = "%Y%m%d%H" if self.period is RollPeriod.HOURLY else "%Y%m%d"
        stamp = _to_datetime(opened_at, use_utc).strftime(stamp_format)
        return path.with_name(f"{path.stem}-{stamp}{path.suffix}")


def _to_datetime(timestamp: float, use_utc: bool) -> datetime:
    if use_utc:
        return datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return datetime.fromtimestamp(timestamp)


NEVER: Final[RotationPolicy] = RotationPolicy(RollPeriod.NEVER)
HOURLY: Final[RotationPolicy] = RotationPolicy(RollPeriod.HOURLY)
DAILY: Final[RotationPolicy] = RotationPolicy(RollPeriod.DAILY)


def weekly(day: str | int) -> RotationPolicy:
    """Build a weekly policy from a weekday name or a Monday-based index."""

    if isinstance(day, str):
        normalized = day.strip().lower()
        if normalized not in WEEKDAYS:
            raise ValueError(f"Unknown weekday: {day}")
        day = WEEKDAYS.index(normalized)
    return RotationPolicy(RollPeriod.WEEKLY, day)


__all__ = [
    "DAILY",
    "HOURLY",
    "NEVER",
    "WEEKDAYS",
    "RollPeriod",
    "RotationPolicy",
    "weekly",
]
