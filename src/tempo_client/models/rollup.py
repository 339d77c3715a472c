"""
Rollup and interpolation parameters.

These only shape request parameters. Periods go over the wire as ISO 8601
durations (PT1H, PT1M, P1D).
"""
# [CTX:PBI-1:1-6:MODELS]

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any


class Fold(Enum):
    """Aggregation functions available for rollups."""
    SUM = "sum"
    MULT = "mult"
    MAX = "max"
    MIN = "min"
    MEAN = "mean"
    COUNT = "count"
    STDDEV = "stddev"
    SS = "ss"
    RANGE = "range"
    FIRST = "first"
    LAST = "last"


class InterpolationFunction(Enum):
    """Interpolation functions; ZOH is zero-order hold."""
    LINEAR = "linear"
    ZOH = "zoh"


def format_period(period: timedelta) -> str:
    """
    Format a timedelta as an ISO 8601 duration.

    >>> format_period(timedelta(hours=1))
    'PT1H'
    >>> format_period(timedelta(days=1, minutes=30))
    'P1DT30M'
    """
    if period < timedelta(0):
        raise ValueError(f"Period must not be negative: {period}")

    days = period.days
    hours, rest = divmod(period.seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    micros = period.microseconds

    date_part = f"{days}D" if days else ""
    time_part = ""
    if hours:
        time_part += f"{hours}H"
    if minutes:
        time_part += f"{minutes}M"
    if seconds or micros:
        if micros:
            time_part += f"{seconds}.{micros:06d}".rstrip("0") + "S"
        else:
            time_part += f"{seconds}S"

    if not date_part and not time_part:
        return "PT0S"
    return "P" + date_part + ("T" + time_part if time_part else "")


@dataclass
class Rollup:
    """A single-fold rollup."""
    period: timedelta
    fold: Fold

    def to_params(self) -> dict[str, Any]:
        return {
            "rollup.period": format_period(self.period),
            "rollup.fold": self.fold.value,
        }


@dataclass
class MultiRollup:
    """A rollup computing several folds per period."""
    period: timedelta
    folds: list[Fold] = field(default_factory=list)

    def __post_init__(self):
        if not self.folds:
            raise ValueError("MultiRollup needs at least one fold")

    @property
    def fold_names(self) -> list[str]:
        return [fold.value for fold in self.folds]

    def to_params(self) -> dict[str, Any]:
        return {
            "rollup.period": format_period(self.period),
            "rollup.fold": self.fold_names,
        }


@dataclass
class Interpolation:
    """Interpolation applied before rollup."""
    period: timedelta
    function: InterpolationFunction

    def to_params(self) -> dict[str, Any]:
        return {
            "interpolation.period": format_period(self.period),
            "interpolation.function": self.function.value,
        }
