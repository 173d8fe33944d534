"""
Shared types for temporal functions.

* :class:`TemporalOpType` — closed set of instant-value operators.
* :class:`TimeSpec` — the evaluation range and step of a query.
* :class:`UnknownOperatorKind` / :class:`InvalidArgument` — construction-time
  failures.  Evaluation itself never raises for sparse input.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import pandas as pd


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class UnknownOperatorKind(ValueError):
    """Raised when an operator is requested with an unrecognised type token."""

    def __init__(self, op_type: object) -> None:
        self.op_type = op_type
        super().__init__(f"unknown rate type: {op_type}")


class InvalidArgument(ValueError):
    """Raised when query arguments for an operator cannot be used."""


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class TemporalOpType(str, Enum):
    """Instant-value operators over the last two samples of a window."""

    # Per-second instant rate of increase; counter semantics.
    IRATE = "irate"
    # Difference between the last two samples; gauge semantics.
    IDELTA = "idelta"

    @property
    def is_rate(self) -> bool:
        return self is TemporalOpType.IRATE


# ---------------------------------------------------------------------------
# TimeSpec
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TimeSpec:
    """Evaluation bounds of a query.

    Parameters
    ----------
    start, end : pd.Timestamp
        First and last evaluation timestamps (inclusive).
    step : pd.Timedelta
        Uniform distance between adjacent evaluation timestamps.  Must be
        strictly positive.

    Examples
    --------
    >>> ts = TimeSpec("2024-01-01 00:00", "2024-01-01 00:04", "1min")
    >>> len(ts.timestamps())
    5
    """

    start: pd.Timestamp
    end: pd.Timestamp
    step: pd.Timedelta

    def __post_init__(self) -> None:
        # Coerce loosely-typed inputs (str, datetime, timedelta).
        object.__setattr__(self, "start", pd.Timestamp(self.start))
        object.__setattr__(self, "end", pd.Timestamp(self.end))
        object.__setattr__(self, "step", pd.Timedelta(self.step))

        if self.step <= pd.Timedelta(0):
            raise ValueError(f"step must be positive, got {self.step}")
        if self.end < self.start:
            raise ValueError(
                f"end ({self.end}) must not precede start ({self.start})"
            )

    @property
    def step_seconds(self) -> float:
        """Step expressed in seconds, from its nanosecond value."""
        return self.step.value / 1e9

    def timestamps(self) -> pd.DatetimeIndex:
        """Aligned evaluation timestamps from *start* to *end*."""
        return pd.date_range(self.start, self.end, freq=self.step)
