"""
Base pieces shared by temporal operators.

A temporal operator is built once per query plan from its argument list,
then bound to the query's :class:`~tsquery.temporal.types.TimeSpec` to give
a :class:`Processor`.  The processor reduces one window of step-aligned
samples to a single value and is called once per output timestamp.
"""

from __future__ import annotations

import datetime as dt
from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

import numpy as np
import pandas as pd

from .types import InvalidArgument


class Processor(ABC):
    """Reduces one window of samples (oldest first) to a scalar.

    Returns ``None`` when the window does not hold enough data.
    Implementations must be pure: no state may survive between calls.
    """

    @abstractmethod
    def process(self, values: Sequence[float] | np.ndarray) -> Optional[float]:
        ...


def parse_duration(args: Sequence[Any]) -> pd.Timedelta:
    """Extract the range-vector lookback from an operator's argument list.

    The first argument is the lookback duration.  Accepts ``pd.Timedelta``,
    ``datetime.timedelta``, ``np.timedelta64`` or a string pandas can
    parse (``"5m"``, ``"30s"``).

    Raises
    ------
    InvalidArgument
        If the list is empty, the value cannot be parsed, or the duration
        is not strictly positive.
    """
    if not args:
        raise InvalidArgument("temporal functions require a lookback duration argument")

    raw = args[0]
    if not isinstance(raw, (pd.Timedelta, dt.timedelta, np.timedelta64, str)):
        raise InvalidArgument(
            f"lookback duration must be a duration, got {type(raw).__name__}"
        )
    try:
        duration = pd.Timedelta(raw)
    except ValueError as exc:
        raise InvalidArgument(f"cannot parse lookback duration {raw!r}") from exc

    if pd.isna(duration) or duration <= pd.Timedelta(0):
        raise InvalidArgument(f"lookback duration must be positive, got {raw!r}")
    return duration
