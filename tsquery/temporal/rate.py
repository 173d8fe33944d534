"""
Instant rate and instant delta.

Both operators look only at the last two non-NaN samples of a window:

* ``irate``  — per-second rate of increase of a counter.  A decrease
  between the two samples is read as a counter reset, in which case the
  post-reset value itself is taken as the increase.
* ``idelta`` — plain difference of the two samples.  Meant for gauges,
  so a decrease is a legitimate negative result.

Typical usage::

    op = new_rate_op([pd.Timedelta("5m")], "irate")
    node = op.node(TimeSpec(start, end, step="1m"))
    node.process([10.0, np.nan, 40.0])   # -> 0.5

Windows with fewer than two real samples yield ``None``.  This is the
expected "no data point" outcome, not an error.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional, Sequence

import numpy as np
import pandas as pd

from .base import Processor, parse_duration
from .types import TemporalOpType, TimeSpec, UnknownOperatorKind

log = logging.getLogger(__name__)

# Public token constants, as they appear in queries.
IRATE_TEMPORAL_TYPE: str = TemporalOpType.IRATE.value
IDELTA_TEMPORAL_TYPE: str = TemporalOpType.IDELTA.value


# ---------------------------------------------------------------------------
# Reducer
# ---------------------------------------------------------------------------


def find_non_nan_idx(values: Sequence[float] | np.ndarray, starting_idx: int) -> int:
    """Scan backwards from *starting_idx* and return the first non-NaN index.

    Returns ``-1`` when every value at or before *starting_idx* is NaN.

    >>> find_non_nan_idx([1.0, float("nan"), float("nan")], 2)
    0
    """
    for i in range(starting_idx, -1, -1):
        if not math.isnan(values[i]):
            return i
    return -1


def instant_value(
    values: Sequence[float] | np.ndarray | pd.Series,
    is_rate: bool,
    step: pd.Timedelta,
) -> Optional[float]:
    """Reduce a window of step-aligned samples to an instant rate or delta.

    Parameters
    ----------
    values : sequence of float, np.ndarray or pd.Series
        Window samples, oldest first, read by position.  NaN marks a
        missing sample.
    is_rate : bool
        ``True`` for ``irate`` semantics, ``False`` for ``idelta``.
    step : pd.Timedelta
        Series step.  Rates are normalised by this fixed step, whatever
        the index distance between the two samples.

    Returns
    -------
    float or None
        ``None`` if the window holds fewer than two non-NaN samples.
    """
    # Positional access; a pd.Series window would otherwise index by label.
    values = np.asarray(values, dtype=np.float64)
    n = len(values)
    if n < 2:
        return None

    last_idx = find_non_nan_idx(values, n - 1)
    # A single sample at (or no sample before) position 0 cannot be paired.
    if last_idx < 1:
        return None
    last_sample = float(values[last_idx])

    prev_idx = find_non_nan_idx(values, last_idx - 1)
    if prev_idx == -1:
        return None
    previous_sample = float(values[prev_idx])

    if is_rate and last_sample < previous_sample:
        # Counter reset.
        result = last_sample
    else:
        result = last_sample - previous_sample

    if is_rate:
        result /= step.value / 1e9

    return result


# ---------------------------------------------------------------------------
# Operator + processor
# ---------------------------------------------------------------------------


class RateNode(Processor):
    """Processor bound to one operator type and one series step.

    Immutable after construction, so a single node may be shared across
    threads evaluating different windows.
    """

    __slots__ = ("_op_type", "_is_rate", "_step")

    def __init__(self, op_type: TemporalOpType, step: pd.Timedelta) -> None:
        self._op_type = op_type
        self._is_rate = op_type.is_rate
        self._step = pd.Timedelta(step)
        if pd.isna(self._step) or self._step <= pd.Timedelta(0):
            raise ValueError(f"step must be positive, got {self._step}")

    @property
    def op_type(self) -> TemporalOpType:
        return self._op_type

    @property
    def step(self) -> pd.Timedelta:
        return self._step

    def process(self, values: Sequence[float] | np.ndarray | pd.Series) -> Optional[float]:
        return instant_value(values, self._is_rate, self._step)

    def __repr__(self) -> str:
        return f"RateNode(op_type={self._op_type.value!r}, step={self._step})"


@dataclass(frozen=True)
class RateOp:
    """Validated ``irate`` / ``idelta`` operator, not yet bound to a query.

    Parameters
    ----------
    op_type : TemporalOpType
        Resolved operator kind.
    duration : pd.Timedelta
        Range-vector lookback.
    """

    op_type: TemporalOpType
    duration: pd.Timedelta

    @property
    def op_type_name(self) -> str:
        return self.op_type.value

    def node(self, time_spec: TimeSpec) -> RateNode:
        """Bind the operator to the step of *time_spec*."""
        return RateNode(self.op_type, time_spec.step)


def resolve_op_type(op_type: str | TemporalOpType) -> TemporalOpType:
    """Map a query token onto :class:`TemporalOpType`.

    Tokens are matched exactly (``"IRATE"`` is not accepted).
    """
    if isinstance(op_type, TemporalOpType):
        return op_type
    try:
        return TemporalOpType(op_type)
    except ValueError:
        raise UnknownOperatorKind(op_type) from None


def new_rate_op(args: Sequence[Any], op_type: str | TemporalOpType) -> RateOp:
    """Create an ``irate`` or ``idelta`` operator from query arguments.

    Raises
    ------
    UnknownOperatorKind
        If *op_type* is neither ``"irate"`` nor ``"idelta"``.
    InvalidArgument
        If *args* does not start with a positive lookback duration.
    """
    kind = resolve_op_type(op_type)
    duration = parse_duration(args)
    log.debug("Built %s op with lookback %s", kind.value, duration)
    return RateOp(op_type=kind, duration=duration)
