"""
Batch evaluation of a temporal processor over a step-aligned series.

The series must already be aligned to the processor's step: position *i*
holds the sample at ``start + i * step`` or NaN if it is missing.  No
resampling or interpolation happens here.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
import pandas as pd

from .rate import RateNode

log = logging.getLogger(__name__)


def window_length(duration: pd.Timedelta, step: pd.Timedelta) -> int:
    """Number of aligned positions covered by a lookback ending at ``t``.

    The window spans ``[t - duration, t]`` so it includes the current
    position.

    >>> window_length(pd.Timedelta("5m"), pd.Timedelta("1m"))
    6
    """
    duration = pd.Timedelta(duration)
    step = pd.Timedelta(step)
    if step <= pd.Timedelta(0):
        raise ValueError(f"step must be positive, got {step}")
    return int(duration // step) + 1


def apply_instant(
    node: RateNode,
    values: Sequence[float] | np.ndarray | pd.Series,
    duration: pd.Timedelta,
) -> pd.Series:
    """Evaluate *node* once per position of *values*.

    Parameters
    ----------
    node : RateNode
        Bound processor.  Its step is the series step.
    values : array-like or pd.Series
        Step-aligned samples, oldest first.  A ``pd.Series`` keeps its
        index in the result.
    duration : pd.Timedelta
        Range-vector lookback of the operator.

    Returns
    -------
    pd.Series
        float64 results.  Positions whose window holds fewer than two
        samples are NaN.
    """
    index = values.index if isinstance(values, pd.Series) else None
    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError(f"values must be 1-D, got shape {arr.shape}")

    width = window_length(duration, node.step)
    out = np.full(arr.shape[0], np.nan, dtype=np.float64)

    for i in range(arr.shape[0]):
        result = node.process(arr[max(0, i - width + 1): i + 1])
        if result is not None:
            out[i] = result

    log.debug(
        "Evaluated %s over %d positions (window=%d, defined=%d)",
        node.op_type.value, arr.shape[0], width, int((~np.isnan(out)).sum()),
    )
    return pd.Series(out, index=index, dtype=np.float64)
