"""
Temporal functions package.

Public API
----------
- :func:`new_rate_op` — build an ``irate`` / ``idelta`` operator.
- :class:`RateOp` / :class:`RateNode` — unbound operator and bound processor.
- :func:`instant_value` — the pure window reducer.
- :func:`apply_instant` — evaluate a processor over an aligned series.
- :class:`TimeSpec`, :class:`TemporalOpType` — query timing and operator kind.
- :class:`UnknownOperatorKind`, :class:`InvalidArgument` — construction errors.
"""

from .base import Processor, parse_duration
from .rate import (
    IDELTA_TEMPORAL_TYPE,
    IRATE_TEMPORAL_TYPE,
    RateNode,
    RateOp,
    find_non_nan_idx,
    instant_value,
    new_rate_op,
    resolve_op_type,
)
from .types import InvalidArgument, TemporalOpType, TimeSpec, UnknownOperatorKind
from .window import apply_instant, window_length

__all__ = [
    "IDELTA_TEMPORAL_TYPE",
    "IRATE_TEMPORAL_TYPE",
    "InvalidArgument",
    "Processor",
    "RateNode",
    "RateOp",
    "TemporalOpType",
    "TimeSpec",
    "UnknownOperatorKind",
    "apply_instant",
    "find_non_nan_idx",
    "instant_value",
    "new_rate_op",
    "parse_duration",
    "resolve_op_type",
    "window_length",
]
