"""
Tests for batch evaluation over a step-aligned series.

``counter_series`` (see conftest) holds one sample per minute::

    0, 60, 120, NaN, 240, 30, 90, NaN
"""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from tsquery.temporal.rate import RateNode
from tsquery.temporal.types import TemporalOpType
from tsquery.temporal.window import apply_instant, window_length

MINUTE = pd.Timedelta(minutes=1)
NAN = np.nan


def _node(op_type: TemporalOpType) -> RateNode:
    return RateNode(op_type, MINUTE)


class TestWindowLength:
    @pytest.mark.parametrize(
        "duration, step, expected",
        [("5m", "1m", 6), ("1m", "1m", 2), ("90s", "1m", 2), ("30s", "1m", 1), ("1h", "15m", 5)],
    )
    def test_lengths(self, duration, step, expected):
        assert window_length(pd.Timedelta(duration), pd.Timedelta(step)) == expected

    def test_rejects_non_positive_step(self):
        with pytest.raises(ValueError):
            window_length(MINUTE, pd.Timedelta(0))


class TestApplyInstant:
    def test_irate_two_point_windows(self, counter_series):
        out = apply_instant(_node(TemporalOpType.IRATE), counter_series, MINUTE)
        expected = [NAN, 1.0, 1.0, NAN, NAN, 0.5, 1.0, NAN]
        np.testing.assert_allclose(out.to_numpy(), expected)

    def test_irate_bridges_gaps_with_longer_lookback(self, counter_series):
        out = apply_instant(_node(TemporalOpType.IRATE), counter_series, 2 * MINUTE)
        expected = [NAN, 1.0, 1.0, 1.0, 2.0, 0.5, 1.0, 1.0]
        np.testing.assert_allclose(out.to_numpy(), expected)

    def test_idelta(self, counter_series):
        out = apply_instant(_node(TemporalOpType.IDELTA), counter_series, 2 * MINUTE)
        expected = [NAN, 60.0, 60.0, 60.0, 120.0, -210.0, 60.0, 60.0]
        np.testing.assert_allclose(out.to_numpy(), expected)

    def test_keeps_series_index(self, counter_series):
        out = apply_instant(_node(TemporalOpType.IRATE), counter_series, MINUTE)
        assert out.index.equals(counter_series.index)
        assert out.dtype == np.float64

    def test_plain_list_gets_range_index(self):
        out = apply_instant(_node(TemporalOpType.IDELTA), [1.0, 3.0, 6.0], MINUTE)
        assert list(out.index) == [0, 1, 2]
        np.testing.assert_allclose(out.to_numpy(), [NAN, 2.0, 3.0])

    def test_lookback_shorter_than_step_is_all_nan(self, counter_series):
        out = apply_instant(_node(TemporalOpType.IRATE), counter_series, pd.Timedelta(seconds=30))
        assert out.isna().all()

    def test_empty_series(self):
        out = apply_instant(_node(TemporalOpType.IRATE), [], MINUTE)
        assert len(out) == 0

    def test_input_not_mutated(self, counter_series):
        before = counter_series.copy()
        apply_instant(_node(TemporalOpType.IRATE), counter_series, 5 * MINUTE)
        pd.testing.assert_series_equal(counter_series, before)

    def test_rejects_2d_input(self):
        with pytest.raises(ValueError):
            apply_instant(_node(TemporalOpType.IRATE), np.ones((2, 2)), MINUTE)
