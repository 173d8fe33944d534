"""
Pytest configuration and shared fixtures.
"""
import sys
from pathlib import Path

# Add project root to path so "tsquery" can be imported without installing
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def one_second() -> pd.Timedelta:
    return pd.Timedelta(seconds=1)


@pytest.fixture
def minute_spec():
    """Ten one-minute evaluation steps."""
    from tsquery.temporal.types import TimeSpec
    return TimeSpec("2024-01-01 00:00", "2024-01-01 00:09", "1min")


@pytest.fixture
def counter_series() -> pd.Series:
    """Step-aligned counter with a gap and a reset, one sample per minute."""
    idx = pd.date_range("2024-01-01", periods=8, freq="1min")
    values = [0.0, 60.0, 120.0, np.nan, 240.0, 30.0, 90.0, np.nan]
    return pd.Series(values, index=idx, dtype=np.float64)


@pytest.fixture
def series_csv(tmp_path: Path, counter_series: pd.Series) -> Path:
    """Write ``counter_series`` to a CSV with timestamp,value columns."""
    path = tmp_path / "series.csv"
    df = pd.DataFrame(
        {
            "timestamp": counter_series.index.strftime("%Y-%m-%d %H:%M:%S"),
            "value": counter_series.to_numpy(),
        }
    )
    df.to_csv(path, index=False)
    return path
