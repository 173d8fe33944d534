from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Any, Dict, get_args

import pandas as pd
import yaml

from tsquery.temporal.rate import RateOp, new_rate_op
from tsquery.temporal.types import TimeSpec


LogLevelStr = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


# ---------- dataclasses for temporal config ----------

@dataclass(frozen=True)
class TemporalConfig:
    op_type: str = "irate"
    lookback: str = "5m"
    step: str = "1m"

    def build_op(self) -> RateOp:
        return new_rate_op([self.lookback], self.op_type)

    def time_spec(self, start: Any, end: Any) -> TimeSpec:
        return TimeSpec(start=start, end=end, step=pd.Timedelta(self.step))


@dataclass(frozen=True)
class LoggingConfig:
    level: LogLevelStr = "INFO"


@dataclass(frozen=True)
class TemporalYamlConfig:
    temporal: TemporalConfig = field(default_factory=TemporalConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _load_yaml(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"YAML at {p} must contain a mapping/object.")
    return data


def load_temporal_config(path: str | Path) -> TemporalYamlConfig:
    raw = _load_yaml(path)

    temporal_raw = (raw.get("temporal") or {})
    logging_raw = (raw.get("logging") or {})

    # YAML reads "1m"-style values fine, but bare numbers need a unit.
    for key in ("lookback", "step"):
        if key in temporal_raw and not isinstance(temporal_raw[key], str):
            raise ValueError(
                f"temporal.{key} must be a duration string such as '1m', "
                f"got {temporal_raw[key]!r}"
            )

    level = logging_raw.get("level", "INFO")
    if level not in get_args(LogLevelStr):
        raise ValueError(
            f"logging.level must be one of {list(get_args(LogLevelStr))}, "
            f"got {level!r}"
        )

    return TemporalYamlConfig(
        temporal=TemporalConfig(**temporal_raw),
        logging=LoggingConfig(**logging_raw),
    )
