"""
Command-line evaluation of ``irate`` / ``idelta`` over a CSV series.

Usage::

    python -m tsquery.temporal counters.csv --op irate --lookback 5m --step 1m
    python -m tsquery.temporal gauges.csv --config temporal.yaml --out out.csv

The input CSV needs a ``value`` column whose rows are already aligned to
``--step`` (empty cells are treated as missing samples).  An optional
``timestamp`` column becomes the output index.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd
from dotenv import load_dotenv

from tsquery.config.load_config import TemporalConfig, load_temporal_config

from .rate import RateNode
from .types import InvalidArgument, UnknownOperatorKind
from .window import apply_instant

load_dotenv()  # reads .env from project root into os.environ

log = logging.getLogger(__name__)


def load_series(path: str | Path) -> pd.Series:
    """Read the ``value`` column of *path*, indexed by ``timestamp`` if present."""
    df = pd.read_csv(path)
    if "value" not in df.columns:
        raise ValueError(f"{path} must contain a 'value' column")
    values = pd.to_numeric(df["value"], errors="coerce").astype("float64")
    if "timestamp" in df.columns:
        values.index = pd.to_datetime(df["timestamp"])
        values.index.name = "timestamp"
    return values


def _resolve_config(args: argparse.Namespace) -> tuple[TemporalConfig, str]:
    """Merge YAML config (if any) with command-line overrides."""
    if args.config:
        yaml_cfg = load_temporal_config(args.config)
        cfg, level = yaml_cfg.temporal, yaml_cfg.logging.level
    else:
        cfg, level = TemporalConfig(), "INFO"

    # Explicit flags win, even when empty, so they are validated as given.
    cfg = TemporalConfig(
        op_type=args.op if args.op is not None else cfg.op_type,
        lookback=args.lookback if args.lookback is not None else cfg.lookback,
        step=args.step if args.step is not None else cfg.step,
    )
    return cfg, args.log_level or level


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Evaluate instant rate / delta over a step-aligned series.",
    )
    parser.add_argument("csv", help="Input CSV with a 'value' column.")
    parser.add_argument(
        "--op", default=None, help="Operator type: irate or idelta (default: irate).",
    )
    parser.add_argument(
        "--lookback", default=None, help="Range-vector lookback, e.g. 5m (default: 5m).",
    )
    parser.add_argument(
        "--step", default=None, help="Series step, e.g. 1m (default: 1m).",
    )
    parser.add_argument(
        "--config", default=os.environ.get("TSQUERY_CONFIG"),
        help="YAML config file (default: $TSQUERY_CONFIG).",
    )
    parser.add_argument("--out", default=None, help="Write results to this CSV.")
    parser.add_argument(
        "--log-level", default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: from config, else INFO).",
    )
    args = parser.parse_args(argv)

    try:
        cfg, level = _resolve_config(args)
        op = cfg.build_op()
        step = pd.Timedelta(cfg.step)
        node = RateNode(op.op_type, step)
    except (UnknownOperatorKind, InvalidArgument, ValueError, TypeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    # ── Logging ───────────────────────────────────────────────────────
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(name)-30s %(levelname)-5s %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        series = load_series(args.csv)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    log.info(
        "Evaluating %s[%s] over %d samples (step=%s)",
        op.op_type_name, cfg.lookback, len(series), step,
    )

    result = apply_instant(node, series, op.duration)
    result.name = op.op_type_name

    if args.out:
        result.to_csv(args.out, header=["value"], index_label="timestamp")
        log.info("Wrote %d rows to %s", len(result), args.out)
    else:
        result.to_csv(sys.stdout, header=["value"], index_label="timestamp")
    return 0
