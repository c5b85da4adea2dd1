"""
streamta command line.

Replays an OHLCV CSV through one or more incremental indicators, one row
at a time, exactly as a live feed would, and prints the tail of the
results.

Examples:
  streamta replay data/AMZN.csv --indicator ema:9 --indicator bb:20,2
  streamta replay data/AMZN.csv --spec indicators.yaml --tail 50
  streamta list
"""

from __future__ import annotations

import argparse
import csv
import sys
from collections import deque
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Iterator, Optional, Sequence

import yaml
from rich.console import Console
from rich.table import Table

from .config.config import get_config
from .data.candle import Candle
from .errors import TaError
from .indicators.incremental.base import IncrementalIndicator
from .indicators.incremental.factory import (
    create_incremental_indicator,
    list_incremental_indicators,
    parse_indicator_spec,
)
from .utils.helpers import decimal_context, round_places
from .utils.logger import get_logger, setup_logger

console = Console()

_TIME_COLUMNS = ("date", "time", "timestamp", "datetime")
_PRICE_COLUMNS = ("open", "high", "low", "close", "volume")


# =============================================================================
# INPUT
# =============================================================================

def _parse_datetime(dt_str: str) -> Optional[datetime]:
    """Parse a CSV time cell; None when no known format matches."""
    for fmt in ["%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M", "%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%dT%H:%M"]:
        try:
            return datetime.strptime(dt_str.strip(), fmt)
        except ValueError:
            continue
    return None


def read_candles(path: Path) -> Iterator[tuple[str, Candle]]:
    """
    Yield (time label, Candle) per CSV row, streaming.

    Header names are matched case-insensitively. A time column is optional;
    rows are labelled by their 1-based row number when it is missing.

    Raises:
        ValueError: If a price column is missing or a cell is not a number.
        DataItemInvalid: If a row has inconsistent prices.
    """
    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        columns = {name.strip().lower(): name for name in (reader.fieldnames or [])}
        missing = [col for col in _PRICE_COLUMNS if col not in columns]
        if missing:
            raise ValueError(f"{path}: missing columns {', '.join(missing)}")
        time_col = next((columns[col] for col in _TIME_COLUMNS if col in columns), None)

        for row_no, row in enumerate(reader, start=1):
            label = row[time_col].strip() if time_col else str(row_no)
            try:
                prices = {col: Decimal(row[columns[col]].strip()) for col in _PRICE_COLUMNS}
            except (InvalidOperation, AttributeError):
                raise ValueError(f"{path}: row {row_no} has a non-numeric price") from None

            builder = Candle.builder()
            if time_col:
                stamp = _parse_datetime(label)
                if stamp is not None:
                    builder.time(stamp)
            for col, value in prices.items():
                getattr(builder, col)(value)
            yield label, builder.build()


def load_indicator_specs(path: Path) -> list[tuple[str, dict[str, Any]]]:
    """
    Read an indicator set from YAML.

        indicators:
          - type: ema
            params: {period: 9}
          - type: bb
            params: {period: 20, multiplier: "2"}
    """
    with open(path, encoding="utf-8") as f:
        doc = yaml.safe_load(f) or {}
    if not isinstance(doc, dict):
        raise ValueError(f"{path}: expected a mapping with an 'indicators' key")
    entries = doc.get("indicators") or []
    if not isinstance(entries, list):
        raise ValueError(f"{path}: 'indicators' must be a list")

    specs = []
    for entry in entries:
        if not isinstance(entry, dict) or "type" not in entry:
            raise ValueError(f"{path}: each indicator needs a 'type' key, got {entry!r}")
        specs.append((str(entry["type"]), dict(entry.get("params") or {})))
    return specs


# =============================================================================
# REPLAY
# =============================================================================

def replay(
    candles: Iterator[tuple[str, Candle]],
    indicators: Sequence[IncrementalIndicator],
    tail: int,
) -> tuple[int, list[tuple[str, list[Any]]]]:
    """
    Feed every candle to every indicator in order.

    Only the last `tail` rows of output are retained.

    Returns:
        (rows processed, [(time label, [output per indicator]), ...])
    """
    kept: deque[tuple[str, list[Any]]] = deque(maxlen=tail)
    rows = 0
    for label, candle in candles:
        kept.append((label, [ind.update(candle) for ind in indicators]))
        rows += 1
    return rows, list(kept)


def format_output(value: Any, places: int) -> str:
    """Decimal -> fixed places; multi-output tuples joined with ' / '."""
    if isinstance(value, tuple):
        return " / ".join(format_output(v, places) for v in value)
    return str(round_places(value, places))


def _render(indicators: Sequence[IncrementalIndicator], results: list, places: int, title: str) -> None:
    table = Table(title=title)
    table.add_column("Time", style="dim")
    for ind in indicators:
        table.add_column(str(ind), justify="right")
    for label, outputs in results:
        table.add_row(label, *(format_output(v, places) for v in outputs))
    console.print(table)


# =============================================================================
# COMMANDS
# =============================================================================

def handle_replay(args: argparse.Namespace) -> int:
    try:
        config = get_config()
        logger = setup_logger(config.log.log_dir, "DEBUG" if args.debug else config.log.level)
    except (ValueError, OSError) as e:
        get_logger().error(f"Invalid configuration: {e}")
        return 1

    try:
        specs = [parse_indicator_spec(s) for s in args.indicator or []]
        if args.spec:
            specs.extend(load_indicator_specs(Path(args.spec)))
        if not specs:
            logger.error("No indicators given. Use --indicator ema:9 or --spec FILE")
            return 1
        indicators = [create_incremental_indicator(t, p) for t, p in specs]

        path = Path(args.file)
        logger.info(f"Replaying {path} through {', '.join(str(i) for i in indicators)}")
        with decimal_context(config.numeric.precision):
            rows, results = replay(read_candles(path), indicators, args.tail)
    except (TaError, ValueError, ArithmeticError, OSError, yaml.YAMLError) as e:
        logger.error(str(e))
        return 1

    logger.info(f"Processed {rows} rows")
    _render(indicators, results, config.numeric.display_places, f"{path.name} (last {len(results)} of {rows})")
    return 0


def handle_list(args: argparse.Namespace) -> int:
    table = Table(title="Indicators")
    table.add_column("Type")
    table.add_column("Default")
    for name in list_incremental_indicators():
        table.add_row(name, str(create_incremental_indicator(name)))
    console.print(table)
    return 0


def setup_argparse(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="streamta",
        description="Replay OHLCV data through incremental indicators",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Examples:", 1)[1] if __doc__ else None,
    )
    parser.add_argument("--debug", action="store_true", help="DEBUG logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    replay_parser = subparsers.add_parser("replay", help="Replay a CSV file")
    replay_parser.add_argument("file", help="CSV with open,high,low,close,volume columns")
    replay_parser.add_argument(
        "-i", "--indicator",
        action="append",
        help="Indicator spec TYPE[:ARG,...], e.g. ema:9, bb:20,2, macd:12,26,9",
    )
    replay_parser.add_argument("--spec", help="YAML file listing indicators")
    replay_parser.add_argument("--tail", type=int, default=20, help="Rows to display (default 20)")
    replay_parser.set_defaults(handler=handle_replay)

    list_parser = subparsers.add_parser("list", help="List indicator types")
    list_parser.set_defaults(handler=handle_list)

    args = parser.parse_args(argv)
    if getattr(args, "tail", 1) < 1:
        parser.error("--tail must be >= 1")
    return args


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = setup_argparse(argv)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
