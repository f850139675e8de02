from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Iterable
import csv
import gzip
import json

from mcap.types import Candle, Trade


def _open_gzip_text(path: Path):
    path.parent.mkdir(parents=True, exist_ok=True)
    return gzip.open(path, "wt", encoding="utf-8", newline="")


def write_candles_csv(path: Path, candles: Iterable[Candle], symbol: str, interval: str) -> int:
    n = 0
    with _open_gzip_text(path) as fh:
        writer = csv.DictWriter(
            fh,
            fieldnames=["ts", "open", "high", "low", "close", "symbol", "interval"],
        )
        writer.writeheader()
        for candle in candles:
            writer.writerow(
                {
                    "ts": candle.ts,
                    "open": candle.open,
                    "high": candle.high,
                    "low": candle.low,
                    "close": candle.close,
                    "symbol": symbol,
                    "interval": interval,
                }
            )
            n += 1
    return n


def write_trades_ndjson(path: Path, trades: Iterable[Trade]) -> int:
    n = 0
    with _open_gzip_text(path) as fh:
        for trade in trades:
            payload = asdict(trade)
            payload.pop("raw", None)
            fh.write(json.dumps(payload, ensure_ascii=False) + "\n")
            n += 1
    return n
