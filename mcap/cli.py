from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from mcap import settings
from mcap.client import Client
from mcap.errors import McapError
from mcap.logging_config import setup_logging
from mcap.types import CandlesRequest, OrderbookRequest, TradesRequest
from mcap.writer import write_candles_csv, write_trades_ndjson

log = logging.getLogger("mcap.cli")


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(name, default)


def _env_int(name: str, default: int = 0) -> int:
    raw = _env(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise SystemExit(f"{name} must be an integer, got {raw!r}")


def _require(name: str) -> str:
    value = _env(name)
    if not value:
        raise SystemExit(f"{name} is required")
    return value


def run(client: Client, data_type: str) -> str:
    """Fetch one endpoint and return a one-line summary."""
    out_path = _env("OUT_PATH")

    if data_type == "candles":
        symbol = _require("SYMBOL")
        interval = _require("INTERVAL")
        request = CandlesRequest(
            symbol=symbol,
            interval=interval,
            limit=_env_int("LIMIT", settings.CLI_DEFAULT_LIMIT),
            start_time=_env_int("START_MS"),
            end_time=_env_int("END_MS"),
        )
        candles = client.get_candles(request)
        if out_path:
            write_candles_csv(Path(out_path), candles, symbol, interval)
            return f"Wrote {len(candles)} candles to {out_path}"
        if not candles:
            return "No candles returned"
        return f"Candles: {len(candles)}  First ts: {candles[0].ts}  Last ts: {candles[-1].ts}"

    if data_type == "trades":
        trades = client.get_trades(TradesRequest(symbol=_require("SYMBOL"), type=_env_int("TRADE_TYPE")))
        if out_path:
            write_trades_ndjson(Path(out_path), trades)
            return f"Wrote {len(trades)} trades to {out_path}"
        return f"Trades: {len(trades)}"

    if data_type == "orderbook":
        book = client.get_orderbook(
            OrderbookRequest(symbol=_require("SYMBOL"), depth=_env_int("DEPTH"), level=_env_int("LEVEL"))
        )
        best_ask = book.asks[0].price if book.asks else None
        best_bid = book.bids[0].price if book.bids else None
        return f"Orderbook: asks={len(book.asks)} bids={len(book.bids)} best_ask={best_ask} best_bid={best_bid}"

    if data_type == "assets":
        return f"Assets: {len(client.get_assets())}"

    if data_type == "summary":
        return f"Summary markets: {len(client.get_summary().data)}"

    if data_type == "ticker":
        return f"Tickers: {len(client.get_ticker())}"

    raise SystemExit("Unsupported TYPE. Use candles, assets, orderbook, summary, ticker or trades")


def main() -> None:
    data_type = (_env("TYPE") or "").strip().lower()
    if not data_type:
        raise SystemExit("TYPE is required")

    log_path = setup_logging()
    if log_path is not None:
        log.info("Logging to %s", log_path)

    with Client() as client:
        try:
            summary = run(client, data_type)
        except McapError as exc:
            raise SystemExit(f"{data_type} request failed: {exc}")
    print(summary)


if __name__ == "__main__":
    main()
