from __future__ import annotations

from typing import Any, Iterable, List, Sequence

from mcap.errors import ParseError
from mcap.types import Candle

_PRICE_FIELDS = ("open", "high", "low", "close")


def to_float(value: Any) -> float:
    """Parse a JSON number or numeric string as a float.

    The value is stringified first so ``"1.5"`` and ``1.5`` yield the same float.
    """
    if isinstance(value, bool) or value is None:
        raise ValueError(f"not a number: {value!r}")
    text = str(value)
    if text != text.strip():
        raise ValueError(f"not a number: {value!r}")
    return float(text)


def _timestamp_seconds(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"timestamp must be a number, got {value!r}")
    ms = int(value)
    # Truncate toward zero; sub-second precision is discarded.
    if ms < 0:
        return -(-ms // 1000)
    return ms // 1000


def normalize_candle(row: Sequence[Any]) -> Candle:
    """Convert one ``[timestamp_ms, open, high, low, close]`` row into a Candle."""
    if isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
        raise ParseError(f"candle row must be an array, got {type(row).__name__}")
    if len(row) < 5:
        raise ParseError(f"candle row needs 5 values, got {len(row)}")

    try:
        ts = _timestamp_seconds(row[0])
    except (ValueError, OverflowError) as exc:
        raise ParseError(f"invalid candle timestamp: {exc}") from exc

    prices = {}
    for name, value in zip(_PRICE_FIELDS, row[1:5]):
        try:
            prices[name] = to_float(value)
        except ValueError as exc:
            raise ParseError(f"invalid candle {name}: {value!r}") from exc

    return Candle(ts=ts, **prices)


def normalize_candles(rows: Iterable[Sequence[Any]]) -> List[Candle]:
    candles: List[Candle] = []
    for idx, row in enumerate(rows):
        try:
            candles.append(normalize_candle(row))
        except ParseError as exc:
            raise ParseError(f"row {idx}: {exc}") from exc
    return candles
