"""JSON payload -> typed records for each endpoint.

Decoders raise KeyError/TypeError/ValueError on shape mismatch; the transport
wraps those into DecodeError.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from mcap.normalizer import normalize_candles, to_float
from mcap.types import (
    Asset,
    Candle,
    MarketProp,
    Orderbook,
    OrderbookLevel,
    PriceChange,
    Summary,
    Ticker,
    Trade,
)

_TRUE = ("1", "true", "yes", "y")
_FALSE = ("0", "false", "no", "n")


def _mapping(payload: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise TypeError(f"{what} must be an object, got {type(payload).__name__}")
    return payload


def _list(payload: Any, what: str) -> List[Any]:
    if not isinstance(payload, list):
        raise TypeError(f"{what} must be an array, got {type(payload).__name__}")
    return payload


def _opt_float(obj: Mapping[str, Any], key: str) -> Optional[float]:
    value = obj.get(key)
    if value is None or value == "":
        return None
    return to_float(value)


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"not an integer: {value!r}")
    if isinstance(value, int):
        return value
    try:
        return int(str(value))
    except ValueError:
        pass
    try:
        return int(to_float(value))
    except OverflowError as exc:
        raise ValueError(f"integer out of range: {value!r}") from exc


def _opt_int(obj: Mapping[str, Any], key: str) -> Optional[int]:
    value = obj.get(key)
    if value is None or value == "":
        return None
    return _as_int(value)


def _opt_str(obj: Mapping[str, Any], key: str) -> Optional[str]:
    value = obj.get(key)
    return None if value is None else str(value)


def _opt_bool(obj: Mapping[str, Any], key: str) -> Optional[bool]:
    value = obj.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def decode_candles(payload: Any) -> List[Candle]:
    return normalize_candles(_list(payload, "candles"))


def decode_assets(payload: Any) -> Dict[str, Asset]:
    assets: Dict[str, Asset] = {}
    for code, item in _mapping(payload, "assets").items():
        item = _mapping(item, f"asset {code}")
        assets[code] = Asset(
            code=code,
            name=_opt_str(item, "name"),
            unified_cryptoasset_id=_opt_int(item, "unified_cryptoasset_id"),
            can_withdraw=_opt_bool(item, "can_withdraw"),
            can_deposit=_opt_bool(item, "can_deposit"),
            min_withdraw=_opt_float(item, "min_withdraw"),
            max_withdraw=_opt_float(item, "max_withdraw"),
            maker_fee=_opt_float(item, "maker_fee"),
            taker_fee=_opt_float(item, "taker_fee"),
            raw=item,
        )
    return assets


def _levels(rows: Any, side: str) -> List[OrderbookLevel]:
    levels: List[OrderbookLevel] = []
    for row in _list(rows, side):
        row = _list(row, f"{side} level")
        if len(row) < 2:
            raise ValueError(f"{side} level needs [price, quantity], got {row!r}")
        levels.append(OrderbookLevel(price=to_float(row[0]), quantity=to_float(row[1])))
    return levels


def decode_orderbook(payload: Any) -> Orderbook:
    obj = _mapping(payload, "orderbook")
    return Orderbook(
        timestamp=_opt_int(obj, "timestamp") or 0,
        asks=_levels(obj["asks"], "asks"),
        bids=_levels(obj["bids"], "bids"),
        raw=obj,
    )


def _market_prop(pair: str, item: Mapping[str, Any]) -> MarketProp:
    return MarketProp(
        trading_pairs=str(item.get("trading_pairs") or pair),
        base_currency=_opt_str(item, "base_currency"),
        quote_currency=_opt_str(item, "quote_currency"),
        last_price=_opt_float(item, "last_price"),
        lowest_ask=_opt_float(item, "lowest_ask"),
        highest_bid=_opt_float(item, "highest_bid"),
        base_volume=_opt_float(item, "base_volume"),
        quote_volume=_opt_float(item, "quote_volume"),
        price_change_percent_24h=_opt_float(item, "price_change_percent_24h"),
        highest_price_24h=_opt_float(item, "highest_price_24h"),
        lowest_price_24h=_opt_float(item, "lowest_price_24h"),
        raw=item,
    )


def decode_summary(payload: Any) -> Summary:
    obj = _mapping(payload, "summary")
    data = obj["data"]
    markets: Dict[str, MarketProp] = {}
    if isinstance(data, list):
        for item in data:
            item = _mapping(item, "summary entry")
            prop = _market_prop(str(item["trading_pairs"]), item)
            markets[prop.trading_pairs] = prop
    else:
        for pair, item in _mapping(data, "summary data").items():
            markets[pair] = _market_prop(pair, _mapping(item, f"summary {pair}"))
    return Summary(data=markets, raw=obj)


def _price_change(obj: Any) -> Optional[PriceChange]:
    if obj is None:
        return None
    obj = _mapping(obj, "price change")
    return PriceChange(
        percent_change_24h=_opt_float(obj, "percent_change_24h"),
        price_change_24h=_opt_float(obj, "price_change_24h"),
        highest_price_24h=_opt_float(obj, "highest_price_24h"),
        lowest_price_24h=_opt_float(obj, "lowest_price_24h"),
        raw=obj,
    )


def decode_ticker(payload: Any) -> Dict[str, Ticker]:
    tickers: Dict[str, Ticker] = {}
    for pair, item in _mapping(payload, "ticker").items():
        item = _mapping(item, f"ticker {pair}")
        tickers[pair] = Ticker(
            pair=pair,
            base_id=_opt_str(item, "base_id"),
            quote_id=_opt_str(item, "quote_id"),
            last_price=_opt_float(item, "last_price"),
            base_volume=_opt_float(item, "base_volume"),
            quote_volume=_opt_float(item, "quote_volume"),
            is_frozen=bool(_opt_bool(item, "isFrozen")),
            price_change=_price_change(item.get("price_change")),
            raw=item,
        )
    return tickers


def decode_trades(payload: Any) -> List[Trade]:
    trades: List[Trade] = []
    for item in _list(payload, "trades"):
        item = _mapping(item, "trade")
        trades.append(
            Trade(
                trade_id=_as_int(item["tradeID"]),
                price=to_float(item["price"]),
                base_volume=_opt_float(item, "base_volume"),
                quote_volume=_opt_float(item, "quote_volume"),
                timestamp=_opt_int(item, "trade_timestamp") or 0,
                type=_opt_str(item, "type"),
                raw=item,
            )
        )
    return trades
