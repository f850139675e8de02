from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional


def _param(key: str, omitempty: bool = False):
    return {"query": key, "omitempty": omitempty}


@dataclass(frozen=True)
class CandlesRequest:
    symbol: str = field(metadata=_param("symbol"))
    interval: str = field(metadata=_param("interval"))
    limit: int = field(default=0, metadata=_param("limit", omitempty=True))
    start_time: int = field(default=0, metadata=_param("startTime", omitempty=True))
    end_time: int = field(default=0, metadata=_param("endTime", omitempty=True))


@dataclass(frozen=True)
class OrderbookRequest:
    symbol: str = field(metadata=_param("symbol"))
    depth: int = field(default=0, metadata=_param("depth", omitempty=True))
    level: int = field(default=0, metadata=_param("level", omitempty=True))


@dataclass(frozen=True)
class TradesRequest:
    symbol: str = field(metadata=_param("symbol"))
    type: int = field(default=0, metadata=_param("type", omitempty=True))


@dataclass(frozen=True)
class Candle:
    ts: int  # seconds since epoch, open time
    open: float
    high: float
    low: float
    close: float

    @property
    def time(self) -> datetime:
        return datetime.fromtimestamp(self.ts, tz=timezone.utc)


@dataclass(frozen=True)
class Asset:
    code: str
    name: Optional[str]
    unified_cryptoasset_id: Optional[int]
    can_withdraw: Optional[bool]
    can_deposit: Optional[bool]
    min_withdraw: Optional[float]
    max_withdraw: Optional[float]
    maker_fee: Optional[float]
    taker_fee: Optional[float]
    raw: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class OrderbookLevel:
    price: float
    quantity: float


@dataclass(frozen=True)
class Orderbook:
    timestamp: int
    asks: List[OrderbookLevel]
    bids: List[OrderbookLevel]
    raw: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class MarketProp:
    trading_pairs: str
    base_currency: Optional[str]
    quote_currency: Optional[str]
    last_price: Optional[float]
    lowest_ask: Optional[float]
    highest_bid: Optional[float]
    base_volume: Optional[float]
    quote_volume: Optional[float]
    price_change_percent_24h: Optional[float]
    highest_price_24h: Optional[float]
    lowest_price_24h: Optional[float]
    raw: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class Summary:
    data: Dict[str, MarketProp]
    raw: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class PriceChange:
    percent_change_24h: Optional[float]
    price_change_24h: Optional[float]
    highest_price_24h: Optional[float]
    lowest_price_24h: Optional[float]
    raw: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class Ticker:
    pair: str
    base_id: Optional[str]
    quote_id: Optional[str]
    last_price: Optional[float]
    base_volume: Optional[float]
    quote_volume: Optional[float]
    is_frozen: bool
    price_change: Optional[PriceChange] = None
    raw: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class Trade:
    trade_id: int
    price: float
    base_volume: Optional[float]
    quote_volume: Optional[float]
    timestamp: int  # epoch milliseconds, as sent
    type: Optional[str]
    raw: Optional[Mapping[str, Any]] = None
