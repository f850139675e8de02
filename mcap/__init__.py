"""Typed client for the currency.com market-cap REST API."""

from .client import Client
from .errors import (
    ApiErrorResponse,
    DecodeError,
    ErrorResponse,
    McapError,
    ParseError,
    ServerErrorResponse,
    TransportError,
)
from .types import (
    Asset,
    Candle,
    CandlesRequest,
    MarketProp,
    Orderbook,
    OrderbookLevel,
    OrderbookRequest,
    PriceChange,
    Summary,
    Ticker,
    Trade,
    TradesRequest,
)

__all__ = [
    "Client",
    "McapError",
    "TransportError",
    "ErrorResponse",
    "ServerErrorResponse",
    "ApiErrorResponse",
    "DecodeError",
    "ParseError",
    "Asset",
    "Candle",
    "CandlesRequest",
    "MarketProp",
    "Orderbook",
    "OrderbookLevel",
    "OrderbookRequest",
    "PriceChange",
    "Summary",
    "Ticker",
    "Trade",
    "TradesRequest",
]
