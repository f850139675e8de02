from __future__ import annotations

from typing import Dict, List, Optional

import requests

from mcap import settings
from mcap.decoders import (
    decode_assets,
    decode_candles,
    decode_orderbook,
    decode_summary,
    decode_ticker,
    decode_trades,
)
from mcap.transport import default_session, do_request
from mcap.types import (
    Asset,
    Candle,
    CandlesRequest,
    Orderbook,
    OrderbookRequest,
    Summary,
    Ticker,
    Trade,
    TradesRequest,
)

_CANDLES_PATH = "candles"
_ASSETS_PATH = "assets"
_ORDERBOOK_PATH = "orderbook"
_SUMMARY_PATH = "summary"
_TICKER_PATH = "ticker"
_TRADES_PATH = "trades"


class Client:
    """Client for the currency.com market-cap REST API.

    Parameters
    ----------
    session : requests.Session, optional
        Externally configured session (proxies, TLS, adapters with timeouts).
        A plain session is created when omitted.
    base_url : str, optional
        Override the API root, e.g. for a staging host.
    """

    def __init__(self, session: Optional[requests.Session] = None, base_url: Optional[str] = None) -> None:
        self._owns_session = session is None
        self._session = session if session is not None else default_session(settings.MCAP_USER_AGENT)
        self._base_url = (base_url or settings.MCAP_BASE_URL).rstrip("/")

    @property
    def session(self) -> requests.Session:
        return self._session

    @property
    def base_url(self) -> str:
        return self._base_url

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _get(self, endpoint, values, decode):
        return do_request(self._session, self._base_url, endpoint, values, decode)

    def get_candles(self, request: CandlesRequest) -> List[Candle]:
        """Fetch OHLC candles; a single malformed row fails the whole call."""
        return self._get(_CANDLES_PATH, request, decode_candles)

    def get_assets(self) -> Dict[str, Asset]:
        return self._get(_ASSETS_PATH, None, decode_assets)

    def get_orderbook(self, request: OrderbookRequest) -> Orderbook:
        return self._get(_ORDERBOOK_PATH, request, decode_orderbook)

    def get_summary(self) -> Summary:
        return self._get(_SUMMARY_PATH, None, decode_summary)

    def get_ticker(self) -> Dict[str, Ticker]:
        return self._get(_TICKER_PATH, None, decode_ticker)

    def get_trades(self, request: TradesRequest) -> List[Trade]:
        return self._get(_TRADES_PATH, request, decode_trades)
