from __future__ import annotations

from typing import Any, Dict, List

import pytest

from mcap.client import Client
from mcap.errors import ApiErrorResponse, DecodeError, ParseError, ServerErrorResponse
from mcap.types import CandlesRequest, OrderbookRequest, TradesRequest

BASE = "https://marketcap.backend.currency.com/api/v1"


def _candle_rows(n: int) -> List[list]:
    rows: List[list] = []
    for i in range(n):
        # The API mixes numeric and string prices.
        rows.append([1600000000000.0 + i * 60000, "10930.5", 10935.25, "10920", 10931])
    return rows


@pytest.fixture
def client(fake_session):
    return Client(session=fake_session, base_url=BASE)


def test_get_candles_returns_limit_entries(client, fake_session):
    fake_session.reply(200, _candle_rows(3))
    candles = client.get_candles(CandlesRequest(symbol="BTC/USD", interval="M1", limit=3))
    assert len(candles) == 3
    assert [c.ts for c in candles] == [1600000000, 1600000060, 1600000120]
    assert candles[0].open == 10930.5
    assert candles[0].high == 10935.25
    assert candles[0].low == 10920.0
    assert candles[0].close == 10931.0
    assert fake_session.sent[0].url == f"{BASE}/candles?interval=M1&limit=3&symbol=BTC%2FUSD"


def test_get_candles_unsupported_interval(client, fake_session):
    fake_session.reply(400, {"code": -1, "msg": "Not supported interval parameter"})
    with pytest.raises(ApiErrorResponse) as excinfo:
        client.get_candles(CandlesRequest(symbol="BTC/USD", interval="M2", limit=3))
    assert excinfo.value.code == -1
    assert excinfo.value.msg == "Not supported interval parameter"


def test_get_candles_negative_limit_error_message(fake_session):
    fake_session.reply(
        400,
        {
            "timestamp": 1600000000000,
            "status": 400,
            "error": "Bad Request",
            "message": "Invalid limit parameter",
            "path": "/api/v1/candles",
        },
    )
    client = Client(session=fake_session)
    with pytest.raises(ServerErrorResponse) as excinfo:
        client.get_candles(CandlesRequest(symbol="BTC/USD", interval="M1", limit=-3))
    assert str(excinfo.value) == (
        "GET https://marketcap.backend.currency.com/api/v1/candles?interval=M1&limit=-3&symbol=BTC%2FUSD: "
        "[400 Bad Request] Invalid limit parameter"
    )


def test_get_candles_malformed_row_returns_nothing(client, fake_session):
    rows = _candle_rows(3)
    rows[2][3] = "n/a"
    fake_session.reply(200, rows)
    with pytest.raises(ParseError):
        client.get_candles(CandlesRequest(symbol="BTC/USD", interval="M1", limit=3))


def test_get_candles_object_payload_is_decode_error(client, fake_session):
    fake_session.reply(200, {"candles": []})
    with pytest.raises(DecodeError):
        client.get_candles(CandlesRequest(symbol="BTC/USD", interval="M1"))


def test_get_assets(client, fake_session):
    payload: Dict[str, Any] = {
        code: {
            "name": code.title(),
            "unified_cryptoasset_id": idx,
            "can_withdraw": "true",
            "can_deposit": "false",
            "min_withdraw": "0.0001",
            "max_withdraw": 100,
            "maker_fee": "0.2",
            "taker_fee": 0.2,
        }
        for idx, code in enumerate(["BTC", "ETH", "LTC", "XRP", "BCH", "EOS", "XLM", "TRX", "ADA", "DOT"], start=1)
    }
    fake_session.reply(200, payload)
    assets = client.get_assets()
    assert len(assets) == 10
    btc = assets["BTC"]
    assert btc.code == "BTC"
    assert btc.unified_cryptoasset_id == 1
    assert btc.can_withdraw is True
    assert btc.can_deposit is False
    assert btc.min_withdraw == 0.0001
    assert btc.maker_fee == btc.taker_fee == 0.2
    assert fake_session.sent[0].url == f"{BASE}/assets"


def test_get_orderbook_depth(client, fake_session):
    depth = 3
    fake_session.reply(
        200,
        {
            "timestamp": 1600000000123,
            "asks": [["10931.5", "0.5"], [10932, 1], ["10933", "2.25"]],
            "bids": [[10930, "0.1"], ["10929.5", 3], ["10929", "1"]],
        },
    )
    book = client.get_orderbook(OrderbookRequest(symbol="BTC/USD", depth=depth))
    assert len(book.asks) == depth
    assert len(book.bids) == depth
    assert book.asks[0].price == 10931.5
    assert book.bids[1].quantity == 3.0
    assert book.timestamp == 1600000000123
    assert fake_session.sent[0].url == f"{BASE}/orderbook?depth=3&symbol=BTC%2FUSD"


def test_get_orderbook_missing_side_is_decode_error(client, fake_session):
    fake_session.reply(200, {"asks": []})
    with pytest.raises(DecodeError):
        client.get_orderbook(OrderbookRequest(symbol="BTC/USD"))


def test_get_summary_object_and_list_forms(client, fake_session):
    entry = {
        "trading_pairs": "BTC/USD",
        "base_currency": "BTC",
        "quote_currency": "USD",
        "last_price": "10931",
        "lowest_ask": 10932,
        "highest_bid": "10930",
        "base_volume": "12.5",
        "quote_volume": "136637.5",
        "price_change_percent_24h": "-0.5",
        "highest_price_24h": "11000",
        "lowest_price_24h": "10800",
    }
    fake_session.reply(200, {"data": {"BTC/USD": entry}})
    fake_session.reply(200, {"data": [entry]})

    first = client.get_summary()
    second = client.get_summary()
    assert list(first.data) == ["BTC/USD"]
    assert list(second.data) == ["BTC/USD"]
    prop = first.data["BTC/USD"]
    assert prop.last_price == 10931.0
    assert prop.price_change_percent_24h == -0.5
    assert second.data["BTC/USD"].lowest_ask == 10932.0


def test_get_ticker(client, fake_session):
    fake_session.reply(
        200,
        {
            "BTC/USD": {
                "base_id": "1",
                "quote_id": "2781",
                "last_price": "10931",
                "base_volume": 12.5,
                "quote_volume": "136637.5",
                "isFrozen": 0,
                "price_change": {"percent_change_24h": "-0.5", "price_change_24h": -55},
            },
            "ETH/USD": {"base_id": "1027", "quote_id": "2781", "last_price": 370.1, "isFrozen": 1},
        },
    )
    tickers = client.get_ticker()
    assert set(tickers) == {"BTC/USD", "ETH/USD"}
    btc = tickers["BTC/USD"]
    assert btc.is_frozen is False
    assert btc.last_price == 10931.0
    assert btc.price_change is not None
    assert btc.price_change.percent_change_24h == -0.5
    assert btc.price_change.price_change_24h == -55.0
    assert tickers["ETH/USD"].is_frozen is True
    assert tickers["ETH/USD"].price_change is None


def test_get_trades(client, fake_session):
    fake_session.reply(
        200,
        [
            {
                "tradeID": 123456789012,
                "price": "10931.5",
                "base_volume": "0.01",
                "quote_volume": 109.315,
                "trade_timestamp": 1600000000123,
                "type": "buy",
            },
            {"tradeID": "123456789013", "price": 10930, "trade_timestamp": "1600000000456", "type": "sell"},
        ],
    )
    trades = client.get_trades(TradesRequest(symbol="BTC/USD"))
    assert len(trades) == 2
    assert trades[0].trade_id == 123456789012
    assert trades[0].price == 10931.5
    assert trades[1].trade_id == 123456789013
    assert trades[1].timestamp == 1600000000456
    assert trades[1].base_volume is None
    assert fake_session.sent[0].url == f"{BASE}/trades?symbol=BTC%2FUSD"


def test_trade_missing_id_is_decode_error(client, fake_session):
    fake_session.reply(200, [{"price": "1"}])
    with pytest.raises(DecodeError):
        client.get_trades(TradesRequest(symbol="BTC/USD"))


def test_repeated_calls_do_not_accumulate_path(client, fake_session):
    fake_session.reply(200, {})
    fake_session.reply(200, [])
    client.get_ticker()
    client.get_trades(TradesRequest(symbol="BTC/USD"))
    assert client.base_url == BASE
    assert fake_session.sent[1].url == f"{BASE}/trades?symbol=BTC%2FUSD"


def test_close_leaves_caller_session_open(monkeypatch, fake_session):
    closed = {"n": 0}
    monkeypatch.setattr(fake_session, "close", lambda: closed.__setitem__("n", closed["n"] + 1))
    with Client(session=fake_session):
        pass
    assert closed["n"] == 0


def test_default_client_owns_its_session(monkeypatch):
    client = Client()
    closed = {"n": 0}
    monkeypatch.setattr(client.session, "close", lambda: closed.__setitem__("n", closed["n"] + 1))
    client.close()
    assert closed["n"] == 1


@pytest.mark.parametrize("trade_id", ["1e400", "NaN"])
def test_trade_id_out_of_range_is_decode_error(client, fake_session, trade_id):
    fake_session.reply(200, f'[{{"tradeID": {trade_id}, "price": "1"}}]')
    with pytest.raises(DecodeError):
        client.get_trades(TradesRequest(symbol="BTC/USD"))


def test_orderbook_timestamp_out_of_range_is_decode_error(client, fake_session):
    fake_session.reply(200, '{"timestamp": 1e400, "asks": [], "bids": []}')
    with pytest.raises(DecodeError):
        client.get_orderbook(OrderbookRequest(symbol="BTC/USD"))


def test_asset_flag_must_be_boolean_like(client, fake_session):
    fake_session.reply(200, {"BTC": {"name": "Bitcoin", "can_withdraw": "maybe"}})
    with pytest.raises(DecodeError, match="not a boolean"):
        client.get_assets()


def test_asset_flag_accepts_false_words(client, fake_session):
    fake_session.reply(200, {"BTC": {"can_withdraw": "No", "can_deposit": "0"}})
    btc = client.get_assets()["BTC"]
    assert btc.can_withdraw is False
    assert btc.can_deposit is False
