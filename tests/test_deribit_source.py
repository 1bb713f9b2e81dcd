from __future__ import annotations

import pytest
import requests

from deribit_basis.core.catalog import list_instruments
from deribit_basis.core.errors import ExchangeTransientError, MalformedPayloadError, MarketDataError
from deribit_basis.core.poller import poll_once
from deribit_basis.core.state import FeedStatus, SnapshotBook
from deribit_basis.exchanges import deribit as deribit_module
from deribit_basis.exchanges.deribit import DeribitDataSource
from deribit_basis.models.shared import Currency, Instrument, InstrumentKind, TickerSnapshot
from tests.stubs import StubSession


@pytest.fixture()
def session_and_source():
    session = StubSession()
    source = DeribitDataSource(session=session)
    return session, source


def test_get_instruments_parses_entries(session_and_source):
    session, source = session_and_source
    session.queue(
        {
            "jsonrpc": "2.0",
            "result": [
                {"instrument_name": "BTC-27SEP24", "expiration_timestamp": 1727424000000, "kind": "future"},
                {"instrument_name": "BTC-PERPETUAL", "expiration_timestamp": 32503708800000, "kind": "future"},
            ],
        }
    )

    instruments = source.get_instruments(Currency.BTC, InstrumentKind.FUTURE)

    assert instruments == [
        Instrument("BTC-27SEP24", 1727424000000),
        Instrument("BTC-PERPETUAL", 32503708800000),
    ]
    call = session.calls[0]
    assert call["url"] == deribit_module.BASE_URL + deribit_module.INSTRUMENTS_ENDPOINT
    assert call["params"]["currency"] == "BTC"
    assert call["params"]["kind"] == "future"
    assert call["params"]["expired"] == "false"
    assert call["timeout"] == deribit_module.DEFAULT_TIMEOUT


def test_get_ticker_parses_prices(session_and_source):
    session, source = session_and_source
    session.queue({"jsonrpc": "2.0", "result": {"mark_price": 30500.5, "index_price": 30000, "last_price": 1}})

    ticker = source.get_ticker("BTC-PERPETUAL")

    assert ticker == TickerSnapshot(mark_price=30500.5, index_price=30000.0)
    assert session.calls[-1]["url"].endswith(deribit_module.TICKER_ENDPOINT)
    assert session.calls[-1]["params"] == {"instrument_name": "BTC-PERPETUAL"}


def test_base_url_trailing_slash_is_stripped():
    session = StubSession()
    source = DeribitDataSource(session=session, base_url="https://test.deribit.com/")
    session.queue({"result": []})

    source.get_instruments()

    assert session.calls[0]["url"] == "https://test.deribit.com/api/v2/public/get_instruments"


def test_network_failure_is_transient(session_and_source):
    session, source = session_and_source
    session.queue_error(requests.ConnectionError("connection refused"))

    with pytest.raises(ExchangeTransientError):
        source.get_ticker("BTC-PERPETUAL")


def test_non_json_body_is_malformed(session_and_source):
    session, source = session_and_source
    session.queue(ValueError("Expecting value"))

    with pytest.raises(MalformedPayloadError):
        source.get_ticker("BTC-PERPETUAL")


def test_non_json_server_error_is_transient(session_and_source):
    session, source = session_and_source
    session.queue(ValueError("Expecting value"), status_code=502)

    with pytest.raises(ExchangeTransientError):
        source.get_ticker("BTC-PERPETUAL")


def test_ticker_missing_field_is_malformed(session_and_source):
    session, source = session_and_source
    session.queue({"result": {"mark_price": 1.0}})

    with pytest.raises(MalformedPayloadError):
        source.get_ticker("BTC-PERPETUAL")


def test_ticker_null_price_is_malformed(session_and_source):
    session, source = session_and_source
    session.queue({"result": {"mark_price": None, "index_price": 1.0}})

    with pytest.raises(MalformedPayloadError):
        source.get_ticker("BTC-PERPETUAL")


def test_instruments_result_must_be_a_list(session_and_source):
    session, source = session_and_source
    session.queue({"result": {"instrument_name": "BTC-PERPETUAL"}})

    with pytest.raises(MalformedPayloadError):
        source.get_instruments()


def test_missing_result_is_malformed(session_and_source):
    session, source = session_and_source
    session.queue({"jsonrpc": "2.0"})

    with pytest.raises(MalformedPayloadError):
        source.get_instruments()


def test_rpc_error_maps_to_market_data_error(session_and_source):
    session, source = session_and_source
    session.queue({"error": {"message": "instrument_not_found", "code": 13020}}, status_code=400)

    with pytest.raises(MarketDataError, match="instrument_not_found") as info:
        source.get_ticker("BTC-NOPE")
    assert not isinstance(info.value, ExchangeTransientError)


def test_rate_limit_error_is_transient(session_and_source):
    session, source = session_and_source
    session.queue({"error": {"message": "too_many_requests", "code": 10028}}, status_code=429)

    with pytest.raises(ExchangeTransientError):
        source.get_ticker("BTC-PERPETUAL")


def test_http_server_error_is_transient(session_and_source):
    session, source = session_and_source
    session.queue({"result": None}, status_code=503)

    with pytest.raises(ExchangeTransientError):
        source.get_ticker("BTC-PERPETUAL")


def test_close_leaves_injected_session_open(session_and_source):
    session, source = session_and_source

    source.close()

    assert session.closed is False


def test_infinite_expiration_is_malformed(session_and_source):
    session, source = session_and_source
    session.queue({"result": [{"instrument_name": "BTC-PERPETUAL", "expiration_timestamp": float("inf")}]})

    with pytest.raises(MalformedPayloadError):
        source.get_instruments()


def test_infinite_expiration_yields_empty_catalog(session_and_source):
    session, source = session_and_source
    session.queue({"result": [{"instrument_name": "BTC-PERPETUAL", "expiration_timestamp": float("inf")}]})

    assert list_instruments(source) == []


def test_out_of_range_price_is_malformed(session_and_source):
    session, source = session_and_source
    session.queue({"result": {"mark_price": 10**400, "index_price": 30000}})

    with pytest.raises(MalformedPayloadError):
        source.get_ticker("BTC-PERPETUAL")


def test_out_of_range_price_marks_instrument_malformed(session_and_source):
    session, source = session_and_source
    session.queue({"result": {"mark_price": 10**400, "index_price": 30000}})
    book = SnapshotBook()
    instrument = Instrument("BTC-PERPETUAL", 32503708800000, perpetual=True)

    assert poll_once(source, book, instrument) is FeedStatus.MALFORMED
    assert book.get(instrument) is TickerSnapshot.EMPTY
