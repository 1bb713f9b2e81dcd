"""Deribit public market data implementation."""

from __future__ import annotations

import logging
from typing import Any, Sequence

import requests

from ..contracts.interface import MarketDataSource
from ..core.config import BASE_URL, DEFAULT_TIMEOUT
from ..core.errors import ExchangeTransientError, MalformedPayloadError, MarketDataError
from ..models.shared import Currency, Instrument, InstrumentKind, TickerSnapshot

logger = logging.getLogger(__name__)

INSTRUMENTS_ENDPOINT = "/api/v2/public/get_instruments"
TICKER_ENDPOINT = "/api/v2/public/ticker"
# JSON-RPC error codes documented at https://docs.deribit.com/#rpc-error-codes
TOO_MANY_REQUESTS_CODE = 10028


class DeribitDataSource(MarketDataSource):
    """Requests-backed implementation of :class:`MarketDataSource`."""

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._session = session or requests.Session()
        self._owns_session = session is None
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    def __enter__(self) -> DeribitDataSource:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Public endpoints
    def get_instruments(
        self,
        currency: Currency = Currency.BTC,
        kind: InstrumentKind = InstrumentKind.FUTURE,
    ) -> Sequence[Instrument]:
        result = self._request(
            INSTRUMENTS_ENDPOINT,
            {"currency": currency.value, "kind": kind.value, "expired": "false"},
        )
        if not isinstance(result, list):
            raise MalformedPayloadError("Deribit instruments result is not a list")
        return [self._parse_instrument(entry) for entry in result]

    def get_ticker(self, instrument_name: str) -> TickerSnapshot:
        result = self._request(TICKER_ENDPOINT, {"instrument_name": instrument_name})
        if not isinstance(result, dict):
            raise MalformedPayloadError(f"Deribit ticker result for {instrument_name} is not an object")
        try:
            return TickerSnapshot(
                mark_price=float(result["mark_price"]),
                index_price=float(result["index_price"]),
            )
        except (KeyError, TypeError, ValueError, OverflowError) as exc:
            raise MalformedPayloadError(
                f"Unexpected Deribit ticker payload for {instrument_name}: {exc!r}"
            ) from exc

    # ------------------------------------------------------------------
    # Internal helpers
    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def _request(self, path: str, params: dict[str, Any]) -> Any:
        url = f"{self._base_url}{path}"
        logger.debug("GET %s %s", path, params)
        try:
            response = self._session.get(url, params=params, timeout=self._timeout)
        except requests.RequestException as exc:
            raise ExchangeTransientError(f"Failed to call Deribit endpoint {path}: {exc}") from exc

        payload = self._decode_response(response, path)
        if isinstance(payload, dict) and payload.get("error"):
            self._raise_api_error(payload["error"])
        if response.status_code >= 400:
            self._raise_http_error(response.status_code)
        if not isinstance(payload, dict) or "result" not in payload:
            raise MalformedPayloadError(f"Deribit endpoint {path} returned no result field")
        return payload["result"]

    def _decode_response(self, response: requests.Response, path: str) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            if response.status_code == 429 or response.status_code >= 500:
                raise ExchangeTransientError(f"HTTP {response.status_code} from Deribit endpoint {path}") from exc
            raise MalformedPayloadError(f"Deribit endpoint {path} returned a non-JSON payload") from exc

    def _raise_http_error(self, status_code: int) -> None:
        message = f"HTTP {status_code}"
        if status_code == 429 or status_code >= 500:
            raise ExchangeTransientError(message)
        raise MarketDataError(message)

    def _raise_api_error(self, error: Any) -> None:
        if not isinstance(error, dict):
            raise MarketDataError(f"Deribit error: {error}")
        code = error.get("code")
        msg = error.get("message") or f"Deribit error code {code}"
        if code == TOO_MANY_REQUESTS_CODE:
            raise ExchangeTransientError(msg)
        raise MarketDataError(msg)

    def _parse_instrument(self, raw: Any) -> Instrument:
        if not isinstance(raw, dict):
            raise MalformedPayloadError("Deribit instrument entry is not an object")
        try:
            return Instrument(
                name=str(raw["instrument_name"]),
                expiration_timestamp=int(raw["expiration_timestamp"]),
            )
        except (KeyError, TypeError, ValueError, OverflowError) as exc:
            raise MalformedPayloadError(f"Unexpected Deribit instrument payload: {exc!r}") from exc
