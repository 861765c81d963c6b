from __future__ import annotations

from datetime import date
from typing import Any, Dict, List

import httpx
import pytest

from src.domain.entities.values import UtilityType
from src.infrastructure.gateways.monitoring_gateway import (
    MonitoringServiceError,
    MonitoringServiceGateway,
)


class _StubResponse:
    def __init__(self, status_code: int, json_data: Any = None):
        self.status_code = status_code
        self._json = json_data
        self.text = "error"

    def json(self) -> Any:
        if isinstance(self._json, Exception):
            raise self._json
        return self._json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            request = httpx.Request("GET", "http://monitoring")
            response = httpx.Response(self.status_code, request=request, text=self.text)
            raise httpx.HTTPStatusError("error", request=request, response=response)


class _StubAsyncClient:
    def __init__(self, response: _StubResponse | Exception):
        self._response = response
        self.requests: List[Dict[str, Any]] = []

    async def __aenter__(self) -> "_StubAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url: str, **kwargs: Any):
        self.requests.append({"url": url, **kwargs})
        if isinstance(self._response, Exception):
            raise self._response
        return self._response


def _measurement(timestamp: str, value: float) -> Dict[str, Any]:
    return {
        "utilityType": "WATER",
        "consumptionValue": value,
        "unit": "m³",
        "timestamp": timestamp,
    }


def _patch_client(monkeypatch, response) -> _StubAsyncClient:
    client = _StubAsyncClient(response)
    monkeypatch.setattr("httpx.AsyncClient", lambda timeout: client)
    return client


@pytest.mark.asyncio
async def test_fetch_groups_by_utc_day_and_sorts(monkeypatch) -> None:
    payload = {
        "measurements": [
            _measurement("2025-01-03T10:00:00Z", 30.0),
            _measurement("2025-01-01T23:30:00-02:00", 20.0),
            _measurement("2025-01-01T08:00:00Z", 10.0),
        ]
    }
    client = _patch_client(monkeypatch, _StubResponse(200, payload))

    gateway = MonitoringServiceGateway("http://monitoring/")
    history = await gateway.fetch_historical_data(UtilityType.WATER)

    # 23:30 at -02:00 is 01:30 UTC on January 2nd
    assert [(h.timestamp, h.value.amount) for h in history] == [
        (date(2025, 1, 1), 10.0),
        (date(2025, 1, 2), 20.0),
        (date(2025, 1, 3), 30.0),
    ]
    assert client.requests[0]["url"] == "http://monitoring/measurements"
    assert client.requests[0]["params"] == {"utilityType": "WATER"}


@pytest.mark.asyncio
async def test_fetch_accepts_short_fractional_seconds(monkeypatch) -> None:
    payload = {"measurements": [_measurement("2025-01-05T06:00:00.12Z", 4.5)]}
    _patch_client(monkeypatch, _StubResponse(200, payload))

    gateway = MonitoringServiceGateway("http://monitoring")
    history = await gateway.fetch_historical_data(UtilityType.WATER)

    assert [(h.timestamp, h.value.amount) for h in history] == [
        (date(2025, 1, 5), 4.5)
    ]


@pytest.mark.asyncio
async def test_fetch_rejects_numeric_timestamp(monkeypatch) -> None:
    payload = {"measurements": [{"timestamp": 1735689600, "consumptionValue": 1.0}]}
    _patch_client(monkeypatch, _StubResponse(200, payload))

    gateway = MonitoringServiceGateway("http://monitoring")
    with pytest.raises(MonitoringServiceError, match="ISO 8601"):
        await gateway.fetch_historical_data(UtilityType.GAS)


@pytest.mark.asyncio
async def test_fetch_returns_empty_history(monkeypatch) -> None:
    _patch_client(monkeypatch, _StubResponse(200, {"measurements": []}))

    gateway = MonitoringServiceGateway("http://monitoring")
    assert await gateway.fetch_historical_data(UtilityType.GAS) == []


@pytest.mark.asyncio
async def test_fetch_rejects_several_measurements_per_day(monkeypatch) -> None:
    payload = {
        "measurements": [
            _measurement("2025-01-01T08:00:00Z", 10.0),
            _measurement("2025-01-01T20:00:00Z", 11.0),
        ]
    }
    _patch_client(monkeypatch, _StubResponse(200, payload))

    gateway = MonitoringServiceGateway("http://monitoring")
    with pytest.raises(MonitoringServiceError, match="exactly one measurement"):
        await gateway.fetch_historical_data(UtilityType.WATER)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"measurements": None},
        {"measurements": [{"timestamp": "2025-01-01T00:00:00Z"}]},
        {"measurements": [_measurement("yesterday", 1.0)]},
        {"measurements": [_measurement("2025-01-01T00:00:00Z", -1.0)]},
    ],
)
async def test_fetch_rejects_malformed_payloads(monkeypatch, payload) -> None:
    _patch_client(monkeypatch, _StubResponse(200, payload))

    gateway = MonitoringServiceGateway("http://monitoring")
    with pytest.raises(MonitoringServiceError):
        await gateway.fetch_historical_data(UtilityType.WATER)


@pytest.mark.asyncio
async def test_fetch_handles_http_error(monkeypatch) -> None:
    _patch_client(monkeypatch, _StubResponse(503))

    gateway = MonitoringServiceGateway("http://monitoring")
    with pytest.raises(MonitoringServiceError, match="503"):
        await gateway.fetch_historical_data(UtilityType.WATER)


@pytest.mark.asyncio
async def test_fetch_handles_transport_error(monkeypatch) -> None:
    request = httpx.Request("GET", "http://monitoring/measurements")
    _patch_client(monkeypatch, httpx.ConnectError("refused", request=request))

    gateway = MonitoringServiceGateway("http://monitoring")
    with pytest.raises(MonitoringServiceError, match="request failed"):
        await gateway.fetch_historical_data(UtilityType.WATER)


@pytest.mark.asyncio
async def test_fetch_handles_invalid_json(monkeypatch) -> None:
    _patch_client(monkeypatch, _StubResponse(200, ValueError("Expecting value")))

    gateway = MonitoringServiceGateway("http://monitoring")
    with pytest.raises(MonitoringServiceError, match="invalid JSON"):
        await gateway.fetch_historical_data(UtilityType.WATER)
