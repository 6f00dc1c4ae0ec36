from __future__ import annotations

import copy
from typing import Any, Callable

import pytest

from coinbot.config.settings import Settings
from coinbot.schemas.coincap import AssetPayload, HistoryPoint


# 2023-11-14T22:13:20Z -> 15.11.2023 00:13:20 in Kyiv (EET, UTC+2)
CAPTURED_AT_MS = 1_700_000_000_000

_BITCOIN_PAYLOAD: dict[str, Any] = {
    "timestamp": CAPTURED_AT_MS,
    "data": {
        "id": "bitcoin",
        "rank": "1",
        "symbol": "BTC",
        "name": "Bitcoin",
        "supply": "19543000.0",
        "maxSupply": "21000000",
        "marketCapUsd": "723000000000.5",
        "volumeUsd24Hr": "15000000000.25",
        "priceUsd": "37000.123456789",
        "changePercent24Hr": "-1.23456",
        "vwap24Hr": "36950.5",
    },
}

_HISTORY_PAYLOAD: dict[str, Any] = {
    "timestamp": CAPTURED_AT_MS,
    "data": [
        {"priceUsd": "60", "time": 1_699_992_000_000, "date": "2023-11-14T20:00:00.000Z"},
        {"priceUsd": "80", "time": 1_699_995_600_000, "date": "2023-11-14T21:00:00.000Z"},
        {"priceUsd": "100", "time": 1_699_999_200_000, "date": "2023-11-14T22:00:00.000Z"},
    ],
}


def _settings_with(**overrides: Any) -> Settings:
    base = Settings(
        LISTEN_ADDR=":8080",
        COINCAP_BASE_URL="https://api.coincap.test/v2/assets",
        DISPLAY_TIMEZONE="Europe/Kyiv",
        READ_TIMEOUT_S=5.0,
        WRITE_TIMEOUT_S=10.0,
        IDLE_TIMEOUT_S=60.0,
        SHUTDOWN_GRACE_S=30.0,
        UPSTREAM_TIMEOUT_S=None,
        LOG_LEVEL="INFO",
    )
    return base.with_overrides(**overrides)


@pytest.fixture()
def bitcoin_json() -> dict[str, Any]:
    return copy.deepcopy(_BITCOIN_PAYLOAD)


@pytest.fixture()
def history_json() -> dict[str, Any]:
    return copy.deepcopy(_HISTORY_PAYLOAD)


@pytest.fixture()
def bitcoin(bitcoin_json) -> AssetPayload:
    return AssetPayload.model_validate(bitcoin_json)


@pytest.fixture()
def history_pair(history_json) -> tuple[HistoryPoint, HistoryPoint]:
    points = [HistoryPoint.model_validate(p) for p in history_json["data"]]
    return points[-1], points[-2]


@pytest.fixture()
def make_settings() -> Callable[..., Settings]:
    """Settings for tests; keyword arguments override single fields."""
    return _settings_with
