"""Pydantic models for the CoinCap v2 assets payloads.

CoinCap ships every numeric field as a decimal string. The records keep the
text as-is; ``parse_decimal`` is the single place where text becomes a float.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from coinbot.errors import ParseError


_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_decimal(field: str, value: Optional[str]) -> float:
    """Convert an upstream decimal string to float or raise ParseError."""
    if value is None:
        raise ParseError(field, value)
    text = value.strip()
    if not _DECIMAL_RE.fullmatch(text):
        raise ParseError(field, value)
    return float(text)


def _numbers_as_text(value: Any) -> Any:
    # bool is an int subclass; leave it for pydantic to reject
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return repr(value)
    return value


class AssetData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    rank: str
    symbol: str
    name: str
    supply: Optional[str] = None
    max_supply: Optional[str] = Field(default=None, alias="maxSupply")
    market_cap_usd: Optional[str] = Field(default=None, alias="marketCapUsd")
    volume_usd_24h: Optional[str] = Field(default=None, alias="volumeUsd24Hr")
    price_usd: Optional[str] = Field(default=None, alias="priceUsd")
    change_percent_24h: Optional[str] = Field(default=None, alias="changePercent24Hr")
    vwap_24h: Optional[str] = Field(default=None, alias="vwap24Hr")

    @field_validator(
        "rank",
        "supply",
        "max_supply",
        "market_cap_usd",
        "volume_usd_24h",
        "price_usd",
        "change_percent_24h",
        "vwap_24h",
        mode="before",
    )
    @classmethod
    def coerce_text(cls, value: Any) -> Any:
        return _numbers_as_text(value)


class AssetPayload(BaseModel):
    """GET /assets/{id}: the snapshot plus its capture time in epoch ms."""

    timestamp: int
    data: AssetData


class HistoryPoint(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    price_usd: str = Field(alias="priceUsd")
    time: int
    date: datetime

    @field_validator("price_usd", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Any:
        return _numbers_as_text(value)


class HistoryPayload(BaseModel):
    """GET /assets/{id}/history: points ordered oldest first."""

    timestamp: Optional[int] = None
    data: list[HistoryPoint]
