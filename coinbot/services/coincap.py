"""Client for the public CoinCap v2 assets API."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from coinbot.errors import DecodeError, InsufficientHistory, NetworkError, UnknownAsset
from coinbot.schemas.coincap import AssetPayload, HistoryPayload, HistoryPoint


class MarketDataClient(Protocol):
    """What the intent handlers need from a market-data source."""

    async def fetch_current(self, asset_id: str) -> AssetPayload:
        ...

    async def fetch_history(self, asset_id: str, interval: str) -> tuple[HistoryPoint, HistoryPoint]:
        """Return (current, previous): the last two points of the interval series."""
        ...


class CoinCapClient:
    """
    One fresh HTTP round trip per call: no retries, no caching.

    ``transport`` lets tests plug in ``httpx.MockTransport``; ``timeout`` of
    None keeps httpx's default.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._logger = logger if logger is not None else logging.getLogger("coinbot.coincap")

    async def _get_json(self, asset_id: str, path: str, params: dict[str, str] | None = None) -> Any:
        url = f"{self.base_url}/{path}"
        client_kwargs: dict[str, Any] = {"transport": self._transport}
        if self._timeout is not None:
            client_kwargs["timeout"] = self._timeout

        self._logger.debug("upstream GET | %s | params=%s", url, params)
        try:
            async with httpx.AsyncClient(**client_kwargs) as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise NetworkError(f"unable to reach CoinCap: {exc}") from exc

        if response.status_code == 404:
            raise UnknownAsset(asset_id)
        if response.is_error:
            raise NetworkError(f"CoinCap answered HTTP {response.status_code} for {url}")

        try:
            body = response.json()
        except ValueError as exc:
            raise DecodeError(f"CoinCap returned a non-JSON body for {url}") from exc

        if not isinstance(body, dict):
            raise DecodeError(f"CoinCap returned an unexpected payload for {url}")
        return body

    async def fetch_current(self, asset_id: str) -> AssetPayload:
        body = await self._get_json(asset_id, quote(asset_id, safe=""))

        # CoinCap reports unknown ids either as {"error": "..."} or as an empty data object
        if body.get("error") or not body.get("data"):
            raise UnknownAsset(asset_id)

        try:
            return AssetPayload.model_validate(body)
        except ValidationError as exc:
            raise DecodeError(f"unexpected asset payload for {asset_id}: {exc.error_count()} invalid field(s)") from exc

    async def fetch_history(self, asset_id: str, interval: str) -> tuple[HistoryPoint, HistoryPoint]:
        body = await self._get_json(
            asset_id,
            f"{quote(asset_id, safe='')}/history",
            params={"interval": interval},
        )

        if body.get("error"):
            raise DecodeError(f"CoinCap rejected history for {asset_id} ({interval}): {body['error']}")

        try:
            history = HistoryPayload.model_validate(body)
        except ValidationError as exc:
            raise DecodeError(f"unexpected history payload for {asset_id}: {exc.error_count()} invalid field(s)") from exc

        points = history.data
        if len(points) < 2:
            raise InsufficientHistory(asset_id, len(points))

        return points[-1], points[-2]
