# coinbot/services/intents.py
from __future__ import annotations

from typing import Awaitable, Callable, Dict

from coinbot.config.settings import Settings
from coinbot.errors import MissingParameter, UnknownIntent
from coinbot.schemas.webhook import WebhookRequest
from coinbot.services.coincap import MarketDataClient
from coinbot.services.formatters import format_history, format_info, format_price


IntentHandler = Callable[[WebhookRequest, MarketDataClient, Settings], Awaitable[str]]


def read_parameter(request: WebhookRequest, name: str) -> str:
    """
    Parameter value by exact (case-sensitive) name.
    Unfilled slots arrive as "" from the platform and count as missing.
    """
    value = request.query_result.parameters.get(name)
    if value is None:
        raise MissingParameter(name)

    text = str(value).strip()
    if not text:
        raise MissingParameter(name)
    return text


async def handle_price(request: WebhookRequest, market_data: MarketDataClient, settings: Settings) -> str:
    asset_id = read_parameter(request, "currency")
    asset = await market_data.fetch_current(asset_id)
    return format_price(asset, settings.DISPLAY_TIMEZONE)


async def handle_info(request: WebhookRequest, market_data: MarketDataClient, settings: Settings) -> str:
    asset_id = read_parameter(request, "currency")
    asset = await market_data.fetch_current(asset_id)
    return format_info(asset)


async def handle_history(request: WebhookRequest, market_data: MarketDataClient, settings: Settings) -> str:
    asset_id = read_parameter(request, "currency")
    interval = read_parameter(request, "history")
    current, previous = await market_data.fetch_history(asset_id, interval)
    return format_history(asset_id, current, previous, settings.DISPLAY_TIMEZONE)


INTENT_HANDLERS: Dict[str, IntentHandler] = {
    "price": handle_price,
    "info": handle_info,
    "history": handle_history,
}


async def dispatch(request: WebhookRequest, market_data: MarketDataClient, settings: Settings) -> str:
    handler = INTENT_HANDLERS.get(request.intent_name)
    if handler is None:
        raise UnknownIntent(request.intent_name)
    return await handler(request, market_data, settings)
