# coinbot/api/webhook.py
from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Request, Response
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from coinbot.config.settings import Settings
from coinbot.errors import MalformedRequest, RequestTimeout, WebhookError
from coinbot.schemas.webhook import WebhookRequest, WebhookResponse
from coinbot.services.coincap import MarketDataClient
from coinbot.services.intents import dispatch


logger = logging.getLogger("coinbot.webhook")

router = APIRouter(tags=["webhook"])


async def _read_request(request: Request, timeout: float) -> WebhookRequest:
    try:
        body = await asyncio.wait_for(request.body(), timeout=timeout)
    except asyncio.TimeoutError as exc:
        raise MalformedRequest(f"timed out reading request body after {timeout:g}s") from exc

    try:
        return WebhookRequest.model_validate_json(body)
    except ValidationError as exc:
        raise MalformedRequest(f"invalid webhook request: {exc.errors()[0]['msg']}") from exc


async def webhook_error_handler(request: Request, exc: WebhookError) -> PlainTextResponse:
    logger.warning("webhook failed | %s | %s", type(exc).__name__, exc)
    return PlainTextResponse(f"ERROR: {exc}", status_code=500)


@router.post("/webhook")
async def handle_webhook(request: Request) -> Response:
    settings: Settings = request.app.state.settings
    market_data: MarketDataClient = request.app.state.market_data

    webhook_request = await _read_request(request, settings.READ_TIMEOUT_S)
    logger.info(
        "webhook request | intent=%s | session=%s | params=%s",
        webhook_request.intent_name,
        webhook_request.session,
        webhook_request.query_result.parameters,
    )

    try:
        text = await asyncio.wait_for(
            dispatch(webhook_request, market_data, settings),
            timeout=settings.WRITE_TIMEOUT_S,
        )
    except asyncio.TimeoutError as exc:
        raise RequestTimeout(
            f"intent '{webhook_request.intent_name}' not handled within {settings.WRITE_TIMEOUT_S:g}s"
        ) from exc

    payload = WebhookResponse.from_text(text)
    logger.info("webhook response | intent=%s | lines=%s", webhook_request.intent_name, payload.lines())
    return Response(content=payload.to_json(), media_type="application/json")
