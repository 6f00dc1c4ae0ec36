# coinbot/main.py
from __future__ import annotations

import logging
import time
from typing import Optional

from fastapi import FastAPI

from coinbot.api.health import router as health_router
from coinbot.api.webhook import router as webhook_router, webhook_error_handler
from coinbot.config.settings import Settings, get_settings
from coinbot.errors import WebhookError
from coinbot.services.coincap import CoinCapClient, MarketDataClient

logger = logging.getLogger("coinbot.app")


def create_app(
    settings: Optional[Settings] = None,
    market_data: Optional[MarketDataClient] = None,
) -> FastAPI:
    """
    Build the webhook application.

    Settings and the market-data client are handed to the routes through
    ``app.state``; pass a fake client to run without network access.
    Nothing is built at import time: serve it through ``coinbot.server`` or
    ``uvicorn --factory coinbot.main:create_app``.
    """
    settings = settings or get_settings()
    if market_data is None:
        market_data = CoinCapClient(
            settings.COINCAP_BASE_URL,
            timeout=settings.UPSTREAM_TIMEOUT_S,
            logger=logging.getLogger("coinbot.coincap"),
        )

    app = FastAPI(title="CoinCap Dialogflow Webhook")
    app.state.settings = settings
    app.state.market_data = market_data
    app.state.started_at = time.time()

    # Routers
    app.include_router(health_router)
    app.include_router(webhook_router)

    app.add_exception_handler(WebhookError, webhook_error_handler)

    @app.get("/")
    def root() -> dict[str, str]:
        return {"message": "CoinCap webhook is up. POST /webhook"}

    @app.on_event("startup")
    async def on_startup() -> None:
        logger.info("webhook ready | upstream=%s | tz=%s", settings.COINCAP_BASE_URL, settings.DISPLAY_TIMEZONE)

    return app
