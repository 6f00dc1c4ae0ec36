# coinbot/api/health.py
from __future__ import annotations

import time
from typing import Any, Dict

from fastapi import APIRouter, Request

from coinbot.utils.time import utcnow

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(request: Request) -> Dict[str, Any]:
    """Liveness only: no upstream call is made."""
    now = utcnow()
    started_at: float = request.app.state.started_at
    return {
        "ok": True,
        "uptime_s": int(time.time() - started_at),
        "now_iso": now.isoformat().replace("+00:00", "Z"),
        "upstream": request.app.state.settings.COINCAP_BASE_URL,
    }
