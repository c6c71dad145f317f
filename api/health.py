"""
Liveness endpoint.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone

from fastapi import APIRouter

from auth.schemas import HealthResponse
from config.settings import config

router = APIRouter(tags=["health"])

_started_at = time.monotonic()


def format_uptime(seconds: float) -> str:
    """Render a duration as ``"1d 2h 3m 4s"`` (leading zero units omitted)."""
    total = int(seconds)
    days, rem = divmod(total, 86400)
    hours, rem = divmod(rem, 3600)
    minutes, secs = divmod(rem, 60)
    if days:
        return f"{days}d {hours}h {minutes}m {secs}s"
    if hours:
        return f"{hours}h {minutes}m {secs}s"
    if minutes:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="UP",
        timestamp=datetime.now(timezone.utc).isoformat(),
        uptime=format_uptime(time.monotonic() - _started_at),
        service=config.app_name,
        version=config.app_version,
    )
