"""Health check endpoint for the PR System API."""

from __future__ import annotations

import os
from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter

from prsystem.config import APP_VERSION, get_environment_config, get_functions_base_url
from prsystem.observability.telemetry import get_latency_stats

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """
    Service status, credential readiness (presence only, no backend calls)
    and in-process latency stats for backend calls.
    """
    env = get_environment_config()
    return {
        "status": "healthy",
        "service": "PR System API",
        "version": APP_VERSION,
        "environment": env.env,
        "timestamp": datetime.now(UTC).isoformat(),
        "firebase": {
            "service_account": bool(os.getenv("FIREBASE_SERVICE_ACCOUNT")),
            "application_default": bool(os.getenv("GOOGLE_APPLICATION_CREDENTIALS")),
            "functions_base_url": get_functions_base_url(),
        },
        "latency_ms": get_latency_stats(),
    }
