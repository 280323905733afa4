"""FastAPI server for the PR System glue endpoints"""

from __future__ import annotations

import os
from typing import Any

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from prsystem.api.routes.debug import router as debug_router
from prsystem.api.routes.health import router as health_router
from prsystem.api.routes.job_card import router as job_card_router
from prsystem.api.routes.notifications import router as notifications_router
from prsystem.config import APP_VERSION, ENVIRONMENTS, get_environment_config
from prsystem.observability.logging import get_logger
from prsystem.observability.telemetry import counter, log_event

# Load environment variables from .env file
load_dotenv()

logger = get_logger(__name__)

app = FastAPI(title="PR System API", version=APP_VERSION)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Return field names only; validation internals stay in the log.

    Side Effects:
        - Logs the full validation errors
        - Increments the api.validation_errors counter
    """
    logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
    counter("api.validation_errors")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": "Invalid request format. Please check your request and try again.",
            "error_count": len(exc.errors()),
            "invalid_fields": [str(err["loc"][-1]) for err in exc.errors()],
        },
    )


def _allowed_origins() -> list[str]:
    env = get_environment_config()
    origins = [env.base_url, env.pr_system_url]
    # Local frontends in development only
    if env.env == "development":
        origins.extend(
            [
                "http://localhost:5173",
                "http://127.0.0.1:5173",
                "http://localhost:3000",
            ]
        )
    extra = os.getenv("PR_EXTRA_CORS_ORIGINS", "")
    origins.extend(o.strip() for o in extra.split(",") if o.strip())
    return list(dict.fromkeys(origins))


app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Admin-Key"],
)

app.include_router(health_router)
app.include_router(job_card_router)
app.include_router(debug_router)
app.include_router(notifications_router)

log_event("api.startup", service="pr-system", version=APP_VERSION)


@app.get("/")
def root() -> dict[str, Any]:
    return {
        "service": "PR System API",
        "version": APP_VERSION,
        "status": "running",
        "environment": get_environment_config().env,
        "environments": sorted(ENVIRONMENTS),
        "endpoints": {
            "health": "/health",
            "job_card": "/job-card",
            "debug_user": "/api/debug/user",
            "force_refresh": "/api/debug/force-refresh",
            "test_email": "/api/test-email",
            "pr_link": "/api/pr-link/{pr_id}",
        },
    }


def main() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "prsystem.api.app:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8080")),
    )


if __name__ == "__main__":
    main()
