"""
Client for Firebase callable Cloud Functions.

Callable functions speak a small JSON protocol over HTTPS POST:

    request:  {"data": <payload>}
    success:  {"result": <value>}
    failure:  {"error": {"status": "...", "message": "..."}}
"""

from __future__ import annotations

from typing import Any

import httpx

from prsystem.config import FUNCTIONS_TIMEOUT_SECONDS, get_functions_base_url
from prsystem.observability.logging import get_logger
from prsystem.observability.telemetry import time_block

logger = get_logger(__name__)


class CallableFunctionError(Exception):
    """A callable function failed or could not be reached."""

    def __init__(self, message: str, status: str = "INTERNAL"):
        super().__init__(message)
        self.status = status


class CallableFunctionsClient:
    """Invoke callable functions by name."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = FUNCTIONS_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or get_functions_base_url()).rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def call(self, name: str, data: dict[str, Any], id_token: str | None = None) -> Any:
        """
        Invoke ``name`` with ``data`` and return the function's result.

        Raises:
            CallableFunctionError: transport failure, non-2xx status, or an
                error payload returned by the function
        """
        headers = {"Content-Type": "application/json"}
        if id_token:
            headers["Authorization"] = f"Bearer {id_token}"

        url = f"{self.base_url}/{name}"
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                with time_block(f"functions.{name}"):
                    response = await client.post(url, json={"data": data}, headers=headers)
            except httpx.TimeoutException:
                logger.warning("Callable %s timed out", name)
                raise CallableFunctionError(f"{name} timed out", status="DEADLINE_EXCEEDED") from None
            except httpx.RequestError as e:
                logger.error("Callable %s request failed: %s", name, e)
                raise CallableFunctionError(f"{name} request failed: {e}", status="UNAVAILABLE") from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        error = body.get("error") if isinstance(body, dict) else None
        if error or response.status_code >= 400:
            error = error if isinstance(error, dict) else {}
            message = error.get("message") or f"HTTP {response.status_code}"
            logger.warning("Callable %s failed: %s", name, message)
            raise CallableFunctionError(message, status=error.get("status", "INTERNAL"))

        return body.get("result") if isinstance(body, dict) else None
