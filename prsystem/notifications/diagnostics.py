"""Send a test message through the backend email function."""

from __future__ import annotations

from pydantic import BaseModel

from prsystem.backend.functions import CallableFunctionsClient
from prsystem.config import (
    TEST_EMAIL_FUNCTION,
    TEST_EMAIL_MESSAGE,
    TEST_EMAIL_RECIPIENT,
    TEST_EMAIL_SUBJECT,
)
from prsystem.observability.logging import get_logger
from prsystem.observability.telemetry import counter

logger = get_logger(__name__)


class EmailTestResult(BaseModel):
    success: bool
    message: str


async def send_test_email(
    client: CallableFunctionsClient,
    id_token: str | None = None,
) -> EmailTestResult:
    """
    Ask ``sendTestEmail`` to mail the procurement inbox.

    Never raises: any failure becomes ``success=False`` with the error text.
    """
    logger.info("Sending test email to %s...", TEST_EMAIL_RECIPIENT)
    try:
        result = await client.call(
            TEST_EMAIL_FUNCTION,
            {
                "to": TEST_EMAIL_RECIPIENT,
                "subject": TEST_EMAIL_SUBJECT,
                "message": TEST_EMAIL_MESSAGE,
            },
            id_token=id_token,
        )
    except Exception as e:
        logger.error("Error sending test email: %s", e)
        counter("test_email.error")
        return EmailTestResult(success=False, message=f"Error: {e}")

    logger.info("Test email result: %s", result)
    counter("test_email.sent")
    return EmailTestResult(success=True, message="Test email sent successfully")
