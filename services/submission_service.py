# services/submission_service.py
import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from config import REQUEST_TIMEOUT_MS
from domain.errors import SubmissionError, SubmissionErrorKind

logger = logging.getLogger(__name__)

TRANSPORT_ERRORS = (httpx.HTTPError, httpx.InvalidURL, OSError)


@dataclass
class SubmissionResult:
    status_code: int
    content: Optional[bytes] = None


def error_message_from_response(status_code: int, content_type: str, body: bytes) -> str:
    """
    Pull a readable message out of a failed response.
    JSON bodies: "error", then "message". Anything else: the body text.
    """
    fallback = f"Request failed ({status_code})"

    if "application/json" in (content_type or ""):
        try:
            data = json.loads(body)
        except ValueError:
            return fallback
        if not isinstance(data, dict):
            return fallback
        message = data.get("error") or data.get("message")
        return str(message) if message else fallback

    text = body.decode("utf-8", errors="replace")
    return text or fallback


async def submit(
        endpoint: str,
        payload: Dict[str, Any],
        timeout_ms: int = REQUEST_TIMEOUT_MS,
        *,
        expect_content: bool = True,
        client: Optional[httpx.AsyncClient] = None,
) -> SubmissionResult:
    """
    POST `payload` as JSON to `endpoint`.

    Waiting for the response headers is raced against `timeout_ms`; if the
    timer wins the request task is cancelled and a TIMEOUT error is raised.
    Non-2xx responses raise SERVICE errors, any other transport failure
    raises UNEXPECTED.
    """
    owns_client = client is None
    if owns_client:
        # the header race below is the only deadline
        client = httpx.AsyncClient(timeout=None)

    try:
        logger.info("Submitting order to %s", endpoint)

        try:
            request = client.build_request("POST", endpoint, json=payload)
            response = await asyncio.wait_for(
                client.send(request, stream=True),
                timeout=timeout_ms / 1000,
            )
        except asyncio.TimeoutError:
            logger.warning("No response from %s within %d ms", endpoint, timeout_ms)
            raise SubmissionError(
                f"Request timed out after {timeout_ms} ms",
                kind=SubmissionErrorKind.TIMEOUT,
            ) from None
        except TRANSPORT_ERRORS as e:
            logger.error("Transport error talking to %s: %s", endpoint, e)
            raise SubmissionError(str(e) or type(e).__name__, kind=SubmissionErrorKind.UNEXPECTED) from e

        try:
            content_type = response.headers.get("content-type", "")

            if not response.is_success:
                try:
                    body = await response.aread()
                except TRANSPORT_ERRORS as e:
                    logger.warning("Could not read error body from %s: %s", endpoint, e)
                    body = b""
                message = error_message_from_response(response.status_code, content_type, body)
                logger.warning("Document service answered %d: %s", response.status_code, message)
                raise SubmissionError(
                    message,
                    kind=SubmissionErrorKind.SERVICE,
                    status_code=response.status_code,
                )

            content = await response.aread() if expect_content else None
            logger.info("Document service answered %d", response.status_code)
            return SubmissionResult(
                status_code=response.status_code,
                content=content,
            )
        except TRANSPORT_ERRORS as e:
            logger.error("Failed reading response from %s: %s", endpoint, e)
            raise SubmissionError(str(e) or type(e).__name__, kind=SubmissionErrorKind.UNEXPECTED) from e
        finally:
            await response.aclose()
    finally:
        if owns_client:
            await client.aclose()
