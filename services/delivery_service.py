# services/delivery_service.py

import logging
import time
from typing import Callable, Dict, Optional

import httpx

from config import (
    GENERATE_AND_EMAIL_PDF_PATH,
    GENERATE_PDF_PATH,
    REQUEST_TIMEOUT_MS,
)
from domain.errors import SubmissionError
from domain.models import DeliveryStatus, DocumentDownload, OrderRecord
from services.submission_service import SubmissionResult, submit
from services.validation_service import validate

logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = "Request timed out. The document service may be waking up. Please try again."
UNEXPECTED_MESSAGE = "Unexpected error"

DOWNLOAD_SUCCESS = "PDF generated and downloaded successfully."
EMAIL_SUCCESS = "PDF generated and emailed successfully."

DOCUMENT_EXTENSION = ".pdf"


def build_payload(record: OrderRecord, logo_data_url: Optional[str] = None) -> Dict:
    """
    Flatten the order into the JSON body the document service expects.
    Rates and quantities stay strings, exactly as typed.
    """
    payload = record.header_payload()
    payload["items"] = [row.to_payload() for row in record.items]
    payload["piDate"] = record.po_date
    payload["logoDataUrl"] = logo_data_url
    return payload


def document_file_name(record: OrderRecord, now: Optional[float] = None) -> str:
    stem = record.po_number or str(int((now if now is not None else time.time()) * 1000))
    return f"proforma-invoice-{stem}{DOCUMENT_EXTENSION}"


async def submit_order(
        record: OrderRecord,
        *,
        base_url: str,
        endpoint_path: str,
        require_recipient_email: bool,
        expect_content: bool,
        on_success: Callable[[OrderRecord, SubmissionResult], DeliveryStatus],
        failure_fallback: str,
        logo_data_url: Optional[str] = None,
        timeout_ms: int = REQUEST_TIMEOUT_MS,
        client: Optional[httpx.AsyncClient] = None,
) -> DeliveryStatus:
    """
    validate -> build payload -> submit -> classify.

    Works on a snapshot of `record`, so edits made while the request is out
    never leak into it. Every failure comes back as a DeliveryStatus with an
    error message; nothing is raised to the caller.
    """
    order = record.snapshot()

    validation_error = validate(order, require_recipient_email=require_recipient_email)
    if validation_error:
        logger.info("Order rejected before submission: %s", validation_error)
        return DeliveryStatus.failed(validation_error)

    payload = build_payload(order, logo_data_url)

    try:
        result = await submit(
            f"{base_url.rstrip('/')}{endpoint_path}",
            payload,
            timeout_ms,
            expect_content=expect_content,
            client=client,
        )
    except SubmissionError as e:
        if e.is_timeout:
            return DeliveryStatus.failed(TIMEOUT_MESSAGE)
        return DeliveryStatus.failed(e.message or failure_fallback)
    except Exception as e:
        logger.exception("Unexpected failure submitting PO %s", order.po_number)
        return DeliveryStatus.failed(str(e) or UNEXPECTED_MESSAGE)

    return on_success(order, result)


def _offer_document(order: OrderRecord, result: SubmissionResult) -> DeliveryStatus:
    document = DocumentDownload(
        file_name=document_file_name(order),
        data=result.content or b"",
    )
    logger.info("Generated %s (%d bytes)", document.file_name, len(document.data))
    return DeliveryStatus(success=DOWNLOAD_SUCCESS, document=document)


def _confirm_dispatch(order: OrderRecord, result: SubmissionResult) -> DeliveryStatus:
    logger.info("PO %s dispatched by email", order.po_number)
    return DeliveryStatus(success=EMAIL_SUCCESS)


async def download_document(record: OrderRecord, *, base_url: str, **kwargs) -> DeliveryStatus:
    return await submit_order(
        record,
        base_url=base_url,
        endpoint_path=GENERATE_PDF_PATH,
        require_recipient_email=False,
        expect_content=True,
        on_success=_offer_document,
        failure_fallback="Failed to generate PDF",
        **kwargs,
    )


async def email_document(record: OrderRecord, *, base_url: str, **kwargs) -> DeliveryStatus:
    return await submit_order(
        record,
        base_url=base_url,
        endpoint_path=GENERATE_AND_EMAIL_PDF_PATH,
        require_recipient_email=True,
        expect_content=False,
        on_success=_confirm_dispatch,
        failure_fallback="Failed to generate / email PDF",
        **kwargs,
    )
