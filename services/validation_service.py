# services/validation_service.py
import re
from typing import Optional

from domain.models import OrderRecord, WIRE_KEYS

NUMERIC_RE = re.compile(r"[0-9]+(\.[0-9]+)?")

REQUIRED_FIELDS = ["receiver_name", "receiver_phone", "po_number"]

TAX_FIELDS = [
    ("cgst_rate", "CGST"),
    ("sgst_rate", "SGST"),
    ("igst_rate", "IGST"),
]


def is_numeric(val: Optional[str]) -> bool:
    """Non-negative integer, optionally with a decimal fraction: "3", "2.5"."""
    return bool(val) and NUMERIC_RE.fullmatch(val) is not None


def validate(record: OrderRecord, require_recipient_email: bool = False) -> Optional[str]:
    """
    Check the order before it is sent anywhere.
    Returns None when the order can be submitted, otherwise the message for
    the first problem found.
    """
    required = list(REQUIRED_FIELDS)
    if require_recipient_email:
        required.append("to_email")

    for name in required:
        if not (getattr(record, name) or "").strip():
            return f'Field "{WIRE_KEYS[name]}" is required.'

    for name, label in TAX_FIELDS:
        if not is_numeric(getattr(record, name) or "0"):
            return f"Invalid {label} value."

    if not record.items:
        return "At least one line item is required."

    for idx, row in enumerate(record.items, start=1):
        if not (row.particulars or "").strip():
            return f"Row {idx}: particulars is required."
        if not is_numeric(row.rate):
            return f"Row {idx}: rate must be numeric."
        if not is_numeric(row.quantity):
            return f"Row {idx}: quantity must be numeric."

    return None
