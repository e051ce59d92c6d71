# domain/models.py

import copy
import uuid
from dataclasses import dataclass, field, fields
from typing import List, Optional

MAX_LINE_ITEMS = 10  # number of rows the PI template supports
DEFAULT_EMAIL_SUBJECT = "Purchase Order – SRI CHAKRI TRADERS"

# Python attribute -> key expected by the document service
WIRE_KEYS = {
    "receiver_name": "receiverName",
    "receiver_address": "receiverAddress",
    "receiver_phone": "receiverPhone",
    "receiver_email": "receiverEmail",
    "receiver_gstin": "receiverGstin",
    "po_number": "poNumber",
    "po_date": "poDate",
    "transport_mode": "transportMode",
    "delivery_date": "deliveryDate",
    "destination": "destination",
    "cgst_rate": "cgstRate",
    "sgst_rate": "sgstRate",
    "igst_rate": "igstRate",
    "to_email": "toEmail",
    "email_subject": "emailSubject",
    "email_body": "emailBody",
}

FIELD_MAX_LENGTHS = {
    "receiver_name": 60,
    "receiver_address": 200,
    "receiver_phone": 20,
    "receiver_email": 80,
    "receiver_gstin": 20,
    "po_number": 30,
    "transport_mode": 40,
    "destination": 60,
}

ITEM_MAX_LENGTHS = {
    "particulars": 80,
    "hsn": 20,
    "dc_no": 20,
}


def _truncate(value: Optional[str], limit: Optional[int]) -> str:
    value = value or ""
    if limit is not None:
        return value[:limit]
    return value


@dataclass
class LineItem:
    """
    One row of the proforma invoice.

    Every value is kept as the text the user typed; `uid` only keys the
    widgets of this row and is never sent to the document service.
    """
    particulars: str = ""
    hsn: str = ""
    dc_no: str = ""
    rate: str = ""
    quantity: str = ""
    uid: str = field(default_factory=lambda: uuid.uuid4().hex)

    def set_field(self, name: str, value: Optional[str]) -> None:
        if name not in ("particulars", "hsn", "dc_no", "rate", "quantity"):
            raise AttributeError(f"Unknown line item field: {name}")
        setattr(self, name, _truncate(value, ITEM_MAX_LENGTHS.get(name)))

    def to_payload(self) -> dict:
        return {
            "particulars": self.particulars,
            "hsn": self.hsn,
            "dcNo": self.dc_no,
            "rate": self.rate,
            "quantity": self.quantity,
        }


@dataclass
class OrderRecord:
    """
    The single order owned by an interactive session.
    """
    receiver_name: str = ""
    receiver_address: str = ""
    receiver_phone: str = ""
    receiver_email: str = ""
    receiver_gstin: str = ""
    po_number: str = ""
    po_date: str = ""
    transport_mode: str = ""
    delivery_date: str = ""
    destination: str = ""
    cgst_rate: str = "0"
    sgst_rate: str = "0"
    igst_rate: str = "0"
    to_email: str = ""
    email_subject: str = DEFAULT_EMAIL_SUBJECT
    email_body: str = ""
    items: List[LineItem] = field(default_factory=lambda: [LineItem()])

    def set_field(self, name: str, value: Optional[str]) -> None:
        if name not in WIRE_KEYS:
            raise AttributeError(f"Unknown order field: {name}")
        setattr(self, name, _truncate(value, FIELD_MAX_LENGTHS.get(name)))

    def add_item(self) -> bool:
        if len(self.items) >= MAX_LINE_ITEMS:
            return False
        self.items.append(LineItem())
        return True

    def remove_item(self, index: int) -> bool:
        if not 0 <= index < len(self.items):
            raise IndexError(f"No line item at position {index}")
        if len(self.items) <= 1:
            return False
        del self.items[index]
        return True

    def index_of(self, uid: str) -> int:
        for idx, item in enumerate(self.items):
            if item.uid == uid:
                return idx
        raise KeyError(uid)

    @property
    def is_full(self) -> bool:
        return len(self.items) >= MAX_LINE_ITEMS

    def snapshot(self) -> "OrderRecord":
        return copy.deepcopy(self)

    def header_payload(self) -> dict:
        return {WIRE_KEYS[f.name]: getattr(self, f.name) for f in fields(self) if f.name in WIRE_KEYS}


@dataclass
class DocumentDownload:
    file_name: str
    data: bytes
    mime: str = "application/pdf"


@dataclass
class DeliveryStatus:
    """
    Outcome of one delivery action. Exactly one of `success` / `error` is set.
    """
    success: Optional[str] = None
    error: Optional[str] = None
    document: Optional[DocumentDownload] = None

    @classmethod
    def failed(cls, message: str) -> "DeliveryStatus":
        return cls(error=message)


@dataclass
class FormSession:
    """
    Everything one interactive session owns: the order, the in-flight action
    and the banners shown after the last action.
    """
    record: OrderRecord = field(default_factory=OrderRecord)
    in_flight: Optional[str] = None
    success: Optional[str] = None
    error: Optional[str] = None
    pending_document: Optional[DocumentDownload] = None

    @property
    def busy(self) -> bool:
        return self.in_flight is not None

    def begin(self, action: str) -> bool:
        if self.busy:
            return False
        self.in_flight = action
        self.success = None
        self.error = None
        self.pending_document = None
        return True

    def apply(self, status: DeliveryStatus) -> None:
        if status.error is not None:
            self.success, self.error = None, status.error
            self.pending_document = None
        else:
            self.success, self.error = status.success, None
            self.pending_document = status.document

    def finish(self) -> None:
        self.in_flight = None

    def take_document(self) -> Optional[DocumentDownload]:
        document, self.pending_document = self.pending_document, None
        return document
