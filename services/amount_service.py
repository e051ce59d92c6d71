# services/amount_service.py
import re
from dataclasses import dataclass
from typing import Optional

from domain.models import OrderRecord

# leading decimal number, the same prefix a browser's parseFloat would accept
_LEADING_NUMBER_RE = re.compile(r"\s*([+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")


def parse_amount(val: Optional[str]) -> float:
    """
    Lenient number parsing for live display.
    "12" -> 12.0, "2.5kg" -> 2.5, "", None, "abc" -> 0.0
    """
    if not val:
        return 0.0
    match = _LEADING_NUMBER_RE.match(val)
    if not match:
        return 0.0
    try:
        return float(match.group(1))
    except (OverflowError, ValueError):
        return 0.0


def line_amount(rate: Optional[str], quantity: Optional[str]) -> float:
    return parse_amount(rate) * parse_amount(quantity)


@dataclass
class OrderTotals:
    subtotal: float
    cgst: float
    sgst: float
    igst: float

    @property
    def tax_total(self) -> float:
        return self.cgst + self.sgst + self.igst

    @property
    def grand_total(self) -> float:
        return self.subtotal + self.tax_total


def order_totals(record: OrderRecord) -> OrderTotals:
    """
    Totals shown under the line-item table. Tax amounts are percentages of
    the subtotal; like line amounts they never raise on half-typed input.
    """
    subtotal = sum(line_amount(row.rate, row.quantity) for row in record.items)

    return OrderTotals(
        subtotal=subtotal,
        cgst=subtotal * parse_amount(record.cgst_rate) / 100,
        sgst=subtotal * parse_amount(record.sgst_rate) / 100,
        igst=subtotal * parse_amount(record.igst_rate) / 100,
    )
