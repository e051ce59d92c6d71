# utils/formatting.py
import math
from typing import Optional


def format_amount(n: Optional[float]) -> str:
    """
    Two-decimal display value for the amount column.
    Example: 30 -> "30.00", NaN -> ""
    """
    if n is None or math.isnan(n):
        return ""
    return f"{n:.2f}"


def format_rupees(n: Optional[float]) -> str:
    """
    Example: 1234567.5 -> "Rs. 1,234,567.50"
    """
    display = format_amount(n)
    if not display:
        return ""
    return f"Rs. {n:,.2f}"
