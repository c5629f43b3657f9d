"""
Utility functions for the Income Tax Calculator.

This module contains helpers for parsing user-entered amounts and dates
and for formatting rupee amounts in reports.
"""

from datetime import date, datetime
from typing import Optional


def parse_amount(value) -> float:
    """
    Parse an amount entered as text or number to float.

    Args:
        value: Amount such as '₹1,23,456.50', '1,500', 2500 or ''

    Returns:
        Float value; empty or missing values are 0.0

    Raises:
        ValueError: If value is not a number after stripping ₹ and commas

    Examples:
        >>> parse_amount('₹1,23,456.50')
        123456.5
        >>> parse_amount('')
        0.0
    """
    if value is None or str(value).strip() == "":
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    return float(str(value).replace("₹", "").replace("Rs.", "").replace(",", "").strip())


def parse_date(date_str: Optional[str]) -> Optional[date]:
    """
    Parse a date in YYYY-MM-DD or DD/MM/YYYY format.

    Args:
        date_str: Date string, or None

    Returns:
        date object, or None if date_str is empty

    Raises:
        ValueError: If date_str matches neither format
    """
    if not date_str:
        return None
    if not isinstance(date_str, str):
        raise ValueError(f"Date must be a string: {date_str!r}")
    for fmt in ("%Y-%m-%d", "%d/%m/%Y"):
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Could not parse date: {date_str}")


def format_currency_inr(amount: float, include_symbol: bool = True) -> str:
    """
    Format amount as Indian Rupees with lakh/crore grouping.

    Args:
        amount: Amount to format
        include_symbol: Whether to include ₹ symbol

    Returns:
        Formatted string (e.g., '₹1,23,456.78')

    Examples:
        >>> format_currency_inr(123456.78)
        '₹1,23,456.78'
        >>> format_currency_inr(-5000000, include_symbol=False)
        '-50,00,000.00'
    """
    sign = "-" if amount < 0 else ""
    whole, fraction = f"{abs(amount):.2f}".split(".")

    # Last three digits, then groups of two
    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])

    formatted = f"{sign}{whole}.{fraction}"
    return f"{sign}₹{formatted[len(sign):]}" if include_symbol else formatted


def format_percent(value: float) -> str:
    """Format a percentage with two decimals, e.g. '12.34%'."""
    return f"{value:.2f}%"
