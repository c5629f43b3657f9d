"""
Tax deducted and collected at source.

Rate lookup for common TDS sections and helpers that total the amounts
already withheld, which are credited against the final liability.
"""

from typing import Dict, NamedTuple

from .models import TCSData, TDSData


class TDSRate(NamedTuple):
    rate: float
    rate_without_pan: float
    threshold: float


# Income type -> TDS rate (%), rate without PAN (Section 206AA), threshold
TDS_RATES: Dict[str, TDSRate] = {
    'salary': TDSRate(0, 0, 250000),
    'interest': TDSRate(10, 20, 40000),
    'dividends': TDSRate(10, 20, 5000),
    'rent': TDSRate(10, 20, 240000),
    'professional_fees': TDSRate(10, 20, 30000),
    'commission': TDSRate(5, 20, 15000),
    'contractor_payments': TDSRate(1, 20, 30000),
}

DEFAULT_TDS_RATE = TDSRate(10, 20, 0)


def calculate_tds_rate(income_type: str, amount: float, pan_available: bool = True) -> Dict[str, float]:
    """
    TDS applicable on a payment.

    Args:
        income_type: Key of TDS_RATES; unknown types use 10% / 20%
        amount: Payment amount
        pan_available: Whether the payee furnished a PAN

    Returns:
        Dictionary with rate, tds_amount and threshold. No tax is
        deducted when the amount does not exceed the threshold.
    """
    info = TDS_RATES.get(income_type, DEFAULT_TDS_RATE)
    rate = info.rate if pan_available else info.rate_without_pan
    tds_amount = amount * rate / 100 if amount > info.threshold else 0.0
    return {
        'rate': rate,
        'tds_amount': tds_amount,
        'threshold': info.threshold,
    }


def total_taxes_withheld(tds: TDSData = None, tcs: TCSData = None) -> float:
    """Total TDS and TCS credit available."""
    total = 0.0
    if tds is not None:
        total += tds.total
    if tcs is not None:
        total += tcs.total
    return total
