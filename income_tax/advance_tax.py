"""
Advance tax schedule.

Advance tax is due in four instalments during the financial year when
the tax payable after TDS/TCS exceeds ₹10,000 (Section 208). Each due
date carries a cumulative percentage of the annual liability.
"""

from dataclasses import dataclass
from datetime import date
from typing import List

ADVANCE_TAX_THRESHOLD = 10000.0


@dataclass(frozen=True)
class AdvanceTaxInstallment:
    """One advance tax instalment."""
    quarter: str
    due_date: str
    cumulative_percent: float
    amount: float


# (label, due date, cumulative % of annual tax)
ADVANCE_TAX_QUARTERS = [
    ("Q1", "15 Jun", 15.0),
    ("Q2", "15 Sep", 45.0),
    ("Q3", "15 Dec", 75.0),
    ("Q4", "15 Mar", 100.0),
]


def calculate_advance_tax_installments(annual_tax: float) -> List[AdvanceTaxInstallment]:
    """
    Split annual tax into advance tax instalments.

    Args:
        annual_tax: Tax payable for the year after TDS/TCS

    Returns:
        Four instalments (15%, 30%, 30%, 25% of the annual tax), each
        rounded to the rupee. All amounts are zero when the annual tax does
        not exceed ₹10,000.

    Examples:
        >>> [i.amount for i in calculate_advance_tax_installments(100000)]
        [15000, 30000, 30000, 25000]
    """
    installments = []
    paid_so_far = 0.0
    for quarter, due_date, cumulative_percent in ADVANCE_TAX_QUARTERS:
        if annual_tax <= ADVANCE_TAX_THRESHOLD:
            amount = 0
        else:
            cumulative = annual_tax * cumulative_percent / 100
            amount = round(cumulative - paid_so_far)
            paid_so_far = cumulative
        installments.append(AdvanceTaxInstallment(quarter, due_date, cumulative_percent, amount))
    return installments


def get_advance_tax_quarter(payment_date: date) -> str:
    """
    Instalment period a payment date falls into.

    Payments after 15 March belong to the last period of the year.

    Args:
        payment_date: Date of payment within the FY (April-March)

    Returns:
        Quarter label, e.g. 'Q2'
    """
    month, day = payment_date.month, payment_date.day
    if month in (4, 5) or (month == 6 and day <= 15):
        return "Q1"
    if month in (6, 7, 8) or (month == 9 and day <= 15):
        return "Q2"
    if month in (9, 10, 11) or (month == 12 and day <= 15):
        return "Q3"
    return "Q4"
