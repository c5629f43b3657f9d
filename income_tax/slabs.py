"""
Slab tax engine.

Applies progressive bracket arithmetic to a taxable income figure.
Each bracket taxes only the slice of income that falls inside it, so the
top marginal rate applies to the excess over the last bracket's minimum.
"""

from dataclasses import dataclass
from typing import Dict, List, Any


@dataclass(frozen=True)
class TaxSlab:
    """
    A single progressive tax bracket.

    Attributes:
        min: Lower bound of the bracket (exclusive of tax below it)
        max: Upper bound of the bracket (float('inf') for the top bracket)
        rate: Tax rate in percent applied to income inside the bracket
    """
    min: float
    max: float
    rate: float


INFINITY = float("inf")

# Old Tax Regime slabs (FY 2024-25)
OLD_REGIME_SLABS: Dict[str, List[TaxSlab]] = {
    # Below 60 years
    "regular": [
        TaxSlab(0, 250000, 0),
        TaxSlab(250000, 500000, 5),
        TaxSlab(500000, 1000000, 20),
        TaxSlab(1000000, INFINITY, 30),
    ],
    # 60 to 79 years
    "senior": [
        TaxSlab(0, 300000, 0),
        TaxSlab(300000, 500000, 5),
        TaxSlab(500000, 1000000, 20),
        TaxSlab(1000000, INFINITY, 30),
    ],
    # 80 years and above
    "super_senior": [
        TaxSlab(0, 500000, 0),
        TaxSlab(500000, 1000000, 20),
        TaxSlab(1000000, INFINITY, 30),
    ],
}

# New Tax Regime slabs (FY 2024-25), same for all ages
NEW_REGIME_SLABS: List[TaxSlab] = [
    TaxSlab(0, 300000, 0),
    TaxSlab(300000, 700000, 5),
    TaxSlab(700000, 1000000, 10),
    TaxSlab(1000000, 1200000, 15),
    TaxSlab(1200000, 1500000, 20),
    TaxSlab(1500000, INFINITY, 30),
]


def calculate_tax_on_slabs(taxable_income: float, slabs: List[TaxSlab]) -> float:
    """
    Calculate tax on income using progressive slabs.

    Args:
        taxable_income: Non-negative taxable income
        slabs: Ascending, non-overlapping brackets; the last one unbounded

    Returns:
        Total tax across all brackets

    Examples:
        >>> calculate_tax_on_slabs(600000, OLD_REGIME_SLABS["regular"])
        32500.0
    """
    tax = 0.0
    for slab in slabs:
        if taxable_income > slab.min:
            taxable_in_slab = min(taxable_income, slab.max) - slab.min
            tax += taxable_in_slab * slab.rate / 100
    return tax


def get_old_regime_slabs(age: int) -> List[TaxSlab]:
    """
    Select the old regime slab table for an age.

    Args:
        age: Taxpayer age on the last day of the financial year

    Returns:
        Regular (<60), senior (60-79) or super senior (80+) slabs
    """
    from .rates import TaxRates  # rates imports this module
    return TaxRates().slabs_for_old_regime(age)


def slab_breakdown(taxable_income: float, slabs: List[TaxSlab]) -> List[Dict[str, Any]]:
    """
    Per-bracket breakdown of the slab computation, for reports.

    Only brackets that actually hold part of the income are returned.
    """
    rows = []
    for slab in slabs:
        if taxable_income <= slab.min:
            break
        income_in_slab = min(taxable_income, slab.max) - slab.min
        if slab.max == INFINITY:
            label = f"{slab.min:,.0f}+"
        else:
            label = f"{slab.min:,.0f} - {slab.max:,.0f}"
        rows.append({
            "range": label,
            "rate": slab.rate,
            "income": income_in_slab,
            "tax": income_in_slab * slab.rate / 100,
        })
    return rows
