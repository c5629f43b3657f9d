"""
Statutory rates and thresholds for FY 2024-25 (AY 2025-26).

All constants used by the regime calculators are collected in the
TaxRates dataclass so that a calculator can be built against a different
set of rules without touching the computation code.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .slabs import TaxSlab, OLD_REGIME_SLABS, NEW_REGIME_SLABS


# (upper income limit, surcharge rate %); None means no upper limit
DEFAULT_SURCHARGE_TIERS: List[Tuple[float, float]] = [
    (5000000.0, 0.0),       # up to 50 lakh
    (10000000.0, 10.0),     # 50 lakh - 1 crore
    (20000000.0, 15.0),     # 1 crore - 2 crore
    (50000000.0, 25.0),     # 2 crore - 5 crore
    (float("inf"), 37.0),   # above 5 crore
]


@dataclass
class TaxRates:
    """
    Tax rules for individuals (FY 2024-25 / AY 2025-26).

    Old Regime:
    - Standard deduction: ₹50,000
    - Rebate u/s 87A: up to ₹12,500 when taxable income ≤ ₹5,00,000
    - Age-based slabs (below 60, 60-79, 80 and above)

    New Regime (Section 115BAC):
    - Standard deduction: ₹75,000
    - Rebate u/s 87A: up to ₹25,000 when taxable income ≤ ₹7,00,000
    - Single slab table irrespective of age

    Both regimes:
    - Surcharge: 10% / 15% / 25% / 37% above ₹50L / ₹1Cr / ₹2Cr / ₹5Cr
    - Health & Education Cess: 4% on tax plus surcharge
    - Advance tax: 90% of net payable when it exceeds ₹10,000
    """

    OLD_STANDARD_DEDUCTION: float = 50000.0
    NEW_STANDARD_DEDUCTION: float = 75000.0

    OLD_REBATE_LIMIT: float = 500000.0
    OLD_REBATE_MAX: float = 12500.0
    NEW_REBATE_LIMIT: float = 700000.0
    NEW_REBATE_MAX: float = 25000.0

    CESS_RATE: float = 4.0

    ADVANCE_TAX_THRESHOLD: float = 10000.0
    ADVANCE_TAX_RATIO: float = 0.9

    SENIOR_CITIZEN_AGE: int = 60
    SUPER_SENIOR_CITIZEN_AGE: int = 80

    old_regime_slabs: Dict[str, List[TaxSlab]] = field(
        default_factory=lambda: {k: list(v) for k, v in OLD_REGIME_SLABS.items()}
    )
    new_regime_slabs: List[TaxSlab] = field(
        default_factory=lambda: list(NEW_REGIME_SLABS)
    )
    surcharge_tiers: List[Tuple[float, float]] = field(
        default_factory=lambda: list(DEFAULT_SURCHARGE_TIERS)
    )

    def slabs_for_old_regime(self, age: int) -> List[TaxSlab]:
        """Pick the old regime slab table for the taxpayer's age."""
        if age >= self.SUPER_SENIOR_CITIZEN_AGE:
            return self.old_regime_slabs["super_senior"]
        if age >= self.SENIOR_CITIZEN_AGE:
            return self.old_regime_slabs["senior"]
        return self.old_regime_slabs["regular"]

    def surcharge_rate(self, income: float) -> float:
        """Surcharge rate (percent) for the given income tier."""
        for upper_limit, rate in self.surcharge_tiers:
            if income <= upper_limit:
                return rate
        return self.surcharge_tiers[-1][1]
