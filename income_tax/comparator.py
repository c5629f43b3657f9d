"""
Regime comparison.

Compares the old and new regime results and recommends the one with the
lower total tax. Ties go to the new regime, which is the default regime.
"""

from typing import Any, Dict

from .models import RegimeComparison, TaxResult


def get_optimal_regime(old_regime_result: TaxResult, new_regime_result: TaxResult) -> RegimeComparison:
    """
    Recommend a regime.

    Args:
        old_regime_result: Computation under the old regime
        new_regime_result: Computation under the new regime

    Returns:
        RegimeComparison. savings is always non-negative; the percentage is
        relative to the regime with the higher tax (0 when both are nil).
    """
    old_tax = old_regime_result.total_tax
    new_tax = new_regime_result.total_tax
    savings = old_tax - new_tax

    higher_tax = max(old_tax, new_tax)
    percentage_savings = abs(savings) / higher_tax * 100 if higher_tax > 0 else 0.0

    return RegimeComparison(
        recommended_regime="new" if savings >= 0 else "old",
        savings=abs(savings),
        percentage_savings=percentage_savings,
        old_regime_tax=old_tax,
        new_regime_tax=new_tax,
    )


def validate_regime_eligibility(income: float, has_business_income: bool) -> Dict[str, Any]:
    """
    Regime eligibility and planning hints.

    Individuals may choose either regime; with business income the choice
    can be changed only once, which is noted in the recommendations.

    Returns:
        Dictionary with old_regime_eligible, new_regime_eligible and a list
        of recommendations
    """
    recommendations = []

    if income > 1500000:
        recommendations.append("Consider tax planning strategies for high income")
    if has_business_income:
        recommendations.append("Evaluate presumptive taxation benefits under sections 44AD/44ADA")
        recommendations.append("With business income, switching back to the new regime is allowed only once")
    if income < 700000:
        recommendations.append("New regime may be beneficial due to higher rebate limit")

    return {
        'old_regime_eligible': True,
        'new_regime_eligible': True,
        'recommendations': recommendations,
    }
