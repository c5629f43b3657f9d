"""
Income from house property.

Let-out property: Net Annual Value (rent less municipal taxes) less a 30%
standard deduction, repairs, loan interest and other expenses. The result
can be a loss.

Self-occupied property: nil annual value, so the only figure is the loan
interest, allowed up to ₹2,00,000. The result is never positive.
"""

import logging
from typing import Dict

from .models import HousePropertyData

logger = logging.getLogger(__name__)

SELF_OCCUPIED_INTEREST_LIMIT = 200000.0
STANDARD_DEDUCTION_RATE = 0.30
MAX_SELF_OCCUPIED_PROPERTIES = 2


def house_property_breakdown(data: HousePropertyData) -> Dict[str, float]:
    """
    Step-by-step computation of house property income.

    Returns:
        Dictionary with net_annual_value, standard_deduction,
        interest_deduction, other_deductions and income
    """
    if not data.is_let_out:
        if data.self_occupied_count > MAX_SELF_OCCUPIED_PROPERTIES:
            # Only two properties get nil annual value; no deemed rent is applied here
            logger.warning(
                "%d self-occupied properties declared; only %d qualify for nil "
                "annual value, all are treated as self-occupied",
                data.self_occupied_count, MAX_SELF_OCCUPIED_PROPERTIES,
            )
        interest = min(SELF_OCCUPIED_INTEREST_LIMIT, data.interest_on_loan)
        return {
            'net_annual_value': 0.0,
            'standard_deduction': 0.0,
            'interest_deduction': interest,
            'other_deductions': 0.0,
            'income': -interest,
        }

    net_annual_value = max(0.0, data.annual_rent_received - data.municipal_taxes)
    standard_deduction = net_annual_value * STANDARD_DEDUCTION_RATE
    other_deductions = data.repair_maintenance + data.other_expenses
    income = net_annual_value - standard_deduction - data.interest_on_loan - other_deductions
    return {
        'net_annual_value': net_annual_value,
        'standard_deduction': standard_deduction,
        'interest_deduction': data.interest_on_loan,
        'other_deductions': other_deductions,
        'income': income,
    }


def calculate_house_property_income(data: HousePropertyData) -> float:
    """
    Income (or loss, if negative) from a house property.

    Args:
        data: House property details

    Returns:
        Net income from house property

    Examples:
        >>> calculate_house_property_income(HousePropertyData(interest_on_loan=250000))
        -200000.0
    """
    return house_property_breakdown(data)['income']
