"""
Presumptive taxation of business and professional income.

Section 44AD:  8% of turnover for eligible businesses
Section 44ADA: 50% of gross receipts for specified professions
Section 44AE:  fixed monthly income per goods or passenger vehicle
"""

from enum import Enum

BUSINESS_RATE_44AD = 0.08
PROFESSION_RATE_44ADA = 0.5
MONTHLY_INCOME_44AE = {
    'goods': 7500.0,
    'passenger': 1000.0,
}


class PresumptiveScheme(Enum):
    """Presumptive taxation sections."""
    BUSINESS = "44AD"
    PROFESSION = "44ADA"
    GOODS_CARRIAGE = "44AE"


def calculate_presumptive_income(
    turnover: float,
    scheme: PresumptiveScheme,
    vehicle_type: str = None,
    vehicles: int = 1,
    months_owned: int = 12
) -> float:
    """
    Deemed income under a presumptive scheme.

    Args:
        turnover: Turnover or gross receipts (ignored for 44AE)
        scheme: Presumptive section
        vehicle_type: 'goods' or 'passenger' (44AE only)
        vehicles: Number of vehicles owned (44AE only)
        months_owned: Months each vehicle was owned in the year (44AE only)

    Returns:
        Presumptive income; 0 for an unrecognized vehicle type
    """
    if scheme == PresumptiveScheme.BUSINESS:
        return turnover * BUSINESS_RATE_44AD
    if scheme == PresumptiveScheme.PROFESSION:
        return turnover * PROFESSION_RATE_44ADA
    monthly = MONTHLY_INCOME_44AE.get(vehicle_type)
    if monthly is None:
        return 0.0
    return monthly * months_owned * vehicles
