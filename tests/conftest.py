"""
Pytest configuration and shared fixtures.
"""

import sys
import os
from datetime import date

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from income_tax.models import (
    CapitalGain,
    CarryForwardLoss,
    DeductionData,
    HousePropertyData,
    IncomeData,
    TDSData,
)


@pytest.fixture
def salaried_income():
    """Salary-only income of ₹12 lakh."""
    return IncomeData(salary=1200000.0, basic_salary=600000.0)


@pytest.fixture
def mixed_income():
    """Salary with capital gains and a let-out house property."""
    return IncomeData(
        salary=1500000.0,
        basic_salary=750000.0,
        other_sources=50000.0,
        capital_gains=[
            CapitalGain("equity_shares", True, 250000.0,
                        purchase_date=date(2021, 4, 1), sale_date=date(2024, 7, 1)),
            CapitalGain("equity_mf", False, 40000.0),
            CapitalGain("debt_mf", False, 60000.0),
        ],
        house_property=HousePropertyData(
            annual_rent_received=300000.0,
            municipal_taxes=20000.0,
            interest_on_loan=100000.0,
            is_let_out=True,
        ),
    )


@pytest.fixture
def typical_deductions():
    """Old regime deductions of a salaried employee."""
    return DeductionData(
        section_80c=150000.0,
        section_80d=25000.0,
        hra=120000.0,
        nps=50000.0,
        professional_tax=2500.0,
    )


@pytest.fixture
def sample_tds():
    return TDSData(salary=100000.0, interest_from_bank=5000.0)


@pytest.fixture
def sample_losses():
    """Brought forward losses from two years, newest first."""
    return [
        CarryForwardLoss("2023-24", short_term_loss=20000.0),
        CarryForwardLoss("2022-23", short_term_loss=50000.0, business_loss=30000.0),
    ]
