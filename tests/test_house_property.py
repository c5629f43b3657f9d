"""
Unit tests for house property income.
"""

import logging

import pytest

from income_tax.house_property import (
    calculate_house_property_income,
    house_property_breakdown,
)
from income_tax.models import HousePropertyData


class TestSelfOccupied:
    """Tests for self-occupied property."""

    def test_interest_is_a_loss(self):
        data = HousePropertyData(interest_on_loan=150000)
        assert calculate_house_property_income(data) == -150000

    def test_interest_capped(self):
        data = HousePropertyData(interest_on_loan=350000)
        assert calculate_house_property_income(data) == -200000

    def test_never_positive(self):
        """Rent and expenses are ignored when self-occupied."""
        data = HousePropertyData(annual_rent_received=500000, municipal_taxes=10000)
        assert calculate_house_property_income(data) == 0

    def test_more_than_two_properties_logs_warning(self, caplog):
        data = HousePropertyData(interest_on_loan=100000, self_occupied_count=3)
        with caplog.at_level(logging.WARNING):
            income = calculate_house_property_income(data)

        assert income == -100000
        assert "self-occupied" in caplog.text


class TestLetOut:
    """Tests for let-out property."""

    def test_standard_computation(self):
        data = HousePropertyData(
            annual_rent_received=300000,
            municipal_taxes=20000,
            interest_on_loan=100000,
            is_let_out=True,
        )
        # NAV 280000, 30% = 84000
        assert calculate_house_property_income(data) == pytest.approx(96000)

    def test_interest_not_capped(self):
        data = HousePropertyData(annual_rent_received=120000, interest_on_loan=400000, is_let_out=True)
        assert calculate_house_property_income(data) == pytest.approx(84000 - 400000)

    def test_repairs_and_other_expenses(self):
        data = HousePropertyData(
            annual_rent_received=100000,
            repair_maintenance=5000,
            other_expenses=5000,
            is_let_out=True,
        )
        assert calculate_house_property_income(data) == pytest.approx(60000)

    def test_municipal_taxes_above_rent(self):
        data = HousePropertyData(annual_rent_received=10000, municipal_taxes=20000, is_let_out=True)
        breakdown = house_property_breakdown(data)
        assert breakdown['net_annual_value'] == 0
        assert breakdown['income'] == 0

    def test_breakdown_fields(self):
        data = HousePropertyData(annual_rent_received=200000, interest_on_loan=50000, is_let_out=True)
        breakdown = house_property_breakdown(data)
        assert breakdown['standard_deduction'] == pytest.approx(60000)
        assert breakdown['interest_deduction'] == 50000
        assert breakdown['income'] == pytest.approx(90000)
