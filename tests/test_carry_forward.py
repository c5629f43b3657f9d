"""
Unit tests for the set-off of brought forward losses.
"""

import pytest

from income_tax.carry_forward import apply_carry_forward_losses
from income_tax.models import AdjustedIncome, CarryForwardLoss, LOSS_FIELDS


class TestApplyCarryForwardLosses:
    """Tests for apply_carry_forward_losses function."""

    def test_short_term_loss_partially_used(self):
        """₹50,000 STCL against ₹30,000 STCG leaves ₹20,000 to carry."""
        result = apply_carry_forward_losses(
            AdjustedIncome(capital_gains_short=30000),
            [CarryForwardLoss("2023-24", short_term_loss=50000)],
        )

        assert result.losses_utilized.short_term_loss == 30000
        assert result.remaining_losses[0].short_term_loss == 20000
        assert result.remaining_losses[0].assessment_year == "2023-24"
        assert result.adjusted_income.capital_gains_short == 0

    def test_short_term_loss_spills_to_long_term(self):
        result = apply_carry_forward_losses(
            AdjustedIncome(capital_gains_short=10000, capital_gains_long=50000),
            [CarryForwardLoss("2023-24", short_term_loss=30000)],
        )
        assert result.adjusted_income.capital_gains_short == 0
        assert result.adjusted_income.capital_gains_long == 30000
        assert result.remaining_losses == []

    def test_long_term_loss_not_against_short_term(self):
        result = apply_carry_forward_losses(
            AdjustedIncome(capital_gains_short=50000),
            [CarryForwardLoss("2023-24", long_term_loss=20000)],
        )
        assert result.adjusted_income.capital_gains_short == 50000
        assert result.remaining_losses[0].long_term_loss == 20000

    def test_house_property_loss_order(self):
        result = apply_carry_forward_losses(
            AdjustedIncome(house_property_income=10000, business_income=20000, capital_gains_short=50000),
            [CarryForwardLoss("2023-24", house_property_loss=40000)],
        )
        adjusted = result.adjusted_income
        assert adjusted.house_property_income == 0
        assert adjusted.business_income == 0
        assert adjusted.capital_gains_short == 40000

    def test_business_loss_order(self):
        result = apply_carry_forward_losses(
            AdjustedIncome(business_income=10000, house_property_income=5000, capital_gains_long=100000),
            [CarryForwardLoss("2023-24", business_loss=30000)],
        )
        adjusted = result.adjusted_income
        assert adjusted.business_income == 0
        assert adjusted.house_property_income == 0
        assert adjusted.capital_gains_long == 85000

    def test_speculative_loss_only_against_speculative(self):
        result = apply_carry_forward_losses(
            AdjustedIncome(business_income=100000, speculative_income=5000),
            [CarryForwardLoss("2023-24", speculative_loss=20000)],
        )
        assert result.adjusted_income.business_income == 100000
        assert result.adjusted_income.speculative_income == 0
        assert result.remaining_losses[0].speculative_loss == 15000

    def test_non_speculative_loss_carried_untouched(self):
        result = apply_carry_forward_losses(
            AdjustedIncome(business_income=100000),
            [CarryForwardLoss("2023-24", non_speculative_loss=25000)],
        )
        assert result.adjusted_income.business_income == 100000
        assert result.losses_utilized.non_speculative_loss == 0
        assert result.remaining_losses[0].non_speculative_loss == 25000

    def test_oldest_year_first(self, sample_losses):
        result = apply_carry_forward_losses(
            AdjustedIncome(capital_gains_short=60000, business_income=30000),
            sample_losses,
        )
        # 2022-23 absorbs 50000 first; 2023-24 only 10000
        assert len(result.remaining_losses) == 1
        assert result.remaining_losses[0].assessment_year == "2023-24"
        assert result.remaining_losses[0].short_term_loss == 10000

    def test_multiple_years_fully_absorbed(self, sample_losses):
        result = apply_carry_forward_losses(
            AdjustedIncome(business_income=100000, capital_gains_short=30000, capital_gains_long=40000),
            sample_losses,
        )
        assert result.losses_utilized.short_term_loss == 70000
        assert result.losses_utilized.business_loss == 30000
        assert result.losses_utilized.assessment_year == "Current"
        assert result.remaining_losses == []
        assert result.adjusted_income.business_income == 70000
        assert result.adjusted_income.capital_gains_long == 0

    def test_conservation(self, sample_losses):
        """Utilized plus remaining equals what was brought forward, per loss type."""
        result = apply_carry_forward_losses(
            AdjustedIncome(capital_gains_short=25000, business_income=10000),
            sample_losses,
        )
        for name in LOSS_FIELDS:
            brought = sum(getattr(loss, name) for loss in sample_losses)
            carried = sum(getattr(loss, name) for loss in result.remaining_losses)
            assert getattr(result.losses_utilized, name) + carried == pytest.approx(brought)

    def test_inputs_not_modified(self, sample_losses):
        income = AdjustedIncome(capital_gains_short=30000)
        before = list(sample_losses)
        apply_carry_forward_losses(income, sample_losses)

        assert income.capital_gains_short == 30000
        assert sample_losses == before

    def test_no_losses(self):
        income = AdjustedIncome(business_income=5000)
        result = apply_carry_forward_losses(income, [])
        assert result.adjusted_income == income
        assert result.losses_utilized.is_empty
        assert result.remaining_losses == []

    def test_negative_income_heads_absorb_nothing(self):
        result = apply_carry_forward_losses(
            AdjustedIncome(house_property_income=-200000),
            [CarryForwardLoss("2023-24", house_property_loss=10000)],
        )
        assert result.adjusted_income.house_property_income == -200000
        assert result.remaining_losses[0].house_property_loss == 10000
