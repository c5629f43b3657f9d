"""
Unit tests for the regime tax calculators.
"""

import pytest

from income_tax.calculator import (
    TaxCalculator,
    calculate_old_regime_tax,
    calculate_new_regime_tax,
    calculate_surcharge,
    calculate_cess,
    calculate_rebate_87a,
    compute_gross_income,
)
from income_tax.deductions import DeductionWorksheet, Section80COptions
from income_tax.exceptions import UnknownAssetTypeError
from income_tax.models import (
    CapitalGain,
    CarryForwardLoss,
    DeductionData,
    HousePropertyData,
    IncomeData,
    TaxpayerProfile,
    TCSData,
    TDSData,
)
from income_tax.rates import TaxRates
from income_tax.slabs import TaxSlab, INFINITY

NO_DEDUCTIONS = DeductionData()


class TestHelpers:
    """Tests for surcharge, cess and rebate helpers."""

    def test_no_surcharge_up_to_fifty_lakh(self):
        assert calculate_surcharge(5000000, 1000000) == 0

    def test_surcharge_tier(self):
        assert calculate_surcharge(15000000, 1000000) == pytest.approx(150000)

    def test_cess(self):
        assert calculate_cess(100000) == pytest.approx(4000)

    def test_rebate_old_regime(self):
        assert calculate_rebate_87a(400000, 7500, "old") == 7500
        assert calculate_rebate_87a(500000, 12500, "old") == 12500
        assert calculate_rebate_87a(500001, 12500, "old") == 0

    def test_rebate_new_regime(self):
        assert calculate_rebate_87a(700000, 20000, "new") == 20000
        assert calculate_rebate_87a(720000, 22000, "new") == 0

    def test_rebate_never_exceeds_slab_tax(self):
        assert calculate_rebate_87a(300000, 2500, "old") == 2500


class TestComputeGrossIncome:
    """Tests for compute_gross_income function."""

    def test_basic_salary_not_added(self):
        income = IncomeData(salary=1000000, basic_salary=500000)
        assert compute_gross_income(income).gross_income == 1000000

    def test_mixed_income(self, mixed_income):
        computation = compute_gross_income(mixed_income)

        # salary + debt STCG + other sources + house property
        assert computation.gross_income == pytest.approx(1500000 + 60000 + 50000 + 96000)
        assert computation.capital_gains.total_tax == pytest.approx(21000)
        assert computation.house_property_income == pytest.approx(96000)

    def test_house_property_loss_reduces_gross(self):
        income = IncomeData(salary=1000000, house_property=HousePropertyData(interest_on_loan=250000))
        assert compute_gross_income(income).gross_income == 800000

    def test_business_loss_set_off(self):
        income = IncomeData(salary=1000000, business_income=200000)
        losses = [CarryForwardLoss("2023-24", business_loss=50000)]
        computation = compute_gross_income(income, losses)

        assert computation.gross_income == 1150000
        assert computation.set_off.losses_utilized.business_loss == 50000

    def test_speculative_income_after_set_off(self):
        income = IncomeData(speculative_income=40000)
        losses = [CarryForwardLoss("2023-24", speculative_loss=15000)]
        assert compute_gross_income(income, losses).gross_income == 25000


class TestOldRegime:
    """Tests for old regime computation."""

    @pytest.fixture
    def calculator(self):
        return TaxCalculator()

    def test_salaried_no_deductions(self, calculator, salaried_income):
        result = calculator.calculate_old_regime(salaried_income, NO_DEDUCTIONS, age=35)

        assert result.regime == "old"
        assert result.gross_income == 1200000
        assert result.standard_deduction == 50000
        assert result.taxable_income == 1150000
        assert result.regular_income_tax == pytest.approx(157500)
        assert result.cess == pytest.approx(6300)
        assert result.total_tax == pytest.approx(163800)

    def test_with_deductions(self, calculator, salaried_income, typical_deductions):
        result = calculator.calculate_old_regime(salaried_income, typical_deductions, age=35)

        assert result.total_deductions == pytest.approx(397500)
        assert result.taxable_income == pytest.approx(802500)
        assert result.total_tax == pytest.approx(75920)

    def test_rebate_zeroes_tax(self, calculator):
        """Taxable ₹4L: slab tax ₹7,500 fully rebated."""
        result = calculator.calculate_old_regime(IncomeData(salary=450000), NO_DEDUCTIONS, age=30)

        assert result.taxable_income == 400000
        assert result.tax_before_rebate == pytest.approx(7500)
        assert result.rebate_amount == pytest.approx(7500)
        assert result.total_tax == 0

    def test_six_lakh_no_rebate(self, calculator):
        result = calculator.calculate_old_regime(IncomeData(salary=650000), NO_DEDUCTIONS, age=30)

        assert result.taxable_income == 600000
        assert result.regular_income_tax == pytest.approx(32500)
        assert result.rebate_amount == 0

    def test_rebate_not_applied_to_capital_gains_tax(self, calculator):
        income = IncomeData(salary=450000, capital_gains=[CapitalGain("equity_shares", False, 100000)])
        result = calculator.calculate_old_regime(income, NO_DEDUCTIONS, age=30)

        assert result.rebate_amount == pytest.approx(7500)
        assert result.tax_after_rebate == pytest.approx(15000)
        assert result.total_tax == pytest.approx(15600)

    def test_senior_slabs(self, calculator):
        income = IncomeData(salary=800000)
        regular = calculator.calculate_old_regime(income, NO_DEDUCTIONS, age=45)
        senior = calculator.calculate_old_regime(income, NO_DEDUCTIONS, age=65)

        assert regular.regular_income_tax == pytest.approx(62500)
        assert senior.regular_income_tax == pytest.approx(60000)

    def test_standard_deduction_limited_to_salary(self, calculator):
        result = calculator.calculate_old_regime(IncomeData(salary=30000), NO_DEDUCTIONS, age=30)
        assert result.standard_deduction == 30000

    def test_no_standard_deduction_without_salary(self, calculator):
        result = calculator.calculate_old_regime(IncomeData(business_income=800000), NO_DEDUCTIONS, age=30)
        assert result.standard_deduction == 0

    def test_taxable_income_never_negative(self, calculator):
        deductions = DeductionData(section_80c=150000, section_80e=900000)
        result = calculator.calculate_old_regime(IncomeData(salary=500000), deductions, age=30)

        assert result.taxable_income == 0
        assert result.total_tax == 0

    def test_tds_and_advance_tax(self, calculator, salaried_income, sample_tds):
        result = calculator.calculate_old_regime(salaried_income, NO_DEDUCTIONS, age=35, tds=sample_tds)

        assert result.tds_deducted == 105000
        assert result.net_tax_payable == pytest.approx(58800)
        assert result.advance_tax_required == pytest.approx(52920)


class TestNewRegime:
    """Tests for new regime computation."""

    @pytest.fixture
    def calculator(self):
        return TaxCalculator()

    def test_salaried(self, calculator, salaried_income):
        result = calculator.calculate_new_regime(salaried_income, NO_DEDUCTIONS, age=35)

        assert result.regime == "new"
        assert result.standard_deduction == 75000
        assert result.taxable_income == 1125000
        assert result.regular_income_tax == pytest.approx(68750)
        assert result.total_tax == pytest.approx(71500)

    def test_ignores_old_regime_deductions(self, calculator, salaried_income, typical_deductions):
        result = calculator.calculate_new_regime(salaried_income, typical_deductions, age=35)

        assert result.total_deductions == pytest.approx(77500)
        assert result.total_tax == pytest.approx(71110)

    def test_rebate_at_limit(self, calculator):
        result = calculator.calculate_new_regime(IncomeData(salary=775000), NO_DEDUCTIONS, age=30)

        assert result.taxable_income == 700000
        assert result.rebate_amount == pytest.approx(20000)
        assert result.total_tax == 0

    def test_rebate_ineligible_above_limit(self, calculator):
        result = calculator.calculate_new_regime(IncomeData(salary=795000), NO_DEDUCTIONS, age=30)

        assert result.taxable_income == 720000
        assert result.rebate_amount == 0
        assert result.regular_income_tax == pytest.approx(22000)
        assert result.total_tax == pytest.approx(22880)

    def test_age_does_not_change_slabs(self, calculator, salaried_income):
        young = calculator.calculate_new_regime(salaried_income, NO_DEDUCTIONS, age=30)
        old = calculator.calculate_new_regime(salaried_income, NO_DEDUCTIONS, age=85)
        assert young.total_tax == old.total_tax

    def test_surcharge_keyed_on_gross_income(self, calculator):
        result = calculator.calculate_new_regime(IncomeData(salary=6000000), NO_DEDUCTIONS, age=40)

        assert result.regular_income_tax == pytest.approx(1467500)
        assert result.surcharge == pytest.approx(146750)
        assert result.cess == pytest.approx(64570)
        assert result.total_tax == pytest.approx(1678820)

    def test_tcs_credit(self, calculator, salaried_income):
        result = calculator.calculate_new_regime(
            salaried_income, NO_DEDUCTIONS, age=35, tcs=TCSData(foreign_remittance=60000)
        )
        assert result.tcs_deducted == 60000
        assert result.net_tax_payable == pytest.approx(11500)
        assert result.advance_tax_required == pytest.approx(10350)

    def test_credits_above_tax(self, calculator, salaried_income, sample_tds):
        result = calculator.calculate_new_regime(salaried_income, NO_DEDUCTIONS, age=35, tds=sample_tds)
        assert result.net_tax_payable == 0
        assert result.advance_tax_required == 0

    def test_advance_tax_threshold(self, calculator):
        # 22880 tax, 14000 TDS -> 8880 payable, below ₹10,000
        result = calculator.calculate_new_regime(
            IncomeData(salary=795000), NO_DEDUCTIONS, age=30, tds=TDSData(salary=14000)
        )
        assert result.net_tax_payable == pytest.approx(8880)
        assert result.advance_tax_required == 0


class TestResultInvariants:
    """Properties that hold for every computation."""

    @pytest.mark.parametrize("salary", [0, 300000, 650000, 1200000, 6000000, 60000000])
    @pytest.mark.parametrize("regime", ["old", "new"])
    def test_total_tax_composition(self, salary, regime, typical_deductions):
        calculator = TaxCalculator()
        method = calculator.calculate_old_regime if regime == "old" else calculator.calculate_new_regime
        result = method(IncomeData(salary=salary), typical_deductions, age=40)

        assert result.total_tax == pytest.approx(result.tax_after_rebate + result.surcharge + result.cess)
        assert result.taxable_income >= 0
        assert result.total_tax >= 0
        assert result.net_tax_payable == pytest.approx(
            max(0.0, result.total_tax - result.tds_deducted - result.tcs_deducted)
        )

    def test_zero_income_effective_rate(self):
        result = calculate_new_regime_tax(IncomeData(), NO_DEDUCTIONS, age=30)
        assert result.effective_rate == 0
        assert result.total_tax == 0

    def test_effective_rate(self, salaried_income):
        result = calculate_old_regime_tax(salaried_income, NO_DEDUCTIONS, age=35)
        assert result.effective_rate == pytest.approx(163800 / 1200000 * 100)


class TestCapitalGainsAndLosses:
    """Tests for capital gains and brought forward losses in a regime computation."""

    def test_capital_gains_tax_separate(self, mixed_income):
        result = calculate_new_regime_tax(mixed_income, NO_DEDUCTIONS, age=40)

        assert result.capital_gains_tax == pytest.approx(21000)
        assert result.gross_income == pytest.approx(1706000)
        assert len(result.capital_gains_breakdown) == 3

    def test_slab_deferred_gains_in_both_regimes(self):
        income = IncomeData(salary=1000000, capital_gains=[CapitalGain("debt_mf", False, 60000)])
        old = calculate_old_regime_tax(income, NO_DEDUCTIONS, age=40)
        new = calculate_new_regime_tax(income, NO_DEDUCTIONS, age=40)

        assert old.gross_income == new.gross_income == 1060000
        assert old.capital_gains_tax == new.capital_gains_tax == 0

    def test_losses_reported(self):
        income = IncomeData(salary=1000000, business_income=20000)
        losses = [CarryForwardLoss("2022-23", business_loss=50000)]
        result = calculate_old_regime_tax(income, NO_DEDUCTIONS, age=40, carry_forward_losses=losses)

        assert result.gross_income == 1000000
        assert result.losses_utilized.business_loss == 20000
        assert result.remaining_losses[0].business_loss == 30000

    def test_unknown_asset_type_default(self):
        income = IncomeData(salary=1000000, capital_gains=[CapitalGain("art", True, 500000)])
        result = TaxCalculator().calculate_old_regime(income, NO_DEDUCTIONS, age=40)
        assert result.capital_gains_tax == 0

    def test_capital_losses_do_not_reduce_salary_tax(self):
        salary_only = IncomeData(salary=1500000)
        with_losses = IncomeData(salary=1500000, capital_gains=[
            CapitalGain("crypto", False, -100000),
            CapitalGain("equity_shares", False, -100000),
        ])
        base = calculate_old_regime_tax(salary_only, NO_DEDUCTIONS, age=40)
        result = calculate_old_regime_tax(with_losses, NO_DEDUCTIONS, age=40)

        assert result.capital_gains_tax == 0
        assert result.tax_before_rebate == base.tax_before_rebate
        assert result.total_tax == base.total_tax

    def test_unknown_asset_gains_absorb_no_losses(self):
        income = IncomeData(salary=1000000, capital_gains=[CapitalGain("art", False, 300000)])
        losses = [CarryForwardLoss("2022-23", short_term_loss=100000)]
        result = calculate_old_regime_tax(income, NO_DEDUCTIONS, age=40, carry_forward_losses=losses)

        assert result.losses_utilized.short_term_loss == 0
        assert result.remaining_losses[0].short_term_loss == 100000

    def test_unknown_asset_type_strict(self):
        income = IncomeData(salary=1000000, capital_gains=[CapitalGain("art", True, 500000)])
        with pytest.raises(UnknownAssetTypeError):
            TaxCalculator(strict=True).calculate_new_regime(income, NO_DEDUCTIONS, age=40)


class TestCustomRates:
    """Tests for calculators built with custom rules."""

    def test_flat_new_regime(self):
        rates = TaxRates(new_regime_slabs=[TaxSlab(0, INFINITY, 10)], NEW_STANDARD_DEDUCTION=0,
                         NEW_REBATE_LIMIT=0)
        result = TaxCalculator(rates).calculate_new_regime(IncomeData(salary=100000), NO_DEDUCTIONS, 30)
        assert result.regular_income_tax == pytest.approx(10000)

    def test_no_cess(self, salaried_income):
        rates = TaxRates(CESS_RATE=0)
        result = TaxCalculator(rates).calculate_new_regime(salaried_income, NO_DEDUCTIONS, 30)
        assert result.cess == 0
        assert result.total_tax == pytest.approx(68750)


class TestCalculateProfile:
    """Tests for TaxCalculator.calculate_profile method."""

    def test_both_regimes_and_comparison(self, salaried_income):
        profile = TaxpayerProfile(age=35, income=salaried_income)
        old, new, comparison = TaxCalculator().calculate_profile(profile)

        assert old.total_tax == pytest.approx(163800)
        assert new.total_tax == pytest.approx(71500)
        assert comparison.recommended_regime == "new"
        assert comparison.savings == pytest.approx(92300)

    def test_worksheet_deductions(self, salaried_income):
        worksheet = DeductionWorksheet(
            section_80c=Section80COptions(ppf=200000),
            donations=500000,
        )
        profile = TaxpayerProfile(age=35, income=salaried_income, deduction_worksheet=worksheet)
        deductions = TaxCalculator().eligible_deductions(profile)

        assert deductions.section_80c == 150000
        # 10% of the computed gross income
        assert deductions.section_80g == pytest.approx(120000)

    def test_without_worksheet_uses_given_deductions(self, typical_deductions):
        profile = TaxpayerProfile(deductions=typical_deductions)
        assert TaxCalculator().eligible_deductions(profile) is typical_deductions
