"""
Regime tax calculators.

This module provides the TaxCalculator class that orchestrates the income
heads, capital gains, brought forward losses and deductions into a
complete computation under the old or the new regime.

Both regimes share the income computation (steps 1-4); they differ in the
standard deduction, the deductions allowed, the slab table and the 87A
rebate.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .capital_gains import calculate_capital_gains_tax
from .carry_forward import apply_carry_forward_losses
from .comparator import get_optimal_regime
from .deductions import compute_eligible_deductions
from .house_property import calculate_house_property_income
from .models import (
    AdjustedIncome,
    CapitalGainsResult,
    CarryForwardLoss,
    DeductionData,
    IncomeData,
    RegimeComparison,
    SetOffResult,
    TaxpayerProfile,
    TaxResult,
    TCSData,
    TDSData,
)
from .rates import TaxRates
from .slabs import calculate_tax_on_slabs
from .withholding import total_taxes_withheld

logger = logging.getLogger(__name__)

OLD_REGIME = "old"
NEW_REGIME = "new"


@dataclass
class IncomeComputation:
    """Income heads after house property, capital gains and loss set-off."""
    house_property_income: float
    capital_gains: CapitalGainsResult
    set_off: SetOffResult
    gross_income: float


def calculate_surcharge(income: float, tax: float, rates: Optional[TaxRates] = None) -> float:
    """
    Surcharge on tax by income tier.

    Args:
        income: Income used to pick the tier
        tax: Tax after rebate

    Returns:
        Surcharge amount (0 up to ₹50 lakh)
    """
    rates = rates or TaxRates()
    return tax * rates.surcharge_rate(income) / 100


def calculate_cess(tax_plus_surcharge: float, rates: Optional[TaxRates] = None) -> float:
    """Health & Education Cess on tax plus surcharge."""
    rates = rates or TaxRates()
    return tax_plus_surcharge * rates.CESS_RATE / 100


def calculate_rebate_87a(
    taxable_income: float,
    slab_tax: float,
    regime: str,
    rates: Optional[TaxRates] = None
) -> float:
    """
    Rebate under Section 87A.

    The rebate is limited to the tax on slab income; tax on capital gains
    at special rates is never reduced by it.

    Args:
        taxable_income: Total taxable income
        slab_tax: Tax computed on slabs
        regime: 'old' or 'new'

    Returns:
        Rebate amount
    """
    rates = rates or TaxRates()
    if regime == OLD_REGIME:
        limit, maximum = rates.OLD_REBATE_LIMIT, rates.OLD_REBATE_MAX
    else:
        limit, maximum = rates.NEW_REBATE_LIMIT, rates.NEW_REBATE_MAX

    if taxable_income <= limit:
        return min(maximum, slab_tax)
    return 0.0


def compute_gross_income(
    income: IncomeData,
    carry_forward_losses: Optional[List[CarryForwardLoss]] = None,
    strict: bool = False
) -> IncomeComputation:
    """
    Gross total income, shared by both regimes.

    Steps:
    1. Income from house property
    2. Capital gains split into flat-rate tax and slab-deferred amount
    3. Set-off of brought forward losses
    4. Gross = salary + business + slab-deferred gains + other sources
       + house property + speculative income (all after set-off)

    Basic salary is not part of gross income; it only feeds HRA.
    """
    house_property_income = 0.0
    if income.house_property is not None:
        house_property_income = calculate_house_property_income(income.house_property)

    capital_gains = calculate_capital_gains_tax(income.capital_gains, strict=strict)

    current_income = AdjustedIncome(
        business_income=income.business_income,
        capital_gains_short=capital_gains.short_term_gains,
        capital_gains_long=capital_gains.long_term_gains,
        house_property_income=house_property_income,
        speculative_income=income.speculative_income,
    )
    set_off = apply_carry_forward_losses(current_income, carry_forward_losses or [])
    adjusted = set_off.adjusted_income

    gross_income = (
        income.salary
        + adjusted.business_income
        + capital_gains.slab_deferred_amount
        + income.other_sources
        + adjusted.house_property_income
        + adjusted.speculative_income
    )

    return IncomeComputation(
        house_property_income=adjusted.house_property_income,
        capital_gains=capital_gains,
        set_off=set_off,
        gross_income=gross_income,
    )


class TaxCalculator:
    """
    Calculator for the complete tax computation of an individual.

    Example:
        >>> calculator = TaxCalculator()
        >>> old = calculator.calculate_old_regime(income, deductions, age=35)
        >>> new = calculator.calculate_new_regime(income, deductions, age=35)
        >>> print(calculator.compare(old, new).recommended_regime)
    """

    def __init__(self, rates: TaxRates = None, strict: bool = False):
        """
        Initialize the tax calculator.

        Args:
            rates: Tax rules to use. Defaults to current FY rules.
            strict: Fail on unknown capital gains asset types instead of
                    taxing them at zero.
        """
        self.rates = rates or TaxRates()
        self.strict = strict

    def calculate_old_regime(
        self,
        income: IncomeData,
        deductions: DeductionData,
        age: int,
        tds: TDSData = None,
        tcs: TCSData = None,
        carry_forward_losses: List[CarryForwardLoss] = None
    ) -> TaxResult:
        """
        Compute tax under the old regime.

        Args:
            income: Income of the taxpayer
            deductions: Eligible deductions (all sections apply)
            age: Age, selects the slab table
            tds: Tax deducted at source
            tcs: Tax collected at source
            carry_forward_losses: Losses brought forward

        Returns:
            TaxResult for the old regime
        """
        return self._calculate(
            regime=OLD_REGIME,
            income=income,
            regime_deductions=deductions.old_regime_total(),
            standard_deduction_limit=self.rates.OLD_STANDARD_DEDUCTION,
            slabs=self.rates.slabs_for_old_regime(age),
            tds=tds,
            tcs=tcs,
            carry_forward_losses=carry_forward_losses,
        )

    def calculate_new_regime(
        self,
        income: IncomeData,
        deductions: DeductionData,
        age: int,
        tds: TDSData = None,
        tcs: TCSData = None,
        carry_forward_losses: List[CarryForwardLoss] = None
    ) -> TaxResult:
        """
        Compute tax under the new regime.

        Only the standard deduction, gratuity, leave encashment,
        professional tax and meal vouchers are allowed. Age does not change
        the slab table; it is accepted for a uniform signature.
        """
        return self._calculate(
            regime=NEW_REGIME,
            income=income,
            regime_deductions=deductions.new_regime_total(),
            standard_deduction_limit=self.rates.NEW_STANDARD_DEDUCTION,
            slabs=self.rates.new_regime_slabs,
            tds=tds,
            tcs=tcs,
            carry_forward_losses=carry_forward_losses,
        )

    def compare(self, old_result: TaxResult, new_result: TaxResult) -> RegimeComparison:
        """Recommend the regime with the lower total tax."""
        return get_optimal_regime(old_result, new_result)

    def eligible_deductions(self, profile: TaxpayerProfile) -> DeductionData:
        """
        Deductions for a profile.

        When the profile carries a deduction worksheet, its section limits
        are applied against the computed gross total income; otherwise the
        profile's deductions are used as given.
        """
        if profile.deduction_worksheet is None:
            return profile.deductions
        gross_income = compute_gross_income(
            profile.income, profile.carry_forward_losses, strict=self.strict
        ).gross_income
        return compute_eligible_deductions(
            profile.deduction_worksheet,
            basic_salary=profile.income.basic_salary,
            gross_total_income=gross_income,
            age=profile.age,
        )

    def calculate_profile(self, profile: TaxpayerProfile) -> Tuple[TaxResult, TaxResult, RegimeComparison]:
        """
        Compute both regimes for a profile and compare them.

        Returns:
            Tuple of (old regime result, new regime result, comparison)
        """
        deductions = self.eligible_deductions(profile)
        args = (profile.income, deductions, profile.age, profile.tds, profile.tcs,
                profile.carry_forward_losses)
        old_result = self.calculate_old_regime(*args)
        new_result = self.calculate_new_regime(*args)
        return old_result, new_result, self.compare(old_result, new_result)

    def _calculate(
        self,
        regime: str,
        income: IncomeData,
        regime_deductions: float,
        standard_deduction_limit: float,
        slabs,
        tds: Optional[TDSData],
        tcs: Optional[TCSData],
        carry_forward_losses: Optional[List[CarryForwardLoss]]
    ) -> TaxResult:
        tds = tds or TDSData()
        tcs = tcs or TCSData()

        # Steps 1-4: gross total income
        computation = compute_gross_income(income, carry_forward_losses, strict=self.strict)
        gross_income = computation.gross_income

        # Steps 5-7: deductions and taxable income
        standard_deduction = max(0.0, min(income.salary, standard_deduction_limit))
        total_deductions = standard_deduction + regime_deductions
        taxable_income = max(0.0, gross_income - total_deductions)

        # Steps 8-9: slab tax plus capital gains at special rates
        regular_income_tax = calculate_tax_on_slabs(taxable_income, slabs)
        capital_gains_tax = computation.capital_gains.total_tax
        tax_before_rebate = regular_income_tax + capital_gains_tax

        # Step 10: rebate u/s 87A
        rebate_amount = calculate_rebate_87a(taxable_income, regular_income_tax, regime, self.rates)
        tax_after_rebate = max(0.0, tax_before_rebate - rebate_amount)

        # Steps 11-12: surcharge and cess
        surcharge = calculate_surcharge(gross_income, tax_after_rebate, self.rates)
        cess = calculate_cess(tax_after_rebate + surcharge, self.rates)
        total_tax = tax_after_rebate + surcharge + cess

        # Steps 13-14: credits and advance tax
        net_tax_payable = max(0.0, total_tax - total_taxes_withheld(tds, tcs))
        if net_tax_payable > self.rates.ADVANCE_TAX_THRESHOLD:
            advance_tax_required = net_tax_payable * self.rates.ADVANCE_TAX_RATIO
        else:
            advance_tax_required = 0.0

        effective_rate = total_tax / gross_income * 100 if gross_income > 0 else 0.0

        logger.debug(
            "%s regime: gross %.2f, deductions %.2f, taxable %.2f, total tax %.2f",
            regime, gross_income, total_deductions, taxable_income, total_tax,
        )

        return TaxResult(
            regime=regime,
            gross_income=gross_income,
            total_deductions=total_deductions,
            standard_deduction=standard_deduction,
            taxable_income=taxable_income,
            tax_before_rebate=tax_before_rebate,
            rebate_amount=rebate_amount,
            tax_after_rebate=tax_after_rebate,
            surcharge=surcharge,
            cess=cess,
            total_tax=total_tax,
            effective_rate=effective_rate,
            capital_gains_tax=capital_gains_tax,
            regular_income_tax=regular_income_tax,
            tds_deducted=tds.total,
            tcs_deducted=tcs.total,
            net_tax_payable=net_tax_payable,
            advance_tax_required=advance_tax_required,
            house_property_income=computation.house_property_income,
            capital_gains_breakdown=computation.capital_gains.breakdown,
            losses_utilized=computation.set_off.losses_utilized,
            remaining_losses=computation.set_off.remaining_losses,
        )


def calculate_old_regime_tax(
    income: IncomeData,
    deductions: DeductionData,
    age: int,
    tds: TDSData = None,
    tcs: TCSData = None,
    carry_forward_losses: List[CarryForwardLoss] = None
) -> TaxResult:
    """Compute tax under the old regime with the current FY rules."""
    return TaxCalculator().calculate_old_regime(income, deductions, age, tds, tcs, carry_forward_losses)


def calculate_new_regime_tax(
    income: IncomeData,
    deductions: DeductionData,
    age: int,
    tds: TDSData = None,
    tcs: TCSData = None,
    carry_forward_losses: List[CarryForwardLoss] = None
) -> TaxResult:
    """Compute tax under the new regime with the current FY rules."""
    return TaxCalculator().calculate_new_regime(income, deductions, age, tds, tcs, carry_forward_losses)
