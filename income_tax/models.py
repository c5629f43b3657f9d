"""
Data models for the Income Tax Calculator.

This module contains dataclasses representing a taxpayer's income,
deductions, prior-year losses and taxes withheld, along with the result
records produced by the regime calculators.

Input records are frozen: a computation never mutates what it is given.
"""

from dataclasses import dataclass, field, fields, asdict
from datetime import date
from typing import Optional, List, Dict, Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .deductions import DeductionWorksheet


@dataclass(frozen=True)
class AssetType:
    """
    Capital asset class with its tax treatment.

    A rate of 0 means the gain is not taxed at a flat rate but is added to
    ordinary income and taxed at slab rates.

    Attributes:
        id: Catalog identifier (e.g. 'equity_shares')
        name: Display name
        short_term_rate: Flat rate (%) for short-term gains, 0 for slab
        long_term_rate: Flat rate (%) for long-term gains, 0 for slab
        long_term_threshold: Holding period in months to qualify as long-term
        exemption_limit: Annual exemption on long-term gains, if any
    """
    id: str
    name: str
    short_term_rate: float
    long_term_rate: float
    long_term_threshold: int
    exemption_limit: Optional[float] = None


@dataclass(frozen=True)
class CapitalGain:
    """
    A capital gain on the sale of one asset class.

    Attributes:
        asset_type: AssetType id from the catalog
        is_long_term: True if held beyond the asset's long-term threshold
        amount: Gain amount in INR
        purchase_date: Date of acquisition (optional)
        sale_date: Date of transfer (optional)
    """
    asset_type: str
    is_long_term: bool
    amount: float
    purchase_date: Optional[date] = None
    sale_date: Optional[date] = None


@dataclass(frozen=True)
class HousePropertyData:
    """
    Income and outgoings of a house property.

    For a self-occupied property only the loan interest matters; the other
    expense fields are ignored.
    """
    annual_rent_received: float = 0.0
    municipal_taxes: float = 0.0
    repair_maintenance: float = 0.0
    interest_on_loan: float = 0.0
    other_expenses: float = 0.0
    is_let_out: bool = False
    self_occupied_count: int = 1


@dataclass(frozen=True)
class IncomeData:
    """
    Income of a taxpayer for the financial year.

    Attributes:
        salary: Gross salary
        basic_salary: Basic pay, used only for HRA; never part of gross income
        business_income: Profits from business or profession
        other_sources: Interest, dividends and similar income
        capital_gains: Capital gains by asset class
        house_property: House property details, if any
        speculative_income: Income from speculative business (intraday etc.)
    """
    salary: float = 0.0
    basic_salary: float = 0.0
    business_income: float = 0.0
    other_sources: float = 0.0
    capital_gains: List[CapitalGain] = field(default_factory=list)
    house_property: Optional[HousePropertyData] = None
    speculative_income: float = 0.0


@dataclass(frozen=True)
class DeductionData:
    """
    Eligible deduction amounts by section.

    Each field is an already-capped eligible amount; the section
    calculators in deductions.py produce these values.
    """
    section_80c: float = 0.0
    section_80d: float = 0.0
    hra: float = 0.0
    lta: float = 0.0
    home_loan_interest: float = 0.0
    section_80tta: float = 0.0
    nps: float = 0.0
    professional_tax: float = 0.0
    section_80e: float = 0.0
    section_80g: float = 0.0
    section_80ee: float = 0.0
    section_80eea: float = 0.0
    section_80u: float = 0.0
    section_80ddb: float = 0.0
    section_80ccg: float = 0.0
    section_80ccc: float = 0.0
    section_80ccd: float = 0.0
    gratuity: float = 0.0
    leave_encashment: float = 0.0
    meal_vouchers: float = 0.0

    # Allowed under the new regime (besides the standard deduction)
    NEW_REGIME_FIELDS = ("gratuity", "leave_encashment", "professional_tax", "meal_vouchers")

    def old_regime_total(self) -> float:
        """Total of every itemized deduction (old regime)."""
        return sum(getattr(self, f.name) for f in fields(self))

    def new_regime_total(self) -> float:
        """Total of the deductions the new regime still allows."""
        return sum(getattr(self, name) for name in self.NEW_REGIME_FIELDS)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


LOSS_FIELDS = (
    "short_term_loss",
    "long_term_loss",
    "business_loss",
    "house_property_loss",
    "speculative_loss",
    "non_speculative_loss",
)


@dataclass(frozen=True)
class CarryForwardLoss:
    """
    Losses brought forward from a prior assessment year.

    Attributes:
        assessment_year: Year the loss was incurred, 'YYYY-YY' (sorts lexically)
    """
    assessment_year: str
    short_term_loss: float = 0.0
    long_term_loss: float = 0.0
    business_loss: float = 0.0
    house_property_loss: float = 0.0
    speculative_loss: float = 0.0
    non_speculative_loss: float = 0.0

    @property
    def total(self) -> float:
        """Sum of all six loss fields."""
        return sum(getattr(self, name) for name in LOSS_FIELDS)

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, name) <= 0 for name in LOSS_FIELDS)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TDSData:
    """Tax deducted at source, by category."""
    salary: float = 0.0
    professional_services: float = 0.0
    interest_from_bank: float = 0.0
    rent_received: float = 0.0
    other_tds: float = 0.0

    @property
    def total(self) -> float:
        return (self.salary + self.professional_services + self.interest_from_bank
                + self.rent_received + self.other_tds)


@dataclass(frozen=True)
class TCSData:
    """Tax collected at source, by category."""
    sale_of_goods: float = 0.0
    foreign_remittance: float = 0.0
    motor_vehicle: float = 0.0
    other_tcs: float = 0.0

    @property
    def total(self) -> float:
        return self.sale_of_goods + self.foreign_remittance + self.motor_vehicle + self.other_tcs


@dataclass
class CapitalGainBreakdown:
    """Tax computed on a single capital gain entry."""
    asset_type: str
    amount: float
    tax: float
    taxable_amount: float = 0.0
    slab_deferred: bool = False
    is_long_term: bool = False


@dataclass
class CapitalGainsResult:
    """
    Result of classifying a list of capital gains.

    Attributes:
        total_tax: Tax on gains taxed at flat/special rates
        slab_deferred_amount: Gains to be added to ordinary income for slab tax
        breakdown: Per-entry details
        unknown_asset_types: Asset type ids that did not resolve (taxed at zero)
    """
    total_tax: float = 0.0
    slab_deferred_amount: float = 0.0
    breakdown: List[CapitalGainBreakdown] = field(default_factory=list)
    unknown_asset_types: List[str] = field(default_factory=list)

    @property
    def short_term_gains(self) -> float:
        """Net short-term gains of entries with a known asset type."""
        return sum(e.amount for e in self.breakdown if not e.is_long_term)

    @property
    def long_term_gains(self) -> float:
        """Net long-term gains of entries with a known asset type."""
        return sum(e.amount for e in self.breakdown if e.is_long_term)


@dataclass
class AdjustedIncome:
    """Income heads available for set-off of brought forward losses."""
    business_income: float = 0.0
    capital_gains_short: float = 0.0
    capital_gains_long: float = 0.0
    house_property_income: float = 0.0
    speculative_income: float = 0.0


@dataclass
class SetOffResult:
    """
    Outcome of setting off brought forward losses.

    Attributes:
        adjusted_income: Income heads after set-off
        losses_utilized: Total set off per loss type, across all years
        remaining_losses: Unabsorbed losses per year, to carry forward
    """
    adjusted_income: AdjustedIncome
    losses_utilized: CarryForwardLoss
    remaining_losses: List[CarryForwardLoss] = field(default_factory=list)


@dataclass
class TaxResult:
    """
    Complete tax computation under one regime.

    Invariants:
        total_tax == tax_after_rebate + surcharge + cess
        net_tax_payable == max(0, total_tax - tds_deducted - tcs_deducted)
    """
    regime: str
    gross_income: float = 0.0
    total_deductions: float = 0.0
    standard_deduction: float = 0.0
    taxable_income: float = 0.0
    tax_before_rebate: float = 0.0
    rebate_amount: float = 0.0
    tax_after_rebate: float = 0.0
    surcharge: float = 0.0
    cess: float = 0.0
    total_tax: float = 0.0
    effective_rate: float = 0.0
    capital_gains_tax: float = 0.0
    regular_income_tax: float = 0.0
    tds_deducted: float = 0.0
    tcs_deducted: float = 0.0
    net_tax_payable: float = 0.0
    advance_tax_required: float = 0.0
    house_property_income: float = 0.0

    # Supporting detail for reports
    capital_gains_breakdown: List[CapitalGainBreakdown] = field(default_factory=list)
    losses_utilized: Optional[CarryForwardLoss] = None
    remaining_losses: List[CarryForwardLoss] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the headline figures to a dictionary for export."""
        return {
            'regime': self.regime,
            'gross_income': self.gross_income,
            'total_deductions': self.total_deductions,
            'standard_deduction': self.standard_deduction,
            'taxable_income': self.taxable_income,
            'tax_before_rebate': self.tax_before_rebate,
            'rebate_amount': self.rebate_amount,
            'tax_after_rebate': self.tax_after_rebate,
            'surcharge': self.surcharge,
            'cess': self.cess,
            'total_tax': self.total_tax,
            'effective_rate': self.effective_rate,
            'capital_gains_tax': self.capital_gains_tax,
            'regular_income_tax': self.regular_income_tax,
            'tds_deducted': self.tds_deducted,
            'tcs_deducted': self.tcs_deducted,
            'net_tax_payable': self.net_tax_payable,
            'advance_tax_required': self.advance_tax_required,
            'house_property_income': self.house_property_income,
        }


@dataclass
class RegimeComparison:
    """Recommendation between the old and new regimes."""
    recommended_regime: str
    savings: float
    percentage_savings: float
    old_regime_tax: float
    new_regime_tax: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TaxpayerProfile:
    """
    Everything needed to compute a taxpayer's tax under both regimes.

    Attributes:
        name: Taxpayer name, for reports
        age: Age on the last day of the financial year
        income: Income for the year
        deductions: Eligible deductions
        tds: Tax deducted at source
        tcs: Tax collected at source
        carry_forward_losses: Losses brought forward from earlier years
        deduction_worksheet: Raw deduction inputs; when present the
            eligible deductions are computed from it instead
    """
    name: str = ""
    age: int = 30
    income: IncomeData = field(default_factory=IncomeData)
    deductions: DeductionData = field(default_factory=DeductionData)
    tds: TDSData = field(default_factory=TDSData)
    tcs: TCSData = field(default_factory=TCSData)
    carry_forward_losses: List[CarryForwardLoss] = field(default_factory=list)
    deduction_worksheet: Optional["DeductionWorksheet"] = None
