"""
Income Tax Calculator Package

Computes Indian income tax for an individual under the old and new
regimes (FY 2024-25 / AY 2025-26), including capital gains at special
rates, house property income, deductions and brought forward losses,
and recommends the cheaper regime.
"""

__version__ = "1.0.0"

from .models import (
    AssetType,
    CapitalGain,
    HousePropertyData,
    IncomeData,
    DeductionData,
    CarryForwardLoss,
    TDSData,
    TCSData,
    TaxResult,
    RegimeComparison,
    TaxpayerProfile,
)
from .rates import TaxRates
from .slabs import TaxSlab, calculate_tax_on_slabs, get_old_regime_slabs
from .capital_gains import ASSET_TYPES, calculate_capital_gains_tax
from .house_property import calculate_house_property_income
from .carry_forward import apply_carry_forward_losses
from .calculator import TaxCalculator, calculate_old_regime_tax, calculate_new_regime_tax
from .comparator import get_optimal_regime
from .advance_tax import calculate_advance_tax_installments
from .withholding import calculate_tds_rate, total_taxes_withheld
from .presumptive import PresumptiveScheme, calculate_presumptive_income
from .utils import format_currency_inr
from .exceptions import TaxComputationError, UnknownAssetTypeError, ProfileParseError
from .interfaces import (
    IRegimeCalculator,
    IProfileParser,
    IReporter,
    BaseProfileParser,
    BaseReporter,
)

__all__ = [
    # Models
    "AssetType",
    "CapitalGain",
    "HousePropertyData",
    "IncomeData",
    "DeductionData",
    "CarryForwardLoss",
    "TDSData",
    "TCSData",
    "TaxResult",
    "RegimeComparison",
    "TaxpayerProfile",
    # Rules
    "TaxRates",
    "TaxSlab",
    "ASSET_TYPES",
    # Calculations
    "calculate_tax_on_slabs",
    "get_old_regime_slabs",
    "calculate_capital_gains_tax",
    "calculate_house_property_income",
    "apply_carry_forward_losses",
    "TaxCalculator",
    "calculate_old_regime_tax",
    "calculate_new_regime_tax",
    "get_optimal_regime",
    "calculate_advance_tax_installments",
    "calculate_tds_rate",
    "total_taxes_withheld",
    "PresumptiveScheme",
    "calculate_presumptive_income",
    "format_currency_inr",
    # Errors
    "TaxComputationError",
    "UnknownAssetTypeError",
    "ProfileParseError",
    # Interfaces
    "IRegimeCalculator",
    "IProfileParser",
    "IReporter",
    "BaseProfileParser",
    "BaseReporter",
]
