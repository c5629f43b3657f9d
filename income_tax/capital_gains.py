"""
Capital gains classification and tax.

This module holds the asset type catalog and computes the tax on capital
gains that are charged at special rates. Gains on assets taxed at slab
rates are not taxed here; their amount is returned separately so that the
regime calculators can add it to ordinary income.

Encoding of rates in the catalog:
- rate > 0: flat rate applied here
- rate == 0: deferred to slab rates
- exemption_limit: long-term gains up to this amount are exempt
"""

import logging
from datetime import date
from typing import Dict, List, Optional

from .exceptions import UnknownAssetTypeError
from .models import AssetType, CapitalGain, CapitalGainBreakdown, CapitalGainsResult

logger = logging.getLogger(__name__)


ASSET_TYPES: List[AssetType] = [
    AssetType(
        id="equity_shares",
        name="Equity Shares (Listed)",
        short_term_rate=15,     # Section 111A
        long_term_rate=10,      # Section 112A, above ₹1 lakh
        long_term_threshold=12,
        exemption_limit=100000,
    ),
    AssetType(
        id="equity_mf",
        name="Equity Mutual Funds",
        short_term_rate=15,
        long_term_rate=10,
        long_term_threshold=12,
        exemption_limit=100000,
    ),
    AssetType(
        id="debt_mf",
        name="Debt Mutual Funds",
        short_term_rate=0,
        long_term_rate=20,      # with indexation
        long_term_threshold=36,
    ),
    AssetType(
        id="real_estate",
        name="Real Estate/Property",
        short_term_rate=0,
        long_term_rate=20,
        long_term_threshold=24,
    ),
    AssetType(
        id="gold_jewelry",
        name="Gold/Jewelry",
        short_term_rate=0,
        long_term_rate=20,
        long_term_threshold=36,
    ),
    AssetType(
        id="bonds",
        name="Bonds/Debentures",
        short_term_rate=0,
        long_term_rate=20,
        long_term_threshold=12,
    ),
    AssetType(
        id="unlisted_shares",
        name="Unlisted Shares",
        short_term_rate=0,
        long_term_rate=20,
        long_term_threshold=24,
    ),
    AssetType(
        id="crypto",
        name="Cryptocurrency",
        short_term_rate=30,     # Section 115BBH, no holding period benefit
        long_term_rate=30,
        long_term_threshold=12,
    ),
]

_ASSET_TYPES_BY_ID: Dict[str, AssetType] = {a.id: a for a in ASSET_TYPES}

# Cost Inflation Index, keyed by the calendar year in which the FY starts
COST_INFLATION_INDEX: Dict[int, int] = {
    2001: 100, 2002: 105, 2003: 109, 2004: 113, 2005: 117,
    2006: 122, 2007: 129, 2008: 137, 2009: 148, 2010: 167,
    2011: 184, 2012: 200, 2013: 220, 2014: 240, 2015: 254,
    2016: 264, 2017: 272, 2018: 280, 2019: 289, 2020: 301,
    2021: 317, 2022: 331, 2023: 348, 2024: 363, 2025: 380,
}


def get_asset_type(asset_type_id: str) -> Optional[AssetType]:
    """Look up an asset type by id; None if it is not in the catalog."""
    return _ASSET_TYPES_BY_ID.get(asset_type_id)


def _months_between(start: date, end: date) -> int:
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day < start.day:
        months -= 1
    return months


def is_long_term_holding(asset_type_id: str, purchase_date: date, sale_date: date) -> bool:
    """
    Classify a holding as long-term using the asset's threshold.

    Args:
        asset_type_id: Catalog id of the asset
        purchase_date: Date of acquisition
        sale_date: Date of transfer

    Returns:
        True if held for more than the asset's long-term threshold (months).
        Unknown asset types are treated as short-term.

    Examples:
        >>> is_long_term_holding('equity_shares', date(2023, 1, 1), date(2024, 3, 1))
        True
    """
    asset_type = get_asset_type(asset_type_id)
    if asset_type is None:
        return False
    return _months_between(purchase_date, sale_date) > asset_type.long_term_threshold


def calculate_capital_gains_tax(
    capital_gains: List[CapitalGain],
    strict: bool = False
) -> CapitalGainsResult:
    """
    Calculate tax on capital gains charged at special rates.

    Args:
        capital_gains: Gains by asset class
        strict: Raise UnknownAssetTypeError for unknown asset types instead
                of counting them as zero

    Returns:
        CapitalGainsResult with the flat-rate tax total, the amount deferred
        to slab taxation, and a per-entry breakdown

    The method, for each gain:
    1. Long-term: deduct the exemption limit (if any), then apply the
       long-term rate, or defer the remainder to slab if the rate is 0
    2. Short-term: apply the short-term rate, or defer to slab if it is 0

    A loss entry (negative amount) has a taxable amount of 0: it neither
    yields a negative tax nor reduces slab income.
    """
    result = CapitalGainsResult()

    for gain in capital_gains:
        asset_type = get_asset_type(gain.asset_type)
        if asset_type is None:
            if strict:
                raise UnknownAssetTypeError(gain.asset_type)
            logger.warning("Unknown asset type %r; gain of %.2f contributes no tax",
                           gain.asset_type, gain.amount)
            result.unknown_asset_types.append(gain.asset_type)
            continue

        if gain.is_long_term:
            rate = asset_type.long_term_rate
            taxable_amount = gain.amount
            if asset_type.exemption_limit:
                taxable_amount = gain.amount - asset_type.exemption_limit
        else:
            rate = asset_type.short_term_rate
            taxable_amount = gain.amount
        taxable_amount = max(0.0, taxable_amount)

        slab_deferred = rate == 0
        if slab_deferred:
            tax = 0.0
            result.slab_deferred_amount += taxable_amount
        else:
            tax = taxable_amount * rate / 100

        result.total_tax += tax
        result.breakdown.append(CapitalGainBreakdown(
            asset_type=asset_type.name,
            amount=gain.amount,
            tax=tax,
            taxable_amount=taxable_amount,
            slab_deferred=slab_deferred,
            is_long_term=gain.is_long_term,
        ))

    logger.debug("Capital gains: flat tax %.2f, slab deferred %.2f",
                 result.total_tax, result.slab_deferred_amount)
    return result


def calculate_indexed_cost(
    purchase_year: int,
    sale_year: int,
    cost_of_acquisition: float,
    cost_of_improvement: float = 0.0
) -> float:
    """
    Indexed cost of acquisition and improvement for long-term gains.

    Years missing from the index fall back to the base year (2001) for the
    purchase and to 2024 for the sale.

    Args:
        purchase_year: FY start year of acquisition
        sale_year: FY start year of transfer
        cost_of_acquisition: Original cost
        cost_of_improvement: Cost of improvement

    Returns:
        Indexed cost (acquisition plus improvement)
    """
    purchase_cii = COST_INFLATION_INDEX.get(purchase_year, COST_INFLATION_INDEX[2001])
    sale_cii = COST_INFLATION_INDEX.get(sale_year, COST_INFLATION_INDEX[2024])

    indexed_acquisition = cost_of_acquisition * sale_cii / purchase_cii
    indexed_improvement = cost_of_improvement * sale_cii / purchase_cii
    return indexed_acquisition + indexed_improvement
