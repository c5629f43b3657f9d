"""
Interface definitions (Protocols) for the Income Tax Calculator.

This module defines abstract interfaces that enable loose coupling
between components and facilitate testing with mock implementations.
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Any, Protocol, runtime_checkable

from .models import (
    CarryForwardLoss,
    DeductionData,
    IncomeData,
    RegimeComparison,
    TaxpayerProfile,
    TaxResult,
    TCSData,
    TDSData,
)
from .utils import parse_amount


@runtime_checkable
class IRegimeCalculator(Protocol):
    """
    Interface for regime tax calculators.

    Any class implementing this interface can compute a TaxResult under
    each regime and compare the two.
    """

    def calculate_old_regime(
        self,
        income: IncomeData,
        deductions: DeductionData,
        age: int,
        tds: TDSData = None,
        tcs: TCSData = None,
        carry_forward_losses: List[CarryForwardLoss] = None
    ) -> TaxResult:
        """Compute tax under the old regime."""
        ...

    def calculate_new_regime(
        self,
        income: IncomeData,
        deductions: DeductionData,
        age: int,
        tds: TDSData = None,
        tcs: TCSData = None,
        carry_forward_losses: List[CarryForwardLoss] = None
    ) -> TaxResult:
        """Compute tax under the new regime."""
        ...

    def compare(self, old_result: TaxResult, new_result: TaxResult) -> RegimeComparison:
        """Recommend a regime."""
        ...


@runtime_checkable
class IProfileParser(Protocol):
    """
    Interface for taxpayer profile parsers.
    """

    def parse(self, data: Dict[str, Any]) -> TaxpayerProfile:
        """
        Parse profile data.

        Args:
            data: Decoded profile (format depends on implementation)

        Returns:
            TaxpayerProfile
        """
        ...


@runtime_checkable
class IReporter(Protocol):
    """
    Interface for report generators.
    """

    def generate(
        self,
        old_result: TaxResult,
        new_result: TaxResult,
        comparison: RegimeComparison = None,
        **kwargs
    ) -> Any:
        """
        Generate a report.

        Args:
            old_result: Old regime computation
            new_result: New regime computation
            comparison: Regime recommendation
            **kwargs: Additional report-specific arguments

        Returns:
            Report output (format depends on implementation)
        """
        ...


class BaseProfileParser(ABC):
    """
    Abstract base class for profile parsers.

    Provides amount coercion shared by all parsers.
    """

    @abstractmethod
    def parse(self, data: Dict[str, Any]) -> TaxpayerProfile:
        """Parse profile data and return a TaxpayerProfile."""
        pass

    def _amount(self, section: Dict[str, Any], key: str) -> float:
        """Read an amount, treating missing and negative values as zero."""
        return max(0.0, parse_amount(section.get(key)))


class BaseReporter(ABC):
    """
    Abstract base class for report generators.
    """

    @abstractmethod
    def generate(
        self,
        old_result: TaxResult,
        new_result: TaxResult,
        comparison: RegimeComparison = None,
        **kwargs
    ) -> Any:
        """Generate a report."""
        pass

