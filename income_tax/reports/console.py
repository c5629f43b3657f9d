"""
Console reporting module for tax computations.

This module provides the ConsoleReporter class for printing formatted
text reports of both regimes, the regime comparison and the supporting
schedules to the console.
"""

from typing import List, Optional

from ..advance_tax import calculate_advance_tax_installments
from ..interfaces import BaseReporter
from ..models import CarryForwardLoss, RegimeComparison, TaxResult, LOSS_FIELDS
from ..rates import TaxRates
from ..slabs import slab_breakdown
from ..utils import format_currency_inr, format_percent

WIDTH = 90


def _line(text: str = "", border: str = "║") -> str:
    return f"{border}{text}".ljust(WIDTH + 1) + border


def _amount_line(label: str, amount: float, border: str = "║") -> str:
    return _line(f"   {label.ljust(40)}{format_currency_inr(amount):>21}", border)


class ConsoleReporter(BaseReporter):
    """
    Reporter for generating console output.

    Provides methods for printing a regime computation, the comparison of
    the two regimes, the capital gains breakdown, brought forward losses and
    the advance tax schedule.
    """

    def __init__(self, rates: TaxRates = None):
        self.rates = rates or TaxRates()

    def generate(
        self,
        old_result: TaxResult,
        new_result: TaxResult,
        comparison: RegimeComparison = None,
        age: int = 30,
        regime: Optional[str] = None,
        **kwargs
    ) -> None:
        """
        Print the full report.

        Args:
            old_result: Old regime computation
            new_result: New regime computation
            comparison: Regime recommendation
            age: Taxpayer age, for the old regime slab table
            regime: 'old' or 'new' to print only that regime
        """
        if regime in (None, "old"):
            self.print_regime(old_result, age)
        if regime in (None, "new"):
            self.print_regime(new_result, age)

        chosen = new_result if regime == "new" else old_result
        self.print_capital_gains(chosen)
        self.print_carry_forward(chosen)

        if comparison is not None and regime is None:
            self.print_comparison(comparison)
            recommended = new_result if comparison.recommended_regime == "new" else old_result
            self.print_advance_tax(recommended)
        else:
            self.print_advance_tax(chosen)

    def print_regime(self, result: TaxResult, age: int = 30) -> None:
        """Print the step-by-step computation for one regime."""
        if result.regime == "old":
            slabs = self.rates.slabs_for_old_regime(age)
        else:
            slabs = self.rates.new_regime_slabs

        print("\n")
        print("╔" + "═" * WIDTH + "╗")
        print("║" + f" {result.regime.upper()} REGIME TAX COMPUTATION ".center(WIDTH) + "║")
        print("╠" + "═" * WIDTH + "╣")
        print(_amount_line("Gross Total Income", result.gross_income))
        print(_amount_line("  of which House Property", result.house_property_income))
        print(_amount_line("Less: Standard Deduction", result.standard_deduction))
        print(_amount_line("Less: Other Deductions", result.total_deductions - result.standard_deduction))
        print(_amount_line("Taxable Income", result.taxable_income))
        print("╟" + "─" * WIDTH + "╢")

        for row in slab_breakdown(result.taxable_income, slabs):
            label = f"  {row['range']} @ {row['rate']:g}%"
            print(_amount_line(label, row['tax']))

        print("╟" + "─" * WIDTH + "╢")
        print(_amount_line("Tax on Slab Income", result.regular_income_tax))
        print(_amount_line("Tax on Capital Gains (special rates)", result.capital_gains_tax))
        print(_amount_line("Less: Rebate u/s 87A", result.rebate_amount))
        print(_amount_line("Tax after Rebate", result.tax_after_rebate))
        print(_amount_line("Surcharge", result.surcharge))
        print(_amount_line("Health & Education Cess", result.cess))
        print("╟" + "─" * WIDTH + "╢")
        print(_amount_line("TOTAL TAX LIABILITY", result.total_tax))
        print(_line(f"   {'Effective Rate'.ljust(40)}{format_percent(result.effective_rate):>21}"))
        print(_amount_line("Less: TDS", result.tds_deducted))
        print(_amount_line("Less: TCS", result.tcs_deducted))
        print(_amount_line("NET TAX PAYABLE", result.net_tax_payable))
        print(_amount_line("Advance Tax Required", result.advance_tax_required))
        print("╚" + "═" * WIDTH + "╝")

    def print_comparison(self, comparison: RegimeComparison) -> None:
        """Print the side-by-side regime comparison."""
        print("\n")
        print("╔" + "═" * WIDTH + "╗")
        print("║" + " REGIME COMPARISON ".center(WIDTH) + "║")
        print("╠" + "═" * WIDTH + "╣")
        print(_amount_line("Old Regime Tax", comparison.old_regime_tax))
        print(_amount_line("New Regime Tax", comparison.new_regime_tax))
        print("╟" + "─" * WIDTH + "╢")
        print(_line(f"   {'Recommended Regime'.ljust(40)}{comparison.recommended_regime.upper():>21}"))
        print(_amount_line("Savings", abs(comparison.savings)))
        print(_line(f"   {'Savings (%)'.ljust(40)}{format_percent(comparison.percentage_savings):>21}"))
        print("╚" + "═" * WIDTH + "╝")

    def print_capital_gains(self, result: TaxResult) -> None:
        """Print the per-entry capital gains tax."""
        if not result.capital_gains_breakdown:
            return

        print("\n")
        print("┌" + "─" * WIDTH + "┐")
        print("│" + " CAPITAL GAINS ".center(WIDTH) + "│")
        print("├" + "─" * WIDTH + "┤")
        print(_line("   " + "Asset Type".ljust(24) + "Gain".rjust(20) + "Taxable".rjust(20)
                    + "Tax".rjust(20), "│"))
        for entry in result.capital_gains_breakdown:
            tax = "at slab" if entry.slab_deferred else format_currency_inr(entry.tax)
            print(_line("   " + entry.asset_type.ljust(24) + format_currency_inr(entry.amount).rjust(20)
                        + format_currency_inr(entry.taxable_amount).rjust(20) + tax.rjust(20), "│"))
        print("└" + "─" * WIDTH + "┘")

    def print_carry_forward(self, result: TaxResult) -> None:
        """Print losses set off this year and losses still carried forward."""
        utilized = result.losses_utilized
        if (utilized is None or utilized.is_empty) and not result.remaining_losses:
            return

        print("\n")
        print("┌" + "─" * WIDTH + "┐")
        print("│" + " BROUGHT FORWARD LOSSES ".center(WIDTH) + "│")
        print("├" + "─" * WIDTH + "┤")
        if utilized is not None and not utilized.is_empty:
            print(_line("   Set off this year:", "│"))
            self._print_loss(utilized)
        for loss in result.remaining_losses:
            print(_line(f"   Carried forward from AY {loss.assessment_year}:", "│"))
            self._print_loss(loss)
        print("└" + "─" * WIDTH + "┘")

    def _print_loss(self, loss: CarryForwardLoss) -> None:
        for name in LOSS_FIELDS:
            amount = getattr(loss, name)
            if amount > 0:
                label = name.replace("_", " ").title()
                print(_amount_line(f"   {label}", amount, "│"))

    def print_advance_tax(self, result: TaxResult) -> List:
        """
        Print the advance tax instalments for a regime.

        Returns:
            The instalments printed
        """
        installments = calculate_advance_tax_installments(result.net_tax_payable)

        print("\n")
        print("┌" + "─" * WIDTH + "┐")
        print("│" + f" ADVANCE TAX SCHEDULE ({result.regime.upper()} REGIME) ".center(WIDTH) + "│")
        print("├" + "─" * WIDTH + "┤")
        if result.net_tax_payable <= self.rates.ADVANCE_TAX_THRESHOLD:
            print(_line("   No advance tax due (net tax payable within ₹10,000)", "│"))
        else:
            for inst in installments:
                label = f"{inst.quarter} by {inst.due_date} ({inst.cumulative_percent:g}% cumulative)"
                print(_amount_line(label, inst.amount, "│"))
        print("└" + "─" * WIDTH + "┘")
        return installments
