"""
Excel report generation module.

This module provides the ExcelReporter class for generating
formatted Excel workbooks with the tax computation.
"""

from typing import List

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, Border, Side, PatternFill

from ..advance_tax import calculate_advance_tax_installments
from ..interfaces import BaseReporter
from ..models import CarryForwardLoss, RegimeComparison, TaxResult, LOSS_FIELDS
from ..rates import TaxRates
from ..slabs import slab_breakdown

INR_FORMAT = '₹#,##0.00'

# (label, TaxResult attribute)
COMPUTATION_ROWS = [
    ("Gross Total Income", "gross_income"),
    ("House Property Income", "house_property_income"),
    ("Standard Deduction", "standard_deduction"),
    ("Total Deductions", "total_deductions"),
    ("Taxable Income", "taxable_income"),
    ("Tax on Slab Income", "regular_income_tax"),
    ("Tax on Capital Gains", "capital_gains_tax"),
    ("Tax before Rebate", "tax_before_rebate"),
    ("Rebate u/s 87A", "rebate_amount"),
    ("Tax after Rebate", "tax_after_rebate"),
    ("Surcharge", "surcharge"),
    ("Health & Education Cess", "cess"),
    ("Total Tax Liability", "total_tax"),
    ("TDS", "tds_deducted"),
    ("TCS", "tcs_deducted"),
    ("Net Tax Payable", "net_tax_payable"),
    ("Advance Tax Required", "advance_tax_required"),
]


class ExcelReporter(BaseReporter):
    """
    Reporter for generating Excel workbooks.

    Creates multi-sheet workbooks with:
    - Summary sheet
    - Old regime computation
    - New regime computation
    - Capital gains breakdown
    - Brought forward losses
    - Advance tax schedule
    """

    def __init__(self, rates: TaxRates = None):
        """Initialize reporter with styles."""
        self.rates = rates or TaxRates()

        self.header_font = Font(bold=True, color="FFFFFF", size=11)
        self.header_fill = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
        self.header_alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)

        self.thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )

        self.recommended_fill = PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid")
        self.loss_fill = PatternFill(start_color="FFC7CE", end_color="FFC7CE", fill_type="solid")

        self.summary_font = Font(bold=True, size=12)
        self.summary_fill = PatternFill(start_color="D9E1F2", end_color="D9E1F2", fill_type="solid")

    def generate(
        self,
        old_result: TaxResult,
        new_result: TaxResult,
        comparison: RegimeComparison = None,
        filepath: str = "tax_computation.xlsx",
        age: int = 30,
        **kwargs
    ) -> bool:
        """Write the workbook to filepath."""
        return self.export(filepath, old_result, new_result, comparison, age=age)

    def export(
        self,
        filepath: str,
        old_result: TaxResult,
        new_result: TaxResult,
        comparison: RegimeComparison = None,
        age: int = 30
    ) -> bool:
        """
        Export the computation to an Excel workbook.

        Args:
            filepath: Output file path
            old_result: Old regime computation
            new_result: New regime computation
            comparison: Regime recommendation
            age: Taxpayer age, for the old regime slab table

        Returns:
            True if export successful
        """
        wb = Workbook()

        self._create_summary_sheet(wb, old_result, new_result, comparison)
        self._create_regime_sheet(wb, "Old Regime", old_result, self.rates.slabs_for_old_regime(age))
        self._create_regime_sheet(wb, "New Regime", new_result, self.rates.new_regime_slabs)
        self._create_capital_gains_sheet(wb, old_result)
        self._create_carry_forward_sheet(wb, old_result)

        recommended = old_result
        if comparison is not None and comparison.recommended_regime == "new":
            recommended = new_result
        self._create_advance_tax_sheet(wb, recommended)

        wb.save(filepath)
        print(f"[OK] Excel exported to: {filepath}")
        return True

    def _write_header(self, ws, row: int, headers: List[str]) -> None:
        for col, header in enumerate(headers, 1):
            cell = ws.cell(row=row, column=col, value=header)
            cell.font = self.header_font
            cell.fill = self.header_fill
            cell.alignment = self.header_alignment
            cell.border = self.thin_border

    def _write_title(self, ws, row: int, title: str, last_column: str) -> None:
        ws.cell(row=row, column=1, value=title).font = self.summary_font
        ws.cell(row=row, column=1).fill = self.summary_fill
        ws.merge_cells(f'A{row}:{last_column}{row}')

    def _create_summary_sheet(self, wb, old_result, new_result, comparison):
        """Create the summary sheet."""
        ws = wb.active
        ws.title = "Summary"

        row = 1
        self._write_title(ws, row, "REGIME COMPARISON", "C")

        row += 1
        self._write_header(ws, row, ["Item", "Old Regime", "New Regime"])

        for label, attr in COMPUTATION_ROWS:
            row += 1
            ws.cell(row=row, column=1, value=label)
            ws.cell(row=row, column=2, value=getattr(old_result, attr))
            ws.cell(row=row, column=3, value=getattr(new_result, attr))
            for col in range(1, 4):
                ws.cell(row=row, column=col).border = self.thin_border
            ws.cell(row=row, column=2).number_format = INR_FORMAT
            ws.cell(row=row, column=3).number_format = INR_FORMAT

        row += 1
        ws.cell(row=row, column=1, value="Effective Rate (%)")
        ws.cell(row=row, column=2, value=round(old_result.effective_rate, 2))
        ws.cell(row=row, column=3, value=round(new_result.effective_rate, 2))

        if comparison is not None:
            row += 2
            self._write_title(ws, row, "RECOMMENDATION", "C")
            rows = [
                ("Recommended Regime", comparison.recommended_regime.upper()),
                ("Savings", abs(comparison.savings)),
                ("Savings (%)", round(comparison.percentage_savings, 2)),
            ]
            for label, value in rows:
                row += 1
                ws.cell(row=row, column=1, value=label).font = Font(bold=True)
                ws.cell(row=row, column=2, value=value)
            ws.cell(row=row - 1, column=2).number_format = INR_FORMAT

            column = 2 if comparison.recommended_regime == "old" else 3
            ws.cell(row=2, column=column).fill = self.recommended_fill

        ws.column_dimensions['A'].width = 30
        ws.column_dimensions['B'].width = 20
        ws.column_dimensions['C'].width = 20

    def _create_regime_sheet(self, wb, title: str, result: TaxResult, slabs):
        """Create a computation sheet for one regime."""
        ws = wb.create_sheet(title)

        self._write_title(ws, 1, f"{title.upper()} TAX COMPUTATION", "B")
        self._write_header(ws, 2, ["Item", "Amount (INR)"])

        row = 2
        for label, attr in COMPUTATION_ROWS:
            row += 1
            ws.cell(row=row, column=1, value=label)
            ws.cell(row=row, column=2, value=getattr(result, attr)).number_format = INR_FORMAT
            ws.cell(row=row, column=1).border = self.thin_border
            ws.cell(row=row, column=2).border = self.thin_border

        row += 2
        self._write_title(ws, row, "SLAB BREAKDOWN", "D")
        row += 1
        self._write_header(ws, row, ["Income Range", "Rate (%)", "Income in Slab", "Tax"])

        for slab_row in slab_breakdown(result.taxable_income, slabs):
            row += 1
            ws.cell(row=row, column=1, value=slab_row['range'])
            ws.cell(row=row, column=2, value=slab_row['rate'])
            ws.cell(row=row, column=3, value=slab_row['income']).number_format = INR_FORMAT
            ws.cell(row=row, column=4, value=slab_row['tax']).number_format = INR_FORMAT

        ws.column_dimensions['A'].width = 30
        ws.column_dimensions['B'].width = 20
        ws.column_dimensions['C'].width = 20
        ws.column_dimensions['D'].width = 18

    def _create_capital_gains_sheet(self, wb, result: TaxResult):
        """Create the capital gains sheet."""
        ws = wb.create_sheet("Capital Gains")
        self._write_header(ws, 1, ["Asset Type", "Gain (INR)", "Taxable (INR)", "Tax (INR)", "Taxed At"])

        row = 1
        for entry in result.capital_gains_breakdown:
            row += 1
            ws.cell(row=row, column=1, value=entry.asset_type)
            ws.cell(row=row, column=2, value=entry.amount).number_format = INR_FORMAT
            ws.cell(row=row, column=3, value=entry.taxable_amount).number_format = INR_FORMAT
            ws.cell(row=row, column=4, value=entry.tax).number_format = INR_FORMAT
            ws.cell(row=row, column=5, value="Slab" if entry.slab_deferred else "Special rate")
            if entry.amount < 0:
                for col in range(1, 6):
                    ws.cell(row=row, column=col).fill = self.loss_fill

        row += 1
        ws.cell(row=row, column=1, value="TOTAL").font = Font(bold=True)
        ws.cell(row=row, column=2, value=sum(e.amount for e in result.capital_gains_breakdown))
        ws.cell(row=row, column=4, value=result.capital_gains_tax)
        ws.cell(row=row, column=2).number_format = INR_FORMAT
        ws.cell(row=row, column=4).number_format = INR_FORMAT

        for column in "ABCDE":
            ws.column_dimensions[column].width = 18

    def _create_carry_forward_sheet(self, wb, result: TaxResult):
        """Create the brought forward losses sheet."""
        ws = wb.create_sheet("Carry Forward")
        headers = ["Assessment Year"] + [name.replace("_", " ").title() for name in LOSS_FIELDS] + ["Total"]
        self._write_header(ws, 1, ["Status"] + headers)

        rows = []
        if result.losses_utilized is not None:
            rows.append(("Set off", result.losses_utilized))
        rows.extend(("Carried forward", loss) for loss in result.remaining_losses)

        row = 1
        for status, loss in rows:
            row += 1
            self._write_loss_row(ws, row, status, loss)

        for col in range(1, len(headers) + 2):
            ws.column_dimensions[ws.cell(row=1, column=col).column_letter].width = 18

    def _write_loss_row(self, ws, row: int, status: str, loss: CarryForwardLoss) -> None:
        ws.cell(row=row, column=1, value=status)
        ws.cell(row=row, column=2, value=loss.assessment_year)
        for col, name in enumerate(LOSS_FIELDS, 3):
            ws.cell(row=row, column=col, value=getattr(loss, name)).number_format = INR_FORMAT
        ws.cell(row=row, column=len(LOSS_FIELDS) + 3, value=loss.total).number_format = INR_FORMAT

    def _create_advance_tax_sheet(self, wb, result: TaxResult):
        """Create the advance tax schedule sheet."""
        ws = wb.create_sheet("Advance Tax")
        self._write_title(ws, 1, f"ADVANCE TAX SCHEDULE ({result.regime.upper()} REGIME)", "D")
        self._write_header(ws, 2, ["Instalment", "Due Date", "Cumulative (%)", "Amount (INR)"])

        row = 2
        for inst in calculate_advance_tax_installments(result.net_tax_payable):
            row += 1
            ws.cell(row=row, column=1, value=inst.quarter)
            ws.cell(row=row, column=2, value=inst.due_date)
            ws.cell(row=row, column=3, value=inst.cumulative_percent)
            ws.cell(row=row, column=4, value=inst.amount).number_format = INR_FORMAT

        for column in "ABCD":
            ws.column_dimensions[column].width = 18
