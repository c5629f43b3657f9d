#!/usr/bin/env python3
"""
Income Tax Calculator - Main Entry Point

Computes Indian income tax (FY 2024-25) for an individual under the old and
new regimes from a JSON profile and recommends the cheaper regime.

Usage:
    python main.py --profile profile.json
    python main.py --profile profile.json --age 62 --regime old
    python main.py --profile profile.json --excel tax_computation.xlsx
"""

import argparse
import dataclasses
import logging
import sys

# Set UTF-8 encoding for console output (fixes Windows encoding issues)
if sys.platform == 'win32':
    sys.stdout.reconfigure(encoding='utf-8')

from income_tax import TaxCalculator, TaxComputationError
from income_tax.comparator import validate_regime_eligibility
from income_tax.parsers import JsonProfileParser
from income_tax.reports import ConsoleReporter, ExcelReporter


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        description="Income Tax Calculator (Old vs New Regime, FY 2024-25)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --profile profile.json
    (Compute both regimes and recommend one)

  python main.py --profile profile.json --regime old --age 65
    (Old regime only, as a senior citizen)

  python main.py --profile profile.json --excel tax.xlsx
    (Also export an Excel workbook)
"""
    )

    parser.add_argument('--profile', '-p', dest='profile_file', required=True,
                        help='Path to the taxpayer profile JSON file')
    parser.add_argument('--age', '-a', dest='age', type=int,
                        help='Taxpayer age (overrides the profile)')
    parser.add_argument('--regime', '-r', dest='regime', choices=['old', 'new', 'both'],
                        default='both', help='Regime to report (default: both)')
    parser.add_argument('--excel', '-x', dest='excel_file',
                        help='Export the computation to this Excel file')
    parser.add_argument('--strict', action='store_true',
                        help='Fail on unknown capital gains asset types')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Show debug logging of each computation step')

    return parser


def main(argv=None) -> int:
    """Main function to run the income tax calculator."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.age is not None and args.age < 0:
        print(f"[ERROR] Invalid age: {args.age}")
        return 2

    print("=" * 80)
    print("  INCOME TAX CALCULATOR (FY 2024-25)")
    print("=" * 80)

    try:
        print(f"\n[*] Loading profile: {args.profile_file}")
        profile = JsonProfileParser().load(args.profile_file)
        if args.age is not None:
            profile = dataclasses.replace(profile, age=args.age)

        if profile.name:
            print(f"    Taxpayer: {profile.name}")
        print(f"    Age: {profile.age}")
        print(f"    Capital gain entries: {len(profile.income.capital_gains)}")
        print(f"    Brought forward loss years: {len(profile.carry_forward_losses)}")

        calculator = TaxCalculator(strict=args.strict)
        old_result, new_result, comparison = calculator.calculate_profile(profile)
    except TaxComputationError as e:
        print(f"\n[ERROR] {e}")
        return 1

    regime = None if args.regime == 'both' else args.regime
    ConsoleReporter(calculator.rates).generate(
        old_result, new_result, comparison, age=profile.age, regime=regime
    )

    eligibility = validate_regime_eligibility(
        old_result.gross_income, profile.income.business_income > 0
    )
    if eligibility['recommendations']:
        print("\n[*] Notes:")
        for note in eligibility['recommendations']:
            print(f"    - {note}")

    if args.excel_file:
        try:
            ExcelReporter(calculator.rates).export(
                args.excel_file, old_result, new_result, comparison, age=profile.age
            )
        except OSError as e:
            print(f"\n[ERROR] Could not write {args.excel_file}: {e}")
            return 1

    print("\n" + "=" * 80)
    print("  CALCULATION COMPLETE")
    print("=" * 80)
    return 0


if __name__ == "__main__":
    sys.exit(main())
