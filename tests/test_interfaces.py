"""
Unit tests for interface definitions.
"""

import pytest

from income_tax.calculator import TaxCalculator
from income_tax.interfaces import (
    IRegimeCalculator,
    IProfileParser,
    IReporter,
    BaseProfileParser,
    BaseReporter,
)
from income_tax.models import IncomeData, DeductionData, TaxpayerProfile, TaxResult
from income_tax.parsers import JsonProfileParser
from income_tax.reports import ConsoleReporter, ExcelReporter


class MockProfileParser(BaseProfileParser):
    """Mock implementation of BaseProfileParser for testing."""

    def parse(self, data) -> TaxpayerProfile:
        return TaxpayerProfile(income=IncomeData(salary=self._amount(data, "salary")))


class MockReporter(BaseReporter):
    """Mock implementation of BaseReporter for testing."""

    def generate(self, old_result, new_result, comparison=None, **kwargs):
        return {"old": old_result.total_tax, "new": new_result.total_tax}


class TestProtocolCompliance:
    """Tests for Protocol (interface) compliance."""

    def test_tax_calculator_is_compliant(self):
        assert isinstance(TaxCalculator(), IRegimeCalculator)

    def test_json_parser_is_compliant(self):
        assert isinstance(JsonProfileParser(), IProfileParser)

    def test_reporters_are_compliant(self):
        assert isinstance(ConsoleReporter(), IReporter)
        assert isinstance(ExcelReporter(), IReporter)

    def test_mock_parser_is_compliant(self):
        parser = MockProfileParser()
        assert isinstance(parser, IProfileParser)
        assert parser.parse({"salary": "1,00,000"}).income.salary == 100000

    def test_base_parser_amount_helper(self):
        parser = MockProfileParser()
        assert parser._amount({"x": -50}, "x") == 0
        assert parser._amount({}, "missing") == 0

    def test_mock_reporter_implements_generate(self):
        reporter = MockReporter()
        assert isinstance(reporter, IReporter)

        result = reporter.generate(TaxResult("old", total_tax=10), TaxResult("new", total_tax=5))
        assert result == {"old": 10, "new": 5}


class TestAbstractBases:
    """Tests for abstract base classes."""

    def test_base_parser_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            BaseProfileParser()

    def test_base_reporter_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            BaseReporter()


class TestDependencyInjection:
    """Tests for using the interfaces to swap implementations."""

    def test_parser_abstraction(self):
        def compute(parser: IProfileParser, data):
            profile = parser.parse(data)
            return TaxCalculator().calculate_profile(profile)

        old_result, new_result, _ = compute(MockProfileParser(), {"salary": 1200000})
        assert old_result.gross_income == new_result.gross_income == 1200000

    def test_reporter_abstraction(self):
        calculator = TaxCalculator()
        income = IncomeData(salary=1200000)
        old_result = calculator.calculate_old_regime(income, DeductionData(), 35)
        new_result = calculator.calculate_new_regime(income, DeductionData(), 35)

        report = MockReporter().generate(old_result, new_result)
        assert report["new"] < report["old"]
