"""
Parser for JSON taxpayer profiles.

A profile mirrors the dataclass field names:

    {
        "name": "A. Taxpayer",
        "age": 35,
        "income": {
            "salary": 1200000,
            "basic_salary": 600000,
            "capital_gains": [
                {"asset_type": "equity_shares", "amount": 200000,
                 "purchase_date": "2022-04-01", "sale_date": "2024-06-15"}
            ],
            "house_property": {"interest_on_loan": 150000},
            "presumptive": {"scheme": "44ADA", "turnover": 900000}
        },
        "deductions": {"section_80c": 150000},
        "deduction_worksheet": {"section_80c": {"ppf": 100000}, "rent_paid": 240000},
        "tds": {"salary": 90000},
        "tcs": {},
        "carry_forward_losses": [{"assessment_year": "2023-24", "short_term_loss": 50000}]
    }

Every section is optional. Amounts may be numbers or strings such as
"₹1,50,000". Either "deductions" (eligible amounts) or
"deduction_worksheet" (raw inputs, capped by the calculator) may be given.
A "presumptive" block under "income" adds the deemed income of section
44AD, 44ADA or 44AE to business income.
"""

import json
import logging
from dataclasses import fields
from typing import Any, Dict, List, Optional

from ..capital_gains import is_long_term_holding
from ..deductions import DeductionWorksheet, Section80COptions, Section80DOptions
from ..exceptions import ProfileParseError
from ..interfaces import BaseProfileParser
from ..models import (
    CapitalGain,
    CarryForwardLoss,
    DeductionData,
    HousePropertyData,
    IncomeData,
    TaxpayerProfile,
    TCSData,
    TDSData,
    LOSS_FIELDS,
)
from ..presumptive import PresumptiveScheme, calculate_presumptive_income
from ..utils import parse_amount, parse_date

logger = logging.getLogger(__name__)

TOP_LEVEL_KEYS = {
    "name", "age", "income", "deductions", "deduction_worksheet",
    "tds", "tcs", "carry_forward_losses",
}

PRESUMPTIVE_KEYS = {"scheme", "turnover", "vehicle_type", "vehicles", "months_owned"}


def _field_names(cls) -> set:
    return {f.name for f in fields(cls)}


def _flag(section: str, data: Dict[str, Any], key: str, default: bool = False) -> bool:
    """Read a JSON boolean; strings such as 'false' are rejected."""
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ProfileParseError(f"'{key}' in '{section}' must be true or false, got {value!r}")
    return value


class JsonProfileParser(BaseProfileParser):
    """
    Parser for taxpayer profiles decoded from JSON.

    Unknown keys are rejected so that a misspelt field does not silently
    become zero.
    """

    def load(self, filepath: str) -> TaxpayerProfile:
        """
        Read and parse a JSON profile file.

        Args:
            filepath: Path to the JSON file

        Returns:
            TaxpayerProfile

        Raises:
            ProfileParseError: If the file cannot be read or decoded, or
                the profile is malformed
        """
        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except OSError as e:
            raise ProfileParseError(f"Cannot read profile {filepath}: {e}") from e
        except json.JSONDecodeError as e:
            raise ProfileParseError(f"Invalid JSON in {filepath}: {e}") from e

        logger.debug("Loaded profile from %s", filepath)
        return self.parse(data)

    def parse(self, data: Dict[str, Any]) -> TaxpayerProfile:
        """
        Parse a decoded profile.

        Args:
            data: Profile dictionary

        Returns:
            TaxpayerProfile

        Raises:
            ProfileParseError: On unknown keys or unparseable values
        """
        if not isinstance(data, dict):
            raise ProfileParseError("Profile must be a JSON object")
        self._check_keys("profile", data, TOP_LEVEL_KEYS)

        try:
            age = int(data.get("age", 30))
        except (TypeError, ValueError) as e:
            raise ProfileParseError(f"Invalid age: {data.get('age')!r}") from e
        if age < 0:
            raise ProfileParseError(f"Invalid age: {age}")

        worksheet = None
        if data.get("deduction_worksheet") is not None:
            worksheet = self._parse_worksheet(data["deduction_worksheet"])

        return TaxpayerProfile(
            name=str(data.get("name", "")),
            age=age,
            income=self._parse_income(data.get("income") or {}),
            deductions=self._parse_amounts("deductions", data.get("deductions") or {}, DeductionData),
            tds=self._parse_amounts("tds", data.get("tds") or {}, TDSData),
            tcs=self._parse_amounts("tcs", data.get("tcs") or {}, TCSData),
            carry_forward_losses=self._parse_losses(data.get("carry_forward_losses") or []),
            deduction_worksheet=worksheet,
        )

    def _check_keys(self, section: str, data: Dict[str, Any], allowed: set) -> None:
        if not isinstance(data, dict):
            raise ProfileParseError(f"Section '{section}' must be an object")
        unknown = sorted(set(data) - allowed)
        if unknown:
            raise ProfileParseError(f"Unknown key(s) in '{section}': {', '.join(unknown)}")

    def _parse_amounts(self, section: str, data: Dict[str, Any], cls, exclude=()):
        """Build a dataclass whose fields (besides `exclude`) are all amounts."""
        names = _field_names(cls) - set(exclude)
        self._check_keys(section, data, names)
        try:
            return cls(**{name: self._amount(data, name) for name in data})
        except ValueError as e:
            raise ProfileParseError(f"Invalid amount in '{section}': {e}") from e

    def _parse_income(self, data: Dict[str, Any]) -> IncomeData:
        nested = ("capital_gains", "house_property", "presumptive")
        self._check_keys("income", data, _field_names(IncomeData) | {"presumptive"})

        amounts = {k: v for k, v in data.items() if k not in nested}
        try:
            values = {name: self._amount(amounts, name) for name in amounts}
        except ValueError as e:
            raise ProfileParseError(f"Invalid amount in 'income': {e}") from e

        if data.get("presumptive") is not None:
            deemed = self._parse_presumptive(data["presumptive"])
            values["business_income"] = values.get("business_income", 0.0) + deemed

        return IncomeData(
            capital_gains=[self._parse_capital_gain(g) for g in data.get("capital_gains") or []],
            house_property=self._parse_house_property(data.get("house_property")),
            **values
        )

    def _parse_capital_gain(self, data: Dict[str, Any]) -> CapitalGain:
        self._check_keys("capital_gains", data, _field_names(CapitalGain))
        if "asset_type" not in data:
            raise ProfileParseError("Capital gain entry is missing 'asset_type'")

        try:
            # Gains may be negative within an entry; only headline amounts are floored
            amount = parse_amount(data.get("amount"))
            purchase_date = parse_date(data.get("purchase_date"))
            sale_date = parse_date(data.get("sale_date"))
        except ValueError as e:
            raise ProfileParseError(f"Invalid capital gain entry: {e}") from e

        if "is_long_term" in data:
            is_long_term = _flag("capital_gains", data, "is_long_term")
        elif purchase_date and sale_date:
            is_long_term = is_long_term_holding(data["asset_type"], purchase_date, sale_date)
        else:
            raise ProfileParseError(
                "Capital gain entry needs 'is_long_term' or both purchase and sale dates"
            )

        return CapitalGain(
            asset_type=str(data["asset_type"]),
            is_long_term=is_long_term,
            amount=amount,
            purchase_date=purchase_date,
            sale_date=sale_date,
        )

    def _parse_presumptive(self, data: Dict[str, Any]) -> float:
        """Deemed business income under section 44AD, 44ADA or 44AE."""
        self._check_keys("presumptive", data, PRESUMPTIVE_KEYS)
        try:
            scheme = PresumptiveScheme(str(data.get("scheme")))
        except ValueError as e:
            raise ProfileParseError(f"Invalid presumptive scheme: {data.get('scheme')!r}") from e

        try:
            turnover = self._amount(data, "turnover")
            vehicles = int(data.get("vehicles", 1))
            months_owned = int(data.get("months_owned", 12))
        except (TypeError, ValueError) as e:
            raise ProfileParseError(f"Invalid amount in 'presumptive': {e}") from e

        deemed = calculate_presumptive_income(
            turnover, scheme, data.get("vehicle_type"), vehicles, months_owned
        )
        logger.debug("Presumptive income under %s: %.2f", scheme.value, deemed)
        return deemed

    def _parse_house_property(self, data: Optional[Dict[str, Any]]) -> Optional[HousePropertyData]:
        if data is None:
            return None
        self._check_keys("house_property", data, _field_names(HousePropertyData))

        flags = {}
        if "is_let_out" in data:
            flags["is_let_out"] = _flag("house_property", data, "is_let_out")
        if "self_occupied_count" in data:
            try:
                flags["self_occupied_count"] = int(data["self_occupied_count"])
            except (TypeError, ValueError) as e:
                raise ProfileParseError("Invalid self_occupied_count") from e

        amounts = {k: v for k, v in data.items() if k not in flags}
        try:
            values = {name: self._amount(amounts, name) for name in amounts}
        except ValueError as e:
            raise ProfileParseError(f"Invalid amount in 'house_property': {e}") from e
        return HousePropertyData(**values, **flags)

    def _parse_losses(self, data: List[Dict[str, Any]]) -> List[CarryForwardLoss]:
        if not isinstance(data, list):
            raise ProfileParseError("'carry_forward_losses' must be a list")

        losses = []
        for entry in data:
            self._check_keys("carry_forward_losses", entry, {"assessment_year"} | set(LOSS_FIELDS))
            if not entry.get("assessment_year"):
                raise ProfileParseError("Loss entry is missing 'assessment_year'")
            try:
                values = {name: self._amount(entry, name) for name in LOSS_FIELDS if name in entry}
            except ValueError as e:
                raise ProfileParseError(f"Invalid amount in loss entry: {e}") from e
            losses.append(CarryForwardLoss(assessment_year=str(entry["assessment_year"]), **values))
        return losses

    def _parse_worksheet(self, data: Dict[str, Any]) -> DeductionWorksheet:
        nested = ("section_80c", "section_80d")
        flags = ("is_metro_city", "disability")
        self._check_keys("deduction_worksheet", data, _field_names(DeductionWorksheet))

        disability = data.get("disability")
        if disability not in (None, "normal", "severe"):
            raise ProfileParseError(f"Invalid disability: {disability!r}")

        amounts = {k: v for k, v in data.items() if k not in nested + flags}
        try:
            values = {name: self._amount(amounts, name) for name in amounts}
        except ValueError as e:
            raise ProfileParseError(f"Invalid amount in 'deduction_worksheet': {e}") from e

        section_80d = data.get("section_80d") or {}
        self._check_keys("section_80d", section_80d, _field_names(Section80DOptions))
        senior_flags = {
            k: _flag("section_80d", section_80d, k)
            for k in ("is_self_senior", "is_parent_senior") if k in section_80d
        }
        section_80d_amounts = self._parse_amounts(
            "section_80d", {k: v for k, v in section_80d.items() if k not in senior_flags},
            Section80DOptions, exclude=("is_self_senior", "is_parent_senior"),
        )

        return DeductionWorksheet(
            section_80c=self._parse_amounts("section_80c", data.get("section_80c") or {}, Section80COptions),
            section_80d=Section80DOptions(
                self_and_family=section_80d_amounts.self_and_family,
                parents=section_80d_amounts.parents,
                preventive_health_checkup=section_80d_amounts.preventive_health_checkup,
                **senior_flags
            ),
            is_metro_city=_flag("deduction_worksheet", data, "is_metro_city"),
            disability=disability,
            **values
        )


def load_profile(filepath: str) -> TaxpayerProfile:
    """Read a JSON profile file with the default parser."""
    return JsonProfileParser().load(filepath)
