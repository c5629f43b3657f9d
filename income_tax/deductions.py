"""
Deduction and exemption calculators.

Each function enforces one statutory limit and returns the eligible
amount. Inputs are raw amounts; outputs are capped amounts suitable for
the corresponding DeductionData field.

Except for the allowances listed in NEW_REGIME_ALLOWED_DEDUCTIONS, these
deductions are only available under the old regime.
"""

from dataclasses import dataclass, field, fields
from typing import Dict, Optional

from .models import DeductionData

# Section 80C group (80C + 80CCC + 80CCD(1))
SECTION_80C_LIMIT = 150000.0

# Section 80D
SECTION_80D_SELF_LIMIT = 25000.0
SECTION_80D_SENIOR_LIMIT = 50000.0
SECTION_80D_CHECKUP_LIMIT = 5000.0

SECTION_80DDB_LIMIT = 40000.0
SECTION_80DDB_SENIOR_LIMIT = 100000.0

SECTION_80DD_NORMAL = 75000.0
SECTION_80DD_SEVERE = 125000.0

SECTION_80EE_LIMIT = 50000.0
SECTION_80EEA_LIMIT = 150000.0

SECTION_80G_INCOME_RATIO = 0.10

SECTION_80GG_MONTHLY_LIMIT = 5000.0
SECTION_80GG_INCOME_RATIO = 0.25

SECTION_80TTA_LIMIT = 10000.0
SECTION_80TTB_LIMIT = 50000.0

HOME_LOAN_INTEREST_LIMIT = 200000.0
NPS_ADDITIONAL_LIMIT = 50000.0       # Section 80CCD(1B)

GRATUITY_LIMIT = 2000000.0
LEAVE_ENCASHMENT_LIMIT = 2500000.0

SENIOR_CITIZEN_AGE = 60

# Besides the standard deduction, the only reliefs left in the new regime
NEW_REGIME_ALLOWED_DEDUCTIONS = ("standard_deduction",) + DeductionData.NEW_REGIME_FIELDS


@dataclass(frozen=True)
class Section80COptions:
    """
    Investments qualifying for the ₹1,50,000 Section 80C group limit.

    Field order is the order in which investments consume the limit.
    """
    ppf: float = 0.0
    elss: float = 0.0
    lic: float = 0.0
    nsc: float = 0.0
    tax_saver_fd: float = 0.0
    tuition_fees: float = 0.0
    home_loan_principal: float = 0.0
    sukanya_samriddhi: float = 0.0
    epf: float = 0.0
    ulip: float = 0.0
    stamp_duty: float = 0.0
    section_80ccc: float = 0.0       # Pension fund contribution
    section_80ccd_1: float = 0.0     # Employee NPS contribution


@dataclass
class Section80CResult:
    """Outcome of allocating the 80C group limit."""
    total: float
    breakdown: Dict[str, float] = field(default_factory=dict)
    max_reached: bool = False
    unutilized: float = 0.0


@dataclass(frozen=True)
class Section80DOptions:
    """Health insurance premiums under Section 80D."""
    self_and_family: float = 0.0
    parents: float = 0.0
    preventive_health_checkup: float = 0.0
    is_self_senior: bool = False
    is_parent_senior: bool = False


@dataclass
class Section80DResult:
    """Allowed 80D amounts and the limits applied."""
    total: float
    self_and_family: float
    parents: float
    preventive_health_checkup: float
    self_limit: float
    parent_limit: float


@dataclass(frozen=True)
class SalaryExemptionData:
    """Allowances received, for the salary exemptions worksheet."""
    hra: float = 0.0
    rent_paid: float = 0.0
    is_metro_city: bool = False
    lta: float = 0.0
    child_education_allowance: float = 0.0
    child_hostel_allowance: float = 0.0
    meal_vouchers: float = 0.0
    transport_allowance: float = 0.0
    medical_reimbursement: float = 0.0
    telephone_bills: float = 0.0
    newspaper_reimbursement: float = 0.0
    uniform_allowance: float = 0.0


# Annual caps on salary allowances
ALLOWANCE_LIMITS = {
    'lta': 19200.0 * 2,                    # two journeys in a block of four years
    'child_education_allowance': 2400.0,
    'child_hostel_allowance': 7200.0,
    'meal_vouchers': 25000.0,
    'transport_allowance': 21600.0,        # ₹1,800 per month
    'medical_reimbursement': 15000.0,
    'telephone_bills': 36000.0,
    'newspaper_reimbursement': 1000.0,
    'uniform_allowance': 20000.0,
}


def calculate_hra_exemption(
    basic_salary: float,
    hra_received: float,
    rent_paid: float,
    is_metro_city: bool
) -> float:
    """
    HRA exemption under Section 10(13A).

    Least of:
    1. Actual HRA received
    2. Rent paid less 10% of basic salary
    3. 50% of basic (metro) or 40% of basic (non-metro)

    Returns:
        Exempt HRA, never negative
    """
    city_percent = 0.5 if is_metro_city else 0.4
    rent_minus_ten_percent = rent_paid - basic_salary * 0.1
    return max(0.0, min(hra_received, rent_minus_ten_percent, basic_salary * city_percent))


def calculate_section_80c(options: Section80COptions) -> Section80CResult:
    """
    Allocate the Section 80C group limit across investments.

    Investments consume the ₹1,50,000 limit in declaration order, so
    earlier fields get priority when the total exceeds the limit.

    Args:
        options: Investment amounts

    Returns:
        Section80CResult with the allowed total and per-investment amounts
    """
    total_used = 0.0
    breakdown = {}
    for f in fields(options):
        value = max(0.0, getattr(options, f.name))
        allowed = min(value, SECTION_80C_LIMIT - total_used)
        breakdown[f.name] = allowed
        total_used += allowed

    return Section80CResult(
        total=total_used,
        breakdown=breakdown,
        max_reached=total_used >= SECTION_80C_LIMIT,
        unutilized=max(0.0, SECTION_80C_LIMIT - total_used),
    )


def calculate_section_80d(options: Section80DOptions) -> Section80DResult:
    """
    Health insurance deduction under Section 80D.

    Self/family and parents each have a ₹25,000 limit, raised to ₹50,000
    for senior citizens. Preventive health check-up is allowed up to ₹5,000.
    """
    self_limit = SECTION_80D_SENIOR_LIMIT if options.is_self_senior else SECTION_80D_SELF_LIMIT
    parent_limit = SECTION_80D_SENIOR_LIMIT if options.is_parent_senior else SECTION_80D_SELF_LIMIT

    self_amount = min(options.self_and_family, self_limit)
    parent_amount = min(options.parents, parent_limit)
    checkup_amount = min(options.preventive_health_checkup, SECTION_80D_CHECKUP_LIMIT)

    return Section80DResult(
        total=self_amount + parent_amount + checkup_amount,
        self_and_family=self_amount,
        parents=parent_amount,
        preventive_health_checkup=checkup_amount,
        self_limit=self_limit,
        parent_limit=parent_limit,
    )


def calculate_section_80ddb(amount: float, age: int) -> float:
    """Medical treatment of specified diseases: ₹40,000, or ₹1,00,000 for seniors."""
    limit = SECTION_80DDB_SENIOR_LIMIT if age >= SENIOR_CITIZEN_AGE else SECTION_80DDB_LIMIT
    return min(amount, limit)


def calculate_section_80dd(is_severe_disability: bool) -> float:
    """Maintenance of a disabled dependant: fixed amount by severity."""
    return SECTION_80DD_SEVERE if is_severe_disability else SECTION_80DD_NORMAL


def calculate_section_80u(is_severe_disability: bool) -> float:
    """Taxpayer with disability: fixed amount by severity."""
    return SECTION_80DD_SEVERE if is_severe_disability else SECTION_80DD_NORMAL


def calculate_section_80e(interest: float) -> float:
    """Education loan interest; no upper limit."""
    return interest


def calculate_section_80ee(interest: float) -> float:
    return min(interest, SECTION_80EE_LIMIT)


def calculate_section_80eea(interest: float) -> float:
    return min(interest, SECTION_80EEA_LIMIT)


def calculate_section_80g(donations: float, adjusted_gross_total_income: float) -> float:
    """
    Donations, limited to 10% of adjusted gross total income.

    Args:
        donations: Qualifying donations
        adjusted_gross_total_income: Gross total income as computed for the
            taxpayer (not an assumed figure)
    """
    limit = max(0.0, adjusted_gross_total_income) * SECTION_80G_INCOME_RATIO
    return min(donations, limit)


def calculate_section_80gg(rent_paid: float, total_income: float) -> float:
    """
    Rent paid by a taxpayer who receives no HRA.

    Least of:
    1. Rent paid less 10% of total income
    2. ₹5,000 per month
    3. 25% of total income
    """
    rent_minus_ten_percent = max(0.0, rent_paid - total_income * 0.1)
    annual_limit = SECTION_80GG_MONTHLY_LIMIT * 12
    income_limit = max(0.0, total_income * SECTION_80GG_INCOME_RATIO)
    return min(rent_minus_ten_percent, annual_limit, income_limit)


def calculate_section_80tta(interest: float, age: int) -> float:
    """Interest income: 80TTA (₹10,000) below 60, 80TTB (₹50,000) at 60 and above."""
    limit = SECTION_80TTB_LIMIT if age >= SENIOR_CITIZEN_AGE else SECTION_80TTA_LIMIT
    return min(interest, limit)


def calculate_home_loan_interest(interest: float) -> float:
    """Interest on a self-occupied property loan, Section 24(b)."""
    return min(interest, HOME_LOAN_INTEREST_LIMIT)


def calculate_nps_deduction(contribution: float) -> float:
    """Additional NPS contribution under 80CCD(1B), outside the 80C limit."""
    return min(contribution, NPS_ADDITIONAL_LIMIT)


def calculate_gratuity(monthly_salary: float, years_of_service: float, actual_gratuity: float) -> float:
    """
    Exempt gratuity under Section 10(10).

    Least of 15/26 of the last drawn monthly salary per year of service,
    the gratuity actually received, and ₹20,00,000.
    """
    calculated = 15 * monthly_salary * years_of_service / 26
    return max(0.0, min(calculated, GRATUITY_LIMIT, actual_gratuity))


def calculate_leave_encashment(
    amount_received: float,
    average_monthly_salary: float,
    unavailed_leave_days: float,
    years_of_service: float
) -> float:
    """
    Exempt leave encashment on retirement under Section 10(10AA).

    Least of:
    1. Amount received
    2. 10 months' average salary
    3. Cash value of unavailed leave (at most 30 days per year of service)
    4. ₹25,00,000
    """
    leave_days = min(unavailed_leave_days, 30 * years_of_service)
    cash_equivalent = leave_days * average_monthly_salary / 30
    return max(0.0, min(
        amount_received,
        10 * average_monthly_salary,
        cash_equivalent,
        LEAVE_ENCASHMENT_LIMIT,
    ))


def calculate_child_education_allowance(number_of_children: int) -> float:
    """₹100 per month per child, for at most two children."""
    return min(number_of_children, 2) * 2400.0


def calculate_child_hostel_allowance(number_of_children: int) -> float:
    """₹300 per month per child, for at most two children."""
    return min(number_of_children, 2) * 7200.0


def calculate_meal_vouchers(number_of_meals: int, working_days: int = 250) -> float:
    """₹50 per meal, at most two meals per working day."""
    return min(number_of_meals * 50.0, 100.0 * working_days)


def calculate_salary_exemptions(data: SalaryExemptionData, basic_salary: float) -> Dict[str, float]:
    """
    Exempt portion of each salary allowance.

    Args:
        data: Allowances received and rent paid
        basic_salary: Annual basic salary, for the HRA computation

    Returns:
        Dictionary of allowance name to exempt amount, plus 'total'
    """
    breakdown = {
        'hra': calculate_hra_exemption(basic_salary, data.hra, data.rent_paid, data.is_metro_city),
    }
    for name, limit in ALLOWANCE_LIMITS.items():
        breakdown[name] = min(getattr(data, name), limit)

    breakdown['total'] = sum(breakdown.values())
    return breakdown


@dataclass(frozen=True)
class DeductionWorksheet:
    """
    Raw deduction inputs, before any statutory limit is applied.

    compute_eligible_deductions() turns a worksheet into DeductionData.
    """
    section_80c: Section80COptions = field(default_factory=Section80COptions)
    section_80d: Section80DOptions = field(default_factory=Section80DOptions)
    hra_received: float = 0.0
    rent_paid: float = 0.0
    is_metro_city: bool = False
    lta: float = 0.0
    home_loan_interest: float = 0.0
    savings_interest: float = 0.0
    nps_additional: float = 0.0
    professional_tax: float = 0.0
    education_loan_interest: float = 0.0
    donations: float = 0.0
    first_home_loan_interest: float = 0.0        # 80EE
    affordable_home_loan_interest: float = 0.0   # 80EEA
    disability: Optional[str] = None             # None, 'normal' or 'severe' (80U)
    medical_treatment: float = 0.0               # 80DDB
    gratuity: float = 0.0
    leave_encashment: float = 0.0
    meal_vouchers: float = 0.0


def compute_eligible_deductions(
    worksheet: DeductionWorksheet,
    basic_salary: float,
    gross_total_income: float,
    age: int
) -> DeductionData:
    """
    Apply every section limit to a worksheet.

    Args:
        worksheet: Raw deduction inputs
        basic_salary: Annual basic salary, for HRA
        gross_total_income: Computed gross total income, for 80G and 80GG
        age: Taxpayer age, for 80DDB and 80TTA/80TTB

    Returns:
        DeductionData with capped amounts. Rent paid without HRA is claimed
        under 80GG and reported in the hra field.
    """
    section_80c = calculate_section_80c(worksheet.section_80c)

    if worksheet.hra_received > 0:
        hra = calculate_hra_exemption(
            basic_salary, worksheet.hra_received, worksheet.rent_paid, worksheet.is_metro_city
        )
    else:
        hra = calculate_section_80gg(worksheet.rent_paid, gross_total_income)

    if worksheet.disability:
        section_80u = calculate_section_80u(worksheet.disability == "severe")
    else:
        section_80u = 0.0

    return DeductionData(
        section_80c=section_80c.total,
        section_80d=calculate_section_80d(worksheet.section_80d).total,
        hra=hra,
        lta=min(worksheet.lta, ALLOWANCE_LIMITS['lta']),
        home_loan_interest=calculate_home_loan_interest(worksheet.home_loan_interest),
        section_80tta=calculate_section_80tta(worksheet.savings_interest, age),
        nps=calculate_nps_deduction(worksheet.nps_additional),
        professional_tax=worksheet.professional_tax,
        section_80e=calculate_section_80e(worksheet.education_loan_interest),
        section_80g=calculate_section_80g(worksheet.donations, gross_total_income),
        section_80ee=calculate_section_80ee(worksheet.first_home_loan_interest),
        section_80eea=calculate_section_80eea(worksheet.affordable_home_loan_interest),
        section_80u=section_80u,
        section_80ddb=calculate_section_80ddb(worksheet.medical_treatment, age),
        gratuity=max(0.0, min(worksheet.gratuity, GRATUITY_LIMIT)),
        leave_encashment=max(0.0, min(worksheet.leave_encashment, LEAVE_ENCASHMENT_LIMIT)),
        meal_vouchers=min(worksheet.meal_vouchers, ALLOWANCE_LIMITS['meal_vouchers']),
    )
