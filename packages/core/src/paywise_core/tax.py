"""Federal, state and payroll tax calculations for a salaried paycheck.

Each function takes the rate tables it applies as an argument; when a
caller passes none, the configured default tax year is used. Nothing here
keeps state between calls. ``calculate_taxes`` records every step in the
returned breakdown's ``audit_log`` and emits the same steps as structlog
events.
"""

from decimal import Decimal
from typing import Any, Optional, Union

import structlog

from .models import (
    AuditEntry,
    FilingStatus,
    PAYROLL_EXEMPT_VISA_STATUSES,
    PaycheckProfile,
    PayrollTaxes,
    RateTables,
    StateTaxComparison,
    StateTaxDifference,
    StateTaxSummary,
    TaxBreakdown,
    VisaStatus,
)
from .money import MONTHS_PER_YEAR, ZERO, percent_of, round_cents, to_decimal
from .rate_tables import get_rate_tables

logger = structlog.get_logger()

Amount = Union[Decimal, int, float, str]


def _log_step(
    audit_log: Optional[list[AuditEntry]],
    step: str,
    input_value: str,
    output_value: str,
    source: str,
    notes: Optional[str] = None,
) -> None:
    """Add an entry to the audit log, if one is being kept."""
    if audit_log is None:
        return
    audit_log.append(
        AuditEntry(
            step=step,
            input_value=input_value,
            output_value=output_value,
            source=source,
            notes=notes,
        )
    )
    logger.info(
        "tax_calculation_step",
        step=step,
        input=input_value,
        output=output_value,
        source=source,
    )


def _coerce_visa_status(value: Any) -> VisaStatus:
    if isinstance(value, VisaStatus):
        return value
    if value is None or value == "":
        return VisaStatus.CITIZEN
    try:
        return VisaStatus(str(value).strip().lower())
    except ValueError:
        logger.warning("unknown_visa_status", visa_status=value, fallback="citizen")
        return VisaStatus.CITIZEN


def _coerce_filing_status(value: Any) -> FilingStatus:
    if isinstance(value, FilingStatus):
        return value
    if value is None or value == "":
        return FilingStatus.SINGLE
    try:
        return FilingStatus(str(value).strip().lower())
    except ValueError:
        logger.warning("unknown_filing_status", filing_status=value, fallback="single")
        return FilingStatus.SINGLE


def calculate_federal_tax(
    gross_salary_annual: Amount,
    filing_status: Union[FilingStatus, str] = FilingStatus.SINGLE,
    rate_tables: Optional[RateTables] = None,
    audit_log: Optional[list[AuditEntry]] = None,
) -> Decimal:
    """Exact marginal federal income tax.

    Walks the filing status's brackets in ascending order, taxing
    ``min(remaining income, bracket width)`` at each bracket's rate until no
    income remains.

    Args:
        gross_salary_annual: Annual gross salary
        filing_status: Filing status; unknown values use the single brackets
        rate_tables: Tables to apply (default: configured tax year)
        audit_log: When given, one entry per bracket touched is appended

    Returns:
        Unrounded annual federal tax
    """
    gross = to_decimal(gross_salary_annual, "gross_salary_annual", allow_negative=False)
    status = _coerce_filing_status(filing_status)
    tables = rate_tables or get_rate_tables()

    federal_tax = ZERO
    remaining = gross

    for index, bracket in enumerate(tables.brackets_for(status), start=1):
        if remaining <= 0:
            break

        width = bracket.width
        taxable_in_bracket = remaining if width is None else min(remaining, width)
        bracket_tax = taxable_in_bracket * bracket.rate
        federal_tax += bracket_tax
        remaining -= taxable_in_bracket

        _log_step(
            audit_log,
            step=f"federal_bracket_{index}",
            input_value=f"{taxable_in_bracket} @ {bracket.rate}",
            output_value=str(bracket_tax),
            source=f"{tables.tax_year} federal brackets ({status.value})",
        )

    return federal_tax


def calculate_payroll_taxes(
    gross_salary_annual: Amount,
    rate_tables: Optional[RateTables] = None,
) -> PayrollTaxes:
    """Social Security, Medicare and additional Medicare.

    Independent of filing status. Social Security stops at the wage cap;
    additional Medicare applies only to wages above its threshold.

    Returns:
        PayrollTaxes with only the payroll components populated
    """
    gross = to_decimal(gross_salary_annual, "gross_salary_annual", allow_negative=False)
    tables = rate_tables or get_rate_tables()

    social_security = min(gross, tables.social_security_wage_cap) * tables.social_security_rate
    medicare = gross * tables.medicare_rate
    additional_medicare = (
        max(ZERO, gross - tables.additional_medicare_threshold)
        * tables.additional_medicare_rate
    )

    return PayrollTaxes(
        social_security=social_security,
        medicare=medicare,
        additional_medicare=additional_medicare,
    )


def calculate_state_tax(
    gross_salary_annual: Amount,
    state: Optional[str],
    rate_tables: Optional[RateTables] = None,
) -> Decimal:
    """Flat-rate state income tax.

    A state code missing from the tables is taxed at 0% and logged as a
    warning; use ``rate_tables.is_known_state`` to reject such codes up front.
    """
    gross = to_decimal(gross_salary_annual, "gross_salary_annual", allow_negative=False)
    tables = rate_tables or get_rate_tables()

    rate = tables.state_rate(state)
    if rate is None:
        logger.warning("unknown_state_code", state=state, fallback_rate="0")
        return ZERO
    return gross * rate


def apply_visa_adjustments(
    taxes: PayrollTaxes,
    visa_status: Union[VisaStatus, str],
) -> PayrollTaxes:
    """Zero out payroll taxes for exempt visa statuses.

    F-1 OPT and J-1 holders are treated as exempt from Social Security and
    Medicare (a nonresident/treaty approximation). All other statuses pay in
    full. Applied after every component is computed.
    """
    status = _coerce_visa_status(visa_status)
    if status not in PAYROLL_EXEMPT_VISA_STATUSES:
        return taxes

    return taxes.model_copy(
        update={
            "social_security": ZERO,
            "medicare": ZERO,
            "additional_medicare": ZERO,
        }
    )


def calculate_take_home_percentage(gross_salary_annual: Amount, net_annual_salary: Amount) -> Decimal:
    """Net pay as a percentage of gross; 0 when gross is 0."""
    gross = to_decimal(gross_salary_annual, "gross_salary_annual")
    net = to_decimal(net_annual_salary, "net_annual_salary")
    return round_cents(percent_of(net, gross))


def calculate_taxes(
    gross_salary_annual: Amount,
    state: Optional[str],
    visa_status: Union[VisaStatus, str] = VisaStatus.CITIZEN,
    filing_status: Union[FilingStatus, str] = FilingStatus.SINGLE,
    rate_tables: Optional[RateTables] = None,
) -> TaxBreakdown:
    """Compute the full tax breakdown for an annual salary.

    Args:
        gross_salary_annual: Annual gross salary (finite, >= 0)
        state: Two-letter state code; unknown codes are taxed at 0%
        visa_status: Immigration status; f1_opt and j1 pay no payroll taxes
        filing_status: Federal filing status
        rate_tables: Tables to apply (default: configured tax year)

    Returns:
        TaxBreakdown with monthly and annual amounts, effective rates, and
        the audit trail of every step

    Raises:
        ValidationError: gross salary is not a finite non-negative number
    """
    gross = to_decimal(gross_salary_annual, "gross_salary_annual", allow_negative=False)
    visa = _coerce_visa_status(visa_status)
    filing = _coerce_filing_status(filing_status)
    tables = rate_tables or get_rate_tables()
    state_code = state.strip().upper() if isinstance(state, str) and state.strip() else None
    audit_log: list[AuditEntry] = []

    _log_step(
        audit_log,
        step="annual_gross",
        input_value=str(gross_salary_annual),
        output_value=str(gross),
        source="User provided",
    )

    # Step 1: Federal income tax
    federal_tax = calculate_federal_tax(gross, filing, tables, audit_log)
    _log_step(
        audit_log,
        step="federal_tax",
        input_value=f"gross={gross}, filing_status={filing.value}",
        output_value=str(federal_tax),
        source=f"{tables.tax_year} federal brackets",
    )

    # Step 2: Payroll taxes
    payroll = calculate_payroll_taxes(gross, tables)
    _log_step(
        audit_log,
        step="payroll_taxes",
        input_value=(
            f"gross={gross}, ss_cap={tables.social_security_wage_cap}, "
            f"medicare_threshold={tables.additional_medicare_threshold}"
        ),
        output_value=(
            f"social_security={payroll.social_security}, medicare={payroll.medicare}, "
            f"additional_medicare={payroll.additional_medicare}"
        ),
        source=f"{tables.tax_year} FICA rates",
    )

    # Step 3: State income tax
    state_recognized = tables.state_rate(state_code) is not None
    state_tax = calculate_state_tax(gross, state_code, tables)
    _log_step(
        audit_log,
        step="state_tax",
        input_value=f"gross={gross}, state={state_code}",
        output_value=str(state_tax),
        source=f"{tables.tax_year} flat state rates",
        notes=None if state_recognized else "State not in rate table; taxed at 0%",
    )

    # Step 4: Visa status override
    taxes = apply_visa_adjustments(
        payroll.model_copy(update={"federal_tax": federal_tax, "state_tax": state_tax}),
        visa,
    )
    payroll_exempt = visa in PAYROLL_EXEMPT_VISA_STATUSES
    if payroll_exempt:
        _log_step(
            audit_log,
            step="visa_adjustment",
            input_value=f"visa_status={visa.value}",
            output_value="social_security=0, medicare=0, additional_medicare=0",
            source="Nonresident payroll tax exemption",
        )

    # Step 5: Aggregate
    total_tax = taxes.total
    net_annual = gross - total_tax
    medicare_total = taxes.medicare + taxes.additional_medicare

    _log_step(
        audit_log,
        step="net_annual_salary",
        input_value=f"{gross} - {total_tax}",
        output_value=str(net_annual),
        source="Gross minus all taxes",
    )

    if gross == 0:
        logger.info("zero_gross_salary", state=state_code)

    return TaxBreakdown(
        monthly_gross=round_cents(gross / MONTHS_PER_YEAR),
        monthly_net=round_cents(net_annual / MONTHS_PER_YEAR),
        monthly_federal_tax=round_cents(taxes.federal_tax / MONTHS_PER_YEAR),
        monthly_state_tax=round_cents(taxes.state_tax / MONTHS_PER_YEAR),
        monthly_social_security=round_cents(taxes.social_security / MONTHS_PER_YEAR),
        monthly_medicare=round_cents(medicare_total / MONTHS_PER_YEAR),
        monthly_total_tax=round_cents(total_tax / MONTHS_PER_YEAR),
        annual_gross=round_cents(gross),
        net_annual_salary=round_cents(net_annual),
        annual_federal_tax=round_cents(taxes.federal_tax),
        annual_state_tax=round_cents(taxes.state_tax),
        annual_social_security=round_cents(taxes.social_security),
        annual_medicare=round_cents(medicare_total),
        annual_additional_medicare=round_cents(taxes.additional_medicare),
        annual_total_tax=round_cents(total_tax),
        effective_federal_rate=round_cents(percent_of(taxes.federal_tax, gross)),
        effective_state_rate=round_cents(percent_of(taxes.state_tax, gross)),
        effective_total_rate=round_cents(percent_of(total_tax, gross)),
        take_home_percentage=round_cents(percent_of(net_annual, gross)),
        tax_year=tables.tax_year,
        state=state_code,
        state_recognized=state_recognized,
        visa_status=visa,
        filing_status=filing,
        payroll_exempt=payroll_exempt,
        audit_log=audit_log,
    )


def calculate_taxes_for_profile(
    profile: PaycheckProfile,
    rate_tables: Optional[RateTables] = None,
) -> TaxBreakdown:
    """``calculate_taxes`` for a stored paycheck profile."""
    return calculate_taxes(
        profile.gross_salary_annual,
        profile.state,
        profile.visa_status,
        profile.filing_status,
        rate_tables,
    )


def compare_state_taxes(
    gross_salary_annual: Amount,
    current_state: Optional[str],
    comparison_state: Optional[str],
    filing_status: Union[FilingStatus, str] = FilingStatus.SINGLE,
    rate_tables: Optional[RateTables] = None,
) -> StateTaxComparison:
    """Take-home pay in ``current_state`` versus ``comparison_state``.

    Both sides are computed for a citizen so only the state differs.
    Differences are comparison minus current.
    """
    current = calculate_taxes(
        gross_salary_annual, current_state, VisaStatus.CITIZEN, filing_status, rate_tables
    )
    comparison = calculate_taxes(
        gross_salary_annual, comparison_state, VisaStatus.CITIZEN, filing_status, rate_tables
    )

    def summarize(breakdown: TaxBreakdown) -> StateTaxSummary:
        return StateTaxSummary(
            state=breakdown.state,
            monthly_net=breakdown.monthly_net,
            annual_state_tax=breakdown.annual_state_tax,
            effective_total_rate=breakdown.effective_total_rate,
        )

    return StateTaxComparison(
        current=summarize(current),
        comparison=summarize(comparison),
        difference=StateTaxDifference(
            monthly_net_difference=comparison.monthly_net - current.monthly_net,
            annual_state_tax_difference=comparison.annual_state_tax - current.annual_state_tax,
            effective_rate_difference=(
                comparison.effective_total_rate - current.effective_total_rate
            ),
        ),
    )
