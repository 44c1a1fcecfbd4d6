"""Tax models: paycheck inputs, rate tables, and the derived breakdown.

``RateTables`` is configuration, versioned by tax year, and is passed into
every tax calculation rather than read from module constants. The concrete
tables live in ``paywise_core.rate_tables``.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator, model_validator

from .audit import AuditEntry
from .base import EngineModel


# =============================================================================
# ENUMERATIONS
# =============================================================================

class VisaStatus(str, Enum):
    """Immigration status as it affects payroll taxes."""
    CITIZEN = "citizen"
    GREEN_CARD = "green_card"
    H1B = "h1b"
    L1 = "l1"
    F1_OPT = "f1_opt"
    J1 = "j1"
    TN = "tn"


# Nonresident/treaty approximation: no Social Security or Medicare.
PAYROLL_EXEMPT_VISA_STATUSES = frozenset({VisaStatus.F1_OPT, VisaStatus.J1})


class FilingStatus(str, Enum):
    """Federal filing status."""
    SINGLE = "single"
    MARRIED = "married"
    MARRIED_SEPARATE = "married_separate"
    HEAD = "head"


# =============================================================================
# INPUT MODELS
# =============================================================================

class PaycheckProfile(EngineModel):
    """User-entered salary facts; the input to the tax calculator."""
    gross_salary_annual: Decimal = Field(ge=0)
    state: Optional[str] = None
    visa_status: VisaStatus = VisaStatus.CITIZEN
    filing_status: FilingStatus = FilingStatus.SINGLE

    @field_validator("state", mode="before")
    @classmethod
    def normalize_state(cls, v):
        """Upper-case and trim state codes; blank becomes None."""
        if isinstance(v, str):
            v = v.strip().upper()
            return v or None
        return v


# =============================================================================
# RATE TABLES
# =============================================================================

class TaxBracket(EngineModel):
    """One marginal bracket: income in ``[min, max)`` is taxed at ``rate``.

    ``max`` of None means the bracket is unbounded.
    """
    lower_bound: Decimal = Field(alias="min", ge=0)
    upper_bound: Optional[Decimal] = Field(default=None, alias="max")
    rate: Decimal = Field(ge=0, le=1)

    @property
    def width(self) -> Optional[Decimal]:
        """Amount of income the bracket covers (None when unbounded)."""
        if self.upper_bound is None:
            return None
        return self.upper_bound - self.lower_bound


class RateTables(EngineModel):
    """Tax rates for one tax year.

    Attributes:
        tax_year: Year the rates apply to
        federal_brackets: Ascending, contiguous brackets per filing status
        state_rates: Flat state income tax rate per two-letter state code
        social_security_rate: Employee Social Security rate
        social_security_wage_cap: Wages above this are not subject to Social Security
        medicare_rate: Employee Medicare rate on all wages
        additional_medicare_rate: Extra Medicare rate on wages above the threshold
        additional_medicare_threshold: Wage level where additional Medicare starts
    """
    tax_year: int
    federal_brackets: dict[FilingStatus, list[TaxBracket]]
    state_rates: dict[str, Decimal] = Field(default_factory=dict)
    social_security_rate: Decimal = Field(ge=0, le=1)
    social_security_wage_cap: Decimal = Field(ge=0)
    medicare_rate: Decimal = Field(ge=0, le=1)
    additional_medicare_rate: Decimal = Field(ge=0, le=1)
    additional_medicare_threshold: Decimal = Field(ge=0)

    @model_validator(mode="after")
    def validate_brackets(self):
        """Brackets must start at zero, be contiguous, and end unbounded."""
        if FilingStatus.SINGLE not in self.federal_brackets:
            raise ValueError("federal_brackets must include the single filing status")

        for status, brackets in self.federal_brackets.items():
            if not brackets:
                raise ValueError(f"No federal brackets for {status.value}")
            if brackets[0].lower_bound != 0:
                raise ValueError(f"First {status.value} bracket must start at 0")
            for lower, upper in zip(brackets, brackets[1:]):
                if lower.upper_bound is None or lower.upper_bound != upper.lower_bound:
                    raise ValueError(
                        f"{status.value} brackets must be contiguous and ascending"
                    )
            if brackets[-1].upper_bound is not None:
                raise ValueError(f"Last {status.value} bracket must be unbounded")
        return self

    @field_validator("state_rates")
    @classmethod
    def normalize_state_codes(cls, v: dict[str, Decimal]) -> dict[str, Decimal]:
        """Store state codes upper-cased."""
        return {code.strip().upper(): rate for code, rate in v.items()}

    def brackets_for(self, filing_status: FilingStatus) -> list[TaxBracket]:
        """Brackets for ``filing_status``, falling back to single."""
        return self.federal_brackets.get(
            filing_status, self.federal_brackets[FilingStatus.SINGLE]
        )

    def state_rate(self, state: Optional[str]) -> Optional[Decimal]:
        """Flat rate for ``state``, or None when the code is not in the table."""
        if not state:
            return None
        return self.state_rates.get(state.strip().upper())


# =============================================================================
# RESULT MODELS
# =============================================================================

class PayrollTaxes(EngineModel):
    """Annual tax components before aggregation."""
    federal_tax: Decimal = Decimal("0")
    state_tax: Decimal = Decimal("0")
    social_security: Decimal = Decimal("0")
    medicare: Decimal = Decimal("0")
    additional_medicare: Decimal = Decimal("0")

    @property
    def total(self) -> Decimal:
        """Sum of all components."""
        return (
            self.federal_tax + self.state_tax + self.social_security +
            self.medicare + self.additional_medicare
        )


class TaxBreakdown(EngineModel):
    """Full federal, state and payroll tax breakdown for one salary.

    Derived on every call and never authoritative on its own. Effective
    rates are percentages of gross (``22.5`` means 22.5%).
    """

    # Monthly values
    monthly_gross: Decimal
    monthly_net: Decimal
    monthly_federal_tax: Decimal
    monthly_state_tax: Decimal
    monthly_social_security: Decimal
    monthly_medicare: Decimal  # base + additional
    monthly_total_tax: Decimal

    # Annual values
    annual_gross: Decimal
    net_annual_salary: Decimal
    annual_federal_tax: Decimal
    annual_state_tax: Decimal
    annual_social_security: Decimal
    annual_medicare: Decimal  # base + additional
    annual_additional_medicare: Decimal
    annual_total_tax: Decimal

    # Rates
    effective_federal_rate: Decimal
    effective_state_rate: Decimal
    effective_total_rate: Decimal
    take_home_percentage: Decimal

    # Provenance
    tax_year: int
    state: Optional[str] = None
    state_recognized: bool = True
    visa_status: VisaStatus = VisaStatus.CITIZEN
    filing_status: FilingStatus = FilingStatus.SINGLE
    payroll_exempt: bool = False
    audit_log: list[AuditEntry] = Field(default_factory=list)


class StateTaxSummary(EngineModel):
    """One side of a state comparison."""
    state: Optional[str]
    monthly_net: Decimal
    annual_state_tax: Decimal
    effective_total_rate: Decimal


class StateTaxDifference(EngineModel):
    """Comparison minus current."""
    monthly_net_difference: Decimal
    annual_state_tax_difference: Decimal
    effective_rate_difference: Decimal


class StateTaxComparison(EngineModel):
    """Take-home pay in the current state versus another state."""
    current: StateTaxSummary
    comparison: StateTaxSummary
    difference: StateTaxDifference
