"""Credit card models: card records, due-date status, payoff projections."""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

import structlog
from pydantic import Field, field_validator

from .base import EngineModel

logger = structlog.get_logger()


# =============================================================================
# ENUMERATIONS
# =============================================================================

class DueDateType(str, Enum):
    """Policy that governs how a card's next due date is computed.

    ``STATEMENT_BASED`` is kept as its own value for stored records but is
    computed exactly like ``FLOATING``.
    """
    FIXED = "fixed"
    FLOATING = "floating"
    STATEMENT_BASED = "statement_based"
    MANUAL = "manual"


RECURRING_DUE_DATE_TYPES = frozenset(
    {DueDateType.FIXED, DueDateType.FLOATING, DueDateType.STATEMENT_BASED}
)


class DueDateStatus(str, Enum):
    """Urgency bucket for an upcoming payment."""
    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    DUE_SOON = "due_soon"
    DUE_THIS_WEEK = "due_this_week"
    DUE_LATER = "due_later"
    NO_DATE = "no_date"


class StrategyCategory(str, Enum):
    """Whether a payoff strategy pays the minimum or more."""
    MINIMUM = "minimum"
    AGGRESSIVE = "aggressive"


class AlertType(str, Enum):
    """Kind of portfolio-level alert."""
    WARNING = "warning"
    REMINDER = "reminder"
    ERROR = "error"
    TIP = "tip"
    SUCCESS = "success"


class AlertPriority(str, Enum):
    """How prominently an alert should be shown."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# =============================================================================
# CARD RECORD
# =============================================================================

class CreditCard(EngineModel):
    """A revolving credit account as entered by the user.

    ``due_date`` holds the current (most recently computed) due date. For
    manual cards it is never advanced automatically.
    """
    name: Optional[str] = None
    last_four: Optional[str] = Field(default=None, pattern=r"^\d{4}$")
    bank_name: Optional[str] = None

    credit_limit: Optional[Decimal] = None
    current_balance: Decimal = Decimal("0")
    interest_rate: Decimal = Field(default=Decimal("0"), ge=0)  # APR, percent
    minimum_payment: Decimal = Field(default=Decimal("0"), ge=0)

    due_date_type: DueDateType = DueDateType.FIXED
    due_date_day: Optional[int] = Field(default=None, ge=1, le=31)
    statement_date: Optional[date] = None
    days_after_statement: Optional[int] = Field(default=None, ge=0)
    due_date: Optional[date] = None
    last_due_date_update: Optional[datetime] = None

    last_paid_date: Optional[date] = None
    last_paid_amount: Optional[Decimal] = Field(default=None, ge=0)

    @field_validator("due_date_type", mode="before")
    @classmethod
    def fallback_unknown_due_date_type(cls, v):
        """Missing type means fixed; an unrecognised type means manual."""
        if v is None or v == "":
            return DueDateType.FIXED
        if isinstance(v, DueDateType):
            return v
        try:
            return DueDateType(str(v).strip().lower())
        except ValueError:
            logger.warning("unknown_due_date_type", due_date_type=v, fallback="manual")
            return DueDateType.MANUAL

    @field_validator("due_date_day", "days_after_statement", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        """Form fields arrive as empty strings when left blank."""
        if v == "":
            return None
        return v


# =============================================================================
# DUE DATES
# =============================================================================

class DueDateInfo(EngineModel):
    """Classification of a card's due date relative to a reference day."""
    status: DueDateStatus
    days_until_due: Optional[int] = None
    next_due_date: Optional[date] = None
    is_overdue: bool = False
    is_due_today: bool = False
    is_due_soon: bool = False


# =============================================================================
# PAYOFF PROJECTIONS
# =============================================================================

class AmortizationResult(EngineModel):
    """Month-by-month payoff outcome at a fixed payment.

    ``capped`` is True when the simulation hit the month cap with balance
    still outstanding; ``months`` then equals the cap.
    """
    months: int = Field(ge=0)
    years: Decimal
    total_interest: Decimal
    total_payments: Decimal
    remaining_balance: Decimal = Decimal("0")
    capped: bool = False


class NoPayoff(EngineModel):
    """The payment never reduces the balance."""
    monthly_payment: Decimal
    first_month_interest: Decimal
    reason: str


class PaymentStrategy(EngineModel):
    """One payoff option for a card."""
    name: str
    monthly_payment: Decimal
    payoff: AmortizationResult
    category: StrategyCategory

    @property
    def months(self) -> int:
        return self.payoff.months

    @property
    def total_interest(self) -> Decimal:
        return self.payoff.total_interest


class PaymentRecommendation(EngineModel):
    """Headline advice plus ranked strategies (at most four)."""
    recommendation: str
    strategies: list[PaymentStrategy] = Field(default_factory=list)


# =============================================================================
# PORTFOLIO
# =============================================================================

class DebtRatios(EngineModel):
    """Totals across all cards."""
    total_debt: Decimal
    total_credit: Decimal
    available_credit: Decimal
    utilization: Decimal  # percent, one decimal


class CardAlert(EngineModel):
    """A portfolio-level notice for the user."""
    alert_type: AlertType = Field(alias="type")
    title: str
    message: str
    priority: AlertPriority


class CreditPortfolioSummary(EngineModel):
    """Aggregate view over every card a user holds."""
    card_count: int = 0
    total_debt: Decimal = Decimal("0")
    total_credit: Decimal = Decimal("0")
    available_credit: Decimal = Decimal("0")
    average_utilization: Decimal = Decimal("0")
    average_interest_rate: Decimal = Decimal("0")
    monthly_payments: Decimal = Decimal("0")
    monthly_interest: Decimal = Decimal("0")
    cards_due_soon: list[CreditCard] = Field(default_factory=list)
    overdue_cards: list[CreditCard] = Field(default_factory=list)
    alerts: list[CardAlert] = Field(default_factory=list)
