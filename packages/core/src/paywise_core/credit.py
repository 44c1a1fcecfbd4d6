"""Credit card calculations: due dates, utilization, payoff projections.

Every function works on ``CreditCard`` values passed in and returns new
values; cards are never mutated. Functions that depend on "today" take an
``as_of`` date that defaults to ``date.today()``.

Due-date policies:
    fixed            same day every month, clamped to short months
    floating         a fixed number of days after the monthly statement
    statement_based  computed exactly like floating
    manual           whatever the user entered; never advanced
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Iterable, Optional, Union

import structlog

from .config import get_config
from .dates import clamped_date, days_between, ordinal_suffix, shift_month
from .models import (
    AlertPriority,
    AlertType,
    AmortizationResult,
    CardAlert,
    CreditCard,
    CreditPortfolioSummary,
    DebtRatios,
    DueDateInfo,
    DueDateStatus,
    DueDateType,
    NoPayoff,
    PaymentRecommendation,
    PaymentStrategy,
    RECURRING_DUE_DATE_TYPES,
    StrategyCategory,
)
from .money import (
    MONTHS_PER_YEAR,
    ONE_HUNDRED,
    ZERO,
    percent_of,
    round_cents,
    round_tenths,
    round_whole,
    to_decimal,
)

logger = structlog.get_logger()

Amount = Union[Decimal, int, float, str]


# =============================================================================
# CONSTANTS
# =============================================================================

# Simulation stops at 50 years; a result at the cap is reported, not raised.
MAX_AMORTIZATION_MONTHS = 600
PAYOFF_TOLERANCE = Decimal("0.01")

MINIMUM_PAYMENT_FLOOR = Decimal("25")
MINIMUM_PRINCIPAL_PERCENT = Decimal("1")
DEFAULT_MINIMUM_PERCENT = Decimal("2")

# Days-until-due thresholds for classification.
DUE_SOON_MAX_DAYS = 3
DUE_THIS_WEEK_MAX_DAYS = 7

STRATEGY_NAMES = ("Conservative", "Moderate", "Aggressive", "Very Aggressive")
MAX_STRATEGIES = 4
HIGH_APR_ADVICE_THRESHOLD = Decimal("15")

HIGH_UTILIZATION_ALERT = Decimal("80")
HEALTHY_UTILIZATION = Decimal("30")
HIGH_APR_ALERT_THRESHOLD = Decimal("20")
ALERT_DUE_SOON_DAYS = 3


def _reference_day(as_of: Optional[Union[date, datetime]]) -> date:
    if as_of is None:
        return date.today()
    if isinstance(as_of, datetime):
        return as_of.date()
    return as_of


# =============================================================================
# DUE DATES
# =============================================================================

def _next_fixed_due_date(card: CreditCard, today: date) -> Optional[date]:
    """Next occurrence of the card's day-of-month strictly after ``today``."""
    day = card.due_date_day or (card.due_date.day if card.due_date else None)
    if day is None:
        return None

    candidate = clamped_date(today.year, today.month, day)
    if candidate <= today:
        year, month = shift_month(today.year, today.month, 1)
        candidate = clamped_date(year, month, day)
    return candidate


def _next_floating_due_date(card: CreditCard, today: date) -> Optional[date]:
    """Next statement strictly after ``today`` plus the grace days."""
    if card.statement_date is None or not card.days_after_statement:
        return None

    statement_day = card.statement_date.day
    statement = clamped_date(today.year, today.month, statement_day)
    if statement <= today:
        year, month = shift_month(today.year, today.month, 1)
        statement = clamped_date(year, month, statement_day)
    return statement + timedelta(days=card.days_after_statement)


def next_due_date(card: CreditCard, as_of: Optional[date] = None) -> Optional[date]:
    """Compute the card's next payment due date.

    Manual cards, and recurring cards missing the fields their policy needs,
    return the stored ``due_date`` unchanged. A computed date never precedes
    the stored one.

    Args:
        card: Card to evaluate
        as_of: Reference day (default: today)

    Returns:
        The next due date, or None when the card has none
    """
    today = _reference_day(as_of)

    if card.due_date_type == DueDateType.FIXED:
        candidate = _next_fixed_due_date(card, today)
    elif card.due_date_type in (DueDateType.FLOATING, DueDateType.STATEMENT_BASED):
        candidate = _next_floating_due_date(card, today)
    else:
        return card.due_date

    if candidate is None:
        return card.due_date
    if card.due_date is not None and candidate < card.due_date:
        return card.due_date
    return candidate


def refresh_due_date(card: CreditCard, as_of: Optional[date] = None) -> CreditCard:
    """Advance a recurring card's due date once it has passed.

    Cards with no due date, manual cards, and cards whose due date is today
    or later come back unchanged.

    Returns:
        The same card, or a copy with ``due_date`` and ``last_due_date_update`` set
    """
    today = _reference_day(as_of)

    if card.due_date is None or card.due_date_type not in RECURRING_DUE_DATE_TYPES:
        return card
    if card.due_date >= today:
        return card

    new_due_date = next_due_date(card, today)
    if new_due_date == card.due_date:
        return card

    logger.info(
        "due_date_advanced",
        card=card.last_four,
        due_date_type=card.due_date_type.value,
        previous=str(card.due_date),
        next=str(new_due_date),
    )
    return card.model_copy(
        update={
            "due_date": new_due_date,
            "last_due_date_update": datetime.now(timezone.utc),
        }
    )


def refresh_all_due_dates(
    cards: Iterable[CreditCard],
    as_of: Optional[date] = None,
) -> list[CreditCard]:
    """Refresh every card; return only the cards whose due date moved."""
    today = _reference_day(as_of)
    updated = []
    for card in cards:
        refreshed = refresh_due_date(card, today)
        if refreshed.due_date != card.due_date:
            updated.append(refreshed)
    return updated


def _status_for_days(days_until_due: int) -> DueDateStatus:
    if days_until_due < 0:
        return DueDateStatus.OVERDUE
    if days_until_due == 0:
        return DueDateStatus.DUE_TODAY
    if days_until_due <= DUE_SOON_MAX_DAYS:
        return DueDateStatus.DUE_SOON
    if days_until_due <= DUE_THIS_WEEK_MAX_DAYS:
        return DueDateStatus.DUE_THIS_WEEK
    return DueDateStatus.DUE_LATER


def classify_due_date(card: CreditCard, as_of: Optional[date] = None) -> DueDateInfo:
    """Classify the card's stored due date relative to ``as_of``.

    Call ``refresh_due_date`` first to classify the upcoming cycle rather
    than a date that has already passed.
    """
    if card.due_date is None:
        return DueDateInfo(status=DueDateStatus.NO_DATE)

    today = _reference_day(as_of)
    days_until_due = days_between(today, card.due_date)

    return DueDateInfo(
        status=_status_for_days(days_until_due),
        days_until_due=days_until_due,
        next_due_date=card.due_date,
        is_overdue=days_until_due < 0,
        is_due_today=days_until_due == 0,
        is_due_soon=0 <= days_until_due <= DUE_SOON_MAX_DAYS,
    )


def describe_due_date_type(card: CreditCard) -> str:
    """Human-readable description of the card's due-date policy."""
    if card.due_date_type == DueDateType.FIXED:
        day = card.due_date_day or (card.due_date.day if card.due_date else 1)
        return f"Every {day}{ordinal_suffix(day)} of the month"

    if card.due_date_type in (DueDateType.FLOATING, DueDateType.STATEMENT_BASED):
        if card.days_after_statement and card.statement_date:
            statement_day = card.statement_date.day
            return (
                f"{card.days_after_statement} days after statement "
                f"({statement_day}{ordinal_suffix(statement_day)})"
            )
        return "Days after statement date"

    return "Manual updates"


def format_due_date_display(card: CreditCard, as_of: Optional[date] = None) -> str:
    """Due date with a countdown, e.g. ``'4/30/2025 (3 days left)'``."""
    info = classify_due_date(card, as_of)
    if info.next_due_date is None:
        return "No due date set"

    due = info.next_due_date
    shown = f"{due.month}/{due.day}/{due.year}"
    if info.days_until_due == 0:
        return f"{shown} (Due Today!)"
    if info.days_until_due < 0:
        return f"{shown} ({abs(info.days_until_due)} days overdue)"
    return f"{shown} ({info.days_until_due} days left)"


# =============================================================================
# UTILIZATION AND MINIMUM PAYMENT
# =============================================================================

def calculate_utilization(
    current_balance: Optional[Amount],
    credit_limit: Optional[Amount],
) -> int:
    """Balance as a whole-number percentage of the limit.

    0 when the limit is missing or not positive, or the balance is not
    positive. Not capped: an over-limit balance reports more than 100.
    """
    limit = to_decimal(credit_limit, "credit_limit", default=ZERO)
    balance = to_decimal(current_balance, "current_balance", default=ZERO)
    if limit <= 0 or balance <= 0:
        return 0
    return int(round_whole(balance / limit * ONE_HUNDRED))


def card_utilization(card: CreditCard) -> int:
    """``calculate_utilization`` for a card record."""
    return calculate_utilization(card.current_balance, card.credit_limit)


def estimate_minimum_payment(
    balance: Amount,
    interest_rate: Amount = 0,
    min_percentage: Amount = DEFAULT_MINIMUM_PERCENT,
) -> Decimal:
    """Estimate a minimum payment for a card record that has none.

    The larger of ``min_percentage`` of the balance, one month's interest
    plus 1% of the balance, and $25. Zero for a non-positive balance.
    """
    balance = to_decimal(balance, "balance")
    if balance <= 0:
        return ZERO

    rate = to_decimal(interest_rate, "interest_rate", allow_negative=False)
    percent = to_decimal(min_percentage, "min_percentage", allow_negative=False)

    percentage_payment = balance * percent / ONE_HUNDRED
    interest_charge = balance * rate / ONE_HUNDRED / MONTHS_PER_YEAR
    interest_plus_principal = interest_charge + balance * MINIMUM_PRINCIPAL_PERCENT / ONE_HUNDRED

    return round_cents(max(percentage_payment, interest_plus_principal, MINIMUM_PAYMENT_FLOOR))


# =============================================================================
# PAYOFF PROJECTIONS
# =============================================================================

def amortize(
    balance: Amount,
    monthly_payment: Amount,
    annual_rate: Amount = 0,
) -> Union[AmortizationResult, NoPayoff]:
    """Simulate paying ``monthly_payment`` each month until the balance is gone.

    Each month accrues ``balance * annual_rate / 100 / 12`` in interest and
    applies the rest of the payment to principal. The loop ends once the
    balance is within one cent of zero or after ``MAX_AMORTIZATION_MONTHS``
    months, in which case the result has ``capped=True``.

    Args:
        balance: Starting balance
        monthly_payment: Fixed payment per month
        annual_rate: APR as a percentage (18 means 18%)

    Returns:
        AmortizationResult, or NoPayoff when the payment does not exceed the
        first month's interest
    """
    remaining = to_decimal(balance, "balance")
    payment = to_decimal(monthly_payment, "monthly_payment")
    rate = to_decimal(annual_rate, "annual_rate", allow_negative=False)

    if remaining <= 0:
        return AmortizationResult(
            months=0, years=ZERO, total_interest=ZERO, total_payments=ZERO
        )

    monthly_rate = rate / ONE_HUNDRED / MONTHS_PER_YEAR
    first_month_interest = remaining * monthly_rate

    if payment <= 0 or payment - first_month_interest <= 0:
        return NoPayoff(
            monthly_payment=payment,
            first_month_interest=round_cents(first_month_interest),
            reason="Payment does not cover the monthly interest charge",
        )

    months = 0
    total_interest = ZERO
    while remaining > PAYOFF_TOLERANCE and months < MAX_AMORTIZATION_MONTHS:
        interest = remaining * monthly_rate
        total_interest += interest
        remaining -= payment - interest
        months += 1

    capped = remaining > PAYOFF_TOLERANCE
    if capped:
        logger.warning(
            "amortization_capped",
            balance=str(balance),
            monthly_payment=str(payment),
            annual_rate=str(rate),
            months=months,
        )

    return AmortizationResult(
        months=months,
        years=round_tenths(Decimal(months) / MONTHS_PER_YEAR),
        total_interest=round_cents(total_interest),
        total_payments=round_cents(payment * months),
        remaining_balance=round_cents(max(ZERO, remaining)),
        capped=capped,
    )


def recommend_strategies(card: CreditCard) -> PaymentRecommendation:
    """Rank payoff options for a card, from the minimum upward.

    Candidates are the card's minimum payment, then 5% and 10% of the
    balance and two and three times the minimum; only candidates strictly
    above the minimum are kept, and options that never pay off are
    dropped. At most four strategies are returned.
    """
    balance = card.current_balance
    rate = card.interest_rate
    minimum = card.minimum_payment

    if balance <= 0:
        return PaymentRecommendation(recommendation="No balance to pay")

    strategies: list[PaymentStrategy] = []

    if minimum > 0:
        payoff = amortize(balance, minimum, rate)
        if isinstance(payoff, AmortizationResult):
            strategies.append(
                PaymentStrategy(
                    name="Minimum Payment",
                    monthly_payment=minimum,
                    payoff=payoff,
                    category=StrategyCategory.MINIMUM,
                )
            )

    candidates = [
        balance * Decimal("0.05"),
        balance * Decimal("0.10"),
        minimum * 2,
        minimum * 3,
    ]
    aggressive_payments = [payment for payment in candidates if payment > minimum]

    for index, payment in enumerate(aggressive_payments):
        payoff = amortize(balance, payment, rate)
        if not isinstance(payoff, AmortizationResult):
            continue
        name = STRATEGY_NAMES[index] if index < len(STRATEGY_NAMES) else "Extra Aggressive"
        strategies.append(
            PaymentStrategy(
                name=name,
                monthly_payment=round_whole(payment),
                payoff=payoff,
                category=StrategyCategory.AGGRESSIVE,
            )
        )

    recommendation = "Pay at least the minimum payment"
    if rate > HIGH_APR_ADVICE_THRESHOLD:
        recommendation = "Consider paying more than minimum due to high interest rate"

    return PaymentRecommendation(
        recommendation=recommendation,
        strategies=strategies[:MAX_STRATEGIES],
    )


# =============================================================================
# PORTFOLIO
# =============================================================================

def calculate_monthly_interest(card: CreditCard) -> Decimal:
    """Interest the current balance accrues in one month."""
    if card.current_balance <= 0 or card.interest_rate <= 0:
        return ZERO
    return round_cents(card.current_balance * card.interest_rate / ONE_HUNDRED / MONTHS_PER_YEAR)


def calculate_total_monthly_payments(cards: Iterable[CreditCard]) -> Decimal:
    """Sum of every card's minimum payment."""
    return round_cents(sum((card.minimum_payment for card in cards), ZERO))


def calculate_debt_ratios(cards: Iterable[CreditCard]) -> DebtRatios:
    """Total debt, total credit, available credit and overall utilization."""
    cards = list(cards)
    total_debt = sum((card.current_balance for card in cards), ZERO)
    total_credit = sum((card.credit_limit or ZERO for card in cards), ZERO)

    return DebtRatios(
        total_debt=round_cents(total_debt),
        total_credit=round_cents(total_credit),
        available_credit=round_cents(total_credit - total_debt),
        utilization=round_tenths(percent_of(total_debt, total_credit)),
    )


def calculate_average_interest_rate(cards: Iterable[CreditCard]) -> Decimal:
    """Balance-weighted average APR; 0 when nothing is owed."""
    cards = list(cards)
    total_balance = sum((card.current_balance for card in cards), ZERO)
    if total_balance <= 0:
        return ZERO
    weighted = sum((card.current_balance * card.interest_rate for card in cards), ZERO)
    return round_cents(weighted / total_balance)


def get_cards_due_soon(
    cards: Iterable[CreditCard],
    as_of: Optional[date] = None,
    days_ahead: Optional[int] = None,
) -> list[CreditCard]:
    """Cards due between ``as_of`` and ``days_ahead`` days later, inclusive."""
    today = _reference_day(as_of)
    if days_ahead is None:
        days_ahead = get_config().analytics.due_soon_days
    horizon = today + timedelta(days=days_ahead)
    return [
        card for card in cards
        if card.due_date is not None and today <= card.due_date <= horizon
    ]


def get_overdue_cards(
    cards: Iterable[CreditCard],
    as_of: Optional[date] = None,
) -> list[CreditCard]:
    """Cards whose stored due date is before ``as_of``."""
    today = _reference_day(as_of)
    return [card for card in cards if card.due_date is not None and card.due_date < today]


def generate_card_alerts(
    cards: Iterable[CreditCard],
    as_of: Optional[date] = None,
) -> list[CardAlert]:
    """Portfolio-level warnings, reminders and tips."""
    cards = list(cards)
    today = _reference_day(as_of)
    ratios = calculate_debt_ratios(cards)
    alerts: list[CardAlert] = []

    if ratios.utilization > HIGH_UTILIZATION_ALERT:
        alerts.append(
            CardAlert(
                alert_type=AlertType.WARNING,
                title="High Credit Utilization",
                message=(
                    f"Your overall utilization is {ratios.utilization}%. "
                    "Keep it below 30% for better credit health."
                ),
                priority=AlertPriority.HIGH,
            )
        )

    due_soon = get_cards_due_soon(cards, today, ALERT_DUE_SOON_DAYS)
    if due_soon:
        alerts.append(
            CardAlert(
                alert_type=AlertType.REMINDER,
                title="Payments Due Soon",
                message=f"{len(due_soon)} card(s) have payments due within {ALERT_DUE_SOON_DAYS} days.",
                priority=AlertPriority.HIGH,
            )
        )

    overdue = get_overdue_cards(cards, today)
    if overdue:
        alerts.append(
            CardAlert(
                alert_type=AlertType.ERROR,
                title="Overdue Payments",
                message=(
                    f"{len(overdue)} card(s) have overdue payments. "
                    "Pay immediately to avoid fees."
                ),
                priority=AlertPriority.CRITICAL,
            )
        )

    if any(
        card.interest_rate > HIGH_APR_ALERT_THRESHOLD and card.current_balance > 0
        for card in cards
    ):
        alerts.append(
            CardAlert(
                alert_type=AlertType.TIP,
                title="High Interest Rates",
                message=(
                    "Consider paying off high-interest cards first or transferring "
                    "balances to lower-rate cards."
                ),
                priority=AlertPriority.MEDIUM,
            )
        )

    if ratios.utilization < HEALTHY_UTILIZATION and not overdue:
        alerts.append(
            CardAlert(
                alert_type=AlertType.SUCCESS,
                title="Great Credit Management!",
                message="Your credit utilization is healthy and all payments are current.",
                priority=AlertPriority.LOW,
            )
        )

    return alerts


def generate_summary(
    cards: Iterable[CreditCard],
    as_of: Optional[date] = None,
) -> CreditPortfolioSummary:
    """Reduce a user's cards to one portfolio summary."""
    cards = list(cards)
    if not cards:
        return CreditPortfolioSummary()

    today = _reference_day(as_of)
    ratios = calculate_debt_ratios(cards)
    monthly_interest = sum((calculate_monthly_interest(card) for card in cards), ZERO)

    summary = CreditPortfolioSummary(
        card_count=len(cards),
        total_debt=ratios.total_debt,
        total_credit=ratios.total_credit,
        available_credit=ratios.available_credit,
        average_utilization=ratios.utilization,
        average_interest_rate=calculate_average_interest_rate(cards),
        monthly_payments=calculate_total_monthly_payments(cards),
        monthly_interest=round_cents(monthly_interest),
        cards_due_soon=get_cards_due_soon(cards, today),
        overdue_cards=get_overdue_cards(cards, today),
        alerts=generate_card_alerts(cards, today),
    )

    logger.info(
        "credit_summary_generated",
        card_count=summary.card_count,
        total_debt=str(summary.total_debt),
        utilization=str(summary.average_utilization),
        overdue=len(summary.overdue_cards),
    )
    return summary
