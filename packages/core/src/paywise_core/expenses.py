"""Expense analytics: totals, groupings, trends, savings and budget advice.

All functions are pure aggregations over ``Expense`` records. Money results
are rounded to cents and percentages to two decimals when the result model
is built; intermediate sums stay unrounded.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Union

import structlog

from .config import AnalyticsConfig, get_config
from .dates import last_day_of_month, month_label, shift_month
from .models import (
    BudgetRecommendations,
    BudgetStatus,
    CategoryAllocation,
    CategoryRecommendation,
    CategoryVariance,
    Expense,
    ExpenseCategory,
    ExpenseFrequency,
    ExpenseReport,
    HighSpendingCategory,
    MonthlyTrend,
    SavingsStatus,
    SavingsSummary,
)
from .money import MONTHS_PER_YEAR, ZERO, percent_of, round_cents, to_decimal

logger = structlog.get_logger()

Amount = Union[Decimal, int, float, str]


# =============================================================================
# REFERENCE VALUES
# =============================================================================

# Share of monthly net income suggested for each category.
RECOMMENDED_ALLOCATIONS: dict[str, Decimal] = {
    ExpenseCategory.HOUSING.value: Decimal("0.30"),
    ExpenseCategory.TRANSPORTATION.value: Decimal("0.15"),
    ExpenseCategory.FOOD.value: Decimal("0.10"),
    ExpenseCategory.UTILITIES.value: Decimal("0.05"),
    ExpenseCategory.ENTERTAINMENT.value: Decimal("0.05"),
    ExpenseCategory.SHOPPING.value: Decimal("0.05"),
    ExpenseCategory.HEALTHCARE.value: Decimal("0.05"),
    ExpenseCategory.INSURANCE.value: Decimal("0.05"),
    ExpenseCategory.SAVINGS.value: Decimal("0.20"),
}

# Multiplier converting one occurrence to a monthly amount.
MONTHLY_FACTORS: dict[ExpenseFrequency, Decimal] = {
    ExpenseFrequency.WEEKLY: Decimal("52") / MONTHS_PER_YEAR,
    ExpenseFrequency.BI_WEEKLY: Decimal("26") / MONTHS_PER_YEAR,
    ExpenseFrequency.MONTHLY: Decimal("1"),
    ExpenseFrequency.QUARTERLY: Decimal("1") / Decimal("3"),
    ExpenseFrequency.SEMI_ANNUAL: Decimal("1") / Decimal("6"),
    ExpenseFrequency.ANNUAL: Decimal("1") / MONTHS_PER_YEAR,
    ExpenseFrequency.ONE_TIME: ZERO,
}

# Savings-rate bands, checked top down.
SAVINGS_BANDS = (
    (Decimal("20"), SavingsStatus.EXCELLENT),
    (Decimal("15"), SavingsStatus.GOOD),
    (Decimal("10"), SavingsStatus.FAIR),
    (Decimal("5"), SavingsStatus.POOR),
)

LOW_SAVINGS_RATE = Decimal("10")
DEFAULT_HIGH_SPENDING_THRESHOLD = Decimal("15")

LOW_SAVINGS_ADVICE = "Consider reducing discretionary spending to increase savings rate"


def _round_map(amounts: Mapping[str, Decimal]) -> dict[str, Decimal]:
    return {key: round_cents(value) for key, value in amounts.items()}


# =============================================================================
# TOTALS AND GROUPINGS
# =============================================================================

def calculate_total(expenses: Iterable[Expense]) -> Decimal:
    """Sum of every expense amount."""
    return round_cents(sum((expense.amount for expense in expenses), ZERO))


def group_by_category(expenses: Iterable[Expense]) -> dict[str, Decimal]:
    """Total per category, in first-seen order."""
    totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for expense in expenses:
        totals[expense.category.value] += expense.amount
    return _round_map(totals)


def group_by_type(expenses: Iterable[Expense]) -> dict[str, Decimal]:
    """Total per expense type; expenses without a type count as ``'other'``."""
    totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for expense in expenses:
        key = expense.expense_type.value if expense.expense_type else "other"
        totals[key] += expense.amount
    return _round_map(totals)


def calculate_monthly_equivalent(expenses: Iterable[Expense]) -> Decimal:
    """Normalise every expense to a monthly amount; one-time expenses add nothing."""
    monthly = sum(
        (expense.amount * MONTHLY_FACTORS[expense.frequency] for expense in expenses),
        ZERO,
    )
    return round_cents(monthly)


def calculate_remaining_budget(monthly_net_income: Amount, total_expenses: Amount) -> Decimal:
    """Income left after expenses; negative when overspent."""
    income = to_decimal(monthly_net_income, "monthly_net_income")
    spent = to_decimal(total_expenses, "total_expenses")
    return round_cents(income - spent)


# =============================================================================
# TRENDS
# =============================================================================

def calculate_trends(
    expenses: Iterable[Expense],
    month_count: int = 6,
    as_of: Optional[date] = None,
) -> list[MonthlyTrend]:
    """Monthly spending for the ``month_count`` months ending at ``as_of``.

    One bucket per calendar month, oldest first, including months with no
    expenses. Expenses without a date are left out.

    Args:
        expenses: Expenses to bucket
        month_count: Number of months (non-positive returns [])
        as_of: Any day in the newest month (default: today)

    Returns:
        Exactly ``month_count`` MonthlyTrend entries
    """
    if month_count <= 0:
        return []

    today = as_of or date.today()
    dated = [expense for expense in expenses if expense.expense_date is not None]

    trends = []
    for offset in range(month_count - 1, -1, -1):
        year, month = shift_month(today.year, today.month, -offset)
        start = date(year, month, 1)
        end = last_day_of_month(year, month)

        in_month = [expense for expense in dated if start <= expense.expense_date <= end]
        trends.append(
            MonthlyTrend(
                month_label=month_label(start),
                year=year,
                month=month,
                total=calculate_total(in_month),
                count=len(in_month),
            )
        )
    return trends


# =============================================================================
# SAVINGS
# =============================================================================

def savings_status(savings_rate: Decimal) -> SavingsStatus:
    """Band for a savings rate given as a percentage."""
    for floor, status in SAVINGS_BANDS:
        if savings_rate >= floor:
            return status
    return SavingsStatus.CRITICAL


def _raw_savings_rate(income: Decimal, spent: Decimal) -> Decimal:
    """Unrounded savings rate; bands and thresholds compare against this."""
    return percent_of(income - spent, income)


def calculate_savings_rate(
    monthly_net_income: Amount,
    monthly_expense_total: Amount,
) -> SavingsSummary:
    """Savings left from net income after expenses.

    The rate is 0 (status critical) whenever income is not positive. The
    status band is taken from the unrounded rate.
    """
    income = to_decimal(monthly_net_income, "monthly_net_income")
    spent = to_decimal(monthly_expense_total, "monthly_expense_total")

    savings = income - spent
    rate = _raw_savings_rate(income, spent)

    return SavingsSummary(
        monthly_savings=round_cents(savings),
        savings_rate=round_cents(rate),
        annual_savings=round_cents(savings * MONTHS_PER_YEAR),
        status=savings_status(rate),
    )


# =============================================================================
# BUDGET
# =============================================================================

def calculate_budget_allocation(
    monthly_net_income: Amount,
    expenses_by_category: Mapping[str, Amount],
) -> dict[str, CategoryAllocation]:
    """Each category's spend as a share of income; {} when income is not positive."""
    income = to_decimal(monthly_net_income, "monthly_net_income")
    if income <= 0:
        return {}

    allocation = {}
    for category, amount in expenses_by_category.items():
        amount = to_decimal(amount, category)
        allocation[category] = CategoryAllocation(
            amount=round_cents(amount),
            percentage=round_cents(percent_of(amount, income)),
        )
    return allocation


def identify_high_spending_categories(
    expenses_by_category: Mapping[str, Amount],
    threshold: Amount = DEFAULT_HIGH_SPENDING_THRESHOLD,
) -> list[HighSpendingCategory]:
    """Categories whose share of total expenses exceeds ``threshold`` percent.

    Sorted by amount, largest first. Empty when there is nothing spent.
    """
    amounts = {
        category: to_decimal(amount, category)
        for category, amount in expenses_by_category.items()
    }
    limit = to_decimal(threshold, "threshold")
    total = sum(amounts.values(), ZERO)
    if total <= 0:
        return []

    flagged = [
        HighSpendingCategory(
            category=category,
            amount=round_cents(amount),
            percentage=round_cents(percent_of(amount, total)),
        )
        for category, amount in amounts.items()
        if percent_of(amount, total) > limit
    ]
    return sorted(flagged, key=lambda item: item.amount, reverse=True)


def generate_budget_recommendations(
    monthly_net_income: Amount,
    expenses_by_category: Mapping[str, Amount],
    allocations: Optional[Mapping[str, Decimal]] = None,
    high_spending_threshold: Optional[Amount] = None,
) -> BudgetRecommendations:
    """Compare spending with reference allocations and collect advice.

    Every reference category is reported, spent in or not. A category is
    ``over`` when its spend exceeds the recommended amount, otherwise
    ``under``.

    Args:
        monthly_net_income: Take-home pay per month
        expenses_by_category: Monthly spend per category
        allocations: Share of income per category (default: RECOMMENDED_ALLOCATIONS)
        high_spending_threshold: Percent of total expenses that flags a
            category (default: configured threshold, 20)

    Returns:
        BudgetRecommendations with per-category comparisons and overall advice
    """
    income = to_decimal(monthly_net_income, "monthly_net_income")
    allocations = allocations if allocations is not None else RECOMMENDED_ALLOCATIONS
    if high_spending_threshold is None:
        high_spending_threshold = Decimal(str(get_config().analytics.high_spending_threshold))

    spent = {
        category: to_decimal(amount, category)
        for category, amount in expenses_by_category.items()
    }

    categories = {}
    for category, share in allocations.items():
        current = spent.get(category, ZERO)
        recommended = income * share
        categories[category] = CategoryRecommendation(
            current=round_cents(current),
            recommended=round_cents(recommended),
            difference=round_cents(recommended - current),
            current_percentage=round_cents(percent_of(current, income)),
            recommended_percentage=round_cents(share * 100),
            status=BudgetStatus.OVER if current > recommended else BudgetStatus.UNDER,
        )

    total_spent = sum(spent.values(), ZERO)
    savings_rate = _raw_savings_rate(income, total_spent)
    high_spending = identify_high_spending_categories(spent, high_spending_threshold)

    overall = []
    if savings_rate < LOW_SAVINGS_RATE:
        overall.append(LOW_SAVINGS_ADVICE)
    if high_spending:
        names = ", ".join(item.category for item in high_spending)
        overall.append(f"Review spending in: {names}")

    return BudgetRecommendations(
        categories=categories,
        high_spending=high_spending,
        overall=overall,
    )


def calculate_expense_variance(
    actual: Mapping[str, Amount],
    budgeted: Mapping[str, Amount],
) -> dict[str, CategoryVariance]:
    """Actual against budgeted spend for every category in either mapping."""
    variance = {}
    for category in list(actual) + [c for c in budgeted if c not in actual]:
        spent = to_decimal(actual.get(category), category, default=ZERO)
        planned = to_decimal(budgeted.get(category), category, default=ZERO)
        difference = spent - planned

        if difference > 0:
            status = BudgetStatus.OVER
        elif difference < 0:
            status = BudgetStatus.UNDER
        else:
            status = BudgetStatus.ON_TRACK

        variance[category] = CategoryVariance(
            actual=round_cents(spent),
            budgeted=round_cents(planned),
            difference=round_cents(difference),
            percentage_variance=round_cents(percent_of(difference, planned)),
            status=status,
        )
    return variance


# =============================================================================
# REPORT
# =============================================================================

def analyze_expenses(
    expenses: Iterable[Expense],
    monthly_net_income: Optional[Amount] = None,
    as_of: Optional[date] = None,
    settings: Optional[AnalyticsConfig] = None,
) -> ExpenseReport:
    """Run every expense analytic over one collection.

    Savings and budget sections are filled in only when
    ``monthly_net_income`` is given.

    Args:
        expenses: Expense records
        monthly_net_income: Take-home pay per month, if known
        as_of: Reference day for the trend window (default: today)
        settings: Analytics settings (default: ``get_config().analytics``)
    """
    expenses = list(expenses)
    settings = settings or get_config().analytics

    total = calculate_total(expenses)
    by_category = group_by_category(expenses)

    savings = None
    budget = None
    if monthly_net_income is not None:
        savings = calculate_savings_rate(monthly_net_income, total)
        budget = generate_budget_recommendations(
            monthly_net_income,
            by_category,
            high_spending_threshold=Decimal(str(settings.high_spending_threshold)),
        )

    report = ExpenseReport(
        total=total,
        expense_count=len(expenses),
        monthly_equivalent=calculate_monthly_equivalent(expenses),
        by_category=by_category,
        by_type=group_by_type(expenses),
        trends=calculate_trends(expenses, settings.trend_months, as_of),
        savings=savings,
        budget=budget,
    )

    logger.info(
        "expense_report_generated",
        expense_count=report.expense_count,
        total=str(report.total),
        savings_rate=str(savings.savings_rate) if savings else None,
    )
    return report
