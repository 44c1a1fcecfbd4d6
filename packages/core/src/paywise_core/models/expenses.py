"""Expense records and spending-analytics results."""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from .base import EngineModel


# =============================================================================
# ENUMERATIONS
# =============================================================================

class ExpenseCategory(str, Enum):
    """Spending categories used for grouping and budget comparison."""
    HOUSING = "housing"
    TRANSPORTATION = "transportation"
    FOOD = "food"
    UTILITIES = "utilities"
    INSURANCE = "insurance"
    HEALTHCARE = "healthcare"
    ENTERTAINMENT = "entertainment"
    SHOPPING = "shopping"
    EDUCATION = "education"
    SAVINGS = "savings"
    DEBT = "debt"
    OTHER = "other"


class ExpenseType(str, Enum):
    """How often an expense is expected to repeat."""
    FIXED = "fixed"
    RECURRING = "recurring"
    ONE_TIME = "one_time"


class ExpenseFrequency(str, Enum):
    """Billing frequency, used to normalise expenses to a monthly figure."""
    WEEKLY = "weekly"
    BI_WEEKLY = "bi_weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMI_ANNUAL = "semi_annual"
    ANNUAL = "annual"
    ONE_TIME = "one_time"


class SavingsStatus(str, Enum):
    """Savings-rate band."""
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    CRITICAL = "critical"


class BudgetStatus(str, Enum):
    """Spending relative to a reference or budgeted amount."""
    OVER = "over"
    UNDER = "under"
    ON_TRACK = "on_track"


# =============================================================================
# EXPENSE RECORD
# =============================================================================

class Expense(EngineModel):
    """A single expense entry. Analytics aggregate over these, never modify them."""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Rent",
                    "amount": "1800.00",
                    "category": "housing",
                    "type": "fixed",
                    "date": "2025-01-01",
                }
            ]
        }
    }

    name: str = ""
    amount: Decimal = Field(default=Decimal("0"), ge=0)
    category: ExpenseCategory = ExpenseCategory.OTHER
    expense_type: Optional[ExpenseType] = Field(default=None, alias="type")
    frequency: ExpenseFrequency = ExpenseFrequency.MONTHLY
    expense_date: Optional[date] = Field(default=None, alias="date")

    @field_validator("category", mode="before")
    @classmethod
    def fallback_unknown_category(cls, v):
        """Missing or unrecognised categories land in 'other'."""
        if isinstance(v, ExpenseCategory):
            return v
        try:
            return ExpenseCategory(str(v).strip().lower())
        except ValueError:
            return ExpenseCategory.OTHER

    @field_validator("expense_type", mode="before")
    @classmethod
    def normalize_type(cls, v):
        """Accept 'one-time' spellings; unknown types are treated as missing."""
        if v is None or isinstance(v, ExpenseType):
            return v
        try:
            return ExpenseType(str(v).strip().lower().replace("-", "_"))
        except ValueError:
            return None

    @field_validator("frequency", mode="before")
    @classmethod
    def normalize_frequency(cls, v):
        """Missing or unknown frequency is monthly; hyphenated spellings are accepted."""
        if isinstance(v, ExpenseFrequency):
            return v
        if v is None or v == "":
            return ExpenseFrequency.MONTHLY
        try:
            return ExpenseFrequency(str(v).strip().lower().replace("-", "_"))
        except ValueError:
            return ExpenseFrequency.MONTHLY


# =============================================================================
# ANALYTICS RESULTS
# =============================================================================

class MonthlyTrend(EngineModel):
    """Spending in one calendar month."""
    month_label: str
    year: int
    month: int
    total: Decimal
    count: int


class SavingsSummary(EngineModel):
    """What is left of net income after expenses."""
    monthly_savings: Decimal
    savings_rate: Decimal  # percent
    annual_savings: Decimal
    status: SavingsStatus


class CategoryAllocation(EngineModel):
    """A category's spend as a share of income."""
    amount: Decimal
    percentage: Decimal


class HighSpendingCategory(EngineModel):
    """A category taking an outsized share of total expenses."""
    category: str
    amount: Decimal
    percentage: Decimal


class CategoryRecommendation(EngineModel):
    """Current spend versus the reference allocation for one category."""
    current: Decimal
    recommended: Decimal
    difference: Decimal  # recommended - current
    current_percentage: Decimal  # share of income
    recommended_percentage: Decimal
    status: BudgetStatus


class BudgetRecommendations(EngineModel):
    """Per-category comparison plus overall advice strings."""
    categories: dict[str, CategoryRecommendation] = Field(default_factory=dict)
    high_spending: list[HighSpendingCategory] = Field(default_factory=list)
    overall: list[str] = Field(default_factory=list)


class CategoryVariance(EngineModel):
    """Actual spend against a user-set budget."""
    actual: Decimal
    budgeted: Decimal
    difference: Decimal
    percentage_variance: Decimal
    status: BudgetStatus


class ExpenseReport(EngineModel):
    """Everything the analytics produce for one expense collection."""
    total: Decimal
    expense_count: int
    monthly_equivalent: Decimal
    by_category: dict[str, Decimal] = Field(default_factory=dict)
    by_type: dict[str, Decimal] = Field(default_factory=dict)
    trends: list[MonthlyTrend] = Field(default_factory=list)
    savings: Optional[SavingsSummary] = None
    budget: Optional[BudgetRecommendations] = None
