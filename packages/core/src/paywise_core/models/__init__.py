"""Value objects for paywise-core.

This package provides the immutable data structures the calculators
consume and produce:
- Tax inputs, rate tables, and breakdowns (tax.py)
- Credit card records, due-date status, and payoff projections (credit.py)
- Expense records and spending analytics (expenses.py)
- Calculation audit entries (audit.py)
"""

from paywise_core.models.base import EngineModel
from paywise_core.models.audit import AuditEntry

from paywise_core.models.tax import (
    # Enumerations
    VisaStatus,
    FilingStatus,
    PAYROLL_EXEMPT_VISA_STATUSES,
    # Inputs
    PaycheckProfile,
    TaxBracket,
    RateTables,
    # Results
    PayrollTaxes,
    TaxBreakdown,
    StateTaxSummary,
    StateTaxDifference,
    StateTaxComparison,
)

from paywise_core.models.credit import (
    # Enumerations
    DueDateType,
    DueDateStatus,
    StrategyCategory,
    AlertType,
    AlertPriority,
    RECURRING_DUE_DATE_TYPES,
    # Card record
    CreditCard,
    # Results
    DueDateInfo,
    AmortizationResult,
    NoPayoff,
    PaymentStrategy,
    PaymentRecommendation,
    DebtRatios,
    CardAlert,
    CreditPortfolioSummary,
)

from paywise_core.models.expenses import (
    # Enumerations
    ExpenseCategory,
    ExpenseType,
    ExpenseFrequency,
    SavingsStatus,
    BudgetStatus,
    # Expense record
    Expense,
    # Results
    MonthlyTrend,
    SavingsSummary,
    CategoryAllocation,
    HighSpendingCategory,
    CategoryRecommendation,
    BudgetRecommendations,
    CategoryVariance,
    ExpenseReport,
)

__all__ = [
    "EngineModel",
    "AuditEntry",
    # Tax
    "VisaStatus",
    "FilingStatus",
    "PAYROLL_EXEMPT_VISA_STATUSES",
    "PaycheckProfile",
    "TaxBracket",
    "RateTables",
    "PayrollTaxes",
    "TaxBreakdown",
    "StateTaxSummary",
    "StateTaxDifference",
    "StateTaxComparison",
    # Credit
    "DueDateType",
    "DueDateStatus",
    "StrategyCategory",
    "AlertType",
    "AlertPriority",
    "RECURRING_DUE_DATE_TYPES",
    "CreditCard",
    "DueDateInfo",
    "AmortizationResult",
    "NoPayoff",
    "PaymentStrategy",
    "PaymentRecommendation",
    "DebtRatios",
    "CardAlert",
    "CreditPortfolioSummary",
    # Expenses
    "ExpenseCategory",
    "ExpenseType",
    "ExpenseFrequency",
    "SavingsStatus",
    "BudgetStatus",
    "Expense",
    "MonthlyTrend",
    "SavingsSummary",
    "CategoryAllocation",
    "HighSpendingCategory",
    "CategoryRecommendation",
    "BudgetRecommendations",
    "CategoryVariance",
    "ExpenseReport",
]
