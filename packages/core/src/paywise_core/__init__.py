"""Paywise Core - Paycheck, credit card and expense calculations."""

__version__ = "0.1.0"

from .config import PaywiseConfig, configure_logging, get_config, reset_config
from .exceptions import ConfigurationError, PaywiseError, ValidationError
from .models import (
    CreditCard,
    Expense,
    ExpenseReport,
    PaycheckProfile,
    RateTables,
    TaxBreakdown,
)
from .rate_tables import get_rate_tables
from .tax import calculate_taxes, calculate_taxes_for_profile, compare_state_taxes
from .credit import amortize, classify_due_date, generate_summary, recommend_strategies
from .expenses import analyze_expenses

__all__ = [
    "PaywiseConfig",
    "configure_logging",
    "get_config",
    "reset_config",
    "PaywiseError",
    "ValidationError",
    "ConfigurationError",
    "CreditCard",
    "Expense",
    "ExpenseReport",
    "PaycheckProfile",
    "RateTables",
    "TaxBreakdown",
    "get_rate_tables",
    "calculate_taxes",
    "calculate_taxes_for_profile",
    "compare_state_taxes",
    "amortize",
    "classify_due_date",
    "generate_summary",
    "recommend_strategies",
    "analyze_expenses",
]
