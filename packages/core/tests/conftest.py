"""Shared fixtures for paywise-core tests."""

import os
from datetime import date
from decimal import Decimal

import pytest

from paywise_core.config import reset_config
from paywise_core.models import CreditCard, DueDateType, Expense, ExpenseCategory


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Isolate every test from PAYWISE_* variables and the cached config."""
    for key in list(os.environ):
        if key.startswith("PAYWISE_"):
            monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def as_of() -> date:
    """Reference day used across credit and expense tests."""
    return date(2025, 4, 10)


@pytest.fixture
def portfolio() -> list[CreditCard]:
    """Three cards: one due in two days, one overdue, one paid off."""
    return [
        CreditCard(
            name="Travel Rewards",
            last_four="1111",
            credit_limit=Decimal("5000"),
            current_balance=Decimal("2000"),
            interest_rate=Decimal("24"),
            minimum_payment=Decimal("60"),
            due_date_type=DueDateType.FIXED,
            due_date_day=12,
            due_date=date(2025, 4, 12),
        ),
        CreditCard(
            name="Cash Back",
            last_four="2222",
            credit_limit=Decimal("5000"),
            current_balance=Decimal("500"),
            interest_rate=Decimal("12"),
            minimum_payment=Decimal("25"),
            due_date_type=DueDateType.FIXED,
            due_date_day=5,
            due_date=date(2025, 4, 5),
        ),
        CreditCard(
            name="Store Card",
            last_four="3333",
            credit_limit=Decimal("2000"),
            current_balance=Decimal("0"),
            interest_rate=Decimal("0"),
            minimum_payment=Decimal("0"),
            due_date_type=DueDateType.MANUAL,
        ),
    ]


@pytest.fixture
def monthly_expenses() -> list[Expense]:
    """A month of typical household expenses."""
    return [
        Expense(name="Rent", amount=Decimal("2000"), category=ExpenseCategory.HOUSING,
                type="fixed", date=date(2025, 4, 1)),
        Expense(name="Groceries", amount=Decimal("300"), category=ExpenseCategory.FOOD,
                type="recurring", date=date(2025, 4, 6)),
        Expense(name="Concert", amount=Decimal("600"), category=ExpenseCategory.ENTERTAINMENT,
                type="one-time", date=date(2025, 3, 22)),
    ]
