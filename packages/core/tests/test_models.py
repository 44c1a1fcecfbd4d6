"""Tests for value objects."""

from datetime import date
from decimal import Decimal

import pydantic
import pytest

from paywise_core.models import (
    AuditEntry,
    CreditCard,
    DueDateType,
    Expense,
    ExpenseCategory,
    ExpenseFrequency,
    ExpenseType,
    FilingStatus,
    PaycheckProfile,
    RateTables,
    TaxBracket,
    VisaStatus,
)


class TestEngineModel:
    """Behaviour shared by every value object."""

    def test_frozen(self):
        """Value objects cannot be mutated."""
        card = CreditCard(current_balance=Decimal("100"))
        with pytest.raises(pydantic.ValidationError):
            card.current_balance = Decimal("0")

    def test_accepts_camel_case_input(self):
        """Records may be built from contract names."""
        card = CreditCard.model_validate(
            {"currentBalance": "250.00", "creditLimit": "1000", "dueDateType": "floating"}
        )
        assert card.current_balance == Decimal("250.00")
        assert card.due_date_type == DueDateType.FLOATING

    def test_to_contract(self):
        """Contracts use camelCase names and JSON-safe values."""
        contract = CreditCard(
            last_four="4242", current_balance=Decimal("10.50"), due_date=date(2025, 4, 30)
        ).to_contract()
        assert contract["lastFour"] == "4242"
        assert contract["currentBalance"] == "10.50"
        assert contract["dueDate"] == "2025-04-30"


class TestCreditCard:
    """Test suite for CreditCard."""

    def test_defaults(self):
        card = CreditCard()
        assert card.due_date_type == DueDateType.FIXED
        assert card.current_balance == 0
        assert card.due_date is None

    def test_missing_type_is_fixed(self):
        assert CreditCard(due_date_type=None).due_date_type == DueDateType.FIXED
        assert CreditCard(due_date_type="").due_date_type == DueDateType.FIXED

    def test_unknown_type_is_manual(self):
        """An unrecognised due-date type is treated as manual."""
        assert CreditCard(due_date_type="biweekly").due_date_type == DueDateType.MANUAL

    def test_blank_form_fields(self):
        """Empty strings from forms become None."""
        card = CreditCard(due_date_day="", days_after_statement="")
        assert card.due_date_day is None
        assert card.days_after_statement is None

    @pytest.mark.parametrize("last_four", ["123", "12a4", "12345"])
    def test_last_four_must_be_four_digits(self, last_four: str):
        with pytest.raises(pydantic.ValidationError):
            CreditCard(last_four=last_four)

    def test_due_date_day_range(self):
        with pytest.raises(pydantic.ValidationError):
            CreditCard(due_date_day=32)

    def test_negative_interest_rate_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            CreditCard(interest_rate=Decimal("-1"))


class TestExpense:
    """Test suite for Expense."""

    def test_aliases(self):
        """'type' and 'date' are accepted as field names."""
        expense = Expense(name="Rent", amount="1800", category="housing",
                          type="fixed", date="2025-01-01")
        assert expense.expense_type == ExpenseType.FIXED
        assert expense.expense_date == date(2025, 1, 1)
        assert expense.to_contract()["type"] == "fixed"
        assert expense.to_contract()["date"] == "2025-01-01"

    def test_normalisation(self):
        expense = Expense(category="Food", type="one-time", frequency="Bi-Weekly")
        assert expense.category == ExpenseCategory.FOOD
        assert expense.expense_type == ExpenseType.ONE_TIME
        assert expense.frequency == ExpenseFrequency.BI_WEEKLY

    def test_unknown_values_fall_back(self):
        expense = Expense(category="pets", type="sometimes", frequency=None)
        assert expense.category == ExpenseCategory.OTHER
        assert expense.expense_type is None
        assert expense.frequency == ExpenseFrequency.MONTHLY

    def test_negative_amount_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            Expense(amount=Decimal("-1"))


class TestTaxModels:
    """Test suite for tax inputs and rate tables."""

    def test_paycheck_profile_normalizes_state(self):
        profile = PaycheckProfile(gross_salary_annual=Decimal("50000"), state="  ny ")
        assert profile.state == "NY"
        assert profile.visa_status == VisaStatus.CITIZEN
        assert profile.filing_status == FilingStatus.SINGLE

    def test_blank_state_is_none(self):
        assert PaycheckProfile(gross_salary_annual=Decimal("1"), state="  ").state is None

    def test_bracket_aliases_and_width(self):
        bracket = TaxBracket.model_validate({"min": "11000", "max": "44725", "rate": "0.12"})
        assert bracket.width == Decimal("33725")
        assert TaxBracket(lower_bound=Decimal("0"), rate=Decimal("0.1")).width is None

    def _tables(self, brackets: list[TaxBracket]) -> RateTables:
        return RateTables(
            tax_year=2030,
            federal_brackets={FilingStatus.SINGLE: brackets},
            social_security_rate=Decimal("0.062"),
            social_security_wage_cap=Decimal("170000"),
            medicare_rate=Decimal("0.0145"),
            additional_medicare_rate=Decimal("0.009"),
            additional_medicare_threshold=Decimal("200000"),
        )

    def test_custom_tables(self):
        """Callers can supply their own tables."""
        tables = self._tables([
            TaxBracket(lower_bound=Decimal("0"), upper_bound=Decimal("10000"), rate=Decimal("0.1")),
            TaxBracket(lower_bound=Decimal("10000"), rate=Decimal("0.2")),
        ])
        assert tables.brackets_for(FilingStatus.MARRIED) == tables.brackets_for(FilingStatus.SINGLE)
        assert tables.state_rate("CA") is None

    def test_gap_between_brackets_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            self._tables([
                TaxBracket(lower_bound=Decimal("0"), upper_bound=Decimal("10000"), rate=Decimal("0.1")),
                TaxBracket(lower_bound=Decimal("12000"), rate=Decimal("0.2")),
            ])

    def test_bounded_last_bracket_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            self._tables([
                TaxBracket(lower_bound=Decimal("0"), upper_bound=Decimal("10000"), rate=Decimal("0.1")),
            ])


class TestAuditEntry:
    """Test suite for AuditEntry."""

    def test_equal_entries(self):
        """Entries built from the same values compare equal."""
        first = AuditEntry(step="federal_tax", input_value="1", output_value="0.1", source="test")
        second = AuditEntry(step="federal_tax", input_value="1", output_value="0.1", source="test")
        assert first == second
        assert first.notes is None
