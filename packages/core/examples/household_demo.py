#!/usr/bin/env python3
"""
Household Finances Demonstration

This script walks one household through all three calculators:
1. Compute take-home pay from an annual salary
2. Summarize credit cards and payoff options
3. Analyze a month of expenses against take-home pay

Run: python examples/household_demo.py
"""

from datetime import date
from decimal import Decimal

from paywise_core import (
    CreditCard,
    Expense,
    PaycheckProfile,
    analyze_expenses,
    calculate_taxes_for_profile,
    configure_logging,
    generate_summary,
    recommend_strategies,
)
from paywise_core.config import PaywiseConfig
from paywise_core.credit import describe_due_date_type, format_due_date_display, refresh_due_date
from paywise_core.models import DueDateType, ExpenseCategory, FilingStatus, VisaStatus


AS_OF = date(2025, 4, 10)


def create_sample_cards() -> list[CreditCard]:
    """Create a small credit card portfolio."""
    return [
        CreditCard(
            name="Travel Rewards",
            last_four="4821",
            bank_name="First National",
            credit_limit=Decimal("8000"),
            current_balance=Decimal("3200"),
            interest_rate=Decimal("23.99"),
            minimum_payment=Decimal("96"),
            due_date_type=DueDateType.FIXED,
            due_date_day=31,
            due_date=date(2025, 3, 31),
        ),
        CreditCard(
            name="Everyday Cash",
            last_four="1177",
            bank_name="Metro Credit Union",
            credit_limit=Decimal("4000"),
            current_balance=Decimal("650"),
            interest_rate=Decimal("14.5"),
            minimum_payment=Decimal("25"),
            due_date_type=DueDateType.FLOATING,
            statement_date=date(2025, 3, 5),
            days_after_statement=25,
            due_date=date(2025, 3, 30),
        ),
    ]


def create_sample_expenses() -> list[Expense]:
    """Create a month of household expenses."""
    return [
        Expense(name="Rent", amount=Decimal("1850"), category=ExpenseCategory.HOUSING,
                type="fixed", date=date(2025, 4, 1)),
        Expense(name="Car payment", amount=Decimal("410"), category=ExpenseCategory.TRANSPORTATION,
                type="fixed", date=date(2025, 4, 3)),
        Expense(name="Groceries", amount=Decimal("520"), category=ExpenseCategory.FOOD,
                type="recurring", date=date(2025, 4, 6)),
        Expense(name="Electric", amount=Decimal("95"), category=ExpenseCategory.UTILITIES,
                type="recurring", date=date(2025, 3, 28)),
        Expense(name="Car insurance", amount=Decimal("720"), category=ExpenseCategory.INSURANCE,
                type="recurring", frequency="semi-annual", date=date(2025, 2, 15)),
        Expense(name="Concert tickets", amount=Decimal("180"), category=ExpenseCategory.ENTERTAINMENT,
                type="one-time", frequency="one-time", date=date(2025, 3, 14)),
    ]


def main():
    """Run the household finances demonstration."""
    configure_logging(PaywiseConfig(log_format="console", log_level="WARNING"))

    print("=" * 70)
    print("PAYWISE CORE - Household Finances Demo")
    print("=" * 70)
    print()

    # Step 1: Paycheck
    print("Step 1: Calculating take-home pay...")
    profile = PaycheckProfile(
        gross_salary_annual=Decimal("85000"),
        state="NY",
        visa_status=VisaStatus.H1B,
        filing_status=FilingStatus.SINGLE,
    )
    taxes = calculate_taxes_for_profile(profile)
    print(f"  - Gross (monthly): ${taxes.monthly_gross:,.2f}")
    print(f"  - Federal tax: ${taxes.monthly_federal_tax:,.2f}")
    print(f"  - State tax ({taxes.state}): ${taxes.monthly_state_tax:,.2f}")
    print(f"  - Social Security: ${taxes.monthly_social_security:,.2f}")
    print(f"  - Medicare: ${taxes.monthly_medicare:,.2f}")
    print(f"  - Take-home (monthly): ${taxes.monthly_net:,.2f}")
    print(f"  - Effective rate: {taxes.effective_total_rate}%")
    print()

    # Step 2: Credit cards
    print("Step 2: Reviewing credit cards...")
    cards = [refresh_due_date(card, AS_OF) for card in create_sample_cards()]
    for card in cards:
        print(f"  - {card.name} (...{card.last_four}): {describe_due_date_type(card)}")
        print(f"      Due: {format_due_date_display(card, AS_OF)}")

    summary = generate_summary(cards, AS_OF)
    print(f"  - Total debt: ${summary.total_debt:,.2f} of ${summary.total_credit:,.2f}")
    print(f"  - Utilization: {summary.average_utilization}%")
    print(f"  - Monthly interest: ${summary.monthly_interest:,.2f}")
    for alert in summary.alerts:
        print(f"  - [{alert.priority.value}] {alert.title}: {alert.message}")

    advice = recommend_strategies(cards[0])
    print(f"  - {cards[0].name}: {advice.recommendation}")
    for strategy in advice.strategies:
        print(
            f"      {strategy.name}: ${strategy.monthly_payment:,.2f}/mo, "
            f"{strategy.months} months, ${strategy.total_interest:,.2f} interest"
        )
    print()

    # Step 3: Expenses
    print("Step 3: Analyzing expenses...")
    report = analyze_expenses(create_sample_expenses(), taxes.monthly_net, AS_OF)
    print(f"  - Monthly equivalent: ${report.monthly_equivalent:,.2f}")
    for trend in report.trends:
        print(f"      {trend.month_label}: ${trend.total:,.2f} ({trend.count} expenses)")
    print(f"  - Savings rate: {report.savings.savings_rate}% ({report.savings.status.value})")
    for line in report.budget.overall:
        print(f"  - {line}")

    print()
    print("=" * 70)
    print("Demo complete!")
    print("=" * 70)


if __name__ == "__main__":
    main()
