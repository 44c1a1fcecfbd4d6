"""Versioned tax rate tables.

Federal brackets, flat state rates, and payroll tax parameters for each
supported tax year. Tables are plain ``RateTables`` values: callers pass one
into the tax calculator, so a new tax year is added here (or supplied by the
caller) without touching calculation logic.

State rates are single flat-rate approximations of each state's income tax,
not full state bracket schedules.

Updated: tax years 2023 and 2024
"""

from decimal import Decimal
from typing import Optional

from .config import get_config
from .exceptions import ConfigurationError
from .models.tax import FilingStatus, RateTables, TaxBracket


def _brackets(bounds: list[str], rates: list[str]) -> list[TaxBracket]:
    """Build contiguous brackets from upper bounds; the last is unbounded."""
    brackets = []
    lower = Decimal("0")
    for i, rate in enumerate(rates):
        upper = Decimal(bounds[i]) if i < len(bounds) else None
        brackets.append(TaxBracket(lower_bound=lower, upper_bound=upper, rate=Decimal(rate)))
        lower = upper
    return brackets


FEDERAL_RATES = ["0.10", "0.12", "0.22", "0.24", "0.32", "0.35", "0.37"]


# =============================================================================
# STATE RATES
# =============================================================================
# Flat approximations. Codes missing from this table are taxed at 0% by the
# calculator and reported with state_recognized=False.

STATE_TAX_RATES = {
    "AL": Decimal("0.05"),
    "AZ": Decimal("0.025"),
    "CA": Decimal("0.08"),
    "CO": Decimal("0.0455"),
    "FL": Decimal("0"),
    "GA": Decimal("0.0575"),
    "IL": Decimal("0.0495"),
    "MI": Decimal("0.0425"),
    "NC": Decimal("0.0525"),
    "NJ": Decimal("0.0637"),
    "NV": Decimal("0"),
    "NY": Decimal("0.065"),
    "OH": Decimal("0.0399"),
    "OR": Decimal("0.075"),
    "PA": Decimal("0.0307"),
    "TN": Decimal("0"),
    "TX": Decimal("0"),
    "UT": Decimal("0.0495"),
    "VA": Decimal("0.0575"),
    "WA": Decimal("0"),
}


# =============================================================================
# TAX YEAR 2023
# =============================================================================

TAX_YEAR_2023 = RateTables(
    tax_year=2023,
    federal_brackets={
        FilingStatus.SINGLE: _brackets(
            ["11000", "44725", "95375", "182050", "231250", "578125"], FEDERAL_RATES
        ),
        FilingStatus.MARRIED: _brackets(
            ["22000", "89450", "190750", "364200", "462500", "693750"], FEDERAL_RATES
        ),
        FilingStatus.MARRIED_SEPARATE: _brackets(
            ["11000", "44725", "95375", "182100", "231250", "346875"], FEDERAL_RATES
        ),
        FilingStatus.HEAD: _brackets(
            ["15700", "59850", "95350", "182100", "231250", "578100"], FEDERAL_RATES
        ),
    },
    state_rates=STATE_TAX_RATES,
    social_security_rate=Decimal("0.062"),
    social_security_wage_cap=Decimal("160200"),
    medicare_rate=Decimal("0.0145"),
    additional_medicare_rate=Decimal("0.009"),
    additional_medicare_threshold=Decimal("200000"),
)


# =============================================================================
# TAX YEAR 2024
# =============================================================================

TAX_YEAR_2024 = RateTables(
    tax_year=2024,
    federal_brackets={
        FilingStatus.SINGLE: _brackets(
            ["11600", "47150", "100525", "191950", "243725", "609350"], FEDERAL_RATES
        ),
        FilingStatus.MARRIED: _brackets(
            ["23200", "94300", "201050", "383900", "487450", "731200"], FEDERAL_RATES
        ),
        FilingStatus.MARRIED_SEPARATE: _brackets(
            ["11600", "47150", "100525", "191950", "243725", "365600"], FEDERAL_RATES
        ),
        FilingStatus.HEAD: _brackets(
            ["16550", "63100", "100500", "191950", "243700", "609350"], FEDERAL_RATES
        ),
    },
    state_rates=STATE_TAX_RATES,
    social_security_rate=Decimal("0.062"),
    social_security_wage_cap=Decimal("168600"),
    medicare_rate=Decimal("0.0145"),
    additional_medicare_rate=Decimal("0.009"),
    additional_medicare_threshold=Decimal("200000"),
)


RATE_TABLES_BY_YEAR = {
    2023: TAX_YEAR_2023,
    2024: TAX_YEAR_2024,
}


def available_tax_years() -> list[int]:
    """Tax years with built-in tables, ascending."""
    return sorted(RATE_TABLES_BY_YEAR)


def get_rate_tables(tax_year: Optional[int] = None) -> RateTables:
    """Return the built-in tables for ``tax_year``.

    Args:
        tax_year: Year to look up (default: configured default tax year)

    Returns:
        RateTables for that year

    Raises:
        ConfigurationError: No tables exist for the year
    """
    if tax_year is None:
        tax_year = get_config().tax.default_tax_year

    tables = RATE_TABLES_BY_YEAR.get(tax_year)
    if tables is None:
        years = ", ".join(str(y) for y in available_tax_years())
        raise ConfigurationError(
            f"No rate tables for tax year {tax_year}",
            config_key="PAYWISE_TAX_DEFAULT_TAX_YEAR",
            expected=f"one of: {years}",
            actual=tax_year,
        )
    return tables


def is_known_state(state: Optional[str], rate_tables: Optional[RateTables] = None) -> bool:
    """True when ``state`` has an entry in the state rate table."""
    tables = rate_tables or get_rate_tables()
    return tables.state_rate(state) is not None
