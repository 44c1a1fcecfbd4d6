"""Tests for the built-in tax rate tables."""

from decimal import Decimal

import pytest

from paywise_core.exceptions import ConfigurationError
from paywise_core.models import FilingStatus
from paywise_core.rate_tables import (
    TAX_YEAR_2023,
    TAX_YEAR_2024,
    available_tax_years,
    get_rate_tables,
    is_known_state,
)


class TestRateTables:
    """Test suite for rate table lookup."""

    def test_available_years(self):
        assert available_tax_years() == [2023, 2024]

    def test_lookup_by_year(self):
        assert get_rate_tables(2024) is TAX_YEAR_2024

    def test_default_year(self):
        """With no year the configured default (2023) is used."""
        assert get_rate_tables() is TAX_YEAR_2023

    def test_default_year_from_environment(self, monkeypatch):
        monkeypatch.setenv("PAYWISE_TAX_DEFAULT_TAX_YEAR", "2024")
        assert get_rate_tables().tax_year == 2024

    def test_unknown_year(self):
        """A year without tables raises ConfigurationError."""
        with pytest.raises(ConfigurationError) as exc_info:
            get_rate_tables(2019)
        assert exc_info.value.config_key == "PAYWISE_TAX_DEFAULT_TAX_YEAR"
        assert exc_info.value.actual == 2019
        assert exc_info.value.recoverable is False

    @pytest.mark.parametrize("tables", [TAX_YEAR_2023, TAX_YEAR_2024])
    def test_every_filing_status_present(self, tables):
        for status in FilingStatus:
            brackets = tables.brackets_for(status)
            assert len(brackets) == 7
            assert brackets[0].rate == Decimal("0.10")
            assert brackets[-1].rate == Decimal("0.37")
            assert brackets[-1].upper_bound is None

    def test_wage_caps(self):
        assert TAX_YEAR_2023.social_security_wage_cap == Decimal("160200")
        assert TAX_YEAR_2024.social_security_wage_cap == Decimal("168600")


class TestStateRates:
    """Test suite for state rate lookup."""

    @pytest.mark.parametrize("state", ["CA", "ca", " ny "])
    def test_known_states(self, state: str):
        assert is_known_state(state, TAX_YEAR_2023)

    @pytest.mark.parametrize("state", ["ZZ", "", None])
    def test_unknown_states(self, state):
        assert not is_known_state(state, TAX_YEAR_2023)

    def test_zero_tax_states_are_known(self):
        assert TAX_YEAR_2023.state_rate("TX") == 0
        assert is_known_state("TX")
