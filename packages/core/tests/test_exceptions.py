"""Tests for the exception hierarchy."""

import pytest

from paywise_core.exceptions import ConfigurationError, PaywiseError, ValidationError


class TestPaywiseError:
    """Test suite for the base exception."""

    def test_message_and_defaults(self):
        error = PaywiseError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.details == {}
        assert error.recoverable is False

    def test_repr(self):
        error = PaywiseError("boom", details={"code": 1})
        assert repr(error) == "PaywiseError(message='boom', details={'code': 1}, recoverable=False)"


class TestValidationError:
    """Test suite for ValidationError."""

    def test_fields_copied_into_details(self):
        error = ValidationError(
            "Gross salary must be a finite number",
            field="gross_salary_annual",
            value="NaN",
            constraint="finite",
        )
        assert isinstance(error, PaywiseError)
        assert error.recoverable is True
        assert error.details == {
            "field": "gross_salary_annual",
            "value": "NaN",
            "constraint": "finite",
        }

    def test_caught_as_base(self):
        with pytest.raises(PaywiseError):
            raise ValidationError("bad", field="amount")


class TestConfigurationError:
    """Test suite for ConfigurationError."""

    def test_fields_copied_into_details(self):
        error = ConfigurationError(
            "No rate tables for tax year 2019",
            config_key="PAYWISE_TAX_DEFAULT_TAX_YEAR",
            expected="one of: 2023, 2024",
            actual=2019,
        )
        assert error.recoverable is False
        assert error.details["config_key"] == "PAYWISE_TAX_DEFAULT_TAX_YEAR"
        assert error.details["actual"] == 2019
