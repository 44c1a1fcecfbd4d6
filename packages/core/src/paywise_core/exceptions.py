"""Custom exceptions for the Paywise engine.

This module provides a small hierarchy of exception classes for consistent
error handling across the calculators. All exceptions inherit from
PaywiseError, making it easy to catch all engine-specific errors.

The calculators themselves rarely raise: zero divisors produce zero results,
unknown enum values fall back to documented defaults, and a payment that never
retires a balance is reported as a ``NoPayoff`` value. Exceptions are reserved
for input that is not a number at all and for configuration that cannot be
resolved.

Example:
    try:
        tables = get_rate_tables(2019)
    except ConfigurationError as e:
        logger.error("rate_tables_unavailable", **e.details)
        raise
"""

from typing import Any, Optional


class PaywiseError(Exception):
    """Base exception for all Paywise engine errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
        recoverable: Whether the error is potentially recoverable.

    Example:
        >>> raise PaywiseError("Something went wrong", details={"code": 500})
        PaywiseError: Something went wrong
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize PaywiseError.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context about the error.
            recoverable: Whether the error is potentially recoverable through
                corrected input or alternative configuration. Defaults to False.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message

    def __repr__(self) -> str:
        """Return detailed representation of the error."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"details={self.details!r}, "
            f"recoverable={self.recoverable!r})"
        )


class ValidationError(PaywiseError):
    """Error raised when an engine input is not a usable amount.

    Raised when a value handed directly to a calculator function cannot be
    interpreted as a finite, non-negative amount (for example ``"abc"``,
    ``Decimal("NaN")`` or a negative salary).

    Attributes:
        field: The input that failed validation.
        value: The invalid value.
        constraint: The validation constraint that was violated.

    Example:
        >>> raise ValidationError(
        ...     "Gross salary must be a finite number",
        ...     field="gross_salary_annual",
        ...     value="NaN",
        ...     constraint="finite, >= 0",
        ... )
        ValidationError: Gross salary must be a finite number
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        constraint: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        """Initialize ValidationError.

        Args:
            message: Human-readable error description.
            field: The name of the input that failed validation.
            value: The invalid value.
            constraint: Description of the validation rule violated.
            details: Optional dictionary with additional context.
            recoverable: Whether the error can be fixed by user correction.
                Defaults to True.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.field = field
        self.value = value
        self.constraint = constraint

        if field:
            self.details["field"] = field
        if value is not None:
            self.details["value"] = value
        if constraint:
            self.details["constraint"] = constraint


class ConfigurationError(PaywiseError):
    """Error raised when configuration is invalid or missing.

    Raised when a requested tax year has no rate tables, or when settings
    reference values the engine cannot resolve.

    Attributes:
        config_key: The configuration key that is problematic.
        expected: Description of the expected value or format.
        actual: The actual value found (if any).

    Example:
        >>> raise ConfigurationError(
        ...     "No rate tables for tax year 2019",
        ...     config_key="PAYWISE_TAX_DEFAULT_TAX_YEAR",
        ...     expected="one of: 2023, 2024",
        ...     actual=2019,
        ... )
        ConfigurationError: No rate tables for tax year 2019
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize ConfigurationError.

        Args:
            message: Human-readable error description.
            config_key: The name of the configuration key that is problematic.
            expected: Description of what value was expected.
            actual: The actual value found.
            details: Optional dictionary with additional context.
            recoverable: Whether the error can be fixed at runtime.
                Defaults to False.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.config_key = config_key
        self.expected = expected
        self.actual = actual

        if config_key:
            self.details["config_key"] = config_key
        if expected:
            self.details["expected"] = expected
        if actual is not None:
            self.details["actual"] = actual


__all__ = [
    "PaywiseError",
    "ValidationError",
    "ConfigurationError",
]
