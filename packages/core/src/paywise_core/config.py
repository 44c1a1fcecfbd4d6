"""Configuration system for Paywise Core.

This module provides Pydantic Settings-based configuration with environment
variable support and sensible defaults for the calculators, plus structlog
setup.

Usage:
    from paywise_core.config import get_config, configure_logging

    # Load from environment variables and .env file
    config = get_config()

    # Access tax settings
    print(config.tax.default_tax_year)

    # Route engine log events through structlog
    configure_logging(config)
"""

import logging
from typing import Optional

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_TAX_YEAR = 2023


class TaxConfig(BaseSettings):
    """Tax calculation settings.

    Environment Variables:
        PAYWISE_TAX_DEFAULT_TAX_YEAR: Tax year used when the caller passes no rate tables
    """

    model_config = SettingsConfigDict(
        env_prefix="PAYWISE_TAX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_tax_year: int = Field(
        default=DEFAULT_TAX_YEAR,
        ge=2000,
        le=2100,
        description="Tax year whose rate tables are used by default",
    )


class AnalyticsConfig(BaseSettings):
    """Expense and credit analytics settings.

    Environment Variables:
        PAYWISE_ANALYTICS_TREND_MONTHS: Months in the default spending trend
        PAYWISE_ANALYTICS_DUE_SOON_DAYS: Look-ahead window for the due-soon card list
        PAYWISE_ANALYTICS_HIGH_SPENDING_THRESHOLD: Percent of total expenses that flags a category
    """

    model_config = SettingsConfigDict(
        env_prefix="PAYWISE_ANALYTICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    trend_months: int = Field(
        default=6,
        ge=1,
        le=120,
        description="Number of calendar months in the default spending trend",
    )
    due_soon_days: int = Field(
        default=7,
        ge=0,
        le=60,
        description="Days ahead that count as 'due soon' in portfolio summaries",
    )
    high_spending_threshold: float = Field(
        default=20.0,
        gt=0,
        le=100,
        description="Share of total expenses (percent) above which a category is flagged",
    )


class PaywiseConfig(BaseSettings):
    """Root configuration for Paywise Core.

    Environment Variables:
        PAYWISE_ENV: Environment name (development, staging, production, test)
        PAYWISE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        PAYWISE_LOG_FORMAT: Log renderer (json, console)

    Example:
        # Load all configuration from environment
        config = PaywiseConfig()

        # Override specific settings
        config = PaywiseConfig(
            tax=TaxConfig(default_tax_year=2024),
            analytics=AnalyticsConfig(trend_months=12),
        )
    """

    model_config = SettingsConfigDict(
        env_prefix="PAYWISE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: str = Field(
        default="development",
        description="Environment name (development, staging, production, test)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: str = Field(
        default="json",
        description="Log renderer: json or console",
    )

    # Nested configuration
    tax: TaxConfig = Field(default_factory=TaxConfig)
    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment name."""
        valid_envs = {"development", "staging", "production", "test"}
        v_lower = v.lower().strip()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of: {valid_envs}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper().strip()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {valid_levels}")
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log renderer name."""
        v_lower = v.lower().strip()
        if v_lower not in {"json", "console"}:
            raise ValueError(f"Invalid log format: {v}. Must be json or console")
        return v_lower

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"

    @property
    def is_debug(self) -> bool:
        """Check if debug logging is enabled."""
        return self.log_level == "DEBUG"


_config: Optional[PaywiseConfig] = None


def get_config() -> PaywiseConfig:
    """Return the process-wide configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = PaywiseConfig()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next ``get_config`` reloads it."""
    global _config
    _config = None


def configure_logging(config: Optional[PaywiseConfig] = None) -> None:
    """Configure structlog for the engine's calculation events.

    Args:
        config: Settings to apply (default: ``get_config()``)
    """
    config = config or get_config()
    level = getattr(logging, config.log_level)

    renderer = (
        structlog.dev.ConsoleRenderer()
        if config.log_format == "console"
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
