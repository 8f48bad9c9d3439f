# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Configuration management using Pydantic Settings."""

from decimal import Decimal

from beartype import beartype
from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Rating core settings with immutable configuration."""

    model_config = SettingsConfigDict(
        env_prefix="AUTO_POLICY_",
        env_file=None,
        env_file_encoding="utf-8",
        frozen=True,
        validate_default=True,
        extra="forbid",
    )

    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Root log level",
    )

    # Pricing
    base_premium_amount: Decimal = Field(
        default=Decimal("500"),
        gt=Decimal("0"),
        description="Premium of a category/usage tariff of 1.0 before adjustments",
    )
    max_premium_amount: Decimal = Field(
        default=Decimal("10000"),
        gt=Decimal("0"),
        description="Premium above which a policy is flagged as abnormal",
    )

    # Underwriting limits
    start_date_grace_days: int = Field(
        default=30,
        ge=0,
        le=365,
        description="How far in the past a new policy may start",
    )
    max_comprehensive_vehicle_age: int = Field(
        default=15,
        ge=0,
        le=100,
        description="Oldest vehicle eligible for comprehensive coverage",
    )
    max_insurable_vehicle_age: int = Field(
        default=30,
        ge=0,
        le=100,
        description="Oldest vehicle eligible for any coverage",
    )
    min_primary_driver_experience_years: int = Field(
        default=2,
        ge=0,
        le=50,
        description="Driving experience required to be a primary driver",
    )

    # Monitoring
    slow_operation_threshold_ms: int = Field(
        default=100,
        ge=1,
        le=60000,
        description="Duration above which an operation is logged as slow",
    )

    @field_validator("max_insurable_vehicle_age")
    @classmethod
    def validate_vehicle_age_limits(
        cls: type["Settings"], v: int, info: ValidationInfo
    ) -> int:
        """Ensure the insurability limit is not stricter than the comprehensive one."""
        if "max_comprehensive_vehicle_age" in info.data:
            comprehensive = info.data["max_comprehensive_vehicle_age"]
            if v < comprehensive:
                raise ValueError(
                    f"max_insurable_vehicle_age ({v}) must be >= "
                    f"max_comprehensive_vehicle_age ({comprehensive})"
                )
        return v


_settings: Settings | None = None


@beartype
def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


@beartype
def clear_settings_cache() -> None:
    """Clear settings cache (for testing)."""
    global _settings
    _settings = None
