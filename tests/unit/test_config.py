"""Unit tests for settings loading."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from auto_policy_core.core.config import Settings, clear_settings_cache, get_settings


class TestSettings:
    """Settings defaults, overrides and validation."""

    def test_defaults(self):
        """Defaults match the business constants."""
        settings = Settings()

        assert settings.log_level == "INFO"
        assert settings.base_premium_amount == Decimal("500")
        assert settings.max_premium_amount == Decimal("10000")
        assert settings.start_date_grace_days == 30
        assert settings.max_comprehensive_vehicle_age == 15
        assert settings.max_insurable_vehicle_age == 30
        assert settings.min_primary_driver_experience_years == 2

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch):
        """Prefixed environment variables override the defaults."""
        monkeypatch.setenv("AUTO_POLICY_BASE_PREMIUM_AMOUNT", "600")
        monkeypatch.setenv("AUTO_POLICY_LOG_LEVEL", "DEBUG")

        settings = Settings()

        assert settings.base_premium_amount == Decimal("600")
        assert settings.log_level == "DEBUG"

    def test_invalid_log_level_rejected(self, monkeypatch: pytest.MonkeyPatch):
        """Unknown log levels fail validation."""
        monkeypatch.setenv("AUTO_POLICY_LOG_LEVEL", "VERBOSE")

        with pytest.raises(ValidationError):
            Settings()

    def test_insurable_age_not_below_comprehensive_age(self):
        """The insurability limit cannot be stricter than the comprehensive one."""
        with pytest.raises(ValidationError, match="max_insurable_vehicle_age"):
            Settings(max_comprehensive_vehicle_age=20, max_insurable_vehicle_age=10)

    def test_settings_are_frozen(self):
        """Settings cannot be modified after loading."""
        settings = Settings()

        with pytest.raises(ValidationError):
            settings.base_premium_amount = Decimal("1")

    def test_get_settings_is_cached(self, monkeypatch: pytest.MonkeyPatch):
        """Settings are loaded once until the cache is cleared."""
        first = get_settings()
        monkeypatch.setenv("AUTO_POLICY_START_DATE_GRACE_DAYS", "10")

        assert get_settings() is first

        clear_settings_cache()
        assert get_settings().start_date_grace_days == 10
