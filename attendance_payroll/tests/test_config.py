"""
Tests for configuration validation
"""
import pytest
from pydantic import ValidationError

from attendance_payroll.core.config import Settings


def test_defaults():
    settings = Settings(_env_file=None, JWT_SECRET_KEY="x")
    assert settings.HALF_DAY_THRESHOLD_MINUTES == 240
    assert settings.HISTORY_LIMIT == 30
    assert settings.JWT_ALGORITHM == "HS256"
    assert str(settings.reference_tz) == settings.REFERENCE_TZ


def test_prod_settings_rejects_short_jwt_secret():
    settings = Settings(_env_file=None, JWT_SECRET_KEY="short", APP_ENV="prod")
    with pytest.raises(ValueError, match="JWT_SECRET_KEY"):
        settings.validate_production()


def test_prod_settings_accepts_long_jwt_secret():
    settings = Settings(_env_file=None, JWT_SECRET_KEY="a" * 32, APP_ENV="prod")
    settings.validate_production()


def test_invalid_app_env():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, APP_ENV="production")


def test_log_level_is_normalized():
    assert Settings(_env_file=None, LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"
    with pytest.raises(ValidationError):
        Settings(_env_file=None, LOG_LEVEL="verbose")


def test_unknown_timezone_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, REFERENCE_TZ="Mars/Olympus_Mons")


def test_half_day_threshold_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, HALF_DAY_THRESHOLD_MINUTES=0)
