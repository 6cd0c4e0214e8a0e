"""
Unit Tests for Settings
Tests for: defaults, choice normalization, validation, derived paths
"""
from pathlib import Path

import pytest
from pydantic import ValidationError

from collegemate.core.config import Settings, STORAGE_BACKENDS, DELIVERY_CHANNELS


class TestSettingsDefaults:
    """Test default values"""

    def test_otp_defaults(self, monkeypatch):
        """Test OTP lifetime and delivery delay defaults"""
        monkeypatch.delenv("OTP_TTL_SECONDS", raising=False)
        monkeypatch.delenv("OTP_DELIVERY_DELAY_SECONDS", raising=False)
        s = Settings(_env_file=None)

        assert s.OTP_TTL_SECONDS == 60
        assert s.OTP_DELIVERY_DELAY_SECONDS == 0.5

    def test_known_choices(self):
        """Test backend and channel choice lists"""
        assert STORAGE_BACKENDS == ("file", "memory", "redis")
        assert DELIVERY_CHANNELS == ("console", "log")


class TestSettingsValidation:
    """Test field validators"""

    def test_choices_are_lowercased(self):
        """Test backend and channel names are normalized"""
        s = Settings(STORAGE_BACKEND=" Memory ", OTP_DELIVERY_CHANNEL="LOG")

        assert s.STORAGE_BACKEND == "memory"
        assert s.OTP_DELIVERY_CHANNEL == "log"

    @pytest.mark.parametrize("ttl", [0, -5])
    def test_non_positive_ttl_rejected(self, ttl):
        """Test OTP TTL must be positive"""
        with pytest.raises(ValidationError):
            Settings(OTP_TTL_SECONDS=ttl)


class TestSettingsProperties:
    """Test derived properties"""

    def test_relative_storage_file_under_config_dir(self, tmp_path):
        """Test relative STORAGE_FILE resolves under CONFIG_DIR"""
        s = Settings(CONFIG_DIR=str(tmp_path), STORAGE_FILE="data.json")

        assert s.storage_path == tmp_path / "data.json"

    def test_absolute_storage_file_kept(self, tmp_path):
        """Test absolute STORAGE_FILE is used as-is"""
        target = tmp_path / "elsewhere" / "store.json"
        s = Settings(CONFIG_DIR="/nonexistent", STORAGE_FILE=str(target))

        assert s.storage_path == Path(target)

    def test_is_production(self):
        """Test production detection"""
        assert Settings(ENVIRONMENT="production").is_production is True
        assert Settings(ENVIRONMENT="testing").is_production is False
