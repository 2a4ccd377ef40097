"""
Tests de la configuration (pydantic-settings).
"""

import pytest
from pydantic import ValidationError

from dentaltrack.core.config import Settings, settings


class TestSettings:

    def test_loaded_from_environment(self):
        assert settings.ENVIRONMENT == "test"
        assert settings.is_test is True
        assert settings.is_sqlite is True
        assert settings.is_production is False

    def test_defaults(self):
        s = Settings(_env_file=None)
        assert s.ALGORITHM == "HS256"
        assert s.ACCESS_TOKEN_EXPIRE_MINUTES == 30
        assert s.APP_NAME == "DentalTrack"

    def test_environment_normalized(self):
        assert Settings(_env_file=None, ENVIRONMENT="Production").is_production is True

    def test_invalid_environment(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, ENVIRONMENT="moon")

    def test_log_level_normalized(self):
        assert Settings(_env_file=None, LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, LOG_LEVEL="verbose")

    @pytest.mark.parametrize("raw,expected", [
        ('["http://a.com", "http://b.com"]', ["http://a.com", "http://b.com"]),
        ("http://single.com", ["http://single.com"]),
    ])
    def test_cors_origins_parsing(self, raw, expected):
        assert Settings(_env_file=None, CORS_ORIGINS=raw).CORS_ORIGINS == expected
