"""Tests for environment-driven configuration"""

import pytest

from config import Config


class TestConfig:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("SONDAGE_PORT", raising=False)
        monkeypatch.delenv("SONDAGE_MAX_TAGS", raising=False)
        cfg = Config()
        assert cfg.API_PORT == 8000
        assert cfg.MAX_TAGS == 10
        assert cfg.summary()["api_port"] == 8000

    def test_origins_parsed(self, monkeypatch):
        monkeypatch.setenv("SONDAGE_ALLOWED_ORIGINS", "https://a.example, ,https://b.example")
        assert Config().ALLOWED_ORIGINS == ["https://a.example", "https://b.example"]

    @pytest.mark.parametrize("name,value", [
        ("SONDAGE_PORT", "70000"),
        ("SONDAGE_MAX_QUESTION_LENGTH", "0"),
        ("SONDAGE_MAX_TAGS", "-1"),
        ("SONDAGE_LOG_LEVEL", "chatty"),
    ])
    def test_invalid_values_rejected(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        with pytest.raises(ValueError):
            Config()
