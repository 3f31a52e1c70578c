"""Tests for ValidatedObjectSettings."""

import logging

import pytest

from validated_object.config.settings import ValidatedObjectSettings


class TestValidatedObjectSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("VALIDATED_OBJECT_VERBOSE", raising=False)
        monkeypatch.delenv("VALIDATED_OBJECT_LOG_JSON", raising=False)
        settings = ValidatedObjectSettings.from_env()
        assert settings.verbose is False
        assert settings.log_json is False

    def test_env_vars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VALIDATED_OBJECT_VERBOSE", "true")
        monkeypatch.setenv("VALIDATED_OBJECT_LOG_JSON", "1")
        settings = ValidatedObjectSettings.from_env()
        assert settings.verbose is True
        assert settings.log_json is True

    def test_overrides_beat_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VALIDATED_OBJECT_VERBOSE", "true")
        settings = ValidatedObjectSettings.from_env(verbose=False)
        assert settings.verbose is False

    def test_frozen(self) -> None:
        settings = ValidatedObjectSettings.from_env()
        with pytest.raises(Exception):
            settings.verbose = True  # type: ignore[misc]

    def test_log_level(self) -> None:
        assert ValidatedObjectSettings(verbose=True).log_level == logging.DEBUG
        assert ValidatedObjectSettings(verbose=False).log_level == logging.WARNING
