import logging
from contextlib import nullcontext
from pathlib import Path

import pytest

import config


def test_defaults_without_environment() -> None:
    settings = config.load_settings()

    assert settings.storage_dir == Path(".enrollment_storage")
    assert settings.origin == "local"
    assert settings.quota_bytes == 5 * 1024 * 1024
    assert settings.log_level == logging.INFO
    assert settings.minimum_age == 18
    assert settings.debug is False


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("ENROLLMENT_STORAGE_DIR", str(tmp_path))
    monkeypatch.setenv("ENROLLMENT_ORIGIN", "staging")
    monkeypatch.setenv("ENROLLMENT_STORAGE_QUOTA_BYTES", "2048")
    monkeypatch.setenv("ENROLLMENT_LOG_LEVEL", "debug")
    monkeypatch.setenv("ENROLLMENT_MIN_AGE", "20")
    monkeypatch.setenv("ENROLLMENT_DEBUG", "true")

    settings = config.load_settings()

    assert settings.storage_dir == tmp_path
    assert settings.origin == "staging"
    assert settings.quota_bytes == 2048
    assert settings.log_level == logging.DEBUG
    assert settings.minimum_age == 20
    assert settings.debug is True


def test_invalid_values_warn_and_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENROLLMENT_STORAGE_QUOTA_BYTES", "lots")
    monkeypatch.setenv("ENROLLMENT_LOG_LEVEL", "chatty")

    with pytest.warns(RuntimeWarning):
        settings = config.load_settings()

    assert settings.quota_bytes == config.DEFAULT_QUOTA_BYTES
    assert settings.log_level == logging.INFO


def test_non_positive_values_use_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENROLLMENT_MIN_AGE", "0")
    assert config.load_settings().minimum_age == config.DEFAULT_MIN_AGE


def test_error_details_follow_debug_setting(monkeypatch: pytest.MonkeyPatch) -> None:
    from utils import errors

    shown: list[str] = []
    monkeypatch.setattr(errors.st, "error", lambda message: shown.append(message))
    monkeypatch.setattr(errors.st, "code", lambda detail: shown.append(detail))
    monkeypatch.setattr(errors.st, "expander", lambda label: nullcontext())

    errors.display_error("表示できませんでした", detail="ValueError('boom')")
    assert shown == ["表示できませんでした"]

    monkeypatch.setenv("ENROLLMENT_DEBUG", "1")
    shown.clear()
    errors.display_error("表示できませんでした", detail="ValueError('boom')")
    assert shown == ["表示できませんでした", "ValueError('boom')"]
