"""Tests for settings validation and logging setup."""

import logging
from configparser import ConfigParser
from pathlib import Path

import pytest
from pydantic import ValidationError

from core import configure_logging
from core.config import Settings


def test_settings_defaults_target_winamp_skin_collection() -> None:
    settings = Settings()

    assert settings.archive_collection == "winampskins"
    assert settings.archive_identifier_namespace == "winampskins"
    assert settings.sync_skin_type == 1
    assert settings.sync_concurrency == 5
    assert set(Settings.model_fields) >= {"database_url", "log_level"}
    assert "app_env" not in Settings.model_fields


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("ARCHIVE_BASE_URL", "https://archive.test/")
    monkeypatch.setenv("SYNC_CONCURRENCY", "2")

    settings = Settings()

    assert settings.archive_base_url == "https://archive.test"
    assert settings.sync_concurrency == 2


def test_settings_reject_non_positive_concurrency() -> None:
    with pytest.raises(ValidationError):
        Settings(sync_concurrency=0)


def test_configure_logging_installs_single_handler() -> None:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    try:
        configure_logging("debug")
        configure_logging("info")

        assert len(root.handlers) == 1
        assert root.level == logging.INFO
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
        for handler in original_handlers:
            root.addHandler(handler)
        root.setLevel(original_level)


def test_configure_logging_rejects_unknown_level() -> None:
    with pytest.raises(ValueError):
        configure_logging("chatty")


def test_alembic_ini_uses_current_path_separator_key() -> None:
    parser = ConfigParser()
    parser.read(Path(__file__).resolve().parents[1] / "alembic.ini")

    assert parser.get("alembic", "path_separator") == "os"
    assert not parser.has_option("alembic", "version_path_separator")
