"""Tests for environment-driven settings."""

import io

import pytest

from ermodel.config import get_logger, get_settings, reset_settings, setup_logging


@pytest.fixture(autouse=True)
def fresh_settings():
    reset_settings()
    yield
    reset_settings()


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("ERMODEL_LOG_LEVEL", "ERMODEL_EXAMPLE_STRING_LENGTH", "ERMODEL_SEED"):
        monkeypatch.delenv(name, raising=False)
    settings = get_settings()
    assert settings.log_level == "INFO"
    assert settings.example_string_length == 20
    assert settings.seed is None
    assert get_settings() is settings


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ERMODEL_EXAMPLE_STRING_LENGTH", "8")
    monkeypatch.setenv("ERMODEL_SEED", "99")
    settings = get_settings()
    assert settings.example_string_length == 8
    assert settings.seed == 99


def test_log_file_directory_is_created(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ERMODEL_LOG_FILE", str(tmp_path / "logs" / "ermodel.log"))
    get_settings()
    assert (tmp_path / "logs").is_dir()


def test_setup_logging_writes_package_records():
    stream = io.StringIO()
    setup_logging(level="debug", stream=stream, format_string="%(name)s %(levelname)s %(message)s")
    get_logger("ermodel.tests").debug("hello")
    get_logger("other").info("plain name")
    assert "ermodel.tests DEBUG hello" in stream.getvalue()
    assert "ermodel.other INFO plain name" in stream.getvalue()

    with pytest.raises(ValueError):
        setup_logging(level="LOUD", stream=stream)
    setup_logging(level="WARNING")
