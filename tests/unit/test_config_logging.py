"""
Tests for configuration, logging and exceptions.
"""

import json
import logging
from pathlib import Path

import pytest

from filmlab.config import CalculatorSettings, Settings, configure, get_settings
from filmlab.core.exceptions import FilmLabError, InvalidInputError, ReferenceDataError
from filmlab.core.logging import JSONFormatter, get_logger, log_operation


class TestSettings:
    """Tests for pydantic-settings configuration."""

    def test_calculator_defaults(self):
        settings = CalculatorSettings()
        assert settings.default_temperature_c == 20.0
        assert settings.default_coefficient == 1.33
        assert settings.default_steps == 5
        assert settings.max_coefficient == 10.0
        assert settings.default_push_mode is True

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("FILMLAB_CALC_DEFAULT_COEFFICIENT", "1.5")
        monkeypatch.setenv("FILMLAB_CALC_DEFAULT_STEPS", "3")

        settings = Settings()

        assert settings.calculator.default_coefficient == 1.5
        assert settings.calculator.default_steps == 3

    def test_coefficient_must_be_positive(self):
        with pytest.raises(ValueError):
            CalculatorSettings(default_coefficient=0)

    def test_journal_path_default(self, tmp_path):
        settings = Settings(data_dir=tmp_path)
        assert settings.get_journal_path() == tmp_path / "journal.db"

    def test_relative_journal_path_resolved_against_data_dir(self, tmp_path):
        settings = Settings(data_dir=tmp_path, journal_path=Path("logs/journal.db"))
        assert settings.journal_path == tmp_path / "logs" / "journal.db"

    def test_configure_replaces_global(self, tmp_path):
        try:
            configured = configure(data_dir=tmp_path)
            assert get_settings() is configured
            assert get_settings().data_dir == tmp_path
        finally:
            configure(Settings())

    def test_ensure_directories(self, tmp_path):
        settings = Settings(data_dir=tmp_path / "filmlab")
        settings.ensure_directories()
        assert (tmp_path / "filmlab").is_dir()


class TestLogging:
    """Tests for logging helpers."""

    def test_logger_under_package(self):
        assert get_logger("tests.something").name == "filmlab.tests.something"
        assert get_logger("filmlab.reference").name == "filmlab.reference"

    def test_json_formatter_includes_extras(self):
        record = logging.LogRecord(
            name="filmlab.test",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="Lookup %s",
            args=("hp5",),
            exc_info=None,
        )
        record.film_id = "hp5"

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "Lookup hp5"
        assert data["level"] == "INFO"
        assert data["film_id"] == "hp5"

    def test_log_operation_reraises(self):
        logger = get_logger("tests.operation")
        with pytest.raises(RuntimeError):
            with log_operation(logger, "failing"):
                raise RuntimeError("boom")

    def test_log_operation_success(self):
        logger = get_logger("tests.operation")
        with log_operation(logger, "ok"):
            value = 1
        assert value == 1


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_invalid_input_details(self):
        error = InvalidInputError("seconds must be between 0 and 59", field="seconds", value=75)

        assert isinstance(error, FilmLabError)
        assert isinstance(error, ValueError)
        assert error.field == "seconds"
        assert error.details == {"field": "seconds", "value": 75}
        assert "field=seconds" in str(error)

    def test_reference_data_error_source(self):
        error = ReferenceDataError("bad file", source="films.json")

        assert error.source == "films.json"
        assert str(error) == "bad file | Details: source=films.json"

    def test_plain_message(self):
        assert str(FilmLabError("plain")) == "plain"
