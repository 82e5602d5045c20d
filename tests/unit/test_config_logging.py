"""Unit tests for settings and the logger factory."""

import json
import logging

import pytest
from pydantic import ValidationError

from citegate.config.settings import Settings
from citegate.handoff.analyzer import AnalyzerConfig
from citegate.utils.logging import PACKAGE_LOGGER, JSONFormatter, configure_logging, get_logger


class TestSettings:
    """Tests for environment-driven configuration."""

    def test_defaults(self) -> None:
        s = Settings(_env_file=None)
        assert s.min_plausible_year == 1800
        assert s.max_plausible_year == 2100
        assert s.low_certainty_threshold == 0.4
        assert s.contradiction_confidence == 0.6
        assert s.export_certainty_floor == 0.7

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CITEGATE_CONTRADICTION_CONFIDENCE", "0.75")
        monkeypatch.setenv("CITEGATE_MAX_PLAUSIBLE_YEAR", "2030")
        s = Settings(_env_file=None)
        assert s.contradiction_confidence == 0.75
        assert s.max_plausible_year == 2030

    def test_out_of_range_severity_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, temporal_severity=1.5)

    def test_year_window_must_be_ordered(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, min_plausible_year=2000, max_plausible_year=1900)

    def test_bad_log_format_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_format="xml")

    def test_analyzer_config_from_settings(self) -> None:
        s = Settings(_env_file=None, contradiction_confidence=0.3, temporal_gap_years=10)
        config = AnalyzerConfig.from_settings(s)
        assert config.contradiction_confidence == 0.3
        assert config.temporal_gap_years == 10


def own_handlers(logger: logging.Logger) -> list:
    """Handlers installed by configure_logging, ignoring any added by the test runner."""
    return [h for h in logger.handlers if type(h) is logging.StreamHandler]


class TestLogging:
    """Tests for the logger factory and JSON formatter."""

    def test_package_logger_owns_one_handler(self) -> None:
        logger = get_logger("citegate.tests.handlers")
        get_logger("citegate.tests.other")
        package = logging.getLogger(PACKAGE_LOGGER)
        assert logger is get_logger("citegate.tests.handlers")
        assert own_handlers(logger) == []
        assert len(own_handlers(package)) == 1

    def test_configure_logging_switches_format(self) -> None:
        package = configure_logging(level="DEBUG", log_format="text")
        try:
            assert package.level == logging.DEBUG
            assert len(own_handlers(package)) == 1
            assert not isinstance(own_handlers(package)[0].formatter, JSONFormatter)
        finally:
            configure_logging()
        assert len(own_handlers(package)) == 1

    def test_json_formatter(self) -> None:
        record = logging.LogRecord(
            name="citegate.test",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="Validated %d citations",
            args=(3,),
            exc_info=None,
        )
        record.extra = {"states": {"valid": 3}}
        data = json.loads(JSONFormatter().format(record))
        assert data["message"] == "Validated 3 citations"
        assert data["level"] == "INFO"
        assert data["logger"] == "citegate.test"
        assert data["states"] == {"valid": 3}
