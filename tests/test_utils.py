"""
Tests for utility modules: logging, validation, configuration.

Run with: pytest tests/test_utils.py -v
"""

import json
import logging
import math
import sys

import pytest

from thermalnet.core.config import Settings
from thermalnet.utils import (
    JsonLineFormatter,
    ThermalnetFormatter,
    ValidationError,
    is_numeric,
    setup_logging,
    validate_building_id,
    validate_hour,
)


class TestLogging:
    """Tests for logging configuration."""

    @pytest.fixture
    def restore_root_logging(self):
        """Put the root logger back the way the test found it."""
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        for handler in root.handlers:
            if handler not in handlers:
                handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_console_handler_on_stderr(self, restore_root_logging):
        setup_logging("DEBUG")
        root = logging.getLogger()

        assert len(root.handlers) == 1
        assert root.handlers[0].stream is sys.stderr
        assert root.level == logging.DEBUG

    def test_log_file_gets_json_lines(self, temp_dir, restore_root_logging):
        """Console stays at WARNING while the file receives DEBUG records."""
        log_path = temp_dir / "logs" / "thermalnet.log"
        setup_logging("WARNING", log_file=log_path)

        logging.getLogger("thermalnet.test").debug("Indexed hour", extra={"hour": 3})
        for handler in logging.getLogger().handlers:
            handler.flush()

        entry = json.loads(log_path.read_text().splitlines()[0])
        assert entry["level"] == "DEBUG"
        assert entry["message"] == "Indexed hour"
        assert entry["hour"] == 3

    def test_formatter_appends_context(self):
        record = logging.LogRecord("thermalnet.test", logging.INFO, __file__, 1, "Loaded", None, None)
        record.hour = 12
        record.building_id = "b_3"

        formatted = ThermalnetFormatter(use_colors=False).format(record)

        assert formatted.endswith("[hour=12, building_id=b_3]")
        assert "Loaded" in formatted

    def test_json_formatter_includes_context(self):
        record = logging.LogRecord("thermalnet.test", logging.WARNING, __file__, 1, "Duplicate", None, None)
        record.borefield_id = "borefield_2"

        entry = json.loads(JsonLineFormatter().format(record))

        assert entry["borefield_id"] == "borefield_2"
        assert entry["level"] == "WARNING"
        assert "hour" not in entry


class TestBuildingIdValidation:
    """Tests for building id validation."""

    def test_valid(self):
        assert validate_building_id("b_12") == 12

    @pytest.mark.parametrize("bad", ["b12", "b_", "B_1", "b_1_load_w", ""])
    def test_invalid(self, bad):
        with pytest.raises(ValidationError) as exc_info:
            validate_building_id(bad)
        assert exc_info.value.field == "building_id"


class TestHourValidation:
    """Tests for hour coercion."""

    def test_int(self):
        assert validate_hour(5) == 5

    def test_integral_float(self):
        assert validate_hour(5.0) == 5

    def test_string(self):
        assert validate_hour(" 12 ") == 12

    def test_out_of_range_is_not_rejected(self):
        assert validate_hour(0) == 0
        assert validate_hour(9000) == 9000

    @pytest.mark.parametrize("bad", [True, 1.5, "noon", None])
    def test_invalid(self, bad):
        with pytest.raises(ValidationError):
            validate_hour(bad)


class TestIsNumeric:
    """Tests for numeric cell detection."""

    def test_numbers(self):
        assert is_numeric(0)
        assert is_numeric(-5000.5)
        assert is_numeric(math.inf)

    def test_non_numbers(self):
        assert not is_numeric(None)
        assert not is_numeric("12")
        assert not is_numeric(True)
        assert not is_numeric(math.nan)


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self):
        config = Settings(_env_file=None)

        assert config.missing_field_policy == "default_zero"
        assert config.borefield_capacity_kw == 440.0
        assert config.max_operating_fraction == 0.8
        assert config.log_file is None

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("THERMALNET_MISSING_FIELD_POLICY", "fail")
        monkeypatch.setenv("THERMALNET_DEFAULT_HOUR", "4000")

        config = Settings(_env_file=None)

        assert config.missing_field_policy == "fail"
        assert config.default_hour == 4000
