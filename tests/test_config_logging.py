"""
Environment-driven config, decimal helpers and the logger.
"""

import decimal
import logging
from decimal import Decimal

import pytest

from streamta.config import Config, LogConfig, NumericConfig, get_config, reset_config
from streamta.utils.helpers import decimal_context, max3, min3, round_places, to_decimal
from streamta.utils.logger import ColoredFormatter, Colors, get_logger, setup_logger


class TestConfig:

    def test_defaults(self, clean_env):
        config = get_config()
        assert config.numeric.precision == 28
        assert config.numeric.display_places == 4
        assert config.log.level == "INFO"
        assert config.log.log_dir == ""

    def test_singleton(self, clean_env):
        assert get_config() is get_config()
        assert Config() is get_config()

    def test_reads_environment(self, clean_env):
        clean_env.setenv("STREAMTA_DECIMAL_PRECISION", "40")
        clean_env.setenv("STREAMTA_LOG_LEVEL", "DEBUG")
        config = get_config()
        assert config.numeric.precision == 40
        assert config.log.level == "DEBUG"
        assert "prec=40" in config.summary()
        assert "log=DEBUG@console" in config.summary()

    def test_reset_rereads_environment(self, clean_env):
        assert get_config().numeric.display_places == 4
        clean_env.setenv("STREAMTA_DISPLAY_PLACES", "2")
        assert get_config().numeric.display_places == 4
        reset_config()
        assert get_config().numeric.display_places == 2

    def test_dotenv_file(self, clean_env, tmp_path):
        # registered so teardown removes the value load_dotenv writes
        clean_env.setenv("STREAMTA_DISPLAY_PLACES", "4")
        env_file = tmp_path / "custom.env"
        env_file.write_text("STREAMTA_DISPLAY_PLACES=6\n")
        assert get_config(str(env_file)).numeric.display_places == 6

    def test_precision_floor(self, clean_env):
        clean_env.setenv("STREAMTA_DECIMAL_PRECISION", "4")
        with pytest.raises(ValueError, match="STREAMTA_DECIMAL_PRECISION"):
            get_config()

    def test_non_integer_precision(self, clean_env):
        clean_env.setenv("STREAMTA_DECIMAL_PRECISION", "lots")
        with pytest.raises(ValueError, match="STREAMTA_DECIMAL_PRECISION must be an integer"):
            get_config()

    def test_unknown_log_level(self, clean_env):
        clean_env.setenv("STREAMTA_LOG_LEVEL", "LOUD")
        with pytest.raises(ValueError, match="STREAMTA_LOG_LEVEL"):
            get_config()

    def test_log_level_case_insensitive(self):
        assert LogConfig(level="debug").level == "debug"

    def test_negative_display_places(self):
        with pytest.raises(ValueError, match="STREAMTA_DISPLAY_PLACES"):
            NumericConfig(display_places=-1)

    def test_apply_decimal_context(self, clean_env):
        clean_env.setenv("STREAMTA_DECIMAL_PRECISION", "12")
        with decimal.localcontext():
            get_config().apply_decimal_context()
            assert decimal.getcontext().prec == 12
            assert Decimal(1) / Decimal(3) == Decimal("0.333333333333")


class TestDecimalHelpers:

    @pytest.mark.parametrize("value,expected", [
        (Decimal("1.10"), Decimal("1.10")),
        (3, Decimal(3)),
        (0.1, Decimal("0.1")),
        ("10.57", Decimal("10.57")),
    ])
    def test_to_decimal(self, value, expected):
        assert to_decimal(value) == expected

    @pytest.mark.parametrize("value", [True, None, [1], object()])
    def test_to_decimal_rejects(self, value):
        with pytest.raises(TypeError):
            to_decimal(value)

    @pytest.mark.parametrize("value", ["abc", "", "1,5"])
    def test_to_decimal_rejects_non_numeric_string(self, value):
        with pytest.raises(ValueError, match="Not a number"):
            to_decimal(value)

    def test_max3_min3(self):
        assert max3(Decimal(1), Decimal(3), Decimal(2)) == Decimal(3)
        assert min3(Decimal(1), Decimal(3), Decimal(-2)) == Decimal(-2)

    def test_round_places_half_away_from_zero(self):
        assert round_places(Decimal("2.5"), 0) == Decimal(3)
        assert round_places(Decimal("-2.5"), 0) == Decimal(-3)
        assert round_places(Decimal("0.0045"), 3) == Decimal("0.005")

    def test_decimal_context_is_local(self):
        before = decimal.getcontext().prec
        with decimal_context(5):
            assert Decimal(2) / Decimal(3) == Decimal("0.66667")
        assert decimal.getcontext().prec == before


class TestLogger:

    def test_get_logger_is_shared(self):
        assert get_logger() is get_logger()

    def test_setup_logger_replaces_instance(self):
        first = get_logger()
        second = setup_logger(log_level="DEBUG")
        assert first is not second
        assert logging.getLogger("streamta").level == logging.DEBUG

    def test_console_only_by_default(self):
        setup_logger()
        handlers = logging.getLogger("streamta").handlers
        assert len(handlers) == 1
        assert not isinstance(handlers[0], logging.FileHandler)

    def test_file_output(self, tmp_path):
        log_dir = tmp_path / "logs"
        logger = setup_logger(log_dir=str(log_dir), log_level="DEBUG")
        logger.indicator("CREATED", "EMA(9)", type="ema")
        logger.info("Processed 3 rows")

        files = list(log_dir.glob("streamta_*.log"))
        assert len(files) == 1
        text = files[0].read_text(encoding="utf-8")
        assert "[CREATED] | indicator=EMA(9) | type=ema" in text
        assert "Processed 3 rows" in text
        assert Colors.RESET not in text

    def test_colored_formatter_leaves_record_untouched(self):
        record = logging.LogRecord("streamta", logging.ERROR, __file__, 1, "boom %s", ("x",), None)
        out = ColoredFormatter("%(levelname)s %(message)s").format(record)
        assert Colors.RED in out
        assert "boom x" in out
        assert record.levelname == "ERROR"
        assert record.msg == "boom %s"
