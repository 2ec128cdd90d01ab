"""Tests for logging setup: verbosity, rotating file and callback sink."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

import pytest

from themed import Theme, ThemeConfiguration
from themed.environment.log import (
    LOG_BACKUP_COUNT,
    LOGGER_NAME,
    MAX_LOG_BYTES,
    NOTICE,
    CallbackHandler,
    VerbosityFilter,
    configure_logging,
    notice,
    threshold_for,
)


def _record(level: int) -> logging.LogRecord:
    return logging.LogRecord("themed.test", level, __file__, 1, "msg", None, None)


class TestVerbosity:
    @pytest.mark.parametrize(
        ("debug_level", "threshold"),
        [(0, logging.ERROR), (1, logging.WARNING), (2, NOTICE), (3, logging.INFO)],
    )
    def test_threshold_for(self, debug_level: int, threshold: int) -> None:
        assert threshold_for(debug_level) == threshold

    def test_notice_level_name(self) -> None:
        assert logging.getLevelName(NOTICE) == "NOTICE"

    def test_filter(self) -> None:
        verbosity = VerbosityFilter(1)
        assert verbosity.filter(_record(logging.ERROR))
        assert verbosity.filter(_record(logging.WARNING))
        assert not verbosity.filter(_record(NOTICE))


class TestConfigureLogging:
    def test_silenced_without_debug(self, config: ThemeConfiguration) -> None:
        logger = configure_logging(config)
        assert not logger.isEnabledFor(logging.CRITICAL)
        assert not any(getattr(h, "_themed", False) for h in logger.handlers)

    def test_rotating_file_in_debug(self, config: ThemeConfiguration) -> None:
        logger = configure_logging(config.with_overrides(debug=True, debug_level=2))
        (handler,) = [h for h in logger.handlers if getattr(h, "_themed", False)]
        assert isinstance(handler, logging.handlers.RotatingFileHandler)
        assert handler.maxBytes == MAX_LOG_BYTES == 1024 * 1024
        assert handler.backupCount == LOG_BACKUP_COUNT == 5
        assert logger.isEnabledFor(NOTICE)
        assert not logger.isEnabledFor(logging.INFO)

    def test_file_format(self, config: ThemeConfiguration) -> None:
        debug = config.with_overrides(debug=True, debug_level=3)
        logger = configure_logging(debug)
        notice(logging.getLogger("themed.test"), "hello %s", "world")
        for handler in logger.handlers:
            handler.flush()
        line = debug.debug_log.read_text().strip()
        assert line.endswith("[NOTICE] hello world")
        assert line[4] == "-" and line[10] == " "

    def test_reconfigure_replaces_handler(self, config: ThemeConfiguration) -> None:
        debug = config.with_overrides(debug=True)
        configure_logging(debug)
        logger = configure_logging(debug)
        assert len([h for h in logger.handlers if getattr(h, "_themed", False)]) == 1

    def test_callback_receives_messages_without_debug(self, config: ThemeConfiguration) -> None:
        messages: list[str] = []
        configure_logging(config, messages.append)
        logging.getLogger("themed.assets").info("queued %d", 3)
        assert messages == ["queued 3"]

    def test_callback_errors_do_not_propagate(self, config: ThemeConfiguration) -> None:
        def broken(message: str) -> None:
            raise RuntimeError(message)

        handler = CallbackHandler(broken)
        handler.handleError = lambda record: None  # type: ignore[method-assign]
        handler.emit(_record(logging.ERROR))


class TestThemeCallbacks:
    def test_logger_callback_on_theme(self, config: ThemeConfiguration) -> None:
        messages: list[str] = []
        Theme(config, logger_callback=messages.append)
        assert any(m.startswith("Theme ready: ") for m in messages)

    def test_debug_theme_writes_log_file(self, debug_config: ThemeConfiguration) -> None:
        theme = Theme(debug_config)
        theme.make("buttons/button").text("x").render()
        for handler in logging.getLogger(LOGGER_NAME).handlers:
            handler.flush()
        assert "Loading scripts for component: buttons/button" in debug_config.debug_log.read_text()

    def test_latest_theme_owns_log_destination(
        self, config: ThemeConfiguration, debug_config: ThemeConfiguration
    ) -> None:
        Theme(debug_config)
        Theme(config)
        logger = logging.getLogger(LOGGER_NAME)
        assert not any(getattr(h, "_themed", False) for h in logger.handlers)
        assert not logger.isEnabledFor(logging.CRITICAL)

    def test_log_directory_created(self, config: ThemeConfiguration, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "dir" / "themed.log"
        configure_logging(config.with_overrides(debug=True, debug_log=target))
        notice(logging.getLogger("themed.test"), "x")
        assert target.parent.is_dir()
