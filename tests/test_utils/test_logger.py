from __future__ import annotations

import io
import logging
from typing import Generator

import pytest

import depsolver.utils.logger as logger_module
from depsolver.utils.logger import (
    ColoredFormatter,
    disable_logging,
    get_logger,
    is_logging_configured,
    level_for_verbosity,
    setup_logging,
)


@pytest.fixture(autouse=True)
def clean_logger_state() -> Generator[None, None, None]:
    """Reset the ``depsolver`` logger around each test."""
    root = logging.getLogger("depsolver")
    root.handlers.clear()
    root.setLevel(logging.NOTSET)
    logger_module._logging_configured = False
    yield
    root.handlers.clear()
    root.setLevel(logging.NOTSET)
    root.propagate = True
    logger_module._logging_configured = False


def _record(level: int = logging.WARNING, msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord("depsolver.test", level, __file__, 1, msg, None, None)


@pytest.mark.unit
class TestColoredFormatter:
    """Tests for ColoredFormatter."""

    def test_plain_when_color_disabled(self) -> None:
        formatter = ColoredFormatter("%(levelname)s: %(message)s", use_color=False)

        assert formatter.format(_record()) == "WARNING: hello"

    def test_tints_level_on_color_terminal(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(logger_module, "_stderr_supports_color", lambda: True)
        formatter = ColoredFormatter("%(levelname)s: %(message)s")

        output = formatter.format(_record(logging.ERROR))

        assert output == "\033[31mERROR\033[0m: hello"

    def test_original_record_keeps_plain_level(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Other handlers must not see the escape codes."""
        monkeypatch.setattr(logger_module, "_stderr_supports_color", lambda: True)
        record = _record(logging.INFO)

        ColoredFormatter("%(levelname)s").format(record)

        assert record.levelname == "INFO"

    def test_no_color_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "1")

        assert logger_module._stderr_supports_color() is False


@pytest.mark.unit
class TestLevelForVerbosity:
    """Tests for level_for_verbosity."""

    @pytest.mark.parametrize(
        "verbose, level",
        [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (5, logging.DEBUG)],
    )
    def test_mapping(self, verbose: int, level: int) -> None:
        assert level_for_verbosity(verbose) == level


@pytest.mark.unit
class TestSetupLogging:
    """Tests for setup_logging and friends."""

    def test_writes_to_stream(self) -> None:
        stream = io.StringIO()
        setup_logging(level=logging.INFO, stream=stream)

        get_logger("core.search").info("Search %s", "solved")

        assert stream.getvalue() == "INFO: Search solved\n"
        assert is_logging_configured()

    def test_level_filters_messages(self) -> None:
        stream = io.StringIO()
        setup_logging(level=logging.WARNING, stream=stream)

        get_logger("core.search").info("hidden")
        get_logger("core.search").warning("shown")

        assert "hidden" not in stream.getvalue()
        assert "shown" in stream.getvalue()

    def test_verbose_format_includes_logger_name(self) -> None:
        stream = io.StringIO()
        setup_logging(level=logging.DEBUG, verbose=True, stream=stream)

        get_logger("loader").debug("loaded")

        assert " - depsolver.loader - DEBUG - loaded" in stream.getvalue()

    def test_repeated_setup_replaces_handler(self) -> None:
        setup_logging(stream=io.StringIO())
        setup_logging(stream=io.StringIO())

        assert len(logging.getLogger("depsolver").handlers) == 1

    def test_disable_logging(self) -> None:
        stream = io.StringIO()
        setup_logging(stream=stream)

        disable_logging()
        get_logger().error("dropped")

        assert stream.getvalue() == ""
        assert not is_logging_configured()


@pytest.mark.unit
class TestGetLogger:
    """Tests for get_logger."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            (None, "depsolver"),
            ("depsolver", "depsolver"),
            ("cli", "depsolver.cli"),
            ("depsolver.core.search", "depsolver.core.search"),
        ],
    )
    def test_names_are_qualified(self, name: str, expected: str) -> None:
        assert get_logger(name).name == expected

    def test_library_use_is_silent(self) -> None:
        """Without setup_logging the namespace only has a NullHandler."""
        get_logger("search")

        handlers = logging.getLogger("depsolver").handlers
        assert [type(h) for h in handlers] == [logging.NullHandler]
