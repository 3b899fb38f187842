"""Tests for logging utilities."""

import logging
from io import StringIO

from prompt_engine.logging import disable, enable, get_logger, set_level, setup_logging


class TestLogging:
    """Tests for the package logger helpers."""

    def test_get_logger_prefixes_package(self) -> None:
        """Child loggers live under the package root."""
        assert get_logger("tui.loop").name == "prompt_engine.tui.loop"
        assert get_logger("prompt_engine.config").name == "prompt_engine.config"

    def test_setup_logging_to_stream(self) -> None:
        """Records from child loggers reach the configured stream."""
        stream = StringIO()
        setup_logging("DEBUG", format="%(name)s %(message)s", stream=stream)

        get_logger("prompts.selection").debug("dropped %s", "x")

        assert "prompt_engine.prompts.selection dropped x" in stream.getvalue()

    def test_set_level_filters(self) -> None:
        """Records below the level are dropped."""
        stream = StringIO()
        setup_logging("DEBUG", stream=stream)
        set_level("WARNING")

        get_logger("tui.loop").info("hidden")

        assert stream.getvalue() == ""

    def test_disable_enable(self) -> None:
        """disable() silences the package until enable()."""
        stream = StringIO()
        setup_logging("DEBUG", format="%(message)s", stream=stream)

        disable()
        logging.getLogger("prompt_engine").warning("silent")
        enable()
        logging.getLogger("prompt_engine").warning("loud")

        assert stream.getvalue() == "loud\n"

    def test_file_handler(self, tmp_path) -> None:
        """A file path adds a file handler."""
        log_file = tmp_path / "prompts.log"
        setup_logging("INFO", format="%(message)s", stream=StringIO(), file=str(log_file))

        get_logger("cli").info("written")
        for handler in logging.getLogger("prompt_engine").handlers:
            handler.flush()

        assert log_file.read_text(encoding="utf-8") == "written\n"
