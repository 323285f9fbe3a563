"""Unit tests for logging setup."""

import io
import logging

from ai_gateway_launcher.utils import configure_logging


class TestConfigureLogging:
    def test_writes_to_given_stream(self):
        stream = io.StringIO()
        configure_logging("DEBUG", stream=stream)

        logging.getLogger("ai_gateway_launcher.runtime.resolver").debug("resolved")

        assert stream.getvalue() == "[ai_gateway_launcher.runtime.resolver] DEBUG: resolved\n"

    def test_level_filters(self):
        stream = io.StringIO()
        configure_logging("ERROR", stream=stream)

        logging.getLogger("ai_gateway_launcher.cli").warning("hidden")

        assert stream.getvalue() == ""

    def test_repeated_calls_do_not_duplicate(self):
        stream = io.StringIO()
        configure_logging("INFO", stream=stream)
        logger = configure_logging("INFO", stream=stream)

        logger.info("once")

        assert stream.getvalue().count("once") == 1
        assert len(logger.handlers) == 1

    def test_does_not_touch_stdout(self, capsys):
        configure_logging("DEBUG")

        logging.getLogger("ai_gateway_launcher").debug("diagnostic")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "diagnostic" in captured.err
