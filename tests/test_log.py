"""Tests for logging setup."""
import io
import json
import logging

from parisim.log import init_logger


class TestInitLogger:
    """Tests for init_logger."""

    def test_text_output(self):
        """Text format is LEVEL::name: message."""
        stream = io.StringIO()
        logger = init_logger(logging.INFO, logger_name="parisim.test_text", stream=stream)
        logger.info("hello")
        assert stream.getvalue().strip() == "INFO::parisim.test_text: hello"

    def test_json_output(self):
        """JSON format renames message and level fields."""
        stream = io.StringIO()
        logger = init_logger(logging.INFO, logger_name="parisim.test_json", json=True, stream=stream)
        logger.warning("careful")
        record = json.loads(stream.getvalue().strip())
        assert record["msg"] == "careful"
        assert record["level"] == "WARNING"

    def test_no_duplicate_handlers(self):
        """Repeated setup replaces the handler."""
        stream = io.StringIO()
        init_logger(logger_name="parisim.test_dup", stream=io.StringIO())
        logger = init_logger(logger_name="parisim.test_dup", stream=stream)
        logger.info("once")
        assert stream.getvalue().count("once") == 1
        assert len(logger.handlers) == 1
