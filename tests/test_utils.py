"""
Unit tests for utilities.
"""

import logging

import pytest

from vnplayer.utils.logger import ColoredFormatter, get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


class TestLogger:
    """Test the logging utilities"""

    def test_get_logger(self):
        """Test that get_logger returns a logger instance"""
        logger = get_logger("test")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "test"

    def test_setup_logging(self):
        """Test that setup_logging configures the root logger"""
        setup_logging(level="WARNING", enable_colors=False)

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_setup_logging_with_file(self, tmp_path):
        """Test that a log file handler is added and written to"""
        log_file = tmp_path / "logs" / "player.log"
        setup_logging(level="INFO", log_file=str(log_file), enable_colors=False)

        get_logger("test_file").info("scene data loaded")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert len(logging.getLogger().handlers) == 2
        assert "scene data loaded" in log_file.read_text()

    def test_colored_formatter_leaves_record_untouched(self):
        """Test that coloring does not leak into other handlers"""
        record = logging.LogRecord("vnplayer", logging.ERROR, __file__, 1, "boom", None, None)
        formatted = ColoredFormatter("%(levelname)s %(name)s %(message)s").format(record)

        assert "\033[31mERROR" in formatted
        assert record.levelname == "ERROR"
        assert record.name == "vnplayer"
