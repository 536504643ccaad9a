"""Tests for logging setup"""
import logging
from unittest.mock import patch

import pytest

from git_worktrees.utils.logging import ColoredFormatter, get_logger, setup_logging


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way the test found it."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def _record(level: int) -> logging.LogRecord:
    return logging.LogRecord("worktree_manager", level, __file__, 1, "worktree busy", None, None)


class TestColoredFormatter:
    """Test level highlighting."""

    def test_highlights_warnings_on_terminal(self):
        formatter = ColoredFormatter(fmt="[%(name)s] %(message)s")
        with patch("git_worktrees.utils.logging.sys") as mock_sys:
            mock_sys.stderr.isatty.return_value = True
            text = formatter.format(_record(logging.WARNING))
        assert text == "\033[33m[worktree_manager] worktree busy\033[0m"

    def test_info_is_plain(self):
        formatter = ColoredFormatter(fmt="[%(name)s] %(message)s")
        with patch("git_worktrees.utils.logging.sys") as mock_sys:
            mock_sys.stderr.isatty.return_value = True
            assert formatter.format(_record(logging.INFO)) == "[worktree_manager] worktree busy"

    def test_plain_when_not_a_terminal(self):
        formatter = ColoredFormatter(fmt="%(levelname)s %(message)s")
        record = _record(logging.ERROR)
        with patch("git_worktrees.utils.logging.sys") as mock_sys:
            mock_sys.stderr.isatty.return_value = False
            assert formatter.format(record) == "ERROR worktree busy"
        assert record.levelname == "ERROR"


class TestSetupLogging:
    """Test handler and level configuration."""

    def test_levels(self, restore_root_logger, tmp_path):
        setup_logging()
        assert restore_root_logger.level == logging.WARNING
        setup_logging(verbose=True)
        assert restore_root_logger.level == logging.INFO
        setup_logging(debug=True, log_dir=tmp_path)
        assert restore_root_logger.level == logging.DEBUG

    def test_debug_writes_log_file(self, restore_root_logger, tmp_path):
        setup_logging(debug=True, log_dir=tmp_path / "logs")
        get_logger("git_worktrees.core.worktree_manager").debug("creating 001-a")
        for handler in restore_root_logger.handlers:
            handler.flush()
        content = (tmp_path / "logs" / "worktrees.log").read_text()
        assert "core.worktree_manager - DEBUG - creating 001-a" in content

    def test_handlers_replaced_not_stacked(self, restore_root_logger):
        setup_logging()
        setup_logging()
        assert len(restore_root_logger.handlers) == 1


def test_get_logger_strips_package_prefix():
    assert get_logger("git_worktrees.services.status_service").name == "status_service"
    assert get_logger("git_worktrees.cli.main").name == "cli.main"
