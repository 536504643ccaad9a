"""Logging configuration for git-worktrees"""
import logging
import sys
from pathlib import Path
from typing import Optional


class ColoredFormatter(logging.Formatter):
    """Highlights warnings and errors when stderr is a terminal."""

    LEVEL_COLORS = {
        logging.WARNING: '\033[33m',
        logging.ERROR: '\033[31m',
        logging.CRITICAL: '\033[31m',
    }
    RESET = '\033[0m'

    def format(self, record):
        text = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelno)
        if color and sys.stderr.isatty():
            return f"{color}{text}{self.RESET}"
        return text


def setup_logging(verbose: bool = False, debug: bool = False, log_dir: Optional[Path] = None) -> None:
    """
    Configure logging for the application.

    Args:
        verbose: If True, show INFO level messages
        debug: If True, show DEBUG level messages and also write a log file
        log_dir: Directory for the debug log file (defaults to ~/.worktrees/logs)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if debug:
        log_dir = log_dir or Path.home() / '.worktrees' / 'logs'
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / 'worktrees.log', mode='w')  # Overwrite each run
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)

    if debug:
        formatter = ColoredFormatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    else:
        formatter = ColoredFormatter(fmt='[%(name)s] %(message)s')

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified module.

    Args:
        name: Name of the module (typically __name__)

    Returns:
        Logger instance
    """
    # Strip the package prefix for cleaner log names
    if name.startswith('git_worktrees.'):
        name = name.replace('git_worktrees.', '', 1)
    if name.startswith('services.'):
        name = name.replace('services.', '', 1)

    return logging.getLogger(name)
