"""Command-line interface for git-worktrees."""

from .args import build_parser, parse_args
from .main import main, run

__all__ = ["build_parser", "parse_args", "main", "run"]
