"""Shared constants for git-worktrees."""

import re
from dataclasses import dataclass
from typing import List


# Feature naming convention: three digits, a dash, then a kebab-case slug
NAME_PATTERN = re.compile(r"^[0-9]{3}-[a-z0-9-]{1,40}$")
RESERVED_NAMES = frozenset({"main", "master"})

# Worktrees root resolution
DEFAULT_WORKTREES_ROOT = "~/.worktrees"
WORKTREES_ROOT_ENV = "WORKTREES_ROOT"
DEFAULT_CONFIG_PATH = "~/.worktrees/config.yml"

# Git config key used to remember the base a worktree branch was created from
BASE_CONFIG_KEY = "worktreesBase"
UNKNOWN_BASE = "unknown"

# List pagination
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100

# Values accepted by the list status filter
STATUS_FILTERS = ("clean", "dirty", "active")

# First suffix tried when a sibling branch is needed (name-2, name-3, ...)
SIBLING_START = 2


@dataclass
class ColumnDefinition:
    """Definition of a table column."""

    key: str
    label: str
    width: int = 0  # 0 means auto-width


COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("active", "", 1),
    ColumnDefinition("name", "Worktree", 30),
    ColumnDefinition("branch", "Branch", 30),
    ColumnDefinition("base", "Base", 15),
    ColumnDefinition("status", "Status", 14),
    ColumnDefinition("path", "Path"),
]

CSV_FIELDS = ["name", "branch", "base_ref", "path", "active", "status"]


# Symbol constants
SYMBOL_ACTIVE = "*"
SYMBOL_INACTIVE = " "
SYMBOL_DIRTY = "M"
SYMBOL_UNTRACKED = "U"
SYMBOL_UNPUSHED = "↑"
SYMBOL_NO_UPSTREAM = "✗"
SYMBOL_DETACHED = "⊘"
SYMBOL_OPERATION = "⚠"


LEGEND_TEXT = """
Legend:
* = Active worktree       M = Tracked changes
U = Untracked files       ↑ = Unpushed commits
✗ = No upstream           ⊘ = Detached HEAD
⚠ = Operation in progress (merge/rebase/cherry-pick/bisect)
"""
