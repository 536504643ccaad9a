"""Command-line argument parsing for git-worktrees."""

import argparse
from typing import Optional

from git_worktrees.__version__ import __version__
from git_worktrees.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, STATUS_FILTERS


def _add_root_option(parser: argparse.ArgumentParser, default=None) -> None:
    parser.add_argument(
        "--worktrees-root",
        metavar="DIR",
        default=default,
        help="Directory that holds the worktrees (default: $WORKTREES_ROOT, config file, then ~/.worktrees)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all sub-commands."""
    parser = argparse.ArgumentParser(
        prog="worktrees",
        description="Create, list, switch between and safely remove per-feature git worktrees",
        epilog="Feature names look like 001-login-page: three digits, a dash, then lowercase letters, digits and dashes.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--version", action="version", version=f"git-worktrees {__version__}")
    parser.add_argument("--config", metavar="FILE", help="Config file (default: ~/.worktrees/config.yml)")
    _add_root_option(parser)

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    # Sub-commands repeat --worktrees-root so it can follow the command name;
    # SUPPRESS keeps an absent flag from hiding the global one
    create = subparsers.add_parser("create", aliases=["c"], help="Create a feature worktree")
    create.add_argument("name", help="Feature name, e.g. 001-login-page")
    create.add_argument("base", nargs="?", help="Base ref to branch from (default: the repository default branch)")
    create.add_argument(
        "--sibling",
        action="store_true",
        help="If the branch is checked out elsewhere, create a suffixed branch (NAME-2, NAME-3, ...)",
    )
    create.add_argument("--switch", action="store_true", help="Switch to the new worktree after creating it")
    _add_root_option(create, default=argparse.SUPPRESS)

    list_cmd = subparsers.add_parser("list", aliases=["ls"], help="List feature worktrees")
    list_cmd.add_argument("--filter-name", metavar="TEXT", help="Only names containing TEXT (case-insensitive)")
    list_cmd.add_argument("--filter-base", metavar="REF", help="Only worktrees based on REF")
    list_cmd.add_argument(
        "--filter-status",
        metavar="STATUS",
        help=f"Only worktrees in STATUS: {', '.join(STATUS_FILTERS)}",
    )
    list_cmd.add_argument("--page", default=None, help="Page number (default: 1)")
    list_cmd.add_argument(
        "--page-size",
        default=None,
        help=f"Worktrees per page, 1-{MAX_PAGE_SIZE} (default: {DEFAULT_PAGE_SIZE})",
    )
    list_cmd.add_argument(
        "--format", dest="output_format", choices=["text", "json", "csv"], default="text", help="Output format"
    )
    list_cmd.add_argument(
        "--status",
        action="store_true",
        help="Resolve and show each worktree's status (json and csv always include it)",
    )
    _add_root_option(list_cmd, default=argparse.SUPPRESS)

    switch = subparsers.add_parser("switch", aliases=["sw"], help="Switch to a feature worktree")
    switch.add_argument("name", help="Worktree to switch to")
    switch.add_argument(
        "-p", "--path-only", action="store_true", help="Print only the worktree path, for cd $(worktrees sw -p NAME)"
    )
    _add_root_option(switch, default=argparse.SUPPRESS)

    remove = subparsers.add_parser("remove", aliases=["rm"], help="Remove a feature worktree")
    remove.add_argument("name", help="Worktree to remove")
    remove.add_argument("--force", action="store_true", help="Discard untracked files")
    remove.add_argument(
        "--delete-branch", action="store_true", help="Also delete the branch if it is merged into the base"
    )
    remove.add_argument(
        "--merge-base", metavar="REF", help="Base for the merged check (default: the repository default branch)"
    )
    _add_root_option(remove, default=argparse.SUPPRESS)

    status = subparsers.add_parser("status", aliases=["st"], help="Show the current worktree and repository")
    status.add_argument(
        "--format", dest="output_format", choices=["text", "json"], default="text", help="Output format"
    )
    _add_root_option(status, default=argparse.SUPPRESS)

    return parser


# Aliases map back to the canonical command name
COMMAND_ALIASES = {"c": "create", "ls": "list", "sw": "switch", "rm": "remove", "st": "status"}


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    args = build_parser().parse_args(argv)
    args.command = COMMAND_ALIASES.get(args.command, args.command)
    return args
