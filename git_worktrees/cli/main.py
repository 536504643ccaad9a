"""Entry point for the worktrees command"""

import argparse
import os
import sys
from typing import Callable, Optional

from git_worktrees.cli.args import parse_args
from git_worktrees.config import Config, resolve_worktrees_root
from git_worktrees.constants import WORKTREES_ROOT_ENV
from git_worktrees.core import WorktreeLifecycleManager
from git_worktrees.exceptions import ErrorKind, WorktreesError
from git_worktrees.services.display_service import DisplayService
from git_worktrees.services.git import GitOperations
from git_worktrees.services.list_query_service import ListQueryEngine
from git_worktrees.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID = 2
EXIT_REFUSED = 3
EXIT_NOT_IN_WORKTREE = 4
EXIT_INTERRUPTED = 130

EXIT_CODES = {
    ErrorKind.INVALID_FORMAT: EXIT_INVALID,
    ErrorKind.RESERVED: EXIT_INVALID,
    ErrorKind.ALREADY_EXISTS: EXIT_INVALID,
    ErrorKind.INVALID_ARGUMENT: EXIT_INVALID,
    ErrorKind.INVALID_CONFIG: EXIT_INVALID,
    ErrorKind.NOT_FOUND: EXIT_INVALID,
    ErrorKind.NOT_A_REPOSITORY: EXIT_REFUSED,
    ErrorKind.NO_DEFAULT_BRANCH: EXIT_REFUSED,
    ErrorKind.REF_NOT_FOUND: EXIT_REFUSED,
    ErrorKind.FETCH_FAILED: EXIT_REFUSED,
    ErrorKind.CONFLICT: EXIT_REFUSED,
    ErrorKind.UNSAFE: EXIT_REFUSED,
    ErrorKind.VCS: EXIT_REFUSED,
    ErrorKind.FILESYSTEM: EXIT_REFUSED,
}


def exit_code_for(error: WorktreesError) -> int:
    """Map an error kind to the process exit code."""
    return EXIT_CODES.get(error.kind, EXIT_ERROR)


def _cmd_create(manager: WorktreeLifecycleManager, args: argparse.Namespace, display: DisplayService) -> int:
    record = manager.create(args.name, args.base, sibling=args.sibling)
    display.display_created(record)
    if args.switch:
        display.display_switch(manager.switch_to(record.name))
    return EXIT_OK


def _cmd_list(manager: WorktreeLifecycleManager, args: argparse.Namespace, display: DisplayService) -> int:
    query = ListQueryEngine.build(
        filter_name=args.filter_name,
        filter_base=args.filter_base,
        page=args.page,
        page_size=args.page_size,
        filter_status=args.filter_status,
    )
    # Machine-readable output always carries status
    with_status = args.status or args.output_format != "text"
    page = manager.list(query, with_status=with_status)
    display.display_page(page, args.output_format, show_status=args.status)
    return EXIT_OK


def _cmd_switch(manager: WorktreeLifecycleManager, args: argparse.Namespace, display: DisplayService) -> int:
    result = manager.switch_to(args.name)
    display.display_switch(result, path_only=args.path_only)
    return EXIT_OK


def _cmd_remove(manager: WorktreeLifecycleManager, args: argparse.Namespace, display: DisplayService) -> int:
    result = manager.remove(
        args.name,
        force=args.force,
        delete_branch=args.delete_branch,
        merge_base=args.merge_base,
    )
    display.display_removal(result)
    return EXIT_OK


def _cmd_status(manager: WorktreeLifecycleManager, args: argparse.Namespace, display: DisplayService) -> int:
    current = manager.current()
    display.display_status(manager.repository, manager.worktrees_root, current, args.output_format)
    return EXIT_OK if current is not None else EXIT_NOT_IN_WORKTREE


COMMANDS: dict[str, Callable[[WorktreeLifecycleManager, argparse.Namespace, DisplayService], int]] = {
    "create": _cmd_create,
    "list": _cmd_list,
    "switch": _cmd_switch,
    "remove": _cmd_remove,
    "status": _cmd_status,
}


def main(argv: Optional[list[str]] = None, display: Optional[DisplayService] = None) -> int:
    """Main entry point for the application.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])
        display: Output service, injectable for tests

    Returns:
        Process exit code
    """
    args = parse_args(argv)

    # Setup logging before anything talks to git
    setup_logging(verbose=args.verbose, debug=args.debug)
    display = display or DisplayService(verbose=args.verbose)

    try:
        config = Config.load(args.config)
        if (config.verbose and not args.verbose) or (config.debug and not args.debug):
            setup_logging(verbose=args.verbose or config.verbose, debug=args.debug or config.debug)
            display.verbose = display.verbose or config.verbose

        worktrees_root = resolve_worktrees_root(
            args.worktrees_root, os.environ.get(WORKTREES_ROOT_ENV), config
        )
        # The only read of the process working directory
        current_path = os.getcwd()
        logger.debug(f"Command {args.command} from {current_path}, worktrees root {worktrees_root}")

        manager = WorktreeLifecycleManager(
            GitOperations(current_path),
            worktrees_root,
            current_path,
            default_base=config.default_base,
        )
        return COMMANDS[args.command](manager, args, display)
    except KeyboardInterrupt:
        display.warn("Operation cancelled by user")
        return EXIT_INTERRUPTED
    except WorktreesError as e:
        logger.debug(f"{e.kind.value}: {e}")
        display.display_error(e)
        return exit_code_for(e)
    except Exception as e:
        display.display_error(e)
        if args.debug:
            display.err_console.print_exception()
        return EXIT_ERROR


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
