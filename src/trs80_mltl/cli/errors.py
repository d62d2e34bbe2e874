"""
Unified CLI Error Handling
==========================

Provides consistent error reporting and exit codes for the command-line tool.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Standard exit codes for CLI tools."""
    SUCCESS = 0
    PACK_ERROR = 1       # Packing, I/O, path conflict or entry name error
    INVALID_ARGS = 2     # Invalid arguments or missing files
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception and exit with the matching exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    from trs80_mltl.errors import ArgumentParseError, TapeError

    if isinstance(error, ArgumentParseError):
        click.echo(f"Error: invalid address {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, TapeError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.PACK_ERROR)

    elif isinstance(error, click.BadParameter):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
