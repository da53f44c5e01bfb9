"""
Unified CLI Error Handling
==========================

Provides consistent error reporting and exit codes for the CLI tools.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Standard exit codes for CLI tools."""
    SUCCESS = 0
    BUILD_ERROR = 1      # Lexical, syntax or semantic error in the program
    INVALID_ARGS = 2     # Unreadable input or unwritable output
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Unified exception handler for the CLI tools.

    Translation errors are printed as a single diagnostic line on standard
    output (with source context in verbose mode). Everything else goes to
    standard error.

    Args:
        error: The exception that was raised
        verbose: If True, show source context and internal tracebacks

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    from minibasic.translator.errors import TranslatorError
    from minibasic.errors import OutputWriteError

    if isinstance(error, TranslatorError):
        # Already formatted with location and "error:" prefix
        click.echo(error.describe() if verbose else str(error))
        sys.exit(ExitCode.BUILD_ERROR)

    elif isinstance(error, OutputWriteError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, (FileNotFoundError, PermissionError, UnicodeDecodeError)):
        # Missing or unreadable input files
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif type(error) is LookupError:
        # Unknown codec name from MINIBASIC_ENCODING
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        # Unexpected internal error
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
