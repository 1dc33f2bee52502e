"""Diagnostics and logging setup for CLI operations.

This module provides:
- handle_error: Formatted error messages with optional context and stack traces
- show_details: The context and stack trace part on its own
- configure_logging: Level and destination for the package's log records

Diagnostics go to stderr with the program name in front, the way
makedepend-style tools report problems, so stdout stays free for
``--dry-run`` output.
"""

import logging
import sys
import traceback
from pathlib import Path
from typing import TextIO

from gccmakedepend.core.options import PROG_NAME

LOG_FORMAT = "%(levelname)s: %(name)s: %(message)s"
LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def report(message: str, stream: TextIO | None = None) -> None:
    """Print a one-line diagnostic prefixed with the program name."""
    print(f"{PROG_NAME}: {message}", file=stream or sys.stderr)


def handle_error(error: Exception, verbose: bool = False, stream: TextIO | None = None) -> None:
    """Format and display error message with context.

    Displays the error message on stderr. Errors carrying captured compiler
    output (CompilerError after a failed run) are followed by that output
    verbatim. When verbose mode is enabled, the context fields of
    MakedependError exceptions and the full stack trace are shown as well.

    Args:
        error: Exception to display
        verbose: Whether to show context and stack trace (default False)
        stream: Output stream (default sys.stderr)

    Example:
        try:
            # ... operation ...
        except MakedependError as e:
            handle_error(e, verbose=True)
    """
    stream = stream or sys.stderr
    message = getattr(error, "message", None) or str(error)
    output = getattr(error, "output", "")

    if output:
        report(f"{message}:", stream)
        stream.write(output)
        if not output.endswith("\n"):
            stream.write("\n")
    else:
        report(message, stream)

    if verbose:
        show_details(error, stream)


def show_details(error: Exception, stream: TextIO | None = None) -> None:
    """Print the context fields and stack trace of an error."""
    stream = stream or sys.stderr
    context = getattr(error, "context", None)
    if context:
        print("Context:", file=stream)
        for key, value in context.items():
            print(f"  {key}: {value}", file=stream)

    print("\nStack trace:", file=stream)
    traceback.print_exception(type(error), error, error.__traceback__, file=stream)


def configure_logging(level: str = "warning", log_file: Path | None = None) -> logging.Logger:
    """Configure the ``gccmakedepend`` logger.

    Replaces any handler installed by an earlier call, so the function can be
    called once per command invocation.

    Args:
        level: Log level name (debug, info, warning, error), case-insensitive
        log_file: Write log records to this file instead of stderr

    Returns:
        The configured package logger

    Raises:
        ValueError: If the level name is not recognised
        OSError: If the log file cannot be opened
    """
    try:
        numeric_level = LOG_LEVELS[level.lower()]
    except KeyError:
        raise ValueError(
            f"Invalid log level {level!r}; expected one of {', '.join(LOG_LEVELS)}"
        ) from None

    logger = logging.getLogger("gccmakedepend")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_file is not None:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(numeric_level)
    return logger
