"""Command-line option scanning in the makedepend tradition.

makedepend-style tools take their own options only at the front of the
argument list, each as a pair of tokens, and hand everything from the first
unrecognised token onwards to the compiler untouched:

    gcc-makedepend [-f Makefile] [-gcc gcc-command] {-p prefix} [gcc options] {source}

This is why the options are not declared to the CLI framework: a compiler
flag such as ``-fPIC`` or ``-pthread`` must never be mistaken for ``-f`` or
``-p``.
"""

import logging
import os
import shlex
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from gccmakedepend.core.exceptions import UsageError

logger = logging.getLogger(__name__)

PROG_NAME = "gcc-makedepend"
USAGE = (
    f"Usage: {PROG_NAME} [-f Makefile] [-gcc gcc-command] {{-p prefix}} "
    "[gcc or g++ options] {source}"
)
DEFAULT_COMPILER = "gcc"


@dataclass
class Invocation:
    """Parsed command line.

    Attributes:
        makefile: Makefile given with ``-f`` (None to search the directory)
        compiler: Compiler command from ``-gcc`` split into argv form, or None
                  when the option was not given
        prefixes: Prefixes from ``-p`` in command-line order
        arguments: Passthrough compiler options and source names
    """

    makefile: Path | None = None
    compiler: list[str] | None = None
    prefixes: list[str] = field(default_factory=list)
    arguments: list[str] = field(default_factory=list)


def split_command(command: str) -> list[str]:
    """Split a compiler command such as ``ccache gcc`` into argv form."""
    try:
        words = shlex.split(command)
    except ValueError as e:
        raise UsageError(f"malformed compiler command {command!r}: {e}", usage=USAGE) from e
    if not words:
        raise UsageError("empty compiler command", usage=USAGE)
    return words


def parse_arguments(tokens: Sequence[str]) -> Invocation:
    """Split the command line into tool options and passthrough arguments.

    Options are consumed in pairs from the front while at least two tokens
    remain. ``-p`` may be repeated; for ``-f`` and ``-gcc`` the last one wins.

    Args:
        tokens: Command-line arguments without the program name

    Returns:
        Invocation with the recognised options and passthrough arguments

    Raises:
        UsageError: If nothing is left for the compiler after the options

    Example:
        >>> inv = parse_arguments(["-p", "obj/", "-Iinclude", "main.c"])
        >>> inv.prefixes, inv.arguments
        (['obj/'], ['-Iinclude', 'main.c'])
    """
    invocation = Invocation()

    remaining = list(tokens)
    while len(remaining) > 1:
        option, value = remaining[0], remaining[1]
        if option == "-p":
            invocation.prefixes.append(value)
        elif option == "-gcc":
            invocation.compiler = split_command(value)
        elif option == "-f":
            invocation.makefile = Path(value)
        else:
            break
        del remaining[:2]

    if not remaining:
        raise UsageError(USAGE, usage=USAGE)

    invocation.arguments = remaining
    logger.debug(
        "Parsed options: makefile=%s compiler=%s prefixes=%s arguments=%s",
        invocation.makefile,
        invocation.compiler,
        invocation.prefixes,
        invocation.arguments,
    )
    return invocation


def select_compiler(
    explicit: list[str] | None,
    configured: str | Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> list[str]:
    """Pick the compiler command to run.

    ``-gcc`` on the command line wins, then the configuration file, then the
    ``CC`` environment variable, then plain ``gcc``.

    Args:
        explicit: Compiler from ``-gcc``, already split
        configured: Compiler from the configuration file, as a string or list
        environ: Environment to read ``CC`` from (defaults to os.environ)

    Returns:
        Compiler command in argv form
    """
    if environ is None:
        environ = os.environ

    if explicit:
        return list(explicit)
    if configured:
        if isinstance(configured, str):
            return split_command(configured)
        return list(configured)
    if environ.get("CC"):
        return split_command(environ["CC"])
    return [DEFAULT_COMPILER]
