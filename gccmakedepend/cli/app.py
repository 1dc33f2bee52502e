"""Cyclopts application for the gcc-makedepend CLI.

The tool has a single command, registered as the application default, so it
is invoked the same way as the classic makedepend:

    gcc-makedepend [--config FILE] [--dry-run] ... [-f Makefile] [-gcc gcc-command] {-p prefix} [gcc or g++ options] {source}

Only the long options at the front of the command line are parsed by
Cyclopts. Everything from the first other token on (the makedepend options,
compiler flags and sources) is handed to the command untouched, after an
end-of-options delimiter, so Cyclopts never splits tokens such as ``-gcc`` or
``-fPIC`` into single-letter flags.
"""

import sys
from collections.abc import Sequence

from cyclopts import App

from gccmakedepend.cli import commands

# Long options that take a value, as "--name value" or "--name=value"
VALUE_OPTIONS = frozenset({"--config", "--log-level", "--log-file"})
FLAG_OPTIONS = frozenset({
    "--dry-run",
    "--no-dry-run",
    "--verbose",
    "--no-verbose",
    "--help",
    "-h",
    "--version",
})
END_OF_OPTIONS = "--"

# Create the main application
app = App(
    name="gcc-makedepend",
    help="gcc-based makedepend clone: update header dependencies in a makefile",
    version="0.1.0",
)

app.default(commands.makedepend)


def split_command_line(tokens: Sequence[str]) -> tuple[list[str], list[str]]:
    """Separate the leading long options from the makedepend arguments.

    Options are taken from the front of the command line until the first
    token that is not one of the application's long options.

    Args:
        tokens: Command-line tokens, without the program name

    Returns:
        Tuple of (options for Cyclopts, raw makedepend arguments)

    Example:
        >>> split_command_line(["--dry-run", "--config", "md.yaml", "-gcc", "clang", "a.c"])
        (['--dry-run', '--config', 'md.yaml'], ['-gcc', 'clang', 'a.c'])
    """
    options: list[str] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if token in FLAG_OPTIONS:
            options.append(token)
            index += 1
        elif token.split("=", 1)[0] in VALUE_OPTIONS:
            width = 1 if "=" in token else 2
            options.extend(tokens[index:index + width])
            index += width
        else:
            break
    return options, list(tokens[index:])


def run(tokens: Sequence[str] | None = None) -> int | None:
    """Run the application on a command line (default: ``sys.argv[1:]``)."""
    options, arguments = split_command_line(sys.argv[1:] if tokens is None else tokens)
    if arguments:
        options += [END_OF_OPTIONS, *arguments]
    return app(options)
