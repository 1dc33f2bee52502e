"""Dependency scanning through the compiler's ``-MM`` mode.

gcc (and compilers that imitate it, such as clang) print make rules for the
user header files a source includes when run with ``-MM``. Long rules are
folded with backslash-newline, and the continuation lines start with
whitespace:

    main.o: main.c defs.h \\
      util.h

When the object files are built in another directory, the rules need a
directory prefix on their targets. With one or more prefixes every rule is
emitted once per prefix, and a rule always travels together with its
continuation lines.
"""

import logging
import shlex
import subprocess
from collections.abc import Iterable, Sequence
from typing import IO, cast

from gccmakedepend.core.exceptions import CompilerError
from gccmakedepend.core.makefile import ENCODING, ERRORS

logger = logging.getLogger(__name__)

DEPENDENCY_FLAG = "-MM"


def build_command(compiler: Sequence[str], arguments: Sequence[str]) -> list[str]:
    """Return the argv for a dependency scan of the given arguments."""
    return [*compiler, DEPENDENCY_FLAG, *arguments]


def apply_prefixes(lines: Iterable[str], prefixes: Sequence[str]) -> str:
    """Join output lines, repeating each rule once per prefix.

    A line that does not start with whitespace begins a new rule; lines that
    do are continuation lines of the current rule. The prefix is put in front
    of the first line of each copy of a rule.

    Args:
        lines: Compiler output, one line per item, line endings included
        prefixes: Prefixes in the order they were given; empty for none

    Returns:
        The joined output

    Example:
        >>> apply_prefixes(["a.o: a.c\\n", "b.o: b.c\\n"], ["x/", "y/"])
        'x/a.o: a.c\\ny/a.o: a.c\\nx/b.o: b.c\\ny/b.o: b.c\\n'
    """
    if not prefixes:
        return "".join(lines)

    output: list[str] = []
    rule: list[str] = []

    def flush() -> None:
        text = "".join(rule)
        if text:
            for prefix in prefixes:
                output.append(prefix + text)
        rule.clear()

    for line in lines:
        if not line[:1].isspace():
            flush()
        rule.append(line)
    flush()

    return "".join(output)


class GccScanner:
    """Dependency scanner that runs ``<compiler> -MM``.

    The compiler's standard output and standard error are merged into a
    single pipe, so diagnostics appear in the captured output in the order
    the compiler wrote them. Standard input is closed. The output is read as
    bytes and split on LF only, so CRLF line endings are passed through
    unchanged.

    Example:
        >>> scanner = GccScanner(["gcc"], prefixes=["obj/"])
        >>> scanner.scan(["-Iinclude", "main.c"])
        'obj/main.o: main.c include/defs.h\\n'
    """

    def __init__(self, compiler: Sequence[str], prefixes: Sequence[str] = ()) -> None:
        """Initialize the scanner.

        Args:
            compiler: Compiler command in argv form, e.g. ``["gcc"]``
            prefixes: Prefixes to apply to every generated rule
        """
        self.compiler = list(compiler)
        self.prefixes = list(prefixes)

    def scan(self, arguments: Sequence[str]) -> str:
        """Run the compiler and return its prefixed output.

        Args:
            arguments: Compiler options and source file names

        Returns:
            Dependency rules with the prefixes applied

        Raises:
            CompilerError: If the compiler cannot be started or exits with a
                          non-zero status. In the latter case the captured
                          output is available as ``output``.
        """
        command = build_command(self.compiler, arguments)
        command_text = shlex.join(command)
        logger.info("Running %s", command_text)

        try:
            with subprocess.Popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
            ) as process:
                stdout = cast(IO[bytes], process.stdout)
                output = apply_prefixes(
                    (line.decode(ENCODING, ERRORS) for line in stdout), self.prefixes
                )
                returncode = process.wait()
        except OSError as e:
            raise CompilerError(
                f"unable to invoke {command_text}",
                command=command_text,
                reason=str(e),
            ) from e

        if returncode != 0:
            logger.debug("%s exited with status %d", command_text, returncode)
            raise CompilerError(
                f"{command_text} failed",
                command=command_text,
                returncode=returncode,
                output=output,
            )

        logger.debug("Captured %d characters of dependencies", len(output))
        return output
