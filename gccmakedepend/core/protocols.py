"""Protocol definitions for gcc-makedepend components.

This module defines the interface a dependency scanner must implement so the
update pipeline can run against gcc, another compiler, or a test double.

Protocols:
    - DependencyScanner: Produces the text that follows the marker line

All implementations must:
    - Raise CompilerError from gccmakedepend.core.exceptions on failure
    - Return complete lines, each terminated by a newline
"""

from collections.abc import Sequence
from typing import Protocol


class DependencyScanner(Protocol):
    """Protocol for dependency scanners.

    A scanner is handed the passthrough arguments from the command line
    (compiler options and source names) and returns the make rules that
    describe the header dependencies of those sources.

    Example:
        >>> class StaticScanner:
        ...     def scan(self, arguments: Sequence[str]) -> str:
        ...         return "main.o: main.c main.h\\n"
        ...
        >>> StaticScanner().scan(["main.c"])
        'main.o: main.c main.h\\n'
    """

    def scan(self, arguments: Sequence[str]) -> str:
        """Run the scan and return the generated dependency rules.

        Args:
            arguments: Compiler options and source file names

        Returns:
            Dependency rules, ready to be placed after the marker line

        Raises:
            CompilerError: If the scan cannot be run or reports failure. The
                          error carries the captured output for display.
        """
        ...
