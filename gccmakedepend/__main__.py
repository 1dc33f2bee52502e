"""CLI entry point for gcc-makedepend.

Enables invocation via `python -m gccmakedepend` or the `gcc-makedepend`
console script.

This module runs the Cyclopts app on the command line, exiting with the
appropriate exit code based on command execution results.
"""

import sys

from gccmakedepend.cli.app import run


def main() -> None:
    exit_code = run()
    sys.exit(exit_code if exit_code is not None else 0)


if __name__ == "__main__":
    main()
