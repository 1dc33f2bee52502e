"""Exit code constants for the CLI.

This module defines standard exit codes for different error conditions,
following Unix conventions where 0 indicates success and non-zero values
indicate different types of failures. In every failure case the makefile
is left as it was.

Exit codes:
    0: SUCCESS - Makefile updated (or dry run completed)
    1: UNEXPECTED_ERROR - Unexpected/unhandled exception
    2: USAGE_ERROR - Malformed command line
    3: MAKEFILE_ERROR - Makefile missing or unreadable
    4: COMPILER_ERROR - Compiler could not be run or failed
    5: WRITE_ERROR - Updated makefile could not be committed
    6: CONFIG_ERROR - Configuration file or argument error
"""


class ExitCode:
    """Standard exit codes for the CLI.

    Example:
        >>> from gccmakedepend.cli.exit_codes import ExitCode
        >>> import sys
        >>>
        >>> try:
        ...     # ... update makefile ...
        ...     sys.exit(ExitCode.SUCCESS)
        ... except CompilerError:
        ...     sys.exit(ExitCode.COMPILER_ERROR)
    """

    SUCCESS = 0
    """Operation completed successfully."""

    UNEXPECTED_ERROR = 1
    """Unexpected or unhandled exception occurred."""

    USAGE_ERROR = 2
    """Command line could not be interpreted."""

    MAKEFILE_ERROR = 3
    """Makefile not found or not readable."""

    COMPILER_ERROR = 4
    """Dependency scan could not be run or reported failure."""

    WRITE_ERROR = 5
    """Temporary file could not be created, written or renamed."""

    CONFIG_ERROR = 6
    """Configuration file or argument error."""
