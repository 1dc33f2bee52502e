"""Orchestration of a single makefile update.

The update follows this flow:
1. Scan: Read the makefile up to the marker line
2. Dependencies: Run the scanner over the passthrough arguments
3. Write: Commit preserved content, marker and dependencies atomically

The dependency scan runs before anything is written, so a failing compiler
never touches the makefile. Errors from the gcc-makedepend hierarchy are
propagated unchanged; anything else is wrapped in a PipelineError naming the
step that failed.
"""

import logging
from collections.abc import Sequence
from pathlib import Path

from gccmakedepend.core.exceptions import MakedependError, PipelineError
from gccmakedepend.core.makefile import scan_makefile, write_makefile
from gccmakedepend.core.protocols import DependencyScanner

logger = logging.getLogger(__name__)


def execute_pipeline(
    makefile: Path,
    scanner: DependencyScanner,
    arguments: Sequence[str],
    dry_run: bool = False,
) -> str:
    """Regenerate the dependency section of a makefile.

    Args:
        makefile: Makefile to update (must exist)
        scanner: Scanner producing the dependency rules
        arguments: Compiler options and source names passed to the scanner
        dry_run: Compute the new content without writing it

    Returns:
        The complete new makefile content

    Raises:
        MakefileError: If the makefile cannot be read
        CompilerError: If the scanner fails; the makefile is not modified
        WriteError: If the new content cannot be committed
        PipelineError: If any step fails with an unexpected error

    Example:
        >>> from pathlib import Path
        >>> from gccmakedepend.core.compiler import GccScanner
        >>>
        >>> execute_pipeline(
        ...     makefile=Path("Makefile"),
        ...     scanner=GccScanner(["gcc"], prefixes=["build/"]),
        ...     arguments=["-Iinclude", "main.c", "util.c"],
        ... )
    """
    step = "scan_makefile"
    try:
        contents = scan_makefile(makefile)

        step = "scan_dependencies"
        dependencies = scanner.scan(arguments)

        if dry_run:
            logger.info("Dry run: %s not written", makefile)
        else:
            step = "write"
            write_makefile(makefile, contents, dependencies)

    except MakedependError:
        raise
    except Exception as e:
        raise PipelineError(
            f"update of {makefile} failed at {step} step: {e}",
            step=step,
            makefile=str(makefile),
        ) from e

    return contents + dependencies
