"""CLI command implementation.

This module implements the single gcc-makedepend command: resolve the
makefile and compiler, run the dependency scan, and splice its output
after the ``# DO NOT DELETE`` marker.

The command is implemented as a function that returns an exit code,
enabling both direct invocation and subprocess-based testing.
"""

import sys
from pathlib import Path
from typing import Annotated, Any

from cyclopts import Parameter
from gccmakedepend.cli.config import ConfigError, load_config, merge_config, validate_config
from gccmakedepend.cli.exit_codes import ExitCode
from gccmakedepend.cli.output import configure_logging, handle_error, report, show_details
from gccmakedepend.core.compiler import GccScanner
from gccmakedepend.core.exceptions import (
    CompilerError,
    MakedependError,
    MakefileError,
    UsageError,
    WriteError,
)
from gccmakedepend.core.makefile import find_makefile
from gccmakedepend.core.options import USAGE, parse_arguments, select_compiler
from gccmakedepend.core.pipeline import execute_pipeline


def load_settings(config: Path | None) -> dict[str, Any]:
    """Load and validate the configuration file, if one was given.

    Raises:
        ConfigError: If the file cannot be loaded or has invalid settings
    """
    if config is None:
        return {}

    settings = load_config(config)
    errors = validate_config(settings)
    if errors:
        raise ConfigError(f"Invalid configuration in {config}: {'; '.join(errors)}")
    return settings


def makedepend(
    *arguments: Annotated[
        str,
        Parameter(
            allow_leading_hyphen=True,
            help="Makedepend options (-f, -gcc, -p), then compiler options and sources",
        ),
    ],
    config: Annotated[Path | None, Parameter(help="Configuration file path")] = None,
    dry_run: Annotated[bool, Parameter(help="Print the updated makefile instead of writing it")] = False,
    verbose: Annotated[bool, Parameter(help="Show detailed error information")] = False,
    log_level: Annotated[str, Parameter(help="Log level (debug, info, warning, error)")] = "warning",
    log_file: Annotated[Path | None, Parameter(help="Log file path")] = None,
) -> int:
    """Update the header dependencies in a makefile.

    Runs ``<compiler> -MM`` over the given compiler options and sources and
    replaces everything after the ``# DO NOT DELETE`` line of the makefile
    with its output. The line is added if the makefile does not have one yet.
    Everything before it is kept exactly as it is.

    The makefile is ``makefile`` or ``Makefile`` in the current directory,
    whichever is found first, unless ``-f`` names another. The compiler is
    taken from ``-gcc``, the configuration file, or ``CC``, in that order,
    and defaults to ``gcc``. Each ``-p`` prefix produces a copy of every
    generated rule with the prefix in front of its target.

    Args:
        arguments: Tool options followed by compiler options and sources
        config: Path to configuration file (optional)
        dry_run: Print the updated makefile to stdout instead of writing it
        verbose: Show error context and stack traces
        log_level: Logging level (debug, info, warning, error)
        log_file: Path to log file (optional)

    Returns:
        Exit code (0 for success, non-zero for errors)

    Example:
        >>> from gccmakedepend.cli.commands import makedepend
        >>>
        >>> exit_code = makedepend("-f", "GNUmakefile", "-p", "obj/", "-Iinclude", "main.c")
    """
    try:
        configure_logging(log_level, log_file)
    except (ValueError, OSError) as e:
        report(str(e))
        return ExitCode.CONFIG_ERROR

    makefile: Path | None = None
    try:
        invocation = parse_arguments(arguments)

        settings = load_settings(config)
        settings = merge_config(
            settings,
            makefile=str(invocation.makefile) if invocation.makefile is not None else None,
            prefixes=invocation.prefixes,
        )

        makefile = find_makefile(settings.get("makefile"))
        compiler = select_compiler(invocation.compiler, settings.get("compiler"))
        scanner = GccScanner(compiler, prefixes=settings.get("prefixes", []))

        content = execute_pipeline(
            makefile,
            scanner,
            [*settings.get("options", []), *invocation.arguments],
            dry_run=dry_run,
        )
        if dry_run:
            sys.stdout.write(content)

        return ExitCode.SUCCESS

    except UsageError as e:
        if e.message != USAGE:
            report(e.message)
        print(USAGE, file=sys.stderr)
        return ExitCode.USAGE_ERROR
    except ConfigError as e:
        handle_error(e, verbose=verbose)
        return ExitCode.CONFIG_ERROR
    except MakefileError as e:
        handle_error(e, verbose=verbose)
        return ExitCode.MAKEFILE_ERROR
    except CompilerError as e:
        handle_error(e)
        report(f"{makefile} was not updated.")
        if verbose:
            show_details(e)
        return ExitCode.COMPILER_ERROR
    except WriteError as e:
        handle_error(e, verbose=verbose)
        return ExitCode.WRITE_ERROR
    except MakedependError as e:
        handle_error(e, verbose=verbose)
        return ExitCode.UNEXPECTED_ERROR
    except Exception as e:
        handle_error(e, verbose=verbose)
        return ExitCode.UNEXPECTED_ERROR
