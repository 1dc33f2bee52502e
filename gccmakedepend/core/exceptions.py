"""Custom exception classes for gcc-makedepend error handling.

This module defines the exception hierarchy for the dependency update:
- UsageError: Malformed command line
- MakefileError: Makefile missing or unreadable
- CompilerError: Dependency scan could not be run or failed
- WriteError: Updated makefile could not be committed
- PipelineError: Unexpected failure during the update

All exceptions inherit from MakedependError for consistent error handling.
"""

from typing import Any


class MakedependError(Exception):
    """Base exception for all gcc-makedepend errors.

    Provides a common base class for all custom exceptions raised while
    updating a makefile, enabling catch-all error handling when needed.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error description
            context: Optional dictionary of contextual information (file paths,
                    commands, return codes, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return a formatted error message with context."""
        if not self.context:
            return self.message

        context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"{self.message} [{context_str}]"


class UsageError(MakedependError):
    """Exception raised when the command line cannot be interpreted.

    Context typically includes:
        - usage: The usage line to show to the user
    """

    def __init__(self, message: str, usage: str | None = None, **extra_context: Any) -> None:
        context: dict[str, Any] = {}
        if usage is not None:
            context["usage"] = usage
        context.update(extra_context)

        super().__init__(message, context)


class MakefileError(MakedependError):
    """Exception raised when the makefile cannot be located or read.

    Context typically includes:
        - file_path: Path to the makefile
        - reason: Operating system error text
    """

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        reason: str | None = None,
        **extra_context: Any,
    ) -> None:
        """Initialize makefile error with file details.

        Args:
            message: Human-readable error description
            file_path: Path to the makefile that failed
            reason: Specific reason for the failure
            **extra_context: Additional context information
        """
        context: dict[str, Any] = {}
        if file_path is not None:
            context["file_path"] = file_path
        if reason is not None:
            context["reason"] = reason
        context.update(extra_context)

        super().__init__(message, context)


class CompilerError(MakedependError):
    """Exception raised when the dependency scan fails.

    Raised either when the compiler cannot be started at all or when it exits
    with a non-zero status. The captured output is kept on the ``output``
    attribute rather than in the context, since it is typically long and is
    shown to the user verbatim.

    Context typically includes:
        - command: The command line that was run
        - returncode: Exit status of the compiler
        - reason: Operating system error text when the compiler did not start
    """

    def __init__(
        self,
        message: str,
        command: str | None = None,
        returncode: int | None = None,
        output: str = "",
        reason: str | None = None,
        **extra_context: Any,
    ) -> None:
        """Initialize compiler error with invocation details.

        Args:
            message: Human-readable error description
            command: The command line that was run
            returncode: Exit status of the compiler (None if it never ran)
            output: Combined stdout/stderr captured from the compiler
            reason: Specific reason for the failure
            **extra_context: Additional context information
        """
        context: dict[str, Any] = {}
        if command is not None:
            context["command"] = command
        if returncode is not None:
            context["returncode"] = returncode
        if reason is not None:
            context["reason"] = reason
        context.update(extra_context)

        super().__init__(message, context)
        self.output = output


class WriteError(MakedependError):
    """Exception raised when the updated makefile cannot be committed.

    Context typically includes:
        - file_path: Path to the temporary or target file
        - reason: Operating system error text
    """

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        reason: str | None = None,
        **extra_context: Any,
    ) -> None:
        context: dict[str, Any] = {}
        if file_path is not None:
            context["file_path"] = file_path
        if reason is not None:
            context["reason"] = reason
        context.update(extra_context)

        super().__init__(message, context)


class PipelineError(MakedependError):
    """Exception raised when the update fails unexpectedly.

    Wraps exceptions from outside the hierarchy above and adds context about
    which step of the update failed.

    Context typically includes:
        - step: Which step failed (scan_makefile, scan_dependencies, write)
        - makefile: Path to the makefile being updated
    """

    def __init__(
        self,
        message: str,
        step: str | None = None,
        makefile: str | None = None,
        **extra_context: Any,
    ) -> None:
        """Initialize pipeline error with orchestration details.

        Args:
            message: Human-readable error description
            step: Which step of the update failed
            makefile: Path to the makefile being updated
            **extra_context: Additional context information
        """
        context: dict[str, Any] = {}
        if step is not None:
            context["step"] = step
        if makefile is not None:
            context["makefile"] = makefile
        context.update(extra_context)

        super().__init__(message, context)
