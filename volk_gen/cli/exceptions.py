# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""CLI-specific exception hierarchy.

Domain errors raised by the generator are translated into these so the
entry point can report them consistently and exit with a sysexits code.
"""

from volk_gen.errors import (
    OutputFileError,
    SourceFileError,
    UnknownMachineError,
    VolkGenError,
)

from .constants import (
    EX_CANTCREAT,
    EX_CONFIG,
    EX_DATAERR,
    EX_NOINPUT,
    EX_USAGE,
)


class CLIError(Exception):
    """Base exception for all CLI-related errors.

    Attributes:
        message: Main error message
        details: Optional list of additional detail lines
        exit_code: Suggested exit code for this error type (class attribute)
    """

    exit_code: int = EX_USAGE

    def __init__(self, message: str, details: list[str] | None = None):
        self.message = message
        self.details = details or []
        super().__init__(message)

    def format_for_console(self) -> str:
        """Format error message for console output.

        Returns:
            Formatted error message with details
        """
        lines = [f"[red]Error:[/red] {self.message}"]
        if self.details:
            lines.append("")
            for detail in self.details:
                lines.append(f"  • {detail}")
        return "\n".join(lines)


class ConfigurationError(CLIError):
    """Configuration could not be loaded or validated."""

    exit_code = EX_CONFIG


class InputFileError(CLIError):
    """A description file, kernel header or template could not be read."""

    exit_code = EX_NOINPUT


class OutputError(CLIError):
    """The generated file could not be written."""

    exit_code = EX_CANTCREAT


class DataError(CLIError):
    """The request names something the catalogs do not contain."""

    exit_code = EX_DATAERR


def cli_error_for(error: VolkGenError) -> CLIError:
    """Translate a generator error into the matching CLI error."""
    if isinstance(error, SourceFileError):
        return InputFileError(str(error), details=[
            "Check --source-dir or VOLK_SOURCE_DIR points at the library checkout",
        ])
    if isinstance(error, OutputFileError):
        return OutputError(str(error))
    if isinstance(error, UnknownMachineError):
        return DataError(str(error), details=[
            "Run 'volk-gen info' to list the available machines",
        ])
    return CLIError(str(error))
