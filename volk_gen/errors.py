# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
Error handling for volk-gen.

Only conditions that must abort a run are raised. Malformed catalog entries,
unparseable implementations and exhausted recursion bounds are logged and
skipped by the stage that finds them.
"""


class VolkGenError(Exception):
    """Base exception for all volk-gen errors."""
    pass


class SourceFileError(VolkGenError):
    """A required input file could not be read."""
    pass


class OutputFileError(VolkGenError):
    """A generated file could not be written."""
    pass


class UnknownMachineError(VolkGenError):
    """A machine name was requested that the catalog does not contain."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown machine: {name}")
