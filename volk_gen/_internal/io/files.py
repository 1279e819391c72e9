# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Whole-file text access.

Every file is opened, read or written completely, and closed again. OS-level
failures are converted to the volk-gen error hierarchy so callers only need
to handle ``VolkGenError``.
"""

from pathlib import Path

from volk_gen.errors import OutputFileError, SourceFileError


def read_text(path: str | Path) -> str:
    """Read a required input file.

    Raises:
        SourceFileError: If the file cannot be opened or decoded
    """
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceFileError(f"Cannot open file: {path} ({e})") from e


def write_text(path: str | Path, content: str) -> Path:
    """Write generated content, creating parent directories as needed.

    Raises:
        OutputFileError: If the file cannot be written
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise OutputFileError(f"Cannot write file: {path} ({e})") from e
    return path
