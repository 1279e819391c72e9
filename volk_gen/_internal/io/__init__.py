# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""I/O utilities.

Private helpers for whole-file text access and YAML configuration loading.
Not part of the public API.
"""

from .files import read_text, write_text

__all__ = ["read_text", "write_text"]
