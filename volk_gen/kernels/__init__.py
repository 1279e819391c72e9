# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Kernel header extraction."""

from .comments import remove_comments
from .extractor import (
    KernelCatalog,
    parse_impl,
    parse_kernel_file,
    parse_kernel_text,
)
from .sections import GuardedSection, TextSection, flatten, parse_sections
from .types import Impl, Kernel

__all__ = [
    "GuardedSection",
    "Impl",
    "Kernel",
    "KernelCatalog",
    "TextSection",
    "flatten",
    "parse_impl",
    "parse_kernel_file",
    "parse_kernel_text",
    "remove_comments",
]
