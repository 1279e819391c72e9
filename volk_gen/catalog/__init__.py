# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Architecture and machine catalogs."""

from .archs import ArchCatalog
from .machines import MachineCatalog, expand_machine
from .types import Arch, Check, Machine

__all__ = [
    "Arch",
    "ArchCatalog",
    "Check",
    "Machine",
    "MachineCatalog",
    "expand_machine",
]
