# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
volk-gen: build-time source generator for the VOLK kernel library

Reads the architecture and machine descriptions under ``gen/`` and the
kernel headers under ``kernels/volk``, and renders the dispatch templates
that glue them together.

Quick Start:
    >>> from volk_gen import PipelineContext, load_config, operations
    >>> context = PipelineContext.from_config(load_config())
    >>> operations.machine_flags(context, "avx2_64_mmx", "gnu")
    '-mmmx -msse -msse2 ...'
"""

__version__ = "0.1.0"

from .context import PipelineContext
from .errors import OutputFileError, SourceFileError, UnknownMachineError, VolkGenError
from .settings import GenConfig, load_config

__all__ = [
    "GenConfig",
    "OutputFileError",
    "PipelineContext",
    "SourceFileError",
    "UnknownMachineError",
    "VolkGenError",
    "load_config",
]
