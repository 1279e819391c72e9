# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""volk-gen configuration module.

Provides type-safe configuration management with Pydantic Settings.
"""

from .loader import load_config
from .schema import GenConfig, LimitsConfig, LoggingConfig, find_source_dir

__all__ = [
    "GenConfig",
    "LimitsConfig",
    "LoggingConfig",
    "find_source_dir",
    "load_config",
]
