# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""YAML helpers for volk-gen project files.

- load_project_yaml(): load a mapping, expanding ${VAR} references
- expand_env_vars(): recursively expand ${VAR} syntax
"""

import os
from pathlib import Path
from typing import Any

import yaml


def expand_env_vars(data: Any) -> Any:
    """Recursively expand environment variables (supports ${VAR} and $VAR).

    Leaves undefined variables unchanged (e.g., "${UNDEFINED_VAR}" stays as-is).
    """
    if isinstance(data, str):
        return os.path.expandvars(data)
    elif isinstance(data, dict):
        return {k: expand_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [expand_env_vars(item) for item in data]
    return data


def load_project_yaml(file_path: str | Path) -> dict[str, Any]:
    """Load a project file as a mapping with environment references expanded.

    Raises:
        FileNotFoundError: If the YAML file doesn't exist
        yaml.YAMLError: If the YAML is invalid or its top level is not a mapping
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"YAML file not found: {file_path}")

    with open(file_path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise yaml.YAMLError(
            f"Invalid project file {file_path}: top level must be a mapping, "
            f"got {type(data).__name__}"
        )
    return expand_env_vars(data)
