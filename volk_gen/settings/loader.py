# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Configuration loading for volk-gen."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError
from rich.console import Console

from .schema import GenConfig

console = Console(stderr=True)


def _is_path_field(key: str) -> bool:
    """Fields ending with _dir or _file are treated as paths."""
    return key.endswith(('_dir', '_file'))


def _resolve_cli_paths(cli_overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Resolve relative paths in CLI overrides to CWD.

    CLI paths resolve relative to where the command was run; None values are
    dropped so they do not shadow lower priority sources.
    """
    result = {}
    cwd = Path.cwd()

    for key, value in cli_overrides.items():
        if value is None:
            continue
        if _is_path_field(key) and isinstance(value, (str, Path)):
            path = Path(value)
            result[key] = path if path.is_absolute() else (cwd / path).resolve()
        else:
            result[key] = value

    return result


def load_config(project_file: Optional[Path] = None, **cli_overrides) -> GenConfig:
    """Load configuration with hierarchical priority.

    Priority order (highest to lowest):
    1. CLI arguments (passed as kwargs)
    2. Environment variables (VOLK_* prefix)
    3. Project config file (volk_gen.yaml)
    4. Built-in defaults

    VOLK_LOG_LEVEL is accepted as a shorthand for VOLK_LOGGING__LEVEL.

    Args:
        project_file: Path to project config file (for non-standard locations)
        **cli_overrides: CLI argument overrides

    Returns:
        GenConfig object
    """
    try:
        cli_overrides = _resolve_cli_paths(cli_overrides)

        if 'logging' not in cli_overrides and 'VOLK_LOG_LEVEL' in os.environ:
            cli_overrides['logging'] = {'level': os.environ['VOLK_LOG_LEVEL']}

        if project_file:
            cli_overrides['project_file'] = Path(project_file).resolve()

        return GenConfig(**cli_overrides)

    except ValidationError as e:
        console.print("[bold red]Configuration validation failed:[/bold red]")
        for error in e.errors():
            field = " → ".join(str(x) for x in error["loc"])
            console.print(f"  [red]{field}: {error['msg']}[/red]")
        raise
