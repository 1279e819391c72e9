# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""volk-gen configuration schema using Pydantic.

Configuration Priority
----------------------
Settings are loaded from multiple sources with the following priority
(highest to lowest):
1. CLI arguments (passed to GenConfig constructor)
2. Environment variables (VOLK_* prefix, nested with ``__``)
3. Project config file (volk_gen.yaml)
4. Built-in defaults

Path Resolution
---------------
``source_dir`` is the root of the kernel library checkout. When it is not
configured it is discovered by walking up from the current directory until
``gen/archs.xml`` is found, falling back to the current directory.

``archs_file``, ``machines_file`` and ``kernels_dir`` resolve against
``source_dir`` when relative.
"""

import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from volk_gen._internal.io.yaml import load_project_yaml

logger = logging.getLogger(__name__)

_PROJECT_CONFIG_FILE = "volk_gen.yaml"
_SOURCE_MARKER = Path("gen") / "archs.xml"


def _find_project_config() -> Path | None:
    """Find project configuration file with upward directory walk.

    If VOLK_PROJECT_DIR is set only that directory is checked.
    """
    if project_dir_override := os.environ.get("VOLK_PROJECT_DIR"):
        candidate = Path(project_dir_override).resolve() / _PROJECT_CONFIG_FILE
        return candidate if candidate.exists() else None

    current = Path.cwd().resolve()
    while current != current.parent:
        candidate = current / _PROJECT_CONFIG_FILE
        if candidate.exists():
            return candidate
        current = current.parent

    return None


def find_source_dir(start: Path, max_depth: int) -> Path:
    """Walk up from ``start`` looking for the directory holding gen/archs.xml.

    Gives up after ``max_depth`` parents and returns ``start`` unchanged.
    """
    start = start.resolve()
    current = start
    for _ in range(max_depth + 1):
        if (current / _SOURCE_MARKER).exists():
            return current
        if current.parent == current:
            break
        current = current.parent

    logger.debug(f"No {_SOURCE_MARKER} found above {start}, using it as source dir")
    return start


class YamlSettingsSource(PydanticBaseSettingsSource):
    """Settings source reading the volk_gen.yaml project file."""

    def __init__(self, settings_cls: type[BaseSettings], project_file: Path | None = None):
        super().__init__(settings_cls)
        self.project_file_used: Path | None = None

        if project_file is not None:
            if Path(project_file).exists():
                self.project_file_used = Path(project_file).resolve()
        else:
            self.project_file_used = _find_project_config()

        self._data = load_project_yaml(self.project_file_used) if self.project_file_used else {}

    def get_field_value(self, field_name: str, field_info: Any) -> tuple[Any, str, bool]:
        """Get field value from YAML source."""
        if field_name in self._data:
            return self._data[field_name], field_name, True
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        data = self._data.copy()
        if self.project_file_used:
            data["project_file"] = self.project_file_used
        return data


class LimitsConfig(BaseModel):
    """Recursion and search bounds."""

    max_guard_depth: int = Field(
        default=50, ge=1, description="Maximum preprocessor conditional nesting parsed in kernel headers"
    )
    max_render_depth: int = Field(
        default=20, ge=1, description="Maximum nesting of template loop renders"
    )
    source_search_depth: int = Field(
        default=20, ge=0, description="Parent directories searched when discovering source_dir"
    )

    model_config = ConfigDict(extra="forbid")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="warning", description="Log level: error | warning | info | debug")

    model_config = ConfigDict(extra="forbid")

    @field_validator("level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        value = value.lower()
        if value not in ("error", "warning", "info", "debug"):
            raise ValueError(f"unknown log level '{value}'")
        return value


class GenConfig(BaseSettings):
    """Configuration schema with hierarchical priority.

    Priority order (highest to lowest):
    1. CLI arguments (passed to constructor)
    2. Environment variables (VOLK_* prefix)
    3. Project config (volk_gen.yaml)
    4. Built-in defaults
    """

    project_file: Path | None = Field(
        default=None, description="Project config file (explicit or discovered)"
    )
    source_dir: Path | None = Field(
        default=None, description="Kernel library source root (auto-discovered when unset)"
    )
    archs_file: Path = Field(
        default=Path("gen/archs.xml"), description="Architecture description file"
    )
    machines_file: Path = Field(
        default=Path("gen/machines.xml"), description="Machine description file"
    )
    kernels_dir: Path = Field(
        default=Path("kernels/volk"), description="Directory of kernel headers"
    )
    kernel_suffix: str = Field(default=".h", description="Kernel header file suffix")
    check_signatures: bool = Field(
        default=True,
        description="Warn when an implementation's argument list differs from the kernel's",
    )
    limits: LimitsConfig = Field(default_factory=LimitsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="VOLK_",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
        env_file=None,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources: init > env > YAML > defaults."""
        project_file = init_settings().get("project_file")

        return (
            init_settings,
            env_settings,
            YamlSettingsSource(settings_cls, project_file=project_file),
        )

    def model_post_init(self, __context: Any) -> None:
        """Resolve all paths to absolute."""
        project_dir = self.project_file.parent if self.project_file else Path.cwd()

        if self.source_dir is None:
            self.source_dir = find_source_dir(Path.cwd(), self.limits.source_search_depth)
        else:
            self.source_dir = self._resolve(self.source_dir, project_dir)

        self.archs_file = self._resolve(self.archs_file, self.source_dir)
        self.machines_file = self._resolve(self.machines_file, self.source_dir)
        self.kernels_dir = self._resolve(self.kernels_dir, self.source_dir)

    @staticmethod
    def _resolve(path: Path, base: Path) -> Path:
        path = Path(path).expanduser()
        return path if path.is_absolute() else (base / path).resolve()
