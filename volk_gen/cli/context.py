# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from __future__ import annotations  # PEP 563: Postponed evaluation of annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TYPE_CHECKING

from pydantic import ValidationError

from .exceptions import ConfigurationError, cli_error_for

# Type hints only - settings and catalogs imported lazily inside methods
if TYPE_CHECKING:
    from volk_gen.context import PipelineContext
    from volk_gen.settings import GenConfig

logger = logging.getLogger(__name__)


@dataclass
class ApplicationContext:
    """CLI execution context with GenConfig loading and catalog caching."""

    config_file: Path | None = None
    overrides: dict[str, Any] = field(default_factory=dict)

    config: "GenConfig | None" = None
    _pipeline: "PipelineContext | None" = field(default=None, init=False, repr=False)
    _kernels_loaded: bool = field(default=False, init=False, repr=False)

    @classmethod
    def from_cli_args(
        cls,
        config_file: Path | None,
        source_dir: Path | None,
        log_level: str | None,
    ) -> "ApplicationContext":
        """Create context from CLI arguments and load configuration.

        Args:
            config_file: Path to project config file override
            source_dir: Library source root override
            log_level: Logging level override, None to use configuration

        Returns:
            Initialized ApplicationContext with loaded configuration
        """
        from volk_gen._internal.logging import setup_logging

        setup_logging(level=log_level or "warning")

        context = cls(config_file=config_file)
        if source_dir:
            context.overrides["source_dir"] = source_dir
        if log_level:
            context.overrides["logging"] = {"level": log_level}

        context.load_configuration()
        setup_logging(level=context.config.logging.level)
        logger.debug(f"volk-gen initialized with source_dir={context.config.source_dir}")

        return context

    def load_configuration(self) -> None:
        from volk_gen.settings import load_config

        try:
            self.config = load_config(project_file=self.config_file, **self.overrides)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration ({e.error_count()} errors)")

    def get_effective_config(self) -> "GenConfig":
        if not self.config:
            self.load_configuration()
        return self.config

    def pipeline(self, load_kernels: bool = False) -> "PipelineContext":
        """Load the catalogs once; kernels are added the first time they are asked for."""
        from volk_gen.context import PipelineContext
        from volk_gen.errors import VolkGenError

        if self._pipeline is None or (load_kernels and not self._kernels_loaded):
            try:
                self._pipeline = PipelineContext.from_config(
                    self.get_effective_config(), load_kernels=load_kernels
                )
            except VolkGenError as e:
                raise cli_error_for(e) from e
            self._kernels_loaded = load_kernels
        return self._pipeline
