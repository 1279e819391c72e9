# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Catalogs shared by every generation step of one run."""

import logging
from dataclasses import dataclass, field

from volk_gen._internal.io import read_text
from volk_gen.catalog import ArchCatalog, MachineCatalog
from volk_gen.errors import SourceFileError
from volk_gen.kernels import KernelCatalog
from volk_gen.settings import GenConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineContext:
    """Architecture, machine and kernel catalogs, read-only once built."""
    archs: ArchCatalog
    machines: MachineCatalog
    kernels: KernelCatalog = field(default_factory=KernelCatalog)

    @classmethod
    def from_config(cls, config: GenConfig, load_kernels: bool = True) -> "PipelineContext":
        """Load the catalogs named by ``config``.

        Kernel headers are only scanned when ``load_kernels`` is set; the
        flag and machine queries never need them.

        Raises:
            SourceFileError: If a description file or the kernel directory
                cannot be read
        """
        logger.debug(f"Loading catalogs from {config.source_dir}")
        archs = ArchCatalog.from_text(read_text(config.archs_file))
        machines = MachineCatalog.from_text(read_text(config.machines_file), archs)

        kernels = KernelCatalog()
        if load_kernels:
            if not config.kernels_dir.is_dir():
                raise SourceFileError(f"Cannot open kernel directory: {config.kernels_dir}")
            kernels = KernelCatalog.from_directory(
                config.kernels_dir,
                suffix=config.kernel_suffix,
                max_guard_depth=config.limits.max_guard_depth,
                check_signatures=config.check_signatures,
            )

        logger.info(f"Loaded {len(archs)} archs and {len(machines)} machines")
        return cls(archs=archs, machines=machines, kernels=kernels)
