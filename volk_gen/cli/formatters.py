# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from __future__ import annotations  # PEP 563: Postponed evaluation of annotations

from typing import TYPE_CHECKING

from rich.console import Console as RichConsole
from rich.table import Table

if TYPE_CHECKING:
    from volk_gen.context import PipelineContext
    from volk_gen.settings import GenConfig


class CatalogFormatter:
    """Formatter for displaying loaded catalogs."""

    def __init__(self, console: RichConsole | None = None):
        self.console = console or RichConsole()

    def format_paths(self, config: GenConfig) -> Table:
        table = Table(title="Sources")
        table.add_column("Setting", style="cyan")
        table.add_column("Value")

        table.add_row("Source Directory", str(config.source_dir))
        table.add_row("Architectures", str(config.archs_file))
        table.add_row("Machines", str(config.machines_file))
        table.add_row("Kernels", f"{config.kernels_dir} (*{config.kernel_suffix})")
        if config.project_file:
            table.add_row("Project File", str(config.project_file))
        return table

    def format_archs(self, pipeline: PipelineContext) -> Table:
        table = Table(title=f"Architectures ({len(pipeline.archs)})")
        table.add_column("Name", style="cyan")
        table.add_column("Alignment", justify="right")
        table.add_column("Compilers")
        table.add_column("Checks")

        for arch in pipeline.archs:
            table.add_row(
                arch.name,
                str(arch.alignment),
                ", ".join(sorted(arch.flags)) or "[dim]any[/dim]",
                ", ".join(check.name for check in arch.checks),
            )
        return table

    def format_machines(self, pipeline: PipelineContext) -> Table:
        table = Table(title=f"Machines ({len(pipeline.machines)})")
        table.add_column("Name", style="cyan")
        table.add_column("Alignment", justify="right")
        table.add_column("Architectures")

        for machine in pipeline.machines:
            table.add_row(machine.name, str(machine.alignment), " ".join(machine.arch_names))
        return table

    def format_kernels(self, pipeline: PipelineContext) -> Table:
        table = Table(title=f"Kernels ({len(pipeline.kernels)})")
        table.add_column("Name", style="cyan")
        table.add_column("Implementations")
        table.add_column("Dispatcher", justify="center")

        for kernel in pipeline.kernels:
            table.add_row(
                kernel.name,
                ", ".join(impl.name for impl in kernel.impls),
                "[green]yes[/green]" if kernel.has_dispatcher else "",
            )
        return table

    def show(self, config: GenConfig, pipeline: PipelineContext, include_kernels: bool = True) -> None:
        self.console.print(self.format_paths(config))
        self.console.print(self.format_archs(pipeline))
        self.console.print(self.format_machines(pipeline))
        if include_kernels:
            self.console.print(self.format_kernels(pipeline))
