# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

import click
from rich.console import Console

from ..context import ApplicationContext
from ..formatters import CatalogFormatter


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--no-kernels", is_flag=True, help="Skip scanning kernel headers")
@click.pass_obj
def info(ctx: ApplicationContext, no_kernels: bool) -> None:
    """Summarize the loaded architectures, machines and kernels."""
    pipeline = ctx.pipeline(load_kernels=not no_kernels)
    formatter = CatalogFormatter(Console())
    formatter.show(ctx.get_effective_config(), pipeline, include_kernels=not no_kernels)
