# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

import click

from volk_gen import operations

from ..context import ApplicationContext


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--archs", required=True, help="Available architectures, ';'-separated")
@click.pass_obj
def machines(ctx: ApplicationContext, archs: str) -> None:
    """Print the machines that can be built from the given architectures."""
    click.echo(operations.available_machines(ctx.pipeline(), set(archs.split(";"))))
