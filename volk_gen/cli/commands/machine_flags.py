# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

import click

from volk_gen import operations
from volk_gen.errors import VolkGenError

from ..context import ApplicationContext
from ..exceptions import cli_error_for


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--machine", required=True, help="Machine name")
@click.option("--compiler", required=True, help="Compiler id as used in archs.xml")
@click.pass_obj
def machine_flags(ctx: ApplicationContext, machine: str, compiler: str) -> None:
    """Print the compiler flags of every architecture in MACHINE."""
    try:
        flags = operations.machine_flags(ctx.pipeline(), machine, compiler)
    except VolkGenError as e:
        raise cli_error_for(e) from e
    click.echo(flags)
