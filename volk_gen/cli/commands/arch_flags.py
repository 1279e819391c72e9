# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

import click

from volk_gen import operations

from ..context import ApplicationContext


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--compiler", required=True, help="Compiler id as used in archs.xml (gnu, clang, msvc)")
@click.pass_obj
def arch_flags(ctx: ApplicationContext, compiler: str) -> None:
    """Print 'arch,flag,...' for every architecture the compiler supports, ';'-separated."""
    click.echo(operations.arch_flags(ctx.pipeline(), compiler))
