# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from pathlib import Path

import click

from volk_gen import operations
from volk_gen.errors import VolkGenError

from ..context import ApplicationContext
from ..exceptions import cli_error_for


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--input", "-i", "input_path", required=True, type=click.Path(path_type=Path),
              help="Template file")
@click.option("--output", "-o", "output_path", type=click.Path(path_type=Path),
              help="Generated file (default: stdout)")
@click.argument("args", nargs=-1)
@click.pass_obj
def render(ctx: ApplicationContext, input_path: Path, output_path: Path | None, args: tuple[str, ...]) -> None:
    """Render a template against the catalogs.

    ARGS are passed to the template; the first one names the machine for
    machine-specific templates.
    """
    config = ctx.get_effective_config()
    try:
        result = operations.render_template(
            ctx.pipeline(load_kernels=True),
            input_path,
            output_path,
            args,
            max_depth=config.limits.max_render_depth,
        )
    except VolkGenError as e:
        raise cli_error_for(e) from e

    if output_path is None:
        click.echo(result, nl=False)
