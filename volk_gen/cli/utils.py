# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Console shared by the CLI for diagnostics.

Generated text goes to stdout through click.echo, so everything printed
here goes to stderr.
"""

from rich.console import Console

console = Console(stderr=True)
