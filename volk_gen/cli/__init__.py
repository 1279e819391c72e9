# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""volk-gen command line."""

from .cli import create_cli, main

__all__ = ["create_cli", "main"]
