# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Template rendering for generated dispatch sources."""

from .conditions import DEPRECATED_KERNELS, evaluate_condition
from .engine import BANNER, TemplateEngine
from .expressions import evaluate_expression
from .scope import Scope, Scratch
from .statements import Statement, parse_statement, parse_statements

__all__ = [
    "BANNER",
    "DEPRECATED_KERNELS",
    "Scope",
    "Scratch",
    "Statement",
    "TemplateEngine",
    "evaluate_condition",
    "evaluate_expression",
    "parse_statement",
    "parse_statements",
]
