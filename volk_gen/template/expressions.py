# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""``${...}`` expression resolution.

Only a fixed set of names is understood. Anything else, including a name
whose selection is missing, resolves to the empty string.
"""

from typing import Mapping, Optional

from .scope import Scope, Scratch


def _kernel_value(expr: str, scope: Scope) -> Optional[str]:
    kernel = scope.kernel
    if kernel is None:
        return None
    if expr == "kern.name":
        return kernel.name
    if expr == "kern.pname":
        return kernel.pname
    if expr == "kern.arglist_full":
        return kernel.arglist_full
    if expr == "kern.arglist_names":
        return kernel.arglist_names
    if expr == "kern.arglist_types":
        return kernel.arglist_types
    if expr == "kern.has_dispatcher":
        return "1" if kernel.has_dispatcher else ""
    return None


def _arch_value(expr: str, scope: Scope) -> Optional[str]:
    if scope.arch is None:
        return None
    if expr == "arch.name":
        return scope.arch.name
    if expr == "arch.name.upper()":
        return scope.arch.name.upper()
    return None


def _machine_value(expr: str, scope: Scope) -> Optional[str]:
    machine = scope.machine
    if machine is None:
        return None
    prefix, _, field = expr.partition(".")
    if prefix not in ("this_machine", "machine"):
        return None
    if field == "name":
        return machine.name
    if field == "name.upper()":
        return machine.name.upper()
    if field == "alignment":
        return str(machine.alignment)
    return None


def _loop_value(expr: str, scope: Scope) -> Optional[str]:
    arg = scope.arg
    if arg is not None:
        if expr == "arg_type":
            return arg[0]
        if expr == "arg_name":
            return arg[1]

    check = scope.check
    if check is not None:
        if expr == "check":
            return check.name
        if expr == "params":
            return ", ".join(check.params)

    if expr == "i" and scope.enum_index is not None:
        return str(scope.enum_index)
    return None


def evaluate_expression(expr: str, scope: Scope, scratch: Scratch, symbols: Mapping[str, str]) -> str:
    """Resolve ``expr`` against symbols, scratch values and the current selection."""
    expr = expr.strip()
    if expr in symbols:
        return symbols[expr]

    expr = scope.canonical(expr)
    if expr == "end_open_parens":
        return scratch.end_open_parens

    for lookup in (_kernel_value, _arch_value, _machine_value, _loop_value):
        value = lookup(expr, scope)
        if value is not None:
            return value

    if expr == "len_archs" and scratch.len_archs > 0:
        return str(scratch.len_archs)
    return ""
