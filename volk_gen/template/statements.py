# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Inline ``<% ... %>`` statements.

Statement text is classified once into one of the variants below and then
interpreted against a rendering engine. Patterns are searched, not matched,
and the first one found wins::

    <% this_machine = machine_dict[args[0]] %>      SelectMachine
    <% make_impl_name_list = ... %>                 ImplNameList  -> {"generic", "a_sse"}
    <% sep = ', '.join(params) %>                   JoinParams
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, List, Tuple

if TYPE_CHECKING:
    from .engine import TemplateEngine


def _have_mask(names) -> str:
    return " | ".join(f"(1 << LV_{name.upper()})" for name in names)


def _brace_list(items) -> str:
    return "{" + ", ".join(items) + "}"


@dataclass(frozen=True)
class Statement:
    """Base statement: renders nothing and changes nothing."""
    code: str = ""

    def execute(self, engine: "TemplateEngine") -> str:
        return ""


@dataclass(frozen=True)
class Unrecognized(Statement):
    pass


@dataclass(frozen=True)
class SelectMachine(Statement):
    def execute(self, engine: "TemplateEngine") -> str:
        if engine.args:
            machine = engine.context.machines.get(engine.args[0])
            if machine is not None:
                engine.scope = engine.scope.derive(machine=machine)
        return ""


@dataclass(frozen=True)
class SelectArchNames(Statement):
    """Arch names always come from the selected machine."""


@dataclass(frozen=True)
class ResetParens(Statement):
    def execute(self, engine: "TemplateEngine") -> str:
        engine.scratch.num_open_parens = 0
        return ""


@dataclass(frozen=True)
class IncrementParens(Statement):
    def execute(self, engine: "TemplateEngine") -> str:
        engine.scratch.num_open_parens += 1
        return ""


@dataclass(frozen=True)
class CloseParens(Statement):
    def execute(self, engine: "TemplateEngine") -> str:
        engine.scratch.end_open_parens = ")" * engine.scratch.num_open_parens
        return ""


@dataclass(frozen=True)
class SelectImpls(Statement):
    def execute(self, engine: "TemplateEngine") -> str:
        kernel, machine = engine.scope.kernel, engine.scope.machine
        if kernel is not None and machine is not None:
            engine.scratch.impls = kernel.get_impls(frozenset(machine.arch_names))
        return ""


@dataclass(frozen=True)
class ArchHaveList(Statement):
    def execute(self, engine: "TemplateEngine") -> str:
        machine = engine.scope.machine
        if machine is None:
            return ""
        return _have_mask(arch.name for arch in machine.archs)


@dataclass(frozen=True)
class MachineNameLiteral(Statement):
    def execute(self, engine: "TemplateEngine") -> str:
        machine = engine.scope.machine
        return f'"{machine.name}"' if machine is not None else ""


@dataclass(frozen=True)
class KernelNameLiteral(Statement):
    def execute(self, engine: "TemplateEngine") -> str:
        kernel = engine.scope.kernel
        return f'"{kernel.name}"' if kernel is not None else ""


@dataclass(frozen=True)
class ImplNameList(Statement):
    def execute(self, engine: "TemplateEngine") -> str:
        return _brace_list(f'"{impl.name}"' for impl in engine.scratch.impls)


@dataclass(frozen=True)
class ImplDepsList(Statement):
    def execute(self, engine: "TemplateEngine") -> str:
        return _brace_list(_have_mask(impl.sorted_deps) or "0" for impl in engine.scratch.impls)


@dataclass(frozen=True)
class ImplAlignList(Statement):
    def execute(self, engine: "TemplateEngine") -> str:
        return _brace_list("true" if impl.is_aligned else "false" for impl in engine.scratch.impls)


@dataclass(frozen=True)
class ImplFunctionList(Statement):
    def execute(self, engine: "TemplateEngine") -> str:
        kernel = engine.scope.kernel
        if kernel is None:
            return ""
        return _brace_list(f"{kernel.name}_{impl.name}" for impl in engine.scratch.impls)


@dataclass(frozen=True)
class ImplCount(Statement):
    def execute(self, engine: "TemplateEngine") -> str:
        return str(len(engine.scratch.impls))


@dataclass(frozen=True)
class CountArchs(Statement):
    """Caches the architecture count for ``${len_archs}``."""

    def execute(self, engine: "TemplateEngine") -> str:
        engine.scratch.len_archs = len(engine.context.archs)
        return ""


@dataclass(frozen=True)
class JoinParams(Statement):
    """``NAME = 'SEP'.join(params)`` binds the selected check's params."""
    name: str = ""
    separator: str = ""

    def execute(self, engine: "TemplateEngine") -> str:
        check = engine.scope.check
        engine.symbols[self.name] = self.separator.join(check.params) if check is not None else ""
        return ""


_PATTERNS: Tuple[Tuple[re.Pattern, type], ...] = tuple(
    (re.compile(pattern), kind)
    for pattern, kind in (
        (r"this_machine\s*=\s*machine_dict\[args\[0\]\]", SelectMachine),
        (r"arch_names\s*=\s*this_machine\.arch_names", SelectArchNames),
        (r"num_open_parens\s*=\s*0", ResetParens),
        (r"num_open_parens\s*\+=\s*1", IncrementParens),
        (r"end_open_parens\s*=\s*'\)'\*num_open_parens", CloseParens),
        (r"impls\s*=\s*kern\.get_impls\(arch_names\)", SelectImpls),
        (r"make_arch_have_list\s*=", ArchHaveList),
        (r"this_machine_name\s*=", MachineNameLiteral),
        (r"kern_name\s*=", KernelNameLiteral),
        (r"make_impl_name_list\s*=", ImplNameList),
        (r"make_impl_deps_list\s*=", ImplDepsList),
        (r"make_impl_align_list\s*=", ImplAlignList),
        (r"make_impl_fcn_list\s*=", ImplFunctionList),
        (r"len_impls\s*=", ImplCount),
        (r"len_archs\s*=\s*len\(archs\)", CountArchs),
    )
)

_JOIN_RE = re.compile(r"""(\w+)\s*=\s*(['"])(.*?)\2\.join\(params\)""")


@lru_cache(maxsize=256)
def parse_statement(code: str) -> Statement:
    """Classify one line of statement code."""
    code = code.strip()
    for pattern, kind in _PATTERNS:
        if pattern.search(code):
            return kind(code)

    match = _JOIN_RE.search(code)
    if match:
        return JoinParams(code, name=match.group(1), separator=match.group(3))

    return Unrecognized(code)


def parse_statements(block: str) -> List[Statement]:
    """Classify a multi-line block, one statement per non-blank line."""
    return [parse_statement(line) for line in block.split("\n") if line.strip()]
