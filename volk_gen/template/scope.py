# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Render-time selection state.

``Scope`` records which catalog entries are currently selected and is never
mutated; loops derive a child scope per element. ``Scratch`` holds the few
values that statements update while rendering and that flow back out of
nested loop bodies.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from volk_gen.catalog import Arch, Check, Machine
from volk_gen.kernels import Impl, Kernel

# Loop variable kinds and the expression prefix each one stands for.
KERNEL = "kernel"
ARCH = "arch"
MACHINE = "machine"
CHECK = "check"
PARAMS = "params"
ARG_TYPE = "arg_type"
ARG_NAME = "arg_name"
INDEX = "index"

CANONICAL_NAMES = {
    KERNEL: "kern",
    ARCH: "arch",
    MACHINE: "machine",
    CHECK: "check",
    PARAMS: "params",
    ARG_TYPE: "arg_type",
    ARG_NAME: "arg_name",
    INDEX: "i",
}


@dataclass(frozen=True)
class Scope:
    kernel: Optional[Kernel] = None
    arch: Optional[Arch] = None
    machine: Optional[Machine] = None
    arg_index: Optional[int] = None
    check_index: Optional[int] = None
    enum_index: Optional[int] = None
    aliases: Tuple[Tuple[str, str], ...] = ()

    def derive(self, aliases: Tuple[Tuple[str, str], ...] = (), **changes) -> "Scope":
        """Child scope with ``changes`` applied and ``aliases`` shadowing existing ones."""
        if aliases:
            names = {name for name, _ in aliases}
            changes["aliases"] = tuple(aliases) + tuple(a for a in self.aliases if a[0] not in names)
        return replace(self, **changes)

    def alias_kind(self, name: str) -> Optional[str]:
        for alias, kind in self.aliases:
            if alias == name:
                return kind
        return None

    def canonical(self, expr: str) -> str:
        """Rewrite a loop variable prefix (``m.name``) to its canonical form (``machine.name``)."""
        head, dot, rest = expr.partition(".")
        kind = self.alias_kind(head)
        if kind is None:
            return expr
        return CANONICAL_NAMES[kind] + dot + rest

    @property
    def arg(self) -> Optional[Tuple[str, str]]:
        if self.kernel is None or self.arg_index is None:
            return None
        if 0 <= self.arg_index < len(self.kernel.args):
            return self.kernel.args[self.arg_index]
        return None

    @property
    def check(self) -> Optional[Check]:
        if self.arch is None or self.check_index is None:
            return None
        if 0 <= self.check_index < len(self.arch.checks):
            return self.arch.checks[self.check_index]
        return None


@dataclass
class Scratch:
    num_open_parens: int = 0
    end_open_parens: str = ""
    impls: Tuple[Impl, ...] = field(default_factory=tuple)
    len_archs: int = 0

    def copy(self) -> "Scratch":
        return replace(self)

    def update_from(self, other: "Scratch") -> None:
        """Take over the values a nested render may have changed."""
        self.num_open_parens = other.num_open_parens
        self.end_open_parens = other.end_open_parens
        self.impls = other.impls
