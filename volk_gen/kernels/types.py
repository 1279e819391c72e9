# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Kernel and implementation records recovered from kernel headers."""

import re
from dataclasses import dataclass
from typing import AbstractSet, FrozenSet, Tuple

GENERIC_IMPL = "generic"
DISPATCHER_IMPL = "dispatcher"

Arg = Tuple[str, str]


@dataclass(frozen=True)
class Impl:
    """One feature-specialized implementation of a kernel."""
    name: str
    deps: FrozenSet[str] = frozenset()
    args: Tuple[Arg, ...] = ()

    @property
    def is_aligned(self) -> bool:
        return self.name.startswith("a_")

    @property
    def sorted_deps(self) -> Tuple[str, ...]:
        return tuple(sorted(self.deps))


@dataclass(frozen=True)
class Kernel:
    """A numeric routine and its implementations, in source order.

    ``args`` come from the first implementation and are assumed to be shared
    by every implementation of the kernel.
    """
    name: str
    impls: Tuple[Impl, ...]
    args: Tuple[Arg, ...] = ()
    has_dispatcher: bool = False

    @property
    def pname(self) -> str:
        return re.sub(r"^volk_", "p_", self.name)

    @property
    def arglist_types(self) -> str:
        return ", ".join(arg_type for arg_type, _ in self.args)

    @property
    def arglist_full(self) -> str:
        return ", ".join(f"{arg_type} {arg_name}" for arg_type, arg_name in self.args)

    @property
    def arglist_names(self) -> str:
        return ", ".join(arg_name for _, arg_name in self.args)

    def get_impls(self, arch_set: AbstractSet[str]) -> Tuple[Impl, ...]:
        """Implementations whose dependencies are all in ``arch_set``."""
        return tuple(impl for impl in self.impls if impl.deps <= arch_set)
