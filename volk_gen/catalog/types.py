# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Architecture and machine records.

Both are frozen once parsed. Ordered collections are stored as tuples and
the per-compiler flag table as a read-only mapping.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple


@dataclass(frozen=True)
class Check:
    """A CPU feature-detection check: function name plus literal parameters."""
    name: str
    params: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Arch:
    """A named ISA target with compiler flags, alignment and detection checks."""
    name: str
    environment: str = ""
    include: str = ""
    alignment: int = 1
    checks: Tuple[Check, ...] = ()
    flags: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self):
        if not isinstance(self.flags, MappingProxyType):
            frozen = {compiler: tuple(values) for compiler, values in self.flags.items()}
            object.__setattr__(self, "flags", MappingProxyType(frozen))
        object.__setattr__(self, "checks", tuple(self.checks))

    def is_supported(self, compiler: str) -> bool:
        """An arch without compiler-specific flags is supported everywhere."""
        return not self.flags or compiler in self.flags

    def get_flags(self, compiler: str) -> list[str]:
        return list(self.flags.get(compiler, ()))


@dataclass(frozen=True)
class Machine:
    """A concrete dispatch target: an ordered combination of architectures."""
    name: str
    archs: Tuple[Arch, ...]

    @property
    def arch_names(self) -> Tuple[str, ...]:
        return tuple(arch.name for arch in self.archs)

    @property
    def alignment(self) -> int:
        """Strictest alignment over the member architectures."""
        return max((arch.alignment for arch in self.archs), default=1)
