# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Machine catalog built from machines.xml.

A machine lists architecture names; an entry written as ``a|b|c`` expands
the machine into one variant per alternative. Each non-empty alternative
yields ``<name>_<alternative>`` with that arch in the slot, an empty
alternative yields ``<name>`` with the slot left out::

    <machine name="avx"><archs>generic sse avx|</archs></machine>

registers ``avx_avx`` (generic, sse, avx) and ``avx`` (generic, sse).
"""

import logging
from types import MappingProxyType
from typing import Iterator, List, Optional, Sequence, Tuple

from .archs import ArchCatalog
from .types import Machine
from .xml_subset import parse_document

logger = logging.getLogger(__name__)


def expand_machine(name: str, entries: Sequence[str]) -> List[Tuple[str, List[str]]]:
    """Expand ``|`` alternation into concrete ``(name, arch_names)`` pairs.

    Only the first entry holding a ``|`` is split per call; the recursion
    handles the rest, and each level removes one alternation entry.
    """
    for index, entry in enumerate(entries):
        if "|" not in entry:
            continue
        head = list(entries[:index])
        tail = list(entries[index + 1:])
        expanded = []
        for alternative in entry.split("|"):
            if alternative:
                expanded.extend(expand_machine(f"{name}_{alternative}", head + [alternative] + tail))
            else:
                expanded.extend(expand_machine(name, head + tail))
        return expanded

    return [(name, list(entries))]


def build_machine(name: str, arch_names: Sequence[str], archs: ArchCatalog) -> Optional[Machine]:
    """Resolve arch names; None if any is unknown or none remain."""
    resolved = []
    seen = set()
    for arch_name in arch_names:
        if not arch_name or arch_name in seen:
            continue
        arch = archs.get(arch_name)
        if arch is None:
            logger.debug(f"Machine '{name}' dropped: unknown arch '{arch_name}'")
            return None
        seen.add(arch_name)
        resolved.append(arch)

    if not resolved:
        logger.debug(f"Machine '{name}' dropped: no architectures")
        return None

    return Machine(name=name, archs=tuple(resolved))


class MachineCatalog:
    """Ordered, read-only collection of machines.

    Lookup by name returns the last machine registered under that name.
    """

    def __init__(self, machines: Tuple[Machine, ...] = ()):
        self._machines = tuple(machines)
        self._by_name = MappingProxyType({m.name: m for m in self._machines})

    @classmethod
    def from_text(cls, text: str, archs: ArchCatalog) -> "MachineCatalog":
        machines = []
        for element in parse_document(text, "machine"):
            name = element.attrs.get("name", "")
            if not name:
                logger.debug("Skipping <machine> element without a name attribute")
                continue
            archs_element = element.find("archs")
            entries = archs_element.text.split() if archs_element is not None else []

            for variant_name, arch_names in expand_machine(name, entries):
                machine = build_machine(variant_name, arch_names, archs)
                if machine is not None:
                    machines.append(machine)

        logger.debug(f"Registered {len(machines)} machines")
        return cls(tuple(machines))

    @property
    def machines(self) -> Tuple[Machine, ...]:
        return self._machines

    def get(self, name: str) -> Optional[Machine]:
        return self._by_name.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Machine]:
        return iter(self._machines)

    def __len__(self) -> int:
        return len(self._machines)
