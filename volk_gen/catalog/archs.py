# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Architecture catalog built from archs.xml."""

import logging
from types import MappingProxyType
from typing import Dict, Iterator, List, Optional, Tuple

from .types import Arch, Check
from .xml_subset import Element, parse_document

logger = logging.getLogger(__name__)


def _parse_alignment(element: Element, arch_name: str) -> Optional[int]:
    try:
        value = int(element.text)
    except ValueError:
        logger.warning(f"Arch '{arch_name}': invalid alignment '{element.text}', using default")
        return None
    if value < 1:
        logger.warning(f"Arch '{arch_name}': alignment must be positive, got {value}")
        return None
    return value


def arch_from_element(element: Element) -> Optional[Arch]:
    """Build an Arch from an ``<arch>`` element; None when it has no name."""
    name = element.attrs.get("name", "")
    if not name:
        logger.debug("Skipping <arch> element without a name attribute")
        return None

    flags: Dict[str, List[str]] = {}
    checks = []
    alignment = 1
    environment = ""
    include = ""

    for child in element.children:
        if child.tag == "flag":
            compiler = child.attrs.get("compiler", "")
            if compiler and child.text:
                flags.setdefault(compiler, []).append(child.text)
        elif child.tag == "check":
            check_name = child.attrs.get("name", "")
            params = tuple(p.text for p in child.find_all("param") if p.text)
            if check_name:
                checks.append(Check(check_name, params))
        elif child.tag == "alignment":
            parsed = _parse_alignment(child, name)
            if parsed is not None:
                alignment = parsed
        elif child.tag == "environment":
            environment = child.text
        elif child.tag == "include":
            include = child.text

    return Arch(
        name=name,
        environment=environment,
        include=include,
        alignment=alignment,
        checks=tuple(checks),
        flags=flags,
    )


class ArchCatalog:
    """Ordered, read-only collection of architectures keyed by name."""

    def __init__(self, archs: Tuple[Arch, ...] = ()):
        by_name: Dict[str, Arch] = {}
        ordered = []
        for arch in archs:
            if arch.name in by_name:
                logger.warning(f"Duplicate arch '{arch.name}' ignored")
                continue
            by_name[arch.name] = arch
            ordered.append(arch)
        self._archs = tuple(ordered)
        self._by_name = MappingProxyType(by_name)

    @classmethod
    def from_text(cls, text: str) -> "ArchCatalog":
        archs = []
        for element in parse_document(text, "arch"):
            arch = arch_from_element(element)
            if arch is not None:
                archs.append(arch)
        logger.debug(f"Parsed {len(archs)} architectures")
        return cls(tuple(archs))

    @property
    def archs(self) -> Tuple[Arch, ...]:
        return self._archs

    def get(self, name: str) -> Optional[Arch]:
        return self._by_name.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Arch]:
        return iter(self._archs)

    def __len__(self) -> int:
        return len(self._archs)
