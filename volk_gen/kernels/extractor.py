# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Recover kernels and their implementations from kernel header files.

Each header ``volk_<kernel>.h`` wraps its implementations in an include
guard; every implementation sits in a ``#ifdef LV_HAVE_<FEATURE>`` block
beneath it. The block's header gives the feature dependencies, the function
signature gives the implementation name and argument list.
"""

import logging
import re
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

from volk_gen._internal.io import read_text

from .comments import remove_comments
from .sections import (
    DEFAULT_MAX_DEPTH,
    GuardedSection,
    Section,
    flatten,
    parse_sections,
)
from .types import DISPATCHER_IMPL, GENERIC_IMPL, Arg, Impl, Kernel

logger = logging.getLogger(__name__)

_DEP_RE = re.compile(r"LV_HAVE_(\w+)")


def split_arg(param: str) -> Optional[Arg]:
    """Split ``const float* in`` into ``("const float*", "in")``.

    The name is the trailing identifier; everything before it is the type.
    Returns None when either part is empty.
    """
    param = param.strip()
    end = len(param)
    start = end
    while start > 0 and (param[start - 1].isalnum() or param[start - 1] == "_"):
        start -= 1
    arg_name = param[start:end]
    arg_type = param[:start].strip()
    if not arg_name or not arg_type:
        return None
    return arg_type, arg_name


def parse_args(kernel_name: str, text: str) -> Tuple[Arg, ...]:
    match = re.search(re.escape(kernel_name) + r"\w*\s*\(([^)]*)\)", text)
    if match is None:
        return ()
    args = []
    for param in match.group(1).split(","):
        arg = split_arg(param)
        if arg is not None:
            args.append(arg)
    return tuple(args)


def parse_impl(kernel_name: str, header: str, body: Sequence[Section]) -> Impl:
    """Build one implementation from its guard header and body sections."""
    deps = frozenset(dep.lower() for dep in _DEP_RE.findall(header))

    code = flatten(body)
    pre_brace = code.split("{", 1)[0]

    match = re.search(re.escape(kernel_name) + r"_(\w+)\s*\(", pre_brace)
    if match is not None:
        name = match.group(1)
    elif deps:
        name = sorted(deps)[0]
    else:
        name = ""

    return Impl(name=name, deps=deps, args=parse_args(kernel_name, pre_brace))


def _impl_candidates(sections: Sequence[Section]) -> Iterator[GuardedSection]:
    for section in sections:
        if not isinstance(section, GuardedSection):
            continue
        if "ifndef" not in section.header.lower():
            continue
        for sub in section.children:
            if not isinstance(sub, GuardedSection):
                continue
            if "if" in sub.header.lower() and "LV_HAVE_" in sub.header:
                yield sub


def parse_kernel_text(
    name: str,
    code: str,
    max_guard_depth: int = DEFAULT_MAX_DEPTH,
    check_signatures: bool = True,
) -> Optional[Kernel]:
    """Parse the header text of kernel ``name``.

    Returns None when the header yields no implementations or lacks a
    ``generic`` one.
    """
    sections = parse_sections(remove_comments(code), max_guard_depth)

    impls: List[Impl] = []
    for candidate in _impl_candidates(sections):
        impl = parse_impl(name, candidate.header, candidate.children)
        if not impl.name:
            logger.warning(f"{name}: no implementation name under '{candidate.header.strip()}', skipping.")
            continue
        impls.append(impl)

    if not impls:
        logger.debug(f"{name}: no implementations found")
        return None

    if not any(impl.name == GENERIC_IMPL for impl in impls):
        logger.warning(f"{name} does not have a generic protokernel, skipping.")
        return None

    has_dispatcher = False
    for index, impl in enumerate(impls):
        if impl.name == DISPATCHER_IMPL:
            del impls[index]
            has_dispatcher = True
            break

    args = impls[0].args if impls else ()
    if check_signatures:
        for impl in impls[1:]:
            if impl.args != args:
                logger.warning(f"{name}: signature of implementation '{impl.name}' differs from '{impls[0].name}'")

    return Kernel(name=name, impls=tuple(impls), args=args, has_dispatcher=has_dispatcher)


def parse_kernel_file(
    path: Union[str, Path],
    max_guard_depth: int = DEFAULT_MAX_DEPTH,
    check_signatures: bool = True,
) -> Optional[Kernel]:
    path = Path(path)
    return parse_kernel_text(path.stem, read_text(path), max_guard_depth, check_signatures)


class KernelCatalog:
    """Kernels parsed from a directory of headers, ordered by file path."""

    def __init__(self, kernels: Sequence[Kernel] = ()):
        self._kernels = tuple(kernels)
        self._by_name: Dict[str, Kernel] = {k.name: k for k in self._kernels}

    @classmethod
    def from_directory(
        cls,
        directory: Union[str, Path],
        suffix: str = ".h",
        max_guard_depth: int = DEFAULT_MAX_DEPTH,
        check_signatures: bool = True,
    ) -> "KernelCatalog":
        directory = Path(directory)
        files = sorted(p for p in directory.iterdir() if p.is_file() and p.suffix == suffix)
        logger.debug(f"Scanning {len(files)} kernel headers in {directory}")

        kernels = []
        for path in files:
            kernel = parse_kernel_file(path, max_guard_depth, check_signatures)
            if kernel is not None:
                kernels.append(kernel)

        logger.info(f"Loaded {len(kernels)} kernels from {directory}")
        return cls(kernels)

    @property
    def kernels(self) -> Tuple[Kernel, ...]:
        return self._kernels

    def get(self, name: str) -> Optional[Kernel]:
        return self._by_name.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Kernel]:
        return iter(self._kernels)

    def __len__(self) -> int:
        return len(self._kernels)
