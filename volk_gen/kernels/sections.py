# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Preprocessor guard sectioning.

Splits source into a tree of plain text and ``#if``-guarded sections::

    #ifndef INCLUDED_volk_32f_foo_H        GuardedSection(header="#ifndef ...")
    #ifdef LV_HAVE_GENERIC                   GuardedSection(header="#ifdef LV_HAVE_GENERIC")
    static inline void ...                     TextSection(...)
    #endif
    #endif

``#else``/``#elif`` at the outermost level close the current section and
open a sibling headed by that directive. Guarded bodies are split again,
recursively, down to a maximum depth.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Sequence, Union

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 50

_DIRECTIVE_RE = re.compile(r"\s*#\s*(\w+)(.*)")
_OPEN_DIRECTIVES = ("if", "ifdef", "ifndef")
_BRANCH_DIRECTIVES = ("else", "elif")
TEXT_HEADER = "text"


@dataclass
class TextSection:
    """Code outside any conditional."""
    body: str

    @property
    def header(self) -> str:
        return TEXT_HEADER


@dataclass
class GuardedSection:
    """Code inside one branch of a conditional.

    ``truncated`` is set when the depth limit stopped the body from being
    split further; ``children`` is then empty.
    """
    header: str
    body: str
    children: List["Section"] = field(default_factory=list)
    truncated: bool = False


Section = Union[TextSection, GuardedSection]


def _line_kind(line: str) -> str:
    match = _DIRECTIVE_RE.fullmatch(line)
    if match is None:
        return "normal"
    directive = match.group(1)
    if directive in _OPEN_DIRECTIVES:
        return "if"
    if directive in _BRANCH_DIRECTIVES:
        return "else"
    if directive == "endif":
        return "end"
    return "normal"


def _make_section(header: str, body: str) -> Section:
    if header == TEXT_HEADER:
        return TextSection(body)
    return GuardedSection(header=header, body=body)


def _split(code: str) -> List[Section]:
    sections: List[Section] = []
    current: List[str] = []
    header = TEXT_HEADER
    depth = 0

    def flush():
        body = "".join(current)
        if body.strip():
            sections.append(_make_section(header, body))
        current.clear()

    for line in code.split("\n"):
        kind = _line_kind(line)
        if kind == "if":
            depth += 1
        elif kind == "end":
            depth -= 1

        if depth == 1 and kind in ("if", "else"):
            flush()
            header = line
            continue
        if depth == 0 and kind == "end":
            flush()
            header = TEXT_HEADER
            continue

        current.append(line + "\n")

    flush()
    return sections


def parse_sections(code: str, max_depth: int = DEFAULT_MAX_DEPTH, _depth: int = 0) -> List[Section]:
    """Split ``code`` into a section tree, descending at most ``max_depth`` levels."""
    sections = _split(code)
    for section in sections:
        if not isinstance(section, GuardedSection):
            continue
        if _depth + 1 > max_depth:
            logger.warning(f"#ifdef nesting deeper than {max_depth} levels, not descending into '{section.header.strip()}'")
            section.truncated = True
            continue
        section.children = parse_sections(section.body, max_depth, _depth + 1)
    return sections


def flatten(sections: Sequence[Section]) -> str:
    """Concatenate the text of a section tree, dropping guard structure."""
    parts = []
    for section in sections:
        if isinstance(section, TextSection):
            parts.append(section.body)
        else:
            parts.append(flatten(section.children))
    return "".join(parts)
