# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Scanner for the small XML subset used by archs.xml and machines.xml.

Only what the description files need is understood: ``<!-- -->`` comments,
elements with double-quoted attributes, text content, self-closing tags and
a fixed set of child tags. Anything else is skipped rather than rejected.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List

logger = logging.getLogger(__name__)

CHILD_TAGS = ("flag", "check", "param", "alignment", "environment", "include", "archs")

_ATTR_RE = re.compile(r'(\w+)\s*=\s*"([^"]*)"')


@dataclass
class Element:
    """One parsed element. Children are grouped by tag in CHILD_TAGS order."""
    tag: str
    attrs: Dict[str, str] = field(default_factory=dict)
    text: str = ""
    children: List["Element"] = field(default_factory=list)

    def find_all(self, tag: str) -> List["Element"]:
        return [child for child in self.children if child.tag == tag]

    def find(self, tag: str) -> "Element | None":
        for child in self.children:
            if child.tag == tag:
                return child
        return None


def strip_comments(text: str) -> str:
    """Remove ``<!-- ... -->`` comments. An unclosed comment drops the rest."""
    pieces = []
    pos = 0
    while pos < len(text):
        start = text.find("<!--", pos)
        if start == -1:
            pieces.append(text[pos:])
            break
        pieces.append(text[pos:start])
        end = text.find("-->", start)
        if end == -1:
            break
        pos = end + 3
    return "".join(pieces)


def parse_elements(text: str, tag: str) -> List[Element]:
    """Return every ``<tag ...>`` element found in ``text``, in document order.

    The scan is bounded by ``len(text) + 1`` iterations; hitting the bound
    stops the scan and keeps what was parsed so far.
    """
    elements = []
    open_re = re.compile(r"<" + re.escape(tag) + r"(?=[\s/>])")
    close_tag = f"</{tag}>"

    pos = 0
    max_iterations = len(text) + 1
    iterations = 0
    while True:
        match = open_re.search(text, pos)
        if match is None:
            break
        iterations += 1
        if iterations > max_iterations:
            logger.error(f"XML parsing exceeded maximum iterations for tag: {tag}")
            break

        start = match.start()
        tag_end = text.find(">", start)
        if tag_end == -1:
            break

        element = Element(tag=tag, attrs=dict(_ATTR_RE.findall(text[start:tag_end + 1])))

        if text[tag_end - 1] == "/":
            elements.append(element)
            pos = tag_end + 1
            continue

        close_pos = text.find(close_tag, tag_end)
        if close_pos == -1:
            logger.debug(f"Skipping <{tag}> without closing tag at offset {start}")
            pos = tag_end + 1
            continue

        inner = text[tag_end + 1:close_pos]
        element.text = inner.strip()
        for child_tag in CHILD_TAGS:
            element.children.extend(parse_elements(inner, child_tag))

        elements.append(element)
        pos = close_pos + len(close_tag)

    return elements


def parse_document(text: str, tag: str) -> List[Element]:
    """Strip comments and return the top-level ``tag`` elements."""
    return parse_elements(strip_comments(text), tag)
