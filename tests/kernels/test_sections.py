# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Tests for preprocessor guard sectioning."""

import logging

from volk_gen.kernels import GuardedSection, TextSection, flatten, parse_sections


CODE = """\
#ifndef GUARD_H
#define GUARD_H
#ifdef LV_HAVE_GENERIC
int generic;
#endif
#if LV_HAVE_SSE
int sse;
#else
int fallback;
#endif
#endif
trailing;
"""


def test_top_level_structure():
    sections = parse_sections(CODE)
    assert [type(s) for s in sections] == [GuardedSection, TextSection]
    assert sections[0].header == "#ifndef GUARD_H"
    assert sections[1].body == "trailing;\n\n"


def test_children_and_else_branch():
    guard = parse_sections(CODE)[0]
    headers = [child.header for child in guard.children]
    assert headers == ["text", "#ifdef LV_HAVE_GENERIC", "#if LV_HAVE_SSE", "#else"]
    assert guard.children[3].children == [TextSection("int fallback;\n\n")]


def test_whitespace_only_sections_not_emitted():
    sections = parse_sections("\n\n#ifdef X\n\n#endif\n\n")
    assert sections == []


def test_flatten_drops_guards():
    guard = parse_sections(CODE)[0]
    assert flatten(guard.children) == "#define GUARD_H\nint generic;\n\nint sse;\n\nint fallback;\n\n"


def test_depth_limit_truncates(caplog):
    caplog.set_level(logging.WARNING)
    code = "#ifdef A\n#ifdef B\n#ifdef C\nx;\n#endif\n#endif\n#endif\n"
    [a] = parse_sections(code, max_depth=1)
    [b] = a.children
    assert b.header == "#ifdef B"
    assert b.truncated is True
    assert b.children == []
    assert "nesting deeper than 1" in caplog.text
    assert a.truncated is False
