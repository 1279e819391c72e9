# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Tests for C comment removal."""

from volk_gen.kernels import remove_comments


def test_line_comment_keeps_newline():
    assert remove_comments("a; // note\nb;") == "a; \nb;"


def test_block_comment_removed():
    assert remove_comments("a/* x\n y */b") == "ab"


def test_markers_inside_string_literal_kept():
    code = 'puts("// not a comment /* nor this */");'
    assert remove_comments(code) == code


def test_escaped_quote_inside_string():
    code = 'x = "a\\"// still string"; // gone'
    assert remove_comments(code) == 'x = "a\\"// still string"; '


def test_char_literal():
    assert remove_comments("c = '/'; /* x */") == "c = '/'; "
