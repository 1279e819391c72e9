# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Tests for %if condition evaluation."""

import pytest

from volk_gen.template import evaluate_condition

VALUES = {
    "arch.name": "sse2",
    "kern.name": "volk_16i_max_star_16i",
    "kern.has_dispatcher": "",
    "this_machine.alignment": "16",
    "arg_type": "const float*",
    "i": "0",
    "flag.zero": "0",
    "flag.false": "false",
}


def resolve(expr):
    return VALUES.get(expr.strip(), "")


@pytest.mark.parametrize("cond,expected", [
    ('arch.name[:3] == "sse"', True),
    ('arch.name[:3] == "avx"', False),
    ("'*' in arg_type", True),
    ("'&' in arg_type", False),
    ('"sse" in arch.name', True),
    ('"neon" in arch.name', False),
    ("kern.name in deprecated_kernels", True),
    ("arch.name in deprecated_kernels", False),
    ("kern.name in other_list", False),
    ("i == 0", True),
    ("i != 0", False),
    ('arch.name == "sse2"', True),
    ("this_machine.alignment == 16", True),
    ("unknown == 0", False),
    ("arch.name", True),
    ("kern.has_dispatcher", False),
    ("flag.zero", False),
    ("flag.false", False),
    ("missing.path", False),
    ("bare_name", False),
    ("not arch.name", False),
    ("not missing.path", False),
])
def test_single_forms(cond, expected):
    assert evaluate_condition(cond, resolve) is expected


def test_or_and():
    assert evaluate_condition('"avx" in arch.name or i == 0', resolve) is True
    assert evaluate_condition('"sse" in arch.name and kern.has_dispatcher', resolve) is False
    assert evaluate_condition('arch.name and i == 0 and "sse" in arch.name', resolve) is True


def test_or_splits_at_first_occurrence():
    # "a or b and c" is evaluated as "a or (b and c)"
    assert evaluate_condition('arch.name or missing.path and missing.path', resolve) is True
