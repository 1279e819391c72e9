# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""``%if`` condition evaluation.

Boolean operators are split at their first occurrence with no regard for
quoting or grouping; the forms below are tried in order and anything
unrecognized is false.
"""

import re
from typing import Callable

DEPRECATED_KERNELS = frozenset({
    "volk_16i_x5_add_quad_16i_x4",
    "volk_16i_branch_4_state_8",
    "volk_16i_max_star_16i",
    "volk_16i_max_star_horizontal_16i",
    "volk_16i_permute_and_scalar_add",
    "volk_16i_x4_quad_max_star_16i",
    "volk_32fc_s32fc_multiply_32fc",
    "volk_32fc_s32fc_x2_rotator_32fc",
    "volk_32fc_x2_s32fc_multiply_conjugate_add_32fc",
})

_SLICE_EQ_RE = re.compile(r'(\w+(?:\.\w+)*)\[:(\d+)\]\s*==\s*"([^"]*)"')
_SINGLE_QUOTE_IN_RE = re.compile(r"'([^']+)'\s+in\s+(\w+)")
_DOUBLE_QUOTE_IN_RE = re.compile(r'"([^"]+)"\s+in\s+(\S+)')
_MEMBER_IN_RE = re.compile(r"(\S+)\s+in\s+(\S+)")
_COMPARE_RE = re.compile(r"(.+?)\s*(==|!=)\s*(.+)")
_STRING_LITERAL_RE = re.compile(r"""(['"])(.*)\1""")
_INT_LITERAL_RE = re.compile(r"-?\d+")

Resolver = Callable[[str], str]


def _operand(text: str, resolve: Resolver) -> str:
    text = text.strip()
    literal = _STRING_LITERAL_RE.fullmatch(text)
    if literal:
        return literal.group(2)
    if _INT_LITERAL_RE.fullmatch(text):
        return text
    return resolve(text)


def evaluate_condition(cond: str, resolve: Resolver) -> bool:
    """Evaluate ``cond`` using ``resolve`` to turn expressions into text."""
    c = cond.strip()

    left, sep, right = c.partition(" or ")
    if sep:
        return evaluate_condition(left, resolve) or evaluate_condition(right, resolve)

    left, sep, right = c.partition(" and ")
    if sep:
        return evaluate_condition(left, resolve) and evaluate_condition(right, resolve)

    match = _SLICE_EQ_RE.fullmatch(c)
    if match:
        return resolve(match.group(1))[:int(match.group(2))] == match.group(3)

    match = _SINGLE_QUOTE_IN_RE.fullmatch(c) or _DOUBLE_QUOTE_IN_RE.fullmatch(c)
    if match:
        return match.group(1) in resolve(match.group(2))

    match = _MEMBER_IN_RE.fullmatch(c)
    if match:
        if match.group(2) == "deprecated_kernels":
            return resolve(match.group(1)) in DEPRECATED_KERNELS
        return False

    match = _COMPARE_RE.fullmatch(c)
    if match:
        equal = _operand(match.group(1), resolve) == _operand(match.group(3), resolve)
        return equal if match.group(2) == "==" else not equal

    if "." in c:
        value = resolve(c)
        return value not in ("", "0", "false")

    return False
