"""Decide whether two scheme files are versions of the same color scheme.

The maintainer line is the strongest signal, but it is often missing or
written differently between releases ("Hans Fugal" vs
"Hans Fugal <hans@fugal.net>"), so token-wise comparisons and raw line
comparisons act as fallbacks. The order of the checks matters and must not
be rearranged.
"""
from typing import Sequence

from .headers import ColorSchemeFile

HEAD_COMPARE_LINES = 6
HEAD_MIN_EQUAL = 5
TAIL_COMPARE_LINES = 10


def _maintainer_tokens_match(m0: str, m1: str) -> bool:
    t0 = m0.split()
    t1 = m1.split()
    if not t0 or not t1:
        return False

    # Same long name with only the trailing part (usually an email) differing
    if len(t0) == len(t1) and len(t0) > 3 and t0[:-1] == t1[:-1]:
        return True

    # Same email or surname at the end
    if t0[-1] == t1[-1]:
        return True

    # Same middle token, e.g. the surname in "First Last <mail>"
    if len(t0) >= 3 and len(t1) >= 3 and t0[1] == t1[1]:
        return True

    return False


def _head_lines_match(h0: Sequence[str], h1: Sequence[str]) -> bool:
    equal = 0
    for i in range(HEAD_COMPARE_LINES):
        if i < len(h0) and i < len(h1) and h0[i] == h1[i]:
            equal += 1
    return equal >= HEAD_MIN_EQUAL


def _tail_lines_match(t0: Sequence[str], t1: Sequence[str]) -> bool:
    if len(t0) < TAIL_COMPARE_LINES or len(t1) < TAIL_COMPARE_LINES:
        return False
    return list(t0[-TAIL_COMPARE_LINES:]) == list(t1[-TAIL_COMPARE_LINES:])


def same_scheme(a: ColorSchemeFile, b: ColorSchemeFile) -> bool:
    """Return True when `a` and `b` look like the same scheme.

    A file is always the same scheme as an identical copy of itself.

    Checks, first hit wins:
    1. identical non-empty maintainers
    2. partial maintainer token matches (both maintainers present)
    3. at least 5 of the first 6 lines identical
    4. the last 10 lines identical
    """
    if (a.size_bytes, a.head_lines, a.tail_lines) == (b.size_bytes, b.head_lines, b.tail_lines):
        return True

    m0 = a.maintainer
    m1 = b.maintainer

    if m0 and m1:
        if m0 == m1:
            return True
        if _maintainer_tokens_match(m0, m1):
            return True

    if _head_lines_match(a.head_lines, b.head_lines):
        return True

    if _tail_lines_match(a.tail_lines, b.tail_lines):
        return True

    return False
