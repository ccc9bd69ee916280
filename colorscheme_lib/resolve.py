"""Pick the obsolete file out of two copies of the same scheme.

Versions and years are compared as plain strings, not numerically, so
version "9" is considered newer than "10". Callers rely on that ordering;
do not "fix" it.
"""
from typing import Optional

from .headers import ColorSchemeFile
from .similarity import same_scheme


def _older(v0: Optional[str], v1: Optional[str], a: ColorSchemeFile, b: ColorSchemeFile) -> Optional[ColorSchemeFile]:
    if not v0 or not v1 or v0 == v1:
        return None
    return a if v0 < v1 else b


def resolve(a: ColorSchemeFile, b: ColorSchemeFile) -> ColorSchemeFile:
    """Return whichever of `a`/`b` should be discarded.

    Only meaningful when `same_scheme(a, b)` holds. Rules, first decision wins:
    1. both have a version: the lexicographically smaller one goes
    2. both have a year: the earlier one goes
    3. the smaller file goes; on equal sizes `b` goes
    """
    loser = _older(a.version, b.version, a, b)
    if loser is not None:
        return loser

    loser = _older(a.year, b.year, a, b)
    if loser is not None:
        return loser

    if a.size_bytes < b.size_bytes:
        return a
    return b


def should_delete(a: ColorSchemeFile, b: ColorSchemeFile) -> Optional[ColorSchemeFile]:
    """Return the file to delete when `a` and `b` are the same scheme, else None."""
    if not same_scheme(a, b):
        return None
    return resolve(a, b)
