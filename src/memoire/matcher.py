"""Key lookup: exact first, then case-insensitive ordered subsequence."""

from __future__ import annotations

from collections.abc import Sequence

from memoire.models import Entry


def find_exact(entries: Sequence[Entry], key: str) -> int | None:
    for i, entry in enumerate(entries):
        if entry.key == key:
            return i
    return None


def fuzzy_match(key: str, pattern: str) -> bool:
    """True if every character of *pattern* occurs in *key* in the same order.

    ``fuzzy_match("aXbYc", "abc")`` is true, ``fuzzy_match("acb", "abc")`` is not.
    """
    remaining = iter(key.lower())
    return all(ch in remaining for ch in pattern.lower())


def find_fuzzy(entries: Sequence[Entry], pattern: str) -> int | None:
    """Index of the exact match if any, else of the first subsequence match."""
    exact = find_exact(entries, pattern)
    if exact is not None:
        return exact
    for i, entry in enumerate(entries):
        if fuzzy_match(entry.key, pattern):
            return i
    return None
