"""Compact regex character classes over the X12 basic character set."""

from __future__ import annotations

import re
import string
from collections.abc import Iterable
from dataclasses import dataclass

from x12lite.delimiters import Delimiters

# Basic Character Set, plus '#' from the Extended Character Set
BASIC_CHARSET: frozenset[str] = frozenset(
    string.ascii_uppercase + string.digits + " " + "!\"#&'()*+,-./:;=?"
)

# characters with meaning inside a regex character class
_CLASS_SPECIAL = set("^[]-\\")


def _escape(ch: str) -> str:
    return "\\" + ch if ch in _CLASS_SPECIAL else ch


def char_ranges(chars: Iterable[str]) -> str:
    """Collapse characters into the body of a character class.

    Runs of consecutive code points become ``first-last``; singletons stay
    literal. ``{"A", "B", "C", "E", "F", "G"}`` gives ``"A-CE-G"``.
    """
    ordered = sorted(set(chars))
    runs: list[list[str]] = []
    for ch in ordered:
        if runs and ord(ch) == ord(runs[-1][-1]) + 1:
            runs[-1].append(ch)
        else:
            runs.append([ch])
    parts = []
    for run in runs:
        ends = [run[0], run[-1]] if len(run) > 1 else [run[0]]
        parts.append("-".join(_escape(ch) for ch in ends))
    return "".join(parts)


def compile_char_class(chars: Iterable[str], invert: bool = False) -> re.Pattern[str]:
    """Build ``[...]`` (or ``[^...]`` when ``invert``) from ``chars``."""
    return re.compile(f"[{'^' if invert else ''}{char_ranges(chars)}]")


@dataclass(frozen=True)
class CharClasses:
    invalid_in_text: re.Pattern[str]
    invalid_in_values: re.Pattern[str]

    @staticmethod
    def for_delimiters(delims: Delimiters) -> CharClasses:
        seps = set(delims)
        return CharClasses(
            invalid_in_text=compile_char_class(BASIC_CHARSET | seps, invert=True),
            invalid_in_values=compile_char_class(BASIC_CHARSET - seps, invert=True),
        )
