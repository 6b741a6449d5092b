"""Selector grammar: ``seg(num)-fld(rep).com``.

Examples::

    EB            whole first EB segment
    EB(3)-4       field 4 of the third EB
    EB-4(2).1     component 1 of repetition 2 of field 4
    EB(?)         how many EB segments
    EB(*)-1       field 1 of every EB segment
    EB(+)-1       field 1 of a new EB segment (writes only)
    REF-2(?)      how many repetitions in field 2

An empty group ``()`` is an explicit index of zero, which differs from an
absent group (use the default).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

from x12lite.errors import BadSelector

Mode = Literal["new", "count", "all"]

SELECTOR_RE = re.compile(
    r"""^
    (..[^-.(]?)           # seg: eb
    (?:\((\d*|[+?*])\))?  # num: eb(3)
    [-.]?(\d+)?           # fld: eb(3)-4
    (?:\((\d*|[+?*])\))?  # rep: eb(3)-4(5)
    [-.]?(\d+)?\Z         # com: eb(3)-4(5).6
    """,
    re.VERBOSE,
)

_MODES: dict[str, Mode] = {"+": "new", "?": "count", "*": "all"}


@dataclass(frozen=True)
class Selector:
    tag: str
    occurrence: int | None = None
    occurrence_mode: Mode | None = None
    field: int | None = None
    repetition: int | None = None
    repetition_mode: Mode | None = None
    component: int | None = None

    def matches(self, tag: str) -> bool:
        return tag.upper() == self.tag.upper()

    @property
    def gathers(self) -> bool:
        return self.occurrence_mode == "all"


def _group(raw: str | None) -> tuple[int | None, Mode | None]:
    if raw is None:
        return None, None
    if raw in _MODES:
        return None, _MODES[raw]
    return int(raw or 0), None


def parse_selector(text: str) -> Selector:
    """Parse a selector string, raising ``BadSelector`` when it does not fit."""
    if not isinstance(text, str):
        raise BadSelector(f"bad selector {text!r}")
    return _parse(text)


@lru_cache(maxsize=1024)
def _parse(text: str) -> Selector:
    match = SELECTOR_RE.match(text)
    if not match:
        raise BadSelector(f"bad selector {text!r}")
    tag, num, fld, rep, com = match.groups()
    occurrence, occurrence_mode = _group(num)
    repetition, repetition_mode = _group(rep)
    return Selector(
        tag=tag,
        occurrence=occurrence,
        occurrence_mode=occurrence_mode,
        field=int(fld) if fld is not None else None,
        repetition=repetition,
        repetition_mode=repetition_mode,
        component=int(com) if com is not None else None,
    )
