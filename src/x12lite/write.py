"""Write engine: resolve a selector for mutation and apply a value.

Writes default to the last occurrence and create whatever structure is
missing: segments, fields, repetitions and components are padded with empty
values until the requested index exists. Every check runs before the rows are
touched, so a failed write leaves the document as it was.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Literal

from x12lite.delimiters import HEADER_TAG, Delimiters, isa_widths
from x12lite.errors import BadSelector, DelimiterConflict, ZeroIndex
from x12lite.selector import Selector

logger = logging.getLogger(__name__)

Level = Literal["field", "repetition", "component"]


class _Auto(Enum):
    NUMBER = "number"


# write this value to store the target segment's occurrence number
AUTO_NUMBER = _Auto.NUMBER


def _check(selector: Selector) -> Level:
    if selector.field == 0:
        raise ZeroIndex(f"zero index on field: {selector.tag}")
    if selector.component == 0:
        raise ZeroIndex(f"zero index on component: {selector.tag}")
    if selector.occurrence == 0 or selector.repetition == 0:
        raise ZeroIndex(f"zero index on occurrence or repetition: {selector.tag}")
    if selector.occurrence_mode == "count":
        raise BadSelector(f"'?' only applies to reads: {selector.tag}")
    if selector.repetition_mode in ("count", "all"):
        raise BadSelector(f"repetition '?' and '*' only apply to reads: {selector.tag}")

    has_rep = selector.repetition is not None or selector.repetition_mode is not None
    if not has_rep and selector.component is None:
        return "field"
    if selector.field is None:
        raise BadSelector(f"repetition or component without a field: {selector.tag}")
    return "repetition" if selector.component is None else "component"


def _join(value: object, sep: str) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return sep.join("" if part is None else str(part) for part in value)
    return str(value)


def shape_value(value: object, level: Level, delims: Delimiters) -> list[str]:
    """Join a value on its level's delimiter, reject higher delimiters, split back."""
    sep = {
        "field": delims.field,
        "repetition": delims.repetition,
        "component": delims.component,
    }[level]
    # line breaks split segments on parse, same as the terminator
    higher = {
        "field": (delims.segment, "\r", "\n"),
        "repetition": (delims.field, delims.segment, "\r", "\n"),
        "component": (delims.field, delims.repetition, delims.segment, "\r", "\n"),
    }[level]
    text = _join(value, sep)
    for ch in higher:
        if ch in text:
            raise DelimiterConflict(f"invalid separator {ch!r} for {level} value {text!r}")
    return text.split(sep)


def _pad(parts: list[str], size: int) -> None:
    if len(parts) < size:
        parts.extend([""] * (size - len(parts)))


def _targets(rows: list[list[str]], selector: Selector) -> list[tuple[int, list[str]]]:
    """Pick (occurrence number, row) targets, appending new segments as needed."""
    matches = [row for row in rows if row and selector.matches(row[0])]
    if selector.gathers:
        return list(enumerate(matches, 1))

    num = selector.occurrence
    if selector.occurrence_mode == "new":
        pad = 1
    elif num is None:
        if matches:
            return [(len(matches), matches[-1])]
        pad = 1
    elif num <= len(matches):
        return [(num, matches[num - 1])]
    else:
        pad = num - len(matches)

    tag = selector.tag.upper()
    created = [[tag] for _ in range(pad)]
    rows.extend(created)
    logger.debug("appended %d %s segment(s)", pad, tag)
    return [(len(matches) + pad, created[-1])]


def _write_fields(row: list[str], selector: Selector, parts: list[str]) -> None:
    if selector.field is None:
        row[1:] = parts
        return
    _pad(row, selector.field)
    row[selector.field : selector.field + len(parts)] = parts


def _field_reps(row: list[str], field: int, delims: Delimiters) -> list[str]:
    _pad(row, field + 1)
    return row[field].split(delims.repetition) if row[field] else []


def _write_repetitions(
    row: list[str], selector: Selector, parts: list[str], delims: Delimiters
) -> None:
    field = selector.field
    assert field is not None
    reps = _field_reps(row, field, delims)
    if selector.repetition_mode == "new":
        index = len(reps)
    else:
        index = (selector.repetition or 1) - 1
    _pad(reps, index)
    reps[index : index + len(parts)] = parts
    row[field] = delims.repetition.join(reps)


def _write_components(
    row: list[str], selector: Selector, parts: list[str], delims: Delimiters
) -> None:
    field, component = selector.field, selector.component
    assert field is not None and component is not None
    reps = _field_reps(row, field, delims)
    if selector.repetition_mode == "new":
        index = len(reps)
    elif selector.repetition is None:
        index = max(len(reps) - 1, 0)  # default to last
    else:
        index = selector.repetition - 1
    _pad(reps, index + 1)

    comps = reps[index].split(delims.component) if reps[index] else []
    _pad(comps, component - 1)
    comps[component - 1 : component - 1 + len(parts)] = parts
    reps[index] = delims.component.join(comps)
    row[field] = delims.repetition.join(reps)


def write(rows: list[list[str]], delims: Delimiters, selector: Selector, value: object) -> None:
    """Write ``value`` through ``selector`` into ``rows`` in place."""
    level = _check(selector)
    auto = value is AUTO_NUMBER
    parts = [] if auto else shape_value(value, level, delims)

    for num, row in _targets(rows, selector):
        shaped = [str(num)] if auto else list(parts)
        if level == "field":
            _write_fields(row, selector, shaped)
        elif level == "repetition":
            _write_repetitions(row, selector, shaped, delims)
        else:
            _write_components(row, selector, shaped, delims)
        if row[0].upper() == HEADER_TAG:
            isa_widths(row)
