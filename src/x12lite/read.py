"""Read engine: resolve a selector against parsed rows.

Reads default to the first occurrence, and to the first repetition once a
component is requested. Anything out of range reads as ``""``.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from x12lite.delimiters import Delimiters
from x12lite.errors import BadSelector
from x12lite.selector import Selector

Value = str | int | list
T = TypeVar("T")


def split_trim(text: str, sep: str) -> list[str]:
    """Split on ``sep`` dropping trailing empty pieces, so ``""`` gives ``[]``."""
    parts = text.split(sep)
    while parts and not parts[-1]:
        parts.pop()
    return parts


def _pick(parts: Sequence[T], index: int) -> T | None:
    return parts[index - 1] if 1 <= index <= len(parts) else None


def _component(text: str, selector: Selector, delims: Delimiters) -> str | None:
    if selector.component is None:
        return text
    return _pick(split_trim(text, delims.component), selector.component)


def _field_text(row: list[str], selector: Selector, delims: Delimiters) -> str | None:
    if selector.field is None:
        return delims.field.join(row)
    return row[selector.field] if selector.field < len(row) else None


def resolve_row(
    row: list[str], selector: Selector, delims: Delimiters, gathering: bool = False
) -> Value | None:
    """Resolve field/repetition/component within one row; ``None`` if out of range."""
    text = _field_text(row, selector, delims)
    if text is None:
        return None
    mode = selector.repetition_mode
    if mode == "count":
        return len(split_trim(text, delims.repetition))
    if mode == "all" and not gathering:
        found = (_component(rep, selector, delims) for rep in split_trim(text, delims.repetition))
        return [value for value in found if value]
    rep = selector.repetition
    if mode == "all" or rep is None:
        rep = 1 if selector.component is not None else None
    if rep is not None:
        text = _pick(split_trim(text, delims.repetition), rep)
        if text is None:
            return None
    return _component(text, selector, delims)


def read(rows: list[list[str]], delims: Delimiters, selector: Selector) -> Value:
    """Read through ``selector``: a value, a count, or a list of values."""
    if "new" in (selector.occurrence_mode, selector.repetition_mode):
        raise BadSelector(f"'+' only applies to writes: {selector.tag}")
    matches = [row for row in rows if row and selector.matches(row[0])]

    if selector.occurrence_mode == "count":
        return len(matches)
    if selector.occurrence_mode == "all":
        values = (resolve_row(row, selector, delims, gathering=True) for row in matches)
        return [value for value in values if value is not None and value != ""]

    num = 1 if selector.occurrence is None else selector.occurrence
    row = _pick(matches, num)
    if row is None:
        return ""
    value = resolve_row(row, selector, delims)
    return "" if value is None else value
