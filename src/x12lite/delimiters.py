"""ISA header layout: delimiter extraction and fixed field widths.

The ISA segment is the only fixed-width segment in X12. Its delimiters sit at
fixed offsets from the start of the segment:

- field        offset   3 (``*``)
- repetition   offset  82 (``^``, ISA-11)
- component    offset 104 (``:``, ISA-16)
- segment      offset 105 (``~``)
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

from x12lite.errors import MalformedHeader

HEADER_TAG = "ISA"

# the tag, then ISA-01 through ISA-15; ISA-16 (component delimiter) is not clamped
ISA_WIDTHS: tuple[int, ...] = (3, 2, 10, 2, 10, 2, 15, 2, 15, 6, 4, 1, 5, 9, 1, 1)

# fixed offsets hold within one line; only the segment terminator may be a line break
HEADER_RE = re.compile(r"\AISA([^\r\n])[^\r\n]{78}([^\r\n])[^\r\n]{21}([^\r\n])(.)", re.DOTALL)

# ISA-11 held "U" (US standards identifier) before 00402 introduced repetitions
LEGACY_REPETITION = "U"
DEFAULT_REPETITION = "^"


@dataclass(frozen=True)
class Delimiters:
    field: str = "*"
    component: str = ":"
    repetition: str = "^"
    segment: str = "~"

    def __iter__(self) -> Iterator[str]:
        return iter((self.field, self.component, self.repetition, self.segment))


def extract_delimiters(text: str) -> Delimiters:
    """Derive the four delimiters from the ISA header at the start of ``text``."""
    match = HEADER_RE.match(text)
    if not match:
        raise MalformedHeader(f"malformed X12 header: {text[:24]!r}")
    field, repetition, component, segment = match.groups()
    if repetition == LEGACY_REPETITION:
        repetition = DEFAULT_REPETITION
    delims = Delimiters(field=field, component=component, repetition=repetition, segment=segment)
    if len(set(delims)) != 4:
        raise MalformedHeader(f"X12 delimiters are not distinct: {tuple(delims)!r}")
    return delims


def isa_widths(row: list[str]) -> list[str]:
    """Left-justify and clamp each ISA field in place to its declared width."""
    for i, (value, width) in enumerate(zip(row, ISA_WIDTHS)):
        if len(value) != width:
            row[i] = value.ljust(width)[:width]
    return row


def pad_header(text: str) -> str:
    """Apply ISA widths to a header string, splitting on the char after the tag."""
    if len(text) < 4:
        return text
    sep = text[3]
    return sep.join(isa_widths(text.split(sep)))


DEFAULT_HEADER = pad_header("ISA*00**00**ZZ**ZZ****^*00501**0*P*:~")
