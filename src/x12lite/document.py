"""X12 document model with selector-addressed reads and writes.

A document keeps one of two forms at a time: the serialized text or the
parsed rows (``list[list[str]]``, tag first). Asking for one form builds it
from the other and drops the stale one, so callers holding rows never see an
out-of-date string and vice versa.

    >>> doc = Document()
    >>> doc["GS-1"] = "HS"
    >>> doc["GS-1"]
    'HS'
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator, Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from x12lite.charset import CharClasses
from x12lite.delimiters import DEFAULT_HEADER, Delimiters, extract_delimiters
from x12lite.errors import IncompatibleQuery, UnsupportedBatch, UnsupportedSource
from x12lite.read import Value, read
from x12lite.selector import parse_selector
from x12lite.write import AUTO_NUMBER, write

logger = logging.getLogger(__name__)

TagFilter = str | re.Pattern[str] | Callable[[str], bool] | None


class SourceKind(Enum):
    EMPTY = "empty"
    TEXT = "text"
    BYTES = "bytes"
    STREAM = "stream"
    DOCUMENT = "document"
    MAPPING = "mapping"
    PAIRS = "pairs"


def _classify(source: object) -> SourceKind:
    if source is None or (isinstance(source, (str, bytes)) and not source):
        return SourceKind.EMPTY
    if isinstance(source, str):
        return SourceKind.TEXT
    if isinstance(source, (bytes, bytearray)):
        return SourceKind.BYTES
    if isinstance(source, Document):
        return SourceKind.DOCUMENT
    if isinstance(source, Mapping):
        return SourceKind.MAPPING
    if isinstance(source, (list, tuple)):
        return SourceKind.PAIRS
    if callable(getattr(source, "read", None)):
        return SourceKind.STREAM
    raise UnsupportedSource(f"unable to handle {type(source).__name__} objects")


def _decode(data: str | bytes | bytearray) -> str:
    if isinstance(data, (bytes, bytearray)):
        return bytes(data).decode("utf-8-sig")
    return data.removeprefix("\ufeff")


def parse(text: str, delims: Delimiters) -> list[list[str]]:
    """Split text into rows, tolerating CR/LF noise around segment terminators."""
    pieces = re.split(f"[{re.escape(delims.segment)}\r\n]+", text.strip())
    while pieces and not pieces[-1]:
        pieces.pop()
    return [piece.split(delims.field) for piece in pieces]


def serialize(rows: list[list[str]], delims: Delimiters) -> str:
    """One segment per line, each closed by the segment terminator."""
    return "".join(delims.field.join(row) + delims.segment + "\n" for row in rows).removesuffix(
        "\n"
    )


def _pairs(batch: object) -> Iterator[tuple[Any, Any]]:
    if isinstance(batch, Mapping):
        return iter(batch.items())
    if isinstance(batch, (list, tuple)):
        items = list(batch)
        if items and all(isinstance(item, (list, tuple)) and len(item) == 2 for item in items):
            return ((pos, val) for pos, val in items)
        if len(items) % 2:
            raise UnsupportedBatch(f"odd number of items in selector/value list: {len(items)}")
        return zip(items[::2], items[1::2])
    raise UnsupportedBatch(f"unable to update X12 documents with {type(batch).__name__} types")


def _tag_matcher(tag: TagFilter) -> Callable[[str], bool]:
    if tag is None:
        return lambda _: True
    if isinstance(tag, str):
        want = tag.upper()
        return lambda seg: seg.upper() == want
    if isinstance(tag, re.Pattern):
        return lambda seg: tag.match(seg) is not None
    if callable(tag):
        return tag
    raise TypeError(f"unsupported segment filter: {tag!r}")


class Document:
    """A parsed X12 interchange.

    Accepts document text, bytes, a readable stream, another document, a
    mapping of selector to value, or a list of selector/value pairs (flat or
    as 2-tuples). ``Document("GS-1", "HS", "GS-8", "005010X279A1")`` is the
    flat form spelled as arguments. Empty input gives a default ISA header.
    """

    def __init__(self, source: object = None, *etc: object) -> None:
        if isinstance(source, str) and etc:
            source = [source, *etc]
        elif etc:
            raise UnsupportedSource(f"unexpected extra arguments for {type(source).__name__}")

        kind = _classify(source)
        text: str | None = None
        if kind in (SourceKind.TEXT, SourceKind.BYTES):
            text = _decode(source)  # type: ignore[arg-type]
        elif kind is SourceKind.STREAM:
            text = _decode(source.read())  # type: ignore[union-attr]
        elif kind is SourceKind.DOCUMENT:
            text = source.to_text()  # type: ignore[union-attr]

        self._text: str | None = text or DEFAULT_HEADER
        self._rows: list[list[str]] | None = None
        self.delimiters = extract_delimiters(self._text)
        self.charclasses = CharClasses.for_delimiters(self.delimiters)

        if kind in (SourceKind.MAPPING, SourceKind.PAIRS):
            self.update(source)
        rows = self._structured()
        logger.debug("loaded %d segment(s) from %s source", len(rows), kind.value)
        self.to_text()

    @classmethod
    def load(cls, path: Path | str) -> Document:
        """Read a document from disk, tolerating a UTF-8 byte order mark."""
        return cls(Path(path).read_bytes())

    # -- forms ---------------------------------------------------------------

    def _structured(self) -> list[list[str]]:
        if self._rows is None:
            self._rows = parse(self._text or "", self.delimiters)
        self._text = None
        return self._rows

    def _serialized(self) -> str:
        if self._text is None:
            self._text = serialize(self._rows or [], self.delimiters)
        self._rows = None
        return self._text

    def to_rows(self) -> list[list[str]]:
        """Live rows; mutating them is seen by later reads and serialization."""
        return self._structured()

    def to_text(self) -> str:
        return self._serialized()

    def raw(self) -> str:
        """Serialized text without newlines, upper-cased, for comparison or hashing."""
        return self.to_text().replace("\n", "").upper()

    def copy(self) -> Document:
        return Document(self)

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"<Document segments={len(self)} delimiters={''.join(self.delimiters)!r}>"

    def __len__(self) -> int:
        return len(self._structured())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return (
            self.delimiters == other.delimiters
            and self._structured() == other._structured()
        )

    __hash__ = None  # type: ignore[assignment]

    # -- character checks ----------------------------------------------------

    def normalize(self, value: object) -> Any:
        """Upper-case and blank out characters that are not allowed in values."""
        bad = self.charclasses.invalid_in_values
        if isinstance(value, (list, tuple)):
            return [bad.sub(" ", "" if part is None else str(part).upper()) for part in value]
        return bad.sub(" ", "" if value is None else str(value).upper())

    def invalid_characters(self) -> list[str]:
        """Characters of the raw text outside the basic set and the delimiters."""
        return sorted(set(self.charclasses.invalid_in_text.findall(self.raw())))

    # -- selector access -----------------------------------------------------

    def get(self, selector: str) -> Value:
        return read(self._structured(), self.delimiters, parse_selector(selector))

    def set(self, selector: str, value: object = None, *, normalize: bool = False) -> None:
        parsed = parse_selector(selector)
        if normalize and value is not None and value is not AUTO_NUMBER:
            value = self.normalize(value)
        write(self._structured(), self.delimiters, parsed, value)

    def __getitem__(self, selector: str) -> Value:
        return self.get(selector)

    def __setitem__(self, selector: str, value: object) -> None:
        self.set(selector, value)

    def update(self, *batch: object) -> Document:
        """Apply selector/value pairs in order, skipping ``None`` values.

        Each pair is applied on its own: a failing pair raises, but the pairs
        before it stay applied.
        """
        if not batch:
            return self
        source = batch[0] if len(batch) == 1 else list(batch)
        if source is None:
            return self
        for pos, val in _pairs(source):
            if val is not None:
                self.set(pos, val)
        return self

    def find(self, *selectors: str | None) -> list[Value | None]:
        """Resolve several selectors in one pass; ``None`` stays ``None``."""
        parsed = [None if pos is None else parse_selector(pos) for pos in selectors]
        if len(parsed) > 1 and any(sel is not None and sel.gathers for sel in parsed):
            raise IncompatibleQuery("a '*' selector must be queried on its own")
        rows = self._structured()
        return [None if sel is None else read(rows, self.delimiters, sel) for sel in parsed]

    # -- traversal -----------------------------------------------------------

    def each(self, tag: TagFilter = None) -> Iterator[list[str]]:
        wanted = _tag_matcher(tag)
        for row in self._structured():
            if row and wanted(row[0]):
                yield row

    def __iter__(self) -> Iterator[list[str]]:
        return self.each()

    def grep(self, tag: TagFilter, transform: Callable[[list[str]], Any] | None = None) -> list:
        return [transform(row) if transform else row for row in self.each(tag)]

