"""Error taxonomy for X12 parsing and selector-addressed access."""

from __future__ import annotations


class X12Error(ValueError):
    """Base class for every error raised by the document engine."""


class MalformedHeader(X12Error):
    """Input is not empty but does not start with a well-formed ISA header."""


class UnsupportedSource(X12Error):
    """A document was constructed from a value shape with no defined meaning."""


class UnsupportedBatch(X12Error):
    """A batch update was given something other than pairs or a mapping."""


class BadSelector(X12Error):
    """A selector does not match the address grammar or cannot be used here."""


class ZeroIndex(X12Error):
    """An explicit field, component, occurrence or repetition index of zero."""


class DelimiterConflict(X12Error):
    """A value would introduce a higher-level delimiter into the document."""


class IncompatibleQuery(X12Error):
    """A gather (``*``) selector was combined with other selectors."""
