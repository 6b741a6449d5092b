"""Row listing of a document: one labelled line per non-empty field.

Labels use selector syntax, so every printed line can be fed back to
``Document.get``::

    ISA-1          00
    GS-1           HB
    EB(2)-3        30^33
"""

from __future__ import annotations

import re

from rich.style import Style

from x12lite.config import ShowConfig
from x12lite.document import Document

HEX_RE = re.compile(r"^#?(?:([0-9a-fA-F]{6})|([0-9a-fA-F]{3}))$")


class Highlighter:
    """Wraps values in ANSI truecolor codes; styles are cached per colour pair."""

    def __init__(self, foreground: str | None = "fff", background: str | None = "369") -> None:
        self.foreground = foreground
        self.background = background
        self._styles: dict[tuple[str | None, str | None], Style] = {}

    @staticmethod
    def to_hex(code: str | None) -> str | None:
        """``"369"`` or ``"#336699"`` to ``"#336699"``; ``None`` when not a colour."""
        match = HEX_RE.match(code or "")
        if not match:
            return None
        full, short = match.groups()
        return "#" + (full or "".join(ch * 2 for ch in short)).lower()

    def style(self, foreground: str | None, background: str | None) -> Style:
        key = (foreground, background)
        if key not in self._styles:
            self._styles[key] = Style(
                color=self.to_hex(foreground), bgcolor=self.to_hex(background)
            )
        return self._styles[key]

    def __call__(self, text: str) -> str:
        return self.style(self.foreground, self.background).render(text)


def _line(label: str, value: str, config: ShowConfig) -> str:
    if config.tab:
        return f"{label}\t{value}"
    return label.ljust(config.left) + value


def render(
    doc: Document, config: ShowConfig | None = None, highlighter: Highlighter | None = None
) -> list[str]:
    """Build the listing lines (the message body first when ``config.message``)."""
    config = config or ShowConfig()
    if config.ansi and highlighter is None:
        highlighter = Highlighter(config.foreground, config.background)
    paint = highlighter if config.ansi and highlighter else (lambda text: text)

    out = [doc.to_text()] if config.message else []
    if config.hide:
        return out
    if config.message:
        out.append("")

    rep = doc.delimiters.repetition
    seen: dict[str, int] = {}
    for row in doc.each():
        seg = row[0].lower() if config.lower else row[0].upper()
        num = seen[seg] = seen.get(seg, 0) + 1
        if config.only and num > 1:
            continue
        occ = f"({num})" if num > 1 else ""
        for j, fld in enumerate(row[1:], 1):
            if not fld:
                continue
            reps = fld.split(rep) if config.deep else [fld]
            if len(reps) > 1:
                for k, value in enumerate(reps, 1):
                    out.append(_line(f"{seg}{occ}-{j}({k})", paint(value), config))
            else:
                out.append(_line(f"{seg}{occ}-{j}", paint(fld), config))
    return out
