"""Micro-benchmarks for parsing, serializing and selector reads on synthetic data."""

from __future__ import annotations

import time
from collections.abc import Callable

from x12lite.document import Document, parse, serialize
from x12lite.sample import synthetic_interchange


def _best(func: Callable[[], object], runs: int) -> float:
    best = None
    for _ in range(runs):
        start = time.perf_counter()
        func()
        elapsed = time.perf_counter() - start
        best = elapsed if best is None or elapsed < best else best
    return best or 0.0


def benchmark_document(members: int = 500, benefits: int = 5, runs: int = 3) -> dict[str, float]:
    doc = synthetic_interchange(members=members, benefits=benefits)
    text = doc.to_text()
    rows = parse(text, doc.delimiters)
    total_bytes = len(text.encode())

    parse_s = _best(lambda: Document(text), runs)
    serialize_s = _best(lambda: serialize(rows, doc.delimiters), runs)
    query_s = _best(lambda: doc.find("EB(?)", "NM1(?)", "GS-2"), runs)
    gather_s = _best(lambda: doc.get("EB(*)-3(?)"), runs)
    mbps = (total_bytes / 1_000_000) / parse_s if parse_s else 0.0
    return {
        "segments": len(rows),
        "bytes": total_bytes,
        "parse_seconds": parse_s,
        "serialize_seconds": serialize_s,
        "query_seconds": query_s,
        "gather_seconds": gather_s,
        "parse_mbps": mbps,
    }


if __name__ == "__main__":
    result = benchmark_document()
    print(result)
