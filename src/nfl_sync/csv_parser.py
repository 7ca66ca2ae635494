"""Quote-aware parsing of the comma-separated feed bodies.

The feeds are plain comma-separated text with optional double-quoted fields.
A double quote toggles "inside quotes" mode, so commas between quotes are
kept; the quote characters themselves are not copied into the value. Data
lines whose token count differs from the header are dropped and counted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

RawRecord = Dict[str, Optional[str]]


@dataclass
class ParseStats:
    lines: int = 0
    records: int = 0
    malformed: int = 0


def iter_lines(text: str) -> Iterator[str]:
    """Yield lines of ``text`` one at a time without splitting it all up front."""
    start = 0
    size = len(text)
    while start < size:
        end = text.find("\n", start)
        if end == -1:
            end = size
        line = text[start:end]
        if line.endswith("\r"):
            line = line[:-1]
        yield line
        start = end + 1


def split_line(line: str) -> List[str]:
    values: List[str] = []
    current: List[str] = []
    in_quotes = False
    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            values.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    values.append("".join(current).strip())
    return values


def parse_header(line: str) -> List[str]:
    return [h.strip().replace('"', "") for h in line.split(",")]


def iter_records(text: str, stats: Optional[ParseStats] = None) -> Iterator[RawRecord]:
    """Lazily yield one RawRecord per well-formed data line of ``text``.

    Empty values become ``None``. Blank lines are skipped; lines with the
    wrong number of tokens are counted in ``stats.malformed`` and skipped.
    """
    stats = stats if stats is not None else ParseStats()
    headers: Optional[List[str]] = None
    for line in iter_lines(text or ""):
        if not line.strip():
            continue
        if headers is None:
            headers = parse_header(line)
            continue
        stats.lines += 1
        values = split_line(line)
        if len(values) != len(headers):
            stats.malformed += 1
            continue
        stats.records += 1
        yield {header: (value or None) for header, value in zip(headers, values)}
