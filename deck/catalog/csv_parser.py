"""
Single-pass CSV scanner for spreadsheets published as CSV.

The scanner walks the text one character at a time and keeps only two
pieces of state: whether it is inside a quoted field, and a
``(row, col)`` cursor into a table of string cells that grows on demand.
It understands quoted fields, embedded commas and line breaks, doubled
quotes and CRLF / LF / CR line endings. The first populated row names
the fields of every record that follows.
"""

from __future__ import annotations

import logging
from typing import Dict, List

logger = logging.getLogger(__name__)

RawRecord = Dict[str, str]

QUOTE = '"'
DELIMITER = ","
CR = "\r"
LF = "\n"

# str.strip() leaves the byte-order mark in place; JavaScript's trim() does not.
_BOM = "\ufeff"


def _trim(value: str) -> str:
    return value.strip().strip(_BOM).strip()


def _is_blank(row: List[str]) -> bool:
    return all(_trim(cell) == "" for cell in row)


def scan_cells(text: str) -> List[List[str]]:
    """Split ``text`` into a table of raw (untrimmed) cells.

    Parameters
    ----------
    text : str
        The CSV document.

    Returns
    -------
    List[List[str]]
        One list of cells per physical record. A cell exists once the
        scanner has examined at least one character while positioned on
        it, so ``"a,b,"`` at end of input has two cells while
        ``"a,b,\\n"`` has three.
    """
    table: List[List[str]] = []
    in_quotes = False
    row = col = 0
    pos = 0
    length = len(text)

    while pos < length:
        char = text[pos]
        nxt = text[pos + 1] if pos + 1 < length else ""

        while len(table) <= row:
            table.append([])
        cells = table[row]
        while len(cells) <= col:
            cells.append("")

        if char == QUOTE and in_quotes and nxt == QUOTE:
            cells[col] += QUOTE
            pos += 2
        elif char == QUOTE:
            in_quotes = not in_quotes
            pos += 1
        elif char == DELIMITER and not in_quotes:
            col += 1
            pos += 1
        elif char == CR and nxt == LF and not in_quotes:
            row += 1
            col = 0
            pos += 2
        elif char == LF and not in_quotes:
            row += 1
            col = 0
            pos += 1
        elif char == CR and not in_quotes:
            row += 1
            col = 0
            pos += 1
        else:
            cells[col] += char
            pos += 1

    return table


def parse_csv(text: str) -> List[RawRecord]:
    """Parse a CSV document into header-keyed records.

    Parameters
    ----------
    text : str
        The full document. Empty or whitespace-only text yields an
        empty list rather than an error.

    Returns
    -------
    List[RawRecord]
        One mapping per kept data row, in document order. Rows with
        fewer cells than the header, or whose cells are all blank, are
        dropped; cells beyond the header count are ignored. Every value
        is trimmed.

    Raises
    ------
    TypeError
        If ``text`` is not a string.
    """
    if not isinstance(text, str):
        raise TypeError(f"parse_csv expects str, got {type(text).__name__}")
    if not _trim(text):
        return []

    table = scan_cells(text)

    header_at = next((i for i, row in enumerate(table) if not _is_blank(row)), None)
    if header_at is None:
        return []
    headers = [_trim(cell) for cell in table[header_at]]
    width = len(headers)

    records: List[RawRecord] = []
    for row in table[header_at + 1:]:
        if len(row) < width or _is_blank(row):
            continue
        records.append({header: _trim(row[i]) for i, header in enumerate(headers)})

    if not records and not all(_is_blank(row) for row in table[header_at + 1:]):
        logger.warning(
            "CSV document has %d rows after the header but produced no records",
            len(table) - header_at - 1,
        )
    return records
