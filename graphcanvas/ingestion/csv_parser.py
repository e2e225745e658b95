"""
Lightweight CSV reader and header-based column role inference.

Input is a plain comma-separated payload with a header row. Cells are not
parsed as full RFC 4180: a cell is trimmed and loses one layer of
surrounding quotes, and commas inside quotes are not supported.
"""
import re
from dataclasses import dataclass, field

_LINE_BREAK = re.compile(r"\r?\n")
_EDGE_QUOTES = re.compile(r"^[\"']|[\"']$")
_BOM = "\ufeff"


@dataclass
class ParsedTable:
    """Header row plus data rows as lists of cleaned cell values."""
    headers: list[str] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def cell(self, row: list[str], index: int) -> str:
        """Cell value at ``index``, or an empty string when the row is short."""
        return row[index] if 0 <= index < len(row) else ""


def clean_cell(value: str) -> str:
    if not value:
        return ""
    value = value.strip().lstrip(_BOM)
    return _EDGE_QUOTES.sub("", value)


def parse_csv(text: str) -> ParsedTable:
    """
    Split ``text`` into headers and rows.

    Blank lines are dropped. Without at least one data row below the header
    the result is an empty table.
    """
    lines = [line for line in _LINE_BREAK.split(text or "") if line.strip()]
    if len(lines) < 2:
        return ParsedTable()

    headers = [clean_cell(h) for h in lines[0].split(",")]
    rows = [[clean_cell(v) for v in line.split(",")] for line in lines[1:]]
    return ParsedTable(headers=headers, rows=rows)


def find_column_index(headers: list[str], candidates: list[str], default: int) -> int:
    """
    Locate the column whose header contains any candidate term.

    Matching is case-insensitive substring search. Headers are scanned left
    to right and the first matching header wins; ``default`` is returned when
    none matches.
    """
    terms = [c.lower() for c in candidates]
    for i, header in enumerate(headers):
        lowered = header.lower()
        if any(term in lowered for term in terms):
            return i
    return default
