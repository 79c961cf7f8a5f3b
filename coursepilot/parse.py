"""
Parsing (CSV export -> rows).

- Tokenizes the published spreadsheet export (comma delimited, double-quote quoted)
- Indexes the header row so every data row can be read by column title OR position
- Resolves a field from a row by fuzzy column-title matching

The sheet's column titles are the questions of a Google Form and get edited
by hand, so nothing here binds to an exact schema.
"""

from __future__ import annotations

import re
from typing import Callable, Dict, List, Optional, Sequence, Tuple


Row = Dict[str, str]

# Positional keys live next to the title keys in every row
COL_PREFIX = "__col_"

_NON_ALNUM = re.compile(r"[^a-z0-9]")


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------


def tokenize_csv(text: str) -> List[List[str]]:
    """
    Split delimited text into records of trimmed fields.

    Rules:
    - inside quotes, "" is a literal quote and everything else (comma, newline) is content
    - outside quotes, ',' ends a field and LF or CRLF ends a record
    - records where every field is empty are dropped
    - an unterminated quote swallows the rest of the input (no error)
    """
    records: List[List[str]] = []
    record: List[str] = []
    cell: List[str] = []
    in_quotes = False

    i = 0
    n = len(text)
    while i < n:
        char = text[i]
        nxt = text[i + 1] if i + 1 < n else ""

        if in_quotes:
            if char == '"' and nxt == '"':
                cell.append('"')
                i += 1
            elif char == '"':
                in_quotes = False
            else:
                cell.append(char)
        elif char == '"':
            in_quotes = True
        elif char == ",":
            record.append("".join(cell).strip())
            cell = []
        elif char == "\n" or (char == "\r" and nxt == "\n"):
            record.append("".join(cell).strip())
            if any(record):
                records.append(record)
            record = []
            cell = []
            if char == "\r":
                i += 1
        else:
            cell.append(char)
        i += 1

    # Last record without a trailing newline
    if record or cell:
        record.append("".join(cell).strip())
        if any(record):
            records.append(record)

    return records


# ---------------------------------------------------------------------------
# Header index
# ---------------------------------------------------------------------------


def index_headers(headers: Sequence[str]) -> Dict[str, int]:
    """
    Map column title -> position.

    Duplicate titles keep their last position (later columns win).
    """
    return {title: idx for idx, title in enumerate(headers)}


def build_row(headers: Sequence[str], record: Sequence[str]) -> Row:
    """
    Turn one data record into a row readable by title and by position.

    Missing trailing fields read as "". Fields beyond the header width are dropped.
    """
    row: Row = {}
    index = index_headers(headers)
    for title, idx in index.items():
        row[title] = record[idx] if idx < len(record) else ""
    for idx in range(len(headers)):
        row[f"{COL_PREFIX}{idx}"] = record[idx] if idx < len(record) else ""
    return row


def parse_csv(text: str) -> Tuple[List[str], List[Row]]:
    """
    Tokenize and index a full export.

    Returns (headers, rows). Fewer than two records (header + one data row)
    means there is nothing to ingest, and ([], []) is returned.
    """
    records = tokenize_csv(text)
    if len(records) < 2:
        return [], []

    headers = records[0]
    rows = [build_row(headers, record) for record in records[1:]]
    return headers, rows


# ---------------------------------------------------------------------------
# Field resolver
# ---------------------------------------------------------------------------


def normalize_key(text: str) -> str:
    """Lower-case and drop everything that is not a-z or 0-9."""
    return _NON_ALNUM.sub("", text.lower())


def _exact_match(norm_key: str, norm_term: str) -> bool:
    return norm_key == norm_term


def _partial_match(norm_key: str, norm_term: str) -> bool:
    return norm_term in norm_key or norm_key in norm_term


# Tried in order; each strategy runs over all search terms before the next one.
MATCH_STRATEGIES: Tuple[Callable[[str, str], bool], ...] = (_exact_match, _partial_match)


def title_columns(row: Row) -> List[str]:
    """Column titles of a row, in header order, without the positional keys."""
    return [k for k in row if not k.startswith(COL_PREFIX)]


def find_value(
    row: Optional[Row],
    terms: Sequence[str],
    column_index: Optional[int] = None,
    strategies: Sequence[Callable[[str, str], bool]] = MATCH_STRATEGIES,
) -> str:
    """
    Return the first non-empty value matching one of the search terms.

    Resolution order:
    1. column_index (if given and that cell is non-empty)
    2. exact title match, term by term
    3. partial title match (either side contains the other), term by term
    Per strategy and term only the first matching column is read. An empty
    cell never stops the search; the next term / strategy is tried.

    Exact matches run for all terms before any partial match, otherwise a
    long term like "howeasyisthecourse" would grab the "Course" column.
    """
    if not row:
        return ""

    if column_index is not None:
        val = row.get(f"{COL_PREFIX}{column_index}", "").strip()
        if val:
            return val

    # Blank titles would "contain" every term, so they are never matched
    keys = [(k, normalize_key(k)) for k in title_columns(row)]
    keys = [(k, nk) for k, nk in keys if nk]

    norm_terms = [nt for nt in (normalize_key(t) for t in terms) if nt]

    for matches in strategies:
        for norm_term in norm_terms:
            hit = next((k for k, nk in keys if matches(nk, norm_term)), None)
            if hit is None:
                continue
            val = row.get(hit, "").strip()
            if val:
                return val

    return ""
