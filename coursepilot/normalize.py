"""
Canonicalizers: free text -> small controlled vocabularies.

All functions are total (any string in, a string/int out, nothing raised).
"""

from __future__ import annotations

import re


DEFAULT_DEPARTMENT = "General"
DEFAULT_YEAR = "N/A"
DEFAULT_RATING = 3

MIN_RATING = 1
MAX_RATING = 5

_YEAR_PATTERN = re.compile(
    r"^(1st|2nd|3rd|4th|first|second|third|fourth|freshman|sophomore|junior|senior"
    r"|year\s*[1-4]|[1-4]\s*year|yr\s*[1-4]|[1-4])$"
)
_YEAR_DIGIT = re.compile(r"[1-4]")
_LEADING_INT = re.compile(r"^[+-]?\d+")

# Form answers that mean "no department given"
_DEPARTMENT_PLACEHOLDERS = frozenset({"n/a", "0", "general"})

# Longest text that may still be a year answer when it only contains a digit
_MAX_LOOSE_YEAR_LEN = 10


def _capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def regularize_department(dept: str | None) -> str:
    """
    Merge spelling variants of a department into one label.

    Examples:
    - "cs", "CSE", "Computer Science Engg" -> "CSE"
    - "humanity", "Humanities" -> "Humanities"
    - "mech" -> "Mechanical Engineering"
    - "EEE", "electronics" -> "Electrical Engineering"
    - "N/A", "0" -> "General"
    - anything else -> Title Case ("civil engineering" -> "Civil Engineering")

    Applying it twice gives the same result as applying it once.
    """
    if not dept or not dept.strip():
        return DEFAULT_DEPARTMENT

    # Collapse runs of whitespace first, so the title-cased output matches the same rule again
    words = dept.split()
    d = " ".join(words).lower()

    if d in ("cs", "cse") or "computer science" in d:
        return "CSE"

    if d in _DEPARTMENT_PLACEHOLDERS:
        return DEFAULT_DEPARTMENT

    if "humanit" in d:
        return "Humanities"

    if "mech" in d:
        return "Mechanical Engineering"

    if "elect" in d or d in ("ee", "eee"):
        return "Electrical Engineering"

    return " ".join(w.capitalize() for w in words)


def validate_year(text: str | None) -> str:
    """
    Keep answers that look like a year of study, reject chat ("nah its chill").

    Returns "N/A", "Year N" for a bare digit 1-4, or the answer with its
    first letter capitalized.
    """
    if not text or not text.strip():
        return DEFAULT_YEAR

    normalized = text.strip().lower()

    if normalized == "n/a":
        return DEFAULT_YEAR

    if re.fullmatch(r"[1-4]", normalized):
        return f"Year {normalized}"

    if _YEAR_PATTERN.match(normalized):
        return _capitalize_first(normalized)

    # Loose answers like "2nd yr" or "batch 3"
    if _YEAR_DIGIT.search(normalized) and len(normalized) <= _MAX_LOOSE_YEAR_LEN:
        return _capitalize_first(normalized)

    return DEFAULT_YEAR


def parse_rating(text: str | None) -> int:
    """
    Parse the leading integer of a rating answer ("4", "4 - easy", "4.5" -> 4).

    Empty, non-numeric or out-of-range answers give DEFAULT_RATING.
    """
    if not text:
        return DEFAULT_RATING

    m = _LEADING_INT.match(text.strip())
    if not m:
        return DEFAULT_RATING

    value = int(m.group(0))
    if not (MIN_RATING <= value <= MAX_RATING):
        return DEFAULT_RATING
    return value
