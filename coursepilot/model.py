"""
Central data model definitions used across the project.

This module defines the canonical structure of Course and Review objects so that:
- the ingestion pipeline, the fallback fixtures and every view share the same field names
- records stay immutable once built (a refresh replaces them, it never edits them)
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, List


@dataclass(frozen=True)
class Review:
    """
    One normalized student review (one spreadsheet row).

    course_id is the free-text course name and doubles as the join key
    to Course.id.
    """

    id: str
    course_id: str
    rating: int
    reviewer_name: str = "Anonymous"
    teaching_method: str = ""
    exam_structure: str = ""
    leniency: str = ""
    grading_comments: str = ""
    extra_classes: str = ""
    comment: str = ""
    timestamp: str = ""
    year_of_study: str = "N/A"
    section: str = ""
    department: str = "General"
    instructor: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Course:
    """
    Aggregated course record.

    difficulty is derived as 6 - average_rating: the sheet only asks how easy
    a course is, so difficulty is the mirror image on the same 1..5 scale.
    """

    id: str
    code: str
    name: str
    department: str
    instructor: str
    credits: int
    description: str
    average_rating: float
    difficulty: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CatalogData:
    """Result of one ingestion run."""

    courses: List[Course] = field(default_factory=list)
    reviews: List[Review] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.courses
