"""
Ingestion (rows -> reviews -> courses).

- Maps every sheet row onto one Review (fuzzy column lookup + canonicalizers)
- Drops reviews without a course name
- Groups reviews by exact course name and derives one Course per group

Important rules:
- grouping is exact and case-sensitive ("ML" and "Machine Learning" stay two courses)
- order of courses = first appearance of the course name in the sheet
- difficulty = 6 - average_rating (the sheet has no difficulty question)
"""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from coursepilot.model import CatalogData, Course, Review
from coursepilot.normalize import (
    DEFAULT_DEPARTMENT,
    DEFAULT_RATING,
    DEFAULT_YEAR,
    parse_rating,
    regularize_department,
    validate_year,
)
from coursepilot.parse import Row, find_value, parse_csv


Clock = Callable[[], datetime]

# ---------------------------------------------------------------------------
# Field mapping table
# ---------------------------------------------------------------------------

# Search terms per Review field, most specific first.
FIELD_TERMS: Dict[str, Tuple[str, ...]] = {
    "course_id": ("nameofthecourse", "course", "subject", "title", "coursename", "whichcourse"),
    "department": ("department", "dept", "chooseyourdepartment"),
    "rating": ("howeasyisthecourse", "gradingisfair", "easiness", "rating", "easy", "difficulty"),
    "year_of_study": ("currentyearofstudy", "year", "batch", "class", "studyyear", "whichyearareyouin", "youryear"),
    "teaching_method": ("methodofteaching", "teachingstyle", "instruction", "teaching"),
    "exam_structure": ("examstructure", "paperpattern", "assessments", "exam"),
    "leniency": ("leniencyofcourse", "strictness", "gradingleniency", "leniency"),
    "grading_comments": (
        "additionalcommentsaboutthegrading",
        "gradingpattern",
        "gradingdetails",
        "remarks",
        "paperpattern",
    ),
    "extra_classes": ("extraclasses", "additionalclasses", "extra"),
    "comment": ("anythingyouwannasayaboutthecourse", "feedback", "generalcomments", "comment"),
    "section": ("section", "group", "div", "batch"),
    "instructor": ("instructor", "professor", "teacher", "faculty", "taughtby", "proff"),
}

# The department question sits in column J of the form sheet, whatever its title says.
DEPARTMENT_COLUMN = 9

TIMESTAMP_COLUMN = "Timestamp"
TIMESTAMP_FORMAT = "%d/%m/%Y, %H:%M:%S"

# Value used when the cell is missing or unusable.
FIELD_DEFAULTS: Dict[str, object] = {
    "course_id": "",
    "department": DEFAULT_DEPARTMENT,
    "rating": DEFAULT_RATING,
    "year_of_study": DEFAULT_YEAR,
    "reviewer_name": "Anonymous",
    "instructor": "",
}

# Aggregation: values that count as "not filled in"
PLACEHOLDERS = frozenset({"", DEFAULT_DEPARTMENT, "0", DEFAULT_YEAR})
DEFAULT_INSTRUCTOR = "Various"
DEFAULT_CREDITS = 3


# ---------------------------------------------------------------------------
# Record mapper
# ---------------------------------------------------------------------------


def map_review(row: Row, index: int, ingested_at: datetime) -> Review:
    """
    Map one sheet row onto a Review.

    ingested_at is the arrival time of the whole export. It builds the review id
    and replaces a missing "Timestamp" cell.
    """

    def text(field_name: str) -> str:
        return find_value(row, FIELD_TERMS[field_name])

    stamp_ms = int(ingested_at.timestamp() * 1000)
    timestamp = (row.get(TIMESTAMP_COLUMN) or "").strip() or ingested_at.strftime(TIMESTAMP_FORMAT)

    return Review(
        id=f"r-{index}-{stamp_ms}",
        course_id=text("course_id"),
        reviewer_name=str(FIELD_DEFAULTS["reviewer_name"]),
        rating=parse_rating(text("rating")),
        teaching_method=text("teaching_method"),
        exam_structure=text("exam_structure"),
        leniency=text("leniency"),
        grading_comments=text("grading_comments"),
        extra_classes=text("extra_classes"),
        comment=text("comment"),
        timestamp=timestamp,
        year_of_study=validate_year(text("year_of_study")),
        section=text("section"),
        department=regularize_department(find_value(row, FIELD_TERMS["department"], DEPARTMENT_COLUMN)),
        instructor=text("instructor"),
    )


def map_reviews(rows: Iterable[Row], ingested_at: datetime) -> List[Review]:
    return [map_review(row, i, ingested_at) for i, row in enumerate(rows)]


# ---------------------------------------------------------------------------
# Aggregator
# ---------------------------------------------------------------------------


def valid_reviews(reviews: Iterable[Review]) -> List[Review]:
    """Keep only reviews that name a course."""
    return [r for r in reviews if r.course_id.strip()]


def _first_filled(values: Iterable[str]) -> str:
    for val in values:
        v = (val or "").strip()
        if v not in PLACEHOLDERS:
            return v
    return ""


def course_code(name: str) -> str:
    """'CS101 Intro to Programming' -> 'CS101'"""
    parts = name.split()
    return parts[0].upper() if parts else name


def build_course(name: str, reviews: List[Review]) -> Course:
    """Derive one Course from all reviews sharing the course name (reviews must be non-empty)."""
    avg = sum(r.rating for r in reviews) / len(reviews)

    return Course(
        id=name,
        code=course_code(name),
        name=name,
        department=regularize_department(_first_filled(r.department for r in reviews)),
        instructor=_first_filled(r.instructor for r in reviews) or DEFAULT_INSTRUCTOR,
        credits=DEFAULT_CREDITS,
        description=f"Feedback aggregation for {name}.",
        average_rating=avg,
        difficulty=6 - avg,
    )


def aggregate_courses(reviews: Iterable[Review]) -> List[Course]:
    """
    Group reviews by course name and build the course list.

    Reviews without a course name are ignored.
    """
    by_name: Dict[str, List[Review]] = defaultdict(list)
    for r in valid_reviews(reviews):
        # defaultdict keeps insertion order -> first-seen order of course names
        by_name[r.course_id].append(r)

    return [build_course(name, group) for name, group in by_name.items()]


def build_catalog(csv_text: str, clock: Optional[Clock] = None) -> CatalogData:
    """
    Full pipeline for one export: tokenize -> map -> filter -> aggregate.

    clock is read once per run (defaults to datetime.now).
    """
    _, rows = parse_csv(csv_text)
    if not rows:
        return CatalogData()

    ingested_at = (clock or datetime.now)()
    reviews = valid_reviews(map_reviews(rows, ingested_at))
    return CatalogData(courses=aggregate_courses(reviews), reviews=reviews)
