"""
Filtering and sorting of the course list (pure view state).

Filter rule:
    search matches name, code or instructor (case-insensitive substring)
    AND (department == "" OR course.department == department)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Tuple

from coursepilot.model import Course


DEFAULT_SORT = "rating_desc"

# key -> (label, sort function)
SORT_OPTIONS: Dict[str, Tuple[str, Callable[[List[Course]], List[Course]]]] = {
    "rating_desc": ("Highest Easiness", lambda cs: sorted(cs, key=lambda c: c.average_rating, reverse=True)),
    "difficulty_asc": ("Lowest Difficulty", lambda cs: sorted(cs, key=lambda c: c.difficulty)),
    "difficulty_desc": ("Highest Difficulty", lambda cs: sorted(cs, key=lambda c: c.difficulty, reverse=True)),
    "dept_asc": ("By Department", lambda cs: sorted(cs, key=lambda c: c.department.casefold())),
    "name_asc": ("A - Z", lambda cs: sorted(cs, key=lambda c: c.name.casefold())),
}


@dataclass
class FilterState:
    search: str = ""
    department: str = ""
    sort_by: str = DEFAULT_SORT

    def reset(self) -> None:
        self.search = ""
        self.department = ""
        self.sort_by = DEFAULT_SORT


def matches_search(course: Course, query: str) -> bool:
    q = query.strip().lower()
    if not q:
        return True
    hay = (course.name.lower(), course.code.lower(), course.instructor.lower())
    return any(q in h for h in hay)


def filter_courses(courses: Iterable[Course], search: str = "", department: str = "") -> List[Course]:
    return [
        c
        for c in courses
        if matches_search(c, search) and (department == "" or c.department == department)
    ]


def sort_courses(courses: Iterable[Course], sort_by: str = DEFAULT_SORT) -> List[Course]:
    """
    Sort by one of SORT_OPTIONS. Unknown keys keep the input order.
    Sorting is stable, ties keep the input order.
    """
    items = list(courses)
    option = SORT_OPTIONS.get(sort_by)
    if option is None:
        return items
    return option[1](items)


def apply_filters(courses: Iterable[Course], state: FilterState) -> List[Course]:
    return sort_courses(filter_courses(courses, state.search, state.department), state.sort_by)
