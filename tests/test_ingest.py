"""
Unit tests for the record mapper and the aggregator.

Aggregation rules:
- reviews without a course name are dropped everywhere
- grouping by exact course name, first-seen order
- average_rating = mean of ratings, difficulty = 6 - average_rating
"""

import unittest
from datetime import datetime, timezone

from coursepilot.ingest import FIELD_DEFAULTS, aggregate_courses, build_catalog, course_code, map_review
from coursepilot.model import Review
from coursepilot.parse import build_row


FIXED = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return FIXED


class TestBuildCatalog(unittest.TestCase):
    def test_two_reviews_one_course(self) -> None:
        data = build_catalog("Course,Department,Rating\nCS101,CS,5\nCS101,,3\n", clock=fixed_clock)

        self.assertEqual(len(data.courses), 1)
        course = data.courses[0]
        self.assertEqual(course.name, "CS101")
        self.assertEqual(course.id, "CS101")
        self.assertEqual(course.department, "CSE")
        self.assertAlmostEqual(course.average_rating, 4.0)
        self.assertAlmostEqual(course.difficulty, 2.0)
        self.assertEqual(len(data.reviews), 2)

    def test_placeholders_fall_back_to_defaults(self) -> None:
        data = build_catalog("Course,Department,Instructor,Rating\nML,,,4\nML,General,0,2\n", clock=fixed_clock)
        course = data.courses[0]
        self.assertEqual(course.department, "General")
        self.assertEqual(course.instructor, "Various")
        self.assertEqual(course.credits, 3)
        self.assertEqual(course.description, "Feedback aggregation for ML.")

    def test_na_department_is_a_placeholder(self) -> None:
        data = build_catalog("Course,Department,Rating\nML,N/A,4\nML,mech,2\nDB,n/a,3\n", clock=fixed_clock)
        self.assertEqual(data.reviews[0].department, "General")
        self.assertEqual(data.courses[0].department, "Mechanical Engineering")
        self.assertEqual(data.courses[1].department, "General")

    def test_first_filled_instructor_and_department(self) -> None:
        text = "Course,Department,Professor,Rating\nML,,,4\nML,mech,Dr. Ng,2\nML,cs,Dr. Other,3\n"
        course = build_catalog(text, clock=fixed_clock).courses[0]
        self.assertEqual(course.department, "Mechanical Engineering")
        self.assertEqual(course.instructor, "Dr. Ng")

    def test_blank_course_name_is_excluded(self) -> None:
        data = build_catalog("Course,Rating\n,5\nML,4\n", clock=fixed_clock)
        self.assertEqual([r.course_id for r in data.reviews], ["ML"])
        self.assertEqual(len(data.courses), 1)
        self.assertAlmostEqual(data.courses[0].average_rating, 4.0)

    def test_first_seen_order_and_exact_grouping(self) -> None:
        data = build_catalog("Course,Rating\nB,1\nA,2\nB,3\nb,4\n", clock=fixed_clock)
        self.assertEqual([c.name for c in data.courses], ["B", "A", "b"])

    def test_average_and_difficulty_invariant(self) -> None:
        text = "Course,Rating\n" + "".join(f"ML,{r}\n" for r in (1, 2, 2, 5, 4))
        course = build_catalog(text, clock=fixed_clock).courses[0]
        self.assertAlmostEqual(course.average_rating, (1 + 2 + 2 + 5 + 4) / 5)
        self.assertAlmostEqual(course.difficulty, 6 - course.average_rating)

    def test_unparseable_rating_defaults_to_three(self) -> None:
        data = build_catalog("Course,Rating\nML,great\nML,\n", clock=fixed_clock)
        self.assertEqual([r.rating for r in data.reviews], [3, 3])

    def test_not_enough_data(self) -> None:
        self.assertEqual(build_catalog("", clock=fixed_clock).courses, [])
        self.assertTrue(build_catalog("Course,Rating\n", clock=fixed_clock).is_empty())


class TestMapReview(unittest.TestCase):
    def _row(self, headers: list, values: list) -> dict:
        return build_row(headers, values)

    def test_form_style_columns(self) -> None:
        headers = [
            "Timestamp",
            "Name of the course",
            "How easy is the course?",
            "Method of teaching",
            "Exam structure",
            "Leniency of course",
            "Additional comments about the grading",
            "Extra classes?",
            "Current year of study",
            "Choose your department",
            "Section",
        ]
        values = [
            "1/2/2024 10:00:00",
            "Machine Learning",
            "4",
            "Slides",
            "2 mids + end sem",
            "Lenient",
            "Relative grading",
            "None",
            "nah im good",
            "cse",
            "A",
        ]
        r = map_review(self._row(headers, values), 0, FIXED)

        self.assertEqual(r.course_id, "Machine Learning")
        self.assertEqual(r.rating, 4)
        self.assertEqual(r.teaching_method, "Slides")
        self.assertEqual(r.exam_structure, "2 mids + end sem")
        self.assertEqual(r.leniency, "Lenient")
        self.assertEqual(r.grading_comments, "Relative grading")
        self.assertEqual(r.extra_classes, "None")
        self.assertEqual(r.year_of_study, "N/A")
        self.assertEqual(r.department, "CSE")
        self.assertEqual(r.section, "A")
        self.assertEqual(r.timestamp, "1/2/2024 10:00:00")
        self.assertEqual(r.reviewer_name, "Anonymous")

    def test_department_read_from_column_j(self) -> None:
        headers = ["Course"] + [f"Q{i}" for i in range(1, 9)] + ["Your branch?"]
        values = ["ML"] + [""] * 8 + ["mech"]
        r = map_review(self._row(headers, values), 0, FIXED)
        self.assertEqual(r.department, "Mechanical Engineering")

    def test_missing_timestamp_uses_ingestion_time(self) -> None:
        r = map_review(self._row(["Course", "Rating"], ["ML", "2"]), 7, FIXED)
        self.assertEqual(r.timestamp, "02/01/2024, 03:04:05")
        self.assertEqual(r.id, f"r-7-{int(FIXED.timestamp() * 1000)}")

    def test_empty_row_takes_every_default(self) -> None:
        r = map_review(self._row(["Course", "Rating"], ["", ""]), 0, FIXED)
        for field_name, default in FIELD_DEFAULTS.items():
            self.assertEqual(getattr(r, field_name), default, field_name)

    def test_same_clock_same_output(self) -> None:
        row = self._row(["Course", "Rating"], ["ML", "2"])
        self.assertEqual(map_review(row, 0, FIXED), map_review(row, 0, FIXED))


class TestAggregate(unittest.TestCase):
    def test_ignores_blank_course_names(self) -> None:
        reviews = [
            Review(id="a", course_id="  ", rating=1),
            Review(id="b", course_id="ML", rating=5),
        ]
        courses = aggregate_courses(reviews)
        self.assertEqual([c.id for c in courses], ["ML"])
        self.assertAlmostEqual(courses[0].average_rating, 5.0)
        self.assertAlmostEqual(courses[0].difficulty, 1.0)

    def test_course_code(self) -> None:
        self.assertEqual(course_code("cs101 Intro to Programming"), "CS101")
        self.assertEqual(course_code("Linear Algebra"), "LINEAR")
        self.assertEqual(course_code(""), "")


if __name__ == "__main__":
    unittest.main()
