"""
Hand-written fallback catalog.

Shown until the first successful live fetch, and kept whenever the sheet
cannot be loaded or yields no courses.
"""

from __future__ import annotations

from coursepilot.model import CatalogData, Course, Review


MOCK_COURSES = [
    Course(
        id="1",
        code="CS101",
        name="Introduction to Computer Science",
        department="Computer Science",
        instructor="Dr. Alan Turing",
        credits=4,
        description="Foundational concepts of computing, programming, and algorithm design.",
        average_rating=4.5,
        difficulty=2.5,
    ),
    Course(
        id="2",
        code="CS302",
        name="Machine Learning Foundations",
        department="Computer Science",
        instructor="Dr. Fei-Fei Li",
        credits=4,
        description="Deep dive into statistical learning, neural networks, and pattern recognition.",
        average_rating=4.8,
        difficulty=4.2,
    ),
    Course(
        id="3",
        code="EE201",
        name="Digital Circuits",
        department="Electrical Engineering",
        instructor="Dr. Nikola Tesla",
        credits=3,
        description="Design and analysis of digital logic gates, flip-flops, and memory systems.",
        average_rating=3.9,
        difficulty=3.8,
    ),
    Course(
        id="4",
        code="MATH205",
        name="Linear Algebra",
        department="Mathematics",
        instructor="Dr. Gilbert Strang",
        credits=3,
        description="Vector spaces, matrices, and their applications in modern data science.",
        average_rating=4.7,
        difficulty=3.5,
    ),
    Course(
        id="5",
        code="ECON101",
        name="Principles of Microeconomics",
        department="Economics",
        instructor="Dr. Adam Smith",
        credits=3,
        description="Study of individual agents and markets, supply and demand, and market failure.",
        average_rating=4.1,
        difficulty=2.2,
    ),
    Course(
        id="6",
        code="CS405",
        name="Advanced Robotics",
        department="Computer Science",
        instructor="Dr. Rodney Brooks",
        credits=4,
        description="Kinematics, dynamics, and control of robotic systems.",
        average_rating=4.3,
        difficulty=4.5,
    ),
]

MOCK_REVIEWS = [
    Review(
        id="r1",
        course_id="2",
        reviewer_name="John Doe",
        rating=5,
        teaching_method="Project-based learning with heavy coding.",
        exam_structure="One mid-term and a final group project.",
        leniency="Strict but fair.",
        grading_comments="Grading is based on code quality and documentation.",
        extra_classes="None",
        comment="This course is amazing! The coding assignments are tough but you learn so much.",
        timestamp="2023-11-15",
        year_of_study="3rd Year",
        section="A",
        department="Computer Science",
    ),
    Review(
        id="r2",
        course_id="2",
        reviewer_name="Jane Smith",
        rating=4,
        teaching_method="Theoretical lectures and weekly labs.",
        exam_structure="Open-book mid-term and closed-book final.",
        leniency="Very lenient.",
        grading_comments="Focuses on effort and understanding rather than just correct answers.",
        extra_classes="Optional weekend review sessions.",
        comment="Very math-heavy. Ensure you review your linear algebra before starting. Dr. Li is brilliant.",
        timestamp="2023-12-01",
        year_of_study="4th Year",
        section="B",
        department="Computer Science",
    ),
    Review(
        id="r3",
        course_id="1",
        reviewer_name="Sam Wilson",
        rating=5,
        teaching_method="Interactive slides and live coding demos.",
        exam_structure="Bi-weekly quizzes and a final exam.",
        leniency="Fair.",
        grading_comments="Points deducted for poor code formatting.",
        extra_classes="None",
        comment="Great intro course. Python is fun and the projects are manageable.",
        timestamp="2023-10-20",
        year_of_study="1st Year",
        section="C",
        department="Computer Science",
    ),
    Review(
        id="r4",
        course_id="4",
        reviewer_name="Alice Wonderland",
        rating=5,
        teaching_method="Traditional whiteboard lectures.",
        exam_structure="Two mid-terms and a final.",
        leniency="Moderate.",
        grading_comments="Partial credit given for showing the right logic.",
        extra_classes="Rarely",
        comment="Essential for any tech major. Dr. Strang makes complex topics so simple with his analogies.",
        timestamp="2023-09-12",
        year_of_study="2nd Year",
        section="A",
        department="Mathematics",
    ),
]


def fallback_catalog() -> CatalogData:
    return CatalogData(courses=list(MOCK_COURSES), reviews=list(MOCK_REVIEWS))
