"""
CLI (Command Line Interface).

This module provides quick terminal commands, e.g.:

    coursepilot list --search robotics --sort difficulty_asc
    coursepilot departments
    coursepilot show CS101 --summary
    coursepilot ask CS101 "Is attendance mandatory?"
    coursepilot refresh
    coursepilot export <out_dir>
    coursepilot submit
    coursepilot interactive
    coursepilot serve --port 5000

Every command first loads the live sheet; if that fails the built-in sample
courses are used. --offline skips the download.

Note:
- The interactive UI lives in coursepilot/interactive.py
- The web API lives in coursepilot/webapp.py
- This CLI is intentionally simple and prints plain text (no rich formatting)
"""

from __future__ import annotations

import argparse
import logging
import webbrowser

from coursepilot.ai import GeminiClient, ask_about_course, course_summary
from coursepilot.browse import DEFAULT_SORT, SORT_OPTIONS, FilterState, apply_filters
from coursepilot.catalog import Catalog
from coursepilot.config import Settings, load_settings
from coursepilot.export_json import export_catalog_json
from coursepilot.fetch import fetch_live_reviews
from coursepilot.model import Course


def _load_catalog(settings: Settings, offline: bool) -> Catalog:
    """
    Build the catalog (sample data) and try one live refresh unless offline.
    """
    catalog = Catalog(loader=lambda: fetch_live_reviews(url=settings.sheet_url, timeout=settings.timeout))
    if not offline and not catalog.refresh():
        print("Live data unavailable, showing sample courses.")
    return catalog


def _course_line(course: Course) -> str:
    return (
        f"{course.code} | {course.name} | {course.department} | "
        f"easiness {course.average_rating:.1f} | difficulty {course.difficulty:.1f} | {course.instructor}"
    )


def _cmd_list(args: argparse.Namespace, catalog: Catalog) -> int:
    """
    List courses after search / department filter and sorting.
    """
    state = FilterState(search=args.search or "", department=args.department or "", sort_by=args.sort)
    courses = apply_filters(catalog.courses, state)

    if not courses:
        print("No courses found.")
        return 0

    print(f"Available courses ({len(courses)}):")
    for c in courses:
        print(_course_line(c))
    return 0


def _cmd_departments(args: argparse.Namespace, catalog: Catalog) -> int:
    depts = catalog.departments()
    if not depts:
        print("No departments.")
        return 0
    for d in depts:
        print(d)
    return 0


def _resolve_course(catalog: Catalog, query: str) -> Course | None:
    course = catalog.find_course(query or "")
    if course is None:
        print(f"Course not found: {query!r}")
    return course


def _cmd_show(args: argparse.Namespace, catalog: Catalog, settings: Settings) -> int:
    """
    Print one course with all its reviews (and optionally the AI summary).
    """
    course = _resolve_course(catalog, args.course)
    if course is None:
        return 1

    reviews = catalog.reviews_for(course.id)

    print(f"{course.name} ({course.code})")
    if course.department != "General":
        print(f"Department : {course.department}")
    print(f"Instructor : {course.instructor}")
    print(f"Easiness   : {course.average_rating:.1f} / 5")
    print(f"Difficulty : {course.difficulty:.1f} / 5")
    print(f"Responses  : {len(reviews)}")

    for i, r in enumerate(reviews, start=1):
        print(f"\n--- Review {i} | {r.reviewer_name} | {r.year_of_study} | easiness {r.rating}/5 | {r.timestamp}")
        for label, value in (
            ("Teaching", r.teaching_method),
            ("Exam", r.exam_structure),
            ("Leniency", r.leniency),
            ("Grading", r.grading_comments),
            ("Extra classes", r.extra_classes),
            ("Comment", r.comment),
        ):
            if value:
                print(f"{label}: {value}")

    if args.summary:
        print("\nAI summary:")
        print(course_summary(course, reviews, GeminiClient.from_settings(settings)))

    return 0


def _cmd_ask(args: argparse.Namespace, catalog: Catalog, settings: Settings) -> int:
    question = (args.question or "").strip()
    if not question:
        print("Please provide a question.")
        return 1

    course = _resolve_course(catalog, args.course)
    if course is None:
        return 1

    answer = ask_about_course(question, course, catalog.reviews_for(course.id), GeminiClient.from_settings(settings))
    print(answer)
    return 0


def _cmd_refresh(args: argparse.Namespace, catalog: Catalog) -> int:
    if not catalog.refresh():
        print("Refresh failed, catalog unchanged.")
        return 1
    print(f"Refreshed: {len(catalog.courses)} courses, {len(catalog.reviews)} reviews")
    return 0


def _cmd_export(args: argparse.Namespace, catalog: Catalog) -> int:
    out_dir = (args.out_dir or "").strip()
    if not out_dir:
        print("Please provide an output directory.")
        return 1

    n_courses, n_reviews = export_catalog_json(catalog.data, out_dir)
    print(f"Exported {n_courses} courses and {n_reviews} reviews to: {out_dir}")
    return 0


def _cmd_submit(args: argparse.Namespace, settings: Settings) -> int:
    print(f"Review form: {settings.form_url}")
    webbrowser.open(settings.form_url)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="coursepilot", description="CoursePilot CLI")
    parser.add_argument("--offline", action="store_true", help="Skip the live sheet, use sample courses")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="List courses")
    p_list.add_argument("--search", "-s", type=str, default="", help="Match name, code or instructor")
    p_list.add_argument("--department", "-d", type=str, default="", help="Exact department label")
    p_list.add_argument("--sort", type=str, default=DEFAULT_SORT, choices=sorted(SORT_OPTIONS), help="Sort order")

    sub.add_parser("departments", help="List departments")

    p_show = sub.add_parser("show", help="Show one course with its reviews")
    p_show.add_argument("course", type=str, help="Course id, code or name (e.g. CS101)")
    p_show.add_argument("--summary", action="store_true", help="Add an AI summary of the reviews")

    p_ask = sub.add_parser("ask", help="Ask the AI a question about one course")
    p_ask.add_argument("course", type=str, help="Course id, code or name")
    p_ask.add_argument("question", type=str, help="Question text")

    sub.add_parser("refresh", help="Reload the live sheet and report the result")

    p_export = sub.add_parser("export", help="Write courses.json / reviews.json")
    p_export.add_argument("out_dir", type=str, help="Output directory")

    sub.add_parser("submit", help="Open the review form in the browser")
    sub.add_parser("interactive", help="Interactive menu mode")

    p_serve = sub.add_parser("serve", help="Run the web API")
    p_serve.add_argument("--host", type=str, default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=5000)

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )

    settings = load_settings()

    if args.command == "submit":
        raise SystemExit(_cmd_submit(args, settings))

    # refresh loads explicitly below, no need for a first load
    offline = args.offline or args.command == "refresh"
    catalog = _load_catalog(settings, offline)

    if args.command == "list":
        raise SystemExit(_cmd_list(args, catalog))
    if args.command == "departments":
        raise SystemExit(_cmd_departments(args, catalog))
    if args.command == "show":
        raise SystemExit(_cmd_show(args, catalog, settings))
    if args.command == "ask":
        raise SystemExit(_cmd_ask(args, catalog, settings))
    if args.command == "refresh":
        raise SystemExit(_cmd_refresh(args, catalog))
    if args.command == "export":
        raise SystemExit(_cmd_export(args, catalog))

    if args.command == "interactive":
        from coursepilot.interactive import run_interactive

        run_interactive(catalog, GeminiClient.from_settings(settings), settings)
        raise SystemExit(0)

    if args.command == "serve":
        from coursepilot.webapp import create_app

        app = create_app(catalog, GeminiClient.from_settings(settings), settings)
        app.run(host=args.host, port=args.port)
        raise SystemExit(0)

    raise SystemExit(2)
