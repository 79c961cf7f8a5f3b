from __future__ import annotations

import webbrowser
from typing import Any

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from coursepilot.ai import GeminiClient, ask_about_course, course_summary
from coursepilot.browse import SORT_OPTIONS, FilterState, apply_filters
from coursepilot.catalog import Catalog
from coursepilot.config import Settings
from coursepilot.model import Course


console = Console()

# Longest instructor name shown in the course table
MAX_INSTRUCTOR_LEN = 28


def _println(msg: Any = "") -> None:
    console.print(msg)


def _prompt(msg: str) -> str:
    return console.input(msg)


def run_interactive(catalog: Catalog, client: GeminiClient, settings: Settings) -> None:
    """
    Landing screen, then the browse loop (filters persist until reset).
    """
    _print_landing(catalog)
    if _prompt("\nPress Enter to explore courses (q = quit): ").strip().lower() == "q":
        return

    state = FilterState()

    while True:
        courses = apply_filters(catalog.courses, state)
        _print_header(catalog, state)
        _print_course_table(courses)

        choice = _prompt(
            "\n[1] Search\n"
            "[2] Department filter\n"
            "[3] Sort\n"
            "[4] Open course\n"
            "[5] Refresh live data\n"
            "[6] Reset filters\n"
            "[7] Post a review\n"
            "[0] Exit\n"
            "Select: "
        ).strip()

        if choice == "0":
            _println("Bye.")
            return

        if choice == "1":
            state.search = _prompt("Search (name, code, instructor) [blank = all]: ").strip()
        elif choice == "2":
            _flow_department(catalog, state)
        elif choice == "3":
            _flow_sort(state)
        elif choice == "4":
            _flow_open_course(catalog, courses, client)
        elif choice == "5":
            _flow_refresh(catalog)
        elif choice == "6":
            state.reset()
            _println("Filters reset.")
        elif choice == "7":
            _println(f"Opening review form: {settings.form_url}")
            webbrowser.open(settings.form_url)
        else:
            _println("Invalid choice.")


def _print_landing(catalog: Catalog) -> None:
    body = (
        "[bold]Student Feedback Hub[/]\n\n"
        "Honest, aggregated reviews of elective courses: teaching style, exams,\n"
        "grading and workload, straight from students who took them.\n\n"
        f"[cyan]{len(catalog.courses)}[/] courses | [cyan]{len(catalog.reviews)}[/] reviews | "
        f"[cyan]{len(catalog.departments())}[/] departments"
    )
    console.print(Panel(body, title="[bold magenta]CoursePilot[/]", box=box.ROUNDED))


def _print_header(catalog: Catalog, state: FilterState) -> None:
    if catalog.last_updated:
        sync = f"Sync: {catalog.last_updated.strftime('%H:%M:%S')}"
    else:
        sync = "Sample data (not synced)"

    label = SORT_OPTIONS.get(state.sort_by, ("?", None))[0]
    _println("\n=== CoursePilot ===")
    _println(
        f"{sync} | search={state.search or '-'} | department={state.department or 'All'} | sort={label}"
    )


def _short(text: str, max_len: int) -> str:
    if len(text) > max_len:
        return text[: max_len - 1].rstrip() + "…"
    return text


def _print_course_table(courses: list[Course]) -> None:
    if not courses:
        _println("No courses found. Try adjusting your filters ([6] resets them).")
        return

    table = Table(title=f"Available courses ({len(courses)})", box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Code", style="bold cyan")
    table.add_column("Course")
    table.add_column("Department", style="green")
    table.add_column("Instructor", style="magenta")
    table.add_column("Easiness", justify="right", style="yellow")
    table.add_column("Difficulty", justify="right")

    for i, c in enumerate(courses, start=1):
        table.add_row(
            str(i),
            escape(c.code),
            escape(c.name),
            escape(c.department),
            escape(_short(c.instructor, MAX_INSTRUCTOR_LEN)),
            f"{c.average_rating:.1f}",
            f"{c.difficulty:.1f}",
        )
    console.print(table)


def _pick_number(msg: str, upper: int) -> int | None:
    pick = _prompt(msg).strip()
    if not pick:
        return None
    if not pick.isdigit():
        _println("Not a number.")
        return None
    n = int(pick)
    if not (0 <= n <= upper):
        _println("Out of range.")
        return None
    return n


def _flow_department(catalog: Catalog, state: FilterState) -> None:
    depts = catalog.departments()
    _println("0) All departments")
    for i, d in enumerate(depts, start=1):
        _println(f"{i}) {escape(d)}")

    n = _pick_number("Department number [blank = keep]: ", len(depts))
    if n is None:
        return
    state.department = "" if n == 0 else depts[n - 1]


def _flow_sort(state: FilterState) -> None:
    keys = list(SORT_OPTIONS)
    for i, key in enumerate(keys, start=1):
        marker = " *" if key == state.sort_by else ""
        _println(f"{i}) {SORT_OPTIONS[key][0]}{marker}")

    n = _pick_number("Sort number [blank = keep]: ", len(keys))
    if not n:
        return
    state.sort_by = keys[n - 1]


def _flow_open_course(catalog: Catalog, courses: list[Course], client: GeminiClient) -> None:
    if not courses:
        _println("No courses to open.")
        return

    n = _pick_number("Course number [blank = back]: ", len(courses))
    if not n:
        return

    course = courses[n - 1]
    reviews = catalog.reviews_for(course.id)

    info = (
        f"[bold]{escape(course.name)}[/] ({escape(course.code)})\n"
        + (f"[green]{escape(course.department)}[/]\n" if course.department != "General" else "")
        + f"Instructor: {escape(course.instructor)}\n"
        f"Easiness: [yellow]{course.average_rating:.1f}[/] / 5 | "
        f"Difficulty: {course.difficulty:.1f} / 5 | {len(reviews)} responses"
    )
    console.print(Panel(info, box=box.ROUNDED))

    with console.status("Summarizing reviews..."):
        summary = course_summary(course, reviews, client)
    console.print(Panel(escape(summary), title="AI insight", box=box.SIMPLE))

    if reviews:
        table = Table(title="Reviews", box=box.SIMPLE, show_lines=True)
        table.add_column("Year")
        table.add_column("Easiness", justify="right", style="yellow")
        table.add_column("Teaching")
        table.add_column("Exam")
        table.add_column("Grading")
        table.add_column("Comment")
        for r in reviews:
            cells = (r.year_of_study, f"{r.rating}/5", r.teaching_method, r.exam_structure, r.grading_comments, r.comment)
            table.add_row(*(escape(x) for x in cells))
        console.print(table)

    # Q&A until blank
    while True:
        question = _prompt("\nAsk about this course [blank = back]: ").strip()
        if not question:
            return
        with console.status("Thinking..."):
            answer = ask_about_course(question, course, reviews, client)
        _println(escape(answer))


def _flow_refresh(catalog: Catalog) -> None:
    with console.status("Syncing records..."):
        ok = catalog.refresh()
    if ok:
        _println(f"Data reloaded: {len(catalog.courses)} courses, {len(catalog.reviews)} reviews.")
    else:
        _println("Refresh failed or returned nothing, keeping current data.")
