"""
Web API (Flask).

    GET  /                  landing info
    GET  /api/health
    GET  /api/courses       ?search=&department=&sort=
    GET  /api/departments
    GET  /api/course        ?id=
    GET  /api/summary       ?id=
    POST /api/ask           {"id": ..., "question": ...}
    POST /api/refresh
    GET  /submit-review     redirect to the review form

Course ids are free-text course names, so they travel as query/body
parameters rather than path segments.
"""

from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify, redirect, request
from flask_cors import CORS

from coursepilot.ai import GeminiClient, ask_about_course, course_summary
from coursepilot.browse import DEFAULT_SORT, SORT_OPTIONS, FilterState, apply_filters
from coursepilot.catalog import Catalog
from coursepilot.config import Settings, load_settings
from coursepilot.fetch import fetch_live_reviews


def create_app(
    catalog: Optional[Catalog] = None,
    client: Optional[GeminiClient] = None,
    settings: Optional[Settings] = None,
) -> Flask:
    settings = settings or load_settings()
    if catalog is None:
        # Standalone factory (flask --app ...): load the live sheet once, as the CLI does
        catalog = Catalog(loader=lambda: fetch_live_reviews(url=settings.sheet_url, timeout=settings.timeout))
        catalog.refresh()
    client = client or GeminiClient.from_settings(settings)

    app = Flask(__name__)
    CORS(app, resources={r"/api/*": {"origins": "*"}})

    def _status() -> dict:
        return {
            "courses": len(catalog.courses),
            "reviews": len(catalog.reviews),
            "is_loading": catalog.is_loading,
            "last_updated": catalog.last_updated.isoformat(timespec="seconds") if catalog.last_updated else None,
        }

    def _course_or_404(course_id: str):
        course = catalog.get_course(course_id)
        if course is None:
            return None, (jsonify({"error": f"Course not found: {course_id}"}), 404)
        return course, None

    @app.route("/")
    def landing():
        return jsonify({
            "name": "CoursePilot",
            "tagline": "Aggregated, real-time insights on elective courses from the student community.",
            "stats": {**_status(), "departments": len(catalog.departments())},
            "submit_review": settings.form_url,
            "endpoints": {
                "courses": "/api/courses?search=&department=&sort= (GET)",
                "departments": "/api/departments (GET)",
                "course": "/api/course?id= (GET)",
                "summary": "/api/summary?id= (GET)",
                "ask": "/api/ask (POST)",
                "refresh": "/api/refresh (POST)",
                "health": "/api/health (GET)",
            },
        })

    @app.route("/api/health")
    def health():
        return jsonify({"status": "ok", **_status()}), 200

    @app.route("/api/courses")
    def list_courses():
        sort_by = request.args.get("sort", DEFAULT_SORT)
        if sort_by not in SORT_OPTIONS:
            return jsonify({"error": f"Unknown sort: {sort_by}", "sort_options": sorted(SORT_OPTIONS)}), 400

        state = FilterState(
            search=request.args.get("search", ""),
            department=request.args.get("department", ""),
            sort_by=sort_by,
        )
        courses = apply_filters(catalog.courses, state)
        return jsonify({"count": len(courses), "courses": [c.to_dict() for c in courses]})

    @app.route("/api/departments")
    def departments():
        return jsonify({"departments": catalog.departments()})

    @app.route("/api/course")
    def course_detail():
        course_id = request.args.get("id", "")
        if not course_id:
            return jsonify({"error": "Missing id"}), 400

        course, error = _course_or_404(course_id)
        if error:
            return error

        reviews = catalog.reviews_for(course.id)
        return jsonify({"course": course.to_dict(), "reviews": [r.to_dict() for r in reviews]})

    @app.route("/api/summary")
    def summary():
        course_id = request.args.get("id", "")
        if not course_id:
            return jsonify({"error": "Missing id"}), 400

        course, error = _course_or_404(course_id)
        if error:
            return error

        text = course_summary(course, catalog.reviews_for(course.id), client)
        return jsonify({"id": course.id, "summary": text})

    @app.route("/api/ask", methods=["POST"])
    def ask():
        data = request.get_json(silent=True) or {}
        course_id = str(data.get("id", "") or "")
        question = str(data.get("question", "") or "").strip()
        if not course_id or not question:
            return jsonify({"error": "Both id and question are required"}), 400

        course, error = _course_or_404(course_id)
        if error:
            return error

        answer = ask_about_course(question, course, catalog.reviews_for(course.id), client)
        return jsonify({"id": course.id, "question": question, "answer": answer})

    @app.route("/api/refresh", methods=["POST"])
    def refresh():
        refreshed = catalog.refresh()
        return jsonify({"refreshed": refreshed, **_status()})

    @app.route("/submit-review")
    def submit_review():
        return redirect(settings.form_url)

    return app
