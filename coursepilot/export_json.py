"""
JSON export of one catalog snapshot.

Writes:
  - <out_dir>/courses.json
  - <out_dir>/reviews.json
"""

from __future__ import annotations

import json
from pathlib import Path

from coursepilot.model import CatalogData


def export_catalog_json(data: CatalogData, out_dir: str | Path) -> tuple[int, int]:
    """
    Export courses and reviews. Returns (course_count, review_count).

    Creates the output directory if needed.
    """
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    courses = [c.to_dict() for c in data.courses]
    reviews = [r.to_dict() for r in data.reviews]

    (out / "courses.json").write_text(json.dumps(courses, ensure_ascii=False, indent=2), encoding="utf-8")
    (out / "reviews.json").write_text(json.dumps(reviews, ensure_ascii=False, indent=2), encoding="utf-8")

    return len(courses), len(reviews)
