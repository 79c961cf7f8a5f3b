"""
Live data: download the published sheet export and run the ingestion pipeline.

Failure contract: any network problem (connection error, timeout, non-2xx)
ends in an empty CatalogData. Callers decide what to show instead.
"""

from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import Optional

import requests

from coursepilot.config import load_settings
from coursepilot.export_json import export_catalog_json
from coursepilot.ingest import Clock, build_catalog
from coursepilot.model import CatalogData


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Core logic
# ---------------------------------------------------------------------------


def fetch_sheet_csv(
    url: str,
    timeout: float = 30.0,
    session: Optional[requests.Session] = None,
) -> str:
    """
    GET the CSV export. A cache_ts parameter defeats Google's export cache.

    Raises requests.RequestException on transport errors and non-2xx answers.
    """
    http = session or requests
    params = {"cache_ts": str(int(time.time() * 1000))}
    resp = http.get(url, params=params, timeout=timeout)
    resp.raise_for_status()
    # Sheets exports are UTF-8 but come without a charset header
    resp.encoding = "utf-8"
    return resp.text


def fetch_live_reviews(
    url: Optional[str] = None,
    timeout: Optional[float] = None,
    session: Optional[requests.Session] = None,
    clock: Optional[Clock] = None,
) -> CatalogData:
    """
    Download and ingest the sheet. Never raises for network failures.
    """
    if url is None or timeout is None:
        settings = load_settings()
        url = url or settings.sheet_url
        timeout = timeout if timeout is not None else settings.timeout

    try:
        csv_text = fetch_sheet_csv(url, timeout=timeout, session=session)
    except requests.RequestException as e:
        logger.warning("Error loading live reviews: %s", e)
        return CatalogData()

    data = build_catalog(csv_text, clock=clock)
    logger.info("Loaded %d courses from %d reviews", len(data.courses), len(data.reviews))
    return data


# ---------------------------------------------------------------------------
# CLI entry
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="coursepilot.fetch", description="Fetch the review sheet and print a summary")
    p.add_argument("--url", type=str, default=None, help="CSV export URL (default: configured sheet)")
    p.add_argument("--out-dir", type=Path, default=None, help="Also write courses.json / reviews.json here")
    return p


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(message)s")

    data = fetch_live_reviews(url=args.url)
    print(f"Found {len(data.courses)} courses ({len(data.reviews)} reviews)")

    if args.out_dir is not None:
        export_catalog_json(data, args.out_dir)
        print(f"JSON written to {args.out_dir.resolve()}")


if __name__ == "__main__":
    main()
