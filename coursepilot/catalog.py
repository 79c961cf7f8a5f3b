"""
The current catalog: one owned snapshot of courses + reviews.

Transitions:
- refresh succeeds with at least one course -> snapshot replaced, last_updated set
- refresh fails or yields no courses        -> snapshot kept as is
- refresh while another one is running      -> ignored (returns False)

The web app serves requests from several threads, so the snapshot swap and
the in-progress flag are guarded by locks.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, List, Optional

from coursepilot.fetch import fetch_live_reviews
from coursepilot.fixtures import fallback_catalog
from coursepilot.model import CatalogData, Course, Review


logger = logging.getLogger(__name__)

Loader = Callable[[], CatalogData]


class Catalog:
    def __init__(
        self,
        loader: Optional[Loader] = None,
        initial: Optional[CatalogData] = None,
    ) -> None:
        self._loader = loader or fetch_live_reviews
        self._data = initial if initial is not None else fallback_catalog()
        self._data_lock = threading.Lock()
        self._refresh_lock = threading.Lock()
        self.last_updated: Optional[datetime] = None

    # -- snapshot access ----------------------------------------------------

    @property
    def data(self) -> CatalogData:
        with self._data_lock:
            return self._data

    @property
    def courses(self) -> List[Course]:
        return self.data.courses

    @property
    def reviews(self) -> List[Review]:
        return self.data.reviews

    @property
    def is_loading(self) -> bool:
        return self._refresh_lock.locked()

    def get_course(self, course_id: str) -> Optional[Course]:
        for c in self.courses:
            if c.id == course_id:
                return c
        return None

    def find_course(self, query: str) -> Optional[Course]:
        """
        Look a course up by id, then code, then name (case-insensitive).
        """
        q = query.strip()
        if not q:
            return None
        course = self.get_course(q)
        if course:
            return course
        ql = q.lower()
        for c in self.courses:
            if c.code.lower() == ql:
                return c
        for c in self.courses:
            if c.name.lower() == ql:
                return c
        return None

    def reviews_for(self, course_id: str) -> List[Review]:
        return [r for r in self.reviews if r.course_id == course_id]

    def departments(self) -> List[str]:
        """Distinct departments for the filter, without the 'General' catch-all."""
        depts = {c.department for c in self.courses if c.department and c.department != "General"}
        return sorted(depts)

    # -- refresh ------------------------------------------------------------

    def refresh(self) -> bool:
        """
        Load fresh data and swap it in. Returns True if the snapshot was replaced.
        """
        if not self._refresh_lock.acquire(blocking=False):
            logger.info("Refresh already in progress, request ignored")
            return False

        try:
            try:
                data = self._loader()
            except Exception:
                logger.exception("Failed to refresh data, keeping current catalog")
                return False

            if data.is_empty():
                logger.info("Refresh returned no courses, keeping current catalog")
                return False

            with self._data_lock:
                self._data = data
                self.last_updated = datetime.now()
            logger.info("Catalog replaced: %d courses, %d reviews", len(data.courses), len(data.reviews))
            return True
        finally:
            self._refresh_lock.release()
