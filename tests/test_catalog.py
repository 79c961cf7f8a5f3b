"""
Unit tests for the catalog snapshot.

Transitions:
- successful refresh with courses -> replace
- failed / empty refresh          -> keep
- refresh during a refresh        -> ignored
"""

import unittest

from coursepilot.catalog import Catalog
from coursepilot.ingest import build_catalog
from coursepilot.model import CatalogData


LIVE = build_catalog("Course,Department,Rating\nCS101,CS,5\nCS101,,3\n")


class TestCatalog(unittest.TestCase):
    def test_starts_with_fallback_data(self) -> None:
        catalog = Catalog(loader=CatalogData)
        self.assertEqual(len(catalog.courses), 6)
        self.assertEqual(len(catalog.reviews), 4)
        self.assertIsNone(catalog.last_updated)

    def test_refresh_replaces_on_success(self) -> None:
        catalog = Catalog(loader=lambda: LIVE)
        self.assertTrue(catalog.refresh())
        self.assertEqual([c.id for c in catalog.courses], ["CS101"])
        self.assertIsNotNone(catalog.last_updated)

    def test_refresh_keeps_data_when_empty(self) -> None:
        catalog = Catalog(loader=CatalogData)
        before = catalog.data
        self.assertFalse(catalog.refresh())
        self.assertIs(catalog.data, before)
        self.assertIsNone(catalog.last_updated)

    def test_refresh_keeps_data_when_loader_raises(self) -> None:
        def broken() -> CatalogData:
            raise RuntimeError("boom")

        catalog = Catalog(loader=broken)
        with self.assertLogs("coursepilot.catalog", level="ERROR"):
            self.assertFalse(catalog.refresh())
        self.assertEqual(len(catalog.courses), 6)

    def test_refresh_during_refresh_is_ignored(self) -> None:
        inner: list[bool] = []

        def loader() -> CatalogData:
            inner.append(catalog.is_loading)
            inner.append(catalog.refresh())
            return LIVE

        catalog = Catalog(loader=loader)
        self.assertTrue(catalog.refresh())
        self.assertEqual(inner, [True, False])
        self.assertFalse(catalog.is_loading)

    def test_lookups(self) -> None:
        catalog = Catalog(loader=CatalogData)
        self.assertEqual(len(catalog.reviews_for("2")), 2)
        self.assertEqual(catalog.find_course("cs101").id, "1")
        self.assertEqual(catalog.find_course("linear algebra").id, "4")
        self.assertIsNone(catalog.find_course("nope"))
        self.assertEqual(
            catalog.departments(),
            ["Computer Science", "Economics", "Electrical Engineering", "Mathematics"],
        )

    def test_departments_skip_general(self) -> None:
        data = build_catalog("Course,Rating\nML,4\n")
        catalog = Catalog(loader=CatalogData, initial=data)
        self.assertEqual(catalog.departments(), [])


if __name__ == "__main__":
    unittest.main()
