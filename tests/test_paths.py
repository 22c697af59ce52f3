# tests/test_paths.py
"""
Tests for paths.py - Parent chain resolution
"""
import logging

import pytest

from conftest import (
    COURSE_A_UID,
    IMAGE_UID,
    LECTURE_1_UID,
    LECTURES_UID,
    NOTES_PDF_UID,
    SYLLABUS_UID,
    VIDEO_UID,
    make_uid,
)
from ocw_to_hugo.catalog import build_items_lookup
from ocw_to_hugo.models import CatalogEntry, ItemType
from ocw_to_hugo.paths import resolve_course_paths

COURSE_UID = make_uid(0xC0)


def page(uid: str, key: str, parent: str = COURSE_UID) -> CatalogEntry:
    return CatalogEntry(uid=uid, item_type=ItemType.PAGE, parent_uid=parent, filename_key=key)


def catalog(*entries: CatalogEntry):
    return {e.uid: e for e in entries}


class TestResolveCoursePaths:
    """Tests for resolve_course_paths"""

    def test_fixture_course(self, course_a):
        paths = resolve_course_paths(build_items_lookup(course_a), COURSE_A_UID, "course-a")

        assert paths[COURSE_A_UID] == "/"
        assert paths[SYLLABUS_UID] == "/sections/syllabus"
        assert paths[LECTURES_UID] == "/sections/lecture-notes"
        assert paths[LECTURE_1_UID] == "/sections/lecture-notes/lecture-1"
        assert paths[NOTES_PDF_UID] == "/sections/lecture-notes/Notes.PDF"
        assert paths[IMAGE_UID] == "/sections/syllabus/diagram.jpg"
        assert paths[VIDEO_UID] == "/sections/lecture-notes/lecture-1-video"

    def test_null_parent_is_root_level(self):
        a = make_uid(1)
        paths = resolve_course_paths(catalog(page(a, "about", parent=None)), COURSE_UID, "c")
        assert paths[a] == "/sections/about"

    def test_deep_chain(self):
        """Long chains resolve without recursion limits"""
        entries = []
        parent = COURSE_UID
        for i in range(1, 3001):
            uid = make_uid(i)
            entries.append(page(uid, f"p{i}", parent))
            parent = uid

        paths = resolve_course_paths(catalog(*reversed(entries)), COURSE_UID, "c")

        assert paths[make_uid(3)] == "/sections/p1/p2/p3"
        assert paths[make_uid(3000)].count("/") == 3001

    def test_idempotent(self, course_a):
        """Resolving twice gives identical output"""
        items = build_items_lookup(course_a)
        first = resolve_course_paths(items, COURSE_A_UID, "course-a")
        second = resolve_course_paths(items, COURSE_A_UID, "course-a")
        assert first == second

    def test_order_independent(self):
        a, b, c = make_uid(1), make_uid(2), make_uid(3)
        entries = [page(a, "a"), page(b, "b", a), page(c, "c", b)]

        forward = resolve_course_paths(catalog(*entries), COURSE_UID, "c")
        backward = resolve_course_paths(catalog(*reversed(entries)), COURSE_UID, "c")

        assert forward == backward

    def test_mutual_cycle_contained(self, caplog):
        """A <-> B resolve to nothing, log one error, and leave others alone"""
        a, b, ok = make_uid(1), make_uid(2), make_uid(3)
        items = catalog(page(a, "a", b), page(b, "b", a), page(ok, "fine"))

        with caplog.at_level(logging.ERROR, logger="ocw_to_hugo"):
            paths = resolve_course_paths(items, COURSE_UID, "c")

        assert a not in paths
        assert b not in paths
        assert paths[ok] == "/sections/fine"
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "cyclic parent" in errors[0].getMessage()

    def test_self_parent_cycle(self, caplog):
        a = make_uid(1)
        with caplog.at_level(logging.ERROR, logger="ocw_to_hugo"):
            paths = resolve_course_paths(catalog(page(a, "a", a)), COURSE_UID, "c")

        assert a not in paths
        assert len([r for r in caplog.records if r.levelno == logging.ERROR]) == 1

    def test_missing_parent(self, caplog):
        """Missing parent drops the item and everything below it"""
        child, grandchild, ghost = make_uid(1), make_uid(2), make_uid(99)
        items = catalog(page(grandchild, "g", child), page(child, "c", ghost))

        with caplog.at_level(logging.ERROR, logger="ocw_to_hugo"):
            paths = resolve_course_paths(items, COURSE_UID, "c")

        assert child not in paths
        assert grandchild not in paths
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert errors[0].parent_uid == ghost
        assert errors[0].uid == child

    def test_descendant_of_failed_item_logged_at_debug(self, caplog):
        child, grandchild, ghost = make_uid(1), make_uid(2), make_uid(99)
        items = catalog(page(child, "c", ghost), page(grandchild, "g", child))

        with caplog.at_level(logging.DEBUG, logger="ocw_to_hugo"):
            resolve_course_paths(items, COURSE_UID, "c")

        assert len([r for r in caplog.records if r.levelno == logging.ERROR]) == 1
        assert any(r.levelno == logging.DEBUG and r.uid == grandchild for r in caplog.records)

    def test_empty_catalog(self):
        assert resolve_course_paths({}, COURSE_UID, "c") == {COURSE_UID: "/"}
