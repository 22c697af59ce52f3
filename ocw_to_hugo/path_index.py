"""
# ocw-to-hugo
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

path_index.py - Cross-course path index

Builds one PathLookup for every published course in a run. Links between
courses can only be rewritten once this index holds all of them, so it is
built completely before any page text is touched.

A course source is any object with:
    input_dir                       -- shown in error messages
    load_course(course_id)          -- CourseData, or None when absent;
                                       raises CourseDataError on bad JSON
"""

import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from ocw_to_hugo.catalog import build_items_lookup
from ocw_to_hugo.constants import COURSE_DATE_PATTERN
from ocw_to_hugo.errors import CourseDataError, missing_course_error
from ocw_to_hugo.models import (
    CatalogEntry,
    CourseData,
    CourseSummary,
    ItemType,
    PathEntry,
    PathLookup,
)
from ocw_to_hugo.paths import resolve_course_paths

logger = logging.getLogger(__name__)


# ============================================================================
# Publication state
# ============================================================================

def parse_course_date(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a course timestamp like "2010/03/10 0:0:0.000". Empty gives None.

    Milliseconds may be missing and anything after the time (such as
    " Universal") is ignored.

    Raises:
        ValueError: No date-time at the start of the value, or an
                    out-of-range field
    """
    if not value:
        return None
    m = COURSE_DATE_PATTERN.match(value)
    if not m:
        raise ValueError(f"not a course timestamp: {value!r}")
    millis = (m.group("millis") or "0").ljust(3, "0")
    return datetime(
        int(m.group("year")),
        int(m.group("month")),
        int(m.group("day")),
        int(m.group("hour")),
        int(m.group("minute")),
        int(m.group("second")),
        int(millis) * 1000,
    )


def _read_date(course_data: CourseData, key: str) -> Optional[datetime]:
    value = course_data.get(key)
    try:
        return parse_course_date(value)
    except (TypeError, ValueError):
        logger.warning(
            f"[paths] {course_data.short_url}: unreadable {key} {value!r}, treating it as unset",
            extra={"course_id": course_data.short_url},
        )
        return None


def is_course_published(course_data: CourseData) -> bool:
    """
    A course is published when it has a last-published date that is not
    strictly before its last-unpublishing date.
    """
    last_published = _read_date(course_data, "last_published_to_production")
    if last_published is None:
        return False
    last_unpublished = _read_date(course_data, "last_unpublishing_date")
    if last_unpublished is None:
        return True
    return not last_published < last_unpublished


# ============================================================================
# Per-course entries
# ============================================================================

def build_course_entries(course_data: CourseData) -> List[PathEntry]:
    """Resolve every item of one course into PathEntry values, course root first"""
    course_id = course_data.short_url
    items_lookup = build_items_lookup(course_data)
    paths = resolve_course_paths(items_lookup, course_data.uid, course_id)

    entries: List[PathEntry] = []
    if course_data.uid:
        entries.append(PathEntry(
            uid=course_data.uid,
            course=course_id,
            path=paths[course_data.uid],
            item_type=ItemType.COURSE,
            title=course_data.title,
        ))

    for uid, item in items_lookup.items():
        if uid not in paths:
            continue
        entries.append(_make_entry(item, course_id, paths[uid]))
    return entries


def _make_entry(item: CatalogEntry, course_id: str, path: str) -> PathEntry:
    data = item.data
    file_type = None
    file_location = None
    if item.item_type == ItemType.FILE:
        file_type = data.get("file_type")
        file_location = data.get("file_location")
    return PathEntry(
        uid=item.uid,
        course=course_id,
        path=path,
        item_type=item.item_type,
        parent_uid=item.parent_uid,
        filename_key=item.filename_key,
        title=data.get("title") or "",
        file_type=file_type,
        file_location=file_location,
    )


# ============================================================================
# Index
# ============================================================================

def add_course(lookup: PathLookup, course_data: CourseData) -> int:
    """
    Merge one course into the lookup.

    Returns:
        Number of entries added to by_uid
    """
    course_id = course_data.short_url
    entries = build_course_entries(course_data)

    added = 0
    for entry in entries:
        if entry.uid in lookup.by_uid:
            existing = lookup.by_uid[entry.uid]
            logger.warning(
                f"[paths] {course_id}: uid {entry.uid} already indexed for {existing.course}, keeping the first",
                extra={"course_id": course_id, "uid": entry.uid},
            )
            continue
        lookup.by_uid[entry.uid] = entry
        added += 1

    lookup.by_course[course_id] = entries

    summary = CourseSummary.from_course(course_data)
    for master_uid in course_data.get("other_version_parent_uids") or []:
        lookup.courses_by_master_subject.setdefault(master_uid, []).append(summary)
    lookup.archived_courses_by_course[course_id] = list(course_data.get("archived_courses") or [])
    return added


def build_path_lookup(source, course_ids: Iterable[str], strict: bool = False) -> PathLookup:
    """
    Build the PathLookup for a set of courses.

    Args:
        source: Course source (see module docstring)
        course_ids: Courses to index
        strict: True when the caller named the courses explicitly; a
                missing course then raises instead of being skipped

    Raises:
        MissingCourseError: strict and a course has no readable data
    """
    lookup = PathLookup()

    for course_id in course_ids:
        course_data: Optional[CourseData] = None
        try:
            course_data = source.load_course(course_id)
        except CourseDataError as e:
            if strict:
                raise missing_course_error(course_id, source.input_dir) from e
            logger.error(
                f"[paths] {course_id}: unreadable course data, skipping ({e.cause})",
                extra={"course_id": course_id},
            )
            continue

        if course_data is None:
            if strict:
                raise missing_course_error(course_id, source.input_dir)
            logger.warning(
                f"[paths] {course_id}: no parsed course data found, skipping",
                extra={"course_id": course_id},
            )
            continue

        if not is_course_published(course_data):
            logger.info(
                f"[paths] {course_id}: not published, skipping",
                extra={"course_id": course_id},
            )
            continue

        added = add_course(lookup, course_data)
        logger.debug(f"[paths] {course_id}: indexed {added} items")

    return lookup


def count_by_type(lookup: PathLookup) -> Dict[str, int]:
    """Count indexed entries per item type, for run summaries"""
    counts: Dict[str, int] = {}
    for entry in lookup.by_uid.values():
        key = entry.item_type.name.lower()
        counts[key] = counts.get(key, 0) + 1
    return counts
