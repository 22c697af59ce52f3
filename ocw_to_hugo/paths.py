"""
# ocw-to-hugo
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

paths.py - Resolve a course-relative output path for every catalog item

Rules:
- An item whose parent is the course root lives at /sections/<key>
- Any other item lives at <parent path>/<key>
- The course root itself is "/"

Resolution walks each parent chain once and records the outcome of every
uid in a memo table (path, RESOLVING or FAILED). Meeting a RESOLVING uid
again means the chain loops back on itself. A cycle or a parent that is
not in the catalog drops the whole dependent chain from the result and is
logged once as an error; the rest of the course still resolves.
"""

import logging
from typing import Dict, List, Optional, Union

from ocw_to_hugo.constants import COURSE_ROOT_PATH, SECTIONS_PATH
from ocw_to_hugo.models import CatalogEntry

logger = logging.getLogger(__name__)


class _Marker:
    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return self.name


RESOLVING = _Marker("RESOLVING")
FAILED = _Marker("FAILED")

MemoValue = Union[str, _Marker]


def resolve_course_paths(
    items_lookup: Dict[str, CatalogEntry],
    course_uid: str,
    course_id: str,
) -> Dict[str, str]:
    """
    Compute uid -> path for every resolvable item of one course.

    Args:
        items_lookup: Catalog from catalog.build_items_lookup
        course_uid: uid of the course root
        course_id: Course short_url, used in log messages

    Returns:
        Mapping of uid to course-relative path. Items with a missing or
        cyclic parent chain are absent. The course root maps to "/".
    """
    memo: Dict[str, MemoValue] = {}

    for uid in items_lookup:
        _resolve(uid, items_lookup, course_uid, course_id, memo)

    paths = {uid: value for uid, value in memo.items() if isinstance(value, str)}
    if course_uid:
        paths[course_uid] = COURSE_ROOT_PATH
    return paths


def _resolve(
    uid: str,
    items_lookup: Dict[str, CatalogEntry],
    course_uid: str,
    course_id: str,
    memo: Dict[str, MemoValue],
) -> Optional[str]:
    """Resolve one uid, walking up the parent chain until a known base"""
    chain: List[CatalogEntry] = []
    current = uid
    base: Optional[str] = None

    while True:
        state = memo.get(current)
        if isinstance(state, str):
            base = state
            break
        if state is FAILED:
            if chain:
                logger.debug(
                    f"[paths] {course_id}: {chain[-1].uid} depends on unresolved {current}",
                    extra={"course_id": course_id, "uid": chain[-1].uid, "parent_uid": current},
                )
            break
        if state is RESOLVING:
            dependent = chain[-1].uid
            logger.error(
                f"[paths] {course_id}: cyclic parent {current} for item {dependent}",
                extra={"course_id": course_id, "uid": dependent, "parent_uid": current},
            )
            break

        entry = items_lookup.get(current)
        if entry is None:
            # Only parents can be missing: the first uid always comes from the catalog
            dependent = chain[-1].uid
            logger.error(
                f"[paths] {course_id}: missing parent {current} for item {dependent}",
                extra={"course_id": course_id, "uid": dependent, "parent_uid": current},
            )
            break

        memo[current] = RESOLVING
        chain.append(entry)

        parent = entry.parent_uid
        if not parent or parent == course_uid:
            base = SECTIONS_PATH
            break
        current = parent

    for entry in reversed(chain):
        if base is None:
            memo[entry.uid] = FAILED
            continue
        base = f"{base}/{entry.filename_key}"
        memo[entry.uid] = base

    value = memo.get(uid)
    return value if isinstance(value, str) else None
