"""
catalog.py - Flat catalog of the addressable items in one course

Pages and embedded media are named by their short_url slug, files by their
asset id. The catalog does not promise any iteration order to callers.
"""

import logging
from typing import Any, Dict, Iterable, Tuple

from ocw_to_hugo.models import CatalogEntry, CourseData, ItemType

logger = logging.getLogger(__name__)


def _iter_items(course_data: CourseData) -> Iterable[Tuple[ItemType, Dict[str, Any], str]]:
    for page in course_data.pages:
        yield ItemType.PAGE, page, "short_url"
    for course_file in course_data.files:
        yield ItemType.FILE, course_file, "id"
    for media in course_data.embedded_media.values():
        yield ItemType.EMBEDDED_MEDIA, media, "short_url"


def build_items_lookup(course_data: CourseData) -> Dict[str, CatalogEntry]:
    """
    Build uid -> CatalogEntry for every page, file and embedded media item.

    An empty course gives an empty dict.
    """
    items: Dict[str, CatalogEntry] = {}
    course_id = course_data.short_url

    for item_type, item, key_field in _iter_items(course_data):
        uid = item.get("uid")
        if not uid:
            logger.warning(
                f"[catalog] {course_id}: skipping {item_type.name.lower()} without a uid",
                extra={"course_id": course_id},
            )
            continue

        if uid in items:
            logger.warning(
                f"[catalog] {course_id}: duplicate uid {uid}, keeping the first item",
                extra={"course_id": course_id, "uid": uid},
            )
            continue

        filename_key = item.get(key_field) or uid
        items[uid] = CatalogEntry(
            uid=uid,
            item_type=item_type,
            parent_uid=item.get("parent_uid") or None,
            filename_key=filename_key,
            data=item,
        )

    return items
