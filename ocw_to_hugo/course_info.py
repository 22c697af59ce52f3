"""
course_info.py - Course home metadata: versions, topics, features, instructors
"""

import logging
from typing import Any, Dict, List

from ocw_to_hugo.constants import COURSES_URL_PREFIX
from ocw_to_hugo.models import CourseData, CourseSummary, PathLookup
from ocw_to_hugo.path_index import parse_course_date

logger = logging.getLogger(__name__)


def _version_label(sort_as: str, title: str) -> str:
    return f"{sort_as} {title}".strip().upper()


def format_other_version(summary: CourseSummary) -> str:
    """[8.01SC CLASSICAL MECHANICS](/courses/8-01sc-...) | SCHOLAR,  FALL 2016"""
    scholar = "SCHOLAR, " if summary.is_scholar else ""
    return (
        f"[{_version_label(summary.sort_as, summary.title)}]"
        f"({COURSES_URL_PREFIX}/{summary.course_id}) | {scholar} {summary.term.upper()}"
    )


def format_archived_version(archived: Dict[str, Any]) -> str:
    """[17.40 AMERICAN FOREIGN POLICY](https://dspace.mit.edu/handle/...) |  FALL 2010"""
    term = f"{archived.get('from_semester') or ''} {archived.get('from_year') or ''}".strip()
    label = _version_label(archived.get("sort_as") or "", archived.get("title") or "")
    return f"[{label}]({archived['dspace_url']}) |  {term.upper()}"


def get_other_versions(course_data: CourseData, path_lookup: PathLookup) -> List[str]:
    """Other indexed courses that share a master subject with this one"""
    course_id = course_data.short_url
    seen = {course_id}
    lines = []
    for master_uid in course_data.get("other_version_parent_uids") or []:
        for summary in path_lookup.courses_by_master_subject.get(master_uid, []):
            if summary.course_id in seen:
                continue
            seen.add(summary.course_id)
            lines.append(format_other_version(summary))
    return lines


def get_archived_versions(course_data: CourseData, path_lookup: PathLookup) -> List[str]:
    archived = path_lookup.archived_courses_by_course.get(course_data.short_url, [])
    return [format_archived_version(a) for a in archived if a.get("dspace_url")]


def get_consolidated_topics(course_collections: List[Dict[str, Any]]) -> Dict[str, Dict[str, List[str]]]:
    """
    Merge collection entries into {feature: {subfeature: [speciality, ...]}}.
    """
    topics: Dict[str, Dict[str, List[str]]] = {}
    for collection in course_collections:
        feature = collection.get("ocw_feature")
        if not feature:
            continue
        subfeatures = topics.setdefault(feature, {})
        subfeature = collection.get("ocw_subfeature")
        if not subfeature:
            continue
        specialities = subfeatures.setdefault(subfeature, [])
        speciality = collection.get("ocw_speciality")
        if speciality:
            specialities.append(speciality)
    return topics


def get_course_numbers(course_data: CourseData) -> List[str]:
    numbers = [course_data.get("sort_as")] if course_data.get("sort_as") else []
    for extra in course_data.get("extra_course_number") or []:
        number = extra.get("linked_course_number_col")
        if number:
            numbers.append(number)
    return numbers


def format_instructor(instructor: Dict[str, Any]) -> str:
    """Salutation, first and last name; missing parts are skipped"""
    parts = [
        instructor.get("salutation"),
        instructor.get("first_name"),
        instructor.get("last_name"),
    ]
    return " ".join(p for p in parts if p)


def get_course_features(course_data: CourseData) -> List[Dict[str, str]]:
    """One {feature, subfeature} mapping per course_feature_tags entry, empty keys left out"""
    features = []
    for tag in course_data.get("course_feature_tags") or []:
        feature = {}
        if tag.get("ocw_feature"):
            feature["feature"] = tag["ocw_feature"]
        if tag.get("ocw_subfeature"):
            feature["subfeature"] = tag["ocw_subfeature"]
        features.append(feature)
    return features


def get_publish_date(course_data: CourseData) -> str:
    """first_published_to_production as ISO 8601, or "" when unset or unreadable"""
    value = course_data.get("first_published_to_production")
    try:
        published = parse_course_date(value)
    except (TypeError, ValueError):
        logger.warning(
            f"[home] {course_data.short_url}: unreadable first_published_to_production {value!r}",
            extra={"course_id": course_data.short_url},
        )
        return ""
    return published.isoformat() if published else ""
