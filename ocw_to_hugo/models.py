"""
# ocw-to-hugo
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

models.py - Data classes shared by the catalog, path and link modules
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from ocw_to_hugo.constants import PDF_FILE_TYPE


class ItemType(Enum):
    """Kinds of addressable content. These tags never appear in the source data."""
    PAGE = "page-type"
    FILE = "file-type"
    EMBEDDED_MEDIA = "embedded-media-page-type"
    COURSE = "course-type"


# ============================================================================
# Course data
# ============================================================================

@dataclass(frozen=True)
class CourseData:
    """One parsed course export"""
    uid: str
    short_url: str
    pages: List[Dict[str, Any]] = field(default_factory=list)
    files: List[Dict[str, Any]] = field(default_factory=list)
    embedded_media: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    collections: List[Dict[str, Any]] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "CourseData":
        return cls(
            uid=data.get("uid") or "",
            short_url=data.get("short_url") or "",
            pages=list(data.get("course_pages") or []),
            files=list(data.get("course_files") or []),
            embedded_media=dict(data.get("course_embedded_media") or {}),
            collections=list(data.get("course_collections") or []),
            raw=data,
        )

    @property
    def title(self) -> str:
        return self.raw.get("title") or ""

    def get(self, key: str, default: Any = None) -> Any:
        """Read a metadata field from the raw course JSON"""
        return self.raw.get(key, default)


@dataclass(frozen=True)
class CourseSummary:
    """The bits of a course needed to link to it as another version"""
    course_id: str
    uid: str
    title: str
    sort_as: str = ""
    semester: str = ""
    year: str = ""
    is_scholar: bool = False

    @classmethod
    def from_course(cls, course_data: CourseData) -> "CourseSummary":
        return cls(
            course_id=course_data.short_url,
            uid=course_data.uid,
            title=course_data.title,
            sort_as=course_data.get("sort_as") or "",
            semester=course_data.get("from_semester") or "",
            year=str(course_data.get("from_year") or ""),
            is_scholar=bool(course_data.get("is_scholar")),
        )

    @property
    def term(self) -> str:
        return f"{self.semester} {self.year}".strip()


# ============================================================================
# Catalog and paths
# ============================================================================

@dataclass(frozen=True)
class CatalogEntry:
    """One addressable item inside a course"""
    uid: str
    item_type: ItemType
    parent_uid: Optional[str]
    filename_key: str
    data: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True)
class PathEntry:
    """Resolved output path for one item. Never mutated after creation."""
    uid: str
    course: str
    path: str
    item_type: ItemType
    parent_uid: Optional[str] = None
    filename_key: str = ""
    title: str = ""
    file_type: Optional[str] = None
    file_location: Optional[str] = None

    @property
    def is_file(self) -> bool:
        return self.item_type == ItemType.FILE

    @property
    def is_pdf(self) -> bool:
        return self.is_file and self.file_type == PDF_FILE_TYPE


@dataclass
class PathLookup:
    """
    Global index of resolved paths across every course in a run.

    Built once by path_index.build_path_lookup and then only read.
    """
    by_uid: Dict[str, PathEntry] = field(default_factory=dict)
    by_course: Dict[str, List[PathEntry]] = field(default_factory=dict)
    courses_by_master_subject: Dict[str, List[CourseSummary]] = field(default_factory=dict)
    archived_courses_by_course: Dict[str, List[Dict[str, Any]]] = field(default_factory=dict)

    def get(self, uid: str) -> Optional[PathEntry]:
        return self.by_uid.get(uid)

    def course_entries(self, course_id: str) -> List[PathEntry]:
        return self.by_course.get(course_id, [])

    @property
    def course_ids(self) -> List[str]:
        return list(self.by_course)


# ============================================================================
# Replacements
# ============================================================================

@dataclass(frozen=True)
class ReplacementMatch:
    """Replace text[start:start + length] with replacement"""
    start: int
    length: int
    replacement: str

    @property
    def end(self) -> int:
        return self.start + self.length

    def overlaps(self, other: "ReplacementMatch") -> bool:
        return self.start < other.end and other.start < self.end
