"""
# ocw-to-hugo
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

file_operations.py - Read course exports from disk and write Hugo content

Input layout:
    <input_dir>/<course_id>/<course_id>_parsed.json

Output layout:
    <output_dir>/content/courses/<course_id>/...

A run happens in two passes. The first loads every course and builds the
PathLookup; the second generates and writes markdown one course at a time.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from ocw_to_hugo.config_utils import RunConfig, load_course_list
from ocw_to_hugo.constants import PARSED_JSON_SUFFIX
from ocw_to_hugo.errors import (
    course_data_error,
    invalid_directory_error,
    no_courses_found_error,
)
from ocw_to_hugo.markdown_generators import MarkdownFile, generate_markdown_from_json
from ocw_to_hugo.models import CourseData, PathLookup
from ocw_to_hugo.path_index import build_path_lookup

logger = logging.getLogger(__name__)

CONTENT_SUBDIR = Path("content") / "courses"


# ============================================================================
# Path safety
# ============================================================================

def is_safe_path(base_dir: Path, target_path: Path) -> bool:
    """
    Check if target_path is safely within base_dir (no symlink escape).

    Generated names come from course data, so a filename key like
    "../../etc" must never leave the course folder.
    """
    try:
        target_path.resolve().relative_to(base_dir.resolve())
        return True
    except ValueError:
        return False


# ============================================================================
# Course source
# ============================================================================

class DirectoryCourseSource:
    """Loads parsed course JSON from one folder per course"""

    def __init__(self, input_dir: Path):
        self.input_dir = Path(input_dir)
        self._cache: Dict[str, CourseData] = {}

    def find_course_json(self, course_id: str) -> Optional[Path]:
        """
        Returns:
            <course_id>_parsed.json if present, else the first *_parsed.json
            in the course folder, else None
        """
        course_dir = self.input_dir / course_id
        if not course_dir.is_dir():
            return None
        preferred = course_dir / f"{course_id}{PARSED_JSON_SUFFIX}"
        if preferred.is_file():
            return preferred
        candidates = sorted(course_dir.glob(f"*{PARSED_JSON_SUFFIX}"))
        return candidates[0] if candidates else None

    def load_course(self, course_id: str) -> Optional[CourseData]:
        """
        Load one course, or None when it has no parsed data.

        Raises:
            CourseDataError: The file exists but is not a JSON object
        """
        if course_id in self._cache:
            return self._cache[course_id]

        json_path = self.find_course_json(course_id)
        if json_path is None:
            return None

        try:
            data = json.loads(json_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise course_data_error(json_path, e) from e
        if not isinstance(data, dict):
            raise course_data_error(json_path)

        course_data = CourseData.from_json(data)
        if not course_data.short_url:
            # Older exports omit short_url; the folder name is the course id
            course_data = CourseData.from_json({**data, "short_url": course_id})
        self._cache[course_id] = course_data
        return course_data


def list_course_ids(input_dir: Path) -> List[str]:
    """Course folders under input_dir that hold parsed data, sorted"""
    input_dir = Path(input_dir)
    if not input_dir.is_dir():
        return []
    return sorted(
        child.name for child in input_dir.iterdir()
        if child.is_dir() and any(child.glob(f"*{PARSED_JSON_SUFFIX}"))
    )


# ============================================================================
# Writing
# ============================================================================

def write_markdown_files(destination: Path, files: Iterable[MarkdownFile]) -> int:
    """
    Write generated documents under destination.

    Returns:
        Number of files written
    """
    destination = Path(destination)
    written = 0
    for md_file in files:
        target = destination / md_file.name
        if not is_safe_path(destination, target):
            logger.warning(f"[write] refusing to write outside {destination}: {md_file.name}")
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(md_file.data, encoding="utf-8")
        written += 1
    return written


# ============================================================================
# Run orchestration
# ============================================================================

@dataclass
class ConversionResult:
    """Counts for one conversion run"""
    courses_requested: int = 0
    courses_converted: List[str] = field(default_factory=list)
    files_written: int = 0


def resolve_course_ids(config: RunConfig, course_ids: Optional[List[str]] = None) -> Tuple[List[str], bool]:
    """
    Work out which courses a run covers.

    Returns:
        (course_ids, strict). strict is True when the courses were named
        explicitly, so a missing one is an error rather than a skip.
    """
    if course_ids:
        return list(course_ids), True
    if config.courses_file:
        return load_course_list(config.courses_file), True
    return list_course_ids(config.input_dir), False


def _check_directories(config: RunConfig, need_output: bool) -> None:
    if not config.input_dir or not Path(config.input_dir).is_dir():
        raise invalid_directory_error("input", config.input_dir)
    if need_output and not config.output_dir:
        raise invalid_directory_error("output", config.output_dir)


def build_paths_for_all_courses(
    config: RunConfig,
    course_ids: Optional[List[str]] = None,
) -> Tuple[DirectoryCourseSource, PathLookup, List[str]]:
    """
    First pass: index every course in the run.

    Raises:
        ConfigurationError: input_dir missing
        NoCoursesFoundError: nothing to index
        MissingCourseError: an explicitly named course has no data
    """
    _check_directories(config, need_output=False)
    ids, strict = resolve_course_ids(config, course_ids)
    if not ids:
        raise no_courses_found_error(config.input_dir, course_ids)

    source = DirectoryCourseSource(config.input_dir)
    logger.info(f"[paths] indexing {len(ids)} course(s) from {config.input_dir}")
    lookup = build_path_lookup(source, ids, strict=strict)
    logger.info(f"[paths] {len(lookup.course_ids)} published course(s), {len(lookup.by_uid)} items")
    return source, lookup, ids


def convert_courses(config: RunConfig, course_ids: Optional[List[str]] = None) -> ConversionResult:
    """Convert every published course in the run to Hugo markdown"""
    _check_directories(config, need_output=True)
    source, lookup, ids = build_paths_for_all_courses(config, course_ids)

    result = ConversionResult(courses_requested=len(ids))
    content_root = Path(config.output_dir) / CONTENT_SUBDIR

    for course_id in lookup.course_ids:
        course_data = source.load_course(course_id)
        if course_data is None:
            continue
        files = generate_markdown_from_json(course_data, lookup, config)
        written = write_markdown_files(content_root / course_id, files)
        result.courses_converted.append(course_id)
        result.files_written += written
        logger.info(f"[convert] {course_id}: wrote {written} file(s)")

    return result
