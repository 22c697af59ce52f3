"""
# ocw-to-hugo
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

link_rewriter.py - Find links in course HTML and work out their new targets

Three independent rules run against the original text:

1. resolveuid references   ./resolveuid/<uid>  -> path from the PathLookup
2. relative links          href="/courses/<dept>/<course>/..." -> Hugo path
3. embedded media markers  literal course_embedded_media keys -> embed/link

None of the rules edits the text. Each returns ReplacementMatch values
with offsets into the original string; replacements.py applies them.
A link that cannot be resolved produces no match and stays as it was.
"""

import html
import logging
import posixpath
import re
from typing import Any, Dict, List, Optional

from ocw_to_hugo.config_utils import RunConfig
from ocw_to_hugo.constants import (
    AWS_PATTERN,
    BASEURL_SHORTCODE,
    COURSE_ROOT_PATH,
    COURSE_URL_PATTERN,
    COURSES_URL_PREFIX,
    HREF_PATTERN,
    HTML_EXTENSIONS,
    INDEX_PAGE_NAMES,
    OCW_ORIGIN_PATTERN,
    PDF_EXTENSION,
    POPUP_TEMPLATE_TYPES,
    RESOLVEUID_PATTERN,
    SECTIONS_PATH,
    YOUTUBE_STREAM_ID,
)
from ocw_to_hugo.models import CourseData, PathEntry, PathLookup, ReplacementMatch
from ocw_to_hugo.replacements import apply_replacements, unify_matches

logger = logging.getLogger(__name__)


# ============================================================================
# URL helpers
# ============================================================================

def course_prefix(course: str, owning_course: str) -> str:
    """Base URL for links into `course` from a page of `owning_course`"""
    if course == owning_course:
        return BASEURL_SHORTCODE
    return f"{COURSES_URL_PREFIX}/{course}"


def strip_s3(url: Optional[str], config: RunConfig) -> Optional[str]:
    """Swap the course-data bucket origin for the static prefix when enabled"""
    if not url or not config.strip_s3:
        return url
    return AWS_PATTERN.sub(config.static_prefix.rstrip("/"), url)


def pdf_slug(file_id: str) -> str:
    """Foo.PDF -> foo"""
    slug = file_id.lower()
    if slug.endswith(PDF_EXTENSION):
        slug = slug[:-len(PDF_EXTENSION)]
    return slug


def pdf_viewer_path(file_entry: PathEntry, path_lookup: PathLookup) -> Optional[PathEntry]:
    """
    Return a PathEntry for the generated PDF viewer page of a file, or None
    when the file's parent has no resolved path.
    """
    parent = path_lookup.get(file_entry.parent_uid) if file_entry.parent_uid else None
    if parent is None:
        return None
    viewer_path = f"{parent.path.rstrip('/')}/{pdf_slug(file_entry.filename_key)}"
    return PathEntry(
        uid=file_entry.uid,
        course=parent.course,
        path=viewer_path,
        item_type=file_entry.item_type,
        parent_uid=parent.uid,
        filename_key=file_entry.filename_key,
        title=file_entry.title,
        file_type=file_entry.file_type,
        file_location=file_entry.file_location,
    )


def url_for_entry(
    entry: PathEntry,
    owning_course: str,
    path_lookup: PathLookup,
    config: RunConfig,
) -> Optional[str]:
    """Link target for an indexed item, as seen from a page of `owning_course`"""
    if entry.is_pdf:
        viewer = pdf_viewer_path(entry, path_lookup)
        if viewer is None:
            return None
        return course_prefix(viewer.course, owning_course) + viewer.path
    if entry.is_file:
        return strip_s3(entry.file_location, config)
    return course_prefix(entry.course, owning_course) + entry.path


# ============================================================================
# Rule 1: resolveuid references
# ============================================================================

def resolve_uid_matches(
    text: str,
    course_data: CourseData,
    path_lookup: PathLookup,
    config: RunConfig,
) -> List[ReplacementMatch]:
    matches = []
    owning_course = course_data.short_url
    for m in RESOLVEUID_PATTERN.finditer(text):
        entry = path_lookup.get(m.group("uid"))
        if entry is None:
            continue
        url = url_for_entry(entry, owning_course, path_lookup, config)
        if url is None:
            continue
        matches.append(ReplacementMatch(m.start(), len(m.group(0)), url))
    return matches


# ============================================================================
# Rule 2: relative links
# ============================================================================

def resolve_relative_link_matches(
    text: str,
    course_data: CourseData,
    path_lookup: PathLookup,
    config: RunConfig,
) -> List[ReplacementMatch]:
    """
    Rewrite href attributes that point at /courses/<dept>/<course>/...

    Other root-relative hrefs produce a match whose replacement is the
    original attribute, so callers can see they were looked at.
    """
    matches = []
    owning_course = course_data.short_url
    for m in HREF_PATTERN.finditer(text):
        url = m.group("url")
        if "resolveuid" in url:
            continue
        new_url = resolve_relative_url(url, owning_course, path_lookup, config)
        if new_url is None:
            continue
        head = text[m.start():m.start("url")]
        quote = m.group("quote")
        matches.append(ReplacementMatch(m.start(), len(m.group(0)), f"{head}{new_url}{quote}"))
    return matches


def resolve_relative_url(
    url: str,
    owning_course: str,
    path_lookup: PathLookup,
    config: RunConfig,
) -> Optional[str]:
    """
    Returns:
        The rewritten URL, the original URL for root-relative links outside
        /courses, or None for links that are not root-relative at all.
    """
    stripped = OCW_ORIGIN_PATTERN.sub("", url, count=1)
    path, sep, fragment = stripped.partition("#")
    anchor = f"{sep}{fragment}"

    m = COURSE_URL_PATTERN.match(path)
    if not m:
        return url if path.startswith("/") else None

    course = m.group("course")
    prefix = course_prefix(course, owning_course)
    segments = [s for s in (m.group("rest") or "").split("/") if s]
    if segments and segments[-1].lower() in INDEX_PAGE_NAMES:
        segments.pop()

    if not segments:
        return f"{prefix}{anchor}"

    extension = posixpath.splitext(segments[-1])[1].lower()
    if extension and extension not in HTML_EXTENSIONS:
        file_url = _resolve_file_link(course, segments, owning_course, path_lookup, config)
        if file_url is None:
            return url
        return f"{file_url}{anchor}"

    return f"{prefix}{SECTIONS_PATH}/{'/'.join(segments)}{anchor}"


def _resolve_file_link(
    course: str,
    segments: List[str],
    owning_course: str,
    path_lookup: PathLookup,
    config: RunConfig,
) -> Optional[str]:
    name = segments[-1].lower()
    candidates = [
        e for e in path_lookup.course_entries(course)
        if e.is_file and e.filename_key.lower() == name
    ]
    if not candidates:
        return None

    pdfs = [e for e in candidates if e.is_pdf]
    if not pdfs:
        return strip_s3(candidates[0].file_location, config)

    middle = segments[:-1]
    section_path = f"{SECTIONS_PATH}/{'/'.join(middle)}" if middle else COURSE_ROOT_PATH

    viewers = []
    for pdf in pdfs:
        viewer = pdf_viewer_path(pdf, path_lookup)
        if viewer is not None and posixpath.dirname(viewer.path) == section_path:
            viewers.append(viewer)

    if not viewers:
        return None
    if len(viewers) > 1:
        logger.warning(
            f"[links] {owning_course}: {len(viewers)} PDFs named {segments[-1]} under "
            f"{course}{section_path}, using the first",
            extra={"course_id": owning_course, "uid": viewers[0].uid},
        )
    viewer = viewers[0]
    return course_prefix(viewer.course, owning_course) + viewer.path


# ============================================================================
# Rule 3: embedded media markers
# ============================================================================

def get_youtube_embed_html(media: Dict[str, Any]) -> str:
    """Inline iframe HTML for every YouTube stream attached to a media item"""
    streams = [
        m for m in media.get("embedded_media") or []
        if m.get("id") == YOUTUBE_STREAM_ID and m.get("media_info")
    ]
    return "".join(
        '<div class="text-center"><iframe width="560" height="315" '
        f'src="https://www.youtube-nocookie.com/embed/{html.escape(m["media_info"])}" '
        'frameborder="0" allow="encrypted-media; picture-in-picture"></iframe></div>'
        for m in streams
    )


def _media_link(media: Dict[str, Any], owning_course: str, path_lookup: PathLookup) -> Optional[str]:
    entry = path_lookup.get(media.get("uid") or "")
    if entry is None:
        return None
    href = course_prefix(entry.course, owning_course) + entry.path
    title = html.escape(media.get("title") or entry.title or entry.filename_key)
    return f'<a href="{href}">{title}</a>'


def embedded_media_replacement(
    media: Dict[str, Any],
    owning_course: str,
    path_lookup: PathLookup,
) -> Optional[str]:
    """Inline embed for streaming media, a link to the media page for popups"""
    if media.get("template_type") in POPUP_TEMPLATE_TYPES:
        return _media_link(media, owning_course, path_lookup)
    return get_youtube_embed_html(media) or _media_link(media, owning_course, path_lookup)


def resolve_embedded_media_matches(
    text: str,
    course_data: CourseData,
    path_lookup: PathLookup,
    config: RunConfig,
) -> List[ReplacementMatch]:
    matches = []
    owning_course = course_data.short_url
    for key, media in course_data.embedded_media.items():
        if not key or key not in text:
            continue
        replacement = embedded_media_replacement(media, owning_course, path_lookup)
        if replacement is None:
            continue
        for m in re.finditer(re.escape(key), text):
            matches.append(ReplacementMatch(m.start(), len(key), replacement))
    return matches


# ============================================================================
# Entry points
# ============================================================================

LINK_RULES = (
    resolve_uid_matches,
    resolve_relative_link_matches,
    resolve_embedded_media_matches,
)


def get_link_matches(
    text: Optional[str],
    course_data: CourseData,
    path_lookup: PathLookup,
    config: RunConfig,
) -> List[ReplacementMatch]:
    """Run every rule against the original text and return all matches"""
    if not text:
        return []
    matches: List[ReplacementMatch] = []
    for rule in LINK_RULES:
        matches.extend(rule(text, course_data, path_lookup, config))
    return matches


def rewrite_links(
    text: Optional[str],
    course_data: CourseData,
    path_lookup: PathLookup,
    config: RunConfig,
) -> str:
    """Return `text` with every resolvable link replaced"""
    if not text:
        return ""
    matches = get_link_matches(text, course_data, path_lookup, config)
    return apply_replacements(text, unify_matches(matches))
