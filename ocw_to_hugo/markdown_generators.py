"""
# ocw-to-hugo
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

markdown_generators.py - Build the Hugo markdown documents for one course

Output, relative to content/courses/<course_id>/:
- _index.md                         course home
- sections/<page>.md                a page without children
- sections/<page>/_index.md         a page with child pages, PDFs or media
- <pdf viewer path>.md              one per PDF (layout: pdf)
- <media path>.md                   one per embedded media item (layout: video)

Page bodies go through the link rewriter before HTML->markdown conversion,
so every document links with paths from the shared PathLookup.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import frontmatter

from ocw_to_hugo.config_utils import RunConfig
from ocw_to_hugo.constants import COURSE_HOME_SECTION_TYPE
from ocw_to_hugo.course_info import (
    format_instructor,
    get_archived_versions,
    get_consolidated_topics,
    get_course_features,
    get_course_numbers,
    get_other_versions,
    get_publish_date,
)
from ocw_to_hugo.html_convert import html_to_markdown
from ocw_to_hugo.link_rewriter import (
    get_youtube_embed_html,
    pdf_viewer_path,
    rewrite_links,
    strip_s3,
)
from ocw_to_hugo.models import CourseData, PathLookup

logger = logging.getLogger(__name__)

HOME_FILENAME = "_index.md"
MENU_WEIGHT_STEP = 10


@dataclass
class MarkdownFile:
    """One generated document; name is relative to the course folder"""
    name: str
    data: str


@dataclass
class MenuAccumulator:
    """Documents produced so far, plus the running menu position"""
    files: List[MarkdownFile] = field(default_factory=list)
    menu_index: int = 0

    def next_weight(self) -> int:
        self.menu_index += 1
        return self.menu_index * MENU_WEIGHT_STEP


@dataclass
class CourseContext:
    """Everything the page traversal reads; nothing here is modified"""
    course_data: CourseData
    path_lookup: PathLookup
    config: RunConfig
    children: Dict[str, List[Dict[str, Any]]]
    pdf_files: Dict[str, List[Dict[str, Any]]]
    media: Dict[str, List[Dict[str, Any]]]

    @property
    def course_id(self) -> str:
        return self.course_data.short_url


def render_document(metadata: Dict[str, Any], content: str = "") -> str:
    """Serialise front matter and body into one markdown document"""
    post = frontmatter.Post(content, **metadata)
    return frontmatter.dumps(post) + "\n"


def convert_page_text(
    text: Optional[str],
    course_data: CourseData,
    path_lookup: PathLookup,
    config: RunConfig,
) -> str:
    """Rewrite links in a page's HTML, then convert it to markdown"""
    return html_to_markdown(rewrite_links(text, course_data, path_lookup, config))


# ============================================================================
# Course
# ============================================================================

def _group_by_parent(items: List[Dict[str, Any]]) -> Dict[str, List[Dict[str, Any]]]:
    grouped: Dict[str, List[Dict[str, Any]]] = {}
    for item in items:
        parent = item.get("parent_uid")
        if parent:
            grouped.setdefault(parent, []).append(item)
    return grouped


def build_course_context(course_data: CourseData, path_lookup: PathLookup, config: RunConfig) -> CourseContext:
    pdfs = [f for f in course_data.files if f.get("file_type") == "application/pdf"]
    return CourseContext(
        course_data=course_data,
        path_lookup=path_lookup,
        config=config,
        children=_group_by_parent(course_data.pages),
        pdf_files=_group_by_parent(pdfs),
        media=_group_by_parent(list(course_data.embedded_media.values())),
    )


def generate_markdown_from_json(
    course_data: CourseData,
    path_lookup: PathLookup,
    config: RunConfig,
) -> List[MarkdownFile]:
    """Return every markdown document for one course, home page first"""
    context = build_course_context(course_data, path_lookup, config)
    accumulator = MenuAccumulator()
    accumulator.files.append(MarkdownFile(HOME_FILENAME, generate_course_home(context)))

    root_sections = [
        page for page in course_data.pages
        if (not page.get("parent_uid") or page.get("parent_uid") == course_data.uid)
        and page.get("type") != COURSE_HOME_SECTION_TYPE
    ]
    for page in root_sections:
        generate_markdown_recursive(page, None, context, accumulator)

    return accumulator.files


def generate_course_home(context: CourseContext) -> str:
    course_data = context.course_data
    course_id = context.course_id

    home_page = next(
        (p for p in course_data.pages if p.get("type") == COURSE_HOME_SECTION_TYPE),
        None,
    )
    body = ""
    if home_page:
        body = convert_page_text(home_page.get("text"), course_data, context.path_lookup, context.config)

    front_matter = {
        "title": "Course Home",
        "course_id": course_id,
        "course_title": course_data.title,
        "course_description": convert_page_text(
            course_data.get("description"), course_data, context.path_lookup, context.config
        ).strip(),
        "course_image_url": strip_s3(course_data.get("image_src") or "", context.config),
        "course_thumbnail_image_url": strip_s3(course_data.get("thumbnail_image_src") or "", context.config),
        "publishdate": get_publish_date(course_data),
        "course_info": {
            "instructors": [format_instructor(i) for i in course_data.get("instructors") or []],
            "course_features": get_course_features(course_data),
            "topics": get_consolidated_topics(course_data.collections),
            "course_numbers": get_course_numbers(course_data),
            "term": f"{course_data.get('from_semester') or ''} {course_data.get('from_year') or ''}".strip(),
            "level": course_data.get("course_level") or "",
        },
        "other_versions": get_other_versions(course_data, context.path_lookup),
        "archived_versions": get_archived_versions(course_data, context.path_lookup),
        "menu": {
            course_id: {
                "identifier": "course-home",
                "weight": -10,
            }
        },
    }
    return render_document(front_matter, body)


# ============================================================================
# Pages
# ============================================================================

def generate_markdown_recursive(
    page: Dict[str, Any],
    parent: Optional[Dict[str, Any]],
    context: CourseContext,
    accumulator: MenuAccumulator,
) -> None:
    """Append the documents for `page` and everything below it to the accumulator"""
    uid = page.get("uid") or ""
    entry = context.path_lookup.get(uid)
    if entry is None:
        logger.debug(f"[markdown] {context.course_id}: no path for page {uid}, skipping")
        return

    children = context.children.get(uid, [])
    pdf_files = context.pdf_files.get(uid, [])
    media = context.media.get(uid, [])
    is_branch = bool(children or pdf_files or media)

    relative = entry.path.lstrip("/")
    name = f"{relative}/{HOME_FILENAME}" if is_branch else f"{relative}.md"

    front_matter: Dict[str, Any] = {
        "title": page.get("title") or entry.filename_key,
        "course_id": context.course_id,
        "uid": uid,
    }
    weight = accumulator.next_weight()
    if page.get("list_in_left_nav"):
        menu_entry: Dict[str, Any] = {"identifier": uid, "weight": weight}
        if parent is not None:
            menu_entry["parent"] = parent.get("uid")
        front_matter["menu"] = {context.course_id: menu_entry}
    if media:
        front_matter["type"] = "courses"
        front_matter["layout"] = "videogallery"
    if page.get("is_media_gallery"):
        front_matter["is_media_gallery"] = True

    body = convert_page_text(page.get("text"), context.course_data, context.path_lookup, context.config)
    accumulator.files.append(MarkdownFile(name, render_document(front_matter, body)))

    for course_file in pdf_files:
        pdf_document = generate_pdf_markdown(course_file, context)
        if pdf_document:
            accumulator.files.append(pdf_document)

    for item in media:
        media_document = generate_media_markdown(item, context)
        if media_document:
            accumulator.files.append(media_document)

    for child in children:
        generate_markdown_recursive(child, page, context, accumulator)


def generate_pdf_markdown(course_file: Dict[str, Any], context: CourseContext) -> Optional[MarkdownFile]:
    """Front matter document for the PDF viewer page of one file"""
    entry = context.path_lookup.get(course_file.get("uid") or "")
    if entry is None:
        return None
    viewer = pdf_viewer_path(entry, context.path_lookup)
    if viewer is None:
        return None

    front_matter = {
        "title": course_file.get("title") or entry.filename_key,
        "description": course_file.get("description") or "",
        "type": "courses",
        "layout": "pdf",
        "uid": entry.uid,
        "file_type": entry.file_type,
        "file_location": strip_s3(entry.file_location, context.config) or "",
        "course_id": context.course_id,
    }
    return MarkdownFile(f"{viewer.path.lstrip('/')}.md", render_document(front_matter))


def generate_media_markdown(media: Dict[str, Any], context: CourseContext) -> Optional[MarkdownFile]:
    """Document for one embedded media item"""
    entry = context.path_lookup.get(media.get("uid") or "")
    if entry is None:
        return None

    front_matter = {
        "title": media.get("title") or entry.filename_key,
        "uid": entry.uid,
        "parent_uid": entry.parent_uid,
        "type": "courses",
        "layout": "video",
        "course_id": context.course_id,
        "template_type": media.get("template_type") or "",
        "embedded_media": media.get("embedded_media") or [],
    }
    # Raw iframe HTML; markdown conversion would drop it
    body = get_youtube_embed_html(media)
    return MarkdownFile(f"{entry.path.lstrip('/')}.md", render_document(front_matter, body))
