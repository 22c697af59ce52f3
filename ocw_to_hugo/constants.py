"""
# ocw-to-hugo
# Copyright (c) 2026 Dale Chapman
# Licensed under the MIT License. See LICENSE in the project root.

constants.py - Shared tokens, patterns and messages
"""

import re

# Hugo shortcode standing in for "this course's base URL"
BASEURL_SHORTCODE = "{{< baseurl >}}"

# Prefix for links that point into another course
COURSES_URL_PREFIX = "/courses"

# Top-level content lives under /sections
SECTIONS_PATH = "/sections"
COURSE_ROOT_PATH = "/"

PDF_FILE_TYPE = "application/pdf"
PDF_EXTENSION = ".pdf"
HTML_EXTENSIONS = {".htm", ".html"}
INDEX_PAGE_NAMES = {"index.htm", "index.html"}

# Page type for the course home section; it is rendered as the home page
COURSE_HOME_SECTION_TYPE = "CourseHomeSection"

# Embedded media template types rendered as links instead of inline embeds
POPUP_TEMPLATE_TYPES = {"Popup", "Thumbnail_Popup"}
YOUTUBE_STREAM_ID = "Video-YouTube-Stream"

# Leading date-time of last_published_to_production and friends, e.g.
# "2019/05/23 18:25:48.960 Universal" or "2010/03/10 0:0:0". Milliseconds
# are optional and any trailing zone name is ignored.
COURSE_DATE_PATTERN = re.compile(
    r"^\s*(?P<year>\d{4})/(?P<month>\d{1,2})/(?P<day>\d{1,2})"
    r" +(?P<hour>\d{1,2}):(?P<minute>\d{1,2}):(?P<second>\d{1,2})"
    r"(?:\.(?P<millis>\d{1,3}))?"
)

# Parsed course JSON lives at <input>/<course_id>/<course_id>_parsed.json
PARSED_JSON_SUFFIX = "_parsed.json"

# ============================================================================
# Patterns
# ============================================================================

# ./resolveuid/<32 hex chars>
RESOLVEUID_PATTERN = re.compile(r"(?:\./)?resolveuid/(?P<uid>[0-9a-f]{32})")

# href="..." or href='...'
HREF_PATTERN = re.compile(
    r"""href=(?P<quote>["'])(?P<url>.*?)(?P=quote)""",
    re.IGNORECASE | re.DOTALL,
)

# /courses/<department>/<course_id>[/...]
COURSE_URL_PATTERN = re.compile(r"^/courses/(?P<department>[^/]+)/(?P<course>[^/]+)(?P<rest>/.*)?$")

# Hardcoded site origin stripped from absolute links
OCW_ORIGIN_PATTERN = re.compile(r"^https?://ocw\.mit\.edu", re.IGNORECASE)

# Storage bucket origin, e.g. https://open-learning-course-data-ci.s3.amazonaws.com
AWS_PATTERN = re.compile(r"https?://open-learning-course-data[^/]*\.s3\.amazonaws\.com")

# ============================================================================
# Messages
# ============================================================================

MISSING_COURSE_ERROR_MESSAGE = "Specified course was not found"
NO_COURSES_FOUND_MESSAGE = "No courses found"

# Output file names
ERROR_LOG_FILENAME = "ocw-to-hugo.error.log"
CONFIG_FILENAME = "ocw-to-hugo.yaml"
