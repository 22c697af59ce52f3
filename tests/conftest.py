# tests/conftest.py
"""
Pytest configuration and shared fixtures for ocw-to-hugo tests
"""
import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from ocw_to_hugo.config_utils import RunConfig
from ocw_to_hugo.models import CourseData


def make_uid(n: int) -> str:
    """32 hex chars, the shape resolveuid links expect"""
    return f"{n:032x}"


COURSE_A_UID = make_uid(0xA0)
COURSE_B_UID = make_uid(0xB0)

HOME_UID = make_uid(0xA1)
SYLLABUS_UID = make_uid(0xA2)
LECTURES_UID = make_uid(0xA3)
LECTURE_1_UID = make_uid(0xA4)
NOTES_PDF_UID = make_uid(0xA5)
IMAGE_UID = make_uid(0xA6)
VIDEO_UID = make_uid(0xA7)

B_HOME_UID = make_uid(0xB1)
B_READINGS_UID = make_uid(0xB2)

S3_ORIGIN = "https://open-learning-course-data-production.s3.amazonaws.com"


def make_course(short_url: str, uid: str, **fields: Any) -> Dict[str, Any]:
    """Minimal published course JSON; keyword arguments override fields"""
    course = {
        "uid": uid,
        "short_url": short_url,
        "title": short_url.replace("-", " ").title(),
        "sort_as": "",
        "from_semester": "Fall",
        "from_year": "2016",
        "is_scholar": False,
        "last_published_to_production": "2016/09/01 12:00:00.000",
        "last_unpublishing_date": None,
        "course_pages": [],
        "course_files": [],
        "course_embedded_media": {},
        "course_collections": [],
        "other_version_parent_uids": [],
        "archived_courses": [],
    }
    course.update(fields)
    return course


@pytest.fixture
def course_a_json() -> Dict[str, Any]:
    """Course with nested pages, a PDF, an image and a video"""
    return make_course(
        "course-a",
        COURSE_A_UID,
        title="Classical Mechanics",
        sort_as="8.01",
        description="<p>An introduction to mechanics.</p>",
        image_src=f"{S3_ORIGIN}/course-a/cover.jpg",
        thumbnail_image_src=f"{S3_ORIGIN}/course-a/cover-th.jpg",
        first_published_to_production="2016/09/01 12:00:00.000 Universal",
        instructors=[{"salutation": "Prof.", "first_name": "Ada", "last_name": "Lovelace"}],
        course_feature_tags=[
            {"ocw_feature": "Lecture Videos", "ocw_subfeature": "Full Lectures"},
            {"ocw_feature": "Problem Sets", "ocw_subfeature": ""},
        ],
        other_version_parent_uids=["master-801"],
        course_collections=[
            {"ocw_feature": "Science", "ocw_subfeature": "Physics", "ocw_speciality": "Mechanics"},
            {"ocw_feature": "Science", "ocw_subfeature": "Physics", "ocw_speciality": "Relativity"},
            {"ocw_feature": "Engineering", "ocw_subfeature": "", "ocw_speciality": ""},
        ],
        course_pages=[
            {
                "uid": HOME_UID,
                "short_url": "course-home",
                "parent_uid": COURSE_A_UID,
                "title": "Course Home",
                "type": "CourseHomeSection",
                "text": "<p>Welcome. See the <a href=\"./resolveuid/" + SYLLABUS_UID + "\">syllabus</a>.</p>",
            },
            {
                "uid": SYLLABUS_UID,
                "short_url": "syllabus",
                "parent_uid": COURSE_A_UID,
                "title": "Syllabus",
                "list_in_left_nav": True,
                "text": "<h2>Grading</h2><p>Homework counts for half.</p>",
            },
            {
                "uid": LECTURES_UID,
                "short_url": "lecture-notes",
                "parent_uid": COURSE_A_UID,
                "title": "Lecture Notes",
                "list_in_left_nav": True,
                "text": "<p>Notes for <a href=\"./resolveuid/" + LECTURE_1_UID + "\">lecture 1</a>.</p>",
            },
            {
                "uid": LECTURE_1_UID,
                "short_url": "lecture-1",
                "parent_uid": LECTURES_UID,
                "title": "Lecture 1",
                "list_in_left_nav": True,
                "text": "<p>Kinematics.</p>",
            },
        ],
        course_files=[
            {
                "uid": NOTES_PDF_UID,
                "id": "Notes.PDF",
                "parent_uid": LECTURES_UID,
                "title": "Lecture Notes PDF",
                "description": "All notes",
                "file_type": "application/pdf",
                "file_location": f"{S3_ORIGIN}/course-a/notes.pdf",
            },
            {
                "uid": IMAGE_UID,
                "id": "diagram.jpg",
                "parent_uid": SYLLABUS_UID,
                "title": "Diagram",
                "file_type": "image/jpeg",
                "file_location": f"{S3_ORIGIN}/course-a/diagram.jpg",
            },
        ],
        course_embedded_media={
            "video-key-1": {
                "uid": VIDEO_UID,
                "short_url": "lecture-1-video",
                "parent_uid": LECTURES_UID,
                "title": "Lecture 1 Video",
                "template_type": "Embed",
                "embedded_media": [
                    {"id": "Video-YouTube-Stream", "media_info": "abc123XYZ"},
                    {"id": "Video-iTunesU-MP4", "media_info": "ignored"},
                ],
            },
        },
    )


@pytest.fixture
def course_b_json() -> Dict[str, Any]:
    """Second course whose pages link into course-a"""
    return make_course(
        "course-b",
        COURSE_B_UID,
        title="Classical Mechanics",
        sort_as="8.01SC",
        is_scholar=True,
        from_semester="Spring",
        from_year="2018",
        other_version_parent_uids=["master-801"],
        archived_courses=[
            {
                "title": "Classical Mechanics",
                "sort_as": "8.01",
                "from_semester": "Fall",
                "from_year": "2010",
                "dspace_url": "https://dspace.mit.edu/handle/1721.1/12345",
            },
        ],
        course_pages=[
            {
                "uid": B_HOME_UID,
                "short_url": "course-home",
                "parent_uid": COURSE_B_UID,
                "title": "Course Home",
                "type": "CourseHomeSection",
                "text": "<p>Home</p>",
            },
            {
                "uid": B_READINGS_UID,
                "short_url": "readings",
                "parent_uid": COURSE_B_UID,
                "title": "Readings",
                "list_in_left_nav": True,
                "text": "<p>Read <a href=\"./resolveuid/" + NOTES_PDF_UID + "\">the notes</a>.</p>",
            },
        ],
    )


@pytest.fixture
def course_a(course_a_json) -> CourseData:
    return CourseData.from_json(course_a_json)


@pytest.fixture
def course_b(course_b_json) -> CourseData:
    return CourseData.from_json(course_b_json)


@pytest.fixture
def config() -> RunConfig:
    return RunConfig()


@pytest.fixture
def write_course(tmp_path) -> Callable[[Dict[str, Any]], Path]:
    """Write course JSON to <tmp>/input/<short_url>/<short_url>_parsed.json"""
    input_dir = tmp_path / "input"
    input_dir.mkdir(exist_ok=True)

    def _write(course_json: Dict[str, Any], course_id: str = None) -> Path:
        course_id = course_id or course_json["short_url"]
        course_dir = input_dir / course_id
        course_dir.mkdir(parents=True, exist_ok=True)
        (course_dir / f"{course_id}_parsed.json").write_text(json.dumps(course_json), encoding="utf-8")
        return input_dir

    return _write


class StubCourseSource:
    """In-memory course source for path index tests"""

    def __init__(self, courses: Dict[str, Any], input_dir: Path = Path("/nowhere")):
        self.courses = courses
        self.input_dir = input_dir

    def load_course(self, course_id: str):
        value = self.courses.get(course_id)
        if isinstance(value, Exception):
            raise value
        if value is None:
            return None
        return CourseData.from_json(value)


@pytest.fixture
def stub_source_factory():
    return StubCourseSource


@pytest.fixture(autouse=True)
def reset_package_logger():
    """CLI tests attach handlers to the package logger; drop them afterwards"""
    yield
    package_logger = logging.getLogger("ocw_to_hugo")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)
