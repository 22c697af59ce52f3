# tests/test_course_info.py
"""
Tests for course_info.py - Versions, topics and course numbers
"""
import pytest

from ocw_to_hugo.course_info import (
    format_archived_version,
    format_instructor,
    format_other_version,
    get_archived_versions,
    get_consolidated_topics,
    get_course_features,
    get_course_numbers,
    get_other_versions,
    get_publish_date,
)
from ocw_to_hugo.models import CourseData, CourseSummary
from ocw_to_hugo.path_index import build_path_lookup


@pytest.fixture
def lookup(course_a_json, course_b_json, stub_source_factory):
    source = stub_source_factory({"course-a": course_a_json, "course-b": course_b_json})
    return build_path_lookup(source, ["course-a", "course-b"])


class TestFormatting:
    """Tests for version line formatting"""

    def test_scholar_version(self):
        summary = CourseSummary(
            course_id="8-01sc", uid="u", title="Classical Mechanics",
            sort_as="8.01SC", semester="Fall", year="2016", is_scholar=True,
        )
        assert format_other_version(summary) == \
            "[8.01SC CLASSICAL MECHANICS](/courses/8-01sc) | SCHOLAR,  FALL 2016"

    def test_regular_version(self):
        summary = CourseSummary(
            course_id="8-01", uid="u", title="Physics I", sort_as="8.01", semester="Spring", year="2020",
        )
        assert format_other_version(summary) == "[8.01 PHYSICS I](/courses/8-01) |  SPRING 2020"

    def test_archived_version(self):
        archived = {
            "title": "American Foreign Policy",
            "sort_as": "17.40",
            "from_semester": "Fall",
            "from_year": "2010",
            "dspace_url": "https://dspace.mit.edu/handle/1721.1/99",
        }
        assert format_archived_version(archived) == \
            "[17.40 AMERICAN FOREIGN POLICY](https://dspace.mit.edu/handle/1721.1/99) |  FALL 2010"


class TestVersions:
    """Tests for version lookups"""

    def test_other_versions_exclude_self(self, course_a, course_b, lookup):
        assert get_other_versions(course_a, lookup) == [
            "[8.01SC CLASSICAL MECHANICS](/courses/course-b) | SCHOLAR,  SPRING 2018"
        ]
        assert get_other_versions(course_b, lookup) == [
            "[8.01 CLASSICAL MECHANICS](/courses/course-a) |  FALL 2016"
        ]

    def test_archived_versions(self, course_a, course_b, lookup):
        assert get_archived_versions(course_a, lookup) == []
        assert get_archived_versions(course_b, lookup) == [
            "[8.01 CLASSICAL MECHANICS](https://dspace.mit.edu/handle/1721.1/12345) |  FALL 2010"
        ]


class TestCourseMetadata:
    """Tests for topics and course numbers"""

    def test_consolidated_topics(self, course_a):
        assert get_consolidated_topics(course_a.collections) == {
            "Science": {"Physics": ["Mechanics", "Relativity"]},
            "Engineering": {},
        }

    def test_course_numbers(self, course_a_json):
        from ocw_to_hugo.models import CourseData

        course_a_json["extra_course_number"] = [
            {"linked_course_number_col": "8.011"},
            {"linked_course_number_col": ""},
        ]
        assert get_course_numbers(CourseData.from_json(course_a_json)) == ["8.01", "8.011"]

    def test_format_instructor(self):
        assert format_instructor({"salutation": "Prof.", "first_name": "Ada", "last_name": "Lovelace"}) == "Prof. Ada Lovelace"
        assert format_instructor({"salutation": "", "first_name": "Ada", "last_name": "Lovelace"}) == "Ada Lovelace"
        assert format_instructor({"salutation": "Dr.", "last_name": "Noether"}) == "Dr. Noether"

    def test_course_features(self, course_a):
        assert get_course_features(course_a) == [
            {"feature": "Lecture Videos", "subfeature": "Full Lectures"},
            {"feature": "Problem Sets"},
        ]

    def test_course_features_missing(self, course_a_json):
        del course_a_json["course_feature_tags"]
        assert get_course_features(CourseData.from_json(course_a_json)) == []

    def test_publish_date(self, course_a):
        assert get_publish_date(course_a) == "2016-09-01T12:00:00"

    def test_publish_date_unset(self, course_a_json):
        course_a_json["first_published_to_production"] = None
        assert get_publish_date(CourseData.from_json(course_a_json)) == ""

    def test_publish_date_unreadable(self, course_a_json, caplog):
        course_a_json["first_published_to_production"] = "soon"
        assert get_publish_date(CourseData.from_json(course_a_json)) == ""
        assert "first_published_to_production" in caplog.text
