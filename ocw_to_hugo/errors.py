# errors.py
"""
Custom exception classes with readable error messages for ocw-to-hugo

All exceptions include:
- Clear error description
- Actionable suggestions
- Relevant context
"""
from pathlib import Path
from typing import Optional, Dict, Any, List

from ocw_to_hugo.constants import MISSING_COURSE_ERROR_MESSAGE, NO_COURSES_FOUND_MESSAGE


class OcwToHugoError(Exception):
    """Base exception for all ocw-to-hugo errors"""

    def __init__(
        self,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        self.cause = cause
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error with all details"""
        lines = [
            "",
            "=" * 70,
            f"❌ {self.__class__.__name__}",
            "=" * 70,
            "",
            self.message,
        ]

        if self.context:
            lines.append("")
            lines.append("Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        if self.suggestion:
            lines.append("")
            lines.append("💡 Suggestion:")
            lines.append(f"  {self.suggestion}")

        if self.cause:
            lines.append("")
            lines.append(f"Caused by: {type(self.cause).__name__}: {self.cause}")

        lines.append("")
        lines.append("=" * 70)
        lines.append("")

        return "\n".join(lines)


class ConfigurationError(OcwToHugoError):
    """Configuration is missing or invalid"""
    pass


class CourseDataError(OcwToHugoError):
    """Course JSON could not be read or parsed"""
    pass


class MissingCourseError(OcwToHugoError):
    """A course named on the command line has no data on disk"""
    pass


class NoCoursesFoundError(OcwToHugoError):
    """The input directory holds no course data"""
    pass


# Specific error factory functions

def missing_course_error(course_id: str, input_dir: Path) -> MissingCourseError:
    """Create error for a named course with no parsed data"""
    return MissingCourseError(
        message=f"{MISSING_COURSE_ERROR_MESSAGE}: {course_id}",
        suggestion=(
            f"Place the course at {Path(input_dir) / course_id} with a "
            f"{course_id}_parsed.json file inside,\n"
            "  or remove it from the courses list."
        ),
        context={
            "course_id": course_id,
            "input_dir": str(input_dir),
        }
    )


def no_courses_found_error(input_dir: Path, course_ids: Optional[List[str]] = None) -> NoCoursesFoundError:
    """Create error for a run that found nothing to convert"""
    context: Dict[str, Any] = {"input_dir": str(input_dir)}
    if course_ids is not None:
        context["requested_courses"] = len(course_ids)
    return NoCoursesFoundError(
        message=f"{NO_COURSES_FOUND_MESSAGE}!",
        suggestion=(
            "Each course needs its own folder under the input directory:\n"
            "  <input>/<course_id>/<course_id>_parsed.json"
        ),
        context=context
    )


def invalid_directory_error(label: str, directory: Optional[Path]) -> ConfigurationError:
    """Create error for a missing input or output directory"""
    return ConfigurationError(
        message=f"Invalid {label} directory",
        suggestion=(
            f"Pass an existing directory with --{label}, or set it in ocw-to-hugo.yaml:\n"
            f"  {label}_dir: /path/to/{label}"
        ),
        context={
            f"{label}_dir": str(directory) if directory else "(not set)",
        }
    )


def course_data_error(json_path: Path, cause: Optional[Exception] = None) -> CourseDataError:
    """Create error for an unreadable parsed course file"""
    return CourseDataError(
        message=f"Could not read course data from {json_path.name}",
        suggestion="Re-export the course or check the file for truncated JSON",
        context={"file": str(json_path)},
        cause=cause
    )
