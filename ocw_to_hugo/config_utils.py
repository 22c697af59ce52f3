# config_utils.py - YAML configuration for ocw-to-hugo
"""
Run configuration with YAML file support.

Configuration Resolution Order (highest to lowest priority):
1. Explicit overrides (CLI options)
2. Environment variables (OCW_TO_HUGO_STRIP_S3, OCW_TO_HUGO_STATIC_PREFIX, ...)
3. ocw-to-hugo.yaml in the working directory
4. ~/.ocw-to-hugo/config.yaml (global defaults)

The resulting RunConfig is passed explicitly to the code that needs it;
nothing reads configuration from module state.

Usage:
    from ocw_to_hugo.config_utils import get_config

    config = get_config(overrides={"strip_s3": True})
    print(config.static_prefix)
"""

import os
import json
import logging
from pathlib import Path
from dataclasses import dataclass, field, fields
from typing import Optional, Dict, Any, List

import yaml

from ocw_to_hugo.constants import CONFIG_FILENAME
from ocw_to_hugo.errors import ConfigurationError

logger = logging.getLogger(__name__)

TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class RunConfig:
    """
    Complete ocw-to-hugo run configuration.

    Frozen: ConfigLoader collects values first and builds it once.
    """
    # Link rewriting
    strip_s3: bool = False
    static_prefix: str = ""

    # Locations
    input_dir: Optional[Path] = None
    output_dir: Optional[Path] = None
    courses_file: Optional[Path] = None

    # Logging
    verbosity: int = 1
    error_log: Optional[Path] = None

    # Extra settings from config file
    extra: Dict[str, Any] = field(default_factory=dict)

    # Track where values came from (for debugging)
    _sources: Dict[str, str] = field(default_factory=dict)


SETTING_KEYS = {f.name for f in fields(RunConfig) if not f.name.startswith("_") and f.name != "extra"}


class ConfigLoader:
    """Load configuration from multiple sources"""

    PATH_KEYS = {"input_dir", "output_dir", "courses_file", "error_log"}

    def __init__(self, working_dir: Optional[Path] = None):
        self.working_dir = Path(working_dir) if working_dir else Path.cwd()
        self.values: Dict[str, Any] = {}
        self.extra: Dict[str, Any] = {}
        self.sources: Dict[str, str] = {}

    def load(self, overrides: Optional[Dict[str, Any]] = None) -> RunConfig:
        """Load configuration from all sources in priority order"""
        # Load in reverse priority (lowest first, higher overwrites)
        self._load_global_config()
        self._load_yaml_config()
        self._load_env_vars()
        if overrides:
            self._apply(overrides, "override")
        return RunConfig(**self.values, extra=self.extra, _sources=self.sources)

    def _load_global_config(self):
        """Load ~/.ocw-to-hugo/config.yaml if it exists"""
        global_config = Path.home() / ".ocw-to-hugo" / "config.yaml"
        if global_config.exists():
            self._load_yaml_file(global_config, "global")

    def _load_yaml_config(self):
        """Load ocw-to-hugo.yaml from the working directory"""
        yaml_path = self.working_dir / CONFIG_FILENAME
        if yaml_path.exists():
            self._load_yaml_file(yaml_path, CONFIG_FILENAME)

    def _load_yaml_file(self, path: Path, source_name: str):
        """Load settings from a YAML file"""
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                message=f"Failed to parse {path.name}",
                suggestion="Check the file for YAML syntax errors",
                context={"file": str(path)},
                cause=e,
            )
        if not isinstance(data, dict):
            raise ConfigurationError(
                message=f"{path.name} must contain a mapping of settings",
                context={"file": str(path), "found": type(data).__name__},
            )

        known = {k: v for k, v in data.items() if k in SETTING_KEYS}
        self._apply(known, source_name)

        for key, value in data.items():
            if key not in known:
                self.extra[key] = value

    def _load_env_vars(self):
        """Load from environment variables"""
        env = {}
        strip_s3 = os.environ.get("OCW_TO_HUGO_STRIP_S3")
        if strip_s3 is not None:
            env["strip_s3"] = strip_s3.lower() in TRUTHY
        if os.environ.get("OCW_TO_HUGO_STATIC_PREFIX") is not None:
            env["static_prefix"] = os.environ["OCW_TO_HUGO_STATIC_PREFIX"]
        if os.environ.get("OCW_TO_HUGO_INPUT"):
            env["input_dir"] = os.environ["OCW_TO_HUGO_INPUT"]
        if os.environ.get("OCW_TO_HUGO_OUTPUT"):
            env["output_dir"] = os.environ["OCW_TO_HUGO_OUTPUT"]

        for key, value in env.items():
            self._set(key, value, f"env:{key}")

    def _apply(self, values: Dict[str, Any], source_name: str):
        for key, value in values.items():
            if value is None:
                continue
            self._set(key, value, source_name)

    def _set(self, key: str, value: Any, source_name: str):
        if key in self.PATH_KEYS:
            value = Path(value).expanduser()
        elif key == "strip_s3":
            value = value if isinstance(value, bool) else str(value).lower() in TRUTHY
        elif key == "static_prefix":
            value = str(value)
        elif key == "verbosity":
            value = int(value)
        if key not in SETTING_KEYS:
            self.extra[key] = value
            return
        self.values[key] = value
        self.sources[key] = source_name


# ============================================================================
# Public API
# ============================================================================

def get_config(working_dir: Optional[Path] = None, overrides: Optional[Dict[str, Any]] = None) -> RunConfig:
    """
    Get complete run configuration.

    Args:
        working_dir: Directory holding ocw-to-hugo.yaml (defaults to cwd)
        overrides: Highest-priority values, usually from CLI options.
                   None values are ignored so unset options don't clobber files.

    Returns:
        RunConfig with all settings resolved
    """
    loader = ConfigLoader(working_dir)
    return loader.load(overrides)


def load_course_list(courses_file: Path) -> List[str]:
    """
    Read a courses file of the form {"courses": ["course-id", ...]}.

    Raises:
        ConfigurationError: If the file is missing or malformed
    """
    courses_file = Path(courses_file)
    if not courses_file.is_file():
        raise ConfigurationError(
            message=f"Courses file not found: {courses_file}",
            suggestion='Create a JSON file like {"courses": ["course-id"]}',
            context={"courses_file": str(courses_file)},
        )
    try:
        data = json.loads(courses_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            message=f"Courses file is not valid JSON: {courses_file.name}",
            context={"courses_file": str(courses_file)},
            cause=e,
        )

    courses = data.get("courses") if isinstance(data, dict) else None
    if not isinstance(courses, list) or not all(isinstance(c, str) for c in courses):
        raise ConfigurationError(
            message="Courses file must contain a \"courses\" list of course ids",
            context={"courses_file": str(courses_file)},
        )
    return courses


def create_config_template(include_comments: bool = True) -> str:
    """
    Generate an ocw-to-hugo.yaml template.

    Returns:
        YAML string ready to write to file
    """
    if include_comments:
        return '''# ocw-to-hugo configuration file

# Folder holding one sub-folder per course (<course_id>/<course_id>_parsed.json)
input_dir: ./courses

# Folder where content/courses/<course_id>/ markdown is written
output_dir: ./site

# Optional JSON file listing the courses to convert: {"courses": [...]}
# courses_file: ./courses.json

# Rewrite open-learning-course-data S3 URLs to site-relative ones
strip_s3: false

# Prefix placed in front of stripped S3 paths
static_prefix: ""
'''
    else:
        return '''input_dir: ./courses
output_dir: ./site
strip_s3: false
static_prefix: ""
'''
