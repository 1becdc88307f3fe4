"""
CourseLoader - Load course definitions from YAML or JSON files.

Provides read-only access to:
- Available course ids in a courses directory
- Validated Course trees (unique lesson ids, ordered modules)
"""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from lessonpath.schemas import Course


logger = logging.getLogger(__name__)

COURSE_SUFFIXES = (".yaml", ".yml", ".json")


def parse_course(data: dict[str, Any]) -> Course:
    """
    Validate raw course data.

    Raises:
        pydantic.ValidationError: If the data does not describe a valid course
    """
    return Course.model_validate(data)


def load_course_file(path: str | Path) -> Course:
    """
    Load a single course file.

    Args:
        path: Path to a .yaml, .yml or .json course definition

    Returns:
        Validated Course

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the suffix is unsupported or the content is invalid
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Course file not found: {file_path}")

    suffix = file_path.suffix.lower()
    with open(file_path, "r", encoding="utf-8") as f:
        if suffix == ".json":
            data = json.load(f)
        elif suffix in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        else:
            raise ValueError(f"Unsupported course file type: {file_path}")

    if not isinstance(data, dict):
        raise ValueError(f"Course file must contain a mapping: {file_path}")

    course = parse_course(data)
    logger.info(
        f"Loaded course {course.id}: {len(course.modules)} modules, "
        f"{course.lesson_count} lessons"
    )
    return course


class CourseLoader:
    """
    Load courses from a directory of definition files.

    The file stem is the course id used for lookup (e.g. python-101.yaml).
    """

    def __init__(self, courses_dir: str | Path):
        """
        Initialize loader with a courses directory.

        Args:
            courses_dir: Directory containing course files
        """
        self.courses_dir = Path(courses_dir)
        if not self.courses_dir.is_dir():
            raise FileNotFoundError(f"Courses directory not found: {courses_dir}")

    def _find_file(self, course_id: str) -> Path | None:
        for suffix in COURSE_SUFFIXES:
            candidate = self.courses_dir / f"{course_id}{suffix}"
            if candidate.exists():
                return candidate
        return None

    def list_course_ids(self) -> list[str]:
        """List course ids (file stems), sorted."""
        ids = {
            p.stem for p in self.courses_dir.iterdir()
            if p.is_file() and p.suffix.lower() in COURSE_SUFFIXES
        }
        return sorted(ids)

    def load_course(self, course_id: str) -> Course:
        """Load and validate one course by id."""
        file_path = self._find_file(course_id)
        if file_path is None:
            raise FileNotFoundError(f"Course not found: {course_id} in {self.courses_dir}")
        return load_course_file(file_path)

    def load_all(self) -> dict[str, Course]:
        """Load every course in the directory, keyed by file stem."""
        courses = {}
        for course_id in self.list_course_ids():
            courses[course_id] = self.load_course(course_id)
        logger.info(f"Loaded {len(courses)} courses from {self.courses_dir}")
        return courses
