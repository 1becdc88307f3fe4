"""
Course structure schemas for lessonpath.

Defines Pydantic models for the course tree:
- Lessons (video or document, optional preview flag)
- Modules (ordered lessons, derived duration)
- Courses (ordered modules, lesson lookup)
"""

from enum import Enum
from typing import Any, Iterator, Optional

from pydantic import BaseModel, Field, computed_field, field_validator, model_validator


def coerce_id(value: Any) -> Any:
    """Accept integer ids from JSON payloads and store them as strings."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    return value


class LessonType(str, Enum):
    VIDEO = "video"
    DOCUMENT = "document"


class Lesson(BaseModel):
    id: str
    title: str
    type: LessonType = LessonType.VIDEO
    duration: Optional[int] = Field(default=None, ge=0)  # minutes
    preview: bool = False  # watchable without enrollment

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        return coerce_id(value)


class Module(BaseModel):
    """An ordered group of lessons; the unit of sequential unlocking."""
    id: str
    title: str
    lessons: list[Lesson] = []

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        return coerce_id(value)

    @field_validator("lessons", mode="before")
    @classmethod
    def _none_is_empty(cls, value):
        return [] if value is None else value

    @computed_field
    @property
    def duration(self) -> int:
        """Sum of lesson durations in minutes (unknown durations count as 0)."""
        return sum(lesson.duration or 0 for lesson in self.lessons)

    @property
    def lesson_ids(self) -> list[str]:
        return [lesson.id for lesson in self.lessons]


class Course(BaseModel):
    """
    A course is an ordered list of modules.

    Module order is meaningful: module i is gated on module i-1.
    Lesson ids must be unique across the whole course.
    """
    id: str
    title: str
    description: str = ""
    modules: list[Module] = []

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        return coerce_id(value)

    @field_validator("modules", mode="before")
    @classmethod
    def _none_is_empty(cls, value):
        return [] if value is None else value

    @model_validator(mode="after")
    def _check_unique_lesson_ids(self):
        seen: set[str] = set()
        duplicates: list[str] = []
        for lesson in self.iter_lessons():
            if lesson.id in seen:
                duplicates.append(lesson.id)
            seen.add(lesson.id)
        if duplicates:
            raise ValueError(f"Duplicate lesson ids in course {self.id}: {sorted(set(duplicates))}")
        return self

    @computed_field
    @property
    def duration(self) -> int:
        return sum(module.duration for module in self.modules)

    @property
    def lesson_count(self) -> int:
        return sum(len(module.lessons) for module in self.modules)

    def iter_lessons(self) -> Iterator[Lesson]:
        """Yield lessons in module-then-lesson order."""
        for module in self.modules:
            yield from module.lessons

    def get_module(self, module_id: str) -> Optional[Module]:
        for module in self.modules:
            if module.id == module_id:
                return module
        return None

    def find_lesson(self, lesson_id: str) -> Optional[tuple[int, Module, Lesson]]:
        """Return (module index, module, lesson) for a lesson id, if present."""
        for index, module in enumerate(self.modules):
            for lesson in module.lessons:
                if lesson.id == lesson_id:
                    return index, module, lesson
        return None
