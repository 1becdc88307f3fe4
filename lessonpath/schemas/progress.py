"""
Progress schemas for lessonpath.

Defines Pydantic models for learner progress including:
- Completion record snapshots (input to the engine)
- Lesson and module status
- Derived view state (module state, overall progress, summaries)
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .course import coerce_id


class LessonStatus(str, Enum):
    LOCKED = "locked"
    AVAILABLE = "available"
    COMPLETED = "completed"


class ModuleStatus(str, Enum):
    LOCKED = "locked"
    AVAILABLE = "available"
    COMPLETED = "completed"


class CompletionRecord(BaseModel):
    """
    Immutable snapshot of a learner's progress through one course.

    Owned by the progress store; the engine only reads it.
    """
    model_config = ConfigDict(frozen=True)

    completed_lessons: frozenset[str] = frozenset()
    current_lesson_id: Optional[str] = None

    @field_validator("completed_lessons", mode="before")
    @classmethod
    def _coerce_ids(cls, value):
        if value is None:
            return frozenset()
        if isinstance(value, (str, bytes)):
            raise ValueError("completed_lessons must be a list of lesson ids, not a string")
        if isinstance(value, (list, tuple, set, frozenset)):
            return frozenset(coerce_id(item) for item in value)
        return value

    @field_validator("current_lesson_id", mode="before")
    @classmethod
    def _coerce_current(cls, value):
        return coerce_id(value)

    def with_completed(self, lesson_id: str) -> "CompletionRecord":
        """Return a new record with lesson_id added."""
        return CompletionRecord(
            completed_lessons=self.completed_lessons | {lesson_id},
            current_lesson_id=self.current_lesson_id,
        )


class CurrentLesson(BaseModel):
    """A (module, lesson) position in the course."""
    model_config = ConfigDict(frozen=True)

    module_id: str
    lesson_id: str


class OverallProgress(BaseModel):
    model_config = ConfigDict(frozen=True)

    completed: int = 0
    total: int = 0
    percent: int = Field(default=0, ge=0, le=100)


class ModuleState(BaseModel):
    """Derived per-module view used for accordions and skill trees."""
    model_config = ConfigDict(frozen=True)

    module_id: str
    index: int
    completed: int
    total: int
    percent: int = Field(..., ge=0, le=100)
    locked: bool
    status: ModuleStatus


class ProgressSummary(BaseModel):
    course_id: str
    completed: int
    total: int
    percent: int
    modules: list[ModuleState] = []
    current_lesson_id: Optional[str] = None
    recommended_lesson_id: Optional[str] = None
