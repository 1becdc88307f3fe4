"""
lessonpath Schemas - Pydantic models for course progression.

This module exports all schema classes for:
- Course: lessons, modules, courses
- Progress: completion records, statuses, derived progress views
"""

# Course schemas
from .course import (
    LessonType,
    Lesson,
    Module,
    Course,
)

# Progress schemas
from .progress import (
    LessonStatus,
    ModuleStatus,
    CompletionRecord,
    CurrentLesson,
    OverallProgress,
    ModuleState,
    ProgressSummary,
)

__all__ = [
    # Course
    'LessonType',
    'Lesson',
    'Module',
    'Course',
    # Progress
    'LessonStatus',
    'ModuleStatus',
    'CompletionRecord',
    'CurrentLesson',
    'OverallProgress',
    'ModuleState',
    'ProgressSummary',
]
