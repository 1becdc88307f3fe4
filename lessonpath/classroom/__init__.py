"""
lessonpath Classroom - Runtime components for loading and navigating courses.

This module provides:
- engine: pure progression rules (module locking, progress, current lesson)
- CourseLoader: Load course definitions from YAML/JSON
- ProgressTracker: Record learner completions
- Navigator: Lesson sequencing on top of the engine
"""

from . import engine

from .engine import (
    UNLOCK_THRESHOLD,
    is_lesson_completed,
    lesson_status,
    module_progress,
    is_module_locked,
    module_states,
    find_current_lesson,
    overall_progress,
    adjacent_lessons,
)

from .loader import (
    CourseLoader,
    load_course_file,
    parse_course,
)

from .progress import (
    ProgressTracker,
    DEFAULT_PROGRESS_DIR,
    DEFAULT_PROGRESS_DB,
)

from .navigator import (
    Navigator,
    LessonLockedError,
    NavigationLesson,
    NavigationModule,
)

__all__ = [
    # Engine
    "engine",
    "UNLOCK_THRESHOLD",
    "is_lesson_completed",
    "lesson_status",
    "module_progress",
    "is_module_locked",
    "module_states",
    "find_current_lesson",
    "overall_progress",
    "adjacent_lessons",
    # Loader
    "CourseLoader",
    "load_course_file",
    "parse_course",
    # Progress
    "ProgressTracker",
    "DEFAULT_PROGRESS_DIR",
    "DEFAULT_PROGRESS_DB",
    # Navigator
    "Navigator",
    "LessonLockedError",
    "NavigationLesson",
    "NavigationModule",
]
