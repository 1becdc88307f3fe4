"""
Navigator - Lesson sequencing, module unlocking, and navigation.

Provides:
- Next/previous lesson navigation across module boundaries
- Lesson availability from the progression engine
- Course tree with status indicators
- Completing a lesson and advancing to the next available one
"""

import logging
from dataclasses import dataclass
from typing import Optional

from lessonpath.schemas import (
    CompletionRecord,
    Course,
    Lesson,
    LessonStatus,
    ModuleState,
    ProgressSummary,
)

from . import engine
from .progress import ProgressTracker


logger = logging.getLogger(__name__)


class LessonLockedError(ValueError):
    """Raised when completing a lesson the learner cannot open yet."""


@dataclass
class NavigationLesson:
    """Lesson with navigation metadata."""
    lesson: Lesson
    status: LessonStatus
    is_current: bool


@dataclass
class NavigationModule:
    """Module with lessons and derived state."""
    state: ModuleState
    title: str
    duration: int
    lessons: list[NavigationLesson]


class Navigator:
    """
    Navigate through a course with unlock checking.

    Combines a Course (content) with a ProgressTracker (learner state).
    Every read takes a fresh snapshot from the tracker and delegates the
    rules to the engine.
    """

    def __init__(
        self,
        course: Course,
        progress: ProgressTracker,
        threshold: float = engine.UNLOCK_THRESHOLD,
        enrolled: bool = True,
    ):
        """
        Initialize navigator.

        Args:
            course: Course to navigate
            progress: ProgressTracker for the learner
            threshold: Fraction of a module needed to unlock the next one
            enrolled: Whether the learner is enrolled (else preview lessons only)
        """
        self.course = course
        self.progress = progress
        self.threshold = threshold
        self.enrolled = enrolled

    def _record(self) -> CompletionRecord:
        return self.progress.get_completion_record(self.course.id)

    # -------------------------------------------------------------------------
    # Availability
    # -------------------------------------------------------------------------

    def get_lesson_status(self, lesson_id: str) -> LessonStatus:
        return engine.lesson_status(
            self.course, self._record(), lesson_id,
            enrolled=self.enrolled, threshold=self.threshold,
        )

    def is_lesson_available(self, lesson_id: str) -> bool:
        """Check if a lesson can be opened (available or already completed)."""
        return self.get_lesson_status(lesson_id) != LessonStatus.LOCKED

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def get_previous_lesson_id(self, lesson_id: str) -> Optional[str]:
        previous, _ = engine.adjacent_lessons(self.course, lesson_id)
        return previous.lesson_id if previous else None

    def get_next_lesson_id(self, lesson_id: str) -> Optional[str]:
        _, following = engine.adjacent_lessons(self.course, lesson_id)
        return following.lesson_id if following else None

    def get_next_available_lesson_id(self, lesson_id: str) -> Optional[str]:
        """Next lesson after lesson_id that is available and not completed."""
        record = self._record()
        next_id = self.get_next_lesson_id(lesson_id)
        while next_id:
            status = engine.lesson_status(
                self.course, record, next_id,
                enrolled=self.enrolled, threshold=self.threshold,
            )
            if status == LessonStatus.AVAILABLE:
                return next_id
            next_id = self.get_next_lesson_id(next_id)
        return None

    def get_recommended_lesson_id(self) -> Optional[str]:
        """
        Get the lesson the learner should open next.

        Priority:
        1. Current lesson pointer if still available and not completed
        2. First incomplete lesson in course order, if it can be opened
        """
        record = self._record()
        current_id = record.current_lesson_id
        if current_id:
            status = engine.lesson_status(
                self.course, record, current_id,
                enrolled=self.enrolled, threshold=self.threshold,
            )
            if status == LessonStatus.AVAILABLE:
                return current_id

        current = engine.find_current_lesson(self.course, record)
        if current is None:
            return None
        status = engine.lesson_status(
            self.course, record, current.lesson_id,
            enrolled=self.enrolled, threshold=self.threshold,
        )
        return current.lesson_id if status == LessonStatus.AVAILABLE else None

    # -------------------------------------------------------------------------
    # Course Tree
    # -------------------------------------------------------------------------

    def get_navigation_tree(self) -> list[NavigationModule]:
        """
        Get the full course tree with navigation metadata.

        Each lesson is annotated with its status and whether it is the
        learner's current lesson.
        """
        record = self._record()
        states = engine.module_states(self.course, record, threshold=self.threshold)

        tree = []
        for module, state in zip(self.course.modules, states):
            nav_lessons = [
                NavigationLesson(
                    lesson=lesson,
                    status=engine.lesson_status(
                        self.course, record, lesson.id,
                        enrolled=self.enrolled, threshold=self.threshold,
                    ),
                    is_current=lesson.id == record.current_lesson_id,
                )
                for lesson in module.lessons
            ]
            tree.append(NavigationModule(
                state=state,
                title=module.title,
                duration=module.duration,
                lessons=nav_lessons,
            ))
        return tree

    def get_status_indicator(self, lesson_id: str) -> str:
        """
        Get status indicator for sidebar display.

        Returns:
            ✓ for completed
            → for current
            ○ for available
            ◌ for locked
        """
        record = self._record()
        status = engine.lesson_status(
            self.course, record, lesson_id,
            enrolled=self.enrolled, threshold=self.threshold,
        )
        if status == LessonStatus.COMPLETED:
            return "✓"
        if status == LessonStatus.AVAILABLE:
            return "→" if lesson_id == record.current_lesson_id else "○"
        return "◌"

    # -------------------------------------------------------------------------
    # Lesson Actions
    # -------------------------------------------------------------------------

    def start_lesson(self, lesson_id: str) -> bool:
        """
        Move the current-lesson pointer to a lesson if it can be opened.

        Returns True if the pointer moved, False if the lesson is locked.
        """
        if not self.is_lesson_available(lesson_id):
            return False
        self.progress.set_current_lesson(self.course.id, lesson_id)
        return True

    def complete_lesson(self, lesson_id: str) -> Optional[str]:
        """
        Complete a lesson and return the next available lesson ID.

        Raises:
            KeyError: If the lesson is not part of the course
            LessonLockedError: If the lesson is locked for this learner

        Returns:
            ID of the next available lesson, or None if there is none
        """
        if self.course.find_lesson(lesson_id) is None:
            raise KeyError(f"Lesson {lesson_id} not in course {self.course.id}")
        if not self.is_lesson_available(lesson_id):
            raise LessonLockedError(f"Lesson {lesson_id} is locked")

        self.progress.complete_lesson(self.course.id, lesson_id)
        next_id = self.get_next_available_lesson_id(lesson_id)
        if next_id is None and engine.find_current_lesson(self.course, self._record()) is None:
            logger.info(f"Course {self.course.id} complete for learner {self.progress.learner_id}")
        return next_id

    # -------------------------------------------------------------------------
    # Progress Summary
    # -------------------------------------------------------------------------

    def get_progress_summary(self) -> ProgressSummary:
        """Get progress summary for display."""
        record = self._record()
        overall = engine.overall_progress(self.course, record)
        return ProgressSummary(
            course_id=self.course.id,
            completed=overall.completed,
            total=overall.total,
            percent=overall.percent,
            modules=engine.module_states(self.course, record, threshold=self.threshold),
            current_lesson_id=record.current_lesson_id,
            recommended_lesson_id=self.get_recommended_lesson_id(),
        )
