"""
Progression engine - pure functions deciding what a learner may open.

Given a Course and a CompletionRecord snapshot, computes:
- Lesson completion and per-lesson status
- Module completion percentage and lock state
- The current (first incomplete) lesson
- Overall course progress

Nothing here mutates its inputs or touches storage. Missing data degrades to
zero values (0%, locked) instead of raising, so callers never have to guard.
"""

import math
from typing import Optional

from lessonpath.schemas import (
    CompletionRecord,
    Course,
    CurrentLesson,
    LessonStatus,
    Module,
    ModuleState,
    ModuleStatus,
    OverallProgress,
)


# Fraction of the previous module's lessons required to unlock the next one
UNLOCK_THRESHOLD = 0.7


def _completed_ids(record: Optional[CompletionRecord]) -> frozenset[str]:
    if record is None:
        return frozenset()
    return record.completed_lessons


def _modules(course: Optional[Course]) -> list[Module]:
    if course is None:
        return []
    return course.modules


def _percent(completed: int, total: int) -> int:
    """Round-half-up integer percentage; 0 when total is 0."""
    if total <= 0:
        return 0
    return int(math.floor(100 * completed / total + 0.5))


def _count_completed(module: Module, completed: frozenset[str]) -> int:
    return sum(1 for lesson in module.lessons if lesson.id in completed)


# -----------------------------------------------------------------------------
# Lessons
# -----------------------------------------------------------------------------


def is_lesson_completed(record: Optional[CompletionRecord], lesson_id: str) -> bool:
    """True iff lesson_id is in the record. A missing record is empty."""
    return lesson_id in _completed_ids(record)


def lesson_status(
    course: Optional[Course],
    record: Optional[CompletionRecord],
    lesson_id: str,
    enrolled: bool = True,
    threshold: float = UNLOCK_THRESHOLD,
) -> LessonStatus:
    """
    Position of a lesson in the LOCKED -> AVAILABLE -> COMPLETED machine.

    Preview lessons are available to learners who are not enrolled, as long
    as their module is unlocked. Unknown lessons are LOCKED.
    """
    if course is None:
        return LessonStatus.LOCKED
    found = course.find_lesson(lesson_id)
    if found is None:
        return LessonStatus.LOCKED
    module_index, _, lesson = found

    if is_lesson_completed(record, lesson_id):
        return LessonStatus.COMPLETED
    if is_module_locked(course, record, module_index, threshold=threshold):
        return LessonStatus.LOCKED
    if not enrolled and not lesson.preview:
        return LessonStatus.LOCKED
    return LessonStatus.AVAILABLE


# -----------------------------------------------------------------------------
# Modules
# -----------------------------------------------------------------------------


def module_progress(
    course: Optional[Course],
    record: Optional[CompletionRecord],
    module_id: str,
) -> int:
    """Completion percentage [0, 100] of a module; 0 if unknown or empty."""
    if course is None:
        return 0
    module = course.get_module(module_id)
    if module is None or not module.lessons:
        return 0
    completed = _count_completed(module, _completed_ids(record))
    return _percent(completed, len(module.lessons))


def is_module_locked(
    course: Optional[Course],
    record: Optional[CompletionRecord],
    module_index: int,
    threshold: float = UNLOCK_THRESHOLD,
) -> bool:
    """
    Whether the module at module_index is locked.

    Module 0 is always unlocked. Any other module is locked unless the
    previous module has lessons and at least `threshold` of them are done.
    The comparison is on raw counts, so rounding never unlocks early.
    """
    if module_index == 0:
        return False

    modules = _modules(course)
    if module_index < 0 or module_index >= len(modules):
        return True

    previous = modules[module_index - 1]
    if not previous.lessons:
        return True

    completed = _count_completed(previous, _completed_ids(record))
    return completed < len(previous.lessons) * threshold


def module_states(
    course: Optional[Course],
    record: Optional[CompletionRecord],
    threshold: float = UNLOCK_THRESHOLD,
) -> list[ModuleState]:
    """Per-module view state in course order."""
    completed_ids = _completed_ids(record)
    states = []
    for index, module in enumerate(_modules(course)):
        total = len(module.lessons)
        completed = _count_completed(module, completed_ids)
        locked = is_module_locked(course, record, index, threshold=threshold)

        if total and completed == total:
            status = ModuleStatus.COMPLETED
        elif locked:
            status = ModuleStatus.LOCKED
        else:
            status = ModuleStatus.AVAILABLE

        states.append(ModuleState(
            module_id=module.id,
            index=index,
            completed=completed,
            total=total,
            percent=_percent(completed, total),
            locked=locked,
            status=status,
        ))
    return states


# -----------------------------------------------------------------------------
# Course
# -----------------------------------------------------------------------------


def find_current_lesson(
    course: Optional[Course],
    record: Optional[CompletionRecord],
) -> Optional[CurrentLesson]:
    """First incomplete lesson in module-then-lesson order; None when done."""
    completed = _completed_ids(record)
    for module in _modules(course):
        for lesson in module.lessons:
            if lesson.id not in completed:
                return CurrentLesson(module_id=module.id, lesson_id=lesson.id)
    return None


def overall_progress(
    course: Optional[Course],
    record: Optional[CompletionRecord],
) -> OverallProgress:
    completed_ids = _completed_ids(record)
    total = 0
    completed = 0
    for module in _modules(course):
        total += len(module.lessons)
        completed += _count_completed(module, completed_ids)
    return OverallProgress(completed=completed, total=total, percent=_percent(completed, total))


def adjacent_lessons(
    course: Optional[Course],
    lesson_id: str,
) -> tuple[Optional[CurrentLesson], Optional[CurrentLesson]]:
    """
    Previous and next lessons around lesson_id, crossing module boundaries.

    Returns (None, None) for an unknown lesson.
    """
    ordered = [
        CurrentLesson(module_id=module.id, lesson_id=lesson.id)
        for module in _modules(course)
        for lesson in module.lessons
    ]
    for position, entry in enumerate(ordered):
        if entry.lesson_id == lesson_id:
            previous = ordered[position - 1] if position > 0 else None
            following = ordered[position + 1] if position + 1 < len(ordered) else None
            return previous, following
    return None, None
