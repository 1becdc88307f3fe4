"""Shared course fixtures."""

import pytest

from lessonpath.schemas import CompletionRecord, Course


def make_course(lesson_counts, course_id="course-1"):
    """Build a course with modules m0..mN and globally numbered lessons l1..lK."""
    modules = []
    counter = 0
    for index, count in enumerate(lesson_counts):
        lessons = []
        for _ in range(count):
            counter += 1
            lessons.append({"id": f"l{counter}", "title": f"Lesson {counter}", "duration": 10})
        modules.append({"id": f"m{index}", "title": f"Module {index}", "lessons": lessons})
    return Course.model_validate({"id": course_id, "title": "Test Course", "modules": modules})


def record(*lesson_ids, current=None):
    return CompletionRecord(completed_lessons=lesson_ids, current_lesson_id=current)


@pytest.fixture
def two_module_course():
    """M0(L1, L2), M1(L3, L4, L5)."""
    return Course.model_validate({
        "id": "scenario",
        "title": "Scenario Course",
        "modules": [
            {"id": "M0", "title": "Basics", "lessons": [
                {"id": "L1", "title": "Intro", "type": "video", "duration": 5, "preview": True},
                {"id": "L2", "title": "Setup", "type": "document", "duration": 10},
            ]},
            {"id": "M1", "title": "Next steps", "lessons": [
                {"id": "L3", "title": "Variables", "duration": 12},
                {"id": "L4", "title": "Loops", "duration": 15, "preview": True},
                {"id": "L5", "title": "Functions", "duration": 20},
            ]},
        ],
    })
