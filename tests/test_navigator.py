"""
Navigator tests.

Runs the engine against a real tracker backed by a temporary database.
"""

import pytest

from lessonpath.classroom import (
    LessonLockedError,
    Navigator,
    ProgressTracker,
)
from lessonpath.schemas import LessonStatus, ModuleStatus


@pytest.fixture
def tracker(tmp_path):
    return ProgressTracker(tmp_path / "progress.db", learner_id="alice")


@pytest.fixture
def navigator(two_module_course, tracker):
    return Navigator(two_module_course, tracker)


class TestAvailability:
    """Test lesson availability through the tracker."""

    def test_initial_state(self, navigator):
        assert navigator.get_lesson_status("L1") == LessonStatus.AVAILABLE
        assert navigator.get_lesson_status("L3") == LessonStatus.LOCKED
        assert navigator.is_lesson_available("L2") is True
        assert navigator.is_lesson_available("L5") is False

    def test_not_enrolled_sees_previews_only(self, two_module_course, tracker):
        nav = Navigator(two_module_course, tracker, enrolled=False)
        assert nav.is_lesson_available("L1") is True
        assert nav.is_lesson_available("L2") is False

    def test_threshold_override(self, two_module_course, tracker):
        tracker.complete_lesson("scenario", "L1")
        assert Navigator(two_module_course, tracker).is_lesson_available("L3") is False
        assert Navigator(two_module_course, tracker, threshold=0.5).is_lesson_available("L3") is True


class TestNavigation:
    """Test previous/next lookup."""

    def test_previous_and_next(self, navigator):
        assert navigator.get_next_lesson_id("L2") == "L3"
        assert navigator.get_previous_lesson_id("L3") == "L2"
        assert navigator.get_previous_lesson_id("L1") is None
        assert navigator.get_next_lesson_id("L5") is None
        assert navigator.get_next_lesson_id("nope") is None

    def test_next_available_skips_locked(self, navigator):
        assert navigator.get_next_available_lesson_id("L1") == "L2"
        assert navigator.get_next_available_lesson_id("L2") is None

    def test_next_available_reads_one_snapshot(self, navigator, tracker, monkeypatch):
        calls = []
        original = tracker.get_completion_record

        def counting(course_id):
            calls.append(course_id)
            return original(course_id)

        monkeypatch.setattr(tracker, "get_completion_record", counting)
        assert navigator.get_next_available_lesson_id("L2") is None
        assert len(calls) == 1

    def test_recommended_starts_at_first_lesson(self, navigator):
        assert navigator.get_recommended_lesson_id() == "L1"

    def test_recommended_prefers_current_pointer(self, navigator):
        navigator.complete_lesson("L1")
        navigator.complete_lesson("L2")
        assert navigator.start_lesson("L5") is True
        assert navigator.get_recommended_lesson_id() == "L5"

    def test_recommended_none_when_complete(self, navigator):
        for lesson_id in ("L1", "L2", "L3", "L4", "L5"):
            navigator.complete_lesson(lesson_id)
        assert navigator.get_recommended_lesson_id() is None

    def test_recommended_none_when_not_enrolled_and_locked(self, two_module_course, tracker):
        nav = Navigator(two_module_course, tracker, enrolled=False)
        tracker.complete_lesson("scenario", "L1")
        assert nav.get_recommended_lesson_id() is None


class TestLessonActions:
    """Test starting and completing lessons."""

    def test_start_locked_lesson_refused(self, navigator, tracker):
        assert navigator.start_lesson("L3") is False
        assert tracker.get_current_lesson_id("scenario") is None

    def test_start_lesson_moves_pointer(self, navigator, tracker):
        assert navigator.start_lesson("L2") is True
        assert tracker.get_current_lesson_id("scenario") == "L2"

    def test_complete_returns_next(self, navigator):
        assert navigator.complete_lesson("L1") == "L2"
        # Finishing M0 unlocks M1
        assert navigator.complete_lesson("L2") == "L3"

    def test_complete_locked_raises(self, navigator, tracker):
        with pytest.raises(LessonLockedError):
            navigator.complete_lesson("L4")
        assert tracker.get_completed_lesson_ids("scenario") == set()

    def test_complete_unknown_raises(self, navigator):
        with pytest.raises(KeyError):
            navigator.complete_lesson("L99")

    def test_complete_last_lesson(self, navigator):
        for lesson_id in ("L1", "L2", "L3", "L4"):
            navigator.complete_lesson(lesson_id)
        assert navigator.complete_lesson("L5") is None

    def test_recomplete_is_allowed(self, navigator, tracker):
        navigator.complete_lesson("L1")
        navigator.complete_lesson("L1")
        assert tracker.get_completed_lesson_ids("scenario") == {"L1"}


class TestTreeAndSummary:
    """Test the navigation tree and summary."""

    def test_tree(self, navigator):
        navigator.complete_lesson("L1")
        navigator.complete_lesson("L2")
        navigator.complete_lesson("L3")
        tree = navigator.get_navigation_tree()

        assert [m.state.module_id for m in tree] == ["M0", "M1"]
        assert tree[0].state.status == ModuleStatus.COMPLETED
        assert tree[0].duration == 15
        assert tree[1].title == "Next steps"
        assert [l.status for l in tree[1].lessons] == [
            LessonStatus.COMPLETED, LessonStatus.AVAILABLE, LessonStatus.AVAILABLE,
        ]
        assert [l.is_current for l in tree[1].lessons] == [True, False, False]

    def test_status_indicators(self, navigator):
        navigator.complete_lesson("L1")
        navigator.start_lesson("L2")
        assert navigator.get_status_indicator("L1") == "✓"
        assert navigator.get_status_indicator("L2") == "→"
        assert navigator.get_status_indicator("L3") == "◌"

    def test_status_indicator_available(self, navigator):
        assert navigator.get_status_indicator("L2") == "○"

    def test_summary(self, navigator):
        for lesson_id in ("L1", "L2", "L3"):
            navigator.complete_lesson(lesson_id)
        summary = navigator.get_progress_summary()
        assert summary.course_id == "scenario"
        assert (summary.completed, summary.total, summary.percent) == (3, 5, 60)
        assert [m.percent for m in summary.modules] == [100, 33]
        assert summary.current_lesson_id == "L3"
        assert summary.recommended_lesson_id == "L4"
