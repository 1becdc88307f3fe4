#!/usr/bin/env python3
"""
progress_report.py - Print a learner's progress through a course as JSON.

Loads a course definition, optionally records completed lessons, and prints
module lock state, percentages and the recommended next lesson.

Usage:
  python scripts/progress_report.py --course python-101
  python scripts/progress_report.py --course python-101 --learner alice --complete l1 l2
  python scripts/progress_report.py --course python-101 --config lessonpath.yaml --db /tmp/progress.db
"""

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from lessonpath.classroom import CourseLoader, LessonLockedError, Navigator, ProgressTracker
from lessonpath.utils import load_settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Report course progression for a learner",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--course",
        required=True,
        help="Course id (file stem in the courses directory)"
    )
    parser.add_argument(
        "--courses-dir",
        type=Path,
        default=None,
        help="Directory with course files (default: from settings)"
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="Progress database path (default: from settings)"
    )
    parser.add_argument(
        "--learner",
        default="default",
        help="Learner id (default: default)"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings YAML file"
    )
    parser.add_argument(
        "--complete",
        nargs="*",
        default=[],
        metavar="LESSON_ID",
        help="Lesson ids to mark complete before reporting"
    )
    parser.add_argument(
        "--preview-only",
        action="store_true",
        help="Report as a learner who is not enrolled"
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    settings = load_settings(args.config)
    courses_dir = args.courses_dir or settings.courses_dir
    db_path = args.db or settings.progress_db

    try:
        course = CourseLoader(courses_dir).load_course(args.course)
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1

    tracker = ProgressTracker(db_path, learner_id=args.learner)
    navigator = Navigator(
        course,
        tracker,
        threshold=settings.unlock_threshold,
        enrolled=not args.preview_only,
    )

    for lesson_id in args.complete:
        try:
            navigator.complete_lesson(lesson_id)
        except (KeyError, LessonLockedError) as e:
            logger.error(f"Cannot complete {lesson_id}: {e}")
            return 2

    summary = navigator.get_progress_summary()
    print(summary.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
