"""
ProgressTracker - Record learner progress in ~/.lessonpath/progress.db.

The tracker is the only writer of completion state:
- Lesson completions (append-only)
- Current lesson pointer per course
It hands the engine immutable CompletionRecord snapshots.
"""

import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional

from lessonpath.schemas import CompletionRecord


logger = logging.getLogger(__name__)

DEFAULT_PROGRESS_DIR = Path.home() / ".lessonpath"
DEFAULT_PROGRESS_DB = DEFAULT_PROGRESS_DIR / "progress.db"


class ProgressTracker:
    """
    Track learner progress in a SQLite database.

    Progress is kept apart from course content so that course files can be
    edited without losing what learners have completed.
    """

    def __init__(self, db_path: Optional[Path] = None, learner_id: str = "default"):
        """
        Initialize progress tracker.

        Args:
            db_path: Path to progress.db (default: ~/.lessonpath/progress.db)
            learner_id: Learner identifier for multi-user support
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_PROGRESS_DB
        self.learner_id = learner_id
        self._ensure_database()

    def _ensure_database(self):
        """Create database and tables if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS lesson_completions (
                    learner_id TEXT NOT NULL,
                    course_id TEXT NOT NULL,
                    lesson_id TEXT NOT NULL,
                    completed_at TEXT NOT NULL,
                    PRIMARY KEY (learner_id, course_id, lesson_id)
                );

                CREATE TABLE IF NOT EXISTS learner_state (
                    learner_id TEXT NOT NULL,
                    course_id TEXT NOT NULL,
                    current_lesson_id TEXT,
                    last_activity_at TEXT,
                    PRIMARY KEY (learner_id, course_id)
                );
            """)
            conn.commit()
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    @staticmethod
    def _upsert_current(conn: sqlite3.Connection, learner_id: str, course_id: str,
                        lesson_id: str, now: str):
        conn.execute(
            """INSERT INTO learner_state (learner_id, course_id, current_lesson_id, last_activity_at)
               VALUES (?, ?, ?, ?)
               ON CONFLICT(learner_id, course_id) DO UPDATE SET
                 current_lesson_id = excluded.current_lesson_id,
                 last_activity_at = excluded.last_activity_at""",
            (learner_id, course_id, lesson_id, now)
        )

    # -------------------------------------------------------------------------
    # Completions
    # -------------------------------------------------------------------------

    def complete_lesson(self, course_id: str, lesson_id: str) -> bool:
        """
        Mark a lesson as completed.

        Completions are never removed by this call; completing a lesson twice
        keeps the first timestamp.

        Returns:
            True if the lesson was newly completed, False if it already was
        """
        conn = self._get_connection()
        try:
            now = datetime.now().isoformat()
            cursor = conn.execute(
                """INSERT OR IGNORE INTO lesson_completions
                     (learner_id, course_id, lesson_id, completed_at)
                   VALUES (?, ?, ?, ?)""",
                (self.learner_id, course_id, lesson_id, now)
            )
            self._upsert_current(conn, self.learner_id, course_id, lesson_id, now)
            conn.commit()
            created = cursor.rowcount > 0
        finally:
            conn.close()

        if created:
            logger.info(f"Learner {self.learner_id} completed {course_id}/{lesson_id}")
        else:
            logger.debug(f"Lesson {course_id}/{lesson_id} already completed by {self.learner_id}")
        return created

    def get_completed_lesson_ids(self, course_id: str) -> set[str]:
        """Get set of completed lesson IDs for a course."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT lesson_id FROM lesson_completions
                   WHERE learner_id = ? AND course_id = ?""",
                (self.learner_id, course_id)
            )
            return {row["lesson_id"] for row in cursor.fetchall()}
        finally:
            conn.close()

    def get_completed_at(self, course_id: str, lesson_id: str) -> Optional[datetime]:
        """When a lesson was completed, or None."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT completed_at FROM lesson_completions
                   WHERE learner_id = ? AND course_id = ? AND lesson_id = ?""",
                (self.learner_id, course_id, lesson_id)
            )
            row = cursor.fetchone()
            return datetime.fromisoformat(row["completed_at"]) if row else None
        finally:
            conn.close()

    # -------------------------------------------------------------------------
    # Current Lesson
    # -------------------------------------------------------------------------

    def get_current_lesson_id(self, course_id: str) -> Optional[str]:
        """Get the ID of the lesson the learner was last on."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT current_lesson_id FROM learner_state
                   WHERE learner_id = ? AND course_id = ?""",
                (self.learner_id, course_id)
            )
            row = cursor.fetchone()
            return row["current_lesson_id"] if row else None
        finally:
            conn.close()

    def set_current_lesson(self, course_id: str, lesson_id: str):
        """Set the current lesson pointer."""
        conn = self._get_connection()
        try:
            now = datetime.now().isoformat()
            self._upsert_current(conn, self.learner_id, course_id, lesson_id, now)
            conn.commit()
        finally:
            conn.close()

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    def get_completion_record(self, course_id: str) -> CompletionRecord:
        """Immutable snapshot of this learner's progress in a course."""
        return CompletionRecord(
            completed_lessons=self.get_completed_lesson_ids(course_id),
            current_lesson_id=self.get_current_lesson_id(course_id),
        )

    def reset_course(self, course_id: str):
        """Remove all progress for a course (administrative reset)."""
        conn = self._get_connection()
        try:
            conn.execute(
                "DELETE FROM lesson_completions WHERE learner_id = ? AND course_id = ?",
                (self.learner_id, course_id)
            )
            conn.execute(
                "DELETE FROM learner_state WHERE learner_id = ? AND course_id = ?",
                (self.learner_id, course_id)
            )
            conn.commit()
        finally:
            conn.close()
        logger.warning(f"Reset progress for learner {self.learner_id} in course {course_id}")
