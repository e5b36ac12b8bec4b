"""SQLite storage layer for users, trainings, and exercises."""

from __future__ import annotations

import logging
import sqlite3
import uuid
from pathlib import Path
from typing import Optional

from .models import ExerciseRow

logger = logging.getLogger(__name__)


def _dict_factory(cursor: sqlite3.Cursor, row: tuple) -> dict:
    return {col[0]: row[i] for i, col in enumerate(cursor.description)}


class Storage:
    """SQLite-backed storage for BuddyLifts."""

    def __init__(self, db_path: str | Path = "buddylifts.db"):
        self.db_path = Path(db_path)
        self._conn: Optional[sqlite3.Connection] = None

    def connect(self) -> sqlite3.Connection:
        if self._conn is None:
            # The server may call sync tools off the event-loop thread
            self._conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
            self._conn.row_factory = _dict_factory
            self._conn.execute("PRAGMA foreign_keys = ON")
            self._ensure_schema()
        return self._conn

    def close(self) -> None:
        if self._conn:
            self._conn.close()
            self._conn = None

    def _ensure_schema(self) -> None:
        conn = self.connect()
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS users (
                user_id TEXT PRIMARY KEY,
                created_at TEXT NOT NULL DEFAULT (datetime('now'))
            );
            CREATE TABLE IF NOT EXISTS trainings (
                training_id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                name TEXT NOT NULL,
                description TEXT,
                created_at TEXT NOT NULL DEFAULT (datetime('now')),
                FOREIGN KEY (user_id) REFERENCES users(user_id) ON DELETE CASCADE
            );
            CREATE TABLE IF NOT EXISTS exercises (
                exercise_id TEXT PRIMARY KEY,
                training_id TEXT NOT NULL,
                name TEXT NOT NULL,
                target_sets INTEGER NOT NULL,
                target_reps INTEGER NOT NULL,
                weight REAL,
                "order" INTEGER NOT NULL,
                rest_seconds INTEGER,
                FOREIGN KEY (training_id) REFERENCES trainings(training_id) ON DELETE CASCADE
            );
            CREATE INDEX IF NOT EXISTS idx_trainings_user_id ON trainings(user_id);
            CREATE INDEX IF NOT EXISTS idx_exercises_training_id ON exercises(training_id);
        """)
        conn.commit()

    def ensure_user(self, user_id: str) -> str:
        conn = self.connect()
        conn.execute("INSERT OR IGNORE INTO users (user_id) VALUES (?)", (user_id,))
        conn.commit()
        return user_id

    def create_training(self, user_id: str, name: str, description: Optional[str] = None) -> dict:
        """Create a training owned by user_id (user row created if missing); return the stored row."""
        conn = self.connect()
        self.ensure_user(user_id)
        training_id = generate_id("trn")
        conn.execute(
            "INSERT INTO trainings (training_id, user_id, name, description) VALUES (?, ?, ?, ?)",
            (training_id, user_id, name, description),
        )
        conn.commit()
        return self.get_training(training_id)

    def get_training(self, training_id: str) -> Optional[dict]:
        conn = self.connect()
        return conn.execute(
            "SELECT training_id, user_id, name, description, created_at FROM trainings WHERE training_id = ?",
            (training_id,),
        ).fetchone()

    def get_exercises(self, training_id: str) -> list[dict]:
        """Exercises of a training in stored order."""
        conn = self.connect()
        return conn.execute(
            """
            SELECT exercise_id, training_id, name, target_sets, target_reps, weight, "order", rest_seconds
            FROM exercises WHERE training_id = ? ORDER BY "order"
            """,
            (training_id,),
        ).fetchall()

    def insert_exercises(
        self,
        training_id: str,
        rows: list[ExerciseRow],
        replace_existing: bool = False,
    ) -> list[dict]:
        """
        Store rows for a training in one transaction, optionally deleting the
        training's existing exercises first. Returns the inserted rows in order.
        """
        conn = self.connect()
        created = [
            {"exercise_id": generate_id("ex"), "training_id": training_id, **row.model_dump()}
            for row in rows
        ]
        with conn:
            if replace_existing:
                deleted = conn.execute(
                    "DELETE FROM exercises WHERE training_id = ?", (training_id,)
                ).rowcount
                logger.info("Removed %d existing exercise(s) from training %s", deleted, training_id)
            conn.executemany(
                """
                INSERT INTO exercises
                    (exercise_id, training_id, name, target_sets, target_reps, weight, "order", rest_seconds)
                VALUES
                    (:exercise_id, :training_id, :name, :target_sets, :target_reps, :weight, :order, :rest_seconds)
                """,
                created,
            )
        logger.info("Stored %d exercise(s) for training %s", len(created), training_id)
        return created


def generate_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"
