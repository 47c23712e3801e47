"""SQLite-backed repository for goals.

Each goal is stored as one row: indexed columns for the fields queries
filter on, and the complete goal (schedule and achievements included) as a
JSON document.
"""

import json
import logging
import sqlite3
from datetime import date, datetime
from typing import List, Optional, Union

from .base import GoalRepository, SQLiteRepository
from ...engine.progress import record_completion
from ...exceptions import GoalNotFoundError
from ...models.goals import CompletionResult, Goal

logger = logging.getLogger(__name__)


class SQLiteGoalRepository(SQLiteRepository[Goal], GoalRepository):
    """
    SQLite-backed GoalRepository.

    Writes are last-writer-wins per goal; record_completion holds the write
    lock across its read-modify-write cycle.
    """

    def _ensure_table_exists(self):
        """Ensure the goals table exists."""
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS goals (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    title TEXT NOT NULL,
                    type TEXT NOT NULL,
                    status TEXT NOT NULL DEFAULT 'active',
                    start_date TEXT NOT NULL,
                    end_date TEXT NOT NULL,
                    goal_json TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT
                )
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_goals_user_id
                ON goals(user_id, created_at)
            """)

    def _goal_to_row(self, goal: Goal) -> tuple:
        return (
            goal.id,
            goal.user_id,
            goal.title,
            goal.type.value,
            goal.status.value,
            goal.start_date.isoformat(),
            goal.end_date.isoformat(),
            json.dumps(goal.to_dict()),
            goal.created_at.isoformat(),
            goal.updated_at.isoformat() if goal.updated_at else None,
        )

    def _row_to_goal(self, row: sqlite3.Row) -> Goal:
        return Goal.from_dict(json.loads(row["goal_json"]))

    def _write(self, conn: sqlite3.Connection, goal: Goal) -> None:
        conn.execute("""
            INSERT OR REPLACE INTO goals
            (id, user_id, title, type, status, start_date, end_date,
             goal_json, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """, self._goal_to_row(goal))

    def save(self, entity: Goal) -> Goal:
        """Insert or replace a goal."""
        with self._get_connection() as conn:
            self._write(conn, entity)
        logger.debug(f"Saved goal {entity.id} for user {entity.user_id}")
        return entity

    def get(self, entity_id: str) -> Optional[Goal]:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT goal_json FROM goals WHERE id = ?",
                (entity_id,)
            ).fetchone()

            if row:
                return self._row_to_goal(row)
            return None

    def _where(self, filters: dict) -> tuple:
        query = " WHERE 1=1"
        params: list = []

        if filters.get("user_id"):
            query += " AND user_id = ?"
            params.append(filters["user_id"])

        if filters.get("status"):
            status = filters["status"]
            query += " AND status = ?"
            params.append(getattr(status, "value", status))

        return query, params

    def get_all(
        self,
        limit: int = 100,
        offset: int = 0,
        **filters
    ) -> List[Goal]:
        """
        Retrieve goals matching the given filters.

        Args:
            limit: Maximum number of goals to return
            offset: Number of goals to skip
            **filters: Additional filter criteria:
                - user_id: Owner of the goals
                - status: GoalStatus or its value

        Returns:
            List of matching goals, newest first
        """
        where, params = self._where(filters)
        query = f"SELECT goal_json FROM goals{where} ORDER BY created_at DESC, id DESC LIMIT ? OFFSET ?"
        params.extend([limit, offset])

        with self._get_connection() as conn:
            rows = conn.execute(query, params).fetchall()
            return [self._row_to_goal(row) for row in rows]

    def load(self, user_id: str) -> List[Goal]:
        with self._get_connection() as conn:
            rows = conn.execute(
                "SELECT goal_json FROM goals WHERE user_id = ? ORDER BY created_at, id",
                (user_id,)
            ).fetchall()
            return [self._row_to_goal(row) for row in rows]

    def delete(self, entity_id: str) -> bool:
        with self._get_connection() as conn:
            cursor = conn.execute(
                "DELETE FROM goals WHERE id = ?",
                (entity_id,)
            )
            return cursor.rowcount > 0

    def exists(self, entity_id: str) -> bool:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT 1 FROM goals WHERE id = ?",
                (entity_id,)
            ).fetchone()
            return row is not None

    def count(self, **filters) -> int:
        where, params = self._where(filters)
        with self._get_connection() as conn:
            row = conn.execute(f"SELECT COUNT(*) as cnt FROM goals{where}", params).fetchone()
            return row["cnt"]

    def record_completion(
        self,
        goal_id: str,
        scheduled_date: Union[date, str],
        result: Optional[CompletionResult] = None,
        completed_at: Optional[datetime] = None,
    ) -> Goal:
        with self._get_connection(immediate=True) as conn:
            row = conn.execute(
                "SELECT goal_json FROM goals WHERE id = ?",
                (goal_id,)
            ).fetchone()
            if row is None:
                raise GoalNotFoundError(goal_id)

            updated = record_completion(self._row_to_goal(row), scheduled_date, result, completed_at)
            self._write(conn, updated)

        logger.info(f"Recorded completion for goal {goal_id} on {scheduled_date}")
        return updated
