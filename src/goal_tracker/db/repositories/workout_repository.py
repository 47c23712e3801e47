"""SQLite-backed repositories for the workout catalog.

Workouts and programs live in the same database as goals. Goals only keep
denormalized workout references, so catalog edits never rewrite schedules.
"""

import json
import sqlite3
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from .base import SQLiteRepository
from ...models.workouts import (
    Difficulty,
    Program,
    ProgramWorkout,
    Workout,
    WorkoutType,
)


class WorkoutRepository(SQLiteRepository[Workout]):
    """SQLite-backed repository for catalog workouts."""

    def _ensure_table_exists(self):
        """Ensure the workouts table exists."""
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS workouts (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    description TEXT,
                    type TEXT NOT NULL DEFAULT 'mixed',
                    difficulty TEXT NOT NULL DEFAULT 'beginner',
                    estimated_duration_min INTEGER NOT NULL,
                    calories_burned REAL,
                    is_active INTEGER NOT NULL DEFAULT 1,
                    created_at TEXT NOT NULL
                )
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_workouts_type
                ON workouts(type)
            """)

    def _row_to_workout(self, row: sqlite3.Row) -> Workout:
        """Convert a database row to a Workout."""
        return Workout(
            id=row["id"],
            name=row["name"],
            description=row["description"] or "",
            type=WorkoutType(row["type"]),
            difficulty=Difficulty(row["difficulty"]),
            estimated_duration_min=row["estimated_duration_min"],
            calories_burned=row["calories_burned"],
            is_active=bool(row["is_active"]),
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    def save(self, entity: Workout) -> Workout:
        with self._get_connection() as conn:
            conn.execute("""
                INSERT OR REPLACE INTO workouts
                (id, name, description, type, difficulty,
                 estimated_duration_min, calories_burned, is_active, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, (
                entity.id,
                entity.name,
                entity.description,
                entity.type.value,
                entity.difficulty.value,
                entity.estimated_duration_min,
                entity.calories_burned,
                int(entity.is_active),
                entity.created_at.isoformat(),
            ))
        return entity

    def get(self, entity_id: str) -> Optional[Workout]:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM workouts WHERE id = ?",
                (entity_id,)
            ).fetchone()

            if row:
                return self._row_to_workout(row)
            return None

    def get_many(self, workout_ids: Iterable[str]) -> Dict[str, Workout]:
        """Workouts keyed by id; ids missing from the catalog are left out."""
        ids = list(dict.fromkeys(workout_ids))
        if not ids:
            return {}

        placeholders = ", ".join("?" for _ in ids)
        with self._get_connection() as conn:
            rows = conn.execute(
                f"SELECT * FROM workouts WHERE id IN ({placeholders})",
                ids
            ).fetchall()
            return {row["id"]: self._row_to_workout(row) for row in rows}

    def _where(self, filters: dict) -> tuple:
        query = " WHERE 1=1"
        params: list = []

        if filters.get("type"):
            query += " AND type = ?"
            params.append(getattr(filters["type"], "value", filters["type"]))

        if filters.get("difficulty"):
            query += " AND difficulty = ?"
            params.append(getattr(filters["difficulty"], "value", filters["difficulty"]))

        if filters.get("active_only"):
            query += " AND is_active = 1"

        return query, params

    def get_all(
        self,
        limit: int = 100,
        offset: int = 0,
        **filters
    ) -> List[Workout]:
        """
        Retrieve catalog workouts.

        Args:
            limit: Maximum number of workouts to return
            offset: Number of workouts to skip
            **filters: Additional filter criteria:
                - type: Filter by workout type
                - difficulty: Filter by difficulty
                - active_only: Only active workouts

        Returns:
            List of matching workouts, ordered by name
        """
        where, params = self._where(filters)
        params.extend([limit, offset])

        with self._get_connection() as conn:
            rows = conn.execute(
                f"SELECT * FROM workouts{where} ORDER BY name, id LIMIT ? OFFSET ?",
                params
            ).fetchall()
            return [self._row_to_workout(row) for row in rows]

    def delete(self, entity_id: str) -> bool:
        with self._get_connection() as conn:
            cursor = conn.execute(
                "DELETE FROM workouts WHERE id = ?",
                (entity_id,)
            )
            return cursor.rowcount > 0

    def exists(self, entity_id: str) -> bool:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT 1 FROM workouts WHERE id = ?",
                (entity_id,)
            ).fetchone()
            return row is not None

    def count(self, **filters) -> int:
        where, params = self._where(filters)
        with self._get_connection() as conn:
            row = conn.execute(f"SELECT COUNT(*) as cnt FROM workouts{where}", params).fetchone()
            return row["cnt"]


class ProgramRepository(SQLiteRepository[Program]):
    """SQLite-backed repository for programs; program slots are a JSON column."""

    def _ensure_table_exists(self):
        """Ensure the programs table exists."""
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS programs (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    description TEXT,
                    category TEXT NOT NULL DEFAULT 'general_fitness',
                    difficulty TEXT NOT NULL DEFAULT 'beginner',
                    workouts_json TEXT NOT NULL,
                    is_active INTEGER NOT NULL DEFAULT 1,
                    created_at TEXT NOT NULL
                )
            """)

    def _row_to_program(self, row: sqlite3.Row) -> Program:
        """Convert a database row to a Program."""
        return Program(
            id=row["id"],
            name=row["name"],
            description=row["description"] or "",
            category=row["category"],
            difficulty=Difficulty(row["difficulty"]),
            workouts=[ProgramWorkout.from_dict(w) for w in json.loads(row["workouts_json"])],
            is_active=bool(row["is_active"]),
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    def save(self, entity: Program) -> Program:
        with self._get_connection() as conn:
            conn.execute("""
                INSERT OR REPLACE INTO programs
                (id, name, description, category, difficulty,
                 workouts_json, is_active, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """, (
                entity.id,
                entity.name,
                entity.description,
                entity.category,
                entity.difficulty.value,
                json.dumps([w.to_dict() for w in entity.workouts]),
                int(entity.is_active),
                entity.created_at.isoformat(),
            ))
        return entity

    def get(self, entity_id: str) -> Optional[Program]:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM programs WHERE id = ?",
                (entity_id,)
            ).fetchone()

            if row:
                return self._row_to_program(row)
            return None

    def _where(self, filters: dict) -> tuple:
        query = " WHERE 1=1"
        params: list = []

        if filters.get("category"):
            query += " AND category = ?"
            params.append(filters["category"])

        if filters.get("difficulty"):
            query += " AND difficulty = ?"
            params.append(getattr(filters["difficulty"], "value", filters["difficulty"]))

        return query, params

    def get_all(
        self,
        limit: int = 100,
        offset: int = 0,
        **filters
    ) -> List[Program]:
        """Programs ordered by name; filter by category or difficulty."""
        where, params = self._where(filters)
        params.extend([limit, offset])

        with self._get_connection() as conn:
            rows = conn.execute(
                f"SELECT * FROM programs{where} ORDER BY name, id LIMIT ? OFFSET ?",
                params
            ).fetchall()
            return [self._row_to_program(row) for row in rows]

    def delete(self, entity_id: str) -> bool:
        with self._get_connection() as conn:
            cursor = conn.execute(
                "DELETE FROM programs WHERE id = ?",
                (entity_id,)
            )
            return cursor.rowcount > 0

    def exists(self, entity_id: str) -> bool:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT 1 FROM programs WHERE id = ?",
                (entity_id,)
            ).fetchone()
            return row is not None

    def count(self, **filters) -> int:
        where, params = self._where(filters)
        with self._get_connection() as conn:
            row = conn.execute(f"SELECT COUNT(*) as cnt FROM programs{where}", params).fetchone()
            return row["cnt"]
