"""Base repository interfaces and abstract classes.

Provides the abstract Repository interface, the GoalRepository collaborator
used by the goal service, and a SQLite base class that owns connection
handling for the concrete repositories.
"""

import logging
import sqlite3
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import date, datetime
from pathlib import Path
from typing import Generic, Iterator, TypeVar, Optional, List, Union

from ...exceptions import DatabaseError
from ...models.goals import CompletionResult, Goal

logger = logging.getLogger(__name__)

# Type variable for the entity type stored in the repository
T = TypeVar("T")


class Repository(ABC, Generic[T]):
    """
    Abstract base class for synchronous repository implementations.

    Provides a standard interface for CRUD operations on entities,
    abstracting away the underlying storage mechanism.

    Type Parameters:
        T: The type of entity stored in this repository
    """

    @abstractmethod
    def save(self, entity: T) -> T:
        """
        Save an entity to the repository.

        If the entity already exists (by ID), it will be replaced.

        Args:
            entity: The entity to save

        Returns:
            The saved entity
        """
        pass

    @abstractmethod
    def get(self, entity_id: str) -> Optional[T]:
        """
        Retrieve an entity by its ID.

        Returns:
            The entity if found, None otherwise
        """
        pass

    @abstractmethod
    def get_all(
        self,
        limit: int = 100,
        offset: int = 0,
        **filters
    ) -> List[T]:
        """Retrieve entities matching the given filters."""
        pass

    @abstractmethod
    def delete(self, entity_id: str) -> bool:
        """
        Delete an entity by its ID.

        Returns:
            True if the entity was deleted, False if not found
        """
        pass

    @abstractmethod
    def exists(self, entity_id: str) -> bool:
        pass

    @abstractmethod
    def count(self, **filters) -> int:
        pass


class GoalRepository(Repository[Goal]):
    """
    Storage collaborator for goals.

    The engine never touches storage; callers load goals through this
    interface, run the pure computation, and persist the result.
    """

    @abstractmethod
    def load(self, user_id: str) -> List[Goal]:
        """Every goal owned by user_id, oldest first."""
        pass

    @abstractmethod
    def record_completion(
        self,
        goal_id: str,
        scheduled_date: Union[date, str],
        result: Optional[CompletionResult] = None,
        completed_at: Optional[datetime] = None,
    ) -> Goal:
        """
        Mark one scheduled workout complete and persist the updated goal.

        Concurrent completions on the same goal must not lose each other's
        updates.

        Raises:
            GoalNotFoundError: no goal with goal_id
            ScheduleEntryNotFoundError: nothing scheduled on that date
            WorkoutAlreadyCompletedError: the entry was already completed
        """
        pass


class SQLiteRepository(Repository[T]):
    """
    Connection handling shared by the SQLite repositories.

    Subclasses create their tables in _ensure_table_exists, called once on
    construction.
    """

    def __init__(self, db_path: Union[str, Path]):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_table_exists()

    @contextmanager
    def _get_connection(self, immediate: bool = False) -> Iterator[sqlite3.Connection]:
        """
        Get database connection with context manager.

        With immediate=True the block runs inside BEGIN IMMEDIATE, taking the
        write lock up front so concurrent read-modify-write cycles serialize.
        """
        try:
            if immediate:
                conn = sqlite3.connect(str(self.db_path), isolation_level=None, timeout=30)
            else:
                conn = sqlite3.connect(str(self.db_path), timeout=30)
        except sqlite3.Error as e:
            raise DatabaseError(f"Could not open database: {e}", operation="connect") from e

        conn.row_factory = sqlite3.Row
        try:
            if immediate:
                conn.execute("BEGIN IMMEDIATE")
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"Database error on {self.db_path.name}: {e}")
            raise DatabaseError(f"Database operation failed: {e}") from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    @abstractmethod
    def _ensure_table_exists(self) -> None:
        pass
