"""
Base service classes.

Defines the base class and pagination helpers shared by all services.
"""

from abc import ABC
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar
import logging

from pydantic import BaseModel, Field


T = TypeVar("T")


class BaseService(ABC):
    """
    Abstract base class for all services.

    Provides common functionality:
    - Logging setup
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger(self.__class__.__module__)

    @property
    def logger(self) -> logging.Logger:
        """Get the logger instance."""
        return self._logger


class PaginationParams(BaseModel):
    """Standard pagination parameters."""

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=100)

    @property
    def offset(self) -> int:
        """Calculate offset from page and page_size."""
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        """Alias for page_size."""
        return self.page_size


@dataclass
class PaginatedResult(Generic[T]):
    """Standard paginated result wrapper."""

    items: List[T]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        """Calculate total pages."""
        if self.page_size <= 0:
            return 0
        return (self.total + self.page_size - 1) // self.page_size

    @property
    def has_next(self) -> bool:
        """Check if there are more pages."""
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        """Check if there are previous pages."""
        return self.page > 1

    def to_dict(self, serialize: Callable[[T], Any]) -> Dict[str, Any]:
        return {
            "items": [serialize(item) for item in self.items],
            "total": self.total,
            "page": self.page,
            "page_size": self.page_size,
            "total_pages": self.total_pages,
            "has_next": self.has_next,
            "has_previous": self.has_previous,
        }
