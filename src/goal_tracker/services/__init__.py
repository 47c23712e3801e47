"""Services for goal tracking."""

from .base import BaseService, PaginationParams, PaginatedResult
from .goal_service import GoalService
from .catalog_service import CatalogService

__all__ = [
    "BaseService",
    "PaginationParams",
    "PaginatedResult",
    "GoalService",
    "CatalogService",
]
