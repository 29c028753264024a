"""Domain value objects."""

from .pagination import PaginationState, next_state
from .session import Session, User

__all__ = ["PaginationState", "next_state", "Session", "User"]
