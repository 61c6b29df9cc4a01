"""Pydantic schemas for validation"""

from .auth import AuthResponse, Token, UserCreate, UserLogin, UserResponse
from .lists import (
    ALL_CATEGORIES,
    Category,
    ListItem,
    ListsResponse,
    ListUpsert,
    TrackingStatus,
)
from .stats import StatisticsSnapshot

__all__ = [
    "AuthResponse",
    "Token",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "ALL_CATEGORIES",
    "Category",
    "ListItem",
    "ListsResponse",
    "ListUpsert",
    "TrackingStatus",
    "StatisticsSnapshot",
]
