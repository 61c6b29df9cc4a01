"""Services layer"""

from .auth_service import AuthService
from .list_service import (
    DatabaseListBackend,
    IdentityLocks,
    ListBackend,
    ListService,
    MemoryListBackend,
)
from .log_service import LogService
from .normalizer import normalize_item
from .omdb_service import OMDbService
from .stats_service import aggregate

__all__ = [
    "AuthService",
    "DatabaseListBackend",
    "IdentityLocks",
    "ListBackend",
    "ListService",
    "MemoryListBackend",
    "LogService",
    "normalize_item",
    "OMDbService",
    "aggregate",
]
