"""Watchlist schemas"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import CamelModel

# Pseudo-category accepted only when removing
ALL_CATEGORIES = "all"


class Category(str, Enum):
    """Watch status bucket"""

    WATCHED = "watched"
    WATCHING = "watching"
    PLANNED = "planned"
    ONHOLD = "onhold"
    DROPPED = "dropped"


class ListItem(CamelModel):
    """Canonical movie record stored in a category"""

    imdb_id: str = Field(..., min_length=1)
    title: str = "Untitled"
    poster: str = ""
    release_date: str = ""
    rating: Optional[float] = None
    runtime: str = ""
    overview: str = ""
    added_at: datetime

    class Config:
        frozen = True


class ListUpsert(CamelModel):
    """Request body for adding or moving a movie"""

    list_type: str
    movie: Optional[Dict[str, Any]] = None


class ListsResponse(CamelModel):
    """Full collection response"""

    lists: Dict[Category, List[ListItem]]


class TrackingStatus(CamelModel):
    """Whether a movie is tracked and where"""

    imdb_id: str
    tracked: bool
    list_type: Optional[Category] = None
