"""Movie payload normalization

Incoming movie descriptions arrive in several shapes: TMDB-style search
results, OMDb records from the metadata proxy, client-built payloads and the
stored camelCase shape. Each canonical attribute is resolved from the ordered
candidate names in FIELD_CANDIDATES; the first candidate holding a usable
value wins.
"""

import math
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Tuple

from ..exceptions import MissingIdentifierError
from ..schemas.lists import ListItem

FIELD_CANDIDATES: Dict[str, Tuple[str, ...]] = {
    "imdb_id": ("imdbId", "imdbID", "id"),
    "title": ("title", "originalTitle", "name", "Title"),
    "poster": ("poster", "poster_path", "posterPath", "Poster"),
    "release_date": ("releaseDate", "release_date", "year", "Released", "Year"),
    "rating": ("vote_average", "rating"),
    "runtime": ("runtime", "runtimeMinutes", "Runtime"),
    "overview": ("plot", "overview", "Plot"),
    "added_at": ("addedAt", "added_at"),
}

DEFAULT_TITLE = "Untitled"

# OMDb fills unknown fields with this
NOT_AVAILABLE = "N/A"


def _to_text(value: Any) -> Optional[str]:
    """Text form of a scalar candidate, None when unusable"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        if value.is_integer():
            value = int(value)
        return str(value)
    if isinstance(value, int):
        try:
            return str(value)
        except ValueError:
            # past the interpreter's int-to-str digit limit
            return None
    if isinstance(value, str):
        text = value.strip()
        if text and text != NOT_AVAILABLE:
            return text
    return None


def _to_rating(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        rating = float(value)
    except OverflowError:
        return None
    if not math.isfinite(rating):
        return None
    return rating


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a datetime or ISO-8601 string into an aware UTC datetime"""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        # shifting to UTC left the datetime range
        return None


def _resolve(payload: Mapping, attribute: str, convert) -> Any:
    for field in FIELD_CANDIDATES[attribute]:
        value = convert(payload.get(field))
        if value is not None:
            return value
    return None


def normalize_item(payload: Any, now: Optional[datetime] = None) -> ListItem:
    """
    Convert a movie payload into a canonical ListItem.

    Raises MissingIdentifierError when no identifier candidate is usable.
    """
    if isinstance(payload, ListItem):
        return payload
    if not isinstance(payload, Mapping):
        raise MissingIdentifierError("Movie payload must be an object with an imdbId")

    imdb_id = _resolve(payload, "imdb_id", _to_text)
    if imdb_id is None:
        raise MissingIdentifierError()

    added_at = _resolve(payload, "added_at", parse_timestamp)
    if added_at is None:
        added_at = parse_timestamp(now) or datetime.now(timezone.utc)

    return ListItem(
        imdb_id=imdb_id,
        title=_resolve(payload, "title", _to_text) or DEFAULT_TITLE,
        poster=_resolve(payload, "poster", _to_text) or "",
        release_date=_resolve(payload, "release_date", _to_text) or "",
        rating=_resolve(payload, "rating", _to_rating),
        runtime=_resolve(payload, "runtime", _to_text) or "",
        overview=_resolve(payload, "overview", _to_text) or "",
        added_at=added_at,
    )
