"""Error kinds raised by the watchlist core"""

from typing import Optional


class WatchlistError(Exception):
    """Base class for classified watchlist failures"""

    default_message = "Watchlist operation failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingIdentifierError(WatchlistError):
    """Payload has no usable external identifier"""

    default_message = "Movie payload must include an imdbId"


class InvalidCategoryError(WatchlistError):
    """Category is outside the fixed enumeration"""

    default_message = "Invalid list type"

    def __init__(self, category=None, message: Optional[str] = None):
        self.category = category
        super().__init__(message or f"Invalid list type: {category!r}")


class IdentityNotFoundError(WatchlistError):
    """Identity does not resolve to a stored collection"""

    default_message = "User not found"

    def __init__(self, identity=None, message: Optional[str] = None):
        self.identity = identity
        super().__init__(message or f"User not found: {identity}")


class InvalidCollectionError(WatchlistError):
    """Stored collection does not have the expected shape"""

    default_message = "Stored list collection is corrupted"


class UpstreamUnavailableError(WatchlistError):
    """A collaborator (metadata lookup, storage) could not be reached"""

    default_message = "Upstream service unavailable"
