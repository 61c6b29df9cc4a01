"""Mapping of watchlist errors to HTTP responses"""

from fastapi import HTTPException, status

from ..exceptions import (
    IdentityNotFoundError,
    InvalidCategoryError,
    InvalidCollectionError,
    MissingIdentifierError,
    UpstreamUnavailableError,
    WatchlistError,
)
from ..services.log_service import log_service

ERROR_STATUS = {
    MissingIdentifierError: status.HTTP_400_BAD_REQUEST,
    InvalidCategoryError: status.HTTP_400_BAD_REQUEST,
    IdentityNotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidCollectionError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    UpstreamUnavailableError: status.HTTP_502_BAD_GATEWAY,
}


def to_http_exception(error: WatchlistError) -> HTTPException:
    """HTTPException carrying the error's message and matching status"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_type, code in ERROR_STATUS.items():
        if isinstance(error, error_type):
            status_code = code
            break

    if status_code >= 500:
        log_service.error(f"{type(error).__name__}: {error.message}")

    return HTTPException(status_code=status_code, detail=error.message)
