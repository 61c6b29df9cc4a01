"""OMDb API service"""

from typing import Dict, Optional

import httpx

from ..config import settings
from ..exceptions import UpstreamUnavailableError
from .log_service import log_service


class OMDbLookupError(Exception):
    """OMDb answered but rejected the lookup"""

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class OMDbService:
    """The Open Movie Database lookup used to build watchlist payloads"""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = None,
        client: httpx.AsyncClient = None,
    ):
        self.api_key = api_key
        self.base_url = base_url or settings.OMDB_BASE_URL
        self.client = client or httpx.AsyncClient(timeout=settings.OMDB_TIMEOUT)

    async def _request(self, params: Dict) -> Dict:
        """Make request to OMDb API"""
        params = {**params, "apikey": self.api_key, "r": "json"}

        try:
            response = await self.client.get(self.base_url, params=params)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            log_service.error(f"OMDb API error: {e}")
            raise UpstreamUnavailableError("Failed to fetch from OMDb") from e

        if data.get("Response") == "False":
            message = data.get("Error") or "Failed to retrieve movie information"
            raise OMDbLookupError(
                message, status_code=404 if message == "Movie not found!" else 400
            )
        return data

    async def lookup(
        self,
        title: Optional[str] = None,
        imdb: Optional[str] = None,
        year: Optional[str] = None,
        plot: str = "full",
        type: Optional[str] = None,
    ) -> Dict:
        """Fetch a single movie by title or IMDb id"""
        if not self.api_key:
            raise UpstreamUnavailableError("OMDB_API_KEY missing in configuration")
        if not title and not imdb:
            raise OMDbLookupError('A movie "title" or "imdb" id is required')

        params = {"plot": plot}
        if title:
            params["t"] = title
        if imdb:
            params["i"] = imdb
        if year:
            params["y"] = year
        if type:
            params["type"] = type

        return await self._request(params)

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()
