import httpx
import pytest

from flixvault.exceptions import UpstreamUnavailableError
from flixvault.services.normalizer import normalize_item
from flixvault.services.omdb_service import OMDbLookupError, OMDbService

MATRIX = {
    "Title": "The Matrix",
    "Year": "1999",
    "Released": "31 Mar 1999",
    "Runtime": "136 min",
    "Plot": "A hacker learns the truth.",
    "Poster": "https://example.com/matrix.jpg",
    "imdbID": "tt0133093",
    "Response": "True",
}


def omdb_with(handler, api_key="key"):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OMDbService(api_key, base_url="https://omdb.test/", client=client)


async def test_lookup_sends_parameters():
    seen = {}

    def handler(request):
        seen.update(request.url.params)
        return httpx.Response(200, json=MATRIX)

    omdb = omdb_with(handler)
    data = await omdb.lookup(title="The Matrix", year="1999")
    await omdb.close()

    assert data["imdbID"] == "tt0133093"
    assert seen["t"] == "The Matrix"
    assert seen["y"] == "1999"
    assert seen["apikey"] == "key"
    assert seen["plot"] == "full"
    assert "i" not in seen


async def test_lookup_result_normalizes_into_list_item():
    omdb = omdb_with(lambda request: httpx.Response(200, json=MATRIX))
    item = normalize_item(await omdb.lookup(imdb="tt0133093"))
    await omdb.close()

    assert item.imdb_id == "tt0133093"
    assert item.title == "The Matrix"
    assert item.runtime == "136 min"
    assert item.poster == "https://example.com/matrix.jpg"


async def test_not_found():
    omdb = omdb_with(
        lambda request: httpx.Response(
            200, json={"Response": "False", "Error": "Movie not found!"}
        )
    )
    with pytest.raises(OMDbLookupError) as error:
        await omdb.lookup(title="Nope")
    await omdb.close()
    assert error.value.status_code == 404


async def test_requires_title_or_id():
    omdb = omdb_with(lambda request: httpx.Response(200, json=MATRIX))
    with pytest.raises(OMDbLookupError) as error:
        await omdb.lookup()
    await omdb.close()
    assert error.value.status_code == 400


async def test_missing_api_key():
    omdb = omdb_with(lambda request: httpx.Response(200, json=MATRIX), api_key=None)
    with pytest.raises(UpstreamUnavailableError):
        await omdb.lookup(title="The Matrix")
    await omdb.close()


async def test_transport_failure_is_upstream_unavailable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    omdb = omdb_with(handler)
    with pytest.raises(UpstreamUnavailableError):
        await omdb.lookup(title="The Matrix")
    await omdb.close()


async def test_server_error_is_upstream_unavailable():
    omdb = omdb_with(lambda request: httpx.Response(503, text="down"))
    with pytest.raises(UpstreamUnavailableError):
        await omdb.lookup(imdb="tt0133093")
    await omdb.close()


async def test_proxy_route_reports_missing_key(client, monkeypatch):
    from flixvault.config import settings

    monkeypatch.setattr(settings, "OMDB_API_KEY", None)
    response = await client.get("/api/tmdb", params={"title": "The Matrix"})
    assert response.status_code == 502
