"""Tests for the search tools."""

import pytest

from immich_core.errors import ValidationError
from immich_tools.search import SearchTool

from tests.conftest import body_of


@pytest.fixture
def search(client):
    return SearchTool(client)


async def test_general_search_params(search, fake):
    fake.add("GET", "/api/search", {"assets": {"items": []}})

    await search.handle("search_general", {"q": "dog", "type": "ASSET", "with_archived": True})

    assert dict(fake.requests[0].url.params) == {
        "q": "dog",
        "type": "ASSET",
        "size": "250",
        "page": "1",
        "withArchived": "true",
    }


async def test_general_search_rejects_unknown_type(search, fake):
    with pytest.raises(ValidationError):
        await search.handle("search_general", {"type": "VIDEO"})

    assert fake.requests == []


async def test_smart_search_requires_query(search):
    with pytest.raises(ValidationError):
        await search.handle("search_smart", {"city": "Paris"})


async def test_smart_search_filters(search, fake):
    fake.add("GET", "/api/search/smart", {"assets": {"items": []}})

    await search.handle("search_smart", {"query": "sunset", "lens_model": "RF 50mm", "type": "IMAGE"})

    params = dict(fake.requests[0].url.params)
    assert params["query"] == "sunset"
    assert params["lensModel"] == "RF 50mm"
    assert params["type"] == "IMAGE"


async def test_metadata_search_defaults(search, fake):
    fake.add("GET", "/api/search/metadata", {"assets": {"items": []}})

    await search.handle("search_metadata", {"country": "Portugal"})

    assert dict(fake.requests[0].url.params) == {
        "country": "Portugal",
        "withArchived": "false",
        "size": "250",
        "page": "1",
    }


async def test_identical_searches_share_the_cache(search, fake):
    fake.add("GET", "/api/search/metadata", {"assets": {"items": []}})

    await search.handle("search_metadata", {"country": "Portugal", "make": "Fuji"})
    await search.handle("search_metadata", {"make": "Fuji", "country": "Portugal"})

    assert len(fake.requests) == 1


async def test_explore_takes_no_arguments(search, fake):
    fake.add("GET", "/api/search/explore", [{"fieldName": "exifInfo.city", "items": []}])

    result = await search.handle("search_explore")

    assert result[0]["fieldName"] == "exifInfo.city"


async def test_filename_search_posts_body(search, fake):
    fake.add("POST", "/api/search/metadata", {"assets": {"items": []}})

    await search.handle("search_by_filename", {"filename": "IMG_1234.jpg", "size": 10})

    assert body_of(fake.requests[0]) == {"originalFileName": "IMG_1234.jpg", "page": 1, "size": 10}
