"""Tests for the album tools."""

import pytest

from immich_core.errors import ImmichApiError, UnknownToolError, ValidationError
from immich_tools.albums import AlbumsTool

from tests.conftest import body_of

ALBUM = {
    "id": "al-1",
    "albumName": "Summer Trip",
    "description": "",
    "assetCount": 2,
    "assets": [{"id": "a"}, {"id": "b"}],
    "startDate": "2024-07-01T10:00:00.000Z",
    "endDate": "2024-07-09T18:00:00.000Z",
    "createdAt": "2024-07-10T00:00:00.000Z",
    "updatedAt": "2024-07-11T00:00:00.000Z",
    "ownerId": "u-1",
    "shared": True,
}


@pytest.fixture
def albums(client):
    return AlbumsTool(client)


async def test_check_assets_reports_membership(albums, fake):
    fake.add("GET", "/api/albums/al-1", ALBUM)

    result = await albums.handle("albums_check_assets", {"album_id": "al-1", "asset_ids": ["a", "c"]})

    assert result == {
        "albumId": "al-1",
        "results": {"a": True, "c": False},
        "memberCount": 1,
        "nonMemberCount": 1,
    }


async def test_check_assets_counts_repeated_ids(albums, fake):
    fake.add("GET", "/api/albums/al-1", ALBUM)

    result = await albums.handle("albums_check_assets", {"album_id": "al-1", "asset_ids": ["a", "a", "c"]})

    assert result["results"] == {"a": True, "c": False}
    assert result["memberCount"] == 2
    assert result["nonMemberCount"] == 1


async def test_get_summary_drops_asset_list(albums, fake):
    fake.add("GET", "/api/albums/al-1", ALBUM)

    summary = await albums.handle("albums_get_summary", {"album_id": "al-1"})

    assert "assets" not in summary
    assert summary["assetCount"] == 2
    assert summary["startDate"] == ALBUM["startDate"]
    assert summary["shared"] is True


async def test_get_summary_counts_assets_when_count_missing(albums, fake):
    fake.add("GET", "/api/albums/al-2", {"id": "al-2", "albumName": "Bare", "assets": [{"id": "x"}]})

    summary = await albums.handle("albums_get_summary", {"album_id": "al-2"})

    assert summary["assetCount"] == 1
    assert summary["description"] == ""
    assert summary["startDate"] is None
    assert summary["shared"] is False


async def test_create_fills_defaults(albums, fake):
    fake.add("POST", "/api/albums", {"id": "al-9"})

    await albums.handle("albums_create", {"album_name": "Pets"})

    assert body_of(fake.requests[0]) == {"albumName": "Pets", "description": "", "assetIds": []}


async def test_camel_case_arguments_are_accepted(albums, fake):
    fake.add("POST", "/api/albums", {"id": "al-9"})

    await albums.handle("albums_create", {"albumName": "Pets", "assetIds": ["a"]})

    assert body_of(fake.requests[0])["assetIds"] == ["a"]


async def test_list_passes_filters(albums, fake):
    fake.add("GET", "/api/albums", [])

    await albums.handle("albums_list", {"shared": True})

    assert dict(fake.requests[0].url.params) == {"shared": "true"}


async def test_update_sends_only_supplied_fields(albums, fake):
    fake.add("PATCH", "/api/albums/al-1", ALBUM)

    await albums.handle("albums_update", {"album_id": "al-1", "description": "New"})

    assert body_of(fake.requests[0]) == {"description": "New"}


async def test_add_and_remove_assets(albums, fake):
    fake.add("PUT", "/api/albums/al-1/assets", [])
    fake.add("DELETE", "/api/albums/al-1/assets", [])

    await albums.handle("albums_add_assets", {"album_id": "al-1", "asset_ids": ["a", "b"]})
    await albums.handle("albums_remove_assets", {"album_id": "al-1", "asset_ids": ["a"]})

    assert body_of(fake.requests[0]) == {"ids": ["a", "b"]}
    assert body_of(fake.requests[1]) == {"ids": ["a"]}


async def test_delete_returns_confirmation(albums, fake):
    fake.add("DELETE", "/api/albums/al-1", None, status=204)

    result = await albums.handle("albums_delete", {"album_id": "al-1"})

    assert result == {"success": True, "message": "Album al-1 deleted successfully"}


async def test_missing_required_argument_fails_before_network(albums, fake):
    with pytest.raises(ValidationError) as exc_info:
        await albums.handle("albums_get", {})

    assert exc_info.value.tool == "albums_get"
    assert fake.requests == []


async def test_empty_asset_list_is_rejected(albums, fake):
    with pytest.raises(ValidationError):
        await albums.handle("albums_add_assets", {"album_id": "al-1", "asset_ids": []})

    assert fake.requests == []


async def test_unexpected_argument_is_rejected(albums):
    with pytest.raises(ValidationError):
        await albums.handle("albums_get", {"album_id": "al-1", "verbose": True})


async def test_unknown_tool(albums):
    with pytest.raises(UnknownToolError):
        await albums.handle("albums_explode", {})


async def test_remote_error_propagates(albums, fake):
    fake.add("GET", "/api/albums/gone", {"message": "not found"}, status=404)

    with pytest.raises(ImmichApiError) as exc_info:
        await albums.handle("albums_get", {"album_id": "gone"})

    assert exc_info.value.status_code == 404


def test_catalog_entries_have_schemas():
    names = [spec.name for spec in AlbumsTool.get_tools()]

    assert "albums_check_assets" in names
    assert len(names) == len(set(names))
    schema = AlbumsTool.get_spec("albums_add_assets").input_schema
    assert set(schema["required"]) == {"album_id", "asset_ids"}
