"""Tests for the FastMCP registration of the tool catalogs."""

import pytest
from fastmcp import Client

from immich_tools.mcp_server import ADAPTERS, ALL_TOOLS, mcp


def _without_titles(schema):
    if isinstance(schema, dict):
        return {key: _without_titles(value) for key, value in schema.items() if key != "title"}
    if isinstance(schema, list):
        return [_without_titles(item) for item in schema]
    return schema


@pytest.fixture
async def published():
    async with Client(mcp) as mcp_client:
        return {tool.name: tool for tool in await mcp_client.list_tools()}


def test_catalog_names_are_unique():
    names = [spec.name for spec in ALL_TOOLS]

    assert len(names) == len(set(names))


def test_each_adapter_owns_only_its_tools():
    for adapter in ADAPTERS:
        for spec in adapter.get_tools():
            owners = [other for other in ADAPTERS if other.handles(spec.name)]
            assert owners == [adapter]


def test_catalog_serializes_for_hosts():
    entry = next(spec for spec in ALL_TOOLS if spec.name == "assets_upload").to_dict()

    assert entry["name"] == "assets_upload"
    assert entry["inputSchema"]["required"] == ["file_paths"]
    assert set(entry["inputSchema"]["properties"]) == {"file_paths", "album_id", "album_name"}


async def test_every_catalog_entry_is_published(published):
    assert set(published) == {spec.name for spec in ALL_TOOLS}
    for spec in ALL_TOOLS:
        assert published[spec.name].description == spec.description


async def test_published_schemas_match_input_models(published):
    for spec in ALL_TOOLS:
        tool_schema = published[spec.name].inputSchema
        model_schema = spec.input_schema

        assert set(tool_schema.get("required", [])) == set(model_schema.get("required", [])), spec.name
        assert _without_titles(tool_schema.get("properties", {})) == _without_titles(
            model_schema.get("properties", {})
        ), spec.name


async def test_published_schemas_carry_enums_and_bounds(published):
    general = published["search_general"].inputSchema["properties"]
    entity_types = next(option for option in general["type"]["anyOf"] if "enum" in option)
    assert entity_types["enum"] == ["ASSET", "PERSON", "PLACE", "ALBUM"]
    assert (general["size"]["minimum"], general["size"]["maximum"]) == (1, 1000)
    assert general["size"]["default"] == 250

    count = published["assets_get_random"].inputSchema["properties"]["count"]
    assert (count["minimum"], count["maximum"], count["default"]) == (1, 100, 1)
    assert count["description"] == "Number of random assets to return"
