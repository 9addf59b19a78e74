# =============================================================================
# immich_tools/mcp_server.py  -  FastMCP Tool Server (all tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Publishes every adapter's catalog as MCP tools.  Each function below is a
#   thin wrapper: it forwards its arguments to the owning adapter's handle(),
#   which validates them, calls Immich and reshapes the answer.
#
# HOW A CALL FLOWS:
#   1. The agent calls a tool by name via MCP (e.g. "albums_list")
#   2. FastMCP routes the call to the decorated function below
#   3. The wrapper logs the call and hands the arguments to the adapter
#   4. The adapter returns a dict (or list), which is logged and returned
#
# TOOL NAMES AND DESCRIPTIONS come from the adapter catalogs, so the MCP
# listing and ToolAdapter.get_tools() always agree.  Parameters are typed
# with the field types from immich_tools/schemas.py, the same ones the input
# models use, so hosts see the enumerations, bounds and descriptions.
#
# RUNNING THIS SERVER:
#   a) python main.py                     (validates the connection first)
#   b) python -m immich_tools.mcp_server  (starts straight away)
#   Both speak MCP over stdio.
# =============================================================================

import json
import logging
import sys
from typing import Any

from fastmcp import FastMCP

from immich_tools.albums import AlbumsTool
from immich_tools.assets import AssetsTool
from immich_tools.base import ToolAdapter
from immich_tools.people import PeopleTool
from immich_tools.schemas import (
    AlbumAssetFilter,
    AlbumDescription,
    AlbumId,
    AlbumName,
    AllUsers,
    AltQuery,
    ArchivedFilter,
    AssetDescription,
    AssetId,
    AssetIds,
    AssetType,
    BirthDate,
    CameraModel,
    City,
    Clip,
    Country,
    DateTimeOriginal,
    EntityType,
    FavoriteFilter,
    FilePaths,
    Filename,
    GeneralQuery,
    IncludeArchived,
    InitialAssetIds,
    IsAdmin,
    IsHidden,
    Latitude,
    LensModel,
    Longitude,
    Make,
    MemoriesEnabled,
    MergePersonIds,
    NewAlbumName,
    Page,
    PersonId,
    PersonName,
    RandomCount,
    RemoveParent,
    SetArchived,
    SetFavorite,
    ShareKey,
    SharedFilter,
    ShouldChangePassword,
    Size,
    SmartQuery,
    StackParentId,
    State,
    TargetAlbumId,
    TargetAlbumName,
    UserEmail,
    UserId,
    UserIdFilter,
    UserLookupId,
    UserName,
    WithArchived,
    WithHidden,
    WithPartners,
    WithStacked,
)
from immich_tools.search import SearchTool
from immich_tools.server import ServerTool
from immich_tools.users import UsersTool

logger = logging.getLogger(__name__)

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR: STDOUT is the MCP transport, and anything else written
# there corrupts the protocol stream.
#
# ANSI colours in the terminal:
#   CYAN   - incoming tool calls with their arguments
#   GREEN  - responses (compact JSON, truncated)
#   YELLOW - intermediate status messages
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

_MAX_LOGGED_RESPONSE = 500


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [MCP] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, **params: Any) -> None:
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: Any) -> Any:
    rendered = json.dumps(result, separators=(",", ":"), default=str)
    if len(rendered) > _MAX_LOGGED_RESPONSE:
        rendered = rendered[:_MAX_LOGGED_RESPONSE] + "..."
    logger.info(f"{_GREEN}  ← {tool_name} response: {rendered}{_RESET}")
    return result


# =============================================================================
# Server instance and adapters
# =============================================================================
mcp = FastMCP("immich-mcp-server")

albums = AlbumsTool()
assets = AssetsTool()
search = SearchTool()
people = PeopleTool()
users = UsersTool()
server = ServerTool()

ADAPTERS: tuple[ToolAdapter, ...] = (albums, assets, search, people, users, server)
ALL_TOOLS = [spec for adapter in ADAPTERS for spec in adapter.get_tools()]


def _tool(adapter: ToolAdapter, name: str):
    """Register the decorated function under a catalog entry's name and description."""
    spec = adapter.get_spec(name)
    return mcp.tool(name=spec.name, description=spec.description)


async def _call(adapter: ToolAdapter, name: str, **arguments: Any) -> Any:
    # Unset optionals are dropped so the input model's defaults apply.
    arguments = {key: value for key, value in arguments.items() if value is not None}
    _log_request(name, **arguments)
    result = await adapter.handle(name, arguments)
    return _log_response(name, result)
# =============================================================================
# Albums
# =============================================================================
@_tool(albums, "albums_list")
async def albums_list(shared: SharedFilter = None, asset_id: AlbumAssetFilter = None):
    return await _call(albums, "albums_list", shared=shared, asset_id=asset_id)


@_tool(albums, "albums_create")
async def albums_create(
    album_name: AlbumName,
    description: AlbumDescription = None,
    asset_ids: InitialAssetIds = None,
):
    return await _call(
        albums, "albums_create", album_name=album_name, description=description, asset_ids=asset_ids
    )


@_tool(albums, "albums_get")
async def albums_get(album_id: AlbumId):
    return await _call(albums, "albums_get", album_id=album_id)


@_tool(albums, "albums_update")
async def albums_update(
    album_id: AlbumId,
    album_name: NewAlbumName = None,
    description: AlbumDescription = None,
):
    return await _call(
        albums, "albums_update", album_id=album_id, album_name=album_name, description=description
    )


@_tool(albums, "albums_delete")
async def albums_delete(album_id: AlbumId):
    return await _call(albums, "albums_delete", album_id=album_id)


@_tool(albums, "albums_add_assets")
async def albums_add_assets(album_id: AlbumId, asset_ids: AssetIds):
    return await _call(albums, "albums_add_assets", album_id=album_id, asset_ids=asset_ids)


@_tool(albums, "albums_remove_assets")
async def albums_remove_assets(album_id: AlbumId, asset_ids: AssetIds):
    return await _call(albums, "albums_remove_assets", album_id=album_id, asset_ids=asset_ids)


@_tool(albums, "albums_get_summary")
async def albums_get_summary(album_id: AlbumId):
    return await _call(albums, "albums_get_summary", album_id=album_id)


@_tool(albums, "albums_check_assets")
async def albums_check_assets(album_id: AlbumId, asset_ids: AssetIds):
    return await _call(albums, "albums_check_assets", album_id=album_id, asset_ids=asset_ids)


# =============================================================================
# Assets
# =============================================================================
@_tool(assets, "assets_list")
async def assets_list(
    page: Page = 1,
    size: Size = 250,
    user_id: UserIdFilter = None,
    is_favorite: FavoriteFilter = None,
    is_archived: ArchivedFilter = None,
    with_stacked: WithStacked = None,
    with_partners: WithPartners = None,
):
    return await _call(
        assets,
        "assets_list",
        page=page,
        size=size,
        user_id=user_id,
        is_favorite=is_favorite,
        is_archived=is_archived,
        with_stacked=with_stacked,
        with_partners=with_partners,
    )


@_tool(assets, "assets_get")
async def assets_get(asset_id: AssetId, key: ShareKey = None):
    return await _call(assets, "assets_get", asset_id=asset_id, key=key)


@_tool(assets, "assets_update")
async def assets_update(
    asset_id: AssetId,
    is_favorite: SetFavorite = None,
    is_archived: SetArchived = None,
    description: AssetDescription = None,
):
    return await _call(
        assets,
        "assets_update",
        asset_id=asset_id,
        is_favorite=is_favorite,
        is_archived=is_archived,
        description=description,
    )


@_tool(assets, "assets_delete")
async def assets_delete(asset_id: AssetId):
    return await _call(assets, "assets_delete", asset_id=asset_id)


@_tool(assets, "assets_bulk_update")
async def assets_bulk_update(
    asset_ids: AssetIds,
    is_favorite: SetFavorite = None,
    is_archived: SetArchived = None,
    remove_parent: RemoveParent = None,
    stack_parent_id: StackParentId = None,
):
    return await _call(
        assets,
        "assets_bulk_update",
        asset_ids=asset_ids,
        is_favorite=is_favorite,
        is_archived=is_archived,
        remove_parent=remove_parent,
        stack_parent_id=stack_parent_id,
    )


@_tool(assets, "assets_get_statistics")
async def assets_get_statistics(is_archived: ArchivedFilter = None, is_favorite: FavoriteFilter = None):
    return await _call(assets, "assets_get_statistics", is_archived=is_archived, is_favorite=is_favorite)


@_tool(assets, "assets_get_random")
async def assets_get_random(count: RandomCount = 1):
    return await _call(assets, "assets_get_random", count=count)


@_tool(assets, "assets_get_metadata")
async def assets_get_metadata(asset_id: AssetId):
    return await _call(assets, "assets_get_metadata", asset_id=asset_id)


@_tool(assets, "assets_update_metadata")
async def assets_update_metadata(
    asset_id: AssetId,
    description: AssetDescription = None,
    latitude: Latitude = None,
    longitude: Longitude = None,
    date_time_original: DateTimeOriginal = None,
):
    return await _call(
        assets,
        "assets_update_metadata",
        asset_id=asset_id,
        description=description,
        latitude=latitude,
        longitude=longitude,
        date_time_original=date_time_original,
    )


@_tool(assets, "assets_upload")
async def assets_upload(
    file_paths: FilePaths,
    album_id: TargetAlbumId = None,
    album_name: TargetAlbumName = None,
):
    _log_status(f"Uploading {len(file_paths)} file(s)")
    return await _call(
        assets, "assets_upload", file_paths=file_paths, album_id=album_id, album_name=album_name
    )


# =============================================================================
# Search
# =============================================================================
@_tool(search, "search_general")
async def search_general(
    q: GeneralQuery = None,
    query: AltQuery = None,
    clip: Clip = None,
    type: EntityType = None,
    is_favorite: FavoriteFilter = None,
    is_archived: ArchivedFilter = None,
    size: Size = 250,
    page: Page = 1,
    with_stacked: WithStacked = None,
    with_archived: WithArchived = None,
):
    return await _call(
        search,
        "search_general",
        q=q,
        query=query,
        clip=clip,
        type=type,
        is_favorite=is_favorite,
        is_archived=is_archived,
        size=size,
        page=page,
        with_stacked=with_stacked,
        with_archived=with_archived,
    )


@_tool(search, "search_smart")
async def search_smart(
    query: SmartQuery,
    city: City = None,
    state: State = None,
    country: Country = None,
    make: Make = None,
    model: CameraModel = None,
    lens_model: LensModel = None,
    type: AssetType = None,
    is_favorite: FavoriteFilter = None,
    is_archived: ArchivedFilter = None,
    size: Size = 250,
    page: Page = 1,
):
    return await _call(
        search,
        "search_smart",
        query=query,
        city=city,
        state=state,
        country=country,
        make=make,
        model=model,
        lens_model=lens_model,
        type=type,
        is_favorite=is_favorite,
        is_archived=is_archived,
        size=size,
        page=page,
    )


@_tool(search, "search_metadata")
async def search_metadata(
    city: City = None,
    state: State = None,
    country: Country = None,
    make: Make = None,
    model: CameraModel = None,
    lens_model: LensModel = None,
    type: AssetType = None,
    with_archived: IncludeArchived = False,
    size: Size = 250,
    page: Page = 1,
):
    return await _call(
        search,
        "search_metadata",
        city=city,
        state=state,
        country=country,
        make=make,
        model=model,
        lens_model=lens_model,
        type=type,
        with_archived=with_archived,
        size=size,
        page=page,
    )


@_tool(search, "search_explore")
async def search_explore():
    return await _call(search, "search_explore")


@_tool(search, "search_by_filename")
async def search_by_filename(filename: Filename, size: Size = 250, page: Page = 1):
    return await _call(search, "search_by_filename", filename=filename, size=size, page=page)


# =============================================================================
# People
# =============================================================================
@_tool(people, "people_list")
async def people_list(with_hidden: WithHidden = False):
    return await _call(people, "people_list", with_hidden=with_hidden)


@_tool(people, "people_get")
async def people_get(person_id: PersonId):
    return await _call(people, "people_get", person_id=person_id)


@_tool(people, "people_update")
async def people_update(
    person_id: PersonId,
    name: PersonName = None,
    birth_date: BirthDate = None,
    is_hidden: IsHidden = None,
):
    return await _call(
        people, "people_update", person_id=person_id, name=name, birth_date=birth_date, is_hidden=is_hidden
    )


@_tool(people, "people_merge")
async def people_merge(person_id: PersonId, merge_person_ids: MergePersonIds):
    return await _call(people, "people_merge", person_id=person_id, merge_person_ids=merge_person_ids)


# =============================================================================
# Users
# =============================================================================
@_tool(users, "users_get")
async def users_get(user_id: UserLookupId = None):
    return await _call(users, "users_get", user_id=user_id)


@_tool(users, "users_update")
async def users_update(
    user_id: UserId,
    name: UserName = None,
    email: UserEmail = None,
    is_admin: IsAdmin = None,
    should_change_password: ShouldChangePassword = None,
    memories_enabled: MemoriesEnabled = None,
):
    return await _call(
        users,
        "users_update",
        user_id=user_id,
        name=name,
        email=email,
        is_admin=is_admin,
        should_change_password=should_change_password,
        memories_enabled=memories_enabled,
    )


# =============================================================================
# Server
# =============================================================================
@_tool(server, "server_get_info")
async def server_get_info():
    return await _call(server, "server_get_info")


@_tool(server, "server_get_statistics")
async def server_get_statistics(is_all: AllUsers = False):
    return await _call(server, "server_get_statistics", is_all=is_all)


@_tool(server, "server_validate_connection")
async def server_validate_connection():
    return await _call(server, "server_validate_connection")


@_tool(server, "server_clear_cache")
async def server_clear_cache():
    _log_status("Flushing response cache")
    return await _call(server, "server_clear_cache")


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    from immich_core.config import get_settings

    configure_logging(get_settings().log_level)
    mcp.run()
