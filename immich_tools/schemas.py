# =============================================================================
# immich_tools/schemas.py  -  Tool Input Models
# =============================================================================
#
# One pydantic model per tool.  Each model is the tool's contract:
#   - required fields have no default,
#   - optional filters default to None and are left out of the request,
#   - paging fields carry their defaults and ranges,
#   - unknown arguments are rejected (extra="forbid").
#
# FIELD TYPES:
#   Every field is declared once below as an Annotated type carrying its
#   description, enumeration and bounds.  The input models AND the FastMCP
#   wrappers in mcp_server.py use these same types, so the schema an MCP host
#   sees is the schema handle() validates against.
#
# Fields are snake_case in Python and camelCase on the wire.  Arguments are
# accepted under either name, and to_params() renders the camelCase form the
# Immich API expects.
# =============================================================================

from typing import Annotated, Any, Iterable, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

IdStr = Annotated[str, Field(min_length=1)]

# -----------------------------------------------------------------------------
# Shared field types
# -----------------------------------------------------------------------------
Page = Annotated[int, Field(ge=1, description="Page number for pagination")]
Size = Annotated[int, Field(ge=1, le=1000, description="Number of results per page")]

AlbumId = Annotated[str, Field(min_length=1, description="ID of the album")]
AssetId = Annotated[str, Field(min_length=1, description="ID of the asset")]
PersonId = Annotated[str, Field(min_length=1, description="ID of the person")]
AssetIds = Annotated[list[IdStr], Field(min_length=1, description="Array of asset IDs")]

FavoriteFilter = Annotated[Optional[bool], Field(description="Filter by favorite status")]
ArchivedFilter = Annotated[Optional[bool], Field(description="Filter by archived status")]
WithStacked = Annotated[Optional[bool], Field(description="Include stacked assets")]

# Albums
SharedFilter = Annotated[Optional[bool], Field(description="Filter by shared albums only")]
AlbumAssetFilter = Annotated[
    Optional[str], Field(description="Filter albums containing this specific asset ID")
]
AlbumName = Annotated[str, Field(min_length=1, description="Name of the new album")]
NewAlbumName = Annotated[Optional[str], Field(description="New name for the album")]
AlbumDescription = Annotated[Optional[str], Field(description="Description for the album")]
InitialAssetIds = Annotated[
    Optional[list[str]], Field(description="Optional list of asset IDs to add to the album")
]

# Assets
UserIdFilter = Annotated[Optional[str], Field(description="Filter by user ID")]
WithPartners = Annotated[Optional[bool], Field(description="Include partner assets")]
ShareKey = Annotated[Optional[str], Field(description="Optional key for shared assets")]
SetFavorite = Annotated[Optional[bool], Field(description="Set favorite status")]
SetArchived = Annotated[Optional[bool], Field(description="Set archived status")]
AssetDescription = Annotated[Optional[str], Field(description="Set asset description")]
RemoveParent = Annotated[Optional[bool], Field(description="Remove parent from stacked assets")]
StackParentId = Annotated[Optional[str], Field(description="Set stack parent ID")]
RandomCount = Annotated[int, Field(ge=1, le=100, description="Number of random assets to return")]
Latitude = Annotated[Optional[float], Field(ge=-90, le=90, description="GPS latitude")]
Longitude = Annotated[Optional[float], Field(ge=-180, le=180, description="GPS longitude")]
DateTimeOriginal = Annotated[Optional[str], Field(description="Capture time (ISO-8601)")]
FilePaths = Annotated[list[IdStr], Field(min_length=1, description="Array of file paths to upload")]
TargetAlbumId = Annotated[
    Optional[str], Field(description="Optional album ID to add uploaded assets to")
]
TargetAlbumName = Annotated[
    Optional[str],
    Field(description="Optional album name to add uploaded assets to (creates album if not found)"),
]

# Search
GeneralQuery = Annotated[Optional[str], Field(description="General search query")]
AltQuery = Annotated[Optional[str], Field(description="Specific search query (alternative to q)")]
Clip = Annotated[Optional[bool], Field(description="Use CLIP-based image search")]
EntityType = Annotated[
    Optional[Literal["ASSET", "PERSON", "PLACE", "ALBUM"]],
    Field(description="Type of entity to search for"),
]
WithArchived = Annotated[Optional[bool], Field(description="Include archived assets in results")]
IncludeArchived = Annotated[bool, Field(description="Include archived assets in results")]
City = Annotated[Optional[str], Field(description="Filter by city name")]
State = Annotated[Optional[str], Field(description="Filter by state/region")]
Country = Annotated[Optional[str], Field(description="Filter by country")]
Make = Annotated[Optional[str], Field(description="Filter by camera make")]
CameraModel = Annotated[Optional[str], Field(description="Filter by camera model")]
LensModel = Annotated[Optional[str], Field(description="Filter by lens model")]
AssetType = Annotated[Optional[Literal["IMAGE", "VIDEO"]], Field(description="Filter by asset type")]
SmartQuery = Annotated[
    str, Field(min_length=1, description='Smart search query (e.g., "beach sunset", "cat")')
]
Filename = Annotated[
    str, Field(min_length=1, description='Original filename to search for (e.g., "IMG_1234.jpg")')
]

# People
WithHidden = Annotated[bool, Field(description="Include hidden people")]
PersonName = Annotated[Optional[str], Field(description="New name")]
BirthDate = Annotated[Optional[str], Field(description="Birth date (YYYY-MM-DD)")]
IsHidden = Annotated[Optional[bool], Field(description="Hide or unhide the person")]
MergePersonIds = Annotated[
    list[IdStr], Field(min_length=1, description="IDs of people merged into the kept person")
]

# Users
UserLookupId = Annotated[
    Optional[str], Field(description="ID of the user; omit to get the current user")
]
UserId = Annotated[str, Field(min_length=1, description="ID of the user")]
UserName = Annotated[Optional[str], Field(description="New display name")]
UserEmail = Annotated[Optional[EmailStr], Field(description="New email address")]
IsAdmin = Annotated[Optional[bool], Field(description="Grant or revoke admin rights")]
ShouldChangePassword = Annotated[
    Optional[bool], Field(description="Require a password change at next login")
]
MemoriesEnabled = Annotated[Optional[bool], Field(description="Enable or disable memories")]

# Server
AllUsers = Annotated[bool, Field(description="Include statistics for all users")]


class ToolInput(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_params(self, exclude: Iterable[str] = ()) -> dict[str, Any]:
        """Supplied fields only, keyed by their Immich (camelCase) names."""
        return self.model_dump(by_alias=True, exclude_none=True, exclude=set(exclude))


class NoInput(ToolInput):
    pass


# -----------------------------------------------------------------------------
# Albums
# -----------------------------------------------------------------------------
class ListAlbumsInput(ToolInput):
    shared: SharedFilter = None
    asset_id: AlbumAssetFilter = None


class CreateAlbumInput(ToolInput):
    album_name: AlbumName
    description: AlbumDescription = None
    asset_ids: InitialAssetIds = None


class AlbumIdInput(ToolInput):
    album_id: AlbumId


class UpdateAlbumInput(ToolInput):
    album_id: AlbumId
    album_name: NewAlbumName = None
    description: AlbumDescription = None


class AlbumAssetsInput(ToolInput):
    album_id: AlbumId
    asset_ids: AssetIds


# -----------------------------------------------------------------------------
# Assets
# -----------------------------------------------------------------------------
class ListAssetsInput(ToolInput):
    page: Page = 1
    size: Size = 250
    user_id: UserIdFilter = None
    is_favorite: FavoriteFilter = None
    is_archived: ArchivedFilter = None
    with_stacked: WithStacked = None
    with_partners: WithPartners = None


class GetAssetInput(ToolInput):
    asset_id: AssetId
    key: ShareKey = None


class AssetIdInput(ToolInput):
    asset_id: AssetId


class UpdateAssetInput(ToolInput):
    asset_id: AssetId
    is_favorite: SetFavorite = None
    is_archived: SetArchived = None
    description: AssetDescription = None


class BulkUpdateAssetsInput(ToolInput):
    asset_ids: AssetIds
    is_favorite: SetFavorite = None
    is_archived: SetArchived = None
    remove_parent: RemoveParent = None
    stack_parent_id: StackParentId = None


class AssetStatisticsInput(ToolInput):
    is_archived: ArchivedFilter = None
    is_favorite: FavoriteFilter = None


class RandomAssetsInput(ToolInput):
    count: RandomCount = 1


class UpdateAssetMetadataInput(ToolInput):
    asset_id: AssetId
    description: AssetDescription = None
    latitude: Latitude = None
    longitude: Longitude = None
    date_time_original: DateTimeOriginal = None


class UploadAssetsInput(ToolInput):
    file_paths: FilePaths
    album_id: TargetAlbumId = None
    album_name: TargetAlbumName = None


# -----------------------------------------------------------------------------
# Search
# -----------------------------------------------------------------------------
class SearchInput(ToolInput):
    q: GeneralQuery = None
    query: AltQuery = None
    clip: Clip = None
    type: EntityType = None
    is_favorite: FavoriteFilter = None
    is_archived: ArchivedFilter = None
    size: Size = 250
    page: Page = 1
    with_stacked: WithStacked = None
    with_archived: WithArchived = None


class MetadataFilters(ToolInput):
    city: City = None
    state: State = None
    country: Country = None
    make: Make = None
    model: CameraModel = None
    lens_model: LensModel = None
    type: AssetType = None
    size: Size = 250
    page: Page = 1


class SmartSearchInput(MetadataFilters):
    query: SmartQuery
    is_favorite: FavoriteFilter = None
    is_archived: ArchivedFilter = None


class MetadataSearchInput(MetadataFilters):
    with_archived: IncludeArchived = False


class FilenameSearchInput(ToolInput):
    filename: Filename
    size: Size = 250
    page: Page = 1


# -----------------------------------------------------------------------------
# People
# -----------------------------------------------------------------------------
class ListPeopleInput(ToolInput):
    with_hidden: WithHidden = False


class PersonIdInput(ToolInput):
    person_id: PersonId


class UpdatePersonInput(ToolInput):
    person_id: PersonId
    name: PersonName = None
    birth_date: BirthDate = None
    is_hidden: IsHidden = None


class MergePeopleInput(ToolInput):
    person_id: PersonId
    merge_person_ids: MergePersonIds


# -----------------------------------------------------------------------------
# Users
# -----------------------------------------------------------------------------
class GetUserInput(ToolInput):
    user_id: UserLookupId = None


class UpdateUserInput(ToolInput):
    user_id: UserId
    name: UserName = None
    email: UserEmail = None
    is_admin: IsAdmin = None
    should_change_password: ShouldChangePassword = None
    memories_enabled: MemoriesEnabled = None


# -----------------------------------------------------------------------------
# Server
# -----------------------------------------------------------------------------
class ServerStatisticsInput(ToolInput):
    is_all: AllUsers = False
