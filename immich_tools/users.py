# =============================================================================
# immich_tools/users.py  -  User Tools
# =============================================================================
#
# users_get reads /api/users/me when no id is given.  users_update goes
# through the admin endpoint and so needs an admin API key.
# =============================================================================

from typing import Any

from immich_tools.base import ToolAdapter, ToolSpec
from immich_tools.schemas import GetUserInput, UpdateUserInput


class UsersTool(ToolAdapter):
    DOMAIN = "users"
    TOOLS = (
        ToolSpec(
            "users_get",
            "Get a user's profile. Returns the current user when no user ID is given.",
            GetUserInput,
            "get_user",
        ),
        ToolSpec(
            "users_update",
            "Update a user's name, email, admin flag or account settings (requires an admin API key).",
            UpdateUserInput,
            "update_user",
        ),
    )

    async def get_user(self, params: GetUserInput) -> Any:
        return await self.client.get(f"/api/users/{params.user_id or 'me'}")

    async def update_user(self, params: UpdateUserInput) -> Any:
        return await self.client.put(
            f"/api/admin/users/{params.user_id}", params.to_params(exclude={"user_id"})
        )
