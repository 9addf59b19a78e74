"""Tests for the user tools."""

import pytest

from immich_core.errors import ValidationError
from immich_tools.users import UsersTool

from tests.conftest import body_of


@pytest.fixture
def users(client):
    return UsersTool(client)


async def test_get_without_id_reads_current_user(users, fake):
    fake.add("GET", "/api/users/me", {"id": "u-me", "email": "me@example.com"})

    result = await users.handle("users_get")

    assert result["id"] == "u-me"
    assert fake.paths() == ["/api/users/me"]


async def test_get_by_id(users, fake):
    fake.add("GET", "/api/users/u-2", {"id": "u-2"})

    assert await users.handle("users_get", {"user_id": "u-2"}) == {"id": "u-2"}


async def test_update_goes_through_admin_endpoint(users, fake):
    fake.add("PUT", "/api/admin/users/u-2", {"id": "u-2"})

    await users.handle(
        "users_update",
        {"user_id": "u-2", "email": "ana@example.com", "is_admin": False, "memoriesEnabled": True},
    )

    assert body_of(fake.requests[0]) == {
        "email": "ana@example.com",
        "isAdmin": False,
        "memoriesEnabled": True,
    }


@pytest.mark.parametrize(
    "arguments",
    [
        {"email": "ana@example.com"},
        {"user_id": "", "name": "Ana"},
        {"user_id": "u-2", "email": "not-an-email"},
    ],
)
async def test_update_rejects_bad_arguments(users, fake, arguments):
    with pytest.raises(ValidationError):
        await users.handle("users_update", arguments)

    assert fake.requests == []
