# =============================================================================
# immich_tools/people.py  -  People (Face Recognition) Tools
# =============================================================================

from typing import Any

from immich_tools.base import ToolAdapter, ToolSpec
from immich_tools.schemas import ListPeopleInput, MergePeopleInput, PersonIdInput, UpdatePersonInput


class PeopleTool(ToolAdapter):
    DOMAIN = "people"
    TOOLS = (
        ToolSpec(
            "people_list",
            "List the people recognized in the library.",
            ListPeopleInput,
            "list_people",
        ),
        ToolSpec(
            "people_get",
            "Get details of a recognized person by ID.",
            PersonIdInput,
            "get_person",
        ),
        ToolSpec(
            "people_update",
            "Rename a person, set their birth date, or hide them.",
            UpdatePersonInput,
            "update_person",
        ),
        ToolSpec(
            "people_merge",
            "Merge other people into one person (for duplicate face clusters).",
            MergePeopleInput,
            "merge_people",
        ),
    )

    async def list_people(self, params: ListPeopleInput) -> Any:
        return await self.client.get("/api/people", params.to_params())

    async def get_person(self, params: PersonIdInput) -> Any:
        return await self.client.get(f"/api/people/{params.person_id}")

    async def update_person(self, params: UpdatePersonInput) -> Any:
        return await self.client.put(f"/api/people/{params.person_id}", params.to_params(exclude=("person_id",)))

    async def merge_people(self, params: MergePeopleInput) -> Any:
        return await self.client.post(f"/api/people/{params.person_id}/merge", {"ids": params.merge_person_ids})
