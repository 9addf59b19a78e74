# =============================================================================
# immich_tools/base.py  -  Tool Catalog & Dispatch
# =============================================================================
#
# Each domain adapter (albums, assets, search, people, server) subclasses
# ToolAdapter and declares:
#   - DOMAIN: a short label used in logs and errors,
#   - TOOLS:  its catalog, a tuple of ToolSpec (name, description, input
#             model, handler method).
#
# handle(name, arguments) is the whole dispatch path:
#   1. find the ToolSpec (UnknownToolError if this adapter does not own it),
#   2. validate the raw arguments against the input model
#      (ValidationError, before any network call),
#   3. run the handler with the validated model,
#   4. log failures with the tool name and arguments, then re-raise.
# =============================================================================

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import pydantic

from immich_core.client import ImmichClient, get_client
from immich_core.errors import ImmichToolError, UnknownToolError, ValidationError
from immich_tools.schemas import ToolInput

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolSpec:
    """One catalog entry, as published to the hosting agent framework."""

    name: str
    description: str
    input_model: type[ToolInput]
    handler: str

    @property
    def input_schema(self) -> dict[str, Any]:
        return self.input_model.model_json_schema(by_alias=False)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "description": self.description, "inputSchema": self.input_schema}


class ToolAdapter:
    """Base class for the per-domain tool adapters.

    Args:
        client: The Immich client to call.  Defaults to the process-wide
            client, resolved on first use.
    """

    DOMAIN = ""
    TOOLS: tuple[ToolSpec, ...] = ()

    def __init__(self, client: Optional[ImmichClient] = None):
        self._client = client

    @property
    def client(self) -> ImmichClient:
        if self._client is None:
            self._client = get_client()
        return self._client

    @classmethod
    def get_tools(cls) -> list[ToolSpec]:
        return list(cls.TOOLS)

    @classmethod
    def get_spec(cls, name: str) -> ToolSpec:
        for spec in cls.TOOLS:
            if spec.name == name:
                return spec
        raise UnknownToolError(name, cls.DOMAIN)

    @classmethod
    def handles(cls, name: str) -> bool:
        return any(spec.name == name for spec in cls.TOOLS)

    async def handle(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> Any:
        arguments = dict(arguments or {})
        logger.info("Executing %s tool: %s %s", self.DOMAIN, name, arguments)

        try:
            spec = self.get_spec(name)
            try:
                params = spec.input_model.model_validate(arguments)
            except pydantic.ValidationError as exc:
                raise ValidationError(name, exc.errors(include_url=False)) from exc
            return await getattr(self, spec.handler)(params)
        except ImmichToolError as exc:
            logger.error("Error in %s tool %s: %s (arguments=%s)", self.DOMAIN, name, exc, arguments)
            raise
