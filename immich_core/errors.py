# =============================================================================
# immich_core/errors.py  -  Error Taxonomy
# =============================================================================
#
# Every error this project raises derives from ImmichToolError:
#
#   ConfigurationError  - settings missing or invalid at start-up
#   ValidationError     - tool arguments do not fit the tool's input model
#   UnknownToolError    - a tool name no adapter owns
#   NotFoundError       - a local file handed to the upload pipeline is missing
#   ImmichApiError      - the remote service failed (non-2xx or network fault)
#
# ImmichApiError is the normalized remote error: it is built exactly once, at
# the transport boundary (immich_core/client.py), and travels upward as-is.
# =============================================================================

from typing import Any, Optional


class ImmichToolError(Exception):
    """Base class for all errors raised by the Immich tool server."""


class ConfigurationError(ImmichToolError):
    """Raised when the process settings cannot be loaded."""


class ValidationError(ImmichToolError):
    """Tool arguments failed validation; no network call was attempted."""

    def __init__(self, tool: str, errors: list[dict[str, Any]]):
        self.tool = tool
        self.errors = errors
        super().__init__(self._summary())

    def _summary(self) -> str:
        parts = []
        for error in self.errors:
            location = ".".join(str(part) for part in error.get("loc", ())) or "arguments"
            parts.append(f"{location}: {error.get('msg', 'invalid value')}")
        return f"Invalid arguments for {self.tool}: " + "; ".join(parts)


class UnknownToolError(ImmichToolError):
    """Raised when a tool name is dispatched to an adapter that does not own it."""

    def __init__(self, name: str, domain: str):
        self.name = name
        super().__init__(f"Unknown {domain} tool: {name}")


class NotFoundError(ImmichToolError):
    """A local file referenced by an upload does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"File not found: {path}")


class ImmichApiError(ImmichToolError):
    """Normalized failure of a call to the Immich REST API.

    Attributes:
        message: The service's own message when it sent one, otherwise the
            transport's description of the failure.
        status_code: HTTP status of the response, or 500 for transport faults
            (timeouts, refused connections) that never produced a response.
        error_code: The service's short error name (e.g. "Bad Request"), or a
            transport marker such as "timeout".
    """

    def __init__(self, message: str, status_code: int, error_code: Optional[str] = None):
        super().__init__(message)
        object.__setattr__(self, "message", message)
        object.__setattr__(self, "status_code", status_code)
        object.__setattr__(self, "error_code", error_code)

    def __setattr__(self, name: str, value: Any) -> None:
        # Normalized once at the boundary, never mutated afterwards.
        if name in ("message", "status_code", "error_code"):
            raise AttributeError(f"ImmichApiError.{name} is read-only")
        super().__setattr__(name, value)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"ImmichApiError(message={self.message!r}, "
            f"status_code={self.status_code}, error_code={self.error_code!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "statusCode": self.status_code,
            "error": self.error_code,
        }
