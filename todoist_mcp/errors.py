"""
Todoist MCP - Error Kinds

Every failure the tools can report is a ToolError tagged with an ErrorKind.
The kind decides which payload fields are meaningful:

- MISSING_CONFIGURATION: a required setting is absent (name)
- VALIDATION: the caller broke a domain rule or sent a malformed request
- NOT_FOUND: task, parent or section is absent or outside the project (name)
- UPSTREAM_API: Todoist answered with a non-success status (status, body)
"""

import json
from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Failure categories reported as `error_type` in tool responses."""
    MISSING_CONFIGURATION = "MissingConfiguration"
    VALIDATION = "Validation"
    NOT_FOUND = "NotFound"
    UPSTREAM_API = "UpstreamApiError"
    UNKNOWN = "UnknownError"


class ToolError(Exception):
    """A tagged failure raised by the task layer and caught at dispatch."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        status: Optional[int] = None,
        body: Any = None,
        name: Optional[str] = None,
    ):
        self.kind = kind
        self.message = message
        self.status = status
        self.body = body
        self.name = name
        super().__init__(message)

    @classmethod
    def missing_configuration(cls, setting: str) -> "ToolError":
        return cls(ErrorKind.MISSING_CONFIGURATION, f"Missing env: {setting}", name=setting)

    @classmethod
    def validation(cls, message: str) -> "ToolError":
        return cls(ErrorKind.VALIDATION, message)

    @classmethod
    def not_found(cls, message: str, name: Optional[str] = None) -> "ToolError":
        return cls(ErrorKind.NOT_FOUND, message, name=name)

    @classmethod
    def upstream(cls, status: int, body: Any) -> "ToolError":
        return cls(ErrorKind.UPSTREAM_API, describe_upstream_error(status, body), status=status, body=body)


def describe_upstream_error(status: int, body: Any) -> str:
    """Turn a Todoist error body into a readable message."""
    message = f"Todoist API error {status}"

    if isinstance(body, str):
        lowered = body.lower()
        if "maximum number of items per user project limit reached" in lowered:
            return "Project has reached maximum task limit. Delete some existing tasks before creating new ones."
        if "rate limit" in lowered:
            return "Rate limit exceeded. Wait before making more requests."
        if "insufficient permissions" in lowered or "forbidden" in lowered:
            return "Insufficient permissions. Check API token permissions."
        if "not found" in lowered:
            return "Resource not found. Task or project may have been deleted."
        if body and body != "<unreadable>":
            return f"{message}: {body}"
    elif isinstance(body, dict) and body.get("error"):
        return f"{message}: {body['error']}"

    return message


def error_payload(error: ToolError) -> Optional[Dict[str, Any]]:
    """Extra diagnostic fields for a failure response, by kind."""
    kind = error.kind
    if kind is ErrorKind.UPSTREAM_API:
        return {"status": error.status, "body": _jsonable(error.body)}
    if kind in (ErrorKind.NOT_FOUND, ErrorKind.MISSING_CONFIGURATION):
        return {"name": error.name} if error.name is not None else None
    if kind in (ErrorKind.VALIDATION, ErrorKind.UNKNOWN):
        return None
    raise ValueError(f"Unhandled error kind: {kind}")


def _jsonable(body: Any) -> Any:
    try:
        json.dumps(body)
    except (TypeError, ValueError):
        return str(body)
    return body
