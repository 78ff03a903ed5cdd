"""Response envelope shared by every endpoint: {success, data, message?, errors?}."""

from typing import Any

from pydantic import BaseModel, Field


class Envelope(BaseModel):
    """Documented shape of every JSON response."""

    success: bool
    data: Any = None
    message: str | None = None
    errors: list[str] | None = Field(default=None)


def success_response(data: Any = None, message: str | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"success": True, "data": data}
    if message:
        body["message"] = message
    return body


def error_response(message: str, errors: list[str] | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"success": False, "data": None, "message": message}
    if errors:
        body["errors"] = errors
    return body
