"""API error response schemas."""

from typing import Any
from typing import Literal

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str
    code: str
    details: dict[str, Any] | None = None


class PermissionDeniedError(BaseModel):
    error: Literal["Permission denied"]
    code: Literal["UNAUTHENTICATED", "FORBIDDEN"]
