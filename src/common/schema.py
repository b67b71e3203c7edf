"""Common schemas for the API."""

import typing as t

from ninja import Field, Schema
from pydantic import StringConstraints

T = t.TypeVar("T")

StrippedString = t.Annotated[str, StringConstraints(strip_whitespace=True)]
UlidString = t.Annotated[str, Field(..., description="A ULID", min_length=26, max_length=26)]


class Envelope(Schema, t.Generic[T]):
    """Successful response envelope."""

    success: t.Literal[True] = True
    data: T
    message: str | None = None


class ErrorDetail(Schema):
    message: str
    code: str
    details: t.Any = None


class ErrorEnvelope(Schema):
    """Error response envelope."""

    success: t.Literal[False] = False
    error: ErrorDetail
    data: None = None


class VersionResponse(Schema):
    version: str


class ResponseOk(Schema):
    status: t.Literal["ok"] = "ok"


class PaginationSchema(Schema):
    has_next_page: bool
    next_token: str | None = None
    limit: int
    count: int
