"""Shared Pydantic schemas and validators for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, Field, HttpUrl, TypeAdapter, ValidationError

PERCENT_PATTERN = r"^\d+(\.\d+)?%$"
HTTP_URL_PATTERN = r"^https?://.+"

_http_url = TypeAdapter(HttpUrl)


def validate_optional_url(value: str | None) -> str | None:
    """Return a well-formed http(s) URL unchanged; empty strings become None."""
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    try:
        _http_url.validate_python(value)
    except ValidationError as err:
        raise ValueError("Link must be a valid URL") from err
    return value


class Pagination(BaseModel):
    """Offset pagination metadata returned by paged list endpoints."""

    current_page: int = Field(..., serialization_alias="currentPage")
    total_pages: int = Field(..., serialization_alias="totalPages")
    total_items: int = Field(..., serialization_alias="totalItems")
    has_next_page: bool = Field(..., serialization_alias="hasNextPage")
    has_prev_page: bool = Field(..., serialization_alias="hasPrevPage")
    limit: int


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""

    message: str
