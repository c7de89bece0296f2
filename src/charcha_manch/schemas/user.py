"""User and category Pydantic schemas."""
from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

EMAIL_PATTERN = r"^[\w.+-]+@[\w-]+(\.[\w-]+)*\.\w{2,}$"


class UserCreate(BaseModel):
    """Schema for registering a citizen account."""

    name: str | None = None
    phone_number: str = Field(
        ...,
        min_length=1,
        max_length=32,
        validation_alias=AliasChoices("phone_number", "phoneNumber"),
    )
    email: str | None = Field(None, pattern=EMAIL_PATTERN)
    constituency_id: int | None = Field(None, validation_alias=AliasChoices("constituency_id", "constituency"))
    profile_image: str | None = Field(None, validation_alias=AliasChoices("profile_image", "profileImage"))


class UserResponse(BaseModel):
    """Schema for user information returned by the API."""

    id: int
    name: str | None
    phone_number: str
    email: str | None
    constituency_id: int | None
    profile_image: str | None
    role: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CategoryCreate(BaseModel):
    """Schema for creating a category."""

    name: str = Field(..., min_length=1, max_length=100)


class CategoryResponse(BaseModel):
    """Schema for category information returned by the API."""

    id: int
    name: str
    used_count: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
