"""Admin authentication schemas."""

from pydantic import BaseModel, Field


class AdminTokenRequest(BaseModel):
    """Credentials exchanged for an admin access token."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Bearer token issued to an admin."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field("bearer", description="Token type (always 'bearer')")
