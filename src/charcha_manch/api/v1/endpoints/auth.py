# src/charcha_manch/api/v1/endpoints/auth.py
"""Admin authentication endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from charcha_manch.core.security import ADMIN_ROLE, create_access_token, verify_admin_credentials
from charcha_manch.schemas.auth import AdminTokenRequest, TokenResponse

router = APIRouter(prefix="/auth", tags=["authentication"])
logger = logging.getLogger(__name__)


@router.post("/admin/token", response_model=TokenResponse)
def issue_admin_token(request: AdminTokenRequest) -> TokenResponse:
    """Exchange the configured admin credentials for a bearer token."""
    if not verify_admin_credentials(request.username, request.password):
        logger.warning("Rejected admin login for %r", request.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin credentials",
        )
    token = create_access_token(request.username, {"role": ADMIN_ROLE})
    return TokenResponse(access_token=token)
