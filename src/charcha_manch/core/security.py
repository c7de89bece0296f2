"""Token helpers for the admin credential check."""
from __future__ import annotations

import secrets
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from charcha_manch.core.settings import settings

ADMIN_ROLE = "admin"


def verify_admin_credentials(username: str, password: str) -> bool:
    """Return True if the submitted pair matches the configured admin account.

    An unset ``ADMIN_PASSWORD`` disables password login entirely.
    """
    if not settings.admin_password:
        return False
    user_ok = secrets.compare_digest(username.encode("utf-8"), settings.admin_username.encode("utf-8"))
    password_ok = secrets.compare_digest(
        password.encode("utf-8"),
        settings.admin_password.encode("utf-8"),
    )
    return user_ok and password_ok


def create_access_token(subject: str, extra_claims: dict[str, str] | None = None) -> str:
    """Create a signed JWT for the given subject."""
    to_encode: dict[str, object] = {"sub": subject}
    if extra_claims:
        to_encode.update(extra_claims)
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = expire
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> dict[str, object]:
    """Decode and validate a JWT, raising ``ValueError`` when it is unusable."""
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as err:
        raise ValueError("Could not validate credentials") from err
