"""Domain error taxonomy shared by services and the HTTP layer."""

from __future__ import annotations


class CharchaError(RuntimeError):
    """Base exception raised for domain failures.

    Every subclass carries a stable ``kind`` that is returned to clients in
    place of internal details.
    """

    kind = "internal"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(CharchaError):
    """Raised when a referenced entity does not exist."""

    kind = "not_found"
    status_code = 404


class InvalidInputError(CharchaError):
    """Raised when request fields are malformed or out of range."""

    kind = "invalid_input"
    status_code = 400


class InvalidCategoryError(InvalidInputError):
    """Raised when a poll category is not recognised."""

    kind = "invalid_category"


class ConflictError(CharchaError):
    """Raised for duplicate reactions and duplicate unique keys."""

    kind = "conflict"
    status_code = 409


class StoreError(CharchaError):
    """Raised when the store keeps failing after all retry attempts."""

    kind = "internal"
    status_code = 503
