"""Transaction runner with retry for transient store failures."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from charcha_manch.core.errors import CharchaError, ConflictError, StoreError
from charcha_manch.core.settings import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Optimistic-lock conflicts and dropped connections are safe to replay because
# the whole unit of work is rolled back first.
RETRYABLE_ERRORS: tuple[type[Exception], ...] = (StaleDataError, OperationalError)


def run_in_transaction(
    db: Session,
    work: Callable[[Session], T],
    *,
    action: str,
    retry_on_integrity: bool = False,
) -> T:
    """Run ``work`` and commit it, replaying the whole unit on transient failures.

    Args:
        db: Session the unit of work runs against.
        work: Callable performing reads and writes; must not commit itself.
        action: Short label used in log messages.
        retry_on_integrity: Also replay on ``IntegrityError`` (concurrent insert
            of the same unique key). The final failure becomes a ``ConflictError``.

    Returns:
        Whatever ``work`` returns after a successful commit.

    Raises:
        CharchaError: Domain errors raised by ``work`` propagate unchanged.
        StoreError: The store kept failing after ``WRITE_RETRY_ATTEMPTS`` tries.
    """
    attempts = settings.write_retry_attempts
    retryable = RETRYABLE_ERRORS + ((IntegrityError,) if retry_on_integrity else ())

    for attempt in range(1, attempts + 1):
        try:
            result = work(db)
            db.commit()
            return result
        except CharchaError:
            db.rollback()
            raise
        except retryable as exc:
            db.rollback()
            if attempt == attempts:
                logger.error("%s failed after %d attempts: %s", action, attempts, exc)
                if isinstance(exc, IntegrityError):
                    raise ConflictError(f"Concurrent update while trying to {action}") from exc
                raise StoreError(f"Store unavailable while trying to {action}") from exc
            logger.warning("%s attempt %d/%d failed, retrying: %s", action, attempt, attempts, exc)
            time.sleep(settings.retry_backoff_seconds * attempt)
        except Exception:
            db.rollback()
            raise

    raise StoreError(f"Store unavailable while trying to {action}")  # pragma: no cover


def read_with_retry(db: Session, read: Callable[[Session], T], *, action: str) -> T:
    """Run an idempotent read, retrying on dropped connections."""
    attempts = settings.write_retry_attempts
    for attempt in range(1, attempts + 1):
        try:
            return read(db)
        except OperationalError as exc:
            db.rollback()
            if attempt == attempts:
                logger.error("%s failed after %d attempts: %s", action, attempts, exc)
                raise StoreError(f"Store unavailable while trying to {action}") from exc
            logger.warning("%s attempt %d/%d failed, retrying: %s", action, attempt, attempts, exc)
            time.sleep(settings.retry_backoff_seconds * attempt)

    raise StoreError(f"Store unavailable while trying to {action}")  # pragma: no cover
