"""Reference data for citizens and post categories."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from charcha_manch.core.errors import ConflictError, NotFoundError
from charcha_manch.db.retry import run_in_transaction
from charcha_manch.models import Category, Constituency, User
from charcha_manch.schemas.user import CategoryCreate, UserCreate

logger = logging.getLogger(__name__)


def create_user(db: Session, payload: UserCreate) -> User:
    """Register a citizen account."""

    def _work(session: Session) -> User:
        if payload.email is not None:
            taken = session.execute(select(User.id).where(User.email == payload.email)).first()
            if taken is not None:
                raise ConflictError("A user with this email already exists")
        if payload.constituency_id is not None and session.get(Constituency, payload.constituency_id) is None:
            raise NotFoundError(f"No constituency found with ID: {payload.constituency_id}")
        user = User(
            name=payload.name,
            phone_number=payload.phone_number,
            email=payload.email,
            constituency_id=payload.constituency_id,
            profile_image=payload.profile_image,
        )
        session.add(user)
        session.flush()
        return user

    user = run_in_transaction(db, _work, action="create user")
    logger.info("Created user %s", user.id)
    return user


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def create_category(db: Session, payload: CategoryCreate) -> Category:
    def _work(session: Session) -> Category:
        category = Category(name=payload.name.strip())
        session.add(category)
        session.flush()
        return category

    return run_in_transaction(db, _work, action="create category")


def get_category(db: Session, category_id: int) -> Category:
    category = db.get(Category, category_id)
    if category is None:
        raise NotFoundError("Category not found")
    return category
