# src/charcha_manch/api/v1/endpoints/users.py
"""Citizen account endpoints."""

from fastapi import APIRouter, status

from charcha_manch.api.v1.dependencies import SessionDep
from charcha_manch.schemas.user import UserCreate, UserResponse
from charcha_manch.services import users as user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, db: SessionDep) -> UserResponse:
    """Register a citizen account."""
    user = user_service.create_user(db, payload)
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, db: SessionDep) -> UserResponse:
    return UserResponse.model_validate(user_service.get_user(db, user_id))
