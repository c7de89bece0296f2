# src/charcha_manch/api/v1/endpoints/categories.py
"""Post category endpoints."""

from fastapi import APIRouter, status

from charcha_manch.api.v1.dependencies import SessionDep
from charcha_manch.schemas.user import CategoryCreate, CategoryResponse
from charcha_manch.services import users as user_service

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post("/", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(payload: CategoryCreate, db: SessionDep) -> CategoryResponse:
    category = user_service.create_category(db, payload)
    return CategoryResponse.model_validate(category)


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(category_id: int, db: SessionDep) -> CategoryResponse:
    return CategoryResponse.model_validate(user_service.get_category(db, category_id))
