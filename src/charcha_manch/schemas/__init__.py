# src/charcha_manch/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .auth import AdminTokenRequest, TokenResponse
from .comment import CommentCreate, CommentResponse, ReactionRequest, ReactionResponse
from .constituency import ConstituencyIn, ConstituencyResponse, PollResult, PollSubmission
from .post import PostCreate, PostResponse
from .user import CategoryCreate, CategoryResponse, UserCreate, UserResponse

__all__ = [
    "AdminTokenRequest", "TokenResponse",
    "CategoryCreate", "CategoryResponse",
    "CommentCreate", "CommentResponse", "ReactionRequest", "ReactionResponse",
    "ConstituencyIn", "ConstituencyResponse", "PollResult", "PollSubmission",
    "PostCreate", "PostResponse",
    "UserCreate", "UserResponse",
]
