# src/charcha_manch/models/__init__.py
"""SQLAlchemy models for the Charcha Manch application."""

from .comment import Comment, CommentReaction
from .constituency import (
    Constituency,
    Department,
    DepartmentSurveyQuestion,
    LatestNews,
    OtherCandidate,
    VidhayakSurveyQuestion,
)
from .post import Post, PostReaction
from .user import Category, User

__all__ = [
    "Category",
    "Comment", "CommentReaction",
    "Constituency", "Department", "DepartmentSurveyQuestion",
    "LatestNews", "OtherCandidate", "VidhayakSurveyQuestion",
    "Post", "PostReaction",
    "User",
]
