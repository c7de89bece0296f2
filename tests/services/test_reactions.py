# tests/services/test_reactions.py
"""Tests for the like/dislike ledger."""

import pytest
from sqlalchemy import select

from charcha_manch.core.errors import ConflictError, InvalidInputError, NotFoundError
from charcha_manch.models import CommentReaction
from charcha_manch.schemas.comment import CommentCreate
from charcha_manch.services.comments import create_comment, get_comment
from charcha_manch.services.reactions import comment_reactions, post_reactions


@pytest.fixture()
def comment(db_session, test_post, test_user):
    return create_comment(db_session, test_post.id, CommentCreate(user_id=test_user.id, content="Needs fixing"))


def _kinds(db_session, comment_id, user_id):
    return list(
        db_session.execute(
            select(CommentReaction.kind).where(
                CommentReaction.comment_id == comment_id,
                CommentReaction.user_id == user_id,
            )
        ).scalars()
    )


def test_like_dislike_unreact_scenario(db_session, comment, other_user) -> None:
    liked = comment_reactions.react(db_session, comment.id, other_user.id, "like")
    assert (liked.like_count, liked.dislike_count) == (1, 0)

    disliked = comment_reactions.react(db_session, comment.id, other_user.id, "dislike")
    assert (disliked.like_count, disliked.dislike_count) == (0, 1)
    assert _kinds(db_session, comment.id, other_user.id) == ["dislike"]

    removed = comment_reactions.unreact(db_session, comment.id, other_user.id, "dislike")
    assert (removed.like_count, removed.dislike_count) == (0, 0)
    assert _kinds(db_session, comment.id, other_user.id) == []


def test_same_reaction_twice_conflicts(db_session, comment, other_user) -> None:
    comment_reactions.react(db_session, comment.id, other_user.id, "like")
    with pytest.raises(ConflictError, match="already liked"):
        comment_reactions.react(db_session, comment.id, other_user.id, "like")

    stored = get_comment(db_session, comment.id)
    assert (stored.like_count, stored.dislike_count) == (1, 0)


def test_counts_match_ledger_for_many_users(db_session, comment, test_user, other_user) -> None:
    comment_reactions.react(db_session, comment.id, test_user.id, "like")
    comment_reactions.react(db_session, comment.id, other_user.id, "like")
    result = comment_reactions.react(db_session, comment.id, 77, "dislike")

    assert (result.like_count, result.dislike_count) == (2, 1)


def test_unreact_is_idempotent(db_session, comment, other_user) -> None:
    comment_reactions.react(db_session, comment.id, other_user.id, "like")

    first = comment_reactions.unreact(db_session, comment.id, other_user.id, "dislike")
    assert (first.like_count, first.dislike_count) == (1, 0)

    comment_reactions.unreact(db_session, comment.id, other_user.id, "like")
    again = comment_reactions.unreact(db_session, comment.id, other_user.id, "like")
    assert (again.like_count, again.dislike_count) == (0, 0)


def test_missing_user_or_comment(db_session, comment) -> None:
    with pytest.raises(InvalidInputError):
        comment_reactions.react(db_session, comment.id, None, "like")
    with pytest.raises(NotFoundError):
        comment_reactions.react(db_session, 4040, 1, "like")
    with pytest.raises(InvalidInputError):
        comment_reactions.unreact(db_session, comment.id, 1, "love")


def test_post_reactions_share_the_state_machine(db_session, test_post, other_user) -> None:
    post_reactions.react(db_session, test_post.id, other_user.id, "dislike")
    switched = post_reactions.react(db_session, test_post.id, other_user.id, "like")
    assert (switched.like_count, switched.dislike_count) == (1, 0)
    assert switched.message == "Post liked successfully"

    with pytest.raises(ConflictError, match="already liked this post"):
        post_reactions.react(db_session, test_post.id, other_user.id, "like")
