"""Like/dislike ledger shared by comments and posts."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from charcha_manch.core.errors import ConflictError, InvalidInputError, NotFoundError
from charcha_manch.db.retry import run_in_transaction
from charcha_manch.db.time import utcnow
from charcha_manch.models import Comment, CommentReaction, Post, PostReaction
from charcha_manch.schemas.comment import ReactionResponse

logger = logging.getLogger(__name__)

REACTION_KINDS = ("like", "dislike")


def split_reactions(reactions: list[Any]) -> tuple[list[int], list[int]]:
    """Return the user ids that liked and disliked, oldest reaction first."""
    ordered = sorted(reactions, key=lambda r: r.created_at)
    likes = [r.user_id for r in ordered if r.kind == "like"]
    dislikes = [r.user_id for r in ordered if r.kind == "dislike"]
    return likes, dislikes


class ReactionLedger:
    """Per-user reactions on one kind of target.

    A (target, user) pair is in one of three states: none, liked or disliked.
    Reacting with the kind already held is a conflict; reacting with the other
    kind switches it. Counters on the target are always recounted from the
    reaction rows, never adjusted in place.
    """

    def __init__(self, target_model: type, reaction_model: type, target_key: str, label: str):
        self.target_model = target_model
        self.reaction_model = reaction_model
        self.target_key = target_key
        self.label = label

    def _key_column(self):
        return getattr(self.reaction_model, self.target_key)

    def _load_target(self, session: Session, target_id: int):
        target = session.get(self.target_model, target_id)
        if target is None:
            raise NotFoundError(f"{self.label.capitalize()} not found")
        return target

    def _recount(self, session: Session, target) -> None:
        rows = session.execute(
            select(self.reaction_model.kind, func.count())
            .where(self._key_column() == target.id)
            .group_by(self.reaction_model.kind)
        ).all()
        counts = dict(rows)
        target.like_count = counts.get("like", 0)
        target.dislike_count = counts.get("dislike", 0)
        # Always write the target so its version check fences concurrent recounts.
        target.updated_at = utcnow()
        session.flush()

    @staticmethod
    def _check_request(user_id: int | None, kind: str) -> None:
        if user_id is None:
            raise InvalidInputError("User ID is required")
        if kind not in REACTION_KINDS:
            raise InvalidInputError("Reaction type must be 'like' or 'dislike'")

    def react(self, db: Session, target_id: int, user_id: int | None, kind: str) -> ReactionResponse:
        """Record a like or dislike, switching away from the opposite kind."""
        self._check_request(user_id, kind)

        def _work(session: Session) -> ReactionResponse:
            target = self._load_target(session, target_id)
            existing = session.get(
                self.reaction_model, {self.target_key: target_id, "user_id": user_id}
            )
            if existing is not None and existing.kind == kind:
                raise ConflictError(f"User has already {kind}d this {self.label}")
            if existing is not None:
                existing.kind = kind
            else:
                session.add(self.reaction_model(**{self.target_key: target_id}, user_id=user_id, kind=kind))
            session.flush()
            self._recount(session, target)
            return ReactionResponse(
                message=f"{self.label.capitalize()} {kind}d successfully",
                like_count=target.like_count,
                dislike_count=target.dislike_count,
            )

        response = run_in_transaction(db, _work, action=f"{kind} {self.label}", retry_on_integrity=True)
        logger.debug("User %s %sd %s %s", user_id, kind, self.label, target_id)
        return response

    def unreact(self, db: Session, target_id: int, user_id: int | None, kind: str) -> ReactionResponse:
        """Remove a reaction of the given kind; a no-op when the user holds none."""
        self._check_request(user_id, kind)

        def _work(session: Session) -> ReactionResponse:
            target = self._load_target(session, target_id)
            result = session.execute(
                delete(self.reaction_model).where(
                    self._key_column() == target_id,
                    self.reaction_model.user_id == user_id,
                    self.reaction_model.kind == kind,
                )
            )
            if result.rowcount:
                self._recount(session, target)
            return ReactionResponse(
                message="Reaction removed successfully",
                like_count=target.like_count,
                dislike_count=target.dislike_count,
            )

        return run_in_transaction(db, _work, action=f"remove {kind} from {self.label}")


comment_reactions = ReactionLedger(Comment, CommentReaction, "comment_id", "comment")
post_reactions = ReactionLedger(Post, PostReaction, "post_id", "post")
