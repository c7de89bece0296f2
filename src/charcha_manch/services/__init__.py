"""Business logic services for the Charcha Manch application."""

from .reactions import ReactionLedger, comment_reactions, post_reactions

__all__ = [
    "ReactionLedger",
    "comment_reactions",
    "post_reactions",
]
