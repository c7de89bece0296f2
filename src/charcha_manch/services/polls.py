"""Vote aggregation for representative and department polls.

Each submission increments exactly one raw counter with an atomic SQL
``UPDATE ... SET col = col + 1`` and then recomputes the derived scores in
the same transaction. The constituency row carries a version column, so two
concurrent submissions that recompute from the same snapshot cannot both
commit; the loser is replayed by :func:`run_in_transaction`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import update
from sqlalchemy.orm import Session

from charcha_manch.core.errors import InvalidCategoryError, InvalidInputError, NotFoundError
from charcha_manch.db.retry import run_in_transaction
from charcha_manch.db.time import utcnow
from charcha_manch.models import DepartmentSurveyQuestion, VidhayakSurveyQuestion
from charcha_manch.schemas.constituency import (
    DepartmentPollScores,
    PollResult,
    PollSubmission,
    VidhayakPollScores,
)
from charcha_manch.services.constituencies import get_by_area_name
from charcha_manch.services.scoring import positive_mean, rating_score, yes_no_score

logger = logging.getLogger(__name__)

VIDHAYAK_CATEGORY = "vidhayak"
DEPARTMENT_CATEGORIES = ("dept", "department")


@dataclass(frozen=True)
class ParsedPoll:
    """Poll submission after validation, before any write."""

    category: str
    question_index: int
    response: str | int
    dept_id: str | None = None


def _parse_index(raw: int | str) -> int:
    if isinstance(raw, bool):
        raise InvalidInputError("Question ID must be an integer index")
    if isinstance(raw, int):
        index = raw
    else:
        text = str(raw).strip()
        if not text.lstrip("-").isdigit():
            raise InvalidInputError("Question ID must be an integer index")
        index = int(text)
    if index < 0:
        raise InvalidInputError("Question ID must not be negative")
    return index


def _parse_rating(raw: str | int) -> int:
    if isinstance(raw, bool):
        raise InvalidInputError("Rating must be between 1 and 5")
    try:
        rating = int(str(raw).strip())
    except ValueError as exc:
        raise InvalidInputError("Rating must be between 1 and 5") from exc
    if rating < 1 or rating > 5:
        raise InvalidInputError("Rating must be between 1 and 5")
    return rating


def parse_submission(submission: PollSubmission) -> ParsedPoll:
    """Validate a poll submission without touching the store.

    Raises:
        InvalidCategoryError: Unknown ``poll_category``.
        InvalidInputError: Malformed index, response or missing ``dept_id``.
    """
    category = submission.poll_category.strip().lower()
    index = _parse_index(submission.question_id)

    if category == VIDHAYAK_CATEGORY:
        answer = str(submission.poll_response).strip().lower()
        if answer not in ("yes", "no"):
            raise InvalidInputError("Poll response must be 'yes' or 'no' for vidhayak polls")
        return ParsedPoll(category=VIDHAYAK_CATEGORY, question_index=index, response=answer)

    if category in DEPARTMENT_CATEGORIES:
        if not submission.dept_id:
            raise InvalidInputError("Department ID is required for department polls")
        rating = _parse_rating(submission.poll_response)
        return ParsedPoll(
            category="dept",
            question_index=index,
            response=rating,
            dept_id=submission.dept_id,
        )

    raise InvalidCategoryError(
        f"Invalid poll category: {submission.poll_category}. Use 'vidhayak' or 'dept'"
    )


def submit_vidhayak_poll(db: Session, area_name: str, question_index: int, answer: str) -> VidhayakPollScores:
    """Record one yes/no answer and recompute that question's score."""
    column = VidhayakSurveyQuestion.yes_votes if answer == "yes" else VidhayakSurveyQuestion.no_votes

    def _work(session: Session) -> VidhayakPollScores:
        constituency = get_by_area_name(session, area_name)
        if question_index >= len(constituency.survey_score):
            raise NotFoundError(f"Survey question {question_index} not found")
        question = constituency.survey_score[question_index]

        session.execute(
            update(VidhayakSurveyQuestion)
            .where(VidhayakSurveyQuestion.pk == question.pk)
            .values({column: column + 1})
        )
        session.refresh(question)
        question.score = yes_no_score(question.yes_votes, question.no_votes)
        # Bump the constituency version so a concurrent recompute of the same snapshot fails.
        constituency.updated_at = utcnow()
        session.flush()
        return VidhayakPollScores(
            yes_votes=question.yes_votes,
            no_votes=question.no_votes,
            score=question.score,
        )

    scores = run_in_transaction(db, _work, action="record vidhayak poll")
    logger.info("Recorded '%s' for %s question %d", answer, area_name, question_index)
    return scores


def submit_department_poll(
    db: Session,
    area_name: str,
    dept_id: str,
    question_index: int,
    rating: int,
) -> DepartmentPollScores:
    """Record one star rating and recompute question, department and manifesto scores."""
    column = getattr(DepartmentSurveyQuestion, f"rating_{rating}")

    def _work(session: Session) -> DepartmentPollScores:
        constituency = get_by_area_name(session, area_name)
        department = constituency.find_department(dept_id)
        if department is None:
            raise NotFoundError(f"Department {dept_id} not found")
        if question_index >= len(department.survey_score):
            raise InvalidInputError(f"Invalid question ID: {question_index}")
        question = department.survey_score[question_index]

        session.execute(
            update(DepartmentSurveyQuestion)
            .where(DepartmentSurveyQuestion.pk == question.pk)
            .values({column: column + 1})
        )
        session.refresh(question)
        question.score = rating_score(question.ratings)
        department.average_score = positive_mean(q.score for q in department.survey_score)
        constituency.manifesto_score = positive_mean(d.average_score for d in constituency.dept_info)
        constituency.updated_at = utcnow()
        session.flush()
        return DepartmentPollScores(
            ratings=question.ratings,
            question_score=question.score,
            department_average_score=department.average_score,
            manifesto_score=constituency.manifesto_score,
        )

    scores = run_in_transaction(db, _work, action="record department poll")
    logger.info("Recorded %d-star rating for %s department %s question %d", rating, area_name, dept_id, question_index)
    return scores


def submit_poll(db: Session, area_name: str, submission: PollSubmission) -> PollResult:
    """Validate and record a poll response for the named constituency."""
    parsed = parse_submission(submission)
    if parsed.category == VIDHAYAK_CATEGORY:
        scores = submit_vidhayak_poll(db, area_name, parsed.question_index, str(parsed.response))
    else:
        scores = submit_department_poll(
            db, area_name, str(parsed.dept_id), parsed.question_index, int(parsed.response)
        )
    return PollResult(
        constituency=area_name.strip(),
        poll_category=parsed.category,
        question_id=parsed.question_index,
        poll_response=parsed.response,
        updated_scores=scores,
    )
