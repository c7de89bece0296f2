"""Constituency reference data: lookups, admin writes and score reconciliation."""
from __future__ import annotations

import logging
import math
import uuid

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from charcha_manch.core.errors import ConflictError, InvalidInputError, NotFoundError
from charcha_manch.core.settings import settings
from charcha_manch.db.retry import read_with_retry, run_in_transaction
from charcha_manch.models import (
    Constituency,
    Department,
    DepartmentSurveyQuestion,
    LatestNews,
    OtherCandidate,
    Post,
    VidhayakSurveyQuestion,
)
from charcha_manch.schemas.common import Pagination
from charcha_manch.schemas.constituency import (
    ConstituencyIn,
    ConstituencyPage,
    ConstituencyResponse,
    ConstituencyStats,
    ConstituencySummary,
    DeptInfoOut,
    DeptSurveyQuestionOut,
    LatestNewsOut,
    OtherCandidateOut,
    RecomputeResult,
    SurveyQuestionOut,
    VidhayakInfoOut,
)
from charcha_manch.services.scoring import positive_mean, rating_score, yes_no_score

logger = logging.getLogger(__name__)


def get_by_area_name(db: Session, area_name: str) -> Constituency:
    """Return the constituency with the given area name or raise ``NotFoundError``."""
    constituency = db.execute(
        select(Constituency).where(Constituency.area_name == area_name.strip())
    ).scalars().first()
    if constituency is None:
        raise NotFoundError(f"No constituency found with area name: {area_name}")
    return constituency


def get_by_id(db: Session, constituency_id: int) -> Constituency:
    """Return the constituency with the given id or raise ``NotFoundError``."""
    constituency = db.get(Constituency, constituency_id)
    if constituency is None:
        raise NotFoundError(f"No constituency found with ID: {constituency_id}")
    return constituency


def list_area_names(db: Session) -> list[str]:
    """Return every area name in alphabetical order."""
    return read_with_retry(
        db,
        lambda session: list(
            session.execute(select(Constituency.area_name).order_by(Constituency.area_name)).scalars()
        ),
        action="list area names",
    )


def list_page(db: Session, page: int, limit: int) -> ConstituencyPage:
    """Return one alphabetical page of constituencies.

    Raises:
        InvalidInputError: If ``page`` < 1, ``limit`` is outside the allowed
            range, or ``page`` lies beyond the last page.
    """
    if page < 1:
        raise InvalidInputError("Page number must be greater than 0")
    if limit < 1 or limit > settings.constituency_max_page_size:
        raise InvalidInputError(f"Limit must be between 1 and {settings.constituency_max_page_size}")

    def _read(session: Session) -> ConstituencyPage:
        total = session.execute(select(func.count()).select_from(Constituency)).scalar_one()
        total_pages = math.ceil(total / limit)
        if total and page > total_pages:
            raise InvalidInputError(f"Page {page} does not exist. Total pages: {total_pages}")
        rows = session.execute(
            select(Constituency).order_by(Constituency.area_name).offset((page - 1) * limit).limit(limit)
        ).scalars()
        return ConstituencyPage(
            constituencies=[to_constituency_response(row) for row in rows],
            pagination=Pagination(
                current_page=page,
                total_pages=total_pages,
                total_items=total,
                has_next_page=page < total_pages,
                has_prev_page=page > 1,
                limit=limit,
            ),
        )

    return read_with_retry(db, _read, action="list constituencies")


def stats_overview(db: Session) -> ConstituencyStats:
    """Return counts of constituencies and departments plus the parties in office."""
    total = db.execute(select(func.count()).select_from(Constituency)).scalar_one()
    parties = db.execute(
        select(Constituency.party_name).distinct().order_by(Constituency.party_name)
    ).scalars()
    departments = db.execute(select(func.count()).select_from(Department)).scalar_one()
    return ConstituencyStats(
        total_constituencies=total,
        parties=list(parties),
        total_departments=departments,
    )


def apply_derived_scores(constituency: Constituency) -> bool:
    """Rederive every score of a constituency from its raw counters.

    Question scores are only rederived once the question has received votes,
    so seeded scores survive until the first poll. Department averages and the
    manifesto score are always rederived.

    Returns:
        True if any stored value changed.
    """
    changed = False

    for question in constituency.survey_score:
        if question.yes_votes + question.no_votes > 0:
            score = yes_no_score(question.yes_votes, question.no_votes)
            if question.score != score:
                question.score = score
                changed = True

    for department in constituency.dept_info:
        for dept_question in department.survey_score:
            if sum(dept_question.ratings.values()) > 0:
                score = rating_score(dept_question.ratings)
                if dept_question.score != score:
                    dept_question.score = score
                    changed = True
        average = positive_mean(q.score for q in department.survey_score)
        if department.average_score != average:
            department.average_score = average
            changed = True

    manifesto = positive_mean(d.average_score for d in constituency.dept_info)
    if constituency.manifesto_score != manifesto:
        constituency.manifesto_score = manifesto
        changed = True

    return changed


def recompute_scores(db: Session, constituency_id: int) -> RecomputeResult:
    """Repair derived scores of one constituency from its raw counters."""

    def _work(session: Session) -> RecomputeResult:
        constituency = get_by_id(session, constituency_id)
        changed = apply_derived_scores(constituency)
        if changed:
            logger.warning(
                "Derived scores of %s were out of step with raw counters and have been repaired",
                constituency.area_name,
            )
        return RecomputeResult(
            area_name=constituency.area_name,
            manifesto_score=constituency.manifesto_score,
            department_average_scores={d.id: d.average_score for d in constituency.dept_info},
            changed=changed,
        )

    return run_in_transaction(db, _work, action="recompute constituency scores")


def _fill_constituency(constituency: Constituency, payload: ConstituencyIn, *, fresh_ids: bool) -> None:
    info = payload.vidhayak_info
    constituency.area_name = payload.area_name
    constituency.name = info.name
    constituency.image_url = info.image_url
    constituency.age = info.age
    constituency.last_election_vote_percentage = info.last_election_vote_percentage
    constituency.experience = info.experience
    constituency.party_name = info.party_name
    constituency.party_icon_url = info.party_icon_url
    constituency.manifesto_link = info.manifesto_link
    constituency.manifesto_score = info.manifesto_score
    constituency.metadata_ = info.metadata.model_dump()

    constituency.survey_score = [
        VidhayakSurveyQuestion(
            position=position,
            question=question.question,
            yes_votes=question.yes_votes,
            no_votes=question.no_votes,
            score=question.score,
        )
        for position, question in enumerate(info.survey_score)
    ]
    constituency.dept_info = [
        Department(
            id=str(uuid.uuid4()) if fresh_ids or not dept.id else dept.id,
            position=position,
            dept_name=dept.dept_name,
            work_info=list(dept.work_info),
            average_score=dept.average_score,
            survey_score=[
                DepartmentSurveyQuestion(
                    position=q_position,
                    question=question.question,
                    ratings=question.ratings,
                    score=question.score,
                )
                for q_position, question in enumerate(dept.survey_score)
            ],
        )
        for position, dept in enumerate(payload.dept_info)
    ]
    constituency.other_candidates = [
        OtherCandidate(
            position=position,
            id=str(uuid.uuid4()) if fresh_ids or candidate.id is None else str(candidate.id),
            candidate_name=candidate.candidate_name,
            candidate_image_url=candidate.candidate_image_url,
            candidate_party=candidate.candidate_party,
            vote_share=candidate.vote_share,
        )
        for position, candidate in enumerate(payload.other_candidates)
    ]
    constituency.latest_news = [
        LatestNews(position=position, title=news.title)
        for position, news in enumerate(payload.latest_news)
    ]
    apply_derived_scores(constituency)


def _ensure_area_name_free(db: Session, area_name: str, *, exclude_id: int | None = None) -> None:
    stmt = select(Constituency.id).where(Constituency.area_name == area_name)
    if exclude_id is not None:
        stmt = stmt.where(Constituency.id != exclude_id)
    if db.execute(stmt).first() is not None:
        raise ConflictError(f"Constituency with area name '{area_name}' already exists")


def create_constituency(db: Session, payload: ConstituencyIn) -> Constituency:
    """Insert a new constituency, generating department ids where missing."""

    def _work(session: Session) -> Constituency:
        _ensure_area_name_free(session, payload.area_name)
        constituency = Constituency()
        _fill_constituency(constituency, payload, fresh_ids=False)
        session.add(constituency)
        session.flush()
        return constituency

    try:
        constituency = run_in_transaction(db, _work, action="add constituency")
    except IntegrityError as exc:
        raise ConflictError(
            f"Constituency with area name '{payload.area_name}' already exists"
        ) from exc
    logger.info("Added constituency %s", constituency.area_name)
    return constituency


def update_constituency(db: Session, constituency_id: int, payload: ConstituencyIn) -> Constituency:
    """Replace the content of an existing constituency."""

    def _work(session: Session) -> Constituency:
        constituency = get_by_id(session, constituency_id)
        _ensure_area_name_free(session, payload.area_name, exclude_id=constituency_id)
        # Drop the old child rows first so positions and department ids can be reused.
        constituency.survey_score = []
        constituency.dept_info = []
        constituency.other_candidates = []
        constituency.latest_news = []
        session.flush()
        _fill_constituency(constituency, payload, fresh_ids=False)
        session.flush()
        return constituency

    try:
        constituency = run_in_transaction(db, _work, action="update constituency")
    except IntegrityError as exc:
        raise ConflictError(
            f"Constituency with area name '{payload.area_name}' already exists"
        ) from exc
    logger.info("Updated constituency %s", constituency.area_name)
    return constituency


def delete_constituency(db: Session, constituency_id: int) -> str:
    """Hard-delete a constituency; returns its area name.

    Posts and comments are not cascaded; a constituency still referenced by
    posts is reported as a conflict.
    """

    def _work(session: Session) -> str:
        constituency = get_by_id(session, constituency_id)
        referenced = session.execute(
            select(Post.id).where(Post.constituency_id == constituency_id).limit(1)
        ).first()
        if referenced is not None:
            raise ConflictError("Constituency is still referenced by posts")
        area_name = constituency.area_name
        session.delete(constituency)
        session.flush()
        return area_name

    area_name = run_in_transaction(db, _work, action="delete constituency")
    logger.info("Deleted constituency %s", area_name)
    return area_name


def reset_and_populate(db: Session, payloads: list[ConstituencyIn]) -> tuple[int, list[Constituency]]:
    """Replace every constituency with ``payloads`` in one transaction.

    Department and candidate ids are always regenerated.

    Returns:
        The number of deleted constituencies and the inserted rows.
    """
    if not payloads:
        raise InvalidInputError("At least one constituency is required")
    names = [payload.area_name for payload in payloads]
    if len(names) != len(set(names)):
        raise InvalidInputError("Area names must be unique")

    def _work(session: Session) -> tuple[int, list[Constituency]]:
        if session.execute(select(Post.id).limit(1)).first() is not None:
            raise ConflictError("Constituencies are still referenced by posts")
        existing = list(session.execute(select(Constituency)).scalars())
        for constituency in existing:
            session.delete(constituency)
        session.flush()
        inserted = []
        for payload in payloads:
            constituency = Constituency()
            _fill_constituency(constituency, payload, fresh_ids=True)
            session.add(constituency)
            inserted.append(constituency)
        session.flush()
        return len(existing), inserted

    deleted, inserted = run_in_transaction(db, _work, action="reset and populate constituencies")
    logger.info("Replaced %d constituencies with %d new ones", deleted, len(inserted))
    return deleted, inserted


def to_summary(constituency: Constituency) -> ConstituencySummary:
    """Convert a constituency to the short admin confirmation."""
    return ConstituencySummary(
        id=constituency.id,
        area_name=constituency.area_name,
        dept_count=len(constituency.dept_info),
        other_candidates_count=len(constituency.other_candidates),
        latest_news_count=len(constituency.latest_news),
    )


def to_constituency_response(constituency: Constituency) -> ConstituencyResponse:
    """Convert a Constituency ORM instance to an API schema."""
    return ConstituencyResponse(
        id=constituency.id,
        area_name=constituency.area_name,
        vidhayak_info=VidhayakInfoOut(
            name=constituency.name,
            image_url=constituency.image_url,
            age=constituency.age,
            last_election_vote_percentage=constituency.last_election_vote_percentage,
            experience=constituency.experience,
            party_name=constituency.party_name,
            party_icon_url=constituency.party_icon_url,
            manifesto_link=constituency.manifesto_link,
            manifesto_score=constituency.manifesto_score,
            metadata=dict(constituency.metadata_ or {}),
            survey_score=[SurveyQuestionOut.model_validate(q) for q in constituency.survey_score],
        ),
        dept_info=[
            DeptInfoOut(
                id=dept.id,
                dept_name=dept.dept_name,
                work_info=list(dept.work_info or []),
                survey_score=[DeptSurveyQuestionOut.model_validate(q) for q in dept.survey_score],
                average_score=dept.average_score,
            )
            for dept in constituency.dept_info
        ],
        other_candidates=[OtherCandidateOut.model_validate(c) for c in constituency.other_candidates],
        latest_news=[LatestNewsOut.model_validate(n) for n in constituency.latest_news],
        created_at=constituency.created_at,
        updated_at=constituency.updated_at,
    )
