# src/charcha_manch/api/v1/endpoints/constituencies.py
"""Constituency, poll and admin endpoints for the Charcha Manch API."""

from fastapi import APIRouter, Query, status

from charcha_manch.api.v1.dependencies import AdminDep, SessionDep
from charcha_manch.core.settings import settings
from charcha_manch.schemas.common import MessageResponse
from charcha_manch.schemas.constituency import (
    AreaNameResponse,
    ConstituencyIn,
    ConstituencyPage,
    ConstituencyResponse,
    ConstituencyStats,
    ConstituencySummary,
    PollResult,
    PollSubmission,
    RecomputeResult,
    ResetPopulateSummary,
)
from charcha_manch.services import constituencies as constituency_service
from charcha_manch.services.polls import submit_poll

router = APIRouter(prefix="/constituencies", tags=["constituencies"])


@router.get("/", response_model=list[AreaNameResponse])
def list_area_names(db: SessionDep) -> list[AreaNameResponse]:
    """List every area name, alphabetically, for dropdowns."""
    return [AreaNameResponse(area_name=name) for name in constituency_service.list_area_names(db)]


@router.get("/list/paginated", response_model=ConstituencyPage)
def list_constituencies(
    db: SessionDep,
    page: int = Query(1, description="1-based page number"),
    limit: int = Query(settings.constituency_page_size, description="Constituencies per page"),
) -> ConstituencyPage:
    """Return one alphabetical page of full constituency documents."""
    return constituency_service.list_page(db, page, limit)


@router.get("/stats/overview", response_model=ConstituencyStats)
def constituency_stats(db: SessionDep) -> ConstituencyStats:
    """Return aggregate constituency figures."""
    return constituency_service.stats_overview(db)


@router.get("/id/{constituency_id}", response_model=ConstituencyResponse)
def get_constituency_by_id(constituency_id: int, db: SessionDep) -> ConstituencyResponse:
    """Get a constituency by its numeric id."""
    constituency = constituency_service.get_by_id(db, constituency_id)
    return constituency_service.to_constituency_response(constituency)


@router.get("/{area_name}", response_model=ConstituencyResponse)
def get_constituency(area_name: str, db: SessionDep) -> ConstituencyResponse:
    """Get a constituency by its area name."""
    constituency = constituency_service.get_by_area_name(db, area_name)
    return constituency_service.to_constituency_response(constituency)


@router.post("/poll/{area_name}", response_model=PollResult)
def submit_poll_response(area_name: str, submission: PollSubmission, db: SessionDep) -> PollResult:
    """Record a representative or department poll response."""
    return submit_poll(db, area_name, submission)


@router.post(
    "/admin/constituencies/add",
    response_model=ConstituencySummary,
    status_code=status.HTTP_201_CREATED,
)
def add_constituency(payload: ConstituencyIn, db: SessionDep, admin: AdminDep) -> ConstituencySummary:
    """Add a constituency; department ids are generated where missing."""
    constituency = constituency_service.create_constituency(db, payload)
    return constituency_service.to_summary(constituency)


@router.put("/admin/constituencies/update/{constituency_id}", response_model=ConstituencySummary)
def update_constituency(
    constituency_id: int,
    payload: ConstituencyIn,
    db: SessionDep,
    admin: AdminDep,
) -> ConstituencySummary:
    """Replace the content of a constituency."""
    constituency = constituency_service.update_constituency(db, constituency_id, payload)
    return constituency_service.to_summary(constituency)


@router.delete("/admin/constituencies/delete/{constituency_id}", response_model=MessageResponse)
def delete_constituency(constituency_id: int, db: SessionDep, admin: AdminDep) -> MessageResponse:
    """Delete a constituency that no post refers to."""
    area_name = constituency_service.delete_constituency(db, constituency_id)
    return MessageResponse(message=f"Constituency '{area_name}' deleted successfully")


@router.post("/admin/constituencies/reset-populate", response_model=ResetPopulateSummary)
def reset_populate(payloads: list[ConstituencyIn], db: SessionDep, admin: AdminDep) -> ResetPopulateSummary:
    """Replace every constituency with the submitted documents."""
    deleted, inserted = constituency_service.reset_and_populate(db, payloads)
    return ResetPopulateSummary(
        message="Constituencies reset and populated successfully",
        total_constituencies=len(inserted),
        deleted_constituencies=deleted,
        inserted_constituencies=len(inserted),
        constituencies=[constituency_service.to_summary(c) for c in inserted],
    )


@router.post("/admin/constituencies/{constituency_id}/recompute", response_model=RecomputeResult)
def recompute_scores(constituency_id: int, db: SessionDep, admin: AdminDep) -> RecomputeResult:
    """Rederive every stored score of a constituency from its raw counters."""
    return constituency_service.recompute_scores(db, constituency_id)
