"""Constituency and poll Pydantic schemas."""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import HTTP_URL_PATTERN, PERCENT_PATTERN, Pagination

PartyName = Literal[
    "BJP", "Congress", "AAP", "Shiv Sena", "NCP", "MNS",
    "Samajwadi Party", "BSP", "TMC", "DMK", "AIADMK", "RJD", "JDU",
]

STAR_KEYS = ("1", "2", "3", "4", "5")


def _empty_ratings() -> dict[str, int]:
    return {star: 0 for star in STAR_KEYS}


class SurveyQuestionIn(BaseModel):
    """Yes/no representative survey question."""

    question: str = Field(..., min_length=1)
    yes_votes: int = Field(0, ge=0)
    no_votes: int = Field(0, ge=0)
    score: int = Field(0, ge=0, le=100)


class DeptSurveyQuestionIn(BaseModel):
    """5-star department survey question."""

    question: str = Field(..., min_length=1)
    ratings: dict[str, int] = Field(default_factory=_empty_ratings)
    score: int = Field(0, ge=0, le=100)

    @field_validator("ratings")
    @classmethod
    def _check_ratings(cls, value: dict[str, int]) -> dict[str, int]:
        unknown = set(value) - set(STAR_KEYS)
        if unknown:
            raise ValueError(f"Ratings keys must be 1-5, got {sorted(unknown)}")
        if any(count < 0 for count in value.values()):
            raise ValueError("Rating counts must be non-negative")
        return {star: int(value.get(star, 0)) for star in STAR_KEYS}


class VidhayakMetadata(BaseModel):
    """Background facts about the representative."""

    education: str = Field(..., min_length=1)
    net_worth: str = Field(..., min_length=1)
    criminal_cases: int = Field(..., ge=0)
    attendance: str = Field(..., pattern=PERCENT_PATTERN)
    questions_asked: int = Field(..., ge=0)
    funds_utilisation: str = Field(..., pattern=PERCENT_PATTERN)


class VidhayakInfoIn(BaseModel):
    """Representative profile submitted by admins."""

    name: str = Field(..., min_length=1)
    image_url: str = Field(..., pattern=HTTP_URL_PATTERN)
    age: int = Field(..., ge=18, le=100)
    last_election_vote_percentage: str = Field(..., pattern=PERCENT_PATTERN)
    experience: int = Field(..., ge=0, le=50)
    party_name: PartyName
    party_icon_url: str = Field(..., pattern=HTTP_URL_PATTERN)
    manifesto_link: str = Field(..., pattern=HTTP_URL_PATTERN)
    manifesto_score: int = Field(0, ge=0, le=100)
    metadata: VidhayakMetadata
    survey_score: list[SurveyQuestionIn] = Field(..., min_length=1)


class DeptInfoIn(BaseModel):
    """Department record; ``id`` is generated when omitted."""

    id: str | None = None
    dept_name: str = Field(..., min_length=1)
    work_info: list[str] = Field(..., min_length=1)
    survey_score: list[DeptSurveyQuestionIn] = Field(..., min_length=1)
    average_score: int = Field(0, ge=0, le=100)


class OtherCandidateIn(BaseModel):
    """Rival candidate record."""

    id: str | int | None = None
    candidate_name: str = Field(..., min_length=1)
    candidate_image_url: str = Field(..., pattern=HTTP_URL_PATTERN)
    candidate_party: PartyName
    vote_share: str = Field(..., pattern=PERCENT_PATTERN)


class LatestNewsIn(BaseModel):
    """News headline."""

    title: str = Field(..., min_length=1)


class ConstituencyIn(BaseModel):
    """Full constituency document accepted by admin add/update/reset."""

    area_name: str = Field(..., min_length=1, max_length=100)
    vidhayak_info: VidhayakInfoIn
    dept_info: list[DeptInfoIn] = Field(..., min_length=1)
    other_candidates: list[OtherCandidateIn] = Field(..., min_length=1)
    latest_news: list[LatestNewsIn] = Field(..., min_length=1)

    @field_validator("area_name")
    @classmethod
    def _strip_area_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Area name is required")
        return value

    @field_validator("dept_info")
    @classmethod
    def _unique_department_ids(cls, value: list[DeptInfoIn]) -> list[DeptInfoIn]:
        ids = [dept.id for dept in value if dept.id]
        if len(ids) != len(set(ids)):
            raise ValueError("Department IDs must be unique within a constituency")
        return value


class SurveyQuestionOut(SurveyQuestionIn):
    """Yes/no survey question with its stored score."""

    model_config = ConfigDict(from_attributes=True)


class DeptSurveyQuestionOut(BaseModel):
    """Department survey question with its star histogram."""

    question: str
    ratings: dict[str, int]
    score: int

    model_config = ConfigDict(from_attributes=True)


class DeptInfoOut(BaseModel):
    """Department record as returned to clients."""

    id: str
    dept_name: str
    work_info: list[str]
    survey_score: list[DeptSurveyQuestionOut]
    average_score: int

    model_config = ConfigDict(from_attributes=True)


class VidhayakInfoOut(BaseModel):
    """Representative profile as returned to clients."""

    name: str
    image_url: str
    age: int
    last_election_vote_percentage: str
    experience: int
    party_name: str
    party_icon_url: str
    manifesto_link: str
    manifesto_score: int
    metadata: dict[str, object]
    survey_score: list[SurveyQuestionOut]


class OtherCandidateOut(BaseModel):
    """Rival candidate as returned to clients."""

    id: str
    candidate_name: str
    candidate_image_url: str
    candidate_party: str
    vote_share: str

    model_config = ConfigDict(from_attributes=True)


class LatestNewsOut(LatestNewsIn):
    """News headline as returned to clients."""

    model_config = ConfigDict(from_attributes=True)


class ConstituencyResponse(BaseModel):
    """Constituency document as returned to clients."""

    id: int
    area_name: str
    vidhayak_info: VidhayakInfoOut
    dept_info: list[DeptInfoOut]
    other_candidates: list[OtherCandidateOut]
    latest_news: list[LatestNewsOut]
    created_at: datetime
    updated_at: datetime


class AreaNameResponse(BaseModel):
    """Entry of the area-name dropdown list."""

    area_name: str


class ConstituencyPage(BaseModel):
    """One page of constituencies."""

    constituencies: list[ConstituencyResponse]
    pagination: Pagination


class ConstituencyStats(BaseModel):
    """Aggregate figures across all constituencies."""

    total_constituencies: int
    parties: list[str]
    total_departments: int


class ConstituencySummary(BaseModel):
    """Short confirmation returned after an admin write."""

    id: int
    area_name: str
    dept_count: int
    other_candidates_count: int
    latest_news_count: int


class ResetPopulateSummary(BaseModel):
    """Outcome of replacing every constituency."""

    message: str
    total_constituencies: int
    deleted_constituencies: int
    inserted_constituencies: int
    constituencies: list[ConstituencySummary]


class PollSubmission(BaseModel):
    """Poll response body.

    ``question_id`` is the 0-based index of the question; ``dept_id`` is
    required when ``poll_category`` is a department poll.
    """

    poll_category: str = Field(..., description="'vidhayak' or 'dept'/'department'")
    question_id: int | str = Field(..., description="0-based question index")
    poll_response: str | int = Field(..., description="'yes'/'no' or a 1-5 rating")
    dept_id: str | None = Field(None, description="Department id for department polls")


class VidhayakPollScores(BaseModel):
    """Counters and score after a representative poll."""

    yes_votes: int
    no_votes: int
    score: int


class DepartmentPollScores(BaseModel):
    """Recomputed values after a department poll."""

    ratings: dict[str, int]
    question_score: int
    department_average_score: int
    manifesto_score: int


class PollResult(BaseModel):
    """Confirmation of a recorded poll response."""

    message: str = "Poll response recorded successfully"
    constituency: str
    poll_category: str
    question_id: int
    poll_response: str | int
    updated_scores: VidhayakPollScores | DepartmentPollScores


class RecomputeResult(BaseModel):
    """Derived scores after a reconciliation pass."""

    area_name: str
    manifesto_score: int
    department_average_scores: dict[str, int]
    changed: bool
