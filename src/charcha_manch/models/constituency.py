# src/charcha_manch/models/constituency.py
"""SQLAlchemy models for constituencies and their embedded survey records."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from charcha_manch.db.session import Base
from charcha_manch.db.time import utcnow

RATING_STARS = (1, 2, 3, 4, 5)


class Constituency(Base):
    """A constituency with its representative ("vidhayak") profile.

    The row is the unit of optimistic locking: every poll submission bumps
    ``version`` so that two concurrent aggregations cannot both commit a
    recomputation based on the same snapshot.
    """

    __tablename__ = "constituency"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    area_name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)

    # Representative profile.
    name: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    last_election_vote_percentage: Mapped[str] = mapped_column(String(16), nullable=False)
    experience: Mapped[int] = mapped_column(Integer, nullable=False)
    party_name: Mapped[str] = mapped_column(String(32), nullable=False)
    party_icon_url: Mapped[str] = mapped_column(Text, nullable=False)
    manifesto_link: Mapped[str] = mapped_column(Text, nullable=False)
    # Derived from department averages; never written by clients directly.
    manifesto_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # Stored in a column named "metadata"; the attribute avoids shadowing Base.metadata.
    metadata_: Mapped[dict[str, Any]] = mapped_column("metadata", JSON, nullable=False, default=dict)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    survey_score: Mapped[list[VidhayakSurveyQuestion]] = relationship(
        back_populates="constituency",
        cascade="all, delete-orphan",
        order_by="VidhayakSurveyQuestion.position",
    )
    dept_info: Mapped[list[Department]] = relationship(
        back_populates="constituency",
        cascade="all, delete-orphan",
        order_by="Department.position",
    )
    other_candidates: Mapped[list[OtherCandidate]] = relationship(
        cascade="all, delete-orphan",
        order_by="OtherCandidate.position",
    )
    latest_news: Mapped[list[LatestNews]] = relationship(
        cascade="all, delete-orphan",
        order_by="LatestNews.position",
    )

    __mapper_args__ = {"version_id_col": version}

    def find_department(self, department_id: str) -> Department | None:
        """Return the department with the given stable id, if any."""
        for department in self.dept_info:
            if department.id == department_id:
                return department
        return None


class VidhayakSurveyQuestion(Base):
    """Yes/no poll question about the representative."""

    __tablename__ = "vidhayak_survey_question"
    __table_args__ = (UniqueConstraint("constituency_id", "position"),)

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    constituency_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("constituency.id", ondelete="CASCADE"), nullable=False
    )
    # 0-based index addressed by poll submissions.
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    yes_votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    no_votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    constituency: Mapped[Constituency] = relationship(back_populates="survey_score")


class Department(Base):
    """Government department scored through 5-star surveys."""

    __tablename__ = "department"
    __table_args__ = (UniqueConstraint("constituency_id", "id"),)

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Stable client-facing identifier, unique within a constituency.
    id: Mapped[str] = mapped_column(String(64), nullable=False)
    constituency_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("constituency.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    dept_name: Mapped[str] = mapped_column(Text, nullable=False)
    work_info: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    average_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    constituency: Mapped[Constituency] = relationship(back_populates="dept_info")
    survey_score: Mapped[list[DepartmentSurveyQuestion]] = relationship(
        back_populates="department",
        cascade="all, delete-orphan",
        order_by="DepartmentSurveyQuestion.position",
    )


class DepartmentSurveyQuestion(Base):
    """5-star rating question; one counter column per star."""

    __tablename__ = "department_survey_question"
    __table_args__ = (UniqueConstraint("department_pk", "position"),)

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    department_pk: Mapped[int] = mapped_column(
        Integer, ForeignKey("department.pk", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    rating_1: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    rating_2: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    rating_3: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    rating_4: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    rating_5: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    department: Mapped[Department] = relationship(back_populates="survey_score")

    @property
    def ratings(self) -> dict[str, int]:
        """Return the star histogram keyed by star number as a string."""
        return {str(star): getattr(self, f"rating_{star}") or 0 for star in RATING_STARS}

    @ratings.setter
    def ratings(self, value: dict[str, int]) -> None:
        for star in RATING_STARS:
            setattr(self, f"rating_{star}", int(value.get(str(star), 0)))


class OtherCandidate(Base):
    """Rival candidate from the last election."""

    __tablename__ = "other_candidate"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    constituency_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("constituency.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    id: Mapped[str] = mapped_column(String(64), nullable=False)
    candidate_name: Mapped[str] = mapped_column(Text, nullable=False)
    candidate_image_url: Mapped[str] = mapped_column(Text, nullable=False)
    candidate_party: Mapped[str] = mapped_column(String(32), nullable=False)
    vote_share: Mapped[str] = mapped_column(String(16), nullable=False)


class LatestNews(Base):
    """Headline attached to a constituency."""

    __tablename__ = "latest_news"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    constituency_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("constituency.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
