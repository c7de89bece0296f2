# tests/conftest.py
from __future__ import annotations

import copy
import os
from collections.abc import Callable, Generator, Iterator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("PYTEST_RUNNING", "true")

from charcha_manch.core.security import ADMIN_ROLE, create_access_token
from charcha_manch.core.settings import settings
from charcha_manch.db.session import Base, build_engine
from charcha_manch.db.session import get_db as app_get_session
from charcha_manch.main import app as fastapi_app
from charcha_manch.models import Constituency, Post, User
from charcha_manch.schemas.constituency import ConstituencyIn
from charcha_manch.services.constituencies import create_constituency

TEST_DB_URL = "sqlite://"

BASE_CONSTITUENCY: dict[str, Any] = {
    "area_name": "Test Area",
    "vidhayak_info": {
        "name": "Asha Verma",
        "image_url": "https://example.com/vidhayak.png",
        "age": 52,
        "last_election_vote_percentage": "48.5%",
        "experience": 12,
        "party_name": "BJP",
        "party_icon_url": "https://example.com/party.png",
        "manifesto_link": "https://example.com/manifesto.pdf",
        "manifesto_score": 0,
        "metadata": {
            "education": "Post Graduate",
            "net_worth": "2.5 Cr",
            "criminal_cases": 0,
            "attendance": "91%",
            "questions_asked": 34,
            "funds_utilisation": "78%",
        },
        "survey_score": [
            {"question": "Is the representative accessible?"},
            {"question": "Were promises kept?"},
        ],
    },
    "dept_info": [
        {
            "id": "health",
            "dept_name": "Health",
            "work_info": ["Primary health centres"],
            "survey_score": [{"question": "Are hospitals well staffed?"}],
        },
        {
            "id": "roads",
            "dept_name": "Roads",
            "work_info": ["Pothole repair", "Street lights"],
            "survey_score": [
                {"question": "Are roads in good repair?"},
                {"question": "Are street lights working?"},
            ],
        },
    ],
    "other_candidates": [
        {
            "candidate_name": "Ravi Kumar",
            "candidate_image_url": "https://example.com/ravi.png",
            "candidate_party": "Congress",
            "vote_share": "31.2%",
        }
    ],
    "latest_news": [{"title": "New bridge opened over the river"}],
}


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = build_engine(TEST_DB_URL, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    # Services commit their own transactions, so the session talks to the
    # engine directly and the tables are emptied afterwards.
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Ensure each test sees a clean database.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture(autouse=True)
def fast_retries(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep retry backoff from slowing the suite down."""
    monkeypatch.setattr(settings, "retry_backoff_seconds", 0.0)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def admin_headers() -> dict[str, str]:
    """Return authorization headers carrying an admin token."""
    token = create_access_token("admin", {"role": ADMIN_ROLE})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def constituency_payload() -> Callable[..., dict[str, Any]]:
    """Return a factory for valid constituency documents."""

    def _build(area_name: str = "Test Area") -> dict[str, Any]:
        payload = copy.deepcopy(BASE_CONSTITUENCY)
        payload["area_name"] = area_name
        return payload

    return _build


@pytest.fixture()
def constituency(db_session: Session, constituency_payload: Callable[..., dict[str, Any]]) -> Constituency:
    """Create a constituency with two departments and two yes/no questions."""
    return create_constituency(db_session, ConstituencyIn.model_validate(constituency_payload()))


def _make_user(db_session: Session, name: str, phone: str) -> User:
    user = User(name=name, phone_number=phone)
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture()
def test_user(db_session: Session) -> User:
    """Create and return a persisted citizen."""
    return _make_user(db_session, "Test User", "9000000001")


@pytest.fixture()
def other_user(db_session: Session) -> User:
    """Create and return a second persisted citizen."""
    return _make_user(db_session, "Other User", "9000000002")


@pytest.fixture()
def test_post(db_session: Session, test_user: User, constituency: Constituency) -> Post:
    """Create a baseline post in the test constituency."""
    post = Post(
        author_id=test_user.id,
        constituency_id=constituency.id,
        title="Water supply",
        content="Taps have been dry for a week",
    )
    db_session.add(post)
    db_session.commit()
    return post
