"""Shared test fixtures.

- ``today``: fixed reference date for the pure tagging engine
- ``catalog``: default urgency tags plus one tag per organizational family
- ``session`` / ``client``: in-memory database behind the FastAPI app
- ``auth_headers``: bearer token for a freshly registered user
"""

from collections.abc import Generator
from datetime import date

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from taskwheel import models  # noqa: F401
from taskwheel.tagging import DateRange, TagRule, TimeCategoryRef, default_urgency_tags


# ─────────────────────────────────────────────────────────────────────────────
# Tagging Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def today() -> date:
    return date(2024, 5, 10)


@pytest.fixture
def work_tag() -> TagRule:
    return TagRule(id="t1", name="Work", keywords=["meeting"], category="general")


@pytest.fixture
def eisenhower_tags() -> list[TagRule]:
    return [
        TagRule(id="ui-urgent", name="Urgent", category="urgency-importance"),
        TagRule(id="ui-important", name="Important", category="urgency-importance"),
        TagRule(id="ui-both", name="Urgent & Important", category="urgency-importance"),
        TagRule(id="ui-neither", name="Someday", category="urgency-importance"),
    ]


@pytest.fixture
def effort_tags() -> list[TagRule]:
    return [
        TagRule(id="e-quick", name="Quick win", category="effort"),
        TagRule(id="e-easy", name="Easy", category="effort"),
        TagRule(id="e-medium", name="Moderate", category="effort"),
        TagRule(id="e-high", name="Complex", category="effort"),
    ]


@pytest.fixture
def time_tags() -> list[TagRule]:
    return [
        TagRule(id="tb-week", name="This Week", category="time-based"),
        TagRule(id="tb-month", name="Monthly", keywords=["month"], category="time-based"),
    ]


@pytest.fixture
def time_categories() -> list[TimeCategoryRef]:
    return [
        TimeCategoryRef(id="asap", name="ASAP"),
        TimeCategoryRef(id="this-week", name="This Week"),
        TimeCategoryRef(id="next-month", name="Next Month"),
        TimeCategoryRef(id="someday", name="Someday"),
    ]


@pytest.fixture
def catalog(work_tag, eisenhower_tags, effort_tags, time_tags) -> list[TagRule]:
    return default_urgency_tags() + [work_tag] + eisenhower_tags + effort_tags + time_tags


@pytest.fixture
def date_only_tag() -> TagRule:
    return TagRule(id="d1", name="This fortnight", date_range=DateRange(enabled=True, start_days=0, end_days=14))


# ─────────────────────────────────────────────────────────────────────────────
# Database / API Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine) -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    from fastapi.testclient import TestClient

    from taskwheel.db.session import get_session
    from taskwheel.main import app

    def get_test_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = get_test_session
    yield TestClient(app)
    app.dependency_overrides.clear()


def register_and_login(client, email: str = "user@example.com") -> dict:
    client.post(
        "/api/v1/auth/register",
        json={"email": email, "full_name": "Test User", "password": "secret-password"},
    )
    response = client.post("/api/v1/auth/login", json={"email": email, "password": "secret-password"})
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(client) -> dict:
    return register_and_login(client)
