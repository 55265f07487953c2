"""
Pytest configuration and shared fixtures.
"""

from datetime import date
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session

from core.database import build_engine, create_db_and_tables, get_session
from main import app
from models.models import Project, ProjectStatus, TeamMember


@pytest.fixture
def engine():
    """In-memory SQLite shared by every connection of one test."""
    engine = build_engine("sqlite://", echo=False, poolclass=StaticPool)
    create_db_and_tables(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(session):
    def override_get_session():
        return session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_project(session):
    """Persist a project with sensible defaults."""
    counter = {"n": 0}

    def _make(title: Optional[str] = None, **fields) -> Project:
        counter["n"] += 1
        title = title or f"Project {counter['n']}"
        fields.setdefault("slug", f"project-{counter['n']}")
        fields.setdefault("category", "festival")
        status = fields.pop("status", ProjectStatus.ACTIVE)
        project = Project(title=title, status=ProjectStatus(status).value, **fields)
        session.add(project)
        session.commit()
        session.refresh(project)
        return project

    return _make


@pytest.fixture
def make_member(session):
    def _make(full_name: str, **fields) -> TeamMember:
        member = TeamMember(full_name=full_name, **fields)
        session.add(member)
        session.commit()
        session.refresh(member)
        return member

    return _make


@pytest.fixture
def snow_maiden() -> Project:
    """Unsaved project used by the filter tests."""
    return Project(
        title="Snow Maiden of the Year",
        slug="snow-maiden-of-the-year",
        category="festival",
        status=ProjectStatus.ANNUAL.value,
        short_description="Winter costume contest",
        full_description="Participants compete for the crown of the winter festival.",
        location="Town Hall, Tver",
        start_date=date(2025, 12, 1),
        end_date=date(2025, 12, 31),
        event_date=date(2025, 12, 20),
    )
