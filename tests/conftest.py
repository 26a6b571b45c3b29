# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from forum_stage.core.security import create_access_token
from forum_stage.core.settings import settings
from forum_stage.db.session import Base, configure_sqlite_connections
from forum_stage.db.session import get_db as app_get_session
from forum_stage.main import app as fastapi_app
from forum_stage.models import Community, CommunityModerator, Post, Site, User

TEST_DB_URL = "sqlite://"
COMMUNITY_ID = 5


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    configure_sqlite_connections(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    # Repositories commit and roll back on their own, so the session runs
    # against the engine directly and every table is emptied afterwards.
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


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def disallowed_terms(monkeypatch: pytest.MonkeyPatch) -> str:
    """Swap the content filter for a predictable test pattern."""
    monkeypatch.setattr(settings, "slur_filter_regex", r"\bforbiddenword\b")
    return "forbiddenword"


def _add_user(session: Session, user_id: int, name: str, **flags: bool) -> User:
    user = User(id=user_id, name=name, **flags)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture()
def creator(db_session: Session) -> User:
    """Author of the baseline post and creator of the community."""
    return _add_user(db_session, 1, "alice")


@pytest.fixture()
def other_user(db_session: Session) -> User:
    """Ordinary user with no authority over anything."""
    return _add_user(db_session, 2, "bob")


@pytest.fixture()
def admin_user(db_session: Session) -> User:
    """Site admin."""
    return _add_user(db_session, 3, "carol", admin=True)


@pytest.fixture()
def moderator(db_session: Session, community: Community) -> User:
    """Moderator of the default community."""
    user = _add_user(db_session, 4, "dave")
    db_session.add(CommunityModerator(community_id=community.id, user_id=user.id))
    db_session.commit()
    return user


@pytest.fixture()
def banned_user(db_session: Session) -> User:
    """User banned from the whole site."""
    return _add_user(db_session, 6, "mallory", banned=True)


@pytest.fixture()
def community(db_session: Session, creator: User) -> Community:
    """Create the default test community."""
    community = Community(
        id=COMMUNITY_ID,
        name="main",
        title="The Main Community",
        description="Test community description",
        creator_id=creator.id,
    )
    db_session.add(community)
    db_session.commit()
    db_session.refresh(community)
    return community


@pytest.fixture()
def site(db_session: Session, admin_user: User) -> Site:
    """Site record created by the admin user."""
    record = Site(id=settings.site_id, name="Forum", creator_id=admin_user.id)
    db_session.add(record)
    db_session.commit()
    return record


@pytest.fixture()
def test_post(db_session: Session, creator: User, community: Community) -> Post:
    """Create a baseline post authored by ``creator``."""
    post = Post(
        name="Baseline post",
        url="https://example.com/",
        body="Test post content",
        creator_id=creator.id,
        community_id=community.id,
    )
    db_session.add(post)
    db_session.commit()
    db_session.refresh(post)
    return post


@pytest.fixture()
def token_for() -> Callable[[User], str]:
    """Return a helper minting an access token for a user."""

    def _token(user: User) -> str:
        return create_access_token(user.id, username=user.name, show_nsfw=user.show_nsfw)

    return _token
