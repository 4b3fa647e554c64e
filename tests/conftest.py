"""
Shared fixtures for the content test suite.

Every test that touches the store gets its own in-memory SQLite
database; nothing is written to disk.
"""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from conduit.domain.content.entities import Article, Caller, Comment, Profile, User
from conduit.infrastructure.content.database import (
    build_engine,
    build_session_factory,
    init_db,
)
from conduit.infrastructure.content.password_hasher import BcryptPasswordHasher
from conduit.infrastructure.content.token_signer import JwtTokenSigner
from conduit.interfaces.content.dependencies import (
    get_password_hasher,
    get_session,
    get_token_signer,
)
from conduit.main import create_app
from conduit.shared.security.rate_limiting import limiter

FIXED_TIME = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


# ── Entity builders ──────────────────────────────────────────────────


def make_caller(user_id: int = 1, username: str = "alice") -> Caller:
    return Caller(id=user_id, username=username, token="token-for-%d" % user_id)


def make_user(user_id: int = 1, username: str = "alice", **overrides) -> User:
    fields = {
        "id": user_id,
        "username": username,
        "email": f"{username}@example.com",
        "password_hash": "hashed:secret",
        "bio": None,
        "image": None,
    }
    fields.update(overrides)
    return User(**fields)


def make_article(
    article_id: int = 10, author_id: int = 1, slug: str = "test-slug", **overrides
) -> Article:
    fields = {
        "id": article_id,
        "slug": slug,
        "title": "Test Title",
        "description": "Test Description",
        "body": "Test Body",
        "author_id": author_id,
        "author": Profile(username="alice"),
        "created_at": FIXED_TIME,
        "updated_at": FIXED_TIME,
        "tag_list": [],
    }
    fields.update(overrides)
    return Article(**fields)


def make_comment(
    comment_id: int = 100, article_id: int = 10, author_id: int = 1
) -> Comment:
    return Comment(
        id=comment_id,
        body="Nice read",
        article_id=article_id,
        author_id=author_id,
        author=Profile(username="alice"),
        created_at=FIXED_TIME,
        updated_at=FIXED_TIME,
    )


# ── Store fixtures ───────────────────────────────────────────────────


@pytest.fixture
def engine():
    """A fresh in-memory database with all content tables."""
    engine = build_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    session = build_session_factory(engine)()
    yield session
    session.close()


@pytest.fixture
def hasher() -> BcryptPasswordHasher:
    """Bcrypt at its minimum cost so tests stay fast."""
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def signer() -> JwtTokenSigner:
    return JwtTokenSigner(secret_key="test-secret", expire_minutes=5)


# ── API fixtures ─────────────────────────────────────────────────────


@pytest.fixture
def client(engine, hasher, signer):
    """TestClient wired to the in-memory store, with rate limits off."""
    app = create_app()
    factory = build_session_factory(engine)

    def override_session():
        session = factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_password_hasher] = lambda: hasher
    app.dependency_overrides[get_token_signer] = lambda: signer

    limiter.enabled = False
    try:
        yield TestClient(app)
    finally:
        limiter.enabled = True
