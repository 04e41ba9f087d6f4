import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("IP_HASH_SALT", "test-salt")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from insights.core.security import create_access_token
from insights.db.base import Base
from insights.models.registry import Category, User
from insights.services.access import ADMIN, READER, Claims
from insights.services.storage import LocalImageStorage


@pytest.fixture()
def engine():
    eng = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session(engine):
    Session = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    s = Session()
    try:
        yield s
    finally:
        s.close()


def _mk_user(session, email: str, role: str, name: str):
    u = User(email=email, password_hash="not-a-real-hash", name=name, role=role)
    session.add(u)
    session.commit()
    return u


@pytest.fixture()
def admin_user(session):
    return _mk_user(session, "admin@aiinsights.dev", ADMIN, "Admin User")


@pytest.fixture()
def reader_user(session):
    return _mk_user(session, "reader@example.com", READER, "Reader")


@pytest.fixture()
def admin(admin_user):
    return Claims(user_id=admin_user.id, email=admin_user.email, role=ADMIN)


@pytest.fixture()
def reader(reader_user):
    return Claims(user_id=reader_user.id, email=reader_user.email, role=READER)


@pytest.fixture()
def categories(session):
    rows = [
        Category(name="AI Tools", slug="ai-tools"),
        Category(name="Productivity", slug="productivity"),
        Category(name="Best Practices", slug="best-practices"),
    ]
    session.add_all(rows)
    session.commit()
    return {c.slug: c for c in rows}


@pytest.fixture()
def storage(tmp_path):
    return LocalImageStorage(tmp_path / "uploads", "/uploads")


@pytest.fixture()
def client(session, storage):
    from insights.api.deps import db, image_storage
    from insights.main import app

    app.dependency_overrides[db] = lambda: session
    app.dependency_overrides[image_storage] = lambda: storage
    try:
        with TestClient(app, raise_server_exceptions=False) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


def bearer(claims: Claims) -> dict:
    token = create_access_token(sub=str(claims.user_id), email=claims.email, role=claims.role)
    return {"Authorization": f"Bearer {token}"}


def post_payload(**overrides) -> dict:
    body = {
        "title": "Hello",
        "slug": "hello",
        "excerpt": "e",
        "content": "c",
        "readTime": "1 min",
        "categories": ["ai-tools"],
        "published": True,
    }
    body.update(overrides)
    return body
