from types import SimpleNamespace

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.config import get_settings
from app.db.base import Base
from app.db.session import enable_sqlite_foreign_keys, get_db, get_session_factory
from app.main import app
from tests.factories import make_question


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def settings(monkeypatch):
    """Live settings object; tests flip flags with monkeypatch.setattr."""
    s = get_settings()
    monkeypatch.setattr(s, "history_per_level", 2)
    monkeypatch.setattr(s, "allow_refinish", False)
    monkeypatch.setattr(s, "verify_answers", False)
    monkeypatch.setattr(s, "incorrect_question_policy", "latest_per_question")
    return s


@pytest.fixture
async def bank(db):
    """Three beginner questions and one advanced; returned as a namespace by short name."""
    q1 = make_question("beginner", "Q1 prompt", ["a1", "b1", "c1"], 0)
    q2 = make_question("beginner", "Q2 prompt", ["a2", "b2", "c2"], 1)
    q3 = make_question("beginner", "Q3 prompt", ["a3", "b3", "c3"], 2)
    q4 = make_question("advanced", "Q4 prompt", ["a4", "b4"], 1)
    db.add_all([q1, q2, q3, q4])
    await db.commit()
    for q in (q1, q2, q3, q4):
        await db.refresh(q, attribute_names=["choices"])
    return SimpleNamespace(q1=q1, q2=q2, q3=q3, q4=q4)


@pytest.fixture
async def client(session_factory, settings):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()

