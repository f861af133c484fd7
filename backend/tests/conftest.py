import os

# Must be set before the app modules build their engine
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./board-test.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-with-enough-length-for-hs256")

from datetime import datetime, timedelta
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.database import Base, get_db
from app.core.security import create_access_token
from app.main import app
from app.models.board import Board, Category, Comment


@pytest.fixture
async def session_maker(tmp_path) -> AsyncGenerator[async_sessionmaker, None]:
    """Fresh SQLite database per test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'board.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture
async def client(session_maker) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the app, wired to the test database."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Build bearer headers for a user ID."""

    def _headers(user_id: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return _headers


@pytest.fixture
async def seeded(session_maker) -> dict[str, int]:
    """
    Categories, six boards with distinct update times, and comments.

    Returns board IDs by title.
    """
    base = datetime(2024, 1, 1, 12, 0, 0)
    rows = [
        # title, author, category, minutes after base
        ("Hello world", "alice", 1, 0),
        ("Python tips", "bob", 3, 10),
        ("Category three news", "carol", 3, 20),
        ("Another three", "alice", 3, 30),
        ("Misc", "bobby", 2, 40),
        ("Third in three", "dave", 3, 50),
    ]

    async with session_maker() as session:
        session.add_all(
            [
                Category(category_code=1, category_name="공지"),
                Category(category_code=2, category_name="자유"),
                Category(category_code=3, category_name="질문"),
            ]
        )
        boards = {}
        for title, author, code, minutes in rows:
            ts = base + timedelta(minutes=minutes)
            board = Board(
                title=title,
                contents=f"{title} contents",
                category_code=code,
                user_id=author,
                created_dt=ts,
                updated_dt=ts,
                read_user={},
            )
            session.add(board)
            boards[title] = board
        await session.flush()

        ids = {title: board.board_id for title, board in boards.items()}
        session.add_all(
            [
                Comment(board_id=ids["Hello world"], user_id="bob", contents="hi"),
                Comment(board_id=ids["Hello world"], user_id="carol", contents="hey"),
                Comment(board_id=ids["Misc"], user_id="alice", contents="ok"),
            ]
        )
        await session.commit()

    return ids
