from datetime import date, time

import pytest
from fakeredis import FakeAsyncRedis
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.sql import select

from app.app import create_app
from app.core.identity import identity_provider
from app.db.base import Base
from app.db.session import getDB_session
from app.db.store import DataStore
from app.models import Movie, Showtime, Theater, User, UserRole
from app.redis import get_redis
from app.schemas.auth import CurrentUser
from app.services.showtime_service import get_showtime_details


@pytest.fixture
async def db_engine(tmp_path):
    """A throw-away SQLite database per test, so every test starts from empty tables."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'cinema_test.db'}",
        echo=False,
        future=True
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def db_session_factory(db_engine):
    """Factory to create independent sessions, one per simulated client."""
    return async_sessionmaker(
        bind=db_engine,
        expire_on_commit=False,
        autoflush=False
    )


@pytest.fixture
async def store(db_session_factory):
    async with db_session_factory() as session:
        yield DataStore(session)


@pytest.fixture
async def seeded_test_data(db_session_factory):
    """Seed a movie, a theater with one showtime at 50000, and an admin user."""
    async with db_session_factory() as session:
        movie = Movie(
            title="Test Movie",
            description="A test movie for testing",
            duration="2h 10m",
            rating="PG-13",
        )
        theater = Theater(
            name="Test Theater",
            address="Test Address",
            city="Test City",
        )
        session.add_all([movie, theater])
        await session.flush()

        showtime = Showtime(
            movie_id=movie.id,
            theater_id=theater.id,
            date=date(2026, 11, 1),
            time=time(19, 30),
            price=50000,
        )
        admin = User(
            id="admin-1",
            email="admin@example.com",
            full_name="Admin",
            role=UserRole.ADMIN,
        )
        session.add_all([showtime, admin])
        await session.commit()

        yield {
            "showtime_id": showtime.id,
            "theater_id": theater.id,
            "movie_id": movie.id,
            "admin_id": admin.id,
        }


@pytest.fixture
async def showtime(store, seeded_test_data):
    return await get_showtime_details(store, seeded_test_data["showtime_id"])


@pytest.fixture
def alice():
    return CurrentUser(id="user-alice", email="alice@example.com", full_name="Alice")


@pytest.fixture
def bob():
    return CurrentUser(id="user-bob", email="bob@example.com", full_name="Bob")


@pytest.fixture
def read_rows(db_session_factory):
    """Read a whole table through a fresh session, bypassing any session under test."""
    async def _read(model, *criteria):
        async with db_session_factory() as session:
            stmt = select(model)
            if criteria:
                stmt = stmt.where(*criteria)
            result = await session.execute(stmt)
            return list(result.scalars().all())
    return _read


@pytest.fixture
async def redis_client():
    redis = FakeAsyncRedis()
    yield redis
    await redis.aclose()


@pytest.fixture
async def client(db_session_factory, redis_client):
    app = create_app()

    async def override_db_session():
        async with db_session_factory() as session:
            yield session

    async def override_redis():
        yield redis_client

    app.dependency_overrides[getDB_session] = override_db_session
    app.dependency_overrides[get_redis] = override_redis

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client


@pytest.fixture
def auth_headers():
    def _headers(user_id: str, email: str = None, full_name: str = None) -> dict:
        token = identity_provider.issue_token(user_id, email=email, full_name=full_name)
        return {"Authorization": f"Bearer {token}"}
    return _headers
