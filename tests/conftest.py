import os

# Settings are read at import time
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("DEBUG", "false")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import campusconnect.models  # noqa: F401
from campusconnect.core.security import create_access_token, get_password_hash
from campusconnect.database import Base, get_db
from campusconnect.main import app
from campusconnect.models import Equipment, Organization, Service


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
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
def make_org(db):
    counter = {"n": 0}

    async def _make_org(name=None, password="password123"):
        counter["n"] += 1
        n = counter["n"]
        org = Organization(
            name=name or f"Org {n}",
            username=f"org{n}",
            password=get_password_hash(password),
            description=f"Organization number {n}",
        )
        db.add(org)
        await db.commit()
        await db.refresh(org)
        return org

    return _make_org


@pytest.fixture
def make_service(db):
    async def _make_service(owner, **kwargs):
        values = {
            "title": "Photography",
            "description": "Event photography",
            "service_type": "Media",
            "pricing": "free",
            "availability": "Weekends",
            "status": "active",
        }
        values.update(kwargs)
        service = Service(organization_id=owner.id, **values)
        db.add(service)
        await db.commit()
        await db.refresh(service)
        return service

    return _make_service


@pytest.fixture
def make_equipment(db):
    async def _make_equipment(owner, **kwargs):
        values = {"name": "Projector", "description": "HD projector", "status": "available"}
        values.update(kwargs)
        equipment = Equipment(organization_id=owner.id, **values)
        db.add(equipment)
        await db.commit()
        await db.refresh(equipment)
        return equipment

    return _make_equipment


def auth_headers(org) -> dict:
    return {"Authorization": f"Bearer {create_access_token(org.id)}"}


@pytest.fixture
def headers():
    return auth_headers
