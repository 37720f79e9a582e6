"""
Pytest fixtures for testing.

Provides:
- Async database session (SQLite in memory)
- Test client with auth helpers
- Factory fixtures for users, companies, memberships, projects and tasks
- Tenancy store doubles
"""

import asyncio
from typing import AsyncGenerator
from uuid import UUID, uuid4

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from jose import jwt
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from tenantgate.main import app
from tenantgate.core.auth import CompanyRole, ResourceType, StoreUnavailableError
from tenantgate.core.config import settings
from tenantgate.core.interfaces.tenancy import TenancySnapshot
from tenantgate.implementations.tenancy import MemoryTenancyStore
from tenantgate.models import Base, User, Company, CompanyMember, Project, Task
from tenantgate.api.dependencies.database import get_db


# Test database URL (SQLite in-memory for speed)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Database session rolled back after each test."""
    session_factory = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture(scope="function")
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Test client with database session override.
    """

    async def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()


# ============ Factory Fixtures ============


class TenancyFactory:
    """Factory for creating users and the tenancy tree they act in."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _save(self, obj):
        self.db.add(obj)
        await self.db.commit()
        return obj

    async def user(self, name: str = "Test User", is_active: bool = True) -> User:
        return await self._save(User(
            email=f"{name.lower().replace(' ', '-')}-{uuid4().hex[:8]}@example.com",
            name=name,
            is_active=is_active,
        ))

    async def company(self, owner: User, name: str = "Acme") -> Company:
        return await self._save(Company(name=name, owner_id=owner.id))

    async def member(
        self,
        company: Company,
        user: User,
        role: CompanyRole = CompanyRole.VIEWER,
    ) -> CompanyMember:
        return await self._save(CompanyMember(
            company_id=company.id,
            user_id=user.id,
            role=role,
        ))

    async def project(self, company: Company, name: str = "Website") -> Project:
        return await self._save(Project(company_id=company.id, name=name))

    async def task(self, project: Project, title: str = "Draft copy") -> Task:
        return await self._save(Task(project_id=project.id, title=title))


@pytest_asyncio.fixture
async def factory(db: AsyncSession) -> TenancyFactory:
    """Fixture that provides TenancyFactory."""
    return TenancyFactory(db)


@pytest_asyncio.fixture
async def tenancy(factory: TenancyFactory) -> dict:
    """
    Company owned by Alice; Bob is EDITOR, Dave is VIEWER, Carol has nothing.
    One project with one task.
    """
    alice = await factory.user("Alice")
    bob = await factory.user("Bob")
    carol = await factory.user("Carol")
    dave = await factory.user("Dave")

    company = await factory.company(alice, name="C1")
    await factory.member(company, bob, CompanyRole.EDITOR)
    await factory.member(company, dave, CompanyRole.VIEWER)

    project = await factory.project(company)
    task = await factory.task(project)

    return {
        "alice": alice,
        "bob": bob,
        "carol": carol,
        "dave": dave,
        "company": company,
        "project": project,
        "task": task,
    }


# ============ Auth Helpers ============


def create_token(user_id: UUID | str) -> str:
    """Sign a bearer token the way the identity service would."""
    return jwt.encode(
        {"sub": str(user_id)},
        settings.auth.secret_key,
        algorithm=settings.auth.algorithm,
    )


@pytest.fixture
def auth_headers():
    """Auth headers for any user."""

    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_token(user.id)}"}

    return _headers


@pytest.fixture
def token_for():
    """Raw token for an arbitrary subject."""
    return create_token


# ============ Tenancy Store Doubles ============


class RecordingTenancyStore(MemoryTenancyStore):
    """Memory store that counts reads."""

    def __init__(self) -> None:
        super().__init__()
        self.snapshot_reads = 0
        self.chain_reads = 0

    async def read_tenancy_snapshot(self, user_id, company_id) -> TenancySnapshot:
        self.snapshot_reads += 1
        return await super().read_tenancy_snapshot(user_id, company_id)

    async def read_resource_chain(self, resource_type: ResourceType, resource_id):
        self.chain_reads += 1
        return await super().read_resource_chain(resource_type, resource_id)


class UnavailableTenancyStore:
    """Store whose backend is down."""

    async def read_tenancy_snapshot(self, user_id, company_id) -> TenancySnapshot:
        raise StoreUnavailableError("connection refused")

    async def read_resource_chain(self, resource_type, resource_id):
        raise StoreUnavailableError("connection refused")


class BrokenSession:
    """AsyncSession stand-in whose every statement fails at the driver."""

    async def execute(self, stmt):
        raise OperationalError(str(stmt), {}, Exception("server closed the connection"))


class TimedOutSession:
    """AsyncSession stand-in whose driver hits its statement timeout."""

    async def execute(self, stmt):
        raise asyncio.TimeoutError()


@pytest.fixture
def memory_store() -> RecordingTenancyStore:
    return RecordingTenancyStore()


@pytest.fixture
def unavailable_store() -> UnavailableTenancyStore:
    return UnavailableTenancyStore()


@pytest.fixture
def broken_session() -> BrokenSession:
    return BrokenSession()


@pytest.fixture
def timed_out_session() -> TimedOutSession:
    return TimedOutSession()
