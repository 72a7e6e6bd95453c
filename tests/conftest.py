"""
Pytest configuration and fixtures for testing.

Every test gets its own in-memory SQLite database through a fresh
:class:`SQLiteAdapter`; nothing is shared between tests.
"""

from datetime import date

import pytest
import pytest_asyncio

from tenantdb.adapters.database.sqlite import SQLiteAdapter
from tenantdb.models import MomentumBoard, MomentumProject, MomentumSprint
from tenantdb.repositories import CompanyMainRepository, UserMainRepository
from tenantdb.utils.config import get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; start and end each test clean."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def database():
    """Create an initialized in-memory database adapter."""
    adapter = SQLiteAdapter()
    await adapter.init()
    yield adapter
    await adapter.close()


@pytest_asyncio.fixture
async def company(database):
    """Create a test company."""
    return await CompanyMainRepository(database).create({"name": "Acme", "slug": "acme"})


@pytest_asyncio.fixture
async def user(database):
    """Create a test user."""
    return await UserMainRepository(database).create({
        "email": "ada@example.com",
        "username": "ada",
        "display_name": "Ada Lovelace",
    })


@pytest_asyncio.fixture
async def other_user(database):
    return await UserMainRepository(database).create({
        "email": "grace@example.com",
        "username": "grace",
        "display_name": "Grace Hopper",
    })


@pytest_asyncio.fixture
async def project(database, company):
    """Create a project directly; projects have no repository of their own."""
    instance = MomentumProject(company_id=company.id, name="Platform", key="PLAT", description="Core platform")
    async with database.session() as session:
        session.add(instance)
        await session.commit()
    return instance


@pytest_asyncio.fixture
async def board(database, project):
    instance = MomentumBoard(project_id=project.id, name="Delivery")
    async with database.session() as session:
        session.add(instance)
        await session.commit()
    return instance


@pytest_asyncio.fixture
async def sprint(database, project):
    instance = MomentumSprint(
        project_id=project.id,
        title="Sprint 1",
        goal="Ship the billing page",
        start_date=date(2024, 1, 8),
        end_date=date(2024, 1, 19),
    )
    async with database.session() as session:
        session.add(instance)
        await session.commit()
    return instance
