"""
fontseca.dev Backend — Test Configuration (conftest.py)
========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every service is an `AsyncMock(spec=...)` of its interface and the page
       renderer a `MagicMock(spec=PageRenderer)`; a fresh app is created with
       them for each test and driven through HTTPX's ASGITransport.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── services: Services bundle of mocks
    ├── app: FastAPI app built with `services`
    ├── client: HTTPX AsyncClient for API endpoint testing
    └── now / sample_*: records returned by the mocked services
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Override settings for testing BEFORE any app imports
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["SERVER_MODE"] = "test"
os.environ["SERVICES_FACTORY"] = ""
os.environ["PROBLEM_BASE_URL"] = ""

from fontseca.exceptions import set_global_url  # noqa: E402
from fontseca.models.archive import Article, Tag, Topic  # noqa: E402
from fontseca.models.me import Me  # noqa: E402
from fontseca.services import Services  # noqa: E402
from fontseca.services.interfaces import (  # noqa: E402
    ArticlesService,
    DraftsService,
    ExperienceService,
    MeService,
    PageRenderer,
    PatchesService,
    ProjectsService,
    TagsService,
    TechnologiesService,
    TopicsService,
)


@pytest.fixture(autouse=True)
def reset_problem_base_url():
    """Problem type resolution is process-wide; keep tests independent."""
    set_global_url("")
    yield
    set_global_url("")


@pytest.fixture
def services():
    return Services(
        articles=AsyncMock(spec=ArticlesService),
        drafts=AsyncMock(spec=DraftsService),
        patches=AsyncMock(spec=PatchesService),
        projects=AsyncMock(spec=ProjectsService),
        experience=AsyncMock(spec=ExperienceService),
        me=AsyncMock(spec=MeService),
        tags=AsyncMock(spec=TagsService),
        topics=AsyncMock(spec=TopicsService),
        technologies=AsyncMock(spec=TechnologiesService),
        pages=MagicMock(spec=PageRenderer),
    )


@pytest.fixture
def app(services):
    from fontseca.main import create_app
    return create_app(services=services)


@pytest_asyncio.fixture
async def client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Unhandled exceptions are rendered by the app's own handlers instead of
    being re-raised into the test.
    """
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def now():
    return datetime(2024, 5, 17, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_article(now):
    return Article(
        id=uuid4(),
        title="Writing a problem details library",
        slug="writing-a-problem-details-library",
        content="...",
        drafted_at=now,
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def sample_me(now):
    return Me(
        username="fontseca",
        first_name="Shelton",
        last_name="Fonseca",
        job_title="Software Engineer",
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def sample_topics():
    return [Topic(id="go", name="Go"), Topic(id="python", name="Python")]


@pytest.fixture
def sample_tags():
    return [Tag(id="http", name="HTTP")]
