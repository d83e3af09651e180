"""API test fixtures — FastAPI test client with fresh in-memory collaborators.

Invariants:
    - Every test gets empty repository, directory and editor registry
    - Collaborators swapped through app.dependency_overrides, never by patching modules
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.routes.editors import _editors
from app.core.form_state import KnowledgeBase
from app.infrastructure.memory_collaborators import (
    InMemoryFormRepository,
    InMemoryKnowledgeBaseDirectory,
    PlanQuota,
    get_form_quota,
    get_form_repository,
    get_knowledge_base_directory,
)
from app.main import app


@pytest.fixture
def repository():
    return InMemoryFormRepository()


@pytest.fixture
def directory():
    return InMemoryKnowledgeBaseDirectory([
        KnowledgeBase("kb_docs", "Product docs"),
        KnowledgeBase("kb_faq", "FAQ"),
    ])


@pytest.fixture
def quota(repository):
    return PlanQuota(repository, max_forms=2)


@pytest.fixture
async def client(repository, directory, quota):
    app.dependency_overrides[get_form_repository] = lambda: repository
    app.dependency_overrides[get_knowledge_base_directory] = lambda: directory
    app.dependency_overrides[get_form_quota] = lambda: quota

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    _editors.clear()


@pytest.fixture
async def editor_id(client):
    res = await client.post("/api/v1/editors")
    return res.json()["editor_id"]
