"""
Shared fixtures: an isolated in-memory database per test and a FastAPI
test client wired to it.
"""
import asyncio
import os

# Keep the application engine off the working directory during tests
os.environ.setdefault("DB_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from readnlearn.core.db import Base
from readnlearn.models import SavedPhrase  # noqa: F401  (registers the table)
from readnlearn.services.phrase_store import SqlPhraseStore


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    yield factory
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def phrase_store(session_factory):
    return SqlPhraseStore(session_factory)


class FakePhraseStore:
    """In-memory store recording which lookups the resolver made."""

    def __init__(self, by_hash=None, by_source=None, error=None, delay=0.0):
        self.by_hash = by_hash or {}
        self.by_source = by_source or {}
        self.error = error
        self.delay = delay
        self.calls = []

    async def _load(self, table, key):
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return list(table.get(key, []))

    async def load_phrases_by_content_hash(self, content_hash):
        self.calls.append(("content_hash", content_hash))
        return await self._load(self.by_hash, content_hash)

    async def load_phrases_by_source_file(self, source_file):
        self.calls.append(("source_file", source_file))
        return await self._load(self.by_source, source_file)


@pytest.fixture
def fake_store_factory():
    return FakePhraseStore


@pytest.fixture
def client(session_factory):
    from readnlearn.core.dependencies import get_phrase_store
    from readnlearn.main import app

    app.dependency_overrides[get_phrase_store] = lambda: SqlPhraseStore(session_factory)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
