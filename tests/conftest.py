"""
Pytest configuration and fixtures for the book preview API.
"""
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from main import app
from book_preview.endpoints.translation import get_translation_cache, get_translation_service
from book_preview.services.translation_cache import TranslationCache
from book_preview.services.translation_service import TranslationService


async def _fake_translate_many(texts, source, target):
    return [f"[{target}] {text}" for text in texts]


@pytest.fixture
def translation_cache():
    """A fresh cache per test."""
    return TranslationCache(ttl_seconds=86400, max_size=100)


@pytest.fixture
def upstream():
    """Stand-in for TranslationClient that prefixes texts with the target tag."""
    client = AsyncMock()
    client.translate_many = AsyncMock(side_effect=_fake_translate_many)
    return client


@pytest.fixture
def translation_service(translation_cache, upstream):
    return TranslationService(cache=translation_cache, client=upstream)


@pytest.fixture
def client(translation_cache, translation_service):
    """Test client wired to the per-test cache and stubbed upstream."""
    app.dependency_overrides[get_translation_service] = lambda: translation_service
    app.dependency_overrides[get_translation_cache] = lambda: translation_cache
    yield TestClient(app)
    app.dependency_overrides.clear()
