"""
FastAPI dependency providers for the phrase services.
Tests swap these out through ``app.dependency_overrides``.
"""

from fastapi import Depends

from readnlearn.config import ResolverSettings, get_settings
from readnlearn.services.phrase_resolver import PhraseResolver
from readnlearn.services.phrase_store import SqlPhraseStore


def get_phrase_store() -> SqlPhraseStore:
    """Phrase store bound to the application database."""
    return SqlPhraseStore()


def get_resolver_settings() -> ResolverSettings:
    return get_settings().resolver


def get_phrase_resolver(
    store: SqlPhraseStore = Depends(get_phrase_store),
    settings: ResolverSettings = Depends(get_resolver_settings),
) -> PhraseResolver:
    return PhraseResolver(store, settings)
