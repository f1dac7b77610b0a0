"""
Integration tests for SQL phrase persistence
"""
import pytest
from sqlalchemy import event
from sqlalchemy.exc import OperationalError

from readnlearn.core.exceptions import (
    InvalidPhraseError,
    PhraseNotFoundError,
    PhraseStoreError,
)
from readnlearn.schemas.phrase import PhraseCreate
from readnlearn.services.phrase_resolver import PhraseResolver
from readnlearn.services.phrase_store import SEARCH_OVERFETCH, SqlPhraseStore

DOCUMENT = "Érase una vez un gato.\nEl gato dormía en la casa."


async def save(store, text, **kwargs):
    return await store.save_phrase(PhraseCreate(text=text, **kwargs))


@pytest.mark.asyncio
async def test_save_and_load_by_content_hash(phrase_store):
    """Test that a saved phrase is loaded back by content hash"""
    saved = await save(
        phrase_store, "un gato", lang="es", translation="a cat",
        tags=["animals"], content_hash="abc", line_no=1, col_offset=13,
    )
    assert saved.id
    assert saved.added_at is not None

    loaded = await phrase_store.load_phrases_by_content_hash("abc")
    assert [p.id for p in loaded] == [saved.id]
    assert loaded[0].tags == ["animals"]
    assert loaded[0].line_no == 1 and loaded[0].col_offset == 13


@pytest.mark.asyncio
async def test_loads_return_empty_when_nothing_matches(phrase_store):
    """Test that lookups with no match return empty lists"""
    await save(phrase_store, "gato", content_hash="abc", source_file="cuento.txt")
    assert await phrase_store.load_phrases_by_content_hash("zzz") == []
    assert await phrase_store.load_phrases_by_source_file("otro.txt") == []


@pytest.mark.asyncio
async def test_load_by_source_file_oldest_first(phrase_store):
    """Test that source file lookups return the oldest phrase first"""
    first = await save(phrase_store, "gato", source_file="cuento.txt")
    second = await save(phrase_store, "casa", source_file="cuento.txt")
    await save(phrase_store, "perro", source_file="otro.txt")

    loaded = await phrase_store.load_phrases_by_source_file("cuento.txt")
    assert [p.id for p in loaded] == [first.id, second.id]


@pytest.mark.asyncio
async def test_load_all_newest_first(phrase_store):
    """Test that listing every phrase returns the newest first"""
    first = await save(phrase_store, "gato")
    second = await save(phrase_store, "casa")
    assert [p.id for p in await phrase_store.load_all_phrases()] == [second.id, first.id]


@pytest.mark.asyncio
async def test_blank_text_is_rejected(phrase_store):
    """Test that saving blank phrase text is rejected"""
    with pytest.raises(InvalidPhraseError):
        await save(phrase_store, "   ")


@pytest.mark.asyncio
async def test_remove_phrase(phrase_store):
    """Test that a removed phrase is gone and removing it again fails"""
    saved = await save(phrase_store, "gato", content_hash="abc")
    await phrase_store.remove_phrase(saved.id)
    assert await phrase_store.load_phrases_by_content_hash("abc") == []

    with pytest.raises(PhraseNotFoundError):
        await phrase_store.remove_phrase(saved.id)


@pytest.mark.asyncio
async def test_search_ranks_matches(phrase_store):
    """Test that search ranks text, translation, context and tag hits"""
    tag_hit = await save(phrase_store, "perro", tags=["gatos"])
    context_hit = await save(phrase_store, "dormía", context="El gato dormía")
    translation_hit = await save(phrase_store, "michi", translation="gato (coloquial)")
    inner_hit = await save(phrase_store, "un gato")
    prefix_hit = await save(phrase_store, "Gato negro", lang="es")
    await save(phrase_store, "casa")

    results = await phrase_store.search_phrases("gato")
    assert [p.id for p in results] == [
        prefix_hit.id, inner_hit.id, translation_hit.id, context_hit.id, tag_hit.id,
    ]

    assert [p.id for p in await phrase_store.search_phrases("gato", limit=2)] == [
        prefix_hit.id, inner_hit.id,
    ]
    assert [p.id for p in await phrase_store.search_phrases("gato", lang="es")] == [prefix_hit.id]


@pytest.mark.asyncio
async def test_search_treats_wildcards_literally(phrase_store):
    """Test that SQL wildcards in a query match literally"""
    await save(phrase_store, "100% seguro")
    await save(phrase_store, "cien seguro")
    results = await phrase_store.search_phrases("100%")
    assert [p.text for p in results] == ["100% seguro"]
    assert await phrase_store.search_phrases("   ") == []


@pytest.mark.asyncio
async def test_database_errors_become_store_errors():
    """Test that SQLAlchemy errors surface as store errors"""
    def broken_factory():
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    store = SqlPhraseStore(broken_factory)
    with pytest.raises(PhraseStoreError) as exc_info:
        await store.load_phrases_by_content_hash("abc")
    assert exc_info.value.details["operation"] == "load_by_content_hash"


@pytest.mark.asyncio
async def test_resolver_over_sql_store(phrase_store):
    """Test that the resolver re-anchors phrases loaded from SQL after an edit"""
    from readnlearn.config import ResolverSettings
    from readnlearn.services.content_hasher import generate_content_hash

    content_hash = generate_content_hash(DOCUMENT)
    gato = await save(
        phrase_store, "gato", content_hash=content_hash,
        context="El gato dormía en la casa.", line_no=2, col_offset=3,
    )
    casa = await save(phrase_store, "la casa", content_hash=content_hash, line_no=2, col_offset=18)

    edited = "Prólogo.\n" + DOCUMENT
    resolver = PhraseResolver(phrase_store, ResolverSettings())
    resolved = await resolver.resolve_for_content(edited, content_hash=content_hash)

    assert [p.id for p in resolved] == [gato.id, casa.id]
    assert edited[resolved[0].position:resolved[0].position + 4] == "gato"
    assert resolved[0].position == edited.index("El gato") + 3


@pytest.mark.asyncio
async def test_search_reads_a_bounded_number_of_rows(phrase_store, session_factory):
    """Test that search asks the database for a multiple of the limit, not every match"""
    for index in range(12):
        await save(phrase_store, f"gato {index}")

    statements = []

    def record(conn, cursor, statement, parameters, context, executemany):
        statements.append((statement, parameters))

    engine = session_factory.kw["bind"]
    event.listen(engine, "before_cursor_execute", record)
    try:
        results = await phrase_store.search_phrases("gato", limit=2)
    finally:
        event.remove(engine, "before_cursor_execute", record)

    assert len(results) == 2
    selects = [(sql, params) for sql, params in statements if "LIKE" in sql]
    assert len(selects) == 1
    sql, params = selects[0]
    assert "LIMIT" in sql
    assert 2 * SEARCH_OVERFETCH in tuple(params)
