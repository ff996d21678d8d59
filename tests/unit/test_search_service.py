"""SearchService tests: cross-type merge, suggestions, popular terms, document search."""

import logging
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from unirecords.application.dtos.search import DateRange, DocumentFilters, QueryOptions
from unirecords.application.search.index_manager import IndexManager
from unirecords.application.use_cases.search import SearchService
from unirecords.domain.enums import DocumentAccessLevel, EntityType


class TestGlobalSearch:
    def test_exact_name_outranks_partial_name(self, search_service: SearchService) -> None:
        """Student 'John Doe' ranks above staff 'Johnson Smith' for 'john'."""
        results = search_service.global_search(
            "john",
            QueryOptions(types=(EntityType.STUDENT, EntityType.STAFF), limit=10),
        )
        ids = [r.item.id for r in results]
        assert ids[0] == "stu-1"
        assert "stf-1" in ids
        assert {r.entity_type for r in results} <= {EntityType.STUDENT, EntityType.STAFF}

    def test_merged_results_sorted_across_types(
        self, search_service: SearchService, built_index_manager: IndexManager
    ) -> None:
        """Output is the score-sorted merge of each type's top ceil(limit/types) hits."""
        options = QueryOptions(types=(EntityType.USER, EntityType.STAFF), limit=3)
        results = search_service.global_search("smith", options)

        scores = [r.score for r in results]
        assert scores == sorted(scores)
        candidates = built_index_manager.search_type(
            EntityType.USER, "smith", 2
        ) + built_index_manager.search_type(EntityType.STAFF, "smith", 2)
        expected = sorted(candidates, key=lambda r: r.score)[:3]
        assert [r.item.id for r in results] == [r.item.id for r in expected]

    async def test_may_return_fewer_than_limit(
        self, make_source, make_user
    ) -> None:
        """Each type is capped at ceil(limit/types) before merging.

        Three users match but no student does; with limit 4 over two types
        the user share is 2, so only 2 results come back.
        """
        source = make_source(
            users=[
                make_user("u1", "john1", "John", "Adams"),
                make_user("u2", "john2", "John", "Brown"),
                make_user("u3", "john3", "John", "Clark"),
            ]
        )
        manager = IndexManager(source)
        await manager.initialize_indexes()
        service = SearchService(manager)

        results = service.global_search(
            "john", QueryOptions(types=(EntityType.USER, EntityType.STUDENT), limit=4)
        )
        assert len(manager.search_type(EntityType.USER, "john")) == 3
        assert len(results) == 2

    def test_default_options_search_every_type(self, search_service: SearchService) -> None:
        results = search_service.global_search("john")
        assert {r.entity_type for r in results} >= {
            EntityType.STUDENT,
            EntityType.STAFF,
            EntityType.USER,
        }

    def test_unbuilt_index_yields_empty(self, index_manager: IndexManager) -> None:
        assert SearchService(index_manager).global_search("john") == []

    def test_failure_is_logged_and_empty(self, caplog: pytest.LogCaptureFixture) -> None:
        manager = MagicMock()
        manager.search_type.side_effect = RuntimeError("scoring blew up")
        service = SearchService(manager)

        with caplog.at_level(logging.ERROR):
            assert service.global_search("john") == []
        assert "Error performing global search" in caplog.text


class TestSuggestions:
    def test_words_containing_query(self, search_service: SearchService) -> None:
        suggestions = search_service.get_search_suggestions("doc", EntityType.DOCUMENT)
        assert suggestions[0] == "Document"
        assert len(suggestions) <= 5
        for word in suggestions:
            assert "doc" in word.lower()
            assert len(word) > 3
        lowered = [w.lower() for w in suggestions]
        assert len(lowered) == len(set(lowered))

    async def test_case_insensitive_dedupe_and_cap(
        self, make_source, make_document
    ) -> None:
        source = make_source(
            documents=[
                make_document(
                    "doc-1",
                    "Research research RESEARCH",
                    description=(
                        "Researcher researcher RESEARCHERS researchers "
                        "researching researched researchable researcher-led"
                    ),
                )
            ]
        )
        manager = IndexManager(source)
        await manager.initialize_indexes()
        service = SearchService(manager, suggestion_limit=5)

        suggestions = service.get_search_suggestions("research", EntityType.DOCUMENT)
        assert suggestions == [
            "Researcher",
            "RESEARCHERS",
            "researching",
            "researched",
            "researchable",
        ]

    def test_blank_query(self, search_service: SearchService) -> None:
        assert search_service.get_search_suggestions("  ", EntityType.DOCUMENT) == []

    def test_failure_is_empty(self) -> None:
        manager = MagicMock()
        manager.search_type.side_effect = RuntimeError("boom")
        service = SearchService(manager)
        assert service.get_search_suggestions("doc", EntityType.DOCUMENT) == []


def test_popular_terms_are_static(search_service: SearchService) -> None:
    terms = search_service.get_popular_search_terms()
    assert [(t.term, t.count) for t in terms] == [
        ("transcript", 150),
        ("certificate", 120),
        ("assignment", 100),
        ("thesis", 80),
        ("report", 75),
    ]


class TestSearchDocuments:
    async def test_builds_document_index_lazily(
        self, index_manager: IndexManager, record_source
    ) -> None:
        service = SearchService(index_manager)
        results = await service.search_documents("thesis")
        assert results[0].item.id == "doc-thesis"
        assert record_source.load_counts[EntityType.DOCUMENT] == 1
        assert record_source.load_counts[EntityType.USER] == 0

    async def test_filters_applied(self, search_service: SearchService) -> None:
        filters = DocumentFilters(access_level=(DocumentAccessLevel.CONFIDENTIAL,))
        results = await search_service.search_documents("report", filters)
        assert [r.item.id for r in results] == ["doc-budget"]

    async def test_date_range_excluding_everything(
        self, search_service: SearchService
    ) -> None:
        filters = DocumentFilters(
            date_range=DateRange(
                start=datetime(2030, 1, 1, tzinfo=UTC),
                end=datetime(2030, 12, 31, tzinfo=UTC),
            )
        )
        assert await search_service.search_documents("thesis", filters) == []

    async def test_unavailable_store_is_empty(
        self, index_manager: IndexManager, record_source
    ) -> None:
        record_source.failing.add(EntityType.DOCUMENT)
        service = SearchService(index_manager)
        assert await service.search_documents("thesis") == []


async def test_refresh_and_status_delegate() -> None:
    manager = MagicMock()
    manager.refresh_indexes = AsyncMock(return_value=["report"])
    manager.status.return_value = ["status"]
    service = SearchService(manager)

    assert await service.refresh_indexes() == ["report"]
    assert service.index_status() == ["status"]
    manager.refresh_indexes.assert_awaited_once()
