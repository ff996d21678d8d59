"""Search use case: cross-collection query orchestration over the in-memory indexes.

Query-time failures are logged and degrade to empty results; callers never
see an exception from a search.
"""

from __future__ import annotations

import logging
import math
from operator import attrgetter

from unirecords.application.dtos.search import (
    DocumentFilters,
    IndexBuildReport,
    IndexStatus,
    PopularTerm,
    QueryOptions,
    SearchResult,
)
from unirecords.application.search.filters import apply_filters
from unirecords.application.search.index_manager import IndexManager
from unirecords.core.constants import POPULAR_SEARCH_TERMS, SUGGESTION_CANDIDATE_LIMIT
from unirecords.domain.enums import EntityType
from unirecords.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)


class SearchService:
    """Global, per-type and advanced document search across documents, students, staff and users."""

    def __init__(self, index_manager: IndexManager, suggestion_limit: int = 5) -> None:
        self.index_manager = index_manager
        self.suggestion_limit = suggestion_limit

    @traced("search.global_search")
    def global_search(
        self, query: str, options: QueryOptions | None = None
    ) -> list[SearchResult]:
        """Search the selected types and merge into one list ranked by score.

        Each type contributes at most ceil(limit / len(types)) candidates;
        the merged list is re-sorted by score (not grouped by type) and cut
        to limit. A type with many strong matches can therefore crowd out
        the others, and fewer than limit results may come back even when
        some type has more matches beyond its share.
        """
        options = options or QueryOptions()
        add_span_attributes(
            types=",".join(t.value for t in options.types), limit=options.limit
        )
        try:
            per_type = math.ceil(options.limit / len(options.types))
            results: list[SearchResult] = []
            for entity_type in options.types:
                results.extend(
                    self.index_manager.search_type(entity_type, query, per_type)
                )
            results.sort(key=attrgetter("score"))
            return results[: options.limit]
        except Exception:
            logger.exception("Error performing global search")
            return []

    def get_search_suggestions(self, query: str, entity_type: EntityType) -> list[str]:
        """Words from matched values that contain the query and are longer than it.

        Deduplicated case-insensitively (first spelling wins), at most
        suggestion_limit.
        """
        needle = query.strip().lower()
        if not needle:
            return []
        try:
            results = self.global_search(
                query,
                QueryOptions(types=(entity_type,), limit=SUGGESTION_CANDIDATE_LIMIT),
            )
            suggestions: dict[str, str] = {}
            for result in results:
                for match in result.matches:
                    for word in match.value.split():
                        lowered = word.lower()
                        if needle not in lowered or len(word) <= len(needle):
                            continue
                        suggestions.setdefault(lowered, word)
                        if len(suggestions) >= self.suggestion_limit:
                            return list(suggestions.values())
            return list(suggestions.values())
        except Exception:
            logger.exception("Error getting search suggestions")
            return []

    def get_popular_search_terms(self) -> list[PopularTerm]:
        """Static placeholder list; not derived from query logs."""
        return [PopularTerm(term=term, count=count) for term, count in POPULAR_SEARCH_TERMS]

    @traced("search.search_documents")
    async def search_documents(
        self, query: str, filters: DocumentFilters | None = None
    ) -> list[SearchResult]:
        """Document search with structured filters applied after ranking.

        Builds the document index first if it was never built. The limit
        caps candidates before filtering, so fewer than limit may survive.
        """
        filters = filters or DocumentFilters()
        try:
            if not await self.index_manager.ensure_index(EntityType.DOCUMENT):
                return []
            results = self.index_manager.search_type(
                EntityType.DOCUMENT, query, filters.limit
            )
            return apply_filters(results, filters)
        except Exception:
            logger.exception("Error searching documents")
            return []

    async def refresh_indexes(self) -> list[IndexBuildReport]:
        """Rebuild all indexes from the record store (on demand)."""
        return await self.index_manager.refresh_indexes()

    def index_status(self) -> list[IndexStatus]:
        return self.index_manager.status()
