"""Index manager: owns one WeightedRecordIndex per entity type.

Builds pull a full snapshot of active records from the record source. A
new index is installed only after it is fully built; until then searches
keep using the previous one. Indexes are never updated per record, so a
record created, changed or deleted in the store stays invisible (or stale)
in search until the next rebuild of its type.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence

from unirecords.application.dtos.records import Record
from unirecords.application.dtos.search import (
    IndexBuildReport,
    IndexStatus,
    SearchResult,
)
from unirecords.application.interfaces.repositories import IRecordSource
from unirecords.application.search.field_config import (
    DEFAULT_FIELD_CONFIGS,
    FieldWeightConfig,
)
from unirecords.application.search.index import WeightedRecordIndex
from unirecords.application.search.matcher import FieldMatcher
from unirecords.domain.enums import EntityType
from unirecords.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)


class IndexManager:
    """Builds, replaces and queries the four per-type search indexes."""

    def __init__(
        self,
        source: IRecordSource,
        configs: Mapping[EntityType, FieldWeightConfig] = DEFAULT_FIELD_CONFIGS,
        matcher: FieldMatcher | None = None,
    ) -> None:
        missing = [t.value for t in EntityType if t not in configs]
        if missing:
            raise ValueError(f"No field config for entity types: {missing}")
        self.source = source
        self.configs = configs
        self.matcher = matcher
        self._loaders: dict[EntityType, Callable[[], Awaitable[Sequence[Record]]]] = {
            EntityType.DOCUMENT: source.list_active_documents,
            EntityType.STUDENT: source.list_active_students,
            EntityType.STAFF: source.list_active_staff,
            EntityType.USER: source.list_active_users,
        }
        self._indexes: dict[EntityType, WeightedRecordIndex] = {}

    async def initialize_indexes(self) -> list[IndexBuildReport]:
        """Build all four indexes concurrently. A failed type does not stop the others."""
        reports = await asyncio.gather(
            *(self.build_index(entity_type) for entity_type in EntityType)
        )
        failed = [r.entity_type.value for r in reports if not r.ok]
        if failed:
            logger.warning("Search indexes not rebuilt for: %s", ", ".join(failed))
        return list(reports)

    async def refresh_indexes(self) -> list[IndexBuildReport]:
        """Rebuild every index from a fresh snapshot (same as initialize)."""
        return await self.initialize_indexes()

    @traced("search.build_index")
    async def build_index(self, entity_type: EntityType) -> IndexBuildReport:
        """Load and build one type's index; on failure keep the previous index."""
        add_span_attributes(entity_type=entity_type.value)
        try:
            records = await self._loaders[entity_type]()
            index = WeightedRecordIndex(self.configs[entity_type], self.matcher)
            index.build(records)
        except Exception as e:
            logger.exception(
                "Error building %s search index; previous index kept", entity_type.value
            )
            return IndexBuildReport(entity_type=entity_type, ok=False, error=str(e))

        self._indexes[entity_type] = index
        logger.info(
            "Built %s search index with %d records", entity_type.value, index.size
        )
        return IndexBuildReport(
            entity_type=entity_type, ok=True, record_count=index.size
        )

    async def ensure_index(self, entity_type: EntityType) -> bool:
        """Build the type's index if it was never built. Returns whether one is available."""
        if entity_type in self._indexes:
            return True
        report = await self.build_index(entity_type)
        return report.ok

    def get_index(self, entity_type: EntityType) -> WeightedRecordIndex | None:
        return self._indexes.get(entity_type)

    def search_type(
        self, entity_type: EntityType, query: str, limit: int | None = None
    ) -> list[SearchResult]:
        """Search one type's index; [] if that index was never built."""
        index = self._indexes.get(entity_type)
        if index is None:
            return []
        return index.search(query, limit)

    def status(self) -> list[IndexStatus]:
        statuses = []
        for entity_type in EntityType:
            index = self._indexes.get(entity_type)
            statuses.append(
                IndexStatus(
                    entity_type=entity_type,
                    built=index is not None,
                    record_count=index.size if index else 0,
                    built_at=index.built_at if index else None,
                )
            )
        return statuses

    @property
    def is_ready(self) -> bool:
        return all(entity_type in self._indexes for entity_type in EntityType)
