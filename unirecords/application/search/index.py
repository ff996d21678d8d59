"""Weighted record index: fuzzy search over one entity type's snapshot.

The snapshot is immutable once built. build() constructs a complete new
snapshot and swaps a single reference, so a concurrent search sees either
the previous snapshot or the new one.
"""

from __future__ import annotations

import logging
import math
import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime
from operator import attrgetter
from types import MappingProxyType

from unirecords.application.dtos.records import Record
from unirecords.application.dtos.search import (
    FieldValue,
    IndexedRecord,
    SearchMatch,
    SearchResult,
)
from unirecords.application.search.field_config import FieldWeightConfig
from unirecords.application.search.matcher import (
    FieldMatcher,
    FuzzyFieldMatcher,
    MatchOptions,
)
from unirecords.domain.enums import EntityType
from unirecords.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

# Stand-in for a perfect field score so it still carries its weight in the product.
_EPSILON = sys.float_info.epsilon


@dataclass(frozen=True)
class _Snapshot:
    records: tuple[IndexedRecord, ...]
    built_at: datetime


class WeightedRecordIndex:
    """Single-entity-type index with weighted fuzzy field matching.

    Record score is the product over matched fields of
    ``max(field_score, EPSILON) ** (normalized_weight * field_norm)``:
    a weighted sum in log space where each matched field lowers the score
    independently and unmatched fields contribute nothing. field_norm is
    1/sqrt(word count) of the matched value, so a hit in a short field
    counts for more than the same hit buried in long text.
    """

    def __init__(
        self, config: FieldWeightConfig, matcher: FieldMatcher | None = None
    ) -> None:
        self.config = config
        self.matcher = matcher or FuzzyFieldMatcher()
        self._snapshot: _Snapshot | None = None

    @property
    def entity_type(self) -> EntityType:
        return self.config.entity_type

    @property
    def is_built(self) -> bool:
        return self._snapshot is not None

    @property
    def size(self) -> int:
        snapshot = self._snapshot
        return len(snapshot.records) if snapshot else 0

    @property
    def built_at(self) -> datetime | None:
        snapshot = self._snapshot
        return snapshot.built_at if snapshot else None

    def build(self, records: Iterable[Record]) -> None:
        """Snapshot records and replace any previous snapshot in one step."""
        indexed = tuple(self._index_record(record) for record in records)
        self._snapshot = _Snapshot(records=indexed, built_at=utc_now())
        logger.debug(
            "Built %s index with %d records", self.entity_type.value, len(indexed)
        )

    def _index_record(self, record: Record) -> IndexedRecord:
        extracted = self.config.extract(record)
        fields = {f.path: extracted.get(f.path) for f in self.config.fields}
        return IndexedRecord(
            id=record.id,
            entity_type=self.entity_type,
            fields=MappingProxyType(fields),
            item=record,
        )

    def search(self, query: str, limit: int | None = None) -> list[SearchResult]:
        """Return matching records, best (lowest score) first.

        Equal scores keep snapshot order. Returns [] when the index is not
        built or the query is shorter than min_match_char_length.
        """
        snapshot = self._snapshot
        if snapshot is None:
            return []
        needle = query.strip()
        if not needle or len(needle) < self.config.min_match_char_length:
            return []
        if limit is not None and limit < 1:
            return []

        weights = self.config.normalized_weights()
        options = self.config.match_options
        results = []
        for record in snapshot.records:
            result = self._score_record(record, needle, weights, options)
            if result is not None:
                results.append(result)

        # list.sort is stable: ties keep build order.
        results.sort(key=attrgetter("score"))
        return results if limit is None else results[:limit]

    def _score_record(
        self,
        record: IndexedRecord,
        needle: str,
        weights: tuple[tuple[str, float], ...],
        options: MatchOptions,
    ) -> SearchResult | None:
        total = 1.0
        matches: list[SearchMatch] = []
        for path, weight in weights:
            best: float | None = None
            for value in _iter_values(record.fields.get(path)):
                found = self.matcher.score(needle, value, options)
                if not found.matched:
                    continue
                matches.append(SearchMatch(key=path, value=value, indices=found.ranges))
                factor = max(found.score, _EPSILON) ** (weight * _field_norm(value))
                if best is None or factor < best:
                    best = factor
            if best is not None:
                total *= best
        if not matches:
            return None
        return SearchResult(
            entity_type=record.entity_type,
            item=record.item,
            score=total,
            matches=tuple(matches),
        )


def _iter_values(value: FieldValue) -> Iterator[str]:
    if value is None:
        return
    if isinstance(value, str):
        if value:
            yield value
        return
    for element in value:
        if element:
            yield element


def _field_norm(value: str) -> float:
    words = len(value.split()) or 1
    return round(1 / math.sqrt(words), 3)
