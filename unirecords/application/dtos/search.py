"""DTOs for in-memory search: indexed records, results, options, filters."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime

from unirecords.application.dtos.records import Record
from unirecords.domain.enums import (
    DocumentAccessLevel,
    DocumentCategory,
    EntityType,
)

# Value of one indexed field: text, list of texts (e.g. tags), or absent.
FieldValue = str | tuple[str, ...] | None


@dataclass(frozen=True)
class IndexedRecord:
    """Snapshot of one record inside a built index.

    fields maps dotted field paths to values copied at build time;
    item is the record they were extracted from.
    """

    id: str
    entity_type: EntityType
    fields: Mapping[str, FieldValue]
    item: Record


@dataclass(frozen=True)
class SearchMatch:
    """A matched field value. indices are half-open (start, end) ranges into value."""

    key: str
    value: str
    indices: tuple[tuple[int, int], ...]


@dataclass(frozen=True)
class SearchResult:
    """Single ranked hit. Lower score is better; 0 is a perfect match."""

    entity_type: EntityType
    item: Record
    score: float
    matches: tuple[SearchMatch, ...] = ()


@dataclass(frozen=True)
class QueryOptions:
    """Options for cross-collection search."""

    types: tuple[EntityType, ...] = tuple(EntityType)
    limit: int = 50

    def __post_init__(self) -> None:
        # Keep caller order, drop duplicates; empty means every type.
        unique = tuple(dict.fromkeys(self.types)) or tuple(EntityType)
        object.__setattr__(self, "types", unique)
        if self.limit < 1:
            raise ValueError(f"limit must be >= 1, got {self.limit}")


@dataclass(frozen=True)
class DateRange:
    """Inclusive creation-time window."""

    start: datetime
    end: datetime


@dataclass(frozen=True)
class DocumentFilters:
    """Structured predicates for advanced document search (all optional, ANDed)."""

    category: DocumentCategory | None = None
    subcategory: str | None = None
    access_level: tuple[DocumentAccessLevel, ...] | None = None
    uploaded_by: str | None = None
    date_range: DateRange | None = None
    tags: tuple[str, ...] | None = None
    limit: int = 50


@dataclass(frozen=True)
class PopularTerm:
    """Search term with its usage count."""

    term: str
    count: int


@dataclass(frozen=True)
class IndexBuildReport:
    """Outcome of building one entity type's index."""

    entity_type: EntityType
    ok: bool
    record_count: int = 0
    error: str | None = None


@dataclass(frozen=True)
class IndexStatus:
    """Current state of one entity type's index."""

    entity_type: EntityType
    built: bool
    record_count: int = 0
    built_at: datetime | None = None
