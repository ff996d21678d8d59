"""In-memory fuzzy search engine: field matcher, weighted indexes, index manager, filters."""

from unirecords.application.search.field_config import (
    DEFAULT_FIELD_CONFIGS,
    FieldWeight,
    FieldWeightConfig,
)
from unirecords.application.search.filters import apply_filters
from unirecords.application.search.index import WeightedRecordIndex
from unirecords.application.search.index_manager import IndexManager
from unirecords.application.search.matcher import (
    NO_MATCH,
    FieldMatch,
    FieldMatcher,
    FuzzyFieldMatcher,
    MatchOptions,
)

__all__ = [
    "DEFAULT_FIELD_CONFIGS",
    "FieldMatch",
    "FieldMatcher",
    "FieldWeight",
    "FieldWeightConfig",
    "FuzzyFieldMatcher",
    "IndexManager",
    "MatchOptions",
    "NO_MATCH",
    "WeightedRecordIndex",
    "apply_filters",
]
