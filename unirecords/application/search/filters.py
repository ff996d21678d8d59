"""Post-search filters for document results.

Filters only remove entries; scores and relative order are untouched.
Results for other entity types pass through unchanged.
"""

from __future__ import annotations

from unirecords.application.dtos.records import DocumentRecord
from unirecords.application.dtos.search import DocumentFilters, SearchResult
from unirecords.shared.utils.datetime import ensure_utc


def apply_filters(
    results: list[SearchResult], filters: DocumentFilters
) -> list[SearchResult]:
    """Return the results whose documents satisfy every set predicate."""
    return [
        result
        for result in results
        if not isinstance(result.item, DocumentRecord)
        or document_matches(result.item, filters)
    ]


def document_matches(doc: DocumentRecord, filters: DocumentFilters) -> bool:
    """True if doc passes all predicates set on filters (unset ones are ignored)."""
    if filters.category is not None and doc.category != filters.category:
        return False
    if filters.subcategory is not None and doc.subcategory != filters.subcategory:
        return False
    if filters.access_level is not None and doc.access_level not in filters.access_level:
        return False
    if filters.uploaded_by is not None and doc.uploaded_by != filters.uploaded_by:
        return False

    if filters.date_range is not None:
        created = ensure_utc(doc.created_at)
        start = ensure_utc(filters.date_range.start)
        end = ensure_utc(filters.date_range.end)
        if created < start or created > end:
            return False

    if filters.tags:
        wanted = [tag.lower() for tag in filters.tags]
        if not any(w in tag.lower() for tag in doc.tags for w in wanted):
            return False

    return True
