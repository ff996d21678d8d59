"""Search API: fuzzy search across documents, students, staff and users.

Search routes never fail on a missing or broken index; they return empty
results instead. A blank query is rejected with 400.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from unirecords.api.v1.dependencies import get_search_service
from unirecords.application.dtos.search import DateRange, DocumentFilters, QueryOptions
from unirecords.application.use_cases.search import SearchService
from unirecords.core.limiter import limit_refresh, limit_search
from unirecords.domain.enums import EntityType
from unirecords.domain.exceptions import ValidationException
from unirecords.schemas.search import (
    AdvancedSearchRequest,
    IndexBuildReportResponse,
    IndexStatusListResponse,
    IndexStatusResponse,
    PopularTermResponse,
    PopularTermsResponse,
    RefreshIndexesResponse,
    SearchResponse,
    SuggestionsResponse,
)

router = APIRouter()


def _require_query(q: str, field: str = "q") -> str:
    if not q.strip():
        raise ValidationException("Search query is required", field=field)
    return q


def _parse_types(types: str | None) -> tuple[EntityType, ...]:
    """Parse a comma-separated type list; None or blank means all types."""
    if not types or not types.strip():
        return tuple(EntityType)
    parsed = []
    for raw in types.split(","):
        name = raw.strip().lower()
        if not name:
            continue
        try:
            parsed.append(EntityType(name))
        except ValueError:
            raise ValidationException(
                f"Unknown entity type '{name}'; expected one of {EntityType.values()}",
                field="types",
            ) from None
    return tuple(parsed)


@router.get("/global", response_model=SearchResponse)
@limit_search
def global_search(
    request: Request,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    q: str = Query("", max_length=500),
    types: str | None = Query(None, description="Comma-separated: document,student,staff,user"),
    limit: int = Query(20, ge=1, le=100),
) -> SearchResponse:
    """Search the selected entity types and return one list ranked by score."""
    query = _require_query(q)
    options = QueryOptions(types=_parse_types(types), limit=limit)
    results = search_svc.global_search(query, options)
    return SearchResponse.from_results(query, results)


@router.get("/suggestions", response_model=SuggestionsResponse)
@limit_search
def search_suggestions(
    request: Request,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    q: str = Query("", max_length=500),
    type: EntityType = Query(EntityType.DOCUMENT),
) -> SuggestionsResponse:
    """Completion words for q drawn from one entity type's best matches."""
    query = _require_query(q)
    return SuggestionsResponse(
        suggestions=search_svc.get_search_suggestions(query, type)
    )


@router.get("/popular", response_model=PopularTermsResponse)
def popular_search_terms(
    search_svc: Annotated[SearchService, Depends(get_search_service)],
) -> PopularTermsResponse:
    """Static list of popular search terms."""
    return PopularTermsResponse(
        popular_terms=[
            PopularTermResponse(term=t.term, count=t.count)
            for t in search_svc.get_popular_search_terms()
        ]
    )


@router.post("/documents/advanced", response_model=SearchResponse)
@limit_search
async def advanced_document_search(
    request: Request,
    body: AdvancedSearchRequest,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
) -> SearchResponse:
    """Fuzzy document search narrowed by category, access level, dates, tags and uploader."""
    query = _require_query(body.query, field="query")
    access_level = body.access_level
    if access_level is not None and not isinstance(access_level, list):
        access_level = [access_level]
    filters = DocumentFilters(
        category=body.category,
        subcategory=body.subcategory,
        access_level=tuple(access_level) if access_level is not None else None,
        uploaded_by=body.uploaded_by,
        date_range=(
            DateRange(start=body.date_range.start, end=body.date_range.end)
            if body.date_range
            else None
        ),
        tags=tuple(body.tags) if body.tags is not None else None,
        limit=body.limit,
    )
    results = await search_svc.search_documents(query, filters)
    return SearchResponse.from_results(query, results)


@router.post("/refresh-indexes", response_model=RefreshIndexesResponse)
@limit_refresh
async def refresh_indexes(
    request: Request,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
) -> RefreshIndexesResponse:
    """Rebuild every index from the record store. Types that fail keep their previous index."""
    reports = await search_svc.refresh_indexes()
    failed = [r.entity_type.value for r in reports if not r.ok]
    message = (
        f"Search indexes refresh failed for: {', '.join(failed)}"
        if failed
        else "Search indexes refreshed successfully"
    )
    return RefreshIndexesResponse(
        success=not failed,
        message=message,
        indexes=[IndexBuildReportResponse.from_report(r) for r in reports],
    )


@router.get("/indexes", response_model=IndexStatusListResponse)
def index_status(
    search_svc: Annotated[SearchService, Depends(get_search_service)],
) -> IndexStatusListResponse:
    """Per-type index build state."""
    return IndexStatusListResponse(
        indexes=[IndexStatusResponse.from_status(s) for s in search_svc.index_status()]
    )
