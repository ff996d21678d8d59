"""Search API schemas.

camelCase wire names (totalResults, popularTerms, recordCount, builtAt,
accessLevel, dateRange, uploadedBy) are field aliases; models also accept
the snake_case field names.
"""

from dataclasses import asdict
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from unirecords.application.dtos.search import (
    IndexBuildReport,
    IndexStatus,
    SearchResult,
)
from unirecords.domain.enums import DocumentAccessLevel, DocumentCategory, EntityType


class SearchMatchResponse(BaseModel):
    """One matched field value with the character ranges that matched."""

    key: str = Field(..., description="Dotted field path, e.g. user.first_name")
    value: str
    indices: list[tuple[int, int]] = Field(
        default_factory=list, description="Half-open [start, end) character ranges"
    )


class SearchResultResponse(BaseModel):
    """Single ranked hit. Lower score is a better match."""

    type: EntityType
    item: dict[str, Any]
    score: float = Field(..., ge=0.0, le=1.0)
    matches: list[SearchMatchResponse] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: SearchResult) -> "SearchResultResponse":
        return cls(
            type=result.entity_type,
            item=asdict(result.item),
            score=result.score,
            matches=[
                SearchMatchResponse(
                    key=m.key, value=m.value, indices=[tuple(r) for r in m.indices]
                )
                for m in result.matches
            ],
        )


class SearchResponse(BaseModel):
    """Global or advanced search response."""

    model_config = ConfigDict(populate_by_name=True)

    query: str
    results: list[SearchResultResponse]
    total_results: int = Field(..., alias="totalResults")

    @classmethod
    def from_results(cls, query: str, results: list[SearchResult]) -> "SearchResponse":
        return cls(
            query=query,
            results=[SearchResultResponse.from_result(r) for r in results],
            total_results=len(results),
        )


class SuggestionsResponse(BaseModel):
    suggestions: list[str]


class PopularTermResponse(BaseModel):
    term: str
    count: int


class PopularTermsResponse(BaseModel):
    """Placeholder popular terms (static, not derived from query logs)."""

    model_config = ConfigDict(populate_by_name=True)

    popular_terms: list[PopularTermResponse] = Field(
        ..., alias="popularTerms"
    )


class DateRangeRequest(BaseModel):
    """Inclusive created_at range. Naive datetimes are read as UTC."""

    start: datetime
    end: datetime

    @model_validator(mode="after")
    def check_order(self) -> "DateRangeRequest":
        if self.end < self.start:
            raise ValueError("dateRange.end must not be before dateRange.start")
        return self


class AdvancedSearchRequest(BaseModel):
    """Body for POST /search/documents/advanced."""

    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(default="", max_length=500)
    category: DocumentCategory | None = None
    subcategory: str | None = None
    access_level: DocumentAccessLevel | list[DocumentAccessLevel] | None = Field(
        default=None, alias="accessLevel"
    )
    date_range: DateRangeRequest | None = Field(default=None, alias="dateRange")
    tags: list[str] | None = None
    uploaded_by: str | None = Field(default=None, alias="uploadedBy")
    limit: int = Field(default=50, ge=1, le=100)


class IndexBuildReportResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: EntityType
    ok: bool
    record_count: int = Field(..., alias="recordCount")
    error: str | None = None

    @classmethod
    def from_report(cls, report: IndexBuildReport) -> "IndexBuildReportResponse":
        return cls(
            type=report.entity_type,
            ok=report.ok,
            record_count=report.record_count,
            error=report.error,
        )


class RefreshIndexesResponse(BaseModel):
    """Result of POST /search/refresh-indexes. success is False if any type failed."""

    success: bool
    message: str
    indexes: list[IndexBuildReportResponse]


class IndexStatusResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: EntityType
    built: bool
    record_count: int = Field(..., alias="recordCount")
    built_at: datetime | None = Field(default=None, alias="builtAt")

    @classmethod
    def from_status(cls, status: IndexStatus) -> "IndexStatusResponse":
        return cls(
            type=status.entity_type,
            built=status.built,
            record_count=status.record_count,
            built_at=status.built_at,
        )


class IndexStatusListResponse(BaseModel):
    indexes: list[IndexStatusResponse]
