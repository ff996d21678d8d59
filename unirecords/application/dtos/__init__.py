"""Application DTOs: record snapshots and search read-models (no ORM)."""

from unirecords.application.dtos.records import (
    AcademicInfo,
    DocumentRecord,
    EmploymentInfo,
    PersonName,
    Record,
    StaffRecord,
    StudentRecord,
    UserRecord,
    UserSummary,
)
from unirecords.application.dtos.search import (
    DateRange,
    DocumentFilters,
    FieldValue,
    IndexBuildReport,
    IndexedRecord,
    IndexStatus,
    PopularTerm,
    QueryOptions,
    SearchMatch,
    SearchResult,
)

__all__ = [
    "AcademicInfo",
    "DateRange",
    "DocumentFilters",
    "DocumentRecord",
    "EmploymentInfo",
    "FieldValue",
    "IndexBuildReport",
    "IndexedRecord",
    "IndexStatus",
    "PersonName",
    "PopularTerm",
    "QueryOptions",
    "Record",
    "SearchMatch",
    "SearchResult",
    "StaffRecord",
    "StudentRecord",
    "UserRecord",
    "UserSummary",
]
