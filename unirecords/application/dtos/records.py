"""Record snapshot DTOs (no dependency on ORM).

Read-models produced by the record source for index builds. Each is a
frozen copy taken at build time; editing the source record does not
change an already-built index.
"""

from dataclasses import dataclass
from datetime import datetime

from unirecords.domain.enums import (
    DocumentAccessLevel,
    DocumentCategory,
    DocumentStatus,
    UserRole,
)


@dataclass(frozen=True)
class PersonName:
    """Profile name fields shared by users and populated cross-references."""

    first_name: str
    last_name: str
    middle_name: str | None = None

    @property
    def full_name(self) -> str:
        parts = (self.first_name, self.middle_name, self.last_name)
        return " ".join(p for p in parts if p)


@dataclass(frozen=True)
class UserSummary:
    """Linked user account fields populated on student and staff records."""

    id: str
    first_name: str
    last_name: str
    email: str


@dataclass(frozen=True)
class DocumentRecord:
    """Active (non-deleted, non-archived) document with its uploader profile populated."""

    id: str
    title: str
    description: str | None
    category: DocumentCategory
    subcategory: str | None
    original_name: str
    tags: tuple[str, ...]
    searchable_text: str
    access_level: DocumentAccessLevel
    uploaded_by: str
    uploader: PersonName | None
    status: DocumentStatus
    created_at: datetime
    updated_at: datetime | None = None


@dataclass(frozen=True)
class AcademicInfo:
    """Student academic placement."""

    faculty: str
    department: str
    program: str | None = None
    level: str | None = None
    status: str | None = None


@dataclass(frozen=True)
class StudentRecord:
    """Active student with the linked user's name and email populated."""

    id: str
    registration_number: str
    user: UserSummary | None
    academic_info: AcademicInfo
    created_at: datetime


@dataclass(frozen=True)
class EmploymentInfo:
    """Staff employment placement."""

    department: str
    faculty: str | None = None
    position: str | None = None
    rank: str | None = None


@dataclass(frozen=True)
class StaffRecord:
    """Active staff member with the linked user's name and email populated."""

    id: str
    staff_id: str
    user: UserSummary | None
    employment_info: EmploymentInfo
    created_at: datetime


@dataclass(frozen=True)
class UserRecord:
    """Active user account. Never carries credentials."""

    id: str
    username: str
    email: str
    role: UserRole
    profile: PersonName
    created_at: datetime


# Any record snapshot an index can hold.
Record = DocumentRecord | StudentRecord | StaffRecord | UserRecord
