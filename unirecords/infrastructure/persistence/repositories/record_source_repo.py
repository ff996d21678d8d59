"""Record source repository: read-only listings of active records for index builds.

Each listing opens its own session so the four concurrent index builds
never share one. Cross-referenced user rows are eager-loaded; ORM rows
are mapped to frozen record DTOs before the session closes.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from unirecords.application.dtos.records import (
    AcademicInfo,
    DocumentRecord,
    EmploymentInfo,
    PersonName,
    StaffRecord,
    StudentRecord,
    UserRecord,
    UserSummary,
)
from unirecords.domain.enums import (
    DocumentAccessLevel,
    DocumentCategory,
    DocumentStatus,
    EntityType,
    UserRole,
)
from unirecords.infrastructure.exceptions import RecordSourceException
from unirecords.infrastructure.persistence.database import get_session_factory
from unirecords.infrastructure.persistence.models import Document, Staff, Student, User
from unirecords.shared.utils.datetime import ensure_utc


class SqlRecordSource:
    """IRecordSource over the SQL record store.

    session_factory defaults to the lazily created application factory;
    SqlNotConfiguredException propagates when DATABASE_URL is not set.
    """

    def __init__(
        self, session_factory: async_sessionmaker[AsyncSession] | None = None
    ) -> None:
        self._session_factory = session_factory

    def _sessions(self) -> async_sessionmaker[AsyncSession]:
        return self._session_factory or get_session_factory()

    async def _fetch(
        self, entity_type: EntityType, stmt: Any, to_record: Callable[[Any], Any]
    ) -> list[Any]:
        factory = self._sessions()
        try:
            async with factory() as session:
                result = await session.execute(stmt)
                return [to_record(row) for row in result.scalars().all()]
        except SQLAlchemyError as e:
            raise RecordSourceException(entity_type.value, str(e)) from e

    async def list_active_documents(self) -> Sequence[DocumentRecord]:
        stmt = (
            select(Document)
            .options(selectinload(Document.uploader))
            .where(Document.is_active.is_(True), Document.is_archived.is_(False))
            .order_by(Document.created_at, Document.id)
        )
        return await self._fetch(EntityType.DOCUMENT, stmt, _to_document_record)

    async def list_active_students(self) -> Sequence[StudentRecord]:
        stmt = (
            select(Student)
            .options(selectinload(Student.user))
            .where(Student.is_active.is_(True))
            .order_by(Student.created_at, Student.id)
        )
        return await self._fetch(EntityType.STUDENT, stmt, _to_student_record)

    async def list_active_staff(self) -> Sequence[StaffRecord]:
        stmt = (
            select(Staff)
            .options(selectinload(Staff.user))
            .where(Staff.is_active.is_(True))
            .order_by(Staff.created_at, Staff.id)
        )
        return await self._fetch(EntityType.STAFF, stmt, _to_staff_record)

    async def list_active_users(self) -> Sequence[UserRecord]:
        stmt = (
            select(User)
            .where(User.is_active.is_(True))
            .order_by(User.created_at, User.id)
        )
        return await self._fetch(EntityType.USER, stmt, _to_user_record)


def _user_summary(user: User | None) -> UserSummary | None:
    if user is None:
        return None
    return UserSummary(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
    )


def _to_document_record(doc: Document) -> DocumentRecord:
    uploader = doc.uploader
    return DocumentRecord(
        id=doc.id,
        title=doc.title,
        description=doc.description,
        category=DocumentCategory(doc.category),
        subcategory=doc.subcategory,
        original_name=doc.original_name,
        tags=tuple(str(tag) for tag in doc.tags or ()),
        searchable_text=doc.searchable_text or "",
        access_level=DocumentAccessLevel(doc.access_level),
        uploaded_by=doc.uploaded_by,
        uploader=(
            PersonName(
                first_name=uploader.first_name,
                last_name=uploader.last_name,
                middle_name=uploader.middle_name,
            )
            if uploader is not None
            else None
        ),
        status=DocumentStatus(doc.status),
        created_at=ensure_utc(doc.created_at),
        updated_at=ensure_utc(doc.updated_at),
    )


def _to_student_record(student: Student) -> StudentRecord:
    return StudentRecord(
        id=student.id,
        registration_number=student.registration_number,
        user=_user_summary(student.user),
        academic_info=AcademicInfo(
            faculty=student.faculty,
            department=student.department,
            program=student.program,
            level=student.level,
            status=student.academic_status,
        ),
        created_at=ensure_utc(student.created_at),
    )


def _to_staff_record(staff: Staff) -> StaffRecord:
    return StaffRecord(
        id=staff.id,
        staff_id=staff.staff_id,
        user=_user_summary(staff.user),
        employment_info=EmploymentInfo(
            department=staff.department,
            faculty=staff.faculty,
            position=staff.position,
            rank=staff.rank,
        ),
        created_at=ensure_utc(staff.created_at),
    )


def _to_user_record(user: User) -> UserRecord:
    return UserRecord(
        id=user.id,
        username=user.username,
        email=user.email,
        role=UserRole(user.role),
        profile=PersonName(
            first_name=user.first_name,
            last_name=user.last_name,
            middle_name=user.middle_name,
        ),
        created_at=ensure_utc(user.created_at),
    )
