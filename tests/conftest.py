"""Pytest configuration and fixtures for unirecords.

Telemetry and the startup index build are switched off before any
unirecords module is imported. HTTP tests use create_app() with the search
service dependency overridden; ASGITransport does not run the lifespan,
so no database is needed.
"""

import os

os.environ.setdefault("TELEMETRY_ENABLED", "false")
os.environ.setdefault("SEARCH_INITIALIZE_ON_STARTUP", "false")

from collections import Counter
from collections.abc import Callable, Iterable
from datetime import UTC, datetime

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from unirecords.api.v1.dependencies import get_search_service
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
from unirecords.application.search.index_manager import IndexManager
from unirecords.application.use_cases.search import SearchService
from unirecords.core.config import get_settings
from unirecords.core.limiter import limiter
from unirecords.domain.enums import (
    DocumentAccessLevel,
    DocumentCategory,
    DocumentStatus,
    EntityType,
    UserRole,
)
from unirecords.main import create_app


class InMemoryRecordSource:
    """IRecordSource over plain lists. Types in `failing` raise on load."""

    def __init__(
        self,
        documents: Iterable[DocumentRecord] = (),
        students: Iterable[StudentRecord] = (),
        staff: Iterable[StaffRecord] = (),
        users: Iterable[UserRecord] = (),
    ) -> None:
        self.records: dict[EntityType, list] = {
            EntityType.DOCUMENT: list(documents),
            EntityType.STUDENT: list(students),
            EntityType.STAFF: list(staff),
            EntityType.USER: list(users),
        }
        self.failing: set[EntityType] = set()
        self.load_counts: Counter[EntityType] = Counter()

    async def _load(self, entity_type: EntityType) -> list:
        self.load_counts[entity_type] += 1
        if entity_type in self.failing:
            raise ConnectionError(f"{entity_type.value} store unavailable")
        return list(self.records[entity_type])

    async def list_active_documents(self) -> list[DocumentRecord]:
        return await self._load(EntityType.DOCUMENT)

    async def list_active_students(self) -> list[StudentRecord]:
        return await self._load(EntityType.STUDENT)

    async def list_active_staff(self) -> list[StaffRecord]:
        return await self._load(EntityType.STAFF)

    async def list_active_users(self) -> list[UserRecord]:
        return await self._load(EntityType.USER)


def build_document(
    id: str = "doc-1",
    title: str = "Untitled",
    *,
    description: str | None = None,
    searchable_text: str = "",
    tags: tuple[str, ...] = (),
    category: DocumentCategory = DocumentCategory.ACADEMIC,
    subcategory: str | None = None,
    access_level: DocumentAccessLevel = DocumentAccessLevel.PUBLIC,
    uploaded_by: str = "user-1",
    created_at: datetime = datetime(2024, 1, 1, tzinfo=UTC),
) -> DocumentRecord:
    return DocumentRecord(
        id=id,
        title=title,
        description=description,
        category=category,
        subcategory=subcategory,
        original_name=f"{id}.pdf",
        tags=tags,
        searchable_text=searchable_text,
        access_level=access_level,
        uploaded_by=uploaded_by,
        uploader=PersonName(first_name="John", last_name="Smith"),
        status=DocumentStatus.APPROVED,
        created_at=created_at,
    )


def build_student(
    id: str,
    registration_number: str,
    first_name: str,
    last_name: str,
    *,
    faculty: str = "Science",
    department: str = "Physics",
) -> StudentRecord:
    return StudentRecord(
        id=id,
        registration_number=registration_number,
        user=UserSummary(
            id=f"user-{id}",
            first_name=first_name,
            last_name=last_name,
            email=f"{first_name}.{last_name}@uni.edu".lower(),
        ),
        academic_info=AcademicInfo(faculty=faculty, department=department),
        created_at=datetime(2024, 1, 1, tzinfo=UTC),
    )


def build_staff(
    id: str,
    staff_id: str,
    first_name: str,
    last_name: str,
    *,
    department: str = "Registry",
    position: str | None = "Officer",
) -> StaffRecord:
    return StaffRecord(
        id=id,
        staff_id=staff_id,
        user=UserSummary(
            id=f"user-{id}",
            first_name=first_name,
            last_name=last_name,
            email=f"{first_name}.{last_name}@uni.edu".lower(),
        ),
        employment_info=EmploymentInfo(department=department, position=position),
        created_at=datetime(2024, 1, 1, tzinfo=UTC),
    )


def build_user(
    id: str,
    username: str,
    first_name: str,
    last_name: str,
    *,
    role: UserRole = UserRole.STAFF,
) -> UserRecord:
    return UserRecord(
        id=id,
        username=username,
        email=f"{first_name}.{last_name}@uni.edu".lower(),
        role=role,
        profile=PersonName(first_name=first_name, last_name=last_name),
        created_at=datetime(2024, 1, 1, tzinfo=UTC),
    )


@pytest.fixture
def make_source() -> type[InMemoryRecordSource]:
    """Record source class for tests that need their own data set."""
    return InMemoryRecordSource


@pytest.fixture
def make_document() -> Callable[..., DocumentRecord]:
    return build_document


@pytest.fixture
def make_student() -> Callable[..., StudentRecord]:
    return build_student


@pytest.fixture
def make_staff() -> Callable[..., StaffRecord]:
    return build_staff


@pytest.fixture
def make_user() -> Callable[..., UserRecord]:
    return build_user


@pytest.fixture
def record_source() -> InMemoryRecordSource:
    """A small university: four documents, two students, two staff, three users."""
    return InMemoryRecordSource(
        documents=[
            build_document(
                "doc-thesis",
                "Final thesis on hydrology",
                description="Masters thesis submitted to the faculty of engineering",
                tags=("thesis", "hydrology"),
                subcategory="thesis",
                uploaded_by="user-1",
                created_at=datetime(2024, 3, 10, tzinfo=UTC),
            ),
            build_document(
                "doc-transcript",
                "Academic transcript 2023",
                description="Official transcript of results",
                tags=("transcript",),
                subcategory="transcript",
                access_level=DocumentAccessLevel.RESTRICTED,
                uploaded_by="user-2",
                created_at=datetime(2024, 1, 15, tzinfo=UTC),
            ),
            build_document(
                "doc-budget",
                "Department budget report",
                description="Annual financial report",
                tags=("budget", "finance"),
                category=DocumentCategory.FINANCIAL,
                subcategory="budget",
                access_level=DocumentAccessLevel.CONFIDENTIAL,
                uploaded_by="user-1",
                created_at=datetime(2023, 11, 2, tzinfo=UTC),
            ),
            build_document(
                "doc-handbook",
                "Document Upload Guide",
                description="Guidelines for storing documents",
                tags=("policy",),
                category=DocumentCategory.ADMINISTRATIVE,
                uploaded_by="user-3",
                created_at=datetime(2024, 6, 1, tzinfo=UTC),
            ),
        ],
        students=[
            build_student(
                "stu-1",
                "2021/HD05/1234U",
                "John",
                "Doe",
                faculty="Engineering",
                department="Civil Engineering",
            ),
            build_student("stu-2", "2022/HD07/5678U", "Grace", "Nakato"),
        ],
        staff=[
            build_staff(
                "stf-1",
                "STF-001",
                "Johnson",
                "Smith",
                department="Finance",
                position="Accountant",
            ),
            build_staff("stf-2", "STF-002", "Peter", "Okello", position="Registrar"),
        ],
        users=[
            build_user("user-1", "jsmith", "John", "Smith"),
            build_user("user-2", "mjohnson", "Mary", "Johnson", role=UserRole.STUDENT),
            build_user("user-3", "akato", "Alice", "Kato", role=UserRole.ADMIN),
        ],
    )


@pytest.fixture
def index_manager(record_source: InMemoryRecordSource) -> IndexManager:
    """Index manager over record_source; indexes not built yet."""
    return IndexManager(record_source)


@pytest.fixture
async def built_index_manager(index_manager: IndexManager) -> IndexManager:
    """Index manager with all four indexes built."""
    await index_manager.initialize_indexes()
    return index_manager


@pytest.fixture
def search_service(built_index_manager: IndexManager) -> SearchService:
    return SearchService(built_index_manager)


@pytest.fixture
def app() -> FastAPI:
    """Fresh app per test; rate limit counters reset."""
    get_settings.cache_clear()
    limiter.reset()
    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def search_app(app: FastAPI, search_service: SearchService) -> FastAPI:
    """App whose routes use search_service (built indexes over record_source)."""
    app.dependency_overrides[get_search_service] = lambda: search_service
    return app


@pytest.fixture
async def client(search_app: FastAPI) -> AsyncClient:
    """Async HTTP client against the app with the search service wired (ASGI)."""
    transport = ASGITransport(app=search_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
