"""Per-entity field weights and field extraction for search indexes.

Each entity type has one static FieldWeightConfig: the ordered (path, weight)
pairs to match, matching permissiveness, and an explicit function that maps
the typed record snapshot to its dotted field paths.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any

from unirecords.application.dtos.records import (
    DocumentRecord,
    StaffRecord,
    StudentRecord,
    UserRecord,
)
from unirecords.application.dtos.search import FieldValue
from unirecords.application.search.matcher import MatchOptions
from unirecords.domain.enums import EntityType

DEFAULT_MATCH_THRESHOLD = 0.4


@dataclass(frozen=True)
class FieldWeight:
    """A dotted field path and its relative matching priority."""

    path: str
    weight: float

    def __post_init__(self) -> None:
        if not self.path:
            raise ValueError("field path cannot be empty")
        if self.weight <= 0:
            raise ValueError(f"weight for {self.path!r} must be positive, got {self.weight}")


@dataclass(frozen=True)
class FieldWeightConfig:
    """Static search configuration for one entity type.

    Weights need not sum to 1; only their relative magnitude matters.
    """

    entity_type: EntityType
    fields: tuple[FieldWeight, ...]
    extract: Callable[[Any], dict[str, FieldValue]]
    match_threshold: float = DEFAULT_MATCH_THRESHOLD
    min_match_char_length: int = 1

    def __post_init__(self) -> None:
        if not self.fields:
            raise ValueError(f"{self.entity_type.value}: at least one field is required")
        paths = [f.path for f in self.fields]
        if len(set(paths)) != len(paths):
            raise ValueError(f"{self.entity_type.value}: duplicate field paths {paths}")
        if not 0.0 <= self.match_threshold <= 1.0:
            raise ValueError(
                f"match_threshold must be within [0, 1], got {self.match_threshold}"
            )
        if self.min_match_char_length < 1:
            raise ValueError(
                f"min_match_char_length must be >= 1, got {self.min_match_char_length}"
            )

    @property
    def match_options(self) -> MatchOptions:
        return MatchOptions(
            threshold=self.match_threshold,
            min_match_char_length=self.min_match_char_length,
        )

    def normalized_weights(self) -> tuple[tuple[str, float], ...]:
        """Return (path, weight / total weight) in configured order."""
        total = sum(f.weight for f in self.fields)
        return tuple((f.path, f.weight / total) for f in self.fields)

    def with_weight(self, path: str, weight: float) -> FieldWeightConfig:
        """Return a copy with one field's weight changed."""
        if path not in {f.path for f in self.fields}:
            raise KeyError(path)
        fields = tuple(
            FieldWeight(f.path, weight) if f.path == path else f for f in self.fields
        )
        return replace(self, fields=fields)


def _document_fields(doc: DocumentRecord) -> dict[str, FieldValue]:
    return {
        "title": doc.title,
        "description": doc.description,
        "searchable_text": doc.searchable_text,
        "tags": doc.tags,
        "category": doc.category.value,
        "subcategory": doc.subcategory,
    }


def _student_fields(student: StudentRecord) -> dict[str, FieldValue]:
    user = student.user
    return {
        "registration_number": student.registration_number,
        "user.first_name": user.first_name if user else None,
        "user.last_name": user.last_name if user else None,
        "user.email": user.email if user else None,
        "academic_info.faculty": student.academic_info.faculty,
        "academic_info.department": student.academic_info.department,
    }


def _staff_fields(staff: StaffRecord) -> dict[str, FieldValue]:
    user = staff.user
    return {
        "staff_id": staff.staff_id,
        "user.first_name": user.first_name if user else None,
        "user.last_name": user.last_name if user else None,
        "user.email": user.email if user else None,
        "employment_info.department": staff.employment_info.department,
        "employment_info.position": staff.employment_info.position,
    }


def _user_fields(user: UserRecord) -> dict[str, FieldValue]:
    return {
        "username": user.username,
        "email": user.email,
        "profile.first_name": user.profile.first_name,
        "profile.last_name": user.profile.last_name,
    }


DOCUMENT_FIELDS = FieldWeightConfig(
    entity_type=EntityType.DOCUMENT,
    fields=(
        FieldWeight("title", 0.3),
        FieldWeight("description", 0.2),
        FieldWeight("searchable_text", 0.2),
        FieldWeight("tags", 0.15),
        FieldWeight("category", 0.1),
        FieldWeight("subcategory", 0.05),
    ),
    extract=_document_fields,
    min_match_char_length=2,
)

STUDENT_FIELDS = FieldWeightConfig(
    entity_type=EntityType.STUDENT,
    fields=(
        FieldWeight("registration_number", 0.3),
        FieldWeight("user.first_name", 0.2),
        FieldWeight("user.last_name", 0.2),
        FieldWeight("user.email", 0.15),
        FieldWeight("academic_info.faculty", 0.1),
        FieldWeight("academic_info.department", 0.05),
    ),
    extract=_student_fields,
)

STAFF_FIELDS = FieldWeightConfig(
    entity_type=EntityType.STAFF,
    fields=(
        FieldWeight("staff_id", 0.3),
        FieldWeight("user.first_name", 0.2),
        FieldWeight("user.last_name", 0.2),
        FieldWeight("user.email", 0.15),
        FieldWeight("employment_info.department", 0.1),
        FieldWeight("employment_info.position", 0.05),
    ),
    extract=_staff_fields,
)

USER_FIELDS = FieldWeightConfig(
    entity_type=EntityType.USER,
    fields=(
        FieldWeight("username", 0.3),
        FieldWeight("email", 0.3),
        FieldWeight("profile.first_name", 0.2),
        FieldWeight("profile.last_name", 0.2),
    ),
    extract=_user_fields,
)

DEFAULT_FIELD_CONFIGS: Mapping[EntityType, FieldWeightConfig] = MappingProxyType(
    {
        EntityType.DOCUMENT: DOCUMENT_FIELDS,
        EntityType.STUDENT: STUDENT_FIELDS,
        EntityType.STAFF: STAFF_FIELDS,
        EntityType.USER: USER_FIELDS,
    }
)
