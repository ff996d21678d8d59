"""Document ORM model. File metadata plus the text used for search."""

from typing import Any

from sqlalchemy import JSON, Boolean, ForeignKey, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from unirecords.infrastructure.persistence.database import Base
from unirecords.infrastructure.persistence.models.mixins import RecordModel
from unirecords.infrastructure.persistence.models.user import User


class Document(RecordModel, Base):
    """Document entity. Table: document. uploaded_by links to the uploader's user row."""

    __tablename__ = "document"

    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String, nullable=False, index=True)
    subcategory: Mapped[str | None] = mapped_column(String, nullable=True)
    original_name: Mapped[str] = mapped_column(String, nullable=False)
    tags: Mapped[list[Any] | None] = mapped_column(JSON, nullable=True)
    searchable_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    access_level: Mapped[str] = mapped_column(
        String, nullable=False, server_default=text("'restricted'")
    )
    status: Mapped[str] = mapped_column(
        String, nullable=False, server_default=text("'draft'")
    )
    uploaded_by: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id"), nullable=False, index=True
    )
    is_archived: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )

    uploader: Mapped[User | None] = relationship(lazy="raise")

    __table_args__ = (
        Index("ix_document_active_archived", "is_active", "is_archived"),
    )
