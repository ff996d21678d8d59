"""User ORM model. Profile names live on the user row."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from unirecords.infrastructure.persistence.database import Base
from unirecords.infrastructure.persistence.models.mixins import RecordModel


class User(RecordModel, Base):
    """User account. Table: app_user. username and email are unique."""

    __tablename__ = "app_user"

    username: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(String, nullable=False, index=True)
    first_name: Mapped[str] = mapped_column(String, nullable=False)
    last_name: Mapped[str] = mapped_column(String, nullable=False)
    middle_name: Mapped[str | None] = mapped_column(String, nullable=True)
