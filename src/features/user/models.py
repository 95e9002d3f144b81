"""User domain models."""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from src.database.base import Base, CreatedAtMixin, UUIDPrimaryKeyMixin


class User(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    """Registered golfer.

    Rows are created on registration and never deleted by the auth feature.
    """

    __tablename__ = "users"

    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Compared case-sensitively, exactly as stored
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)

    # Authentication
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # Audit
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
