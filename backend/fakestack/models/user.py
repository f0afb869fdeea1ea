"""
FakeStack Backend — User SQLAlchemy Model
===========================================

What:  ORM model for the `users` table.
Who:   Used by UserService for signup, login, password reset, lookup and delete.

Table Design:
    - username: unique, the handle shown on questions/answers/comments
    - password: passlib hash of the supplied password (never returned by the API)
    - date_joined: UTC timestamp assigned by the server at signup
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from fakestack.database import Base


class User(Base):
    """A forum account. Responses only ever expose the safe projection."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    username: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        comment="Unique, case-sensitive login name",
    )

    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Password hash produced by passlib",
    )

    date_joined: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        comment="When the account was created (UTC)",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
