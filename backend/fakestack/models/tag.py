"""
FakeStack Backend — Tag SQLAlchemy Model
==========================================

What:  ORM model for the `tags` table.

Lifecycle:
    Created lazily the first time a question references an unseen name,
    reused by every later question with the same name, never deleted.
    The unique index on `name` makes the database the arbiter when two
    requests introduce the same tag at once.
"""

import uuid

from sqlalchemy import String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from fakestack.database import Base


class Tag(Base):
    __tablename__ = "tags"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # Case-sensitive: "Python" and "python" are different tags
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        comment="Unique, case-sensitive tag name",
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        comment="Set when the tag is first created; never updated afterwards",
    )

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name='{self.name}')>"
