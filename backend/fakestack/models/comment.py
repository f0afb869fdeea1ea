"""
FakeStack Backend — Comment SQLAlchemy Model
==============================================

What:  ORM model for the `comments` table.
       A comment hangs off either a question or an answer: exactly one of
       question_id / answer_id is set (enforced by ck_comments_single_parent).
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from fakestack.database import Base


class Comment(Base):
    __tablename__ = "comments"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    text: Mapped[str] = mapped_column(Text, nullable=False)

    comment_by: Mapped[str] = mapped_column(String(100), nullable=False)

    comment_date_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    question_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    answer_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("answers.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    __table_args__ = (
        CheckConstraint(
            "(question_id IS NULL) <> (answer_id IS NULL)",
            name="ck_comments_single_parent",
        ),
    )

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, comment_by='{self.comment_by}')>"
