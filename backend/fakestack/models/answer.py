"""
FakeStack Backend — Answer SQLAlchemy Model
=============================================

What:  ORM model for the `answers` table.
       An answer belongs to exactly one question and is deleted with it.
"""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, List

from sqlalchemy import DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fakestack.database import Base

if TYPE_CHECKING:
    from fakestack.models.comment import Comment
    from fakestack.models.question import Question


class Answer(Base):
    __tablename__ = "answers"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    question_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    text: Mapped[str] = mapped_column(Text, nullable=False)

    ans_by: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Username of the author",
    )

    ans_date_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    question: Mapped["Question"] = relationship(back_populates="answers")

    comments: Mapped[List["Comment"]] = relationship(
        primaryjoin="Answer.id == Comment.answer_id",
        lazy="selectin",
        order_by="Comment.comment_date_time",
        cascade="all",
    )

    def __repr__(self) -> str:
        return f"<Answer(id={self.id}, question_id={self.question_id}, ans_by='{self.ans_by}')>"
