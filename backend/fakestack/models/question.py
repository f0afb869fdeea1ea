"""
FakeStack Backend — Question SQLAlchemy Models
================================================

What:  ORM models for questions and the per-user rows hanging off them:
       `questions`, `question_tags`, `question_views`, `question_votes`.
How:   Every collection on Question is loaded with lazy="selectin", so a
       plain SELECT of questions returns them fully resolved (tags, answers
       with their comments, views, votes, comments). Async sessions cannot
       lazy-load on attribute access.

Table Design:
    - question_tags: association rows; the (question_id, tag_id) primary key
      stops a tag being attached twice to the same question
    - question_views: one row per (question, username); the unique constraint
      keeps `views` free of duplicates
    - question_votes: one row per (question, username) holding a single
      vote_type. `upVotes` / `downVotes` are derived from it when reading,
      so a user can never appear in both lists.
"""

import enum
import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fakestack.database import Base
from fakestack.models.tag import Tag
from fakestack.utils import as_utc

if TYPE_CHECKING:
    from fakestack.models.answer import Answer
    from fakestack.models.comment import Comment


class VoteType(str, enum.Enum):
    UP = "up"
    DOWN = "down"


question_tags = Table(
    "question_tags",
    Base.metadata,
    Column(
        "question_id",
        Uuid,
        ForeignKey("questions.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        Uuid,
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class QuestionView(Base):
    """A username that has opened a question. At most one row per pair."""

    __tablename__ = "question_views"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    question_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
    )
    username: Mapped[str] = mapped_column(String(100), nullable=False)

    __table_args__ = (
        UniqueConstraint("question_id", "username", name="uq_question_views_user"),
    )


class QuestionVote(Base):
    """The current vote of one user on one question."""

    __tablename__ = "question_votes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    question_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
    )
    username: Mapped[str] = mapped_column(String(100), nullable=False)
    vote_type: Mapped[VoteType] = mapped_column(
        Enum(
            VoteType,
            name="vote_type",
            native_enum=False,
            values_callable=lambda members: [m.value for m in members],
        ),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("question_id", "username", name="uq_question_votes_user"),
    )


class Question(Base):
    """
    A question posted to the forum.

    Query Patterns:
        - Single question: SELECT ... WHERE id = :uuid (+ selectin loads)
        - Listing: SELECT ... ORDER BY ask_date_time DESC
          → Uses idx_questions_ask_date_time
    """

    __tablename__ = "questions"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    text: Mapped[str] = mapped_column(Text, nullable=False)

    asked_by: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Username of the author",
    )

    ask_date_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        comment="When the question was asked (UTC)",
    )

    # ── Relationships ─────────────────────────────────────────────────────
    tags: Mapped[List[Tag]] = relationship(
        secondary=question_tags,
        lazy="selectin",
    )

    answers: Mapped[List["Answer"]] = relationship(
        back_populates="question",
        lazy="selectin",
        order_by="Answer.ans_date_time",
        cascade="all, delete-orphan",
    )

    views: Mapped[List[QuestionView]] = relationship(
        lazy="selectin",
        order_by=QuestionView.id,
        cascade="all, delete-orphan",
    )

    votes: Mapped[List[QuestionVote]] = relationship(
        lazy="selectin",
        order_by=QuestionVote.id,
        cascade="all, delete-orphan",
    )

    comments: Mapped[List["Comment"]] = relationship(
        primaryjoin="Question.id == Comment.question_id",
        lazy="selectin",
        order_by="Comment.comment_date_time",
        cascade="all",
    )

    __table_args__ = (
        Index("idx_questions_ask_date_time", ask_date_time.desc()),
    )

    # ── Derived projections ───────────────────────────────────────────────
    @property
    def view_usernames(self) -> List[str]:
        return [view.username for view in self.views]

    @property
    def up_votes(self) -> List[str]:
        return [vote.username for vote in self.votes if vote.vote_type == VoteType.UP]

    @property
    def down_votes(self) -> List[str]:
        return [vote.username for vote in self.votes if vote.vote_type == VoteType.DOWN]

    @property
    def latest_answer_time(self) -> Optional[datetime]:
        """Most recent answer date, or None for an unanswered question."""
        if not self.answers:
            return None
        return max(as_utc(answer.ans_date_time) for answer in self.answers)

    def __repr__(self) -> str:
        return f"<Question(id={self.id}, title='{self.title}', asked_by='{self.asked_by}')>"


# Answer and Comment are referenced by name above; importing them here
# registers their mappers whenever Question is imported.
from fakestack.models import answer as _answer  # noqa: E402,F401
from fakestack.models import comment as _comment  # noqa: E402,F401
