"""
FakeStack Backend — Question Service
======================================

What:  Creates questions, tracks views, applies votes, lists, orders and
       searches questions.
How:   Stateless service; every method receives the request's AsyncSession.
       Expected failures (unknown id, database errors) come back as
       StoreError or None, never as exceptions.
Who:   Called by the /question routes (and AnswerService / CommentService
       to re-read a question).

Vote Toggle:
    Each (question, user) pair has at most one QuestionVote row holding
    vote_type 'up' or 'down'.
        no row            + vote X → insert row X            "Question Xvoted successfully"
        row with X        + vote X → delete row              "Xvote cancelled successfully"
        row with opposite + vote X → flip row to X           "Question Xvoted successfully"
    upVotes / downVotes are projections of those rows.

Search Syntax:
    Whitespace-separated free-text words and [tagName] filters, e.g.
        "react hooks [javascript]"
    A question matches if its title or text contains any word
    (case-insensitive) OR it carries any of the bracketed tags (exact name).
"""

import logging
import re
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fakestack.models.question import Question, QuestionView, QuestionVote, VoteType
from fakestack.models.tag import Tag
from fakestack.results import StoreError, StoreResult
from fakestack.schemas.question import VoteResponse
from fakestack.utils import as_utc, parse_id

logger = logging.getLogger(__name__)

_TAG_FILTER = re.compile(r"\[([^\]]*)\]")

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


# ── Orderings ─────────────────────────────────────────────────────────────
# Each ordering receives the questions already sorted newest-first and
# returns the list to show. Python's sort is stable, so ties keep newest-first.


def _newest(questions: List[Question]) -> List[Question]:
    return questions


def _unanswered(questions: List[Question]) -> List[Question]:
    return [q for q in questions if not q.answers]


def _active(questions: List[Question]) -> List[Question]:
    answered = [q for q in questions if q.answers]
    unanswered = [q for q in questions if not q.answers]
    answered.sort(key=lambda q: as_utc(q.latest_answer_time), reverse=True)
    return answered + unanswered


def _most_viewed(questions: List[Question]) -> List[Question]:
    return sorted(questions, key=lambda q: len(q.views), reverse=True)


ORDERINGS: Dict[str, Callable[[List[Question]], List[Question]]] = {
    "newest": _newest,
    "unanswered": _unanswered,
    "active": _active,
    "mostViewed": _most_viewed,
}

DEFAULT_ORDER = "newest"


def parse_search(search: str) -> Tuple[List[str], List[str]]:
    """
    Split a search string into (keywords, tag names).

    >>> parse_search("hooks [react] State")
    (['hooks', 'state'], ['react'])
    """
    tag_names = [name.strip() for name in _TAG_FILTER.findall(search) if name.strip()]
    keywords = [word.lower() for word in _TAG_FILTER.sub(" ", search).split()]
    return keywords, tag_names


class QuestionService:
    """
    Business logic layer for question operations.

    Error Handling Strategy:
        SQLAlchemyError raised by a query or flush is logged and turned into a
        StoreError. get_questions_by_order() is the exception: a listing has no
        partial result to report, so its errors propagate to the handler.
    """

    async def get_question_by_id(
        self,
        db: AsyncSession,
        qid: uuid.UUID,
    ) -> Optional[Question]:
        """Load one question with tags, answers, views, votes and comments resolved."""
        result = await db.execute(select(Question).where(Question.id == qid))
        return result.scalar_one_or_none()

    async def save_question(
        self,
        db: AsyncSession,
        title: str,
        text: str,
        asked_by: str,
        tags: Sequence[Tag],
    ) -> StoreResult[Question]:
        """
        Persist a new question with a server-assigned askDateTime.

        Args:
            tags: Resolved tags (see TagService.process_tags). Duplicates by
                  name are dropped here as well.

        Returns:
            The stored Question, or StoreError if a required field is empty,
            no tag remains, or the insert failed.
        """
        unique_tags: List[Tag] = []
        seen = set()
        for tag in tags:
            if tag.name not in seen:
                seen.add(tag.name)
                unique_tags.append(tag)

        if not title or not text or not asked_by or not unique_tags:
            return StoreError(error="Question requires a title, text, askedBy and at least one tag")

        try:
            question = Question(
                title=title,
                text=text,
                asked_by=asked_by,
                ask_date_time=datetime.now(timezone.utc),
                tags=unique_tags,
                answers=[],
                views=[],
                votes=[],
                comments=[],
            )
            db.add(question)
            await db.flush()
            logger.info("Question created: %s by %s (%d tags)", question.id, asked_by, len(unique_tags))
            return question

        except SQLAlchemyError as e:
            logger.error("Database error saving question: %s", str(e), exc_info=True)
            return StoreError(error="Error when saving a question")

    async def fetch_and_increment_question_views_by_id(
        self,
        db: AsyncSession,
        qid: str,
        username: str,
    ) -> Union[Question, None, StoreError]:
        """
        Load a question and record that `username` viewed it.

        The username is added to views only if it is not already there.

        Returns:
            Question    the updated question, fully resolved
            None        no question has this id
            StoreError  malformed id or database failure
        """
        question_id = parse_id(qid)
        if question_id is None:
            return StoreError(error=f"Invalid question id: {qid}")

        try:
            question = await self.get_question_by_id(db, question_id)
            if question is None:
                return None

            if username not in question.view_usernames:
                question.views.append(QuestionView(username=username))
                await db.flush()
                logger.debug("Question %s viewed by %s", question.id, username)

            return question

        except SQLAlchemyError as e:
            logger.error("Database error fetching question %s: %s", qid, str(e))
            return StoreError(error="Error when fetching and updating a question")

    async def get_questions_by_order(
        self,
        db: AsyncSession,
        order: Optional[str] = DEFAULT_ORDER,
    ) -> List[Question]:
        """
        Return every question sorted by the named ordering.

        Recognized orders: newest (default), unanswered, active, mostViewed.
        Any other token falls back to newest.

        Raises:
            SQLAlchemyError: the listing query failed
        """
        ordering = ORDERINGS.get(order or DEFAULT_ORDER)
        if ordering is None:
            logger.debug("Unknown question order '%s'; using %s", order, DEFAULT_ORDER)
            ordering = ORDERINGS[DEFAULT_ORDER]

        result = await db.execute(select(Question).order_by(desc(Question.ask_date_time)))
        questions = list(result.scalars().all())

        # Re-sort in Python as well: rows created earlier in this session
        # carry aware datetimes, rows read back from SQLite naive ones.
        questions.sort(key=lambda q: as_utc(q.ask_date_time) or _EPOCH, reverse=True)
        return ordering(questions)

    def filter_questions_by_search(
        self,
        questions: List[Question],
        search: Optional[str],
    ) -> List[Question]:
        """
        Keep the questions matching a search string.

        An empty or blank search returns the input list unchanged.
        """
        if not search or not search.strip():
            return questions

        keywords, tag_names = parse_search(search)
        if not keywords and not tag_names:
            return questions

        def matches(question: Question) -> bool:
            title = question.title.lower()
            text = question.text.lower()
            if any(word in title or word in text for word in keywords):
                return True
            return any(tag.name in tag_names for tag in question.tags)

        return [q for q in questions if matches(q)]

    async def add_vote_to_question(
        self,
        db: AsyncSession,
        qid: str,
        username: str,
        vote_type: VoteType,
    ) -> StoreResult[VoteResponse]:
        """
        Apply an up/down vote with toggle semantics (see module docstring).

        Returns:
            VoteResponse with the message and the resulting vote lists, or
            StoreError if the question does not exist or the write failed.
        """
        question_id = parse_id(qid)
        if question_id is None:
            return StoreError(error=f"Invalid question id: {qid}")

        label = vote_type.value  # "up" / "down"

        try:
            question = await self.get_question_by_id(db, question_id)
            if question is None:
                return StoreError(error="Question not found!")

            current = next((v for v in question.votes if v.username == username), None)

            if current is not None and current.vote_type == vote_type:
                question.votes.remove(current)
                msg = f"{label.capitalize()}vote cancelled successfully"
            elif current is not None:
                current.vote_type = vote_type
                msg = f"Question {label}voted successfully"
            else:
                question.votes.append(QuestionVote(username=username, vote_type=vote_type))
                msg = f"Question {label}voted successfully"

            await db.flush()
            logger.info("Vote on %s by %s: %s", question.id, username, msg)

            return VoteResponse(
                msg=msg,
                up_votes=question.up_votes,
                down_votes=question.down_votes,
            )

        except SQLAlchemyError as e:
            logger.error("Database error voting on question %s: %s", qid, str(e))
            return StoreError(error=f"Error when adding {label}vote to question")


# ── Singleton Instance ────────────────────────────────────────────────────
question_service = QuestionService()
