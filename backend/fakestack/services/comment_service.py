"""
FakeStack Backend — Comment Service
=====================================

What:  Attaches a comment to a question or to an answer.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fakestack.models.answer import Answer
from fakestack.models.comment import Comment
from fakestack.models.question import Question
from fakestack.results import StoreError, StoreResult
from fakestack.utils import parse_id

logger = logging.getLogger(__name__)

COMMENT_TARGETS = {"question": Question, "answer": Answer}


class CommentService:

    async def add_comment(
        self,
        db: AsyncSession,
        target_id: str,
        target_type: str,
        text: str,
        comment_by: str,
    ) -> StoreResult[Comment]:
        """
        Store a comment on the question or answer `target_id`.

        Args:
            target_type: "question" or "answer"

        Returns:
            The stored Comment, or StoreError for an unknown type, a malformed
            or unknown id, or a failed write.
        """
        model = COMMENT_TARGETS.get(target_type)
        if model is None:
            return StoreError(error=f"Invalid comment target: {target_type}")

        parent_id = parse_id(target_id)
        if parent_id is None:
            return StoreError(error=f"Invalid {target_type} id: {target_id}")

        try:
            result = await db.execute(select(model).where(model.id == parent_id))
            parent = result.scalar_one_or_none()
            if parent is None:
                return StoreError(error=f"{target_type.capitalize()} not found!")

            comment = Comment(
                text=text,
                comment_by=comment_by,
                comment_date_time=datetime.now(timezone.utc),
            )
            parent.comments.append(comment)
            await db.flush()
            logger.info("Comment %s added to %s %s", comment.id, target_type, parent.id)
            return comment

        except SQLAlchemyError as e:
            logger.error("Database error adding comment to %s %s: %s", target_type, target_id, str(e))
            return StoreError(error="Error when adding comment")


comment_service = CommentService()
