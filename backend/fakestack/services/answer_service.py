"""
FakeStack Backend — Answer Service
====================================

What:  Attaches a new answer to an existing question.
How:   The answer is appended to the question's `answers` collection, so it
       is stored and linked in one flush; answers never exist on their own.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fakestack.models.answer import Answer
from fakestack.results import StoreError, StoreResult
from fakestack.services.question_service import question_service
from fakestack.utils import parse_id

logger = logging.getLogger(__name__)


class AnswerService:

    async def add_answer_to_question(
        self,
        db: AsyncSession,
        qid: str,
        text: str,
        ans_by: str,
    ) -> StoreResult[Answer]:
        """
        Store an answer under question `qid`.

        Returns:
            The stored Answer, or StoreError if the id is malformed, the
            question does not exist, or the write failed.
        """
        question_id = parse_id(qid)
        if question_id is None:
            return StoreError(error=f"Invalid question id: {qid}")

        try:
            question = await question_service.get_question_by_id(db, question_id)
            if question is None:
                return StoreError(error="Question not found!")

            answer = Answer(
                text=text,
                ans_by=ans_by,
                ans_date_time=datetime.now(timezone.utc),
                comments=[],
            )
            question.answers.append(answer)
            await db.flush()
            logger.info("Answer %s added to question %s by %s", answer.id, question.id, ans_by)
            return answer

        except SQLAlchemyError as e:
            logger.error("Database error adding answer to %s: %s", qid, str(e))
            return StoreError(error="Error when adding answer to question")


answer_service = AnswerService()
