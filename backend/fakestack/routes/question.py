"""
FakeStack Backend — Question Route Handlers
=============================================

What:  /question endpoints: ask, vote, view, list/search.
How:   Validate the request, call the stores, turn a StoreError into
       DatabaseError (→ 500) and shape the result with the response models.

Validation failures answer 400 with a fixed plain-text body and never
reach a store:
    POST /question/addQuestion          "Invalid question body"
    POST /question/(up|down)voteQuestion "Invalid request"
    GET  /question/getQuestionById/{qid} "Invalid ID format" /
                                         "Invalid username requesting question."
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fakestack.database import get_db_session
from fakestack.exceptions import DatabaseError, ValidationError
from fakestack.models.question import VoteType
from fakestack.results import is_error, unwrap
from fakestack.schemas.common import ErrorResponse
from fakestack.schemas.question import (
    AddQuestionRequest,
    QuestionResponse,
    VoteRequest,
    VoteResponse,
)
from fakestack.services.question_service import DEFAULT_ORDER, question_service
from fakestack.services.tag_service import tag_service
from fakestack.utils import parse_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/question", tags=["Questions"])

_ERROR_RESPONSES = {
    400: {"description": "Invalid request (plain-text message)"},
    500: {"description": "Store error", "model": ErrorResponse},
}


def is_question_body_valid(body: AddQuestionRequest) -> bool:
    """Title, text, askedBy and at least one named tag must all be non-empty."""
    return bool(
        body.title
        and body.text
        and body.asked_by
        and body.tags
        and all(tag.name for tag in body.tags)
    )


@router.post(
    "/addQuestion",
    response_model=QuestionResponse,
    responses=_ERROR_RESPONSES,
    summary="Ask a new question",
)
async def add_question(
    body: AddQuestionRequest,
    db: AsyncSession = Depends(get_db_session),
) -> QuestionResponse:
    """
    Store a question and its tags.

    Workflow:
        1. Validate the body (400 on failure)
        2. Resolve tags by name, creating unseen ones, duplicates dropped
        3. Save the question with a server-assigned askDateTime
    An empty tag resolution or a failed save answers 500.
    """
    if not is_question_body_valid(body):
        raise ValidationError("Invalid question body")

    tags = await tag_service.process_tags(db, body.tags)
    if not tags:
        raise DatabaseError(
            message="Could not save the question. Please try again.",
            context={"reason": "Invalid tags"},
        )

    result = await question_service.save_question(
        db,
        title=body.title,
        text=body.text,
        asked_by=body.asked_by,
        tags=tags,
    )
    question = unwrap(result, "Could not save the question. Please try again.")
    return QuestionResponse.from_question(question)


async def _vote(body: VoteRequest, vote_type: VoteType, db: AsyncSession) -> VoteResponse:
    if not body.qid or not body.username:
        raise ValidationError("Invalid request")
    if parse_id(body.qid) is None:
        raise ValidationError("Invalid ID format", field="qid")

    result = await question_service.add_vote_to_question(db, body.qid, body.username, vote_type)
    return unwrap(result, f"Could not {vote_type.value}vote the question. Please try again.")


@router.post(
    "/upvoteQuestion",
    response_model=VoteResponse,
    responses=_ERROR_RESPONSES,
    summary="Upvote a question, or cancel an existing upvote",
)
async def upvote_question(
    body: VoteRequest,
    db: AsyncSession = Depends(get_db_session),
) -> VoteResponse:
    return await _vote(body, VoteType.UP, db)


@router.post(
    "/downvoteQuestion",
    response_model=VoteResponse,
    responses=_ERROR_RESPONSES,
    summary="Downvote a question, or cancel an existing downvote",
)
async def downvote_question(
    body: VoteRequest,
    db: AsyncSession = Depends(get_db_session),
) -> VoteResponse:
    return await _vote(body, VoteType.DOWN, db)


@router.get(
    "/getQuestionById/{qid}",
    response_model=QuestionResponse,
    responses=_ERROR_RESPONSES,
    summary="Get a question and record the viewer",
)
async def get_question_by_id(
    qid: str,
    username: Optional[str] = Query(default=None, description="User viewing the question"),
    db: AsyncSession = Depends(get_db_session),
) -> QuestionResponse:
    """
    Return one question, adding `username` to its views if not already there.

    A question that does not exist answers 500, like any other store failure.
    """
    if parse_id(qid) is None:
        raise ValidationError("Invalid ID format", field="qid")
    if not username:
        raise ValidationError("Invalid username requesting question.", field="username")

    result = await question_service.fetch_and_increment_question_views_by_id(db, qid, username)
    if result is None:
        raise DatabaseError(
            message="Could not fetch the question. Please try again.",
            context={"reason": "Question not found", "qid": qid},
        )
    if is_error(result):
        raise DatabaseError(
            message="Could not fetch the question. Please try again.",
            context={"reason": result.error, "qid": qid},
        )
    return QuestionResponse.from_question(result)


@router.get(
    "/getQuestion",
    response_model=List[QuestionResponse],
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="List questions in a given order, optionally filtered by a search string",
)
async def get_questions_by_filter(
    order: str = Query(
        default=DEFAULT_ORDER,
        description="newest, unanswered, active or mostViewed; anything else means newest",
    ),
    search: str = Query(
        default="",
        description="Free-text words and [tag] filters, e.g. 'hooks [react]'",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[QuestionResponse]:
    try:
        questions = await question_service.get_questions_by_order(db, order)
    except SQLAlchemyError as e:
        raise DatabaseError(
            message="Could not fetch questions. Please try again.",
            context={"error_type": type(e).__name__},
        )

    filtered = question_service.filter_questions_by_search(questions, search)
    logger.debug("getQuestion order=%s search=%r → %d of %d", order, search, len(filtered), len(questions))
    return [QuestionResponse.from_question(q) for q in filtered]
