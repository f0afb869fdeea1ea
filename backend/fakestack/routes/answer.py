"""
FakeStack Backend — Answer Route Handlers
===========================================

What:  POST /answer/addAnswer: attach an answer to a question.
Body:  {"qid": "<question id>", "ans": {"text": "...", "ansBy": "alice"}}
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fakestack.database import get_db_session
from fakestack.exceptions import ValidationError
from fakestack.results import unwrap
from fakestack.schemas.common import ErrorResponse
from fakestack.schemas.question import AddAnswerRequest, AnswerResponse
from fakestack.services.answer_service import answer_service
from fakestack.utils import parse_id

router = APIRouter(prefix="/answer", tags=["Answers"])


def is_answer_body_valid(body: AddAnswerRequest) -> bool:
    return bool(body.qid and body.ans and body.ans.text and body.ans.ans_by)


@router.post(
    "/addAnswer",
    response_model=AnswerResponse,
    responses={
        400: {"description": "Invalid answer (plain text)"},
        500: {"description": "Store error", "model": ErrorResponse},
    },
)
async def add_answer(
    body: AddAnswerRequest,
    db: AsyncSession = Depends(get_db_session),
) -> AnswerResponse:
    if not is_answer_body_valid(body):
        raise ValidationError("Invalid answer")
    if parse_id(body.qid) is None:
        raise ValidationError("Invalid ID format", field="qid")

    result = await answer_service.add_answer_to_question(
        db,
        qid=body.qid,
        text=body.ans.text,
        ans_by=body.ans.ans_by,
    )
    answer = unwrap(result, "Could not add the answer. Please try again.")
    return AnswerResponse.from_answer(answer)
