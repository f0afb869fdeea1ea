"""
FakeStack Backend — Comment Route Handlers
============================================

What:  POST /comment/addComment: comment on a question or an answer.
Body:  {"id": "<question or answer id>", "type": "question" | "answer",
        "comment": {"text": "...", "commentBy": "alice"}}
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fakestack.database import get_db_session
from fakestack.exceptions import ValidationError
from fakestack.results import unwrap
from fakestack.schemas.common import ErrorResponse
from fakestack.schemas.question import AddCommentRequest, CommentResponse
from fakestack.services.comment_service import COMMENT_TARGETS, comment_service
from fakestack.utils import parse_id

router = APIRouter(prefix="/comment", tags=["Comments"])


def is_comment_body_valid(body: AddCommentRequest) -> bool:
    return bool(
        body.id
        and body.type in COMMENT_TARGETS
        and body.comment
        and body.comment.text
        and body.comment.comment_by
    )


@router.post(
    "/addComment",
    response_model=CommentResponse,
    responses={
        400: {"description": "Invalid comment body (plain text)"},
        500: {"description": "Store error", "model": ErrorResponse},
    },
)
async def add_comment(
    body: AddCommentRequest,
    db: AsyncSession = Depends(get_db_session),
) -> CommentResponse:
    if not is_comment_body_valid(body):
        raise ValidationError("Invalid comment body")
    if parse_id(body.id) is None:
        raise ValidationError("Invalid ID format", field="id")

    result = await comment_service.add_comment(
        db,
        target_id=body.id,
        target_type=body.type,
        text=body.comment.text,
        comment_by=body.comment.comment_by,
    )
    comment = unwrap(result, "Could not add the comment. Please try again.")
    return CommentResponse.from_comment(comment)
