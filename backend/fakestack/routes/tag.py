"""
FakeStack Backend — Tag Route Handlers
========================================

What:  /tag endpoints: per-tag question counts and single-tag lookup.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fakestack.database import get_db_session
from fakestack.exceptions import DatabaseError
from fakestack.results import is_error, unwrap
from fakestack.schemas.common import ErrorResponse
from fakestack.schemas.tag import TagCountResponse, TagResponse
from fakestack.services.tag_service import tag_service

router = APIRouter(prefix="/tag", tags=["Tags"])


@router.get(
    "/getTagsWithQuestionNumber",
    response_model=List[TagCountResponse],
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="Every tag with the number of questions using it",
)
async def get_tags_with_question_number(
    db: AsyncSession = Depends(get_db_session),
) -> List[TagCountResponse]:
    """An empty list when no tag exists yet."""
    counts = await tag_service.get_tag_count_map(db)
    if is_error(counts):
        raise DatabaseError(
            message="Could not count tags. Please try again.",
            context={"reason": counts.error},
        )
    if counts is None:
        return []
    return [TagCountResponse(name=name, qcnt=qcnt) for name, qcnt in counts.items()]


@router.get(
    "/getTagByName/{name}",
    response_model=TagResponse,
    responses={500: {"description": "Not found or store error", "model": ErrorResponse}},
)
async def get_tag_by_name(
    name: str,
    db: AsyncSession = Depends(get_db_session),
) -> TagResponse:
    tag = unwrap(await tag_service.get_tag_by_name(db, name), "Could not fetch the tag.")
    return TagResponse.from_tag(tag)
