"""
FakeStack Backend — Tag Service
=================================

What:  Resolves caller-supplied tags to persisted, reusable Tag rows and
       reports how many questions use each tag.
How:   Stateless service; every method receives the request's AsyncSession.
       Database failures are caught here, logged, and reported to the caller
       as None / [] / StoreError (per method), never raised.
Who:   QuestionService.save_question and the /tag routes.
"""

import logging
from typing import Dict, Iterable, List, Optional, Union

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fakestack.models.question import Question
from fakestack.models.tag import Tag
from fakestack.results import StoreError, StoreResult
from fakestack.schemas.tag import TagInput

logger = logging.getLogger(__name__)


class TagService:
    """
    Business logic for tags.

    Responsibilities:
        - add_tag(): find-or-create a single tag by exact name
        - process_tags(): resolve a question's tag list, de-duplicated by name
        - get_tag_count_map(): tag name → number of questions carrying it
        - get_tag_by_name(): single tag lookup
    """

    async def add_tag(
        self,
        db: AsyncSession,
        name: str,
        description: str = "",
    ) -> Optional[Tag]:
        """
        Return the tag called `name`, creating it if it does not exist yet.

        An existing tag is returned unchanged; its description is not updated.

        Returns:
            The resolved Tag, or None if the lookup or the insert failed.
        """
        try:
            result = await db.execute(select(Tag).where(Tag.name == name))
            existing = result.scalar_one_or_none()
            if existing is not None:
                return existing

            tag = Tag(name=name, description=description or "")
            db.add(tag)
            await db.flush()
            logger.info("Tag created: %s (%s)", tag.name, tag.id)
            return tag

        except SQLAlchemyError as e:
            logger.error("Database error resolving tag '%s': %s", name, str(e))
            return None

    async def process_tags(
        self,
        db: AsyncSession,
        tags: Iterable[TagInput],
    ) -> List[Tag]:
        """
        Resolve every input tag through add_tag().

        Input tags are de-duplicated on their `name` before resolution; the
        first occurrence wins and the input order is preserved.

        Returns:
            One Tag per distinct name, or [] if any resolution failed. The
            caller must treat [] as a failure of the whole operation.
        """
        resolved: List[Tag] = []
        seen = set()

        for tag_input in tags:
            if tag_input.name in seen:
                continue
            seen.add(tag_input.name)

            tag = await self.add_tag(db, tag_input.name, tag_input.description or "")
            if tag is None:
                logger.warning("Tag resolution failed for '%s'; rejecting tag list", tag_input.name)
                return []
            resolved.append(tag)

        return resolved

    async def get_tag_count_map(
        self,
        db: AsyncSession,
    ) -> Union[Dict[str, int], None, StoreError]:
        """
        Count how many questions reference each tag.

        Returns:
            StoreError  if either the tag or the question lookup fails
            None        if no tags exist at all
            dict        tag name → question count; every tag is present,
                        with 0 for tags no question uses
        """
        try:
            tag_result = await db.execute(select(Tag))
            tags = list(tag_result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing tags: %s", str(e))
            return StoreError(error="Error when fetching tags")

        try:
            question_result = await db.execute(select(Question))
            questions = list(question_result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing questions for tag counts: %s", str(e))
            return StoreError(error="Error when fetching questions")

        if not tags:
            return None

        counts: Dict[str, int] = {tag.name: 0 for tag in tags}
        for question in questions:
            for tag in question.tags:
                if tag.name in counts:
                    counts[tag.name] += 1

        return counts

    async def get_tag_by_name(self, db: AsyncSession, name: str) -> StoreResult[Tag]:
        try:
            result = await db.execute(select(Tag).where(Tag.name == name))
            tag = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching tag '%s': %s", name, str(e))
            return StoreError(error=f"Error when fetching tag: {name}")

        if tag is None:
            return StoreError(error=f"Tag not found: {name}")
        return tag


# ── Singleton Instance ────────────────────────────────────────────────────
tag_service = TagService()
