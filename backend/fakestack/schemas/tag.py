"""
FakeStack Backend — Tag Schemas
=================================
"""

import uuid
from typing import Optional

from pydantic import Field

from fakestack.models.tag import Tag
from fakestack.schemas.common import WireModel


class TagInput(WireModel):
    """A tag as supplied inside a new question. Unknown names create the tag."""
    name: Optional[str] = None
    description: Optional[str] = ""


class TagResponse(WireModel):
    id: uuid.UUID = Field(alias="_id")
    name: str
    description: str

    @classmethod
    def from_tag(cls, tag: Tag) -> "TagResponse":
        return cls(id=tag.id, name=tag.name, description=tag.description or "")


class TagCountResponse(WireModel):
    """One entry of GET /tag/getTagsWithQuestionNumber."""
    name: str
    qcnt: int = Field(description="Number of questions carrying the tag")
