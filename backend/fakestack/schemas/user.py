"""
FakeStack Backend — User Schemas
==================================

What:  Request body for the account endpoints and the safe user projection.
How:   Request fields are Optional so that a missing username/password reaches
       the handler, which answers 400 "Invalid user body" itself instead of
       FastAPI's generic 422.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import Field

from fakestack.models.user import User
from fakestack.schemas.common import WireModel
from fakestack.utils import as_utc


class UserCredentialsRequest(WireModel):
    """Body of POST /user/signup, POST /user/login and PATCH /user/resetPassword."""
    username: Optional[str] = None
    password: Optional[str] = None


class SafeUserResponse(WireModel):
    """A user with the password omitted. The only user shape the API returns."""
    id: uuid.UUID = Field(alias="_id")
    username: str
    date_joined: datetime

    @classmethod
    def from_user(cls, user: User) -> "SafeUserResponse":
        return cls(id=user.id, username=user.username, date_joined=as_utc(user.date_joined))
