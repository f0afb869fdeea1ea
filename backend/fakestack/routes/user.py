"""
FakeStack Backend — User Route Handlers
=========================================

What:  /user endpoints: signup, login, password reset, lookup, delete.
How:   Every response carries the safe user projection (no password).
       A body missing username or password answers 400 "Invalid user body";
       any store failure (unknown user, bad credentials, duplicate username,
       database error) answers 500.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fakestack.database import get_db_session
from fakestack.exceptions import ValidationError
from fakestack.results import unwrap
from fakestack.schemas.common import ErrorResponse
from fakestack.schemas.user import SafeUserResponse, UserCredentialsRequest
from fakestack.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["Users"])

_ERROR_RESPONSES = {
    400: {"description": "Invalid user body (plain text)"},
    500: {"description": "Store error", "model": ErrorResponse},
}


def is_user_body_valid(body: UserCredentialsRequest) -> bool:
    return bool(body.username and body.password)


def _require_valid(body: UserCredentialsRequest) -> None:
    if not is_user_body_valid(body):
        raise ValidationError("Invalid user body")


@router.post("/signup", response_model=SafeUserResponse, responses=_ERROR_RESPONSES)
async def signup(
    body: UserCredentialsRequest,
    db: AsyncSession = Depends(get_db_session),
) -> SafeUserResponse:
    """Create an account; dateJoined is assigned here."""
    _require_valid(body)
    result = await user_service.save_user(
        db,
        username=body.username,
        password=body.password,
        date_joined=datetime.now(timezone.utc),
    )
    user = unwrap(result, "Could not create the user.")
    return SafeUserResponse.from_user(user)


@router.post("/login", response_model=SafeUserResponse, responses=_ERROR_RESPONSES)
async def login(
    body: UserCredentialsRequest,
    db: AsyncSession = Depends(get_db_session),
) -> SafeUserResponse:
    _require_valid(body)
    result = await user_service.login_user(db, username=body.username, password=body.password)
    user = unwrap(result, "Login failed.")
    return SafeUserResponse.from_user(user)


@router.patch("/resetPassword", response_model=SafeUserResponse, responses=_ERROR_RESPONSES)
async def reset_password(
    body: UserCredentialsRequest,
    db: AsyncSession = Depends(get_db_session),
) -> SafeUserResponse:
    _require_valid(body)
    result = await user_service.update_user(db, username=body.username, password=body.password)
    user = unwrap(result, "Could not update the user.")
    return SafeUserResponse.from_user(user)


# A request without the path segment (/user/getUser/) matches no route
# and is answered 404 by the router.
@router.get("/getUser/{username}", response_model=SafeUserResponse, responses=_ERROR_RESPONSES)
async def get_user(
    username: str,
    db: AsyncSession = Depends(get_db_session),
) -> SafeUserResponse:
    result = await user_service.get_user_by_username(db, username)
    user = unwrap(result, "Could not fetch the user.")
    return SafeUserResponse.from_user(user)


@router.delete("/deleteUser/{username}", response_model=SafeUserResponse, responses=_ERROR_RESPONSES)
async def delete_user(
    username: str,
    db: AsyncSession = Depends(get_db_session),
) -> SafeUserResponse:
    result = await user_service.delete_user_by_username(db, username)
    user = unwrap(result, "Could not delete the user.")
    return SafeUserResponse.from_user(user)
