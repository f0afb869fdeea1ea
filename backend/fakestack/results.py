"""
FakeStack Backend — Store Result Type
=======================================

What:  The two-variant return type of every store operation: either the
       success payload or a StoreError carrying the failure reason.
How:   Stores return `payload | StoreError`; handlers check it with
       is_error() or unwrap() before touching the payload.

Example:
    result = await user_service.get_user_by_username(db, "alice")
    user = unwrap(result, "Could not fetch the user")
    return SafeUserResponse.from_user(user)
"""

from dataclasses import dataclass
from typing import Any, TypeGuard, TypeVar, Union

from fakestack.exceptions import DatabaseError

T = TypeVar("T")


@dataclass(frozen=True)
class StoreError:
    """Failure reason reported by a store. Never carries a stack trace."""

    error: str


StoreResult = Union[T, StoreError]


def is_error(result: Any) -> TypeGuard[StoreError]:
    return isinstance(result, StoreError)


def unwrap(result: StoreResult[T], message: str = "A database error occurred. Please try again later.") -> T:
    """
    Return the payload of a successful result, or raise DatabaseError.

    Used by route handlers: the DatabaseError becomes a 500 response and
    rolls back the request's session.
    """
    if is_error(result):
        raise DatabaseError(message=message, context={"reason": result.error})
    return result
