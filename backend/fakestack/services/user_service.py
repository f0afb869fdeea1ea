"""
FakeStack Backend — User Service
==================================

What:  Account persistence: signup, login, password reset, lookup, delete.
How:   Stateless service; every method receives the request's AsyncSession
       and returns a User or a StoreError. Passwords are stored as passlib
       hashes (scheme from settings.password_hash_scheme) and checked with
       CryptContext.verify.
Who:   Called by the /user routes.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fakestack.config import settings
from fakestack.models.user import User
from fakestack.results import StoreError, StoreResult

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=[settings.password_hash_scheme], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # Stored value is not a hash this context understands
        return False


class UserService:
    """
    Business logic for user accounts.

    Every method answers StoreError (never raises) when the user is missing,
    the credentials do not match, or the database call fails.
    """

    async def _find(self, db: AsyncSession, username: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def save_user(
        self,
        db: AsyncSession,
        username: str,
        password: str,
        date_joined: Optional[datetime] = None,
    ) -> StoreResult[User]:
        """
        Create an account.

        Args:
            date_joined: Server-assigned join time; defaults to now (UTC).

        Returns:
            The new User, or StoreError if a field is empty, the username is
            taken, or the insert failed.
        """
        if not username or not password:
            return StoreError(error="Username and password are required")

        try:
            if await self._find(db, username) is not None:
                return StoreError(error=f"Username already exists: {username}")

            user = User(
                username=username,
                password=hash_password(password),
                date_joined=date_joined or datetime.now(timezone.utc),
            )
            db.add(user)
            await db.flush()
            logger.info("User created: %s", username)
            return user

        except IntegrityError:
            # Concurrent signup won the unique index
            logger.warning("Signup raced on existing username: %s", username)
            return StoreError(error=f"Username already exists: {username}")
        except SQLAlchemyError as e:
            logger.error("Database error saving user %s: %s", username, str(e))
            return StoreError(error="Error when saving user")

    async def login_user(
        self,
        db: AsyncSession,
        username: str,
        password: str,
    ) -> StoreResult[User]:
        try:
            user = await self._find(db, username)
        except SQLAlchemyError as e:
            logger.error("Database error during login for %s: %s", username, str(e))
            return StoreError(error="Error when logging in")

        if user is None or not verify_password(password, user.password):
            logger.info("Failed login for %s", username)
            return StoreError(error="Invalid username or password")

        return user

    async def update_user(
        self,
        db: AsyncSession,
        username: str,
        password: str,
    ) -> StoreResult[User]:
        """Replace the password of an existing user; other fields are untouched."""
        try:
            user = await self._find(db, username)
            if user is None:
                return StoreError(error=f"User not found: {username}")

            user.password = hash_password(password)
            await db.flush()
            logger.info("Password reset for %s", username)
            return user

        except SQLAlchemyError as e:
            logger.error("Database error updating user %s: %s", username, str(e))
            return StoreError(error="Error when updating user")

    async def get_user_by_username(self, db: AsyncSession, username: str) -> StoreResult[User]:
        try:
            user = await self._find(db, username)
        except SQLAlchemyError as e:
            logger.error("Database error fetching user %s: %s", username, str(e))
            return StoreError(error="Error when fetching user")

        if user is None:
            return StoreError(error=f"User not found: {username}")
        return user

    async def delete_user_by_username(self, db: AsyncSession, username: str) -> StoreResult[User]:
        """Delete the account and return what it looked like."""
        try:
            user = await self._find(db, username)
            if user is None:
                return StoreError(error=f"User not found: {username}")

            await db.delete(user)
            await db.flush()
            logger.info("User deleted: %s", username)
            return user

        except SQLAlchemyError as e:
            logger.error("Database error deleting user %s: %s", username, str(e))
            return StoreError(error="Error when deleting user")


# ── Singleton Instance ────────────────────────────────────────────────────
user_service = UserService()
