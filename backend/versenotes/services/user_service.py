"""
VerseNotes Backend — User Service (Signup & Login)
====================================================

What:  Account creation and credential verification.
Who:   Called by the /api/signup and /api/login route handlers.

Signup and the duplicate-email race:
    Signup looks the email up first, then inserts. Two concurrent signups for
    the same email can both pass the lookup; the UNIQUE constraint on
    users.email then rejects the second insert. That IntegrityError is
    recognized and reported as the same ConflictError the lookup produces,
    so the client sees "Email already registered" either way.

Error Handling Strategy:
    Application errors (ValidationError, ConflictError, AuthError) propagate
    as-is. Anything else is logged and wrapped in StorageError with an
    operation-specific message.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from versenotes.database import is_unique_violation
from versenotes.exceptions import (
    AuthError,
    ConflictError,
    StorageError,
    ValidationError,
    VerseNotesError,
)
from versenotes.models import User
from versenotes.schemas.auth import LoginResponse, SignupResponse
from versenotes.services.password_hasher import PasswordHasher

logger = logging.getLogger(__name__)

CREDENTIALS_REQUIRED = "Email and password are required"
INVALID_CREDENTIALS = "Invalid email or password"


class UserService:
    """
    Business logic for user accounts.

    Args:
        hasher: PasswordHasher configured with the deployment's work factor.
    """

    def __init__(self, hasher: PasswordHasher):
        self.hasher = hasher

    async def signup(
        self,
        db: AsyncSession,
        email: str | None,
        password: str | None,
    ) -> SignupResponse:
        """
        Register a new user.

        Returns:
            SignupResponse with the new user's id and email

        Raises:
            ValidationError: email or password missing
            ConflictError: email already registered (lookup or unique constraint)
            StorageError: any other database failure
        """
        if not email or not password:
            raise ValidationError(message=CREDENTIALS_REQUIRED, fields=["email", "password"])

        try:
            result = await db.execute(select(User.id).where(User.email == email))
            if result.scalar_one_or_none() is not None:
                raise ConflictError()

            hashed = await self.hasher.hash(password)
            user = User(email=email, password=hashed)
            db.add(user)
            # Flush issues the INSERT now, inside this try block, so constraint
            # violations are seen here rather than at request-end commit
            await db.flush()

            logger.info("User registered: id=%s", user.id)
            return SignupResponse(
                message="User registered successfully",
                user_id=user.id,
                email=user.email,
            )

        except VerseNotesError:
            raise
        except IntegrityError as e:
            if is_unique_violation(e):
                logger.info("Signup lost duplicate-email race for %s", email)
                raise ConflictError(context={"constraint": "users.email"})
            logger.error("Signup error: %s", str(e))
            raise StorageError(
                message="Server error during signup",
                context={"error_type": type(e).__name__},
            )
        except Exception as e:
            logger.error("Signup error: %s", str(e), exc_info=True)
            raise StorageError(
                message="Server error during signup",
                context={"error_type": type(e).__name__},
            )

    async def login(
        self,
        db: AsyncSession,
        email: str | None,
        password: str | None,
    ) -> LoginResponse:
        """
        Verify credentials.

        Unknown email and wrong password both raise the same AuthError.
        No session or token is created.
        """
        if not email or not password:
            raise ValidationError(message=CREDENTIALS_REQUIRED, fields=["email", "password"])

        try:
            result = await db.execute(select(User).where(User.email == email))
            user = result.scalar_one_or_none()

            if user is None:
                raise AuthError(message=INVALID_CREDENTIALS)

            if not await self.hasher.verify(password, user.password):
                raise AuthError(message=INVALID_CREDENTIALS)

            return LoginResponse(user_id=user.id, email=user.email)

        except VerseNotesError:
            raise
        except Exception as e:
            logger.error("Login error: %s", str(e), exc_info=True)
            raise StorageError(
                message="Server error during login",
                context={"error_type": type(e).__name__},
            )
