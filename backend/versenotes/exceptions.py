"""
VerseNotes Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the failure cases a client can see.
Why:   Services raise a typed error; one set of global handlers (main.py)
       turns it into the response envelope. Route handlers stay free of
       try/except blocks.
How:   Each exception carries a user-facing message and an optional context
       dict that is logged but never returned to the client.

Response Contract:
    Every application error is reported as HTTP 200 with
        {"success": false, "message": "<exc.message>"}
    Clients branch on `success`, not on the status code.

Exception Hierarchy:
    VerseNotesError (base)
    ├── ValidationError   → required field missing
    ├── ConflictError     → email already registered
    ├── AuthError         → bad credentials / not permitted
    └── StorageError      → any database failure (details logged only)
"""

from typing import Any, Dict, Optional


class VerseNotesError(Exception):
    """
    Base exception for all VerseNotes application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(VerseNotesError):
    """
    Raised when a required request field is absent or empty.

    Only presence is checked; content is not otherwise sanitized.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        fields: Optional[list] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if fields:
            ctx["fields"] = fields
        super().__init__(message=message, context=ctx)
        self.fields = fields or []


class ConflictError(VerseNotesError):
    """
    Raised when a signup would duplicate an existing email.

    Raised both by the pre-insert lookup and when the database's unique
    constraint rejects the insert (two signups racing for the same email).
    """

    def __init__(
        self,
        message: str = "Email already registered",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthError(VerseNotesError):
    """
    Raised on failed login, or when the access policy denies an operation.

    The login message is identical for an unknown email and a wrong password
    so a caller cannot probe which accounts exist.
    """

    def __init__(
        self,
        message: str = "Invalid email or password",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StorageError(VerseNotesError):
    """
    Raised when a database operation fails.

    The message is an operation-level summary ("Server error creating post").
    The underlying driver error (constraint name, SQL, connection details)
    goes into context for the server log only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
