"""
VerseNotes Backend — Signup/Login Schemas
===========================================

What:  Request and response bodies for POST /api/signup and POST /api/login.

Why request fields are Optional:
    A missing field must come back as {"success": false, "message": ...}
    with HTTP 200, not as FastAPI's automatic 422. The models accept absent
    fields and UserService performs the presence check.
"""

from typing import Optional

from pydantic import BaseModel, Field

from versenotes.schemas.common import ApiResponse


class CredentialsRequest(BaseModel):
    """Body of both /api/signup and /api/login."""
    email: Optional[str] = Field(default=None, description="Login identity")
    password: Optional[str] = Field(default=None, description="Plaintext password")


class SignupResponse(ApiResponse):
    message: str = Field(default="User registered successfully")
    user_id: int = Field(alias="userId", description="Identifier of the new user")
    email: str


class LoginResponse(ApiResponse):
    """
    Returned on successful login.

    Note: no token or session is issued. The client keeps userId and sends
    it with subsequent requests.
    """
    user_id: int = Field(alias="userId")
    email: str
