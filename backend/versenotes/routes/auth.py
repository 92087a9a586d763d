"""
VerseNotes Backend — Signup/Login Route Handlers
==================================================

What:  POST /api/signup and POST /api/login.
Who:   Called by the web client's account forms.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from versenotes.database import get_db_session
from versenotes.dependencies import get_user_service
from versenotes.schemas.auth import CredentialsRequest, LoginResponse, SignupResponse
from versenotes.services.user_service import UserService

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post(
    "/signup",
    response_model=SignupResponse,
    responses={200: {"description": "Registered, or success=false with a reason"}},
    summary="Register a new user",
)
async def signup(
    payload: CredentialsRequest,
    db: AsyncSession = Depends(get_db_session),
    users: UserService = Depends(get_user_service),
) -> SignupResponse:
    """
    Create an account from email + password.

    Failure bodies (HTTP 200, success=false):
        "Email and password are required"
        "Email already registered"
        "Server error during signup"
    """
    return await users.signup(db=db, email=payload.email, password=payload.password)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={200: {"description": "Verified, or success=false with a reason"}},
    summary="Verify email + password",
)
async def login(
    payload: CredentialsRequest,
    db: AsyncSession = Depends(get_db_session),
    users: UserService = Depends(get_user_service),
) -> LoginResponse:
    """Returns the user's id and email on success; no token is issued."""
    return await users.login(db=db, email=payload.email, password=payload.password)
