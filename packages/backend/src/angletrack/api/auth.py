"""Auth API — signup, login, current user.

Learn: Routes for user authentication:
- POST /auth/signup → create a new user account (no token)
- POST /auth/login → email/password → JWT access token
- GET /auth/me → current user info (requires bearer token)
"""

from fastapi import APIRouter, Depends

from angletrack.api.dependencies import get_record_service
from angletrack.auth.dependencies import get_current_user
from angletrack.auth.identity import Identity
from angletrack.schemas.user import (
    LoginRequest,
    ProfileRead,
    SignupRequest,
    SignupResponse,
    TokenResponse,
    UserRead,
)
from angletrack.services.record_service import RecordService

router = APIRouter(prefix="/auth")


@router.post("/signup", response_model=SignupResponse, status_code=201)
async def signup(
    body: SignupRequest,
    records: RecordService = Depends(get_record_service),
):
    """Create a new user account."""
    user = await records.signup(body.name, body.email, body.password)
    return SignupResponse(user=UserRead(name=user.name, email=user.email))


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    records: RecordService = Depends(get_record_service),
):
    """Login with email and password → JWT token."""
    token = await records.login(body.email, body.password)
    return TokenResponse(token=token, expires_in=records.tokens.expires_in)


@router.get("/me", response_model=ProfileRead)
async def get_me(
    identity: Identity = Depends(get_current_user),
    records: RecordService = Depends(get_record_service),
):
    """Get the current authenticated user's info."""
    return await records.get_profile(identity)
