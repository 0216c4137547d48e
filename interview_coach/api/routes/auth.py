"""
First-party authentication: signup, login, logout and the current-user profile.
"""
import logging
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from interview_coach.core.auth_dependency import (
    SESSION_GOOGLE_KEY,
    SESSION_USER_KEY,
    Identity,
    get_current_identity,
    get_db,
)
from interview_coach.core.errors import UnauthorizedError
from interview_coach.schemas.auth import LoginRequest, SignupRequest, UserProfile
from interview_coach.services import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post("/auth/signup", status_code=status.HTTP_201_CREATED, response_model=UserProfile)
def signup(
    signup_data: SignupRequest,
    request: Request,
    db: Session = Depends(get_db)
):
    """Register an email/password account and sign it in."""
    user = user_service.create_local_user(
        db,
        email=signup_data.email,
        password=signup_data.password,
        first_name=signup_data.first_name,
        last_name=signup_data.last_name,
    )
    request.session.clear()
    request.session[SESSION_USER_KEY] = user.id
    return user_service.local_profile(user)


@router.post("/auth/login", status_code=status.HTTP_200_OK, response_model=UserProfile)
def login(
    login_data: LoginRequest,
    request: Request,
    db: Session = Depends(get_db)
):
    user = user_service.authenticate(db, login_data.email, login_data.password)
    if not user:
        logger.info("Login rejected: invalid credentials")
        raise UnauthorizedError("Invalid email or password")

    request.session.clear()
    request.session[SESSION_USER_KEY] = user.id
    logger.info(f"User logged in: user_id={user.id}")
    return user_service.local_profile(user)


@router.post("/logout", status_code=status.HTTP_200_OK)
def logout(request: Request):
    request.session.clear()
    return {"success": True}


@router.get("/logout")
def logout_redirect(request: Request):
    request.session.clear()
    return RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)


@router.get("/auth/user", status_code=status.HTTP_200_OK, response_model=UserProfile)
def get_auth_user(
    request: Request,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Normalized profile for either a local or a Google identity."""
    if identity.provider == "google":
        return user_service.google_profile(request.session[SESSION_GOOGLE_KEY])

    user = user_service.get_user(db, identity.user_id)
    if not user:
        # Account removed while the cookie was still valid
        request.session.clear()
        raise UnauthorizedError("Unauthorized")
    return user_service.local_profile(user)
