"""
Request identity resolution.

An identity comes either from a first-party login (user id stored in the
signed session cookie) or from a Google sign-in (profile stored in the same
cookie). API routes depend on get_current_user_id and answer 401 without one;
page routes call resolve_identity and redirect to the login path instead.
"""
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request

from interview_coach.core.errors import UnauthorizedError
from interview_coach.db.session import SessionLocal
from interview_coach.services.user_service import google_user_id

SESSION_USER_KEY = "user_id"
SESSION_GOOGLE_KEY = "google_user"
SESSION_OAUTH_STATE_KEY = "oauth_state"


def get_db():
    """Database session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@dataclass
class Identity:
    user_id: str
    provider: str
    name: Optional[str] = None
    email: Optional[str] = None
    picture: Optional[str] = None


def resolve_identity(request: Request) -> Optional[Identity]:
    """Identity carried by the request's session cookie, if any."""
    session = request.session
    user_id = session.get(SESSION_USER_KEY)
    if user_id:
        return Identity(user_id=user_id, provider="local")

    google_user = session.get(SESSION_GOOGLE_KEY)
    if google_user and google_user.get("id"):
        return Identity(
            user_id=google_user_id(google_user["id"]),
            provider="google",
            name=google_user.get("name"),
            email=google_user.get("email"),
            picture=google_user.get("picture"),
        )
    return None


def get_current_identity(request: Request) -> Identity:
    identity = resolve_identity(request)
    if identity is None:
        raise UnauthorizedError("Unauthorized")
    return identity


def get_current_user_id(identity: Identity = Depends(get_current_identity)) -> str:
    return identity.user_id
