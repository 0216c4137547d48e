"""
Account management for first-party users and Google sign-ins.
"""
import logging
import uuid
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from interview_coach.core.errors import ValidationError
from interview_coach.core.security import hash_password, verify_password
from interview_coach.db.models import User

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: str) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.lower()).first()


def create_local_user(
    db: Session,
    email: str,
    password: str,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
) -> User:
    """
    Register an email/password account.
    
    Raises:
        ValidationError: email already registered
    """
    email = email.lower()
    if get_user_by_email(db, email):
        raise ValidationError.for_fields("Email already registered", {"email": ["Email already registered"]})

    user = User(
        id=uuid.uuid4().hex,
        email=email,
        first_name=first_name,
        last_name=last_name,
        password_hash=hash_password(password),
        auth_provider="local",
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"User created: user_id={user.id}")
    return user


def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    user = get_user_by_email(db, email)
    if not user or user.auth_provider != "local":
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def google_user_id(sub: str) -> str:
    return f"google:{sub}"


def upsert_google_user(db: Session, profile: Dict[str, Any]) -> User:
    """Create or refresh the users row for a Google identity."""
    user_id = google_user_id(profile["id"])
    user = get_user(db, user_id)
    if user is None:
        user = User(id=user_id, auth_provider="google")
        db.add(user)
    email = profile.get("email")
    # Don't steal a unique email already bound to a local account
    if email and (user.email == email.lower() or not get_user_by_email(db, email)):
        user.email = email.lower()
    user.first_name = profile.get("given_name") or user.first_name
    user.last_name = profile.get("family_name") or user.last_name
    user.profile_image_url = profile.get("picture") or user.profile_image_url
    db.commit()
    db.refresh(user)
    return user


def split_name(name: Optional[str]) -> tuple:
    parts = (name or "").split(" ")
    return parts[0], " ".join(parts[1:])


def local_profile(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "first_name": user.first_name or "",
        "last_name": user.last_name or "",
        "profile_image_url": user.profile_image_url,
        "auth_provider": user.auth_provider,
    }


def google_profile(google_user: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize a session-stored Google profile to the /api/auth/user shape."""
    first, last = split_name(google_user.get("name"))
    return {
        "id": google_user_id(google_user["id"]),
        "email": google_user.get("email"),
        "first_name": google_user.get("given_name") or first,
        "last_name": google_user.get("family_name") or last,
        "profile_image_url": google_user.get("picture"),
        "auth_provider": "google",
    }
