"""
Persistence interface for templates, personas, sessions, messages, feedback and
user preferences.

Every function takes the SQLAlchemy session as its first argument and commits
its own write; there are no multi-statement transactions.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from interview_coach.core.errors import ValidationError
from interview_coach.db.models import (
    PracticeTemplate,
    InterviewerPersona,
    PracticeSession,
    SessionStatus,
    SessionMessage,
    MessageRole,
    SessionFeedback,
    UserPreferences,
)

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ============================================
# Templates & personas
# ============================================

def get_templates(db: Session) -> List[PracticeTemplate]:
    return db.query(PracticeTemplate).order_by(PracticeTemplate.id).all()


def get_template(db: Session, template_id: int) -> Optional[PracticeTemplate]:
    return db.query(PracticeTemplate).filter(PracticeTemplate.id == template_id).first()


def create_template(db: Session, **fields) -> PracticeTemplate:
    template = PracticeTemplate(**fields)
    db.add(template)
    db.commit()
    db.refresh(template)
    return template


def get_personas(db: Session) -> List[InterviewerPersona]:
    return db.query(InterviewerPersona).order_by(InterviewerPersona.id).all()


def get_persona(db: Session, persona_id: int) -> Optional[InterviewerPersona]:
    return db.query(InterviewerPersona).filter(InterviewerPersona.id == persona_id).first()


def create_persona(db: Session, **fields) -> InterviewerPersona:
    persona = InterviewerPersona(**fields)
    db.add(persona)
    db.commit()
    db.refresh(persona)
    return persona


# ============================================
# Sessions
# ============================================

def get_sessions(db: Session, user_id: str) -> List[PracticeSession]:
    """Owner's sessions, newest first."""
    return (
        db.query(PracticeSession)
        .filter(PracticeSession.user_id == user_id)
        .order_by(PracticeSession.created_at.desc(), PracticeSession.id.desc())
        .all()
    )


def get_session(db: Session, session_id: int, user_id: Optional[str] = None) -> Optional[PracticeSession]:
    """
    Fetch a session by id.
    
    When user_id is given, a session owned by someone else is treated as absent.
    """
    query = db.query(PracticeSession).filter(PracticeSession.id == session_id)
    if user_id is not None:
        query = query.filter(PracticeSession.user_id == user_id)
    return query.first()


def create_session(
    db: Session,
    user_id: str,
    template_id: Optional[int] = None,
    persona_id: Optional[int] = None,
    role: Optional[str] = None,
    company: Optional[str] = None,
) -> PracticeSession:
    session = PracticeSession(
        user_id=user_id,
        template_id=template_id,
        persona_id=persona_id,
        role=role,
        company=company,
        status=SessionStatus.SETUP,
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    return session


def update_session(db: Session, session_id: int, **updates: Any) -> Optional[PracticeSession]:
    """Apply updates; returns None (and writes nothing) if the session is gone."""
    session = get_session(db, session_id)
    if not session:
        return None
    target = updates.get("status")
    if target is not None and not SessionStatus(session.status).can_advance_to(SessionStatus(target)):
        raise ValidationError(f"Cannot move session from {SessionStatus(session.status).value} to {SessionStatus(target).value}")
    for key, value in updates.items():
        setattr(session, key, value)
    db.commit()
    db.refresh(session)
    return session


def delete_session(db: Session, session_id: int, user_id: Optional[str] = None) -> None:
    """Delete a session with its messages and feedback. Missing ids are a no-op."""
    session = get_session(db, session_id, user_id=user_id)
    if not session:
        return
    db.delete(session)
    db.commit()


# ============================================
# Messages
# ============================================

def get_session_messages(db: Session, session_id: int) -> List[SessionMessage]:
    return (
        db.query(SessionMessage)
        .filter(SessionMessage.session_id == session_id)
        .order_by(SessionMessage.created_at, SessionMessage.id)
        .all()
    )


def create_session_message(db: Session, session_id: int, role: MessageRole, content: str) -> SessionMessage:
    message = SessionMessage(session_id=session_id, role=MessageRole(role), content=content)
    db.add(message)
    db.commit()
    db.refresh(message)
    return message


# ============================================
# Feedback
# ============================================

def get_session_feedback(db: Session, session_id: int) -> Optional[SessionFeedback]:
    return db.query(SessionFeedback).filter(SessionFeedback.session_id == session_id).first()


def get_feedback_for_sessions(db: Session, session_ids: List[int]) -> Dict[int, SessionFeedback]:
    if not session_ids:
        return {}
    rows = db.query(SessionFeedback).filter(SessionFeedback.session_id.in_(session_ids)).all()
    return {row.session_id: row for row in rows}


def create_session_feedback(db: Session, session_id: int, **fields) -> SessionFeedback:
    feedback = SessionFeedback(session_id=session_id, **fields)
    db.add(feedback)
    db.commit()
    db.refresh(feedback)
    return feedback


# ============================================
# Preferences
# ============================================

def get_user_preferences(db: Session, user_id: str) -> Optional[UserPreferences]:
    return db.query(UserPreferences).filter(UserPreferences.user_id == user_id).first()


def upsert_user_preferences(
    db: Session,
    user_id: str,
    intent: Optional[str] = None,
    onboarding_complete: Optional[bool] = None,
) -> UserPreferences:
    """Insert or update the user's row; fields passed as None are left untouched."""
    prefs = get_user_preferences(db, user_id)
    if prefs is None:
        prefs = UserPreferences(user_id=user_id, onboarding_complete=False)
        db.add(prefs)
    if intent is not None:
        prefs.intent = intent
    if onboarding_complete is not None:
        prefs.onboarding_complete = onboarding_complete
    prefs.updated_at = utcnow()
    try:
        db.commit()
    except IntegrityError:
        # Lost an insert race on the unique user_id; update the winner's row instead
        db.rollback()
        logger.info(f"Preferences insert raced for user_id={user_id}, retrying as update")
        return upsert_user_preferences(db, user_id, intent=intent, onboarding_complete=onboarding_complete)
    db.refresh(prefs)
    return prefs
