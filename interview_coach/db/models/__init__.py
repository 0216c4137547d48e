"""
Database models module.

Imports every model so they are registered with Base.metadata before table
creation and Alembic autogeneration.
"""
from interview_coach.db.models.user import User
from interview_coach.db.models.practice_template import PracticeTemplate
from interview_coach.db.models.interviewer_persona import InterviewerPersona
from interview_coach.db.models.practice_session import PracticeSession, SessionStatus
from interview_coach.db.models.session_message import SessionMessage, MessageRole
from interview_coach.db.models.session_feedback import SessionFeedback
from interview_coach.db.models.user_preferences import UserPreferences

__all__ = [
    "User",
    "PracticeTemplate",
    "InterviewerPersona",
    "PracticeSession",
    "SessionStatus",
    "SessionMessage",
    "MessageRole",
    "SessionFeedback",
    "UserPreferences",
]
