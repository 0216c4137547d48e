"""
Dashboard statistics for one user.
"""
import math
from datetime import date, datetime, timedelta, timezone
from typing import Dict, Any, Iterable, Optional

from sqlalchemy.orm import Session

from interview_coach.db.models import SessionStatus
from interview_coach.services import storage


def _utc_date(value: datetime) -> date:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.date()


def compute_streak(completed_days: Iterable[date], today: date) -> int:
    """
    Consecutive days with a completed session, ending today or yesterday.
    
    A streak that last advanced yesterday is still alive until today ends.
    """
    days = set(completed_days)
    cursor = today if today in days else today - timedelta(days=1)
    streak = 0
    while cursor in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def get_user_stats(db: Session, user_id: str, today: Optional[date] = None) -> Dict[str, Any]:
    sessions = storage.get_sessions(db, user_id)
    completed = [s for s in sessions if SessionStatus(s.status) is SessionStatus.COMPLETED]

    feedback_by_session = storage.get_feedback_for_sessions(db, [s.id for s in completed])
    scores = [
        feedback_by_session[s.id].overall_score
        for s in completed
        if s.id in feedback_by_session and feedback_by_session[s.id].overall_score
    ]

    today = today or datetime.now(timezone.utc).date()
    streak = compute_streak(
        (_utc_date(s.completed_at) for s in completed if s.completed_at),
        today,
    )

    return {
        "total_sessions": len(sessions),
        "completed_sessions": len(completed),
        "average_score": round_half_up(sum(scores) / len(scores)) if scores else None,
        "streak": streak,
    }
