"""
Practice session model: one interview attempt by one user.
"""
import enum

from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Enum, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from interview_coach.db.base import Base


class SessionStatus(str, enum.Enum):
    SETUP = "setup"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

    @property
    def rank(self) -> int:
        return _STATUS_ORDER.index(self)

    def can_advance_to(self, target: "SessionStatus") -> bool:
        """Status only moves forward; staying put is allowed."""
        return target.rank >= self.rank


_STATUS_ORDER = [SessionStatus.SETUP, SessionStatus.IN_PROGRESS, SessionStatus.COMPLETED]


class PracticeSession(Base):
    __tablename__ = "practice_sessions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    template_id = Column(Integer, ForeignKey("practice_templates.id"), nullable=True)
    persona_id = Column(Integer, ForeignKey("interviewer_personas.id"), nullable=True)
    role = Column(String, nullable=True)
    company = Column(String, nullable=True)
    status = Column(
        Enum(SessionStatus, native_enum=False, length=20, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=SessionStatus.SETUP,
    )
    started_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    template = relationship("PracticeTemplate")
    persona = relationship("InterviewerPersona")
    messages = relationship(
        "SessionMessage",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="SessionMessage.id",
    )
    feedback = relationship(
        "SessionFeedback",
        back_populates="session",
        cascade="all, delete-orphan",
        uselist=False,
    )

    __table_args__ = (
        Index("idx_practice_sessions_user_created", "user_id", "created_at"),
    )

    def __repr__(self):
        return f"<PracticeSession(id={self.id}, user_id='{self.user_id}', status='{self.status}')>"
