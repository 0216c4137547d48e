from sqlalchemy import Column, Integer, ForeignKey, Text, DateTime, JSON
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from interview_coach.db.base import Base


class SessionFeedback(Base):
    __tablename__ = "session_feedback"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(
        Integer,
        ForeignKey("practice_sessions.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )

    overall_score = Column(Integer, nullable=True)  # 1-100
    rubric_scores = Column(JSON, nullable=True)  # {"clarity": 85, "structure": 70, ...}
    strengths = Column(JSON, nullable=True)
    improvements = Column(JSON, nullable=True)
    summary = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    session = relationship("PracticeSession", back_populates="feedback")
