import enum

from sqlalchemy import Column, Integer, ForeignKey, Text, DateTime, Enum, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from interview_coach.db.base import Base


class MessageRole(str, enum.Enum):
    USER = "user"
    ASSISTANT = "assistant"


class SessionMessage(Base):
    """One immutable transcript turn."""
    __tablename__ = "session_messages"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(
        Integer,
        ForeignKey("practice_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role = Column(
        Enum(MessageRole, native_enum=False, length=20, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    session = relationship("PracticeSession", back_populates="messages")

    __table_args__ = (
        Index("idx_session_messages_session_created", "session_id", "created_at"),
    )
