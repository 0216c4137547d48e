"""
Pydantic schemas for practice sessions, transcript messages and feedback.
"""
from typing import Any, Dict, List, Optional
from datetime import datetime
from pydantic import Field, field_validator

from interview_coach.db.models import MessageRole, SessionStatus
from interview_coach.schemas.common import CamelModel


class SessionCreate(CamelModel):
    """Request schema for creating a session; every field is optional."""
    template_id: Optional[int] = Field(None, description="Template to practice")
    persona_id: Optional[int] = Field(None, description="Interviewer persona")
    role: Optional[str] = Field(None, max_length=200, description="Job role being practiced for")
    company: Optional[str] = Field(None, max_length=200, description="Target company")

    @field_validator("template_id", "persona_id", "role", "company", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        """Empty strings, 0 and false mean "not set"."""
        if v in ("", 0, False) or (isinstance(v, str) and not v.strip()):
            return None
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "templateId": 1,
                "personaId": 2,
                "role": "Software Engineer",
                "company": "Acme"
            }
        }


class MessageCreate(CamelModel):
    content: Optional[Any] = Field(None, description="Candidate's reply")


class SessionResponse(CamelModel):
    id: int
    user_id: str
    template_id: Optional[int] = None
    persona_id: Optional[int] = None
    role: Optional[str] = None
    company: Optional[str] = None
    status: SessionStatus
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class MessageResponse(CamelModel):
    id: int
    session_id: int
    role: MessageRole
    content: str
    created_at: Optional[datetime] = None


class FeedbackResponse(CamelModel):
    id: int
    session_id: int
    overall_score: Optional[int] = None
    rubric_scores: Optional[Dict[str, Optional[int]]] = None
    strengths: Optional[List[str]] = None
    improvements: Optional[List[str]] = None
    summary: Optional[str] = None
    created_at: Optional[datetime] = None
