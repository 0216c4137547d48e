from typing import Optional
from pydantic import Field

from interview_coach.schemas.common import CamelModel


class StatsResponse(CamelModel):
    total_sessions: int = Field(..., description="All sessions owned by the user")
    completed_sessions: int
    average_score: Optional[int] = Field(None, description="Mean overall score of completed sessions")
    streak: int = Field(0, description="Consecutive days with a completed session")
