from typing import Optional
from datetime import datetime
from pydantic import Field

from interview_coach.schemas.common import CamelModel


class PreferencesUpdate(CamelModel):
    intent: Optional[str] = Field(None, description="interview, sales, presentation or coaching")
    onboarding_complete: Optional[bool] = None


class PreferencesResponse(CamelModel):
    id: Optional[int] = None
    user_id: Optional[str] = None
    intent: Optional[str] = None
    onboarding_complete: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
