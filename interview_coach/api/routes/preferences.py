"""
Onboarding preferences endpoints.
"""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from interview_coach.core.auth_dependency import get_current_user_id, get_db
from interview_coach.schemas.preferences import PreferencesResponse, PreferencesUpdate
from interview_coach.services import storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/preferences", tags=["Preferences"])


@router.get("", status_code=status.HTTP_200_OK)
def get_preferences(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Stored preferences, or {"onboardingComplete": false} before the first write."""
    prefs = storage.get_user_preferences(db, user_id)
    if not prefs:
        return {"onboardingComplete": False}
    return PreferencesResponse.model_validate(prefs).model_dump(by_alias=True, mode="json")


@router.post("", status_code=status.HTTP_200_OK, response_model=PreferencesResponse)
def save_preferences(
    prefs_data: PreferencesUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    prefs = storage.upsert_user_preferences(
        db,
        user_id,
        intent=prefs_data.intent,
        onboarding_complete=prefs_data.onboarding_complete,
    )
    logger.info(f"Preferences saved: user_id={user_id}, intent={prefs.intent}")
    return prefs
