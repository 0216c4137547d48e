from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from interview_coach.core.auth_dependency import get_current_user_id, get_db
from interview_coach.schemas.stats import StatsResponse
from interview_coach.services.stats_service import get_user_stats

router = APIRouter(prefix="/api", tags=["Stats"])


@router.get("/stats", status_code=status.HTTP_200_OK, response_model=StatsResponse)
def get_stats(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Session totals, average overall score and daily streak."""
    return get_user_stats(db, user_id)
