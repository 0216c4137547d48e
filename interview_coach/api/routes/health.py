"""
Health check endpoint for deployment monitoring.
"""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from interview_coach.core.auth_dependency import get_db
from interview_coach.core.config import API_VERSION
from interview_coach.llm.router import is_model_available

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/health", tags=["Health"])


@router.get("")
def health_check(db: Session = Depends(get_db)):
    """Returns 200 always; `status` degrades when the database is unreachable."""
    db_ok = True
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning(f"Health check database probe failed: {e}")
        db_ok = False

    return {
        "status": "healthy" if db_ok else "degraded",
        "database": "connected" if db_ok else "error",
        "ai": "configured" if is_model_available() else "not_configured",
        "version": API_VERSION,
    }
