"""
Seed the built-in templates and personas into empty tables.
"""
import logging

from sqlalchemy.orm import Session

from interview_coach.services import storage
from interview_coach.services.defaults import DEFAULT_PERSONAS, DEFAULT_TEMPLATES

logger = logging.getLogger(__name__)


def initialize_defaults(db: Session) -> None:
    """Best-effort: a failure is logged and startup continues."""
    try:
        if not storage.get_templates(db):
            for template in DEFAULT_TEMPLATES:
                storage.create_template(db, **template.to_dict())
            logger.info("Default templates initialized")

        if not storage.get_personas(db):
            for persona in DEFAULT_PERSONAS:
                storage.create_persona(db, **persona.to_dict())
            logger.info("Default personas initialized")
    except Exception as e:
        db.rollback()
        logger.error(f"Error initializing defaults (non-fatal): {e}", exc_info=True)
