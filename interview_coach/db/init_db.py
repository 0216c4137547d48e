"""
Schema bootstrap.

Either runs Alembic migrations (RUN_MIGRATIONS=1) or falls back to
create_all, which is what local SQLite development uses.
"""
import logging

from interview_coach.core import config
from interview_coach.db.base import Base
from interview_coach.db.session import engine
import interview_coach.db.models  # noqa: F401  (registers tables)

logger = logging.getLogger(__name__)


def init_db():
    if config.RUN_MIGRATIONS:
        from interview_coach.db.migrate import run_migrations
        run_migrations()
        return
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured via create_all")
