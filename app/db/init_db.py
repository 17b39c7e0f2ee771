"""
Create all tables directly from model metadata.

Used for local development and SQLite deployments; production databases are
upgraded with Alembic (see app.db.migrate).
"""
import logging

from app.db.session import engine
from app.db.base import Base

logger = logging.getLogger(__name__)


def init_db(bind=None) -> None:
    import app.db.models  # noqa: F401  registers every model on Base.metadata

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables ensured")
