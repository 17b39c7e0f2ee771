"""
Database models module.

Imports every model so it is registered with SQLAlchemy's Base.metadata
before table creation or migrations run.
"""
from app.db.models.user import User
from app.db.models.payment import Payment

__all__ = [
    "User",
    "Payment",
]
