from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from app.db.base import Base

ROLE_USER = "USER"
ROLE_ADMIN = "ADMIN"


class User(Base):
    """
    User account row.

    Account storage is owned elsewhere; this service reads the role and owns the
    embedded subscription columns (subscription_id / subscription_status).
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True)
    role = Column(String, nullable=False, default=ROLE_USER)  # USER | ADMIN
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    subscription_id = Column(String, nullable=True, index=True)
    subscription_status = Column(String, nullable=True)  # created | active | inactive | cancelled

    # Optimistic lock: concurrent writers of the same row get StaleDataError
    version_id = Column(Integer, nullable=False, default=1)

    __mapper_args__ = {"version_id_col": version_id}

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def has_subscription(self) -> bool:
        return bool(self.subscription_id)
