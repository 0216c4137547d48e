from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from interview_coach.db.base import Base


class User(Base):
    __tablename__ = "users"

    # Opaque string id: uuid hex for local accounts, "google:<sub>" for Google
    id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    profile_image_url = Column(String, nullable=True)
    password_hash = Column(String, nullable=True)
    auth_provider = Column(String, nullable=False, default="local")  # local / google
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
