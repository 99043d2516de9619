from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String

from skillsage.models.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True)  # identity-provider subject
    email = Column(String, unique=True, nullable=False, index=True)
    name = Column(String, nullable=False)
    photo_url = Column(String, nullable=True)
    role = Column(String, nullable=False, default="student")  # admin, user, student, mentor
    is_active = Column(Boolean, nullable=False, default=True)
    last_login_at = Column(DateTime(timezone=True), nullable=True)
    skills = Column(JSON, nullable=False, default=list)
    credits = Column(Integer, nullable=False, default=0)
    internship_hours = Column(Integer, nullable=False, default=0)
    certificates = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False)
