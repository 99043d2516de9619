from sqlalchemy import JSON, Column, DateTime, ForeignKey, String

from skillsage.models.base import Base


class Resume(Base):
    __tablename__ = "resumes"

    user_id = Column(String, ForeignKey("users.id"), primary_key=True)
    resume_data = Column(JSON, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
