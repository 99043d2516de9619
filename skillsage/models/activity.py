from sqlalchemy import Column, DateTime, ForeignKey, String, Text

from skillsage.models.base import Base


class Activity(Base):
    __tablename__ = "activities"

    id = Column(String, primary_key=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    type = Column(String(50), nullable=False)
    description = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
