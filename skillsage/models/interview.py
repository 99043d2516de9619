from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from skillsage.models.base import Base


class InterviewSession(Base):
    __tablename__ = "interview_sessions"

    id = Column(String, primary_key=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    type = Column(String(20), nullable=False)  # technical, behavioral, case_study
    question = Column(Text, nullable=True)
    user_response = Column(Text, nullable=True)
    feedback = Column(Text, nullable=True)
    score = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
