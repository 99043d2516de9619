from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint

from skillsage.models.base import Base


class SkillProgress(Base):
    __tablename__ = "skill_progress"
    __table_args__ = (UniqueConstraint("user_id", "skill_name", name="uq_skill_progress_user_skill"),)

    id = Column(String, primary_key=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    skill_name = Column(String(100), nullable=False)
    progress = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime(timezone=True), nullable=False)
