from datetime import datetime

from pydantic import Field

from skillsage.schemas.base import APIModel


class SkillProgressUpdate(APIModel):
    user_id: str
    skill_name: str = Field(..., min_length=1)
    progress: int = Field(..., ge=0, le=100)


class SkillProgress(SkillProgressUpdate):
    id: str
    updated_at: datetime
