from datetime import datetime
from enum import Enum

from pydantic import Field

from skillsage.schemas.base import APIModel


class ActivityType(str, Enum):
    COURSE_COMPLETED = "course_completed"
    CERTIFICATE_EARNED = "certificate_earned"
    CHAT_SESSION = "chat_session"
    INTERVIEW_SESSION = "interview_session"
    JOB_SEARCH = "job_search"
    RESUME_SAVED = "resume_saved"
    RESUME_DELETED = "resume_deleted"
    RESUME_REVIEW = "resume_review"
    PROFILE_UPDATED = "profile_updated"


class ActivityCreate(APIModel):
    user_id: str
    type: ActivityType
    description: str = Field(..., min_length=1)


class Activity(ActivityCreate):
    id: str
    created_at: datetime
