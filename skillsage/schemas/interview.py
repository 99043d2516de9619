from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from skillsage.schemas.base import APIModel


class InterviewType(str, Enum):
    TECHNICAL = "technical"
    BEHAVIORAL = "behavioral"
    CASE_STUDY = "case_study"


class InterviewSessionCreate(APIModel):
    user_id: str
    type: InterviewType
    question: Optional[str] = None
    user_response: Optional[str] = None
    feedback: Optional[str] = None
    score: Optional[int] = Field(None, ge=0, le=100)


class InterviewSession(InterviewSessionCreate):
    id: str
    created_at: datetime


class QuestionRequest(APIModel):
    type: InterviewType = InterviewType.BEHAVIORAL


class QuestionResponse(APIModel):
    question: str
    type: InterviewType


class AnalyzeRequest(APIModel):
    user_id: str
    type: InterviewType
    question: str = Field(..., min_length=1)
    response: str = Field(..., min_length=1)


class AnalyzeResponse(APIModel):
    session: InterviewSession
    score: int
    feedback: str
    improvements: List[str]
    strengths: List[str]
