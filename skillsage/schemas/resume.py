from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field, model_validator

from skillsage.schemas.ai import ResumeAnalysis
from skillsage.schemas.base import APIModel


class ResumeSave(APIModel):
    user_id: str
    resume_data: Dict[str, Any]


class Resume(ResumeSave):
    updated_at: datetime


class ResumeText(APIModel):
    content: str = Field(..., min_length=1)


class PersonalInfo(APIModel):
    name: str
    email: str = ""
    phone: str = ""


class ParsedResume(APIModel):
    personal_info: PersonalInfo
    summary: str
    skills: List[str]
    experience: List[Dict[str, Any]] = []
    education: List[Dict[str, Any]] = []


class ResumeAnalyzeRequest(APIModel):
    content: str = Field(..., min_length=1)
    job_keywords: Optional[str] = None
    user_id: Optional[str] = None


class CoverLetterRequest(APIModel):
    resume_data: Dict[str, Any]
    job_description: str = Field(..., min_length=1)
    company_name: str = Field(..., min_length=1)
    tone: str = Field("formal", pattern="^(formal|enthusiastic|creative)$")


class SkillGapRequest(APIModel):
    skills: List[str] = Field(..., min_length=1)
    job_description: str = Field(..., min_length=1)


class TranslateRequest(APIModel):
    resume_data: Dict[str, Any]
    target_language: str = Field(..., min_length=1)


class RoastRequest(APIModel):
    resume_content: Optional[str] = None
    resume_data: Optional[Dict[str, Any]] = None

    @model_validator(mode="after")
    def require_some_resume(self) -> "RoastRequest":
        if not self.resume_content and not self.resume_data:
            raise ValueError("Resume content or data is required")
        return self


class PredictQuestionsRequest(APIModel):
    resume_data: Dict[str, Any]
    job_description: Optional[str] = None


class ResumeAnalysisResponse(APIModel):
    message: str = "Resume analyzed successfully"
    analysis: ResumeAnalysis
