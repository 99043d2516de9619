"""Response shapes produced by the AI gateway.

Every field has a default so a partially filled provider reply still
validates; scores are coerced to integers and clamped to 0..100.
"""

from typing import Annotated, Any, Dict, List, Optional

from pydantic import BeforeValidator, Field

from skillsage.schemas.base import APIModel


def clamp_score(value: Any) -> int:
    if isinstance(value, bool) or value is None:
        raise ValueError("score must be numeric")
    try:
        score = int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"score must be numeric, got {value!r}")
    return max(0, min(100, score))


Score = Annotated[int, BeforeValidator(clamp_score)]


class CareerAdvice(APIModel):
    message: str
    suggestions: List[str] = []
    resources: List[str] = []


class InterviewFeedback(APIModel):
    score: Score = 75
    feedback: str = ""
    improvements: List[str] = []
    strengths: List[str] = []


class CourseRecommendations(APIModel):
    courses: List[str] = []


class KeywordAnalysis(APIModel):
    found: List[str] = []
    missing: List[str] = []
    suggestions: List[str] = []


class ExtractedData(APIModel):
    name: str = "N/A"
    email: str = "N/A"
    phone: str = "N/A"
    experience: List[Any] = []
    education: List[Any] = []
    skills: List[str] = []


class ResumeAnalysis(APIModel):
    score: Score = 70
    summary: str = ""
    strengths: List[str] = []
    improvements: List[str] = []
    ats_optimization: List[str] = []
    extracted_data: ExtractedData = Field(default_factory=ExtractedData)
    keyword_analysis: KeywordAnalysis = Field(default_factory=KeywordAnalysis)
    formatting_score: Optional[Score] = None
    content_score: Optional[Score] = None
    ats_score: Optional[Score] = None
    overall_score: Optional[Score] = None


class CoverLetter(APIModel):
    cover_letter: str
    highlights: List[str] = []
    tone: str = "formal"


class LearningResource(APIModel):
    title: str
    type: str = "course"
    url: str = ""
    duration: str = ""


class MissingSkill(APIModel):
    skill: str
    importance: str = "important"
    learning_resources: List[LearningResource] = []


class SkillGapAnalysis(APIModel):
    matched_skills: List[str] = []
    missing_skills: List[MissingSkill] = []
    overall_match: Score = 0
    recommendations: List[str] = []


class TranslatedResume(APIModel):
    translated_content: Dict[str, Any] = {}
    language: str
    language_code: str = "en"
    quality_note: str = ""


class ScoreItem(APIModel):
    score: Score = 50
    feedback: str = "Unable to analyze"


class Scorecard(APIModel):
    readability: ScoreItem = Field(default_factory=ScoreItem)
    impact: ScoreItem = Field(default_factory=ScoreItem)
    keyword_density: ScoreItem = Field(default_factory=ScoreItem)
    formatting: ScoreItem = Field(default_factory=ScoreItem)
    ats_compatibility: ScoreItem = Field(default_factory=ScoreItem)


class SectionReview(APIModel):
    section: str
    rating: str = "needs-improvement"
    feedback: str = ""


class ResumeRoast(APIModel):
    overall_score: Score = 50
    scorecard: Scorecard = Field(default_factory=Scorecard)
    blunt_feedback: List[str] = []
    critical_issues: List[str] = []
    quick_wins: List[str] = []
    detailed_review: List[SectionReview] = []


class PredictedQuestion(APIModel):
    question: str
    category: str = "behavioral"
    difficulty: str = "medium"
    based_on: str = ""
    tips: str = ""
    sample_answer: Optional[str] = None


class PredictedQuestions(APIModel):
    questions: List[PredictedQuestion] = []
    focus_areas: List[str] = []
    preparation_tips: List[str] = []
