import json
from typing import Any

from fastapi import APIRouter, Depends

from skillsage.api.deps import (
    get_ai_gateway,
    get_storage,
    owner_from_body,
    owner_from_path,
    require_owner_or_admin,
    use_ai_tools,
    use_platform,
)
from skillsage.auth.principal import Principal
from skillsage.core.errors import NotFound
from skillsage.schemas.activity import ActivityType
from skillsage.schemas.ai import CoverLetter, PredictedQuestions, ResumeRoast, SkillGapAnalysis, TranslatedResume
from skillsage.schemas.base import MessageResponse
from skillsage.schemas.resume import (
    CoverLetterRequest,
    ParsedResume,
    PredictQuestionsRequest,
    Resume,
    ResumeAnalysisResponse,
    ResumeAnalyzeRequest,
    ResumeSave,
    ResumeText,
    RoastRequest,
    SkillGapRequest,
    TranslateRequest,
)
from skillsage.services.activity_log import log_activity
from skillsage.services.ai_gateway import AIGateway
from skillsage.services.resume_parser import parse_resume
from skillsage.storage.base import Storage

router = APIRouter()


@router.post("/parse", response_model=ParsedResume)
async def parse(resume_in: ResumeText, _: Principal = Depends(use_platform)) -> Any:
    return parse_resume(resume_in.content)


@router.post("/analyze", response_model=ResumeAnalysisResponse)
async def analyze(
    request: ResumeAnalyzeRequest,
    storage: Storage = Depends(get_storage),
    ai_gateway: AIGateway = Depends(get_ai_gateway),
    principal: Principal = Depends(use_ai_tools),
) -> Any:
    analysis = await ai_gateway.analyze_resume(request.content, request.job_keywords)
    user_id = request.user_id if request.user_id and principal.can_access(request.user_id) else principal.uid
    await log_activity(
        storage,
        user_id,
        ActivityType.RESUME_REVIEW,
        f"Resume analyzed with score {analysis.overall_score}/100",
    )
    return ResumeAnalysisResponse(analysis=analysis)


@router.post("/cover-letter", response_model=CoverLetter)
async def cover_letter(
    request: CoverLetterRequest,
    ai_gateway: AIGateway = Depends(get_ai_gateway),
    _: Principal = Depends(use_ai_tools),
) -> Any:
    return await ai_gateway.generate_cover_letter(
        request.resume_data, request.job_description, request.company_name, request.tone
    )


@router.post("/skill-gap", response_model=SkillGapAnalysis)
async def skill_gap(
    request: SkillGapRequest,
    ai_gateway: AIGateway = Depends(get_ai_gateway),
    _: Principal = Depends(use_ai_tools),
) -> Any:
    return await ai_gateway.analyze_skill_gap(request.skills, request.job_description)


@router.post("/translate", response_model=TranslatedResume)
async def translate(
    request: TranslateRequest,
    ai_gateway: AIGateway = Depends(get_ai_gateway),
    _: Principal = Depends(use_ai_tools),
) -> Any:
    return await ai_gateway.translate_resume(request.resume_data, request.target_language)


@router.post("/roast", response_model=ResumeRoast)
async def roast(
    request: RoastRequest,
    ai_gateway: AIGateway = Depends(get_ai_gateway),
    _: Principal = Depends(use_ai_tools),
) -> Any:
    content = request.resume_content or json.dumps(request.resume_data, ensure_ascii=False)
    return await ai_gateway.roast_resume(content, request.resume_data)


@router.post("/predict-questions", response_model=PredictedQuestions)
async def predict_questions(
    request: PredictQuestionsRequest,
    ai_gateway: AIGateway = Depends(get_ai_gateway),
    _: Principal = Depends(use_ai_tools),
) -> Any:
    return await ai_gateway.predict_interview_questions(request.resume_data, request.job_description)


@router.post("/save", response_model=MessageResponse)
async def save(
    resume_in: ResumeSave,
    storage: Storage = Depends(get_storage),
    _: Principal = Depends(require_owner_or_admin(owner_from_body())),
) -> Any:
    await storage.save_resume(resume_in.user_id, resume_in.resume_data)
    await log_activity(storage, resume_in.user_id, ActivityType.RESUME_SAVED, "Resume saved successfully")
    return MessageResponse(message="Resume saved successfully")


@router.get("/{user_id}", response_model=Resume)
async def load(
    user_id: str,
    storage: Storage = Depends(get_storage),
    _: Principal = Depends(require_owner_or_admin(owner_from_path())),
) -> Any:
    resume = await storage.get_resume(user_id)
    if not resume:
        raise NotFound("No resume found for this user")
    return resume


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete(
    user_id: str,
    storage: Storage = Depends(get_storage),
    _: Principal = Depends(require_owner_or_admin(owner_from_path())),
) -> Any:
    if not await storage.delete_resume(user_id):
        raise NotFound("No resume found for this user")
    await log_activity(storage, user_id, ActivityType.RESUME_DELETED, "Resume deleted")
    return MessageResponse(message="Resume deleted successfully")
