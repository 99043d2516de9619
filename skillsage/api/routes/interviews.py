from typing import Any, List

from fastapi import APIRouter, Depends

from skillsage.api.deps import (
    get_ai_gateway,
    get_storage,
    owner_from_body,
    owner_from_path,
    require_owner_or_admin,
    use_ai_tools,
)
from skillsage.auth.principal import Principal
from skillsage.core.errors import NotFound
from skillsage.schemas.activity import ActivityType
from skillsage.schemas.interview import (
    AnalyzeRequest,
    AnalyzeResponse,
    InterviewSession,
    InterviewSessionCreate,
    QuestionRequest,
    QuestionResponse,
)
from skillsage.services.activity_log import log_activity
from skillsage.services.ai_gateway import AIGateway
from skillsage.storage.base import Storage

router = APIRouter()


@router.get("/interviews/{user_id}", response_model=List[InterviewSession])
async def read_interview_sessions(
    user_id: str,
    storage: Storage = Depends(get_storage),
    _: Principal = Depends(require_owner_or_admin(owner_from_path())),
) -> Any:
    return await storage.get_interview_sessions(user_id)


@router.post("/interview/question", response_model=QuestionResponse)
async def generate_question(
    request: QuestionRequest,
    ai_gateway: AIGateway = Depends(get_ai_gateway),
    _: Principal = Depends(use_ai_tools),
) -> Any:
    question = await ai_gateway.generate_interview_question(request.type)
    return QuestionResponse(question=question, type=request.type)


@router.post("/interview/analyze", response_model=AnalyzeResponse, dependencies=[Depends(use_ai_tools)])
async def analyze_response(
    request: AnalyzeRequest,
    storage: Storage = Depends(get_storage),
    ai_gateway: AIGateway = Depends(get_ai_gateway),
    _: Principal = Depends(require_owner_or_admin(owner_from_body())),
) -> Any:
    """Score one answer, record it as an interview session and log the activity."""
    if await storage.get_user(request.user_id) is None:
        raise NotFound("User not found")

    feedback = await ai_gateway.analyze_interview_response(request.question, request.response, request.type)

    session = await storage.create_interview_session(
        InterviewSessionCreate(
            user_id=request.user_id,
            type=request.type,
            question=request.question,
            user_response=request.response,
            feedback=feedback.feedback,
            score=feedback.score,
        )
    )
    await log_activity(
        storage,
        request.user_id,
        ActivityType.INTERVIEW_SESSION,
        f"Completed {request.type.value} interview with score {feedback.score}",
    )
    return AnalyzeResponse(
        session=session,
        score=feedback.score,
        feedback=feedback.feedback,
        improvements=feedback.improvements,
        strengths=feedback.strengths,
    )
