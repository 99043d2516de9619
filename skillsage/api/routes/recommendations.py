from typing import Any

from fastapi import APIRouter, Depends

from skillsage.api.deps import get_ai_gateway, use_ai_tools
from skillsage.auth.principal import Principal
from skillsage.schemas.course import RecommendationRequest, RecommendationResponse
from skillsage.services.ai_gateway import AIGateway

router = APIRouter()


@router.post("", response_model=RecommendationResponse)
async def recommend_courses(
    request: RecommendationRequest,
    ai_gateway: AIGateway = Depends(get_ai_gateway),
    _: Principal = Depends(use_ai_tools),
) -> Any:
    courses = await ai_gateway.recommend_courses(request.skills, request.interests)
    return RecommendationResponse(recommendations=courses)
