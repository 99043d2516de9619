from typing import Any, Optional

from fastapi import APIRouter, Depends, Query

from skillsage.api.deps import get_ai_gateway, get_storage, use_ai_tools
from skillsage.auth.principal import Principal
from skillsage.schemas.activity import ActivityType
from skillsage.schemas.job import JobSearchRequest, JobSearchResponse
from skillsage.services.activity_log import log_activity
from skillsage.services.ai_gateway import AIGateway
from skillsage.storage.base import Storage

router = APIRouter()


async def _search(
    storage: Storage, ai_gateway: AIGateway, principal: Principal, query: str, location: Optional[str]
) -> JobSearchResponse:
    jobs = await ai_gateway.search_jobs(query, location)
    where = f" in {location}" if location else ""
    await log_activity(storage, principal.uid, ActivityType.JOB_SEARCH, f'Searched for "{query}" jobs{where}')
    return JobSearchResponse(jobs=jobs, query=query, location=location or "Any location")


@router.get("/search", response_model=JobSearchResponse)
async def search_jobs(
    query: str = Query(..., min_length=1),
    location: Optional[str] = None,
    storage: Storage = Depends(get_storage),
    ai_gateway: AIGateway = Depends(get_ai_gateway),
    principal: Principal = Depends(use_ai_tools),
) -> Any:
    return await _search(storage, ai_gateway, principal, query, location)


@router.post("/search", response_model=JobSearchResponse)
async def search_jobs_post(
    request: JobSearchRequest,
    storage: Storage = Depends(get_storage),
    ai_gateway: AIGateway = Depends(get_ai_gateway),
    principal: Principal = Depends(use_ai_tools),
) -> Any:
    return await _search(storage, ai_gateway, principal, request.query, request.location)
