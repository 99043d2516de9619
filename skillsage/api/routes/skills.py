from typing import Any, List

from fastapi import APIRouter, Depends

from skillsage.api.deps import get_storage, owner_from_body, owner_from_path, require_owner_or_admin
from skillsage.auth.principal import Principal
from skillsage.schemas.skill import SkillProgress, SkillProgressUpdate
from skillsage.storage.base import Storage

router = APIRouter()


@router.get("/{user_id}", response_model=List[SkillProgress])
async def read_skill_progress(
    user_id: str,
    storage: Storage = Depends(get_storage),
    _: Principal = Depends(require_owner_or_admin(owner_from_path())),
) -> Any:
    return await storage.get_skill_progress(user_id)


@router.post("", response_model=SkillProgress)
async def update_skill_progress(
    skill_in: SkillProgressUpdate,
    storage: Storage = Depends(get_storage),
    _: Principal = Depends(require_owner_or_admin(owner_from_body())),
) -> Any:
    """Create or replace the progress entry for one (user, skill) pair."""
    return await storage.update_skill_progress(skill_in.user_id, skill_in.skill_name, skill_in.progress)
