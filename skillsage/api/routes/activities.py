from typing import Any, List

from fastapi import APIRouter, Depends

from skillsage.api.deps import get_storage, owner_from_body, owner_from_path, require_owner_or_admin
from skillsage.auth.principal import Principal
from skillsage.schemas.activity import Activity, ActivityCreate
from skillsage.storage.base import Storage

router = APIRouter()


@router.get("/{user_id}", response_model=List[Activity])
async def read_activities(
    user_id: str,
    storage: Storage = Depends(get_storage),
    _: Principal = Depends(require_owner_or_admin(owner_from_path())),
) -> Any:
    return await storage.get_activities(user_id)


@router.post("", response_model=Activity)
async def create_activity(
    activity_in: ActivityCreate,
    storage: Storage = Depends(get_storage),
    _: Principal = Depends(require_owner_or_admin(owner_from_body())),
) -> Any:
    return await storage.create_activity(activity_in)
