from typing import Any

from fastapi import APIRouter, Depends, Response, status

from skillsage.api.deps import get_storage, owner_from_path, require_owner_or_admin, use_platform
from skillsage.auth.principal import Principal
from skillsage.core.errors import NotFound
from skillsage.schemas.activity import ActivityType
from skillsage.schemas.user import CurrentUser, SessionResponse, User, UserRegistration, UserUpdate
from skillsage.services.activity_log import log_activity
from skillsage.services.users import record_login, register_user
from skillsage.storage.base import Storage

router = APIRouter()


@router.get("/auth/me", response_model=CurrentUser)
async def read_current_user(
    *,
    storage: Storage = Depends(get_storage),
    principal: Principal = Depends(use_platform),
) -> Any:
    """Resolved principal plus its stored profile, if one exists yet."""
    user = await storage.get_user(principal.uid)
    return CurrentUser(uid=principal.uid, email=principal.email, role=principal.role, user=user)


@router.post("/auth/session", response_model=SessionResponse)
async def start_session(
    *,
    storage: Storage = Depends(get_storage),
    principal: Principal = Depends(use_platform),
) -> Any:
    """Called by the client after every sign-in; creates the user record on first login."""
    user, created = await record_login(storage, principal)
    return SessionResponse(user=user, created=created)


@router.post("/users", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(
    *,
    response: Response,
    storage: Storage = Depends(get_storage),
    principal: Principal = Depends(use_platform),
    user_in: UserRegistration,
) -> Any:
    user, created = await register_user(storage, principal, user_in)
    if not created:
        response.status_code = status.HTTP_200_OK
    return user


@router.get("/user/{user_id}", response_model=User)
async def read_user(
    user_id: str,
    storage: Storage = Depends(get_storage),
    _: Principal = Depends(require_owner_or_admin(owner_from_path())),
) -> Any:
    user = await storage.get_user(user_id)
    if not user:
        raise NotFound("User not found")
    return user


@router.patch("/user/{user_id}", response_model=User)
async def update_user(
    user_id: str,
    user_in: UserUpdate,
    storage: Storage = Depends(get_storage),
    _: Principal = Depends(require_owner_or_admin(owner_from_path())),
) -> Any:
    updates = user_in.changes()
    user = await storage.get_user(user_id)
    if not user:
        raise NotFound("User not found")
    if not updates:
        return user

    user = await storage.update_user(user_id, updates)
    await log_activity(storage, user_id, ActivityType.PROFILE_UPDATED, "Profile updated")
    return user
