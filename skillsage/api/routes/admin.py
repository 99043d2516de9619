from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query, status

from skillsage.api.deps import get_storage, require_capability
from skillsage.auth.principal import Principal
from skillsage.core.errors import InvalidRequest, NotFound
from skillsage.core.roles import Capability, Role, is_privileged
from skillsage.schemas.activity import Activity, ActivityType
from skillsage.schemas.admin import AdminStats, ContentItem
from skillsage.schemas.base import MessageResponse
from skillsage.schemas.course import Course, CourseCreate, CourseUpdate
from skillsage.schemas.user import AdminUserUpdate, User
from skillsage.storage.base import Storage

router = APIRouter()

manage_users = require_capability(Capability.MANAGE_USERS)
manage_content = require_capability(Capability.MANAGE_CONTENT)
view_audit_log = require_capability(Capability.VIEW_AUDIT_LOG)

ALL = "all"


def _parse_filter(value: Optional[str], choices, label: str):
    if not value or value == ALL:
        return None
    try:
        return choices(value)
    except ValueError:
        raise InvalidRequest(f"Unknown {label}: {value}")


@router.get("/stats", response_model=AdminStats)
async def read_stats(storage: Storage = Depends(get_storage), _: Principal = Depends(manage_users)) -> Any:
    users = await storage.list_users()
    courses = await storage.get_courses()
    return AdminStats(
        total_users=len(users),
        active_users=sum(1 for u in users if u.is_active),
        admin_users=sum(1 for u in users if is_privileged(u.role)),
        total_courses=len(courses),
        recommended_courses=sum(1 for c in courses if c.is_recommended),
    )


@router.get("/users", response_model=List[User])
async def read_users(
    search: Optional[str] = None,
    role: Optional[str] = None,
    status_filter: Optional[str] = Query(None, alias="status", pattern="^(all|active|inactive)$"),
    storage: Storage = Depends(get_storage),
    _: Principal = Depends(manage_users),
) -> Any:
    is_active = None if status_filter in (None, ALL) else status_filter == "active"
    return await storage.list_users(search=search, role=_parse_filter(role, Role, "role"), is_active=is_active)


@router.patch("/users/{user_id}", response_model=User)
async def update_user(
    user_id: str,
    user_in: AdminUserUpdate,
    storage: Storage = Depends(get_storage),
    principal: Principal = Depends(manage_users),
) -> Any:
    updates = user_in.changes()
    if user_id == principal.uid:
        if updates.get("is_active") is False:
            raise InvalidRequest("You cannot deactivate your own account")
        if "role" in updates and not is_privileged(updates["role"]):
            raise InvalidRequest("You cannot remove your own admin role")

    user = await storage.update_user(user_id, updates) if updates else await storage.get_user(user_id)
    if not user:
        raise NotFound("User not found")
    return user


@router.delete("/users/{user_id}", response_model=MessageResponse)
async def deactivate_user(
    user_id: str,
    storage: Storage = Depends(get_storage),
    principal: Principal = Depends(manage_users),
) -> Any:
    """Soft delete: the record stays but the account can no longer sign in."""
    if user_id == principal.uid:
        raise InvalidRequest("You cannot deactivate your own account")
    user = await storage.update_user(user_id, {"is_active": False})
    if not user:
        raise NotFound("User not found")
    return MessageResponse(message="User deactivated successfully")


@router.get("/activities", response_model=List[Activity])
async def read_recent_activities(
    limit: int = Query(10, ge=1, le=500),
    storage: Storage = Depends(get_storage),
    _: Principal = Depends(view_audit_log),
) -> Any:
    return await storage.list_activities(limit=limit)


@router.get("/logs", response_model=List[Activity])
async def read_logs(
    search: Optional[str] = None,
    type: Optional[str] = None,
    limit: int = Query(50, ge=1, le=500),
    storage: Storage = Depends(get_storage),
    _: Principal = Depends(view_audit_log),
) -> Any:
    return await storage.list_activities(
        limit=limit,
        type=_parse_filter(type, ActivityType, "activity type"),
        search=search,
    )


@router.get("/content", response_model=List[ContentItem])
async def read_content(storage: Storage = Depends(get_storage), _: Principal = Depends(manage_content)) -> Any:
    return [ContentItem(**course.model_dump()) for course in await storage.get_courses()]


@router.post("/content", response_model=Course, status_code=status.HTTP_201_CREATED)
async def create_content(
    course_in: CourseCreate,
    storage: Storage = Depends(get_storage),
    _: Principal = Depends(manage_content),
) -> Any:
    return await storage.create_course(course_in)


@router.patch("/content/{course_id}", response_model=Course)
async def update_content(
    course_id: str,
    course_in: CourseUpdate,
    storage: Storage = Depends(get_storage),
    _: Principal = Depends(manage_content),
) -> Any:
    updates = course_in.changes()
    course = await storage.update_course(course_id, updates) if updates else await storage.get_course(course_id)
    if not course:
        raise NotFound("Course not found")
    return course
