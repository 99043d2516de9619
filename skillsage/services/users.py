from datetime import datetime, timezone
from typing import Tuple

from loguru import logger

from skillsage.auth.principal import Principal
from skillsage.core.errors import Forbidden, IntegrityViolation, InvalidRequest
from skillsage.core.roles import Role, is_privileged
from skillsage.schemas.user import User, UserCreate, UserRegistration
from skillsage.storage.base import Storage


def _profile_from_principal(principal: Principal) -> UserCreate:
    email = principal.email or f"{principal.uid}@users.skillsage.app"
    name = principal.name or email.split("@")[0] or "User"
    return UserCreate(email=email, name=name, photo_url=principal.picture, role=Role.STUDENT)


async def ensure_user(storage: Storage, principal: Principal) -> Tuple[User, bool]:
    """Return the principal's user record, creating it if this is the first visit.

    Returns ``(user, created)``. Nothing is written when the record exists.
    """
    user = await storage.get_user(principal.uid)
    if user is not None:
        return user, False

    try:
        user = await storage.create_user(_profile_from_principal(principal), user_id=principal.uid)
    except IntegrityViolation:
        # A concurrent first visit for the same subject won the insert
        user = await storage.get_user(principal.uid)
        if user is None:
            raise IntegrityViolation("An account with this email is already registered to another sign-in")
        return user, False

    logger.info(f"Created user record on first visit: {principal.uid}")
    return user, True


async def record_login(storage: Storage, principal: Principal) -> Tuple[User, bool]:
    """Bootstrap the record if needed and stamp ``last_login_at``."""
    user, created = await ensure_user(storage, principal)
    user = await storage.update_user(user.id, {"last_login_at": datetime.now(timezone.utc)})
    return user, created


async def register_user(storage: Storage, principal: Principal, data: UserRegistration) -> Tuple[User, bool]:
    """Create a user record on behalf of the principal.

    Members may only create their own record and never with a privileged
    role. Admins must name the identity-provider subject via ``firebase_uid``
    so the record can be found when that person signs in.
    """
    if principal.is_admin:
        if not data.firebase_uid:
            raise InvalidRequest("firebaseUid is required when creating a user record")
        user_id = data.firebase_uid
    else:
        if data.firebase_uid and data.firebase_uid != principal.uid:
            raise Forbidden("Forbidden: Cannot create a record for another user")
        if is_privileged(data.role):
            raise Forbidden("Forbidden: Insufficient role", required=[Role.ADMIN], current=principal.role)
        user_id = principal.uid

    existing = await storage.get_user(user_id)
    if existing is not None:
        return existing, False

    if await storage.get_user_by_email(data.email) is not None:
        raise InvalidRequest("A user with this email already exists")

    user = await storage.create_user(UserCreate.model_validate(data.model_dump(exclude={"firebase_uid"})), user_id)
    logger.info(f"Registered user {user.id} with role {user.role.value}")
    return user, True
