"""Closed role set and the role -> capability table checked at the auth boundary."""

from enum import Enum
from typing import Dict, FrozenSet


class Role(str, Enum):
    ADMIN = "admin"
    USER = "user"
    STUDENT = "student"
    MENTOR = "mentor"


class Capability(str, Enum):
    USE_PLATFORM = "use_platform"
    USE_AI_TOOLS = "use_ai_tools"
    MANAGE_USERS = "manage_users"
    MANAGE_CONTENT = "manage_content"
    VIEW_AUDIT_LOG = "view_audit_log"
    ACCESS_ANY_USER_DATA = "access_any_user_data"


_MEMBER = frozenset({Capability.USE_PLATFORM, Capability.USE_AI_TOOLS})

ROLE_CAPABILITIES: Dict[Role, FrozenSet[Capability]] = {
    Role.ADMIN: frozenset(Capability),
    Role.USER: _MEMBER,
    Role.STUDENT: _MEMBER,
    Role.MENTOR: _MEMBER,
}

_missing = set(Role) - set(ROLE_CAPABILITIES)
if _missing:
    raise RuntimeError(f"Roles without a capability set: {sorted(r.value for r in _missing)}")


def capabilities_of(role: Role) -> FrozenSet[Capability]:
    return ROLE_CAPABILITIES[Role(role)]


def roles_with(capability: Capability) -> FrozenSet[Role]:
    """Allow-list of roles granted a capability."""
    return frozenset(role for role, caps in ROLE_CAPABILITIES.items() if capability in caps)


def is_privileged(role: Role) -> bool:
    return Capability.ACCESS_ANY_USER_DATA in capabilities_of(role)
