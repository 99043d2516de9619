from typing import Awaitable, Callable, Optional

from fastapi import Depends, Header, Request

from skillsage.auth.principal import Principal
from skillsage.auth.verification import IdentityVerifier
from skillsage.core.errors import Forbidden
from skillsage.core.roles import Capability, Role, roles_with
from skillsage.services.ai_gateway import AIGateway
from skillsage.storage.base import Storage

OwnerResolver = Callable[[Request], Awaitable[Optional[str]]]


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_ai_gateway(request: Request) -> AIGateway:
    return request.app.state.ai_gateway


def get_verifier(request: Request) -> IdentityVerifier:
    return request.app.state.verifier


async def get_principal(
    request: Request,
    authorization: Optional[str] = Header(None),
    verifier: IdentityVerifier = Depends(get_verifier),
) -> Principal:
    """Verify the bearer token and attach the resolved principal to the request."""
    principal = await verifier.resolve(authorization)
    request.state.principal = principal
    return principal


def require_roles(*roles: Role):
    """Allow-list guard: only principals holding one of ``roles`` pass."""
    allowed = frozenset(Role(role) for role in roles)

    async def role_checker(principal: Principal = Depends(get_principal)) -> Principal:
        if principal.role not in allowed:
            raise Forbidden("Forbidden: Insufficient role", required=allowed, current=principal.role)
        return principal

    return role_checker


def require_capability(capability: Capability):
    """Capability guard: the allow-list is read from the role table on every request."""

    async def capability_checker(principal: Principal = Depends(get_principal)) -> Principal:
        allowed = roles_with(capability)
        if principal.role not in allowed:
            raise Forbidden("Forbidden: Insufficient role", required=allowed, current=principal.role)
        return principal

    return capability_checker


use_platform = require_capability(Capability.USE_PLATFORM)
use_ai_tools = require_capability(Capability.USE_AI_TOOLS)


def owner_from_path(param: str = "user_id") -> OwnerResolver:
    async def resolve(request: Request) -> Optional[str]:
        return request.path_params.get(param)

    return resolve


def owner_from_body(field: str = "userId") -> OwnerResolver:
    async def resolve(request: Request) -> Optional[str]:
        try:
            body = await request.json()
        except ValueError:
            return None
        if not isinstance(body, dict):
            return None
        owner = body.get(field)
        return owner if isinstance(owner, str) else None

    return resolve


def require_owner_or_admin(resolve_owner: OwnerResolver):
    """Ownership guard: the principal must own the resource or be an admin."""

    async def owner_checker(request: Request, principal: Principal = Depends(get_principal)) -> Principal:
        owner_id = await resolve_owner(request)
        if not principal.can_access(owner_id):
            raise Forbidden("Forbidden: You can only access your own data")
        return principal

    return owner_checker
