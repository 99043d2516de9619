from typing import Optional

from pydantic import BaseModel

from skillsage.core.roles import Role, is_privileged


class VerifiedIdentity(BaseModel):
    """Claims returned by the identity provider for a valid token."""

    uid: str
    email: Optional[str] = None
    name: Optional[str] = None
    picture: Optional[str] = None


class Principal(BaseModel):
    """Authenticated identity and role attached to a request."""

    uid: str
    email: Optional[str] = None
    role: Role
    name: Optional[str] = None
    picture: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return is_privileged(self.role)

    def can_access(self, owner_id: Optional[str]) -> bool:
        if self.is_admin:
            return True
        return owner_id is not None and owner_id == self.uid
