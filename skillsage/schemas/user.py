from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import EmailStr, Field

from skillsage.core.roles import Role
from skillsage.schemas.base import APIModel


class UserBase(APIModel):
    email: EmailStr
    name: str = Field(..., min_length=1)
    photo_url: Optional[str] = Field(None, alias="photoURL")


class UserCreate(UserBase):
    role: Role = Role.STUDENT
    skills: List[str] = []
    credits: int = Field(0, ge=0)
    internship_hours: int = Field(0, ge=0)
    certificates: int = Field(0, ge=0)


class UserRegistration(UserCreate):
    """Body of POST /users; firebaseUid is honoured for admins only."""

    firebase_uid: Optional[str] = None


class UserUpdate(APIModel):
    """Fields a user may change on their own profile."""

    name: Optional[str] = Field(None, min_length=1)
    photo_url: Optional[str] = Field(None, alias="photoURL")
    skills: Optional[List[str]] = None
    credits: Optional[int] = Field(None, ge=0)
    internship_hours: Optional[int] = Field(None, ge=0)
    certificates: Optional[int] = Field(None, ge=0)

    def changes(self) -> Dict[str, Any]:
        """Fields the client set; only the photo may be cleared with null."""
        return {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None or k == "photo_url"}


class AdminUserUpdate(UserUpdate):
    role: Optional[Role] = None
    is_active: Optional[bool] = None


class User(UserBase):
    id: str
    role: Role
    is_active: bool = True
    last_login_at: Optional[datetime] = None
    skills: List[str] = []
    credits: int = 0
    internship_hours: int = 0
    certificates: int = 0
    created_at: datetime


class CurrentUser(APIModel):
    uid: str
    email: Optional[str] = None
    role: Role
    user: Optional[User] = None


class SessionResponse(APIModel):
    user: User
    created: bool
