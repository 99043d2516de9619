from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from skillsage.core.roles import Role
from skillsage.schemas.activity import Activity, ActivityCreate, ActivityType
from skillsage.schemas.chat import ChatMessage, ChatMessageCreate, ChatSession
from skillsage.schemas.course import Course, CourseCreate
from skillsage.schemas.interview import InterviewSession, InterviewSessionCreate
from skillsage.schemas.resume import Resume
from skillsage.schemas.skill import SkillProgress
from skillsage.schemas.user import User, UserCreate

SEARCH_LIMIT = 10


class Storage(ABC):
    """Persistence contract shared by the in-memory and relational stores.

    Lookups return ``None`` for a missing id instead of raising, so callers
    can tell "absent" from "failed". ``create_*`` returns the stored entity
    with generated id and defaulted fields filled in.
    """

    name: str = "abstract"

    async def initialize(self) -> None:
        """Prepare the backing store (tables, connections)."""

    async def close(self) -> None:
        """Release resources held by the backing store."""

    # Users
    @abstractmethod
    async def get_user(self, user_id: str) -> Optional[User]: ...

    @abstractmethod
    async def get_user_by_email(self, email: str) -> Optional[User]: ...

    @abstractmethod
    async def create_user(self, user: UserCreate, user_id: Optional[str] = None) -> User: ...

    @abstractmethod
    async def update_user(self, user_id: str, updates: Dict[str, Any]) -> Optional[User]: ...

    @abstractmethod
    async def list_users(
        self,
        search: Optional[str] = None,
        role: Optional[Role] = None,
        is_active: Optional[bool] = None,
    ) -> List[User]: ...

    # Courses
    @abstractmethod
    async def get_courses(self) -> List[Course]: ...

    @abstractmethod
    async def get_recommended_courses(self, user_id: str) -> List[Course]: ...

    @abstractmethod
    async def get_course(self, course_id: str) -> Optional[Course]: ...

    @abstractmethod
    async def create_course(self, course: CourseCreate) -> Course: ...

    @abstractmethod
    async def update_course(self, course_id: str, updates: Dict[str, Any]) -> Optional[Course]: ...

    @abstractmethod
    async def search_course_by_name(self, name: str) -> Optional[Course]: ...

    @abstractmethod
    async def search_courses(self, term: str) -> List[Course]: ...

    # Chat
    @abstractmethod
    async def get_chat_messages(self, user_id: str, session_id: Optional[str] = None) -> List[ChatMessage]: ...

    @abstractmethod
    async def create_chat_message(self, message: ChatMessageCreate) -> ChatMessage: ...

    async def get_chat_sessions(self, user_id: str) -> List[ChatSession]:
        sessions: Dict[str, ChatSession] = {}
        for message in await self.get_chat_messages(user_id):
            session = sessions.get(message.session_id)
            if session is None:
                sessions[message.session_id] = ChatSession(
                    id=message.session_id,
                    message_count=1,
                    started_at=message.created_at,
                    last_message_at=message.created_at,
                )
            else:
                session.message_count += 1
                session.last_message_at = message.created_at
        return list(sessions.values())

    # Skill progress
    @abstractmethod
    async def get_skill_progress(self, user_id: str) -> List[SkillProgress]: ...

    @abstractmethod
    async def update_skill_progress(self, user_id: str, skill_name: str, progress: int) -> SkillProgress: ...

    # Activities
    @abstractmethod
    async def get_activities(self, user_id: str) -> List[Activity]: ...

    @abstractmethod
    async def create_activity(self, activity: ActivityCreate) -> Activity: ...

    @abstractmethod
    async def list_activities(
        self,
        limit: int = 50,
        type: Optional[ActivityType] = None,
        search: Optional[str] = None,
    ) -> List[Activity]: ...

    # Interviews
    @abstractmethod
    async def get_interview_sessions(self, user_id: str) -> List[InterviewSession]: ...

    @abstractmethod
    async def create_interview_session(self, session: InterviewSessionCreate) -> InterviewSession: ...

    # Resumes
    @abstractmethod
    async def save_resume(self, user_id: str, resume_data: Dict[str, Any]) -> Resume: ...

    @abstractmethod
    async def get_resume(self, user_id: str) -> Optional[Resume]: ...

    @abstractmethod
    async def delete_resume(self, user_id: str) -> bool: ...
