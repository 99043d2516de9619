import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from skillsage.core.errors import IntegrityViolation
from skillsage.core.roles import Role
from skillsage.schemas.activity import Activity, ActivityCreate, ActivityType
from skillsage.schemas.chat import ChatMessage, ChatMessageCreate
from skillsage.schemas.course import Course, CourseCreate
from skillsage.schemas.interview import InterviewSession, InterviewSessionCreate
from skillsage.schemas.resume import Resume
from skillsage.schemas.skill import SkillProgress
from skillsage.schemas.user import User, UserCreate
from skillsage.storage.base import SEARCH_LIMIT, Storage


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _contains(text: Optional[str], term: str) -> bool:
    return bool(text) and term.lower() in text.lower()


def _newest_first(items: List[Any]) -> List[Any]:
    # Reverse insertion order first so records sharing a timestamp stay newest-first
    return sorted(reversed(items), key=lambda item: item.created_at, reverse=True)


class MemoryStorage(Storage):
    """Process-local store backed by one dict per entity kind.

    Nothing survives a restart and user references are not checked.
    No method awaits between reading and writing a map, so the skill
    upsert cannot interleave with another request.
    """

    name = "memory"

    def __init__(self):
        self.users: Dict[str, User] = {}
        self.courses: Dict[str, Course] = {}
        self.chat_messages: Dict[str, ChatMessage] = {}
        self.skill_progress: Dict[str, SkillProgress] = {}
        self.activities: Dict[str, Activity] = {}
        self.interview_sessions: Dict[str, InterviewSession] = {}
        self.resumes: Dict[str, Resume] = {}

    async def get_user(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        return next((user for user in self.users.values() if user.email == email), None)

    async def create_user(self, user: UserCreate, user_id: Optional[str] = None) -> User:
        if user_id in self.users or any(u.email == user.email for u in self.users.values()):
            raise IntegrityViolation("A user with this id or email already exists")
        record = User(
            id=user_id or str(uuid.uuid4()),
            created_at=_now(),
            **user.model_dump(include=set(UserCreate.model_fields)),
        )
        self.users[record.id] = record
        return record

    async def update_user(self, user_id: str, updates: Dict[str, Any]) -> Optional[User]:
        user = self.users.get(user_id)
        if not user:
            return None
        updated = user.model_copy(update=updates)
        self.users[user_id] = updated
        return updated

    async def list_users(
        self,
        search: Optional[str] = None,
        role: Optional[Role] = None,
        is_active: Optional[bool] = None,
    ) -> List[User]:
        users = list(self.users.values())
        if search:
            users = [u for u in users if _contains(u.name, search) or _contains(u.email, search)]
        if role is not None:
            users = [u for u in users if u.role == role]
        if is_active is not None:
            users = [u for u in users if u.is_active == is_active]
        return users

    async def get_courses(self) -> List[Course]:
        return list(self.courses.values())

    async def get_recommended_courses(self, user_id: str) -> List[Course]:
        user = self.users.get(user_id)
        skills = user.skills if user else []
        return [
            course
            for course in self.courses.values()
            if course.is_recommended
            or any(_contains(course.title, skill) or _contains(course.category, skill) for skill in skills)
        ]

    async def get_course(self, course_id: str) -> Optional[Course]:
        return self.courses.get(course_id)

    async def create_course(self, course: CourseCreate) -> Course:
        record = Course(id=str(uuid.uuid4()), **course.model_dump())
        self.courses[record.id] = record
        return record

    async def update_course(self, course_id: str, updates: Dict[str, Any]) -> Optional[Course]:
        course = self.courses.get(course_id)
        if not course:
            return None
        updated = course.model_copy(update=updates)
        self.courses[course_id] = updated
        return updated

    async def search_course_by_name(self, name: str) -> Optional[Course]:
        return next((c for c in self.courses.values() if _contains(c.title, name)), None)

    async def search_courses(self, term: str) -> List[Course]:
        matches = [
            c
            for c in self.courses.values()
            if _contains(c.title, term) or _contains(c.description, term) or _contains(c.category, term)
        ]
        return matches[:SEARCH_LIMIT]

    async def get_chat_messages(self, user_id: str, session_id: Optional[str] = None) -> List[ChatMessage]:
        messages = [
            m
            for m in self.chat_messages.values()
            if m.user_id == user_id and (session_id is None or m.session_id == session_id)
        ]
        return sorted(messages, key=lambda m: m.created_at)

    async def create_chat_message(self, message: ChatMessageCreate) -> ChatMessage:
        record = ChatMessage(id=str(uuid.uuid4()), created_at=_now(), **message.model_dump())
        self.chat_messages[record.id] = record
        return record

    async def get_skill_progress(self, user_id: str) -> List[SkillProgress]:
        return [s for s in self.skill_progress.values() if s.user_id == user_id]

    async def update_skill_progress(self, user_id: str, skill_name: str, progress: int) -> SkillProgress:
        existing = next(
            (s for s in self.skill_progress.values() if s.user_id == user_id and s.skill_name == skill_name),
            None,
        )
        if existing:
            record = existing.model_copy(update={"progress": progress, "updated_at": _now()})
        else:
            record = SkillProgress(
                id=str(uuid.uuid4()),
                user_id=user_id,
                skill_name=skill_name,
                progress=progress,
                updated_at=_now(),
            )
        self.skill_progress[record.id] = record
        return record

    async def get_activities(self, user_id: str) -> List[Activity]:
        return _newest_first([a for a in self.activities.values() if a.user_id == user_id])

    async def create_activity(self, activity: ActivityCreate) -> Activity:
        record = Activity(id=str(uuid.uuid4()), created_at=_now(), **activity.model_dump())
        self.activities[record.id] = record
        return record

    async def list_activities(
        self,
        limit: int = 50,
        type: Optional[ActivityType] = None,
        search: Optional[str] = None,
    ) -> List[Activity]:
        activities = list(self.activities.values())
        if type is not None:
            activities = [a for a in activities if a.type == type]
        if search:
            activities = [a for a in activities if _contains(a.description, search)]
        return _newest_first(activities)[:limit]

    async def get_interview_sessions(self, user_id: str) -> List[InterviewSession]:
        return _newest_first([s for s in self.interview_sessions.values() if s.user_id == user_id])

    async def create_interview_session(self, session: InterviewSessionCreate) -> InterviewSession:
        record = InterviewSession(id=str(uuid.uuid4()), created_at=_now(), **session.model_dump())
        self.interview_sessions[record.id] = record
        return record

    async def save_resume(self, user_id: str, resume_data: Dict[str, Any]) -> Resume:
        record = Resume(user_id=user_id, resume_data=resume_data, updated_at=_now())
        self.resumes[user_id] = record
        return record

    async def get_resume(self, user_id: str) -> Optional[Resume]:
        return self.resumes.get(user_id)

    async def delete_resume(self, user_id: str) -> bool:
        return self.resumes.pop(user_id, None) is not None
