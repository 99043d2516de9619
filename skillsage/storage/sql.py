import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Dict, List, Optional, Type, TypeVar

from sqlalchemy import delete, inspect as sa_inspect, or_, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from skillsage import models
from skillsage.core.errors import IntegrityViolation
from skillsage.core.roles import Role
from skillsage.db.session import Database
from skillsage.schemas.activity import Activity, ActivityCreate, ActivityType
from skillsage.schemas.base import APIModel
from skillsage.schemas.chat import ChatMessage, ChatMessageCreate
from skillsage.schemas.course import Course, CourseCreate
from skillsage.schemas.interview import InterviewSession, InterviewSessionCreate
from skillsage.schemas.resume import Resume
from skillsage.schemas.skill import SkillProgress
from skillsage.schemas.user import User, UserCreate
from skillsage.storage.base import SEARCH_LIMIT, Storage

SchemaT = TypeVar("SchemaT", bound=APIModel)

_UPSERT_DIALECTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: Any) -> Any:
    # SQLite drops the offset from timezone-aware columns
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_schema(schema: Type[SchemaT], row: Any) -> SchemaT:
    values = {attr.key: _as_utc(getattr(row, attr.key)) for attr in sa_inspect(row).mapper.column_attrs}
    return schema.model_validate(values)


def _pattern(term: str) -> str:
    return f"%{term}%"


class SQLStorage(Storage):
    """Relational store; every method runs in its own short-lived session."""

    name = "database"

    def __init__(self, database: Database):
        self.db = database
        if database.dialect not in _UPSERT_DIALECTS:
            raise ValueError(f"Unsupported database dialect for upserts: {database.dialect}")
        self._insert = _UPSERT_DIALECTS[database.dialect]

    async def initialize(self) -> None:
        await self.db.init()

    async def close(self) -> None:
        await self.db.close()

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        async with self.db.session_factory() as session:
            try:
                yield session
            except IntegrityError as e:
                await session.rollback()
                raise IntegrityViolation() from e

    async def _first(self, stmt) -> Optional[Any]:
        async with self._session() as session:
            result = await session.execute(stmt)
            return result.scalars().first()

    async def _all(self, stmt) -> List[Any]:
        async with self._session() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def _add(self, row: Any) -> Any:
        async with self._session() as session:
            session.add(row)
            await session.commit()
            await session.refresh(row)
            return row

    async def _update(self, model: Any, key: str, updates: Dict[str, Any]) -> Optional[Any]:
        async with self._session() as session:
            row = await session.get(model, key)
            if row is None:
                return None
            for field, value in updates.items():
                setattr(row, field, value.value if isinstance(value, Role) else value)
            await session.commit()
            await session.refresh(row)
            return row

    # Users
    async def get_user(self, user_id: str) -> Optional[User]:
        row = await self._first(select(models.User).where(models.User.id == user_id))
        return _to_schema(User, row) if row else None

    async def get_user_by_email(self, email: str) -> Optional[User]:
        row = await self._first(select(models.User).where(models.User.email == email))
        return _to_schema(User, row) if row else None

    async def create_user(self, user: UserCreate, user_id: Optional[str] = None) -> User:
        data = user.model_dump(include=set(UserCreate.model_fields))
        data["role"] = user.role.value
        row = models.User(id=user_id or str(uuid.uuid4()), is_active=True, created_at=_now(), **data)
        return _to_schema(User, await self._add(row))

    async def update_user(self, user_id: str, updates: Dict[str, Any]) -> Optional[User]:
        row = await self._update(models.User, user_id, updates)
        return _to_schema(User, row) if row else None

    async def list_users(
        self,
        search: Optional[str] = None,
        role: Optional[Role] = None,
        is_active: Optional[bool] = None,
    ) -> List[User]:
        stmt = select(models.User).order_by(models.User.created_at)
        if search:
            stmt = stmt.where(or_(models.User.name.ilike(_pattern(search)), models.User.email.ilike(_pattern(search))))
        if role is not None:
            stmt = stmt.where(models.User.role == Role(role).value)
        if is_active is not None:
            stmt = stmt.where(models.User.is_active == is_active)
        return [_to_schema(User, row) for row in await self._all(stmt)]

    # Courses
    async def get_courses(self) -> List[Course]:
        return [_to_schema(Course, row) for row in await self._all(select(models.Course))]

    async def get_recommended_courses(self, user_id: str) -> List[Course]:
        user = await self.get_user(user_id)
        conditions = [models.Course.is_recommended.is_(True)]
        for skill in user.skills if user else []:
            conditions.append(models.Course.title.ilike(_pattern(skill)))
            conditions.append(models.Course.category.ilike(_pattern(skill)))
        rows = await self._all(select(models.Course).where(or_(*conditions)))
        return [_to_schema(Course, row) for row in rows]

    async def get_course(self, course_id: str) -> Optional[Course]:
        row = await self._first(select(models.Course).where(models.Course.id == course_id))
        return _to_schema(Course, row) if row else None

    async def create_course(self, course: CourseCreate) -> Course:
        data = course.model_dump()
        data["difficulty"] = course.difficulty.value
        row = models.Course(id=str(uuid.uuid4()), **data)
        return _to_schema(Course, await self._add(row))

    async def update_course(self, course_id: str, updates: Dict[str, Any]) -> Optional[Course]:
        updates = {k: getattr(v, "value", v) for k, v in updates.items()}
        row = await self._update(models.Course, course_id, updates)
        return _to_schema(Course, row) if row else None

    async def search_course_by_name(self, name: str) -> Optional[Course]:
        row = await self._first(select(models.Course).where(models.Course.title.ilike(_pattern(name))))
        return _to_schema(Course, row) if row else None

    async def search_courses(self, term: str) -> List[Course]:
        stmt = (
            select(models.Course)
            .where(
                or_(
                    models.Course.title.ilike(_pattern(term)),
                    models.Course.description.ilike(_pattern(term)),
                    models.Course.category.ilike(_pattern(term)),
                )
            )
            .limit(SEARCH_LIMIT)
        )
        return [_to_schema(Course, row) for row in await self._all(stmt)]

    # Chat
    async def get_chat_messages(self, user_id: str, session_id: Optional[str] = None) -> List[ChatMessage]:
        stmt = select(models.ChatMessage).where(models.ChatMessage.user_id == user_id)
        if session_id is not None:
            stmt = stmt.where(models.ChatMessage.session_id == session_id)
        stmt = stmt.order_by(models.ChatMessage.created_at)
        return [_to_schema(ChatMessage, row) for row in await self._all(stmt)]

    async def create_chat_message(self, message: ChatMessageCreate) -> ChatMessage:
        row = models.ChatMessage(id=str(uuid.uuid4()), created_at=_now(), **message.model_dump())
        return _to_schema(ChatMessage, await self._add(row))

    # Skill progress
    async def get_skill_progress(self, user_id: str) -> List[SkillProgress]:
        stmt = select(models.SkillProgress).where(models.SkillProgress.user_id == user_id)
        return [_to_schema(SkillProgress, row) for row in await self._all(stmt)]

    async def update_skill_progress(self, user_id: str, skill_name: str, progress: int) -> SkillProgress:
        now = _now()
        stmt = self._insert(models.SkillProgress).values(
            id=str(uuid.uuid4()),
            user_id=user_id,
            skill_name=skill_name,
            progress=progress,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "skill_name"],
            set_={"progress": progress, "updated_at": now},
        )
        async with self._session() as session:
            await session.execute(stmt)
            await session.commit()
            result = await session.execute(
                select(models.SkillProgress).where(
                    models.SkillProgress.user_id == user_id,
                    models.SkillProgress.skill_name == skill_name,
                )
            )
            return _to_schema(SkillProgress, result.scalars().one())

    # Activities
    async def get_activities(self, user_id: str) -> List[Activity]:
        stmt = (
            select(models.Activity)
            .where(models.Activity.user_id == user_id)
            .order_by(models.Activity.created_at.desc())
        )
        return [_to_schema(Activity, row) for row in await self._all(stmt)]

    async def create_activity(self, activity: ActivityCreate) -> Activity:
        data = activity.model_dump()
        data["type"] = activity.type.value
        row = models.Activity(id=str(uuid.uuid4()), created_at=_now(), **data)
        return _to_schema(Activity, await self._add(row))

    async def list_activities(
        self,
        limit: int = 50,
        type: Optional[ActivityType] = None,
        search: Optional[str] = None,
    ) -> List[Activity]:
        stmt = select(models.Activity)
        if type is not None:
            stmt = stmt.where(models.Activity.type == ActivityType(type).value)
        if search:
            stmt = stmt.where(models.Activity.description.ilike(_pattern(search)))
        stmt = stmt.order_by(models.Activity.created_at.desc()).limit(limit)
        return [_to_schema(Activity, row) for row in await self._all(stmt)]

    # Interviews
    async def get_interview_sessions(self, user_id: str) -> List[InterviewSession]:
        stmt = (
            select(models.InterviewSession)
            .where(models.InterviewSession.user_id == user_id)
            .order_by(models.InterviewSession.created_at.desc())
        )
        return [_to_schema(InterviewSession, row) for row in await self._all(stmt)]

    async def create_interview_session(self, session: InterviewSessionCreate) -> InterviewSession:
        data = session.model_dump()
        data["type"] = session.type.value
        row = models.InterviewSession(id=str(uuid.uuid4()), created_at=_now(), **data)
        return _to_schema(InterviewSession, await self._add(row))

    # Resumes
    async def save_resume(self, user_id: str, resume_data: Dict[str, Any]) -> Resume:
        now = _now()
        stmt = self._insert(models.Resume).values(user_id=user_id, resume_data=resume_data, updated_at=now)
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id"],
            set_={"resume_data": resume_data, "updated_at": now},
        )
        async with self._session() as session:
            await session.execute(stmt)
            await session.commit()
        return Resume(user_id=user_id, resume_data=resume_data, updated_at=now)

    async def get_resume(self, user_id: str) -> Optional[Resume]:
        row = await self._first(select(models.Resume).where(models.Resume.user_id == user_id))
        return _to_schema(Resume, row) if row else None

    async def delete_resume(self, user_id: str) -> bool:
        async with self._session() as session:
            result = await session.execute(delete(models.Resume).where(models.Resume.user_id == user_id))
            await session.commit()
            return result.rowcount > 0
