"""Shared test fixtures."""

from collections.abc import AsyncGenerator
from types import SimpleNamespace
from typing import Dict, List, Optional, Union

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from skillsage.auth.identity import IdentityProvider, InvalidCredential
from skillsage.auth.principal import VerifiedIdentity
from skillsage.core.config import Settings
from skillsage.core.roles import Role
from skillsage.main import create_app
from skillsage.schemas.user import UserCreate
from skillsage.services.ai_gateway import AIGateway
from skillsage.storage.memory import MemoryStorage
from skillsage.storage.seed import seed_courses

STUDENT_UID = "student-uid"
MENTOR_UID = "mentor-uid"
ADMIN_UID = "admin-uid"
NEWCOMER_UID = "newcomer-uid"

TOKENS = {
    "student-token": VerifiedIdentity(uid=STUDENT_UID, email="ada@skillsage.io", name="Ada Lovelace"),
    "mentor-token": VerifiedIdentity(uid=MENTOR_UID, email="grace@skillsage.io", name="Grace Hopper"),
    "admin-token": VerifiedIdentity(uid=ADMIN_UID, email="linus@skillsage.io", name="Linus Admin"),
    "newcomer-token": VerifiedIdentity(uid=NEWCOMER_UID, email="alan@skillsage.io", name="Alan Turing"),
}


class StaticIdentityProvider(IdentityProvider):
    """Accepts only the tokens it was built with."""

    def __init__(self, tokens: Dict[str, VerifiedIdentity]):
        self.tokens = tokens

    async def verify(self, token: str) -> VerifiedIdentity:
        try:
            return self.tokens[token]
        except KeyError:
            raise InvalidCredential("Token not recognised")


class FakeCompletions:
    def __init__(self):
        self.replies: List[Union[str, Exception]] = []
        self.calls: List[dict] = []

    async def create(self, **params):
        self.calls.append(params)
        reply = self.replies.pop(0) if self.replies else ""
        if isinstance(reply, Exception):
            raise reply
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=reply))])


class FakeAIClient:
    """Stands in for AsyncOpenAI; queue replies (text or exceptions) on ``completions.replies``."""

    def __init__(self):
        self.completions = FakeCompletions()
        self.chat = SimpleNamespace(completions=self.completions)
        self.closed = False

    def reply_with(self, *replies: Union[str, Exception]) -> None:
        self.completions.replies.extend(replies)

    async def close(self) -> None:
        self.closed = True


def auth(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def settings() -> Settings:
    return Settings(ENVIRONMENT="test", STORAGE_BACKEND="memory", LOG_LEVEL="WARNING", AI_MAX_RETRIES=1)


@pytest.fixture
def ai_client() -> FakeAIClient:
    return FakeAIClient()


@pytest.fixture
def ai_gateway(ai_client: FakeAIClient) -> AIGateway:
    return AIGateway(ai_client, model="test-model", timeout_seconds=5, max_retries=1)


@pytest_asyncio.fixture
async def storage() -> MemoryStorage:
    store = MemoryStorage()
    await store.initialize()
    await seed_courses(store)
    await store.create_user(
        UserCreate(email="ada@skillsage.io", name="Ada Lovelace", skills=["Python"]), user_id=STUDENT_UID
    )
    await store.create_user(
        UserCreate(email="grace@skillsage.io", name="Grace Hopper", role=Role.MENTOR), user_id=MENTOR_UID
    )
    await store.create_user(
        UserCreate(email="linus@skillsage.io", name="Linus Admin", role=Role.ADMIN), user_id=ADMIN_UID
    )
    return store


def build_client(
    settings: Settings,
    storage: MemoryStorage,
    ai_gateway: AIGateway,
    provider: Optional[IdentityProvider] = None,
) -> AsyncClient:
    app = create_app(settings, storage=storage, identity_provider=provider, ai_gateway=ai_gateway)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest_asyncio.fixture
async def client(settings, storage, ai_gateway) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against an app whose identity provider knows the TOKENS above."""
    async with build_client(settings, storage, ai_gateway, StaticIdentityProvider(TOKENS)) as c:
        yield c


@pytest.fixture
def student_headers() -> Dict[str, str]:
    return auth("student-token")


@pytest.fixture
def mentor_headers() -> Dict[str, str]:
    return auth("mentor-token")


@pytest.fixture
def admin_headers() -> Dict[str, str]:
    return auth("admin-token")


@pytest.fixture
def newcomer_headers() -> Dict[str, str]:
    return auth("newcomer-token")
