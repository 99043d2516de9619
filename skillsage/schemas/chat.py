from datetime import datetime
from typing import List, Optional

from pydantic import Field

from skillsage.schemas.base import APIModel

DEFAULT_SESSION_ID = "default"


class ChatMessageCreate(APIModel):
    user_id: str
    content: str = Field(..., min_length=1)
    is_ai: bool = Field(False, alias="isAI")
    session_id: str = DEFAULT_SESSION_ID


class ChatMessage(ChatMessageCreate):
    id: str
    created_at: datetime


class ChatRequest(APIModel):
    message: str = Field(..., min_length=1)
    session_id: str = DEFAULT_SESSION_ID


class ChatReply(APIModel):
    message: str
    suggestions: List[str] = []
    session_id: str = DEFAULT_SESSION_ID


class ChatSession(APIModel):
    id: str
    message_count: int
    started_at: Optional[datetime] = None
    last_message_at: Optional[datetime] = None
