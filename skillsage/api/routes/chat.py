from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query

from skillsage.api.deps import get_ai_gateway, get_storage, owner_from_path, require_owner_or_admin, use_ai_tools
from skillsage.auth.principal import Principal
from skillsage.schemas.chat import ChatMessage, ChatMessageCreate, ChatReply, ChatRequest, ChatSession
from skillsage.services.ai_gateway import AIGateway
from skillsage.services.users import ensure_user
from skillsage.storage.base import Storage

router = APIRouter()


@router.get("/sessions/{user_id}", response_model=List[ChatSession])
async def read_chat_sessions(
    user_id: str,
    storage: Storage = Depends(get_storage),
    _: Principal = Depends(require_owner_or_admin(owner_from_path())),
) -> Any:
    return await storage.get_chat_sessions(user_id)


@router.get("/{user_id}", response_model=List[ChatMessage])
async def read_chat_messages(
    user_id: str,
    session_id: Optional[str] = Query(None, alias="sessionId"),
    storage: Storage = Depends(get_storage),
    _: Principal = Depends(require_owner_or_admin(owner_from_path())),
) -> Any:
    return await storage.get_chat_messages(user_id, session_id)


@router.post("", response_model=ChatReply)
async def send_chat_message(
    *,
    storage: Storage = Depends(get_storage),
    ai_gateway: AIGateway = Depends(get_ai_gateway),
    principal: Principal = Depends(use_ai_tools),
    chat_in: ChatRequest,
) -> Any:
    """Store the user's message, ask the mentor for a reply and store that too."""
    user, _ = await ensure_user(storage, principal)
    await storage.create_chat_message(
        ChatMessageCreate(user_id=user.id, content=chat_in.message, is_ai=False, session_id=chat_in.session_id)
    )

    context = {"name": user.name, "role": user.role.value, "skills": user.skills}
    advice = await ai_gateway.get_career_advice(chat_in.message, context)

    await storage.create_chat_message(
        ChatMessageCreate(user_id=user.id, content=advice.message, is_ai=True, session_id=chat_in.session_id)
    )
    return ChatReply(message=advice.message, suggestions=advice.suggestions, session_id=chat_in.session_id)
