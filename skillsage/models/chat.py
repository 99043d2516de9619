from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Text

from skillsage.models.base import Base


class ChatMessage(Base):
    __tablename__ = "chat_messages"

    id = Column(String, primary_key=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    is_ai = Column(Boolean, nullable=False, default=False)
    session_id = Column(String, nullable=False, default="default")
    created_at = Column(DateTime(timezone=True), nullable=False)
