"""
Chat module data models.
"""

from enum import Enum

from pydantic import BaseModel, Field


class ChatRole(str, Enum):
    """Roles a client may send. The system prompt is always server-side."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """One turn of the conversation."""

    role: ChatRole
    content: str = Field(default="", description="Message text")


class ChatRequest(BaseModel):
    """Body of ``POST /chat``: the conversation so far, oldest first."""

    messages: list[ChatMessage] = Field(..., min_length=1)


class ChatResponse(BaseModel):
    """The assistant's reply."""

    message: str
