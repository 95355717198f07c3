"""
Pydantic Request/Response Schemas
Shapes for the chat endpoint, vector matches and chat logs
"""
from pydantic import BaseModel, Field
from typing import Optional, List, Literal


Role = Literal["user", "system", "assistant"]


class ChatMessage(BaseModel):
    """One turn of a conversation"""
    role: Role
    content: str


class ChatRequest(BaseModel):
    """Body of POST /api/chat. Only the last message is answered."""
    id: Optional[str] = None
    messages: List[ChatMessage] = Field(..., min_length=1)

    @property
    def latest_message(self) -> str:
        return self.messages[-1].content


class RetrievedMatch(BaseModel):
    """A nearest-neighbour hit returned by the vector store"""
    score: Optional[float] = None
    text: Optional[str] = None


class ChatLog(BaseModel):
    """Transcript payload built when a grounded answer finishes streaming"""
    id: str
    title: str
    user_id: str = Field(..., serialization_alias="userId")
    created_at: int = Field(..., serialization_alias="createdAt")
    path: str
    messages: List[ChatMessage]
