"""
Chat Log Service
Builds the transcript payload for a finished answer. Transcripts are not
persisted; the recorder only logs them.
"""
import logging
import secrets
import string
import time
from typing import List, Optional

from models.schemas import ChatLog, ChatMessage

logger = logging.getLogger(__name__)

ID_ALPHABET = string.ascii_letters + string.digits
TITLE_MAX_CHARS = 100


def generate_chat_id(size: int = 7) -> str:
    """Short random alphanumeric id"""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(size))


def build_chat_log(
    request_messages: List[ChatMessage],
    completion: str,
    user_id: str,
    chat_id: Optional[str] = None,
    created_at: Optional[int] = None,
) -> ChatLog:
    """
    Build the transcript for one request.

    Args:
        request_messages: Messages exactly as the client sent them
        completion: Full streamed assistant answer
        user_id: Static user id the service runs as
        chat_id: Client-supplied chat id, generated when absent
        created_at: Epoch milliseconds, defaults to now
    """
    chat_id = chat_id or generate_chat_id()
    return ChatLog(
        id=chat_id,
        title=request_messages[0].content[:TITLE_MAX_CHARS],
        user_id=user_id,
        created_at=created_at if created_at is not None else int(time.time() * 1000),
        path=f"/chat/{chat_id}",
        messages=[*request_messages, ChatMessage(role="assistant", content=completion)],
    )


class ChatLogRecorder:
    """Completion hook. Never raises into the response stream."""

    def __init__(self):
        self.enabled = False  # no transcript store configured

    def record(self, chat_log: ChatLog) -> None:
        try:
            logger.debug(f"[CHATLOG] {chat_log.model_dump_json(by_alias=True)}")
        except Exception as e:
            logger.warning(f"Failed to record chat log: {e}")
