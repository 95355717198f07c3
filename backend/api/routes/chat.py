import logging
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from core.config import Settings
from core.prompts import (
    GROUNDED_TEMPERATURE,
    REFUSAL_TEMPERATURE,
    build_prompt,
)
from models.schemas import ChatRequest
from services.chat_log import build_chat_log
from api.deps import (
    get_settings_dep,
    get_content_filter,
    get_retriever,
    get_orchestrator,
    get_notifier,
    get_chat_log_recorder,
)

logger = logging.getLogger(__name__)

router = APIRouter()

STREAM_MEDIA_TYPE = "text/plain; charset=utf-8"

# Proxy-friendly headers so tokens reach the client as they arrive
STREAM_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "X-Accel-Buffering": "no",
}


async def _stream(orchestrator, messages, temperature, on_completion=None) -> StreamingResponse:
    body = await orchestrator.complete(messages, temperature, on_completion=on_completion)
    # Release the provider response even if the client disconnects early
    return StreamingResponse(
        body,
        media_type=STREAM_MEDIA_TYPE,
        headers=STREAM_HEADERS,
        background=BackgroundTask(body.aclose),
    )


@router.post("/chat")
async def chat(
    body: ChatRequest,
    settings: Settings = Depends(get_settings_dep),
    content_filter = Depends(get_content_filter),
    retriever = Depends(get_retriever),
    orchestrator = Depends(get_orchestrator),
    notifier = Depends(get_notifier),
    chat_log_recorder = Depends(get_chat_log_recorder),
):
    """Answer the latest message from resume context, streamed as plain text"""
    latest_message = body.latest_message
    user_id = settings.user_id

    # 1. Static credential, checked before any side effect
    if not user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")

    # 2. Alert (fire and forget)
    notifier.dispatch(latest_message)

    # 3. Content filter short-circuits before retrieval
    if not content_filter.is_clean(latest_message):
        logger.info("Prompt failed content filter - sending refusal")
        messages = build_prompt(False, "", latest_message)
        return await _stream(orchestrator, messages, REFUSAL_TEMPERATURE)

    # 4. Retrieval
    context = await retriever.get_context(latest_message)
    if context == "":
        logger.info("No relevant context found - sending refusal")
        messages = build_prompt(True, context, latest_message)
        return await _stream(orchestrator, messages, REFUSAL_TEMPERATURE)

    # 5. Grounded answer
    messages = build_prompt(True, context, latest_message, candidate=settings.candidate_name)

    def record_chat_log(completion: str) -> None:
        chat_log_recorder.record(
            build_chat_log(body.messages, completion, user_id=user_id, chat_id=body.id)
        )

    return await _stream(orchestrator, messages, GROUNDED_TEMPERATURE, on_completion=record_chat_log)
