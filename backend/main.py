import logging
from contextlib import asynccontextmanager
import httpx

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from core.config import get_settings
from core.errors import register_exception_handlers
from core.log_config import configure_logging
from core.middleware import RequestIDMiddleware
from api.router import api_router
from services import (
    ContentFilter,
    EmbeddingClient,
    PineconeIndex,
    ContextRetriever,
    ChatCompletionClient,
    CompletionOrchestrator,
    ChatLogRecorder,
    TelegramNotifier,
)

# Load environment variables
load_dotenv()

settings = get_settings()
configure_logging(settings.log_level)

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize services on startup and attach to app state"""
    settings = get_settings()

    # Shared HTTP client for every provider
    app.state.http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(60.0, connect=10.0),
        limits=httpx.Limits(max_keepalive_connections=20, max_connections=100),
        http2=True,
    )

    app.state.content_filter = ContentFilter()
    app.state.retriever = ContextRetriever(
        embeddings=EmbeddingClient(
            api_key=settings.openai_api_key,
            http_client=app.state.http_client,
            model=settings.openai_embedding_model,
            base_url=settings.openai_base_url,
        ),
        index=PineconeIndex(
            api_key=settings.pinecone_api_key,
            index_name=settings.pinecone_index,
            http_client=app.state.http_client,
            environment=settings.pinecone_environment,
            host=settings.pinecone_index_host,
        ),
        top_k=settings.retrieval_top_k,
        min_score=settings.retrieval_min_score,
        char_limit=settings.context_char_limit,
    )
    app.state.orchestrator = CompletionOrchestrator(
        ChatCompletionClient(
            api_key=settings.openai_api_key,
            http_client=app.state.http_client,
            model=settings.openai_chat_model,
            base_url=settings.openai_base_url,
        )
    )
    app.state.notifier = TelegramNotifier(
        http_client=app.state.http_client,
        bot_token=settings.telegram_bot_token,
        chat_id=settings.telegram_chat_id,
    )
    app.state.chat_log_recorder = ChatLogRecorder()

    # Log service status for debugging
    logger.warning("=" * 50)
    logger.warning("SERVICE STATUS:")
    logger.warning(f"  ✓ Completion: {settings.openai_chat_model}")
    logger.warning(f"  ✓ Retrieval: index '{settings.pinecone_index}' via {settings.openai_embedding_model}")
    logger.warning(f"  {'✓' if settings.user_id else '✗'} Static user: {'Set' if settings.user_id else 'Missing (every chat gets 401)'}")
    logger.warning(f"  {'✓' if app.state.notifier.enabled else '✗'} Telegram alerts: {'Enabled' if app.state.notifier.enabled else 'Disabled'}")
    logger.warning("=" * 50)

    logger.info("All services initialized and attached to state")
    yield

    # Cleanup
    if hasattr(app.state, "http_client"):
        await app.state.http_client.aclose()

    logger.info("Services shut down")

app = FastAPI(
    title="Resume Chat",
    description="Answers recruiter questions from resume snippets",
    version="1.0.0",
    lifespan=lifespan
)

# Middleware
allowed_origins = ["http://localhost:3000"]
if settings.frontend_url not in allowed_origins:
    allowed_origins.append(settings.frontend_url)

logger.info(f"CORS Allowed Origins: {allowed_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIDMiddleware)

register_exception_handlers(app)

# Include Routers
app.include_router(api_router, prefix="/api")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
