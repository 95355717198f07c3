"""Services module"""
from .content_filter import ContentFilter
from .embeddings import EmbeddingClient
from .vector_store import PineconeIndex
from .retriever import ContextRetriever, pack_context, sanitize_query, select_context_texts
from .completion import ChatCompletionClient, CompletionOrchestrator, CompletionStream, TokenRelay
from .chat_log import ChatLogRecorder, build_chat_log, generate_chat_id
from .notifier import TelegramNotifier

__all__ = [
    "ContentFilter",
    "EmbeddingClient",
    "PineconeIndex",
    "ContextRetriever",
    "pack_context",
    "sanitize_query",
    "select_context_texts",
    "ChatCompletionClient",
    "CompletionOrchestrator",
    "CompletionStream",
    "TokenRelay",
    "ChatLogRecorder",
    "build_chat_log",
    "generate_chat_id",
    "TelegramNotifier",
]
