"""
Context Retriever
Embeds the question, fetches nearest resume snippets and packs them
into a bounded context block for the system prompt
"""
import json
import logging
from typing import List, Optional

from core.prompts import CONTEXT_PREAMBLE, CONTEXT_SEPARATOR
from models.schemas import RetrievedMatch
from .embeddings import EmbeddingClient
from .vector_store import PineconeIndex

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 4
DEFAULT_MIN_SCORE = 0.72
DEFAULT_CHAR_LIMIT = 3750


def sanitize_query(query: str) -> str:
    """Trim and flatten newlines; embeddings behave better on single-line input"""
    return query.strip().replace("\n", " ")


def select_context_texts(
    matches: List[RetrievedMatch],
    min_score: float = DEFAULT_MIN_SCORE,
) -> List[str]:
    """Texts of matches scoring at least `min_score`, in store order"""
    return [
        match.text
        for match in matches
        if match.score is not None and match.score >= min_score and match.text
    ]


def pack_context(
    texts: List[str],
    limit: int = DEFAULT_CHAR_LIMIT,
    preamble: str = CONTEXT_PREAMBLE,
    separator: str = CONTEXT_SEPARATOR,
) -> str:
    """
    Greedily pack texts behind the preamble while staying under `limit`.

    Texts are added in order. As soon as the next text would bring the
    formatted length to `limit` or beyond, the previous prefix is used.
    If the very first text is already too long the result is the preamble
    alone.

    Returns:
        The packed context, or "" when there are no texts
    """
    if not texts:
        return ""

    for i in range(len(texts)):
        candidate = preamble + separator.join(texts[: i + 1])
        if len(candidate) >= limit:
            return preamble + separator.join(texts[:i])

    return preamble + separator.join(texts)


class ContextRetriever:
    """Question in, bounded block of supporting resume text out"""

    def __init__(
        self,
        embeddings: EmbeddingClient,
        index: PineconeIndex,
        top_k: int = DEFAULT_TOP_K,
        min_score: float = DEFAULT_MIN_SCORE,
        char_limit: int = DEFAULT_CHAR_LIMIT,
    ):
        self.embeddings = embeddings
        self.index = index
        self.top_k = top_k
        self.min_score = min_score
        self.char_limit = char_limit

    async def get_context(self, query: str) -> str:
        """Return the assembled context, or "" when nothing relevant was found.

        Embedding and vector store errors propagate to the caller.
        """
        question = sanitize_query(query)

        vector = await self.embeddings.embed(question)
        matches: Optional[List[RetrievedMatch]] = await self.index.query(
            vector, top_k=self.top_k, include_metadata=True
        )
        if matches is None:
            logger.info("[RETRIEVE] Vector store returned no matches field")
            return ""

        texts = select_context_texts(matches, self.min_score)
        logger.info(f"[RETRIEVE] relevant matches {json.dumps(texts)}")

        return pack_context(texts, limit=self.char_limit)
