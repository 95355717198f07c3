"""
Embedding Service
Raw HTTP (httpx) client for the OpenAI embeddings endpoint
"""
import logging
from typing import List

import httpx

logger = logging.getLogger(__name__)


class EmbeddingClient:
    """Turns text into a fixed-length vector. No retries: failures propagate."""

    def __init__(
        self,
        api_key: str,
        http_client: httpx.AsyncClient,
        model: str = "text-embedding-ada-002",
        base_url: str = "https://api.openai.com/v1",
    ):
        self.http_client = http_client
        self.model = model
        self.url = f"{base_url.rstrip('/')}/embeddings"
        self.headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    async def embed(self, text: str) -> List[float]:
        payload = {"model": self.model, "input": text}

        response = await self.http_client.post(
            self.url, json=payload, headers=self.headers, timeout=30.0
        )
        if response.status_code != 200:
            logger.error(f"[EMBED] API Error {response.status_code}: {response.text}")
            response.raise_for_status()

        data = response.json()
        # { "data": [ { "embedding": [ ... ] } ], ... }
        return data["data"][0]["embedding"]
