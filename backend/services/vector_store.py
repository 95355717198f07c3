"""
Vector Store Service
Raw HTTP (httpx) client for a single Pinecone index
"""
import logging
from typing import List, Optional

import httpx
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from models.schemas import RetrievedMatch

logger = logging.getLogger(__name__)

CONTROL_PLANE_URL = "https://api.pinecone.io"


class PineconeIndex:
    """Nearest-neighbour queries against one named Pinecone index.

    The data-plane host is taken from settings when given. Otherwise it is
    looked up once from the control plane (the legacy per-environment
    controller when an environment is configured) and cached.
    """

    def __init__(
        self,
        api_key: str,
        index_name: str,
        http_client: httpx.AsyncClient,
        environment: Optional[str] = None,
        host: Optional[str] = None,
    ):
        self.index_name = index_name
        self.environment = environment
        self.http_client = http_client
        self.headers = {"Api-Key": api_key, "Content-Type": "application/json"}
        self._host = self._normalize_host(host) if host else None

    @staticmethod
    def _normalize_host(host: str) -> str:
        host = host.rstrip("/")
        if not host.startswith(("http://", "https://")):
            host = f"https://{host}"
        return host

    def _describe_url(self) -> str:
        if self.environment:
            return f"https://controller.{self.environment}.pinecone.io/databases/{self.index_name}"
        return f"{CONTROL_PLANE_URL}/indexes/{self.index_name}"

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(httpx.TransportError),
        reraise=True,
    )
    async def resolve_host(self) -> str:
        """Return the index data-plane URL, describing the index if needed"""
        if self._host:
            return self._host

        response = await self.http_client.get(self._describe_url(), headers=self.headers, timeout=10.0)
        if response.status_code != 200:
            logger.error(f"[PINECONE] Describe index failed {response.status_code}: {response.text}")
            response.raise_for_status()

        data = response.json()
        host = data.get("host") or (data.get("status") or {}).get("host")
        if not host:
            raise httpx.HTTPError(f"Pinecone index '{self.index_name}' has no host")

        self._host = self._normalize_host(host)
        logger.info(f"[PINECONE] Resolved index '{self.index_name}' to {self._host}")
        return self._host

    async def query(
        self,
        vector: List[float],
        top_k: int = 4,
        include_metadata: bool = True,
    ) -> Optional[List[RetrievedMatch]]:
        """Query the index.

        Returns None when the response carries no `matches` field, otherwise
        the matches in the order the store returned them.
        """
        host = await self.resolve_host()
        payload = {"vector": vector, "topK": top_k, "includeMetadata": include_metadata}

        response = await self.http_client.post(
            f"{host}/query", json=payload, headers=self.headers, timeout=30.0
        )
        if response.status_code != 200:
            logger.error(f"[PINECONE] Query failed {response.status_code}: {response.text}")
            response.raise_for_status()

        data = response.json()
        if data.get("matches") is None:
            return None

        return [
            RetrievedMatch(
                score=match.get("score"),
                text=(match.get("metadata") or {}).get("text"),
            )
            for match in data["matches"]
        ]
