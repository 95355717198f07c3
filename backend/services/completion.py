"""
Completion Service
Streams chat completions from OpenAI over raw HTTP (httpx) and turns them
into a plain-text token stream for the HTTP response
"""
import json
import logging
import time
from typing import AsyncIterator, Callable, List, Optional

import httpx

from models.schemas import ChatMessage

logger = logging.getLogger(__name__)


class CompletionStream:
    """Token iterator over an open streaming response.

    The underlying response is closed once iteration ends or fails. Call
    `aclose` when the stream is dropped without being iterated.
    """

    def __init__(self, response: httpx.Response):
        self.response = response

    async def __aiter__(self) -> AsyncIterator[str]:
        try:
            async for line in self.response.aiter_lines():
                if not line.startswith("data:"):
                    continue
                data_str = line[5:].strip()
                if not data_str:
                    continue
                if data_str == "[DONE]":
                    break

                try:
                    data = json.loads(data_str)
                except json.JSONDecodeError:
                    logger.warning(f"Failed to decode stream chunk: {data_str}")
                    continue

                # { "choices": [ { "delta": { "content": "..." } } ] }
                choices = data.get("choices") or []
                if choices:
                    token = (choices[0].get("delta") or {}).get("content")
                    if token:
                        yield token
        finally:
            await self.response.aclose()

    async def aclose(self) -> None:
        await self.response.aclose()


class ChatCompletionClient:
    """OpenAI chat completions, always streamed. No retries."""

    def __init__(
        self,
        api_key: str,
        http_client: httpx.AsyncClient,
        model: str = "gpt-3.5-turbo",
        base_url: str = "https://api.openai.com/v1",
    ):
        self.http_client = http_client
        self.model = model
        self.url = f"{base_url.rstrip('/')}/chat/completions"
        self.headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    async def open_stream(self, messages: List[ChatMessage], temperature: float) -> CompletionStream:
        """Send the request and return once the provider has accepted it.

        Raises httpx.HTTPStatusError on a non-200 answer, so callers can fail
        the request before any body bytes are sent.
        """
        payload = {
            "model": self.model,
            "messages": [m.model_dump() for m in messages],
            "temperature": temperature,
            "stream": True,
        }
        request = self.http_client.build_request(
            "POST", self.url, json=payload, headers=self.headers, timeout=60.0
        )
        response = await self.http_client.send(request, stream=True)

        if response.status_code != 200:
            await response.aread()
            logger.error(f"[COMPLETION] API Error {response.status_code}: {response.text}")
            await response.aclose()
            response.raise_for_status()

        return CompletionStream(response)


class TokenRelay:
    """Body iterator handed to the StreamingResponse.

    `aclose` releases the provider response even when iteration never
    started (client gone before the first chunk), which the generator's own
    cleanup cannot cover.
    """

    def __init__(self, tokens: AsyncIterator[str], stream: CompletionStream):
        self._tokens = tokens
        self._stream = stream

    def __aiter__(self) -> AsyncIterator[str]:
        return self._tokens

    async def aclose(self) -> None:
        await self._tokens.aclose()
        await self._stream.aclose()


class CompletionOrchestrator:
    """Issues exactly one completion request and relays its tokens"""

    def __init__(self, client: ChatCompletionClient):
        self.client = client

    async def complete(
        self,
        messages: List[ChatMessage],
        temperature: float,
        on_completion: Optional[Callable[[str], None]] = None,
    ) -> TokenRelay:
        """
        Open the completion stream and return the body iterator.

        Args:
            messages: Prompt to send
            temperature: Sampling temperature
            on_completion: Called with the full answer after the last token.
                Errors it raises are logged and swallowed.

        Returns:
            TokenRelay of text tokens, ready for a StreamingResponse
        """
        start_time = time.time()
        stream = await self.client.open_stream(messages, temperature)

        async def relay() -> AsyncIterator[str]:
            chunks = []
            try:
                async for token in stream:
                    chunks.append(token)
                    yield token
            except httpx.HTTPError as e:
                logger.error(f"Completion stream failed mid-response: {e}")
                raise
            finally:
                await stream.aclose()

            latency_ms = int((time.time() - start_time) * 1000)
            logger.info(f"Streamed {len(chunks)} chunks in {latency_ms}ms (temperature={temperature})")

            if on_completion:
                try:
                    on_completion("".join(chunks))
                except Exception as e:
                    logger.warning(f"Completion hook failed: {e}")

        return TokenRelay(relay(), stream)
