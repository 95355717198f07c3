"""
Telegram Alert Service
Pings a Telegram chat with every incoming question, fire-and-forget
"""
import asyncio
import logging
from typing import Optional, Set

import httpx
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

logger = logging.getLogger(__name__)

TELEGRAM_API_URL = "https://api.telegram.org"


class TelegramNotifier:
    """Sends alerts through the Telegram Bot API.

    Disabled when either the bot token or the chat id is missing.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        bot_token: Optional[str] = None,
        chat_id: Optional[str] = None,
    ):
        self.http_client = http_client
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.enabled = bool(bot_token and chat_id)
        # Strong references so pending alerts are not garbage collected
        self._tasks: Set[asyncio.Task] = set()

        if not self.enabled:
            logger.info("Telegram credentials not provided - alerts disabled")

    @retry(
        stop=stop_after_attempt(2),
        wait=wait_exponential(multiplier=1, min=1, max=5),
        retry=retry_if_exception_type(httpx.HTTPError),
    )
    async def send(self, text: str) -> None:
        """Send one alert. Raises on failure."""
        response = await self.http_client.get(
            f"{TELEGRAM_API_URL}/bot{self.bot_token}/sendMessage",
            params={"chat_id": self.chat_id, "text": text},
            timeout=10.0,
        )
        response.raise_for_status()

    async def _send_quietly(self, text: str) -> None:
        try:
            await self.send(text)
        except Exception as e:
            # str(e) would include the request URL, which embeds the bot token
            logger.warning(f"Telegram alert failed: {type(e).__name__}")

    def dispatch(self, text: str) -> Optional[asyncio.Task]:
        """Schedule an alert without waiting for it. Failures are only logged."""
        if not self.enabled:
            return None

        task = asyncio.create_task(self._send_quietly(text))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task
