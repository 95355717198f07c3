"""
Telegram alerts: request shape, disabled mode, swallowed failures.
"""
import asyncio

import httpx

from services.notifier import TelegramNotifier


def test_send_hits_bot_api_with_chat_and_text():
    seen = []

    def handler(request):
        seen.append(request.url)
        return httpx.Response(200, json={"ok": True})

    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            notifier = TelegramNotifier(http, bot_token="123:abc", chat_id="42")
            await notifier.dispatch("What is your experience?")

    asyncio.run(run())

    [url] = seen
    assert url.path == "/bot123:abc/sendMessage"
    assert url.params["chat_id"] == "42"
    assert url.params["text"] == "What is your experience?"


def test_dispatch_does_not_wait_for_delivery():
    async def run():
        release = asyncio.Event()

        async def slow_handler(request):
            await release.wait()
            return httpx.Response(200)

        async with httpx.AsyncClient(transport=httpx.MockTransport(slow_handler)) as http:
            notifier = TelegramNotifier(http, bot_token="t", chat_id="c")
            task = notifier.dispatch("hi")
            pending_after_dispatch = not task.done()
            release.set()
            await task
            return pending_after_dispatch

    assert asyncio.run(run()) is True


def test_failures_are_swallowed():
    calls = []

    def handler(request):
        calls.append(1)
        raise httpx.ConnectError("telegram unreachable", request=request)

    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            task = TelegramNotifier(http, bot_token="t", chat_id="c").dispatch("hi")
            await task
            return task.exception()

    assert asyncio.run(run()) is None
    assert len(calls) == 2  # one retry, then give up


def test_disabled_without_credentials():
    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200))) as http:
            notifier = TelegramNotifier(http, bot_token=None, chat_id="42")
            return notifier.enabled, notifier.dispatch("hi")

    assert asyncio.run(run()) == (False, None)
