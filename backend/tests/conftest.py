"""
Shared fixtures: an isolated chat app with fake services on app.state.
No lifespan, no env vars, no network.
"""
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.deps import get_settings_dep
from api.routes.chat import router as chat_router
from core.config import Settings
from core.errors import register_exception_handlers
from services.content_filter import ContentFilter


def make_settings(**overrides) -> Settings:
    values = {"openai_api_key": "sk-test", "pinecone_api_key": "pc-test", "user_id": "user-1"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FakeRetriever:
    def __init__(self, context: str = "", error: Exception = None):
        self.context = context
        self.error = error
        self.calls = []

    async def get_context(self, query: str) -> str:
        self.calls.append(query)
        if self.error:
            raise self.error
        return self.context


class FakeOrchestrator:
    """Streams fixed tokens and records every completion request"""

    def __init__(self, tokens=("Hello", " there"), error: Exception = None):
        self.tokens = list(tokens)
        self.error = error
        self.calls = []

    async def complete(self, messages, temperature, on_completion=None):
        self.calls.append({"messages": messages, "temperature": temperature})
        if self.error:
            raise self.error

        async def relay():
            for token in self.tokens:
                yield token
            if on_completion:
                on_completion("".join(self.tokens))

        return relay()


class FakeNotifier:
    enabled = True

    def __init__(self):
        self.sent = []

    def dispatch(self, text: str):
        self.sent.append(text)
        return None


class FakeRecorder:
    enabled = False

    def __init__(self):
        self.logs = []

    def record(self, chat_log):
        self.logs.append(chat_log)


@pytest.fixture()
def services():
    return {
        "content_filter": ContentFilter(),
        "retriever": FakeRetriever(context="CONTEXT"),
        "orchestrator": FakeOrchestrator(),
        "notifier": FakeNotifier(),
        "chat_log_recorder": FakeRecorder(),
    }


@pytest.fixture()
def settings():
    return make_settings()


@pytest.fixture()
def app(services, settings):
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(chat_router, prefix="/api")
    for name, service in services.items():
        setattr(app.state, name, service)
    app.dependency_overrides[get_settings_dep] = lambda: settings
    return app


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c
