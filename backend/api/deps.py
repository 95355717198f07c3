from fastapi import Request
from core.config import get_settings, Settings


def get_settings_dep() -> Settings:
    return get_settings()

def get_content_filter(request: Request):
    return request.app.state.content_filter

def get_retriever(request: Request):
    return request.app.state.retriever

def get_orchestrator(request: Request):
    return request.app.state.orchestrator

def get_notifier(request: Request):
    return request.app.state.notifier

def get_chat_log_recorder(request: Request):
    return request.app.state.chat_log_recorder
