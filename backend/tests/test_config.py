import pytest
from pydantic import ValidationError

from core.config import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("USERID", raising=False)
    settings = Settings(_env_file=None, openai_api_key="sk", pinecone_api_key="pc")

    assert settings.user_id is None
    assert settings.pinecone_index == "jefferson-resume"
    assert settings.openai_chat_model == "gpt-3.5-turbo"
    assert settings.openai_embedding_model == "text-embedding-ada-002"
    assert settings.retrieval_top_k == 4
    assert settings.retrieval_min_score == 0.72
    assert settings.context_char_limit == 3750
    assert "environment" not in Settings.model_fields


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("PINECONE_API_KEY", "pc-env")
    monkeypatch.setenv("USERID", "jefferson")
    monkeypatch.setenv("TELEGRAM_CHAT_ID", "42")

    settings = Settings(_env_file=None)

    assert settings.openai_api_key == "sk-env"
    assert settings.user_id == "jefferson"
    assert settings.telegram_chat_id == "42"


def test_settings_are_frozen():
    settings = Settings(_env_file=None, openai_api_key="sk", pinecone_api_key="pc")
    with pytest.raises(ValidationError):
        settings.user_id = "someone"


def test_api_keys_required(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("PINECONE_API_KEY", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
