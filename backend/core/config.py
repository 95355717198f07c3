"""
Configuration management for the resume chat service
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Frozen: built once at startup and handed to every service.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    # OpenAI (embeddings + chat completions)
    openai_api_key: str
    openai_base_url: str = "https://api.openai.com/v1"
    openai_chat_model: str = "gpt-3.5-turbo"
    openai_embedding_model: str = "text-embedding-ada-002"

    # Pinecone
    pinecone_api_key: str
    pinecone_environment: Optional[str] = None
    pinecone_index: str = "jefferson-resume"
    pinecone_index_host: Optional[str] = None

    # Static credential; requests are refused while it is unset
    user_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("USERID", "user_id"),
    )

    # Telegram alerts (optional, skipped if absent)
    telegram_bot_token: Optional[str] = None
    telegram_chat_id: Optional[str] = None

    # Retrieval
    retrieval_top_k: int = 4
    retrieval_min_score: float = 0.72
    context_char_limit: int = 3750
    candidate_name: str = "Jefferson"

    # App Config
    frontend_url: str = "http://localhost:3000"
    log_level: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    try:
        return Settings()
    except Exception as e:
        missing = [key for key in ("openai_api_key", "pinecone_api_key") if key in str(e)]
        if missing:
            raise SystemExit(
                f"\n❌ Missing required settings: {', '.join(k.upper() for k in missing)}\n"
                "   1. Copy .env.example to .env\n"
                "   2. Fill in OPENAI_API_KEY and PINECONE_API_KEY\n"
            )
        raise
