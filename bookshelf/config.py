"""Application configuration using Pydantic settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Bookshelf Client"
    debug: bool = False

    # Remote books API
    books_api_url: str = "http://localhost:3000/api/books"
    request_timeout: float = 10.0
    search_result_limit: int = 10

    # Credential persistence
    credential_storage: Literal["memory", "file", "redis"] = "file"
    credential_key: str = "auth_token"
    credential_file: str = ".bookshelf/credentials.json"
    redis_url: str = "redis://localhost:6379/0"

    # Placeholder login until the books API exposes a real endpoint
    login_username: str = "admin"
    login_password: str = "1234"

    # Navigation
    login_path: str = "/login"
    home_path: str = "/"
    public_paths: list[str] = ["/login"]
    guard_exempt_paths: list[str] = ["/health", "/metrics", "/docs", "/redoc", "/openapi.json"]

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    workers: int = 1


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
