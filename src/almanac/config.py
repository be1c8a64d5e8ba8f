from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseModel):
    """Application-specific configuration values."""

    name: str = "Almanac"
    env: str = "development"
    debug: bool = True
    port: int = 8000
    log_level: str = "INFO"
    # Transport settings for FastMCP: "stdio" (default), "http", or "sse"
    transport: Literal["stdio", "http", "sse"] = "stdio"
    host: str = "127.0.0.1"


class ContentConfig(BaseModel):
    """Location of the Markdown articles."""

    directory: str = "content"
    extensions: List[str] = [".md", ".mdx"]


class SearchIndexConfig(BaseModel):
    """Meilisearch index configuration values."""

    enabled: bool = True
    host: str = "http://127.0.0.1:7700"
    api_key: Optional[str] = None  # Master key or a search/admin key
    index_name: str = "encyclopedia"
    timeout: float = 5.0
    limit: int = 50
    body_chars: int = 5000


class SnapshotConfig(BaseModel):
    """Client-side snapshot (articles.json) configuration values."""

    path: str = "public/articles.json"
    preview_chars: int = 500


class Settings(BaseSettings):
    """Top-level settings loaded from environment variables and .env only."""

    model_config = SettingsConfigDict(
        env_prefix="ALMANAC_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    app: AppConfig = AppConfig()
    content: ContentConfig = ContentConfig()
    search_index: SearchIndexConfig = SearchIndexConfig()
    snapshot: SnapshotConfig = SnapshotConfig()


def load_settings() -> Settings:
    """Load settings from environment variables and .env only."""
    return Settings()  # type: ignore[call-arg]
