"""
Configuration management for AskCart.
Loads settings from environment variables with validation.
"""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Paths
    base_dir: Path = Path(__file__).parent.parent
    data_dir: Path = Path(__file__).parent.parent / "data"

    # Server
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8000, description="Bind port")
    ws_path: str = Field(default="/ws", description="WebSocket endpoint path")

    # LLM Provider
    llm_provider: Literal["gigachat", "gemini"] = Field(
        default="gemini", description="LLM provider to use"
    )

    # GigaChat
    gigachat_credentials: Optional[str] = Field(
        default=None, description="GigaChat API credentials"
    )
    gigachat_scope: str = Field(
        default="GIGACHAT_API_PERS", description="GigaChat API scope"
    )
    gigachat_model: str = Field(default="GigaChat", description="GigaChat model name")

    # Gemini
    gemini_api_key: Optional[str] = Field(default=None, description="Gemini API key")
    gemini_model: str = Field(
        default="gemini-2.5-flash", description="Gemini model name"
    )

    # Reasoning
    assistant_name: str = Field(
        default="AskCart AI", description="Persona name used in prompts"
    )
    reasoning_timeout: float = Field(
        default=30.0, gt=0, description="Seconds to wait for the model before giving up"
    )
    history_limit: int = Field(
        default=20, ge=0, description="Prior turns passed to the model on each reply"
    )
    max_recommendations: int = Field(
        default=3, ge=0, description="Maximum products recommended per reply"
    )

    # Catalog
    search_limit: int = Field(default=20, gt=0, description="Maximum search results")

    # Database
    database_url: Optional[str] = Field(
        default=None,
        description="Database connection URL",
    )

    @property
    def db_url(self) -> str:
        """Get database URL with absolute path."""
        if self.database_url:
            return self.database_url
        return f"sqlite+aiosqlite:///{self.data_dir / 'askcart.db'}"

    # Debug
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def catalog_dir(self) -> Path:
        """Directory for catalog import files."""
        return self.data_dir / "catalog"


# Global settings instance
settings = Settings()
