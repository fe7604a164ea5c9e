"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # TEXT EXTRACTION
    # ===================
    text_extractor: str = Field(
        default="pdftotext",
        pattern="^(pdftotext|pdfplumber)$",
        description="Backend used to turn a PDF into layout-preserving text"
    )
    pdftotext_path: str = Field(
        default="pdftotext",
        description="pdftotext executable (poppler-utils)"
    )

    # ===================
    # PARSER
    # ===================
    column_gap_spaces: int = Field(
        default=2,
        ge=2,
        le=10,
        description="Whitespace run that separates a header value from the next column"
    )

    # ===================
    # STORAGE
    # ===================
    outdocs_path: str = Field(
        default="./storage/",
        description="Directory where uploaded shipment documents are saved"
    )
    max_upload_size_mb: int = Field(
        default=10,
        ge=1,
        le=50,
        description="Maximum accepted upload size in MB"
    )

    # ===================
    # MESSAGES
    # ===================
    message_language: str = Field(
        default="uk",
        pattern="^(en|uk)$",
        description="Language of rendered chat messages"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API host"
    )
    api_port: int = Field(
        default=8000,
        ge=1000,
        le=65535,
        description="API port"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
