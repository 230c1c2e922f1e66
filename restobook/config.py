"""Configuration management for restobook using Pydantic."""

import logging
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RESTOBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Configuration
    api_url: str = Field(
        default="http://localhost:8000/api", description="Base URL of the REST API"
    )
    request_timeout: float = Field(
        default=15.0, gt=0, description="Timeout for a single API call in seconds"
    )

    # Local State
    token_file: Path = Field(
        default=Path(".restobook/tokens.json"),
        description="Where the access/refresh token pair is persisted",
    )
    pending_selection_db: Path = Field(
        default=Path(".restobook/pending.db"),
        description="SQLite file holding booking selections across a login redirect",
    )
    pending_selection_ttl_minutes: int = Field(
        default=30, gt=0, description="How long a saved booking selection stays valid"
    )

    # Booking Behaviour
    success_redirect_delay: float = Field(
        default=2.0,
        ge=0,
        description="Seconds the success acknowledgment is shown before navigating",
    )
    search_debounce: float = Field(
        default=0.3, ge=0, description="Debounce window for browse search text"
    )
    max_guest_count: int = Field(
        default=20, ge=1, description="Upper bound for the party size picker"
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")

    def model_post_init(self, __context) -> None:
        """Validate configuration after initialization."""
        if not self.api_url.startswith(("http://", "https://")):
            logger.warning(f"RESTOBOOK_API_URL does not look like a URL: {self.api_url}")


# Global config instance
config: Config | None = None


def get_config() -> Config:
    """Get or create the global configuration instance."""
    global config
    if config is None:
        config = Config()
    return config


def setup_logging(cfg: Config | None = None) -> None:
    """Configure logging for the application."""
    if cfg is None:
        cfg = get_config()

    log_level = getattr(logging, cfg.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Reduce noise from external libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
