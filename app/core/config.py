"""
app/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (bot token, DB URI, operator chat, etc.)
- Optional features switch on when their variables are present
- Validates configuration on startup
"""

from pydantic import Field, validator
from pydantic_settings import BaseSettings
from typing import Optional, Literal, Dict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Store, operator chat and contact URL are optional and degrade gracefully.
    """

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # Telegram
    BOT_TOKEN: Optional[str] = Field(
        default=None,
        description="Telegram bot token (required at startup)"
    )
    TELEGRAM_API_URL: str = Field(
        default="https://api.telegram.org",
        description="Telegram Bot API base URL"
    )
    TELEGRAM_REQUEST_TIMEOUT: float = Field(
        default=10.0,
        description="Bot API request timeout in seconds"
    )
    TELEGRAM_WEBHOOK_URL: Optional[str] = Field(
        default=None,
        description="Public webhook URL registered on startup"
    )
    TELEGRAM_WEBHOOK_SECRET: Optional[str] = Field(
        default=None,
        description="Secret token Telegram sends with every webhook call"
    )

    # MongoDB (lead store)
    MONGODB_URL: Optional[str] = Field(
        default=None,
        description="MongoDB connection URI; leave unset for cache-only mode"
    )
    MONGODB_DB_NAME: str = Field(
        default="opora",
        description="MongoDB database name"
    )
    LEADS_COLLECTION: str = Field(
        default="leads",
        description="Collection holding lead records"
    )
    STORE_TIMEOUT_MS: int = Field(
        default=4000,
        description="Upper bound for a single store call in milliseconds"
    )

    # Operator notifications
    ADMIN_CHAT_ID: Optional[str] = Field(
        default=None,
        description="Chat that receives new lead summaries"
    )
    MARIA_CONTACT_URL: Optional[str] = Field(
        default=None,
        description="External contact link shown after booking"
    )

    # Conversation
    TECHNIQUE_PAUSE_SECONDS: float = Field(
        default=2.0,
        description="Pause before sending the explanation and technique"
    )

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    API_PREFIX: str = Field(
        default="/api/v1",
        description="API route prefix"
    )

    @validator("STORE_TIMEOUT_MS")
    def validate_store_timeout(cls, v):
        """Store calls must always be bounded."""
        if v <= 0:
            raise ValueError("STORE_TIMEOUT_MS must be positive")
        return v

    @validator("TECHNIQUE_PAUSE_SECONDS")
    def validate_pause(cls, v):
        if v < 0:
            raise ValueError("TECHNIQUE_PAUSE_SECONDS cannot be negative")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    @property
    def has_store(self) -> bool:
        return bool(self.MONGODB_URL)

    @property
    def has_admin(self) -> bool:
        return bool(self.ADMIN_CHAT_ID)

    @property
    def has_contact_url(self) -> bool:
        return bool(self.MARIA_CONTACT_URL)

    @property
    def store_timeout_seconds(self) -> float:
        return self.STORE_TIMEOUT_MS / 1000

    def feature_flags(self) -> Dict[str, bool]:
        """On/off status of every optional feature."""
        return {
            "store": self.has_store,
            "admin_chat": self.has_admin,
            "maria_url": self.has_contact_url,
        }

    class Config:
        env_file = ".env"
        case_sensitive = True
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global settings instance
settings = Settings()


def validate_settings(current: Optional[Settings] = None):
    """
    Validates critical settings on application startup.
    Raises ValueError if any required setting is missing or invalid.
    """
    current = current or settings
    errors = []

    if not current.BOT_TOKEN:
        errors.append("BOT_TOKEN is required")

    if current.is_production and current.TELEGRAM_WEBHOOK_URL and not current.TELEGRAM_WEBHOOK_SECRET:
        errors.append("TELEGRAM_WEBHOOK_SECRET is required for a production webhook")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
