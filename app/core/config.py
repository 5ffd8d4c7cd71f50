import logging
from dotenv import load_dotenv
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

from app.constants.constants import SMTP_SERVICES

# Load environment variables from .env file
load_dotenv(".env", override=True)
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Class to store all the settings of the contact mail application."""

    # ------------------------------
    # Environment
    # ------------------------------
    ENVIRONMENT: str = Field(default="development")
    ALLOWED_ORIGINS: List[str] = Field(default_factory=list)
    LOG_LEVEL: str = Field(default="INFO")

    # ------------------------------
    # Mail transport - "smtp" or "graph"
    # ------------------------------
    MAIL_TRANSPORT: str = Field(default="smtp")

    # ------------------------------
    # SMTP - Optional
    # ------------------------------
    SMTP_SERVICE: str = Field(default="")
    SMTP_HOST: str = Field(default="localhost")
    SMTP_PORT: int = Field(default=465)
    SMTP_SECURE: bool = Field(default=True)
    SMTP_USERNAME: str = Field(default="")
    SMTP_PASSWORD: str = Field(default="")

    # ------------------------------
    # Microsoft Graph - Required when MAIL_TRANSPORT=graph
    # ------------------------------
    MICROSOFT_TENANT_ID: str = Field(default="")
    MICROSOFT_CLIENT_ID: str = Field(default="")
    MICROSOFT_CLIENT_SECRET: str = Field(default="")

    # ------------------------------
    # Message envelope
    # ------------------------------
    MAIL_FROM: str = Field(default="no-reply@example.com")
    MAIL_TO: str = Field(default="user@website.com")
    MAIL_SUBJECT: str = Field(default="Contact Form Submission")
    MAIL_REPLY_TO_SUBMITTER: bool = Field(default=False)
    MAIL_SEND_TIMEOUT: float = Field(default=30.0, gt=0)

    # ------------------------------
    # Debugging
    # ------------------------------
    EXPOSE_REJECTION_REASON: bool = Field(default=False)

    # ------------------------------
    # Computed Fields
    # ------------------------------
    @computed_field
    @property
    def SMTP_RESOLVED_HOST(self) -> str:
        """SMTP host, taken from the well-known service table when SMTP_SERVICE is set."""
        service = SMTP_SERVICES.get(self.SMTP_SERVICE.lower())
        return service["host"] if service else self.SMTP_HOST

    @computed_field
    @property
    def SMTP_RESOLVED_PORT(self) -> int:
        service = SMTP_SERVICES.get(self.SMTP_SERVICE.lower())
        return service["port"] if service else self.SMTP_PORT

    @computed_field
    @property
    def SMTP_RESOLVED_SECURE(self) -> bool:
        """Implicit TLS or STARTTLS, following the service's port when SMTP_SERVICE is set."""
        service = SMTP_SERVICES.get(self.SMTP_SERVICE.lower())
        return service["secure"] if service else self.SMTP_SECURE

    @computed_field
    @property
    def CORS_ORIGINS(self) -> List[str]:
        """Computed field for CORS origins based on environment."""
        if self.ENVIRONMENT == "production":
            return self.ALLOWED_ORIGINS
        return [
            "http://localhost:3000",
            "http://localhost:3001",
        ]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


# Instantiate the settings
settings = Settings()


def get_settings() -> Settings:
    """Dependency returning the process-wide settings."""
    return settings
