from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PATH = Path(__file__).resolve().parent.parent / ".env.local"


class Settings(BaseSettings):
    # Environment settings
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Waitlist upstream settings
    # "auto" picks the backend API when its URL is set, else the spreadsheet script
    WAITLIST_UPSTREAM: Literal["auto", "spreadsheet", "backend"] = "auto"
    GOOGLE_APP_SCRIPT: str | None = None
    WAITLIST_BACKEND_URL: str | None = None
    WAITLIST_BACKEND_PATH: str = "/api/v1/waitlist"
    WAITLIST_BACKEND_PAYLOAD_FIELD: str = "user"
    WAITLIST_FAILURE_MODE: Literal["degraded", "strict"] = "degraded"
    UPSTREAM_TIMEOUT_SECONDS: float = 10.0

    # Resend settings
    RESEND_API_KEY: str | None = None
    RESEND_API_URL: str = "https://api.resend.com/emails"
    EMAIL_FROM: str = "Kolplay <welcome@kolplay.xyz>"
    EMAIL_SUBJECT: str = "Welcome to Kolplay Early Access Waitlist! 🚀"
    REFERRAL_BASE_URL: str = "https://www.kolplay.xyz"

    # Request context settings
    TRUST_X_FORWARDED_FOR: bool = False

    # CORS settings
    CORS_ALLOWED_ORIGINS: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "https://www.kolplay.xyz",
            "https://kolplay.xyz",
        ]
    )

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def upstream_variant(self) -> Literal["spreadsheet", "backend"] | None:
        """
        Resolve which waitlist upstream this deployment talks to.

        Returns None when the selected upstream has no URL configured.
        """
        if self.WAITLIST_UPSTREAM == "backend":
            return "backend" if self.WAITLIST_BACKEND_URL else None
        if self.WAITLIST_UPSTREAM == "spreadsheet":
            return "spreadsheet" if self.GOOGLE_APP_SCRIPT else None

        if self.WAITLIST_BACKEND_URL:
            return "backend"
        if self.GOOGLE_APP_SCRIPT:
            return "spreadsheet"
        return None

    def backend_endpoint(self) -> str | None:
        """Full backend waitlist URL (base URL + fixed path)."""
        if not self.WAITLIST_BACKEND_URL:
            return None
        base = self.WAITLIST_BACKEND_URL.rstrip("/")
        path = "/" + self.WAITLIST_BACKEND_PATH.lstrip("/")
        return f"{base}{path}"

    def email_configured(self) -> bool:
        return bool(self.RESEND_API_KEY)


settings = Settings()


def get_settings() -> Settings:
    """
    FastAPI dependency returning freshly loaded settings.

    Environment is re-read for every request so endpoint URLs and credentials
    can be rotated without a restart.
    """
    return Settings()
