import os
from dataclasses import dataclass, field
from dotenv import load_dotenv

load_dotenv()


def _csv(name: str, default: str = "") -> tuple[str, ...]:
    raw = os.getenv(name, default)
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    # Service
    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "MyService")
    APP_NAME: str = os.getenv("APP_NAME", "my-example-service")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    BOOTSTRAP_ON_STARTUP: bool = os.getenv("BOOTSTRAP_ON_STARTUP", "true").lower() == "true"

    # Gateway
    GATEWAY_URL: str = os.getenv("GATEWAY_URL", "http://gateway:8080/v3")
    GATEWAY_TIMEOUT: float = float(os.getenv("GATEWAY_TIMEOUT", "5"))
    GATEWAY_SERVICE_KEY: str | None = os.getenv("GATEWAY_SERVICE_KEY")

    # EIM connector / trusted provider
    EIM_CONNECTION_URL: str = os.getenv("EIM_CONNECTION_URL", "http://eim-backend:8080")
    TRUSTED_PROVIDER_NAME: str = os.getenv("TRUSTED_PROVIDER_NAME", "ImaginaryProvider")

    # Push notification targets
    PUSH_TEST_CLIENTS: tuple[str, ...] = field(default_factory=lambda: _csv("PUSH_TEST_CLIENTS", "dummyClientId"))
    PUSH_TEST_USERS: tuple[str, ...] = field(default_factory=lambda: _csv("PUSH_TEST_USERS", "admin"))
    PUSH_TEST_GROUPS: tuple[str, ...] = field(default_factory=lambda: _csv("PUSH_TEST_GROUPS", "otagadmins,otadmins"))

    # Upgrade notice mail
    UPGRADE_NOTICE_FROM: str = os.getenv("UPGRADE_NOTICE_FROM", "admin@myservice.com")
    UPGRADE_NOTICE_TO: tuple[str, ...] = field(default_factory=lambda: _csv("UPGRADE_NOTICE_TO"))
    UPGRADE_NOTICE_RECIPIENT_COUNT: int = int(os.getenv("UPGRADE_NOTICE_RECIPIENT_COUNT", "25"))

    # SMTP
    EMAIL_HOST: str = os.getenv("EMAIL_HOST", "smtp.gmail.com")
    EMAIL_PORT: int = int(os.getenv("EMAIL_PORT", "587"))
    EMAIL_USER: str | None = os.getenv("EMAIL_USER")
    EMAIL_PASS: str | None = os.getenv("EMAIL_PASS")
    EMAIL_FROM: str | None = os.getenv("EMAIL_FROM", os.getenv("EMAIL_USER"))
    EMAIL_USE_SSL: bool = os.getenv("EMAIL_USE_SSL", "false").lower() == "true"
    EMAIL_USE_STARTTLS: bool = os.getenv("EMAIL_USE_STARTTLS", "true").lower() == "true"

    SMTP_CONNECT_TIMEOUT: float = float(os.getenv("SMTP_CONNECT_TIMEOUT", "7"))
    SMTP_OP_TIMEOUT: float = float(os.getenv("SMTP_OP_TIMEOUT", "10"))
    SMTP_MAX_RETRIES: int = int(os.getenv("SMTP_MAX_RETRIES", "3"))

settings = Settings()
