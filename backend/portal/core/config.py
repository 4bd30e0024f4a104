from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DEBUG: bool = False
    APP_NAME: str = "Gestion Humana 360"
    APP_DOMAIN: str = "gestionhumana360.co"
    APP_DATABASE_DSN: str = "sqlite:////tmp/portal.db"
    REDIS_URL: str = "redis://localhost:6379"
    version: str = "0.1.0"

    # Public site, used for links in outgoing emails
    PORTAL_URL: str = "https://gestionhumana360.co"

    # SMTP (empty host disables sending)
    SMTP_HOST: str = ""
    SMTP_PORT: int = 587
    SMTP_USERNAME: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_FROM_EMAIL: str = "notificaciones@gestionhumana360.co"
    SMTP_FROM_NAME: str = "Sistema de Gestion Humana"
    SMTP_USE_TLS: bool = True

    # Bulk notification dispatch policy
    NOTIFICATION_MAX_ATTEMPTS: int = 3
    NOTIFICATION_MESSAGE_TIMEOUT: float = 45.0  # seconds, per recipient
    NOTIFICATION_BATCH_TIMEOUT: float = 300.0  # seconds, whole dispatch

    # List pages
    SEARCH_DEBOUNCE_SECONDS: float = 0.3

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"


settings = Settings()
