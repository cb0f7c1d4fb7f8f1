"""
Configuration settings for the PII Redaction Service.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from redaction_service.models.enums import AuditDispatchMode


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # === Application ===
    APP_NAME: str = "PII Redaction Service"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"
    
    # === Redis ===
    REDIS_URL: str = "redis://redis:6379/0"
    REDIS_MAX_CONNECTIONS: int = 50  # Connection pool size
    REDIS_KEY_PREFIX: str = "pii"
    
    # === Entity Store ===
    # entity_type -> storage namespace
    ENTITY_NAMESPACES: dict[str, str] = {
        "service_request": "service_requests",
        "profile": "profiles",
        "message": "concierge_messages",
        "event": "events",
    }
    # service_request documents embed these client profile fields under
    # SERVICE_REQUEST_CLIENT_KEY; set it to "profiles" for rule sets written
    # against the legacy join shape (profiles.email, ...)
    SERVICE_REQUEST_CLIENT_KEY: str = "client"
    SERVICE_REQUEST_CLIENT_FIELDS: list[str] = ["display_name", "email", "phone"]
    
    # === Audit ===
    AUDIT_ENABLED: bool = True
    AUDIT_DISPATCH_MODE: AuditDispatchMode = AuditDispatchMode.INLINE
    
    # === Celery (audit queue) ===
    CELERY_BROKER_URL: str = "redis://redis:6379/0"
    CELERY_RESULT_BACKEND: str = "redis://redis:6379/1"
    CELERY_TASK_TIME_LIMIT: int = 60  # seconds
    CELERY_WORKER_CONCURRENCY: int = 2
    AUDIT_TASK_MAX_RETRIES: int = 5
    
    # === HTTP ===
    CORS_ALLOW_ORIGINS: list[str] = ["*"]
    
    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
