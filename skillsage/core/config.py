from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings

from skillsage import __version__


class Settings(BaseSettings):
    # API and Application Config
    PROJECT_NAME: str = "SkillSage API"
    VERSION: str = __version__
    API_PREFIX: str = "/api"
    ENVIRONMENT: str = "production"  # development, test, production
    LOG_LEVEL: str = "INFO"

    # Comma separated list of allowed origins
    CORS_ORIGINS: str = "*"

    # Storage configuration
    STORAGE_BACKEND: str = "database"  # memory, database
    DATABASE_URL: str = "sqlite+aiosqlite:///./skillsage.db"
    SEED_COURSES: bool = True

    # Firebase identity provider (service account JSON)
    FIREBASE_SERVICE_ACCOUNT_KEY: Optional[str] = None

    # Generative text provider (OpenAI-compatible endpoint)
    AI_API_KEY: Optional[str] = None
    AI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    AI_MODEL: str = "gemini-2.0-flash"
    AI_TIMEOUT_SECONDS: float = 60.0
    AI_MAX_RETRIES: int = 3

    # Principal attached when identity verification is bypassed in development
    DEV_PRINCIPAL_UID: str = "dev-user"
    DEV_PRINCIPAL_EMAIL: str = "dev@skillsage.dev"

    @field_validator("ENVIRONMENT")
    @classmethod
    def normalize_environment(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ("development", "test", "production"):
            raise ValueError(f"Unknown environment: {v}")
        return v

    @field_validator("STORAGE_BACKEND")
    @classmethod
    def normalize_storage_backend(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ("memory", "database"):
            raise ValueError(f"Unknown storage backend: {v}")
        return v

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def identity_configured(self) -> bool:
        return bool(self.FIREBASE_SERVICE_ACCOUNT_KEY)

    @property
    def ai_configured(self) -> bool:
        return bool(self.AI_API_KEY)

    class Config:
        case_sensitive = True
        env_file = ".env"


settings = Settings()
