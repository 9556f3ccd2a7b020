"""
Application configuration and environment settings.
"""
from pydantic_settings import BaseSettings
from pydantic import field_validator, model_validator
from typing import List, Optional, Union

DEV_SECRET_KEY = "dev-secret-key-change-in-production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Dear Diary"
    ENVIRONMENT: str = "development"  # development, production, test
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./deardiary.db"
    DB_ECHO: bool = False

    # Session tokens
    SECRET_KEY: str = DEV_SECRET_KEY
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7
    SESSION_COOKIE_NAME: str = "token"

    # Password hashing
    BCRYPT_ROUNDS: int = 12

    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # OpenAI (diary replies). The API key is supplied by the client on every
    # request and is never part of the server configuration.
    OPENAI_API_URL: str = "https://api.openai.com/v1/chat/completions"
    OPENAI_MODEL: str = "gpt-3.5-turbo"
    AI_TEMPERATURE: float = 0.7
    AI_MAX_TOKENS: int = 300
    AI_REQUEST_TIMEOUT: float = 30.0  # seconds
    AI_REPLY_MAX_LENGTH: int = 1000

    # Calendar dates are grouped in this zone (IANA name); server local time if unset
    DIARY_TIMEZONE: Optional[str] = None

    @model_validator(mode="after")
    def check_production_secret(self):
        """Refuse to start in production with the development signing secret."""
        if self.ENVIRONMENT == "production" and self.SECRET_KEY == DEV_SECRET_KEY:
            raise ValueError("SECRET_KEY must be set in production")
        return self

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
