from pydantic_settings import BaseSettings
from typing import List, Union, Optional
from pydantic import field_validator


class Settings(BaseSettings):
    # Database
    POSTGRES_USER: str = "categories"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "categories"
    DATABASE_URL: Optional[str] = None  # Full URL override (e.g. sqlite:// for tests)

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """Return the override URL or construct one from components."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # Application
    SECRET_KEY: str  # Signs the session cookie that carries flash messages
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000"]
    RATE_LIMIT_DEFAULT: str = "100/minute"

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            # Split by comma or keep as single item
            return [origin.strip() for origin in v.split(",")]
        return v

    # Category listing
    CATEGORY_PER_PAGE: int = 15
    CATEGORY_MAX_PER_PAGE: int = 100

    # Category update retry (optimistic concurrency)
    CATEGORY_UPDATE_MAX_RETRY: int = 5
    CATEGORY_UPDATE_BACKOFF_MULTIPLIER: float = 0.05  # seconds
    CATEGORY_UPDATE_BACKOFF_MAX: float = 1.0  # seconds

    # Cookie Security
    COOKIE_SECURE: bool = True  # Set to False for local development without HTTPS
    ENABLE_HSTS: bool = True  # HTTP Strict Transport Security
    HSTS_MAX_AGE: int = 31536000  # 1 year in seconds

    @property
    def is_production(self) -> bool:
        """Detect if running in production environment."""
        return self.COOKIE_SECURE and not self.DEBUG

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env


settings = Settings()
