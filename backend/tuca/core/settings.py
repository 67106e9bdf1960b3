from pathlib import Path
from typing import Literal, Optional, Union
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Tuca Noronha API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    API_PREFIX: str = "/api"

    # Storage
    STORAGE_BACKEND: Literal["memory", "database"] = "memory"
    SEED_SAMPLE_DATA: bool = True

    # Database (only used by the "database" storage backend)
    DB_URL: str = "sqlite:///./tuca.db"
    DB_ECHO: bool = False  # Set to True for SQL query logging in development

    # Connection Pool Settings
    DB_POOL_SIZE: int = 10  # Number of connections to maintain in pool
    DB_MAX_OVERFLOW: int = 20  # Maximum overflow connections beyond pool_size
    DB_POOL_TIMEOUT: int = 30  # Timeout in seconds to get connection from pool
    DB_POOL_RECYCLE: int = 3600  # Recycle connections after 1 hour

    # Sessions
    SESSION_SECRET: str = ""  # Random secret generated at startup when empty
    SESSION_COOKIE_NAME: str = "tuca.sid"
    SESSION_MAX_AGE_SECONDS: int = 24 * 60 * 60
    SESSION_PRUNE_INTERVAL_SECONDS: int = 24 * 60 * 60

    # Password Security
    PASSWORD_MIN_LENGTH: int = 8
    PASSWORD_REQUIRE_UPPERCASE: bool = False
    PASSWORD_REQUIRE_NUMBER: bool = False
    PASSWORD_RESET_EXPIRE_MINUTES: int = 60

    # Seeded administrator
    ADMIN_EMAIL: str = "admin@tucanoronha.com"
    ADMIN_PASSWORD: str = "admin123"

    # Rate Limiting
    ENABLE_RATE_LIMITING: bool = True
    RATE_LIMIT_LOGIN: str = "10/minute"
    RATE_LIMIT_REGISTER: str = "5/minute"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # CORS
    ALLOWED_ORIGINS: Union[list, str] = ["http://localhost:5000", "http://localhost:5173"]

    @field_validator('ALLOWED_ORIGINS', mode='before')
    @classmethod
    def parse_allowed_origins(cls, v):
        """Parse ALLOWED_ORIGINS from comma-separated string or list"""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',') if origin.strip()]
        return v

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parents[3] / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
