from pydantic_settings import BaseSettings
from typing import List
from functools import lru_cache


class Settings(BaseSettings):
    """Настройки приложения"""

    # Database
    POSTGRES_DB: str = "geoview"
    POSTGRES_USER: str = "postgres_user"
    POSTGRES_PASSWORD: str = "postgres_password"
    POSTGRES_HOST: str = "localhost"
    DATABASE_URL: str = ""
    DB_CREATE_TABLES: bool = False

    # Redis
    REDIS_URL: str = "redis://redis:6379/0"
    CACHE_TTL_SECONDS: int = 600  # 10 minutes

    # JWT
    JWT_SECRET: str = "change-this-secret-key-minimum-32-characters"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_DAYS: int = 7

    # Session cookie
    COOKIE_NAME: str = "token"
    COOKIE_SECURE: bool = False

    # Application
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False
    DEBUG: bool = True
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "GeoView API"
    VERSION: str = "1.0.0"

    # Monitoring
    ENABLE_METRICS: bool = True

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def database_url(self) -> str:
        """Формирование URL для базы данных"""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:5432/{self.POSTGRES_DB}"
        )

    @property
    def cookie_max_age(self) -> int:
        """Срок жизни cookie с токеном в секундах"""
        return self.JWT_EXPIRE_DAYS * 24 * 60 * 60


@lru_cache()
def get_settings() -> Settings:
    """Получить настройки (кэшированные)"""
    return Settings()


settings = get_settings()
