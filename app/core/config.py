from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field

class Settings(BaseSettings):
    APP_NAME: str = "Expenser"
    APP_VERSION: str = "0.1.0"
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8080
    MODE: str = ""
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: Optional[str] = Field(default=None, description="Full SQLAlchemy URL, overrides the DB_* parts")
    DB_USER: str = "postgres"
    DB_PASS: str = ""
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "expenser"

    JWT_SECRET_KEY: str = Field(..., min_length=1)
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_HOURS: int = Field(default=24, gt=0)
    JWT_REFRESH_THRESHOLD_MINUTES: int = Field(default=120, ge=0)
    JWT_ISSUER: str = "expenser-app"

    AUTH_COOKIE_NAME: str = "auth_token"
    COOKIE_DOMAIN: Optional[str] = None
    COOKIE_SECURE: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = 'utf-8'
        extra = "ignore"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASS}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

settings = Settings()
