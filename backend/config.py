# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    RESET_TOKEN_EXPIRE_MINUTES: int = 60
    DATABASE_URL: str = "sqlite:///./database_portfolio.db"

    # "memory" keeps everything in-process, "database" uses DATABASE_URL
    STORAGE_BACKEND: str = "memory"
    SEED_SAMPLE_DATA: bool = True
    BCRYPT_ROUNDS: int = 10

    # Single administrator seeded on startup
    ADMIN_EMAIL: str = "admin@portfolio.dev"
    ADMIN_PASSWORD: str = "change-me-admin"
    ADMIN_NAME: str = "Portfolio Admin"

    FRONTEND_URL: str = "http://localhost:5173"

    # Mail delivery (SendGrid); without a key messages are only logged
    SENDGRID_API_KEY: Optional[str] = None
    SENDGRID_API_URL: str = "https://api.sendgrid.com"
    MAIL_FROM: str = "noreply@portfolio.dev"

    UPLOAD_DIR: str = "static/uploads"
    MAX_UPLOAD_MB: int = 50

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

settings = Settings()
