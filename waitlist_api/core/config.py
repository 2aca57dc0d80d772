from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    # Database - defaults to a local SQLite file, override with environment variable for production
    DATABASE_URL: str = "sqlite:///./waitlist.db"

    # Store backend: "sql" (SQLAlchemy) or "memory" (process-local, lost on restart)
    STORE_BACKEND: str = "sql"

    # Waitlist
    FOUNDERS_SPOTS: int = 1000
    DEFAULT_SOURCE: str = "landing"

    # App Settings
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5000",
        "http://127.0.0.1:3000",
    ]

    class Config:
        # Use absolute path to .env file
        env_file = Path(__file__).parent.parent.parent / ".env"
        env_file_encoding = 'utf-8'
        extra = "ignore"


settings = Settings()
