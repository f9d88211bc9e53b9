from typing import Literal

from pydantic_settings import BaseSettings

from parishdesk.config import RUNTIME_DIR


class Settings(BaseSettings):
    DATABASE_URL: str = f"sqlite+pysqlite:///{RUNTIME_DIR / 'parishdesk.db'}"
    STORE_BACKEND: Literal["sql", "memory", "firebase"] = "sql"
    FIREBASE_DATABASE_URL: str | None = None
    FIREBASE_CREDENTIALS_PATH: str | None = None
    JWT_SECRET: str = "change-me"
    JWT_ALG: str = "HS256"
    ENVIRONMENT: str = "local"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]
    SEARCH_DEBOUNCE_MS: int = 800
    SESSION_FILE: str = str(RUNTIME_DIR / "session.json")
    TIMEZONE: str = "Asia/Manila"

    class Config:
        env_file = ".env"


settings = Settings()
