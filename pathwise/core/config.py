import os
from typing import List, Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "Pathwise")
    VERSION: str = "1.0.0"
    API_V1_STR: str = os.getenv("API_V1_STR", "/api/v1")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Session settings
    SESSION_EXPIRE_DAYS: int = 7
    ALGORITHM: str = "HS256"
    BCRYPT_ROUNDS: int = 10

    # Must be supplied by the environment; startup fails without it
    JWT_SECRET_KEY: str = ""

    # Database settings
    DATABASE_URL: Optional[str] = None
    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "postgres")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "postgres")
    POSTGRES_HOST: str = os.getenv("POSTGRES_HOST", "localhost")
    POSTGRES_PORT: str = os.getenv("POSTGRES_PORT", "5432")
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "pathwise")

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """Get database URL, preferring an explicit DATABASE_URL."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # Google sign-in
    GOOGLE_CLIENT_ID: str = ""
    GOOGLE_CLIENT_SECRET: str = ""

    # OpenAI-compatible oracle (OpenRouter works through OPENAI_BASE_URL)
    OPENAI_API_KEY: str = ""
    OPENAI_BASE_URL: Optional[str] = None
    AI_MODEL: str = os.getenv("AI_MODEL", "gpt-4o-mini")
    ORACLE_TIMEOUT_SECONDS: float = 30.0

    # CORS settings
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",  # Frontend
    ]

    class Config:
        case_sensitive = True
        env_file = ".env"


settings = Settings()
