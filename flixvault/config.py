"""Configuration management"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Secret Key
    SECRET_KEY: str = "change-this-to-a-random-secret-key"

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/flixvault.db"

    # JWT
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440  # 24 hours
    ALGORITHM: str = "HS256"

    # Auth cookie
    COOKIE_NAME: str = "token"
    COOKIE_SECURE: bool = False

    # Directories
    BASE_DIR: Path = Path(__file__).parent.parent
    DATA_DIR: Path = BASE_DIR / "data"
    LOGS_DIR: Path = DATA_DIR / "logs"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    ALLOWED_ORIGINS: Optional[str] = None  # Comma-separated origins for main API

    # Metadata lookup
    OMDB_API_KEY: Optional[str] = None
    OMDB_BASE_URL: str = "https://www.omdbapi.com/"
    OMDB_TIMEOUT: float = 10.0

    # Statistics
    STATS_TOP_YEARS: int = 10

    class Config:
        env_file = ".env"
        case_sensitive = True

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Ensure directories exist
        self.DATA_DIR.mkdir(parents=True, exist_ok=True)
        self.LOGS_DIR.mkdir(parents=True, exist_ok=True)


# Global settings instance
settings = Settings()
