import os
from pathlib import Path
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """Application settings."""

    # API Settings
    API_TITLE: str = "Customer Records API"
    API_DESCRIPTION: str = "API for managing customers and their addresses"
    API_VERSION: str = "1.0.0"
    BASE_URL: str = os.getenv("BASE_URL", "http://localhost:5000")

    # Server Settings
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "5000"))
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")

    # Path Settings
    STATIC_DIR: str = os.getenv("STATIC_DIR", str(PACKAGE_DIR / "static"))

    # Database Settings
    DB_PATH: str = os.getenv("DB_PATH", "database.db")

    # Pagination Settings
    DEFAULT_PAGE_LIMIT: int = int(os.getenv("DEFAULT_PAGE_LIMIT", "10"))
    MAX_PAGE_LIMIT: int = int(os.getenv("MAX_PAGE_LIMIT", "100"))

    # Logging Settings
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    REQUEST_LOGGING_ENABLED: bool = os.getenv("REQUEST_LOGGING_ENABLED", "True").lower() == "true"

    @property
    def CORS_ORIGIN_LIST(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


settings = Settings()
