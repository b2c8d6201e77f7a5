"""
Cost Insight Dashboard Backend configuration
"""

from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Environment
    ENV: str = "development"  # development | production

    # API
    API_TITLE: str = "Cost Insight Dashboard API"
    API_VERSION: str = "1.0.0"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 3001

    # CORS (Vite dev server)
    CORS_ORIGINS: list = [
        "http://localhost:5173",
    ]

    # Paths
    BASE_DIR: Path = Path(__file__).parent  # backend/
    LOGS_DIR: Path = BASE_DIR / "logs"
    NRM2_CONFIG_PATH: Path = BASE_DIR / "data" / "nrm2-default-elements.json"

    # Logging
    LOG_LEVEL: str = "DEBUG"  # DEBUG | INFO | WARNING | ERROR
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_TO_FILE: bool = True

    # Populate the store with sample data on startup
    SEED_DATA: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()

# Create directories if missing
if settings.LOG_TO_FILE:
    settings.LOGS_DIR.mkdir(exist_ok=True, parents=True)
