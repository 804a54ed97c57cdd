"""
Configuration management for the Quote Stream API.
"""

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

load_dotenv(os.path.join(Path(__file__).parent.parent, ".env"))


class Settings:
    """API server configuration."""

    # Paths
    BASE_DIR: Path = Path(__file__).parent.parent

    # Server
    API_TITLE: str = "Quote Stream API"
    API_DESCRIPTION: str = "Health check and a Server-Sent Events stream of random quotes"
    API_VERSION: str = "1.0.0"
    HOST: str = "0.0.0.0"
    PORT: int = int(os.getenv("PORT", "7000"))

    # CORS
    CORS_ORIGINS: List[str] = ["*"]  # Allow all origins

    # Streaming
    QUOTE_INTERVAL_SECONDS: float = 3.0

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
