# app/config.py
"""
Application configuration using Pydantic-Settings.
All settings can be overridden via environment variables or .env file.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # ── Database ──────────────────────────────────────────────────────────
    DATABASE_URL: str = "sqlite:///./parking_registry.db"

    # ── Network ───────────────────────────────────────────────────────────
    BACKEND_IP: str = "0.0.0.0"
    BACKEND_PORT: int = 8080

    # ── Security ──────────────────────────────────────────────────────────
    API_KEY: Optional[str] = None   # Set in .env to enable auth on API endpoints

    # ── Alert headers ─────────────────────────────────────────────────────
    APP_NAME: str = "parkingApp"    # Prefix of X-<APP_NAME>-alert headers

    # ── Capacity (max vehicles present per type) ──────────────────────────
    CAR_CAPACITY: int = 20
    MOTORCYCLE_CAPACITY: int = 10

    @property
    def CAPACITIES(self) -> dict:
        return {
            "CAR": self.CAR_CAPACITY,
            "MOTORCYCLE": self.MOTORCYCLE_CAPACITY,
        }

    # ── Behaviour ─────────────────────────────────────────────────────────
    STRICT_DELETE: bool = False     # True → DELETE of unknown id returns 404

    # ── Logging ───────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None   # Defaults to <repo>/logs
    LOG_FILE: str = "registry.log"  # Empty → console only
    LOG_SQL: bool = False           # Echo SQL via the sqlalchemy.engine logger

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
