from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import Optional
from pathlib import Path


STORAGE_BACKENDS = ("file", "memory", "redis")
DELIVERY_CHANNELS = ("console", "log")


class Settings(BaseSettings):
    """Application settings - all configurable via environment variables"""

    # ==========================================
    # Application
    # ==========================================
    APP_NAME: str = "CollegeMate"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False  # Forces DEBUG logging regardless of LOG_LEVEL

    # ==========================================
    # Logging
    # ==========================================
    LOG_LEVEL: str = "WARNING"
    LOG_FILE: Optional[str] = None  # Rotating file log, disabled when unset

    # ==========================================
    # Local Storage
    # ==========================================
    CONFIG_DIR: str = str(Path.home() / ".collegemate")
    STORAGE_BACKEND: str = "file"  # file, memory, redis
    STORAGE_FILE: str = "storage.json"  # Relative paths resolve under CONFIG_DIR
    STORAGE_NAMESPACE: str = "collegemate"
    REDIS_URL: str = "redis://localhost:6379/0"

    # ==========================================
    # One-Time Passcodes
    # ==========================================
    OTP_TTL_SECONDS: int = 60
    OTP_DELIVERY_DELAY_SECONDS: float = 0.5  # Delivery lands after the confirmation UI
    OTP_DELIVERY_CHANNEL: str = "console"  # console, log

    @field_validator("STORAGE_BACKEND", "OTP_DELIVERY_CHANNEL", mode="before")
    @classmethod
    def lowercase_choice(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("OTP_TTL_SECONDS")
    @classmethod
    def positive_ttl(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("OTP_TTL_SECONDS must be positive")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env that aren't defined in Settings

    @property
    def storage_path(self) -> Path:
        path = Path(self.STORAGE_FILE).expanduser()
        if not path.is_absolute():
            path = Path(self.CONFIG_DIR).expanduser() / path
        return path

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


# Create settings instance
settings = Settings()
