"""Application settings using Pydantic Settings."""

from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv


def find_and_load_env_file() -> Optional[str]:
    """Find and load a .env file in the current directory or its parents."""
    current = Path.cwd().resolve()
    # Check current directory and up to 3 levels up
    for _ in range(4):
        env_path = current / ".env"
        if env_path.exists():
            load_dotenv(env_path, override=False)
            return str(env_path)
        parent = current.parent
        if parent == current:  # Reached root
            break
        current = parent
    return None


class Settings(BaseSettings):
    """Configuration for ermodel, read from ERMODEL_* environment variables."""

    # Logging Configuration
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    # Example Generation Configuration
    example_locale: str = "en_US"
    example_string_length: int = 20
    auto_increment_example_max: int = 100
    seed: Optional[int] = None

    model_config = SettingsConfigDict(
        env_prefix="ERMODEL_",
        env_file=None,  # We load it manually with dotenv
        case_sensitive=False,
        extra="ignore",
    )

    def __init__(self, **kwargs):
        """Initialize settings, loading .env first and preparing the log directory."""
        find_and_load_env_file()
        super().__init__(**kwargs)
        if self.log_file:
            self.log_file = Path(self.log_file)
            self.log_file.parent.mkdir(parents=True, exist_ok=True)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
