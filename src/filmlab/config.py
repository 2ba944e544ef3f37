"""
Configuration management for FilmLab.

Uses pydantic-settings for environment-based configuration with validation.
All settings can be overridden via environment variables with FILMLAB_ prefix.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()


class CalculatorSettings(BaseSettings):
    """Defaults and input limits for the development and push/pull calculators."""

    model_config = SettingsConfigDict(env_prefix="FILMLAB_CALC_")

    # Development
    default_temperature_c: float = Field(default=20.0, ge=-10.0, le=60.0)

    # Push/pull ladder
    default_coefficient: float = Field(
        default=1.33,
        gt=0.0,
        le=5.0,
        description="Time multiplier applied per stop of push (divided per stop of pull)",
    )
    max_coefficient: float = Field(
        default=10.0,
        gt=1.0,
        le=100.0,
        description="Upper bound applied when validating user supplied coefficients",
    )
    default_steps: int = Field(default=5, ge=0, le=20)
    max_steps: int = Field(
        default=20,
        ge=0,
        le=100,
        description="Upper bound applied when validating user supplied step counts",
    )
    default_push_mode: bool = Field(default=True)


class APISettings(BaseSettings):
    """Settings for API server."""

    model_config = SettingsConfigDict(env_prefix="FILMLAB_API_")

    # Server
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000, ge=1024, le=65535)
    reload: bool = Field(default=False)

    # CORS
    cors_origins: list[str] = Field(default=["*"])
    cors_allow_credentials: bool = Field(default=True)


class Settings(BaseSettings):
    """Main application settings aggregating all subsettings."""

    model_config = SettingsConfigDict(
        env_prefix="FILMLAB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application info
    app_name: str = Field(default="FilmLab")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # Data locations
    data_dir: Path = Field(default=Path.home() / ".filmlab")
    reference_data_dir: Optional[Path] = Field(
        default=None,
        description="Directory with the reference JSON files (None = bundled data)",
    )
    journal_path: Optional[Path] = Field(
        default=None,
        description="SQLite file for the calculation journal (None = data_dir/journal.db)",
    )

    # Subsettings
    calculator: CalculatorSettings = Field(default_factory=CalculatorSettings)
    api: APISettings = Field(default_factory=APISettings)

    @field_validator("journal_path", mode="before")
    @classmethod
    def resolve_paths(cls, v: Optional[Path], info) -> Optional[Path]:
        """Resolve paths relative to data_dir if not absolute."""
        if v is None:
            return None
        path = Path(v)
        if str(path) == ":memory:":
            return path
        if not path.is_absolute():
            data = info.data if hasattr(info, "data") else {}
            data_dir = data.get("data_dir", Path.home() / ".filmlab")
            return data_dir / path
        return path

    def get_journal_path(self) -> Path:
        """Journal database location with the data_dir default applied."""
        return self.journal_path or self.data_dir / "journal.db"

    def ensure_directories(self) -> None:
        """Create required directories if they don't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)


# Global settings instance - lazy loaded
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, creating it if necessary."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure(settings: Optional[Settings] = None, **kwargs) -> Settings:
    """
    Configure the global settings.

    Args:
        settings: Optional Settings instance to use directly
        **kwargs: Settings overrides

    Returns:
        The configured Settings instance
    """
    global _settings
    if settings is not None:
        _settings = settings
    elif kwargs:
        _settings = Settings(**kwargs)
    else:
        _settings = Settings()
    return _settings
