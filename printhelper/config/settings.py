"""
Application settings loaded from environment variables (prefix ``PRINTHELPER_``)
or a ``.env`` file.
"""

import tempfile
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_HELPER_PATHS = [
    r"C:\Program Files\SumatraPDF\SumatraPDF.exe",
    r"C:\Program Files (x86)\SumatraPDF\SumatraPDF.exe",
]

# Flags for running headless Chromium inside services/containers
DEFAULT_BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--no-first-run",
    "--disable-default-apps",
    "--disable-extensions",
]


class Settings(BaseSettings):
    """PrintHelper configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PRINTHELPER_",
        env_file=".env",
        extra="ignore",
    )

    # Server
    host: str = "127.0.0.1"
    port: int = 3001
    log_level: str = "INFO"
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Rendering
    scratch_dir: Path = Field(
        default_factory=lambda: Path(tempfile.gettempdir()) / "printhelper"
    )
    browser_args: list[str] = Field(default_factory=lambda: list(DEFAULT_BROWSER_ARGS))

    # Printing
    printing_enabled: bool = True
    printer_keywords: list[str] = Field(default_factory=lambda: ["epson", "kasa"])
    helper_paths: list[str] = Field(default_factory=lambda: list(DEFAULT_HELPER_PATHS))
    device_query_timeout: float = 15.0
    cleanup_delay_seconds: float = 30.0

    @field_validator("printer_keywords")
    @classmethod
    def _strip_keywords(cls, value: list[str]) -> list[str]:
        return [k.strip() for k in value if k and k.strip()]

    def get_scratch_dir(self) -> Path:
        """Return the scratch directory, creating it if needed."""
        path = self.scratch_dir.expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the active settings, loading from the environment on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def init_settings(settings: Settings) -> Settings:
    """Install explicit settings (tests, embedding)."""
    global _settings
    _settings = settings
    return _settings


def reset_settings() -> None:
    """Drop cached settings so the next get_settings() reloads."""
    global _settings
    _settings = None
