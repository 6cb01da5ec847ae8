"""
HULLPERF Configuration Module.

Centralized configuration management using environment variables.
Supports .env files for local development.

Usage:
    from hullperf.config import settings

    print(settings.data_dir)
    print(settings.events_file)
"""

import os
from pathlib import Path
from dataclasses import dataclass, field
from datetime import date
from typing import Optional
import logging

from dotenv import load_dotenv

# Load .env file if present
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)


def get_int(key: str, default: int) -> int:
    """Get int from environment variable."""
    try:
        return int(os.getenv(key, str(default)))
    except (ValueError, TypeError):
        return default


def get_date(key: str) -> Optional[date]:
    """Get ISO date (YYYY-MM-DD) from environment variable, None if unset or invalid."""
    value = os.getenv(key)
    if not value:
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        logging.warning(f"Ignoring {key}={value!r}: expected YYYY-MM-DD")
        return None


@dataclass
class Settings:
    """Application settings loaded from environment."""

    # Fleet exports
    data_dir: str = field(default_factory=lambda: os.getenv("HULLPERF_DATA_DIR", "data"))
    docking_file: str = field(
        default_factory=lambda: os.getenv("HULLPERF_DOCKING_FILE", "dados_docagem.csv")
    )
    coating_file: str = field(
        default_factory=lambda: os.getenv("HULLPERF_COATING_FILE", "revestimento.csv")
    )
    ship_details_file: str = field(
        default_factory=lambda: os.getenv("HULLPERF_SHIP_DETAILS_FILE", "dados_navio.csv")
    )
    events_file: str = field(
        default_factory=lambda: os.getenv("HULLPERF_EVENTS_FILE", "ResultadoQueryEventos.csv")
    )
    consumption_file: str = field(
        default_factory=lambda: os.getenv("HULLPERF_CONSUMPTION_FILE", "ResultadoQueryConsumo.csv")
    )
    csv_encoding: str = field(default_factory=lambda: os.getenv("HULLPERF_CSV_ENCODING", "utf-8"))

    # Training / prediction
    # Fixed "today" for reproducible runs; unset means the current date
    reference_date: Optional[date] = field(default_factory=lambda: get_date("HULLPERF_REFERENCE_DATE"))
    projection_days: int = field(default_factory=lambda: get_int("HULLPERF_PROJECTION_DAYS", 180))

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_format: str = field(
        default_factory=lambda: os.getenv(
            "LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    )

    def __post_init__(self):
        """Validate settings after initialization."""
        if self.projection_days < 1:
            logging.warning(
                f"Projection horizon {self.projection_days} days must be positive, using 180"
            )
            self.projection_days = 180

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir)

    def today(self) -> date:
        """Reference date for predictions."""
        return self.reference_date or date.today()

    def configure_logging(self):
        """Configure logging based on settings."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        logging.basicConfig(level=level, format=self.log_format)


# Singleton instance
settings = Settings()


# Convenience function for testing
def get_settings() -> Settings:
    """Get the settings instance (useful for dependency injection)."""
    return settings
