"""Configuration loading and validation."""

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    log_level: str = "INFO"
    output_dir: Path = field(default_factory=lambda: Path("output"))
    archive_name: str = "plex-purchases-configs.zip"

    @property
    def log_file(self) -> Path:
        return self.output_dir / "plexpurchases_builder.log"

    @property
    def archive_path(self) -> Path:
        return self.output_dir / self.archive_name

    @property
    def numeric_log_level(self) -> int:
        return getattr(logging, self.log_level)


def load_config() -> Config:
    """Load configuration from environment variables (.env file supported)."""
    load_dotenv()

    log_level = os.environ.get("PLEXPURCHASES_LOG_LEVEL", "INFO").strip().upper()
    if log_level not in VALID_LOG_LEVELS:
        print(f"Error: PLEXPURCHASES_LOG_LEVEL '{log_level}' is not a valid log level.")
        print(f"Use one of: {', '.join(VALID_LOG_LEVELS)}.")
        sys.exit(1)

    archive_name = os.environ.get("PLEXPURCHASES_ARCHIVE_NAME", "").strip() or "plex-purchases-configs.zip"
    if not archive_name.lower().endswith(".zip"):
        archive_name += ".zip"

    return Config(
        log_level=log_level,
        output_dir=Path(os.environ.get("PLEXPURCHASES_OUTPUT_DIR", "output")),
        archive_name=archive_name,
    )
