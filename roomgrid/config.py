"""
Roomgrid Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
POSITION_MODES = ("readable", "compact")


class Config:
    """Application configuration loaded from environment variables."""

    # Logging
    LOG_LEVEL: str = os.getenv("ROOMGRID_LOG_LEVEL", "INFO").upper()

    # Default write shape for positions when the caller does not pick one
    POSITION_MODE: str = os.getenv("ROOMGRID_POSITION_MODE", "compact").lower()

    # Store persistence
    STORE_PATH: Path = Path(os.getenv("ROOMGRID_STORE_PATH", "memory.json"))

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors if values are unusable."""
        if cls.LOG_LEVEL not in LOG_LEVELS:
            raise ValueError(
                f"ROOMGRID_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {cls.LOG_LEVEL!r}"
            )

        if cls.POSITION_MODE not in POSITION_MODES:
            raise ValueError(
                "ROOMGRID_POSITION_MODE must be 'readable' or 'compact', "
                f"got {cls.POSITION_MODE!r}"
            )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "Roomgrid Configuration:",
            f"  Log Level: {cls.LOG_LEVEL}",
            f"  Position Mode: {cls.POSITION_MODE}",
            f"  Store Path: {cls.STORE_PATH}",
        ]
        return "\n".join(lines)
