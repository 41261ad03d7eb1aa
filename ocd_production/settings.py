"""Configuration management for the OCD production extractor."""

from typing import Tuple

EDDY_COUNTY = 15


class Config:
    """Configuration class for the OCD production extractor.

    All values are fixed defaults; the command line overrides them per run.
    Nothing is read from the environment or from configuration files.
    """

    def __init__(self):
        """Initialize configuration with default values."""
        # Logging settings
        self.LOG_LEVEL = "INFO"

        # Streaming settings
        self.CHUNK_SIZE = 64 * 1024  # Bytes read from the archive member at once

        # Inclusion predicate defaults
        self.DEFAULT_COUNTIES: Tuple[int, ...] = (EDDY_COUNTY,)

        # Output settings
        self.OUTPUT_SEPARATOR = "\t"
        self.OUTPUT_COLUMNS: Tuple[str, ...] = ("api", "year", "month", "oil", "gas", "water")

        # Validate
        self._validate_settings()

    def _validate_settings(self):
        """Validate configuration settings."""
        if self.CHUNK_SIZE <= 0:
            raise ValueError("CHUNK_SIZE must be positive")

        # Validate log level
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if self.LOG_LEVEL.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {', '.join(valid_levels)}")

        for county in self.DEFAULT_COUNTIES:
            if not 0 <= county <= 0xFFFF:
                raise ValueError(f"DEFAULT_COUNTIES contains out-of-range county code: {county}")

        if len(self.OUTPUT_SEPARATOR) != 1:
            raise ValueError("OUTPUT_SEPARATOR must be a single character")


def load_config() -> Config:
    """Load and validate configuration."""
    return Config()


# Global configuration instance
config = load_config()
