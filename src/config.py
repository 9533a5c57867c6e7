# src/config.py
"""Application configuration using pydantic-settings.

Provides a centralized Settings class for all environment variables.
Every variable is prefixed with HOARD_, e.g. HOARD_PARAMETER_TOKEN.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

HOARD_HOMEDIR = ".hoard"
HOARD_FILE = "trove.yml"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings are loaded from .env file and environment variables.
    Environment variables take precedence over .env file values.
    """

    # Storage
    trove_path: Path = Path.home() / HOARD_HOMEDIR / HOARD_FILE
    default_namespace: str = "default"

    # Parameter tokens ("" disables named parameters)
    parameter_token: str = "#"
    parameter_ending_token: str = ""

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="HOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
        case_sensitive=False,  # Allow case-insensitive env var names
    )

    @property
    def tokens(self) -> tuple[str, str]:
        """Get the parameter token pair.

        An ending token equal to the start token means named parameters
        are disabled, so it is reported as an empty string.

        Returns:
            Tuple of (start_token, end_token).
        """
        end_token = self.parameter_ending_token
        if end_token == self.parameter_token:
            end_token = ""
        return self.parameter_token, end_token


# Singleton instance - import this in your code
settings = Settings()
