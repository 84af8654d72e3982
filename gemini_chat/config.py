"""Process configuration for the web application.

Server address, logging level and where local state is stored.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

# Load environment variables from .env file
load_dotenv()

_DEFAULT_DATA_DIR = Path(__file__).parent.parent / "data"


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else None


class AppConfig(BaseModel):
    """Configuration for the server and the web interface.

    Attributes:
        host: Interface the server binds to.
        port: Port the server listens on.
        log_level: Root logging level name.
        api_base_url: Base URL the UI uses to reach the chat endpoint.
            Defaults to the local server on ``port``.
        data_dir: Directory NiceGUI keeps its storage files in.
        storage_quota_bytes: Optional size limit for stored state.
    """

    host: str = Field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = Field(default_factory=lambda: int(os.getenv("PORT", "8000")), ge=1, le=65535)
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    api_base_url: str = Field(default_factory=lambda: os.getenv("API_BASE_URL", "").strip())
    data_dir: Path = Field(
        default_factory=lambda: Path(os.getenv("DATA_DIR", str(_DEFAULT_DATA_DIR)))
    )
    storage_quota_bytes: int | None = Field(
        default_factory=lambda: _optional_int("STORAGE_QUOTA_BYTES"), ge=1
    )

    @model_validator(mode="after")
    def default_api_base_url(self) -> "AppConfig":
        """Point the UI at this server when no API URL is configured."""
        if not self.api_base_url:
            self.api_base_url = f"http://localhost:{self.port}"
        return self


def get_app_config() -> AppConfig:
    """Create application configuration from environment.

    Returns:
        Configured AppConfig instance.
    """
    return AppConfig()
