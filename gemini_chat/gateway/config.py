"""Gateway configuration with environment variable loading.

Pydantic-based configuration for the Gemini completion gateway.
The API credential is not configured here: every request carries its own.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class GatewayConfig(BaseModel):
    """Configuration for the completion gateway.

    Attributes:
        model_name: Gemini model identifier to use.
    """

    model_name: str = Field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-1.5-pro"),
        description="Gemini model to use",
    )

    @field_validator("model_name")
    @classmethod
    def validate_model_name(cls, v: str) -> str:
        """Validate that a model name is provided."""
        if not v or not v.strip():
            raise ValueError("Model name required. Set GEMINI_MODEL in .env")
        return v.strip()


def get_gateway_config() -> GatewayConfig:
    """Create gateway configuration from environment.

    Returns:
        Configured GatewayConfig instance.
    """
    return GatewayConfig()
