"""Unit tests for AppConfig."""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from gemini_chat.config import AppConfig


class TestAppConfig:
    """Tests for AppConfig environment handling."""

    def test_defaults(self) -> None:
        """Without environment overrides the server runs on port 8000."""
        with patch.dict("os.environ", {}, clear=True):
            config = AppConfig()

        assert config.port == 8000
        assert config.api_base_url == "http://localhost:8000"
        assert config.storage_quota_bytes is None

    def test_api_url_follows_port(self) -> None:
        """Setting only PORT points the UI client at that port."""
        with patch.dict("os.environ", {"PORT": "9000"}, clear=True):
            config = AppConfig()

        assert config.port == 9000
        assert config.api_base_url == "http://localhost:9000"

    def test_explicit_api_url_wins(self) -> None:
        """API_BASE_URL is used as given when set."""
        env = {"PORT": "9000", "API_BASE_URL": "http://api.internal:8080"}
        with patch.dict("os.environ", env, clear=True):
            config = AppConfig()

        assert config.api_base_url == "http://api.internal:8080"

    def test_quota_from_environment(self) -> None:
        """STORAGE_QUOTA_BYTES sets the storage limit."""
        with patch.dict("os.environ", {"STORAGE_QUOTA_BYTES": "5000000"}, clear=True):
            config = AppConfig()

        assert config.storage_quota_bytes == 5_000_000

    def test_invalid_port_rejected(self) -> None:
        """Ports outside the valid range fail validation."""
        with pytest.raises(ValidationError):
            AppConfig(port=70000)
