"""Unit tests for CompletionGateway and GatewayConfig.

Tests configuration validation, role mapping and the Gemini call with
the google-genai module patched.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from pydantic import ValidationError

from gemini_chat.gateway.completion import (
    CompletionGateway,
    build_history,
    to_remote_role,
)
from gemini_chat.gateway.config import GatewayConfig
from gemini_chat.gateway.errors import CompletionError, ErrorKind, MissingCredentialError
from gemini_chat.models.schemas import Message, Role


def _chat_mock(genai_mock: MagicMock) -> MagicMock:
    return genai_mock.Client.return_value.aio.chats.create.return_value


class TestGatewayConfig:
    """Tests for GatewayConfig validation."""

    def test_default_model(self) -> None:
        """Without GEMINI_MODEL the default model is used."""
        with patch.dict("os.environ", {}, clear=True):
            config = GatewayConfig()

        assert config.model_name == "gemini-1.5-pro"

    def test_model_from_environment(self) -> None:
        """GEMINI_MODEL overrides the default."""
        with patch.dict("os.environ", {"GEMINI_MODEL": "gemini-2.5-flash"}):
            config = GatewayConfig()

        assert config.model_name == "gemini-2.5-flash"

    def test_model_name_is_stripped(self) -> None:
        """Surrounding whitespace is removed from the model name."""
        assert GatewayConfig(model_name="  gemini-2.5-pro ").model_name == "gemini-2.5-pro"

    def test_blank_model_name_rejected(self) -> None:
        """An empty model name fails validation."""
        with pytest.raises(ValidationError) as exc_info:
            GatewayConfig(model_name="   ")

        assert "Model name required" in str(exc_info.value)


class TestRoleMapping:
    """Tests for internal to remote role translation."""

    def test_assistant_becomes_model(self) -> None:
        """Gemini calls the assistant "model"."""
        assert to_remote_role(Role.ASSISTANT) == "model"

    def test_user_passes_through(self) -> None:
        """The user role keeps its name."""
        assert to_remote_role(Role.USER) == "user"

    def test_build_history_preserves_order_and_text(self) -> None:
        """History is converted oldest first with one text part each."""
        history = [
            Message.user("Hello"),
            Message.assistant("Hi there"),
            Message.user("How are you?"),
        ]

        contents = build_history(history)

        assert [c.role for c in contents] == ["user", "model", "user"]
        assert [c.parts[0].text for c in contents] == ["Hello", "Hi there", "How are you?"]

    def test_build_history_empty(self) -> None:
        """No prior messages means an empty history."""
        assert build_history([]) == []


class TestComplete:
    """Tests for CompletionGateway.complete."""

    @pytest.fixture
    def gateway(self) -> CompletionGateway:
        return CompletionGateway(GatewayConfig(model_name="gemini-1.5-pro"))

    @pytest.mark.parametrize("credential", ["", "   "])
    async def test_missing_credential_makes_no_call(
        self, gateway: CompletionGateway, mock_genai: MagicMock, credential: str
    ) -> None:
        """Blank credentials are rejected before any client is built."""
        with pytest.raises(MissingCredentialError):
            await gateway.complete("Hello", [], credential)

        mock_genai.Client.assert_not_called()

    async def test_returns_reply_text(
        self, gateway: CompletionGateway, mock_genai: MagicMock
    ) -> None:
        """The generated text is returned unchanged."""
        reply = await gateway.complete("Hello", [], "AIza-test")

        assert reply == "Hi there"

    async def test_uses_credential_model_and_history(
        self, gateway: CompletionGateway, mock_genai: MagicMock
    ) -> None:
        """Client, chat and message are built from the request."""
        history = [Message.user("Hello"), Message.assistant("Hi there")]

        await gateway.complete("Tell me more", history, " AIza-test ")

        mock_genai.Client.assert_called_once_with(api_key="AIza-test")
        create = mock_genai.Client.return_value.aio.chats.create
        create.assert_called_once()
        kwargs = create.call_args.kwargs
        assert kwargs["model"] == "gemini-1.5-pro"
        assert [c.role for c in kwargs["history"]] == ["user", "model"]
        _chat_mock(mock_genai).send_message.assert_awaited_once_with("Tell me more")

    async def test_missing_text_returns_empty_string(
        self, gateway: CompletionGateway, mock_genai: MagicMock
    ) -> None:
        """A response without text yields an empty reply."""
        _chat_mock(mock_genai).send_message.return_value = SimpleNamespace(text=None)

        assert await gateway.complete("Hello", [], "AIza-test") == ""

    async def test_sdk_error_is_classified(
        self, gateway: CompletionGateway, mock_genai: MagicMock
    ) -> None:
        """SDK failures are raised as classified CompletionError."""
        _chat_mock(mock_genai).send_message.side_effect = RuntimeError(
            "400 INVALID_ARGUMENT: API key not valid"
        )

        with pytest.raises(CompletionError) as exc_info:
            await gateway.complete("Hello", [], "bad-key")

        assert exc_info.value.kind == ErrorKind.INVALID_CREDENTIAL

    async def test_client_construction_error_is_classified(
        self, gateway: CompletionGateway, mock_genai: MagicMock
    ) -> None:
        """Failures building the client are classified the same way."""
        mock_genai.Client.side_effect = ValueError("Something unexpected")

        with pytest.raises(CompletionError) as exc_info:
            await gateway.complete("Hello", [], "AIza-test")

        assert exc_info.value.kind == ErrorKind.GENERIC
        assert exc_info.value.message == "Something unexpected"


class TestGetCompletionGateway:
    """Tests for get_completion_gateway singleton function."""

    def test_singleton_returns_same_instance(self) -> None:
        """get_completion_gateway returns the same instance on multiple calls."""
        import gemini_chat.gateway.completion as completion_module

        completion_module._gateway = None

        with patch.object(completion_module, "CompletionGateway") as mock_gateway:
            mock_gateway.return_value = MagicMock()

            first = completion_module.get_completion_gateway()
            second = completion_module.get_completion_gateway()

            assert first is second
            mock_gateway.assert_called_once()

        completion_module._gateway = None
