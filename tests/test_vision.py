"""TDD: MatchingClient backend tests written FIRST"""
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from src.config import Config
from src.encoder import EncodedImage
from src.vision.claude import ClaudeMatchingClient
from src.vision.client import MatchingClient
from src.vision.factory import build_client
from src.vision.openai import OpenAIMatchingClient

REFERENCE = EncodedImage(name="ref.jpg", mime_type="image/jpeg", data_b64="UkVG")
GROUP = [
    EncodedImage(name="g1.png", mime_type="image/png", data_b64="RzE="),
    EncodedImage(name="g2.jpg", mime_type="image/jpeg", data_b64="RzI="),
]


def make_config() -> Config:
    return Config(
        log_level="INFO",
        provider="openai",
        openai_model="gpt-test",
        claude_model="claude-test",
        openai_api_key=None,
        anthropic_api_key=None,
    )


def openai_response(text: str) -> MagicMock:
    response = MagicMock()
    response.output = [MagicMock(content=[MagicMock(text=text)])]
    return response


def claude_message(text: str) -> MagicMock:
    message = MagicMock()
    message.content = [MagicMock(type="text", text=text)]
    return message


def test_backends_implement_abc():
    assert issubclass(OpenAIMatchingClient, MatchingClient)
    assert issubclass(ClaudeMatchingClient, MatchingClient)


# ── OpenAIMatchingClient ──────────────────────────────────────────────────────


async def test_openai_compare_sends_prompt_then_images_in_order():
    client = OpenAIMatchingClient(api_key="test-key")

    with patch("src.vision.openai.AsyncOpenAI") as mock_cls:
        mock_openai = AsyncMock()
        mock_openai.responses.create = AsyncMock(return_value=openai_response("[1]"))
        mock_cls.return_value = mock_openai

        await client.compare("find them", REFERENCE, GROUP)

    mock_cls.assert_called_once_with(api_key="test-key")
    call_kwargs = mock_openai.responses.create.call_args.kwargs
    assert call_kwargs["model"] == "gpt-4o"
    content = call_kwargs["input"][0]["content"]
    assert content[0] == {"type": "input_text", "text": "find them"}
    assert [b["image_url"] for b in content[1:]] == [
        "data:image/jpeg;base64,UkVG",
        "data:image/png;base64,RzE=",
        "data:image/jpeg;base64,RzI=",
    ]


async def test_openai_compare_returns_envelope_text():
    client = OpenAIMatchingClient(api_key="test-key", model="gpt-test")

    with patch("src.vision.openai.AsyncOpenAI") as mock_cls:
        mock_openai = AsyncMock()
        mock_openai.responses.create = AsyncMock(return_value=openai_response("  [1, 2]\n"))
        mock_cls.return_value = mock_openai

        result = await client.compare("p", REFERENCE, GROUP)

    assert result == "[1, 2]"
    assert mock_openai.responses.create.call_args.kwargs["model"] == "gpt-test"


async def test_openai_compare_falls_back_to_output_text():
    client = OpenAIMatchingClient(api_key="test-key")
    response = MagicMock()
    response.output = []
    response.output_text = "[2]"

    with patch("src.vision.openai.AsyncOpenAI") as mock_cls:
        mock_openai = AsyncMock()
        mock_openai.responses.create = AsyncMock(return_value=response)
        mock_cls.return_value = mock_openai

        result = await client.compare("p", REFERENCE, GROUP)

    assert result == "[2]"


async def test_openai_compare_raises_on_api_error():
    client = OpenAIMatchingClient(api_key="test-key")

    with patch("src.vision.openai.AsyncOpenAI") as mock_cls:
        mock_openai = AsyncMock()
        mock_openai.responses.create = AsyncMock(side_effect=RuntimeError("API down"))
        mock_cls.return_value = mock_openai

        with pytest.raises(RuntimeError):
            await client.compare("p", REFERENCE, GROUP)


# ── ClaudeMatchingClient ──────────────────────────────────────────────────────


async def test_claude_compare_sends_images_then_prompt():
    client = ClaudeMatchingClient(api_key="test-key")

    with patch("src.vision.claude.AsyncAnthropic") as mock_cls:
        mock_anthropic = AsyncMock()
        mock_anthropic.messages.create = AsyncMock(return_value=claude_message("[1]"))
        mock_cls.return_value = mock_anthropic

        await client.compare("find them", REFERENCE, GROUP)

    content = mock_anthropic.messages.create.call_args.kwargs["messages"][0]["content"]
    images = [b for b in content if b["type"] == "image"]
    assert [b["source"]["data"] for b in images] == ["UkVG", "RzE=", "RzI="]
    assert images[1]["source"]["media_type"] == "image/png"
    assert content[-1] == {"type": "text", "text": "find them"}


async def test_claude_compare_returns_stripped_text():
    client = ClaudeMatchingClient(api_key="test-key")

    with patch("src.vision.claude.AsyncAnthropic") as mock_cls:
        mock_anthropic = AsyncMock()
        mock_anthropic.messages.create = AsyncMock(return_value=claude_message("  [2] \n"))
        mock_cls.return_value = mock_anthropic

        result = await client.compare("p", REFERENCE, GROUP)

    assert result == "[2]"


async def test_claude_compare_raises_on_api_error():
    client = ClaudeMatchingClient(api_key="test-key")

    with patch("src.vision.claude.AsyncAnthropic") as mock_cls:
        mock_anthropic = AsyncMock()
        mock_anthropic.messages.create = AsyncMock(side_effect=RuntimeError("API down"))
        mock_cls.return_value = mock_anthropic

        with pytest.raises(RuntimeError):
            await client.compare("p", REFERENCE, GROUP)


# ── factory ───────────────────────────────────────────────────────────────────


def test_build_client_picks_backend():
    config = make_config()

    assert isinstance(build_client("openai", "k", config), OpenAIMatchingClient)
    assert isinstance(build_client("claude", "k", config), ClaudeMatchingClient)


def test_build_client_unknown_provider_fails():
    with pytest.raises(ValueError, match="gemini"):
        build_client("gemini", "k", make_config())
