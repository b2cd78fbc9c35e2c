"""Pick a MatchingClient backend by provider name."""
from src.config import Config
from src.constants import MSG_UNKNOWN_PROVIDER, PROVIDER_CLAUDE, PROVIDER_OPENAI, PROVIDERS
from src.vision.claude import ClaudeMatchingClient
from src.vision.client import MatchingClient
from src.vision.openai import OpenAIMatchingClient


def build_client(provider: str, api_key: str, config: Config) -> MatchingClient:
    match provider:
        case p if p == PROVIDER_OPENAI:
            return OpenAIMatchingClient(api_key, model=config.openai_model)
        case p if p == PROVIDER_CLAUDE:
            return ClaudeMatchingClient(api_key, model=config.claude_model)
        case other:
            raise ValueError(MSG_UNKNOWN_PROVIDER % (other, ", ".join(PROVIDERS)))
