from dataclasses import dataclass
from typing import Optional
import os
from dotenv import load_dotenv

from src.constants import (
    CLAUDE_VISION_MODEL,
    MSG_UNKNOWN_PROVIDER,
    OPENAI_VISION_MODEL,
    PROVIDER_CLAUDE,
    PROVIDER_OPENAI,
    PROVIDERS,
)


@dataclass(frozen=True)
class Config:
    log_level: str
    provider: str
    openai_model: str
    claude_model: str
    openai_api_key: Optional[str]
    anthropic_api_key: Optional[str]

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        return cls._validate(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            provider=os.getenv("MATCH_PROVIDER", PROVIDER_OPENAI).strip().lower(),
            openai_model=os.getenv("OPENAI_MODEL") or OPENAI_VISION_MODEL,
            claude_model=os.getenv("CLAUDE_MODEL") or CLAUDE_VISION_MODEL,
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY") or None,
        )

    @staticmethod
    def _validate(
        log_level: str,
        provider: str,
        openai_model: str,
        claude_model: str,
        openai_api_key: Optional[str],
        anthropic_api_key: Optional[str],
    ) -> "Config":
        match provider:
            case p if p in PROVIDERS:
                pass
            case other:
                raise ValueError(MSG_UNKNOWN_PROVIDER % (other, ", ".join(PROVIDERS)))

        return Config(
            log_level=log_level,
            provider=provider,
            openai_model=openai_model,
            claude_model=claude_model,
            openai_api_key=openai_api_key,
            anthropic_api_key=anthropic_api_key,
        )

    def default_api_key(self, provider: str | None = None) -> str:
        """Key used to pre-fill the credential field; never required."""
        match provider or self.provider:
            case p if p == PROVIDER_CLAUDE:
                return self.anthropic_api_key or ""
            case _:
                return self.openai_api_key or ""
