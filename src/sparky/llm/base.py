from __future__ import annotations

from dataclasses import dataclass, field
from typing import AsyncIterator, Optional, Protocol

from sparky import config as config_mod

from .types import ChatConfig, Contents, GenerateRequest, GenerateResponse

KNOWN_PROVIDERS = ("gemini", "openai", "claude")
DEFAULT_PROVIDER = "gemini"


@dataclass(frozen=True)
class LLMConfig:
    """Per-adapter settings handed to a provider constructor."""

    provider: str
    model: str
    api_key_env: str = config_mod.API_KEY_ENV


@dataclass(frozen=True)
class ProviderSettings:
    default_model: str


@dataclass(frozen=True)
class AIConfig:
    """Static provider selection, read once at startup.

    `active_provider` is not validated here; the registry falls back to
    DEFAULT_PROVIDER for unknown values.
    """

    active_provider: str = DEFAULT_PROVIDER
    providers: dict[str, ProviderSettings] = field(default_factory=dict)
    api_key_env: str = config_mod.API_KEY_ENV

    @classmethod
    def from_env(cls) -> "AIConfig":
        return cls(
            active_provider=config_mod.ACTIVE_PROVIDER,
            providers={
                "gemini": ProviderSettings(default_model=config_mod.GEMINI_MODEL),
                "openai": ProviderSettings(default_model=config_mod.OPENAI_MODEL),
                "claude": ProviderSettings(default_model=config_mod.CLAUDE_MODEL),
            },
        )

    def settings_for(self, provider: str) -> Optional[ProviderSettings]:
        return self.providers.get(provider)


class ChatSession(Protocol):
    """Stateful multi-turn conversation owned by the caller."""

    async def send_message(self, message: Contents) -> GenerateResponse:
        raise NotImplementedError


class AIProvider(Protocol):
    """Uniform contract every vendor adapter implements."""

    name: str

    async def generate_content(self, request: GenerateRequest) -> GenerateResponse:
        raise NotImplementedError

    async def generate_content_stream(
        self, request: GenerateRequest
    ) -> AsyncIterator[GenerateResponse]:
        raise NotImplementedError

    def create_chat(self, chat_config: ChatConfig) -> ChatSession:
        raise NotImplementedError
