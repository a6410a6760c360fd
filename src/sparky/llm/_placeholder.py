from __future__ import annotations

import os
from typing import AsyncIterator

from .base import AIProvider, ChatSession, LLMConfig
from .errors import LLMConfigError, LLMNotImplementedError
from .types import ChatConfig, GenerateRequest, GenerateResponse


class PlaceholderProvider(AIProvider):
    """Provider that satisfies the contract but is not wired to its vendor yet.

    The constructor still checks the credential so misconfiguration fails at
    startup. Every operation raises LLMNotImplementedError immediately.
    """

    name = "placeholder"
    label = "Placeholder"

    def __init__(self, config: LLMConfig):
        self._cfg = config
        if not os.getenv(config.api_key_env):
            raise LLMConfigError(
                f"Missing env var {config.api_key_env} for {self.label} API key"
            )

    def _not_implemented(self, operation: str) -> LLMNotImplementedError:
        return LLMNotImplementedError(
            f"{type(self).__name__}.{operation}() is not implemented."
        )

    async def generate_content(self, request: GenerateRequest) -> GenerateResponse:
        raise self._not_implemented("generate_content")

    async def generate_content_stream(
        self, request: GenerateRequest
    ) -> AsyncIterator[GenerateResponse]:
        raise self._not_implemented("generate_content_stream")

    def create_chat(self, chat_config: ChatConfig) -> ChatSession:
        raise self._not_implemented("create_chat")
