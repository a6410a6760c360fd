"""LLM provider abstractions (Gemini / OpenAI / Claude).

Design goals:
- Keep provider-specific SDKs isolated behind one contract.
- Select exactly one provider per process from static configuration.
- Only Gemini is wired up; the other providers fail fast on every call.
"""

from .base import AIConfig, AIProvider, ChatSession, LLMConfig, ProviderSettings
from .errors import LLMConfigError, LLMError, LLMNotImplementedError
from .registry import ProviderRegistry
from .types import ChatConfig, GenerateRequest, GenerateResponse, Part

__all__ = [
    "AIConfig",
    "AIProvider",
    "ChatConfig",
    "ChatSession",
    "GenerateRequest",
    "GenerateResponse",
    "LLMConfig",
    "LLMConfigError",
    "LLMError",
    "LLMNotImplementedError",
    "Part",
    "ProviderRegistry",
    "ProviderSettings",
]
