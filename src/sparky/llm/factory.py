from __future__ import annotations

import importlib

from .base import AIConfig, AIProvider, LLMConfig
from .errors import LLMError

# provider id -> (module, class). Modules are imported only when selected.
PROVIDERS: dict[str, tuple[str, str]] = {
    "gemini": (".gemini_client", "GeminiProvider"),
    "openai": (".openai_client", "OpenAIProvider"),
    "claude": (".claude_client", "ClaudeProvider"),
}


def build_provider(*, provider: str, model: str, config: AIConfig) -> AIProvider:
    """Factory for provider clients.

    Providers:
    - gemini
    - openai (placeholder)
    - claude (placeholder)

    Extend by adding a module and mapping it in PROVIDERS.
    """

    p = provider.lower().strip()
    if p not in PROVIDERS:
        raise LLMError(f"Unknown LLM provider: {provider}")

    module_name, class_name = PROVIDERS[p]
    module = importlib.import_module(module_name, package=__package__)
    cls = getattr(module, class_name)
    return cls(LLMConfig(provider=p, model=model, api_key_env=config.api_key_env))
