from __future__ import annotations

from ._placeholder import PlaceholderProvider


class OpenAIProvider(PlaceholderProvider):
    """OpenAI provider slot.

    Requests would map GenerateRequest onto the Chat Completions API; until
    that mapping exists every call fails fast.
    """

    name = "openai"
    label = "OpenAI"
