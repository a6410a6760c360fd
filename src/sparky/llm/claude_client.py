from __future__ import annotations

from ._placeholder import PlaceholderProvider


class ClaudeProvider(PlaceholderProvider):
    """Anthropic Claude provider slot. Every call fails fast."""

    name = "claude"
    label = "Claude"
