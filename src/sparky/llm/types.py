from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union


@dataclass(frozen=True)
class InlineData:
    mime_type: str
    data: bytes


@dataclass(frozen=True)
class Part:
    """One piece of a multi-part message: either text or inline bytes."""

    text: Optional[str] = None
    inline_data: Optional[InlineData] = None

    @classmethod
    def from_text(cls, text: str) -> "Part":
        return cls(text=text)

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: str) -> "Part":
        return cls(inline_data=InlineData(mime_type=mime_type, data=data))


Contents = Union[str, list[Part]]


@dataclass(frozen=True)
class GenerateRequest:
    model: str
    contents: Contents
    system_instruction: Optional[str] = None
    response_mime_type: Optional[str] = None
    response_schema: Optional[dict[str, Any]] = None
    temperature: Optional[float] = None


@dataclass(frozen=True)
class GenerateResponse:
    """Provider-neutral result container."""

    provider: str
    model: str
    text: str
    raw: Any = None


@dataclass
class ChatConfig:
    model: str = ""
    system_instruction: Optional[str] = None
    history: list[tuple[str, str]] = field(default_factory=list)
