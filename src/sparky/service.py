"""The surface callers use to talk to the active AI provider.

The process-wide registry is built from static configuration at import; every
function also accepts an explicit ``registry`` so callers and tests can inject
their own.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, AsyncIterator, Optional

from sparky import config
from sparky import logger as logger_mod
from sparky.llm._json import parse_json, validate_json
from sparky.llm.base import AIConfig, AIProvider, ChatSession, ProviderSettings
from sparky.llm.errors import LLMError
from sparky.llm.registry import ProviderRegistry
from sparky.llm.types import ChatConfig, Contents, GenerateRequest, GenerateResponse

log = logger_mod.get_logger()

default_registry = ProviderRegistry(AIConfig.from_env())

# Safe to read without building the provider.
active_provider_config: Optional[ProviderSettings] = default_registry.active_settings

DEFAULT_MODEL = (
    active_provider_config.default_model
    if active_provider_config
    else config.FALLBACK_MODEL
)


def _provider(registry: Optional[ProviderRegistry]) -> AIProvider:
    return (registry or default_registry).get()


async def generate_content(
    request: GenerateRequest, *, registry: Optional[ProviderRegistry] = None
) -> GenerateResponse:
    return await _provider(registry).generate_content(request)


async def generate_content_stream(
    request: GenerateRequest, *, registry: Optional[ProviderRegistry] = None
) -> AsyncIterator[GenerateResponse]:
    return await _provider(registry).generate_content_stream(request)


def create_chat(
    chat_config: ChatConfig, *, registry: Optional[ProviderRegistry] = None
) -> ChatSession:
    """Create a chat session, filling in DEFAULT_MODEL when no model is given."""

    if not chat_config.model:
        chat_config = replace(chat_config, model=DEFAULT_MODEL)
    return _provider(registry).create_chat(chat_config)


async def generate_json_content(
    prompt: Contents,
    schema: dict[str, Any],
    model: Optional[str] = None,
    *,
    validate: bool = True,
    registry: Optional[ProviderRegistry] = None,
) -> Any:
    """Generate structured JSON for `schema` and return the decoded value.

    Any failure (provider, JSON decoding, schema validation) is logged and
    re-raised as LLMError.
    """

    request = GenerateRequest(
        model=model or DEFAULT_MODEL,
        contents=prompt,
        response_mime_type="application/json",
        response_schema=schema,
    )
    try:
        resp = await generate_content(request, registry=registry)
        data = parse_json(resp.text)
        if validate:
            validate_json(data, schema)
        return data
    except Exception as e:  # noqa: BLE001
        log.error(f"AI Service Error (JSON): {e}")
        raise LLMError("Failed to generate JSON content from the AI service.") from e


async def generate_text_content(
    prompt: Contents,
    model: Optional[str] = None,
    *,
    registry: Optional[ProviderRegistry] = None,
) -> str:
    request = GenerateRequest(model=model or DEFAULT_MODEL, contents=prompt)
    try:
        resp = await generate_content(request, registry=registry)
        return resp.text
    except Exception as e:  # noqa: BLE001
        log.error(f"AI Service Error (Text): {e}")
        raise LLMError("Failed to generate text content from the AI service.") from e


async def generate_text_stream(
    prompt: Contents,
    model: Optional[str] = None,
    *,
    registry: Optional[ProviderRegistry] = None,
) -> AsyncIterator[GenerateResponse]:
    """Start a streamed generation; defaults to the fast streaming model.

    Only failures to open the stream are wrapped; errors raised while
    iterating reach the consumer unchanged.
    """

    request = GenerateRequest(model=model or config.STREAM_MODEL, contents=prompt)
    try:
        return await generate_content_stream(request, registry=registry)
    except Exception as e:  # noqa: BLE001
        log.error(f"AI Service Error (Stream): {e}")
        raise LLMError(
            "Failed to generate streaming content from the AI service."
        ) from e
