import asyncio
import json

import pytest

from sparky import config, service
from sparky.llm.errors import LLMError, LLMNotImplementedError, LLMValidationError
from sparky.llm.types import ChatConfig, GenerateRequest

SCHEMA = {
    "type": "object",
    "properties": {"answer": {"type": "string"}},
    "required": ["answer"],
}


def test_default_model_comes_from_active_provider():
    expected = (
        service.active_provider_config.default_model
        if service.active_provider_config
        else config.FALLBACK_MODEL
    )
    assert service.DEFAULT_MODEL == expected


def test_generate_content_delegates_to_registry(make_provider, registry_for):
    provider = make_provider(text="hi there")
    reg = registry_for(provider)
    request = GenerateRequest(model="m", contents="hello")

    resp = asyncio.run(service.generate_content(request, registry=reg))

    assert resp.text == "hi there"
    assert provider.requests == [request]


def test_generate_content_propagates_errors(make_provider, registry_for):
    reg = registry_for(make_provider(error=ConnectionError("down")))

    with pytest.raises(ConnectionError):
        asyncio.run(
            service.generate_content(GenerateRequest(model="m", contents="x"), registry=reg)
        )


def test_create_chat_injects_default_model(make_provider, registry_for):
    provider = make_provider()
    reg = registry_for(provider)

    chat = service.create_chat(ChatConfig(system_instruction="be nice"), registry=reg)

    assert chat is provider.chat
    assert provider.chat_configs[0].model == service.DEFAULT_MODEL
    assert provider.chat_configs[0].system_instruction == "be nice"


def test_create_chat_keeps_explicit_model(make_provider, registry_for):
    provider = make_provider()

    service.create_chat(ChatConfig(model="custom"), registry=registry_for(provider))

    assert provider.chat_configs[0].model == "custom"


def test_generate_json_content_returns_validated_data(make_provider, registry_for):
    provider = make_provider(text=json.dumps({"answer": "42"}))

    data = asyncio.run(
        service.generate_json_content("q", SCHEMA, registry=registry_for(provider))
    )

    assert data == {"answer": "42"}
    request = provider.requests[0]
    assert request.response_mime_type == "application/json"
    assert request.response_schema is SCHEMA
    assert request.model == service.DEFAULT_MODEL


def test_generate_json_content_wraps_bad_json(make_provider, registry_for):
    reg = registry_for(make_provider(text="not json"))

    with pytest.raises(LLMError, match="Failed to generate JSON content") as excinfo:
        asyncio.run(service.generate_json_content("q", SCHEMA, registry=reg))
    assert isinstance(excinfo.value.__cause__, LLMValidationError)


def test_generate_json_content_wraps_schema_mismatch(make_provider, registry_for):
    reg = registry_for(make_provider(text=json.dumps({"other": 1})))

    with pytest.raises(LLMError):
        asyncio.run(service.generate_json_content("q", SCHEMA, registry=reg))


def test_generate_json_content_can_skip_validation(make_provider, registry_for):
    reg = registry_for(make_provider(text="[1, 2]"))

    data = asyncio.run(
        service.generate_json_content("q", SCHEMA, validate=False, registry=reg)
    )
    assert data == [1, 2]


def test_generate_text_content(make_provider, registry_for):
    provider = make_provider(text="plain answer")

    text = asyncio.run(
        service.generate_text_content("q", "m2", registry=registry_for(provider))
    )

    assert text == "plain answer"
    assert provider.requests[0].model == "m2"


def test_generate_text_content_wraps_not_implemented(make_provider, registry_for):
    reg = registry_for(make_provider(error=LLMNotImplementedError("nope")))

    with pytest.raises(LLMError, match="Failed to generate text content") as excinfo:
        asyncio.run(service.generate_text_content("q", registry=reg))
    assert isinstance(excinfo.value.__cause__, NotImplementedError)


def test_generate_text_stream_uses_stream_model(make_provider, registry_for):
    provider = make_provider(chunks=["a", "b", "c"])

    async def _collect():
        stream = await service.generate_text_stream("q", registry=registry_for(provider))
        return [chunk.text async for chunk in stream]

    assert asyncio.run(_collect()) == ["a", "b", "c"]
    assert provider.requests[0].model == config.STREAM_MODEL


def test_generate_text_stream_wraps_open_failure(make_provider, registry_for):
    reg = registry_for(make_provider(error=RuntimeError("boom")))

    with pytest.raises(LLMError, match="streaming"):
        asyncio.run(service.generate_text_stream("q", registry=reg))
