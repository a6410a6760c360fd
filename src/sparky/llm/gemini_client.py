from __future__ import annotations

import os
from typing import Any, AsyncIterator, Optional

from sparky import logger as logger_mod

from .base import AIProvider, ChatSession, LLMConfig
from .errors import LLMConfigError
from .types import ChatConfig, Contents, GenerateRequest, GenerateResponse, Part

log = logger_mod.get_logger()


class GeminiChatSession(ChatSession):
    def __init__(self, chat: Any, *, model: str, to_contents) -> None:
        self._chat = chat
        self._model = model
        self._to_contents = to_contents

    async def send_message(self, message: Contents) -> GenerateResponse:
        resp = await self._chat.send_message(self._to_contents(message))
        return GenerateResponse(
            provider="gemini", model=self._model, text=resp.text or "", raw=resp
        )


class GeminiProvider(AIProvider):
    """Google Gemini client wrapper (google-genai SDK, async surface).

    The only fully wired provider. No retries: SDK errors propagate to the caller.
    """

    name = "gemini"

    def __init__(self, config: LLMConfig):
        self._cfg = config
        api_key = os.getenv(config.api_key_env)
        if not api_key:
            raise LLMConfigError(
                f"Missing env var {config.api_key_env} for Gemini API key"
            )

        try:
            from google import genai  # type: ignore
            from google.genai import types as genai_types  # type: ignore
        except Exception as e:  # noqa: BLE001
            raise LLMConfigError(
                "google-genai SDK not installed. Add dependency 'google-genai'."
            ) from e

        self._types = genai_types
        self._client = genai.Client(api_key=api_key)

    def _to_part(self, part: Part) -> Any:
        if part.inline_data is not None:
            return self._types.Part.from_bytes(
                data=part.inline_data.data, mime_type=part.inline_data.mime_type
            )
        return self._types.Part.from_text(text=part.text or "")

    def _to_contents(self, contents: Contents) -> Any:
        if isinstance(contents, str):
            return contents
        return [self._to_part(p) for p in contents]

    def _build_config(
        self,
        *,
        system_instruction: Optional[str] = None,
        response_mime_type: Optional[str] = None,
        response_schema: Optional[dict[str, Any]] = None,
        temperature: Optional[float] = None,
    ) -> Any:
        kwargs = {
            "system_instruction": system_instruction,
            "response_mime_type": response_mime_type,
            "response_schema": response_schema,
            "temperature": temperature,
        }
        kwargs = {k: v for k, v in kwargs.items() if v is not None}
        if not kwargs:
            return None
        return self._types.GenerateContentConfig(**kwargs)

    def _request_kwargs(self, request: GenerateRequest) -> dict[str, Any]:
        return {
            "model": request.model or self._cfg.model,
            "contents": self._to_contents(request.contents),
            "config": self._build_config(
                system_instruction=request.system_instruction,
                response_mime_type=request.response_mime_type,
                response_schema=request.response_schema,
                temperature=request.temperature,
            ),
        }

    async def generate_content(self, request: GenerateRequest) -> GenerateResponse:
        kwargs = self._request_kwargs(request)
        log.debug(f"Gemini generate_content model={kwargs['model']}")
        resp = await self._client.aio.models.generate_content(**kwargs)
        return GenerateResponse(
            provider=self.name, model=kwargs["model"], text=resp.text or "", raw=resp
        )

    async def generate_content_stream(
        self, request: GenerateRequest
    ) -> AsyncIterator[GenerateResponse]:
        kwargs = self._request_kwargs(request)
        log.debug(f"Gemini generate_content_stream model={kwargs['model']}")
        stream = await self._client.aio.models.generate_content_stream(**kwargs)
        return self._iter_chunks(stream, kwargs["model"])

    async def _iter_chunks(
        self, stream: Any, model: str
    ) -> AsyncIterator[GenerateResponse]:
        async for chunk in stream:
            yield GenerateResponse(
                provider=self.name, model=model, text=chunk.text or "", raw=chunk
            )

    def create_chat(self, chat_config: ChatConfig) -> ChatSession:
        model = chat_config.model or self._cfg.model
        history = [
            self._types.Content(role=role, parts=[self._types.Part.from_text(text=t)])
            for role, t in chat_config.history
        ]
        chat = self._client.aio.chats.create(
            model=model,
            config=self._build_config(
                system_instruction=chat_config.system_instruction
            ),
            history=history or None,
        )
        log.debug(f"Gemini chat created model={model}")
        return GeminiChatSession(chat, model=model, to_contents=self._to_contents)
