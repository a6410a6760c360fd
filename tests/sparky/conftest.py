from types import SimpleNamespace

import pytest

from sparky.llm.base import AIConfig, ProviderSettings
from sparky.llm.registry import ProviderRegistry
from sparky.llm.types import GenerateResponse


class FakeChat:
    """Chat handle that replays canned replies (exceptions are raised)."""

    def __init__(self, replies=()):
        self.replies = list(replies)
        self.sent = []

    async def send_message(self, message):
        self.sent.append(message)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return GenerateResponse(provider="fake", model="fake-model", text=reply)


class FakeProvider:
    """In-memory provider implementing the AIProvider contract."""

    name = "fake"

    def __init__(self, text="", chunks=(), error=None, chat=None):
        self.text = text
        self.chunks = list(chunks)
        self.error = error
        self.chat = chat or FakeChat()
        self.requests = []
        self.chat_configs = []

    async def generate_content(self, request):
        self.requests.append(request)
        if self.error:
            raise self.error
        return GenerateResponse(provider=self.name, model=request.model, text=self.text)

    async def generate_content_stream(self, request):
        self.requests.append(request)
        if self.error:
            raise self.error

        async def _gen():
            for c in self.chunks:
                yield GenerateResponse(provider=self.name, model=request.model, text=c)

        return _gen()

    def create_chat(self, chat_config):
        self.chat_configs.append(chat_config)
        return self.chat


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("API_KEY", "test-key")
    return "test-key"


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.delenv("API_KEY", raising=False)


@pytest.fixture
def make_provider():
    """Fixture: factory for FakeProvider instances."""

    return FakeProvider


@pytest.fixture
def make_chat():
    """Fixture: factory for FakeChat instances."""

    return FakeChat


@pytest.fixture
def registry_for():
    """Fixture: wrap a provider in a registry whose builder always returns it."""

    def _factory(provider, *, active="gemini", default_model="gemini-test"):
        cfg = AIConfig(
            active_provider=active,
            providers={active: ProviderSettings(default_model=default_model)},
        )
        return ProviderRegistry(cfg, builder=lambda **_kw: provider)

    return _factory


class _FakeModels:
    def __init__(self, owner):
        self._owner = owner

    async def generate_content(self, *, model, contents, config=None):
        self._owner.calls.append(("generate_content", model, contents, config))
        return SimpleNamespace(text=self._owner.reply)

    async def generate_content_stream(self, *, model, contents, config=None):
        self._owner.calls.append(("generate_content_stream", model, contents, config))

        async def _gen():
            for t in self._owner.chunks:
                yield SimpleNamespace(text=t)

        return _gen()


class _FakeAsyncChat:
    def __init__(self, owner):
        self._owner = owner
        self.sent = []

    async def send_message(self, message):
        self.sent.append(message)
        return SimpleNamespace(text=self._owner.reply)


class _FakeChats:
    def __init__(self, owner):
        self._owner = owner

    def create(self, *, model, config=None, history=None):
        chat = _FakeAsyncChat(self._owner)
        self._owner.chats.append(
            {"model": model, "config": config, "history": history, "chat": chat}
        )
        return chat


class FakeGenaiClient:
    """Stand-in for google.genai.Client exposing only the `aio` surface used."""

    instances: list = []

    def __init__(self, api_key=None):
        self.api_key = api_key
        self.reply = "hello from gemini"
        self.chunks = ["Hel", "lo"]
        self.calls = []
        self.chats = []
        self.aio = SimpleNamespace(models=_FakeModels(self), chats=_FakeChats(self))
        FakeGenaiClient.instances.append(self)


@pytest.fixture
def fake_genai(monkeypatch, api_key):
    """Patch google.genai.Client; returns the fake class (see `.instances`)."""

    from google import genai

    FakeGenaiClient.instances = []
    monkeypatch.setattr(genai, "Client", FakeGenaiClient)
    return FakeGenaiClient
