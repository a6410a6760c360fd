from __future__ import annotations

from typing import Callable, Optional

from sparky import logger as logger_mod

from .base import DEFAULT_PROVIDER, AIConfig, AIProvider, ProviderSettings
from .factory import PROVIDERS, build_provider

log = logger_mod.get_logger()

ProviderBuilder = Callable[..., AIProvider]


class ProviderRegistry:
    """Holds the one provider selected for this process.

    The adapter is built on the first get() and reused afterwards. There is
    no reset; build a new registry to pick another provider.
    """

    def __init__(
        self,
        config: AIConfig,
        *,
        builder: Optional[ProviderBuilder] = None,
    ) -> None:
        self._config = config
        self._builder = builder or build_provider
        self._instance: Optional[AIProvider] = None

    @property
    def config(self) -> AIConfig:
        return self._config

    @property
    def provider_name(self) -> str:
        name = self._config.active_provider.lower().strip()
        return name if name in PROVIDERS else DEFAULT_PROVIDER

    @property
    def active_settings(self) -> Optional[ProviderSettings]:
        return self._config.settings_for(self._config.active_provider)

    def get(self) -> AIProvider:
        if self._instance is not None:
            return self._instance

        requested = self._config.active_provider
        name = self.provider_name
        if name != requested.lower().strip():
            log.warning(
                f'Unknown AI provider "{requested}", defaulting to {DEFAULT_PROVIDER}.'
            )

        settings = self._config.settings_for(name)
        model = settings.default_model if settings else ""
        # Constructor errors (missing credential) propagate; nothing is cached.
        self._instance = self._builder(provider=name, model=model, config=self._config)
        log.info(f"AI provider initialised: {name} (model={model or 'unset'})")
        return self._instance
