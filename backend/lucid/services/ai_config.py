"""AI Config — load, remember, and apply the user's provider configuration.

Invariants:
    - One key remembered per provider; the Gemini key is mirrored into lucid_api_key
    - Applying a config persists provider, name, normalized base URL, and active key
    - Applying a config always goes through ProviderHub.reconfigure (cached client dropped)
    - Keys shorter than 6 characters (after strip) are rejected
"""

import logging

from lucid.core.domain_types import Provider
from lucid.core.errors import ValidationError
from lucid.core.provider_config import (
    MIN_API_KEY_LENGTH, ProviderConfig, build_provider_config,
)
from lucid.core.repository_protocols import KeyValueStore
from lucid.infrastructure.providers import ProviderHub

logger = logging.getLogger(__name__)

ACTIVE_KEY = "lucid_api_key"
PROVIDER_KEY = "lucid_provider"
BASE_URL_KEY = "lucid_base_url"
USER_NAME_KEY = "lucid_user_name"
_PER_PROVIDER_KEY = {
    Provider.GEMINI: "lucid_key_gemini",
    Provider.SILICONFLOW: "lucid_key_siliconflow",
}


class AiConfigService:
    """Provider settings persisted in the key-value store."""

    def __init__(self, store: KeyValueStore, hub: ProviderHub):
        self.store = store
        self.hub = hub

    async def load_config(self) -> ProviderConfig:
        """Rebuild the last applied config from the store."""
        provider = _parse_provider(await self.store.get(PROVIDER_KEY))
        api_key = (
            await self.store.get(ACTIVE_KEY) or await self.stored_key(provider)
        )
        return build_provider_config(
            api_key,
            await self.store.get(USER_NAME_KEY),
            await self.store.get(BASE_URL_KEY),
            provider,
        )

    async def ensure_loaded(self) -> ProviderConfig:
        """Load the stored config into the hub once per process."""
        if not self.hub.loaded:
            self.hub.reconfigure(await self.load_config())
        return self.hub.config

    async def stored_key(self, provider: Provider) -> str:
        """The key last entered for provider (prefill on provider switch)."""
        key = await self.store.get(_PER_PROVIDER_KEY[provider])
        if not key and provider == Provider.GEMINI:
            key = await self.store.get(ACTIVE_KEY)
        return key or ""

    async def remember_key(self, provider: Provider, api_key: str) -> None:
        await self.store.set(_PER_PROVIDER_KEY[provider], api_key)
        if provider == Provider.GEMINI:
            await self.store.set(ACTIVE_KEY, api_key)

    async def apply_config(
        self,
        provider: Provider,
        api_key: str,
        user_name: str = "",
        base_url: str | None = None,
    ) -> ProviderConfig:
        api_key = api_key.strip()
        if len(api_key) < MIN_API_KEY_LENGTH:
            raise ValidationError("API key must be longer than 5 characters", "api_key")

        await self.remember_key(provider, api_key)
        config = build_provider_config(
            api_key, user_name.strip() or None, base_url, provider,
        )
        await self.store.set(ACTIVE_KEY, config.api_key)
        await self.store.set(USER_NAME_KEY, config.user_name)
        await self.store.set(PROVIDER_KEY, config.provider.value)
        await self.store.set(BASE_URL_KEY, config.base_url)
        self.hub.reconfigure(config)
        logger.info(
            f"AI config applied for {config.user_name}",
            extra={"provider": config.provider.value},
        )
        return config

    def has_api_key(self) -> bool:
        return self.hub.has_api_key()


def _parse_provider(raw: str | None) -> Provider:
    try:
        return Provider(raw) if raw else Provider.GEMINI
    except ValueError:
        logger.warning(f"Unknown stored provider {raw!r}, falling back to gemini")
        return Provider.GEMINI

