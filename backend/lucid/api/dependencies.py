"""API Dependencies — FastAPI providers for the store, provider hub, and services.

Invariants:
    - One ProviderHub (and one pooled HTTP client) per process
    - The stored AI config is loaded into the hub before any service uses it
    - Model-backed routes require an API key (ApiKeyMissingError otherwise)

Design Decisions:
    - Hub as a lazy module-level singleton, closed by the lifespan on shutdown
    - Services built per request around the request's DB session
"""

import random

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lucid.config import get_settings
from lucid.core.errors import ApiKeyMissingError, ErrorContext
from lucid.infrastructure.database import get_db
from lucid.infrastructure.http_client import ResilientHttpClient
from lucid.infrastructure.kv_store import SqlKeyValueStore
from lucid.infrastructure.providers import ProviderHub
from lucid.services.ai_config import AiConfigService
from lucid.services.daily_ritual import DailyRitual
from lucid.services.journal import JournalService
from lucid.services.reading_archive import ReadingArchive
from lucid.services.reading_flow import ReadingFlow
from lucid.services.tarot_oracle import TarotOracle

_provider_hub: ProviderHub | None = None


def get_provider_hub() -> ProviderHub:
    """Singleton hub; its HTTP client is reused across requests."""
    global _provider_hub
    if _provider_hub is None:
        settings = get_settings()
        http = ResilientHttpClient(
            max_retries=settings.provider_max_retries,
            base_delay_ms=settings.provider_base_delay_ms,
            max_delay_ms=settings.provider_max_delay_ms,
            timeout_seconds=settings.provider_timeout_seconds,
        )
        _provider_hub = ProviderHub(settings, http)
    return _provider_hub


async def close_provider_hub() -> None:
    global _provider_hub
    if _provider_hub is not None:
        await _provider_hub.http.aclose()
        _provider_hub = None


def get_rng() -> random.Random:
    return random.Random()


async def get_kv_store(db: AsyncSession = Depends(get_db)) -> SqlKeyValueStore:
    return SqlKeyValueStore(db)


async def get_ai_config(
    store: SqlKeyValueStore = Depends(get_kv_store),
    hub: ProviderHub = Depends(get_provider_hub),
) -> AiConfigService:
    service = AiConfigService(store, hub)
    await service.ensure_loaded()
    return service


async def get_oracle(
    ai_config: AiConfigService = Depends(get_ai_config),
) -> TarotOracle:
    hub = ai_config.hub
    return TarotOracle(hub.provider(), hub.config.user_name)


async def require_api_key(
    ai_config: AiConfigService = Depends(get_ai_config),
) -> None:
    if not ai_config.has_api_key():
        raise ApiKeyMissingError(ErrorContext(
            provider=ai_config.hub.config.provider.value,
            user_message="Configure an API key first",
        ))


async def get_archive(
    store: SqlKeyValueStore = Depends(get_kv_store),
) -> ReadingArchive:
    return ReadingArchive(store)


async def get_reading_flow(
    oracle: TarotOracle = Depends(get_oracle),
    archive: ReadingArchive = Depends(get_archive),
    rng: random.Random = Depends(get_rng),
) -> ReadingFlow:
    return ReadingFlow(oracle, archive, rng)


async def get_daily_ritual(
    store: SqlKeyValueStore = Depends(get_kv_store),
    oracle: TarotOracle = Depends(get_oracle),
    rng: random.Random = Depends(get_rng),
) -> DailyRitual:
    return DailyRitual(store, oracle, rng)


async def get_journal(
    store: SqlKeyValueStore = Depends(get_kv_store),
    oracle: TarotOracle = Depends(get_oracle),
) -> JournalService:
    return JournalService(store, oracle)
