"""AI Config Service — verifies key memory, persistence, and hub reconfiguration.

Invariants:
    - Gemini key stored under lucid_key_gemini AND lucid_api_key
    - SiliconFlow key stored under lucid_key_siliconflow only (plus active key on apply)
    - apply_config persists normalized values and reconfigures the hub
    - load_config round-trips what apply_config stored
"""

import pytest

from lucid.core.domain_types import Provider
from lucid.core.errors import ValidationError
from lucid.core.provider_config import SILICONFLOW_BASE_URL
from lucid.services.ai_config import AiConfigService
from tests.services.fake_provider import FakeHub, FakeProvider


@pytest.fixture
def service(store):
    return AiConfigService(store, FakeHub(FakeProvider()))


async def test_remember_gemini_key_mirrors_active_key(service, store):
    await service.remember_key(Provider.GEMINI, "gem-key-123")
    assert await store.get("lucid_key_gemini") == "gem-key-123"
    assert await store.get("lucid_api_key") == "gem-key-123"


async def test_remember_siliconflow_key_is_separate(service, store):
    await service.remember_key(Provider.SILICONFLOW, "sf-key-123")
    assert await store.get("lucid_key_siliconflow") == "sf-key-123"
    assert await store.get("lucid_api_key") is None


async def test_stored_key_falls_back_to_legacy_active_key(service, store):
    await store.set("lucid_api_key", "legacy-key")
    assert await service.stored_key(Provider.GEMINI) == "legacy-key"
    assert await service.stored_key(Provider.SILICONFLOW) == ""


async def test_apply_config_persists_and_reconfigures(service, store):
    config = await service.apply_config(
        Provider.SILICONFLOW, "  sf-key-123  ", "  Ann ", "my-proxy.workers.dev/",
    )
    assert config.api_key == "sf-key-123"
    assert config.user_name == "Ann"
    assert config.base_url == SILICONFLOW_BASE_URL
    assert service.hub.config == config
    assert await store.get("lucid_provider") == "siliconflow"
    assert await store.get("lucid_base_url") == SILICONFLOW_BASE_URL
    assert await store.get("lucid_user_name") == "Ann"
    assert await store.get("lucid_api_key") == "sf-key-123"


async def test_apply_config_rejects_short_key(service, store):
    with pytest.raises(ValidationError) as exc:
        await service.apply_config(Provider.GEMINI, " 12345 ")
    assert exc.value.field == "api_key"
    assert await store.get("lucid_api_key") is None


async def test_blank_name_defaults(service):
    config = await service.apply_config(Provider.GEMINI, "gem-key-123", "   ")
    assert config.user_name == "旅行者"


async def test_load_config_round_trip(service, store):
    await service.apply_config(Provider.GEMINI, "gem-key-123", "Ann", "proxy.example.com")
    fresh = AiConfigService(store, FakeHub(FakeProvider()))
    loaded = await fresh.load_config()
    assert loaded.provider == Provider.GEMINI
    assert loaded.api_key == "gem-key-123"
    assert loaded.base_url == "https://proxy.example.com"
    assert loaded.user_name == "Ann"


async def test_load_config_defaults_on_empty_store(service):
    config = await service.load_config()
    assert config.provider == Provider.GEMINI
    assert config.api_key == ""
    assert config.user_name == "旅行者"


async def test_unknown_stored_provider_falls_back_to_gemini(service, store):
    await store.set("lucid_provider", "openai")
    assert (await service.load_config()).provider == Provider.GEMINI


async def test_ensure_loaded_only_once(service, store):
    await store.set("lucid_api_key", "first-key-1")
    await service.ensure_loaded()
    await store.set("lucid_api_key", "second-key-2")
    config = await service.ensure_loaded()
    assert config.api_key == "first-key-1"
    assert service.has_api_key()
