"""Provider Configuration — verifies base URL normalization and key precedence.

Invariants:
    - Blank base URL: SiliconFlow default, Gemini direct ("")
    - Scheme added, trailing slashes removed
    - workers.dev proxies are rejected for SiliconFlow only
"""

import dataclasses

import pytest

from lucid.core.domain_types import DEFAULT_USER_NAME, Provider
from lucid.core.provider_config import (
    SILICONFLOW_BASE_URL, ProviderConfig, build_provider_config, normalize_base_url,
)


@pytest.mark.parametrize("blank", [None, "", "   "])
def test_blank_base_url_defaults_per_provider(blank):
    assert normalize_base_url(blank, Provider.SILICONFLOW) == SILICONFLOW_BASE_URL
    assert normalize_base_url(blank, Provider.GEMINI) == ""


def test_scheme_added_and_trailing_slashes_removed():
    url = normalize_base_url("  proxy.example.com/v1/// ", Provider.GEMINI)
    assert url == "https://proxy.example.com/v1"


def test_existing_scheme_kept():
    assert normalize_base_url("HTTP://local:8080", Provider.GEMINI) == "HTTP://local:8080"


def test_workers_dev_rejected_for_siliconflow_only():
    proxy = "https://my-proxy.workers.dev"
    assert normalize_base_url(proxy, Provider.SILICONFLOW) == SILICONFLOW_BASE_URL
    assert normalize_base_url(proxy, Provider.GEMINI) == proxy


def test_build_defaults_user_name():
    config = build_provider_config("key-123456", "", None, Provider.GEMINI)
    assert config.user_name == DEFAULT_USER_NAME
    assert config.base_url == ""


def test_config_is_frozen():
    config = ProviderConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.api_key = "x"  # type: ignore[misc]


def test_gemini_prefers_environment_key():
    config = build_provider_config("stored-key", provider=Provider.GEMINI)
    assert config.effective_api_key("env-key") == "env-key"
    assert config.effective_api_key("") == "stored-key"


def test_siliconflow_prefers_stored_key():
    config = build_provider_config("stored-key", provider=Provider.SILICONFLOW)
    assert config.effective_api_key("env-key") == "stored-key"
    empty = build_provider_config("", provider=Provider.SILICONFLOW)
    assert empty.effective_api_key("env-key") == "env-key"
