"""Provider Configuration — immutable description of which backend to call and how.

Invariants:
    - ProviderConfig is frozen; reconfiguration builds a new instance
    - base_url is normalized once, at construction (no trailing "/", always has a scheme)
    - SiliconFlow never points at a workers.dev proxy (those only front Gemini)
    - Gemini with an empty base_url means the public Google endpoint
"""

import re
from dataclasses import dataclass

from lucid.core.domain_types import DEFAULT_USER_NAME, Provider

SILICONFLOW_BASE_URL = "https://api.siliconflow.cn/v1"

# Keys of 5 characters or fewer are treated as typos
MIN_API_KEY_LENGTH = 6

_SCHEME = re.compile(r"^https?://", re.IGNORECASE)


@dataclass(frozen=True)
class ProviderConfig:
    provider: Provider = Provider.GEMINI
    api_key: str = ""
    user_name: str = DEFAULT_USER_NAME
    base_url: str = ""

    def effective_api_key(self, env_key: str = "") -> str:
        """Gemini prefers the deployment key; SiliconFlow prefers the user's key."""
        if self.provider == Provider.GEMINI:
            return env_key or self.api_key
        return self.api_key or env_key


def normalize_base_url(base_url: str | None, provider: Provider) -> str:
    if base_url and base_url.strip():
        url = base_url.strip().rstrip("/")
        if not _SCHEME.match(url):
            url = f"https://{url}"
        if provider == Provider.SILICONFLOW and "workers.dev" in url:
            return SILICONFLOW_BASE_URL
        return url
    if provider == Provider.SILICONFLOW:
        return SILICONFLOW_BASE_URL
    return ""


def build_provider_config(
    api_key: str,
    user_name: str | None = None,
    base_url: str | None = None,
    provider: Provider = Provider.GEMINI,
) -> ProviderConfig:
    return ProviderConfig(
        provider=provider,
        api_key=api_key,
        user_name=user_name or DEFAULT_USER_NAME,
        base_url=normalize_base_url(base_url, provider),
    )
