"""Config Schemas — provider selection, API key entry, and connectivity results.

Invariants:
    - AiConfigUpdate.api_key is stripped and must be longer than 5 characters
    - AiConfigResponse never echoes the API key, only whether one is present
"""

from pydantic import BaseModel, Field, field_validator

from lucid.core.domain_types import Provider
from lucid.core.provider_config import MIN_API_KEY_LENGTH


class AiConfigUpdate(BaseModel):
    """Apply a provider config (the "start system" / "test connection" form)."""
    provider: Provider = Provider.GEMINI
    api_key: str = Field(max_length=500)
    user_name: str = Field("", max_length=100)
    base_url: str | None = Field(None, max_length=500)

    @field_validator("api_key")
    @classmethod
    def strip_api_key(cls, v: str) -> str:
        v = v.strip()
        if len(v) < MIN_API_KEY_LENGTH:
            raise ValueError("api_key must be longer than 5 characters")
        return v

    @field_validator("user_name")
    @classmethod
    def strip_user_name(cls, v: str) -> str:
        return v.strip()


class AiConfigResponse(BaseModel):
    provider: Provider
    user_name: str
    base_url: str
    has_api_key: bool
    # Remembered key per provider, so a UI can prefill on provider switch
    stored_keys: dict[Provider, bool]


class ConnectionResult(BaseModel):
    success: bool
    message: str | None = None
