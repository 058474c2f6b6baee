"""AI Config Routes — read, apply, and test the provider configuration.

Invariants:
    - The API key is write-only: responses report presence, never the value
    - PUT and POST /test both persist the submitted config before acting
"""

from fastapi import APIRouter, Depends

from lucid.core.domain_types import Provider
from lucid.schemas.config import AiConfigResponse, AiConfigUpdate, ConnectionResult
from lucid.services.ai_config import AiConfigService
from lucid.services.tarot_oracle import TarotOracle
from lucid.api.dependencies import get_ai_config

router = APIRouter(prefix="/api/v1/config", tags=["config"])


async def _describe(ai_config: AiConfigService) -> AiConfigResponse:
    config = ai_config.hub.config
    return AiConfigResponse(
        provider=config.provider,
        user_name=config.user_name,
        base_url=config.base_url,
        has_api_key=ai_config.has_api_key(),
        stored_keys={p: bool(await ai_config.stored_key(p)) for p in Provider},
    )


@router.get("", response_model=AiConfigResponse)
async def get_config(ai_config: AiConfigService = Depends(get_ai_config)):
    return await _describe(ai_config)


@router.put("", response_model=AiConfigResponse)
async def update_config(
    body: AiConfigUpdate, ai_config: AiConfigService = Depends(get_ai_config),
):
    await ai_config.apply_config(
        body.provider, body.api_key, body.user_name, body.base_url,
    )
    return await _describe(ai_config)


@router.post("/test", response_model=ConnectionResult)
async def test_connection(
    body: AiConfigUpdate, ai_config: AiConfigService = Depends(get_ai_config),
):
    """Apply the config, then make the cheapest possible provider call."""
    config = await ai_config.apply_config(
        body.provider, body.api_key, body.user_name, body.base_url,
    )
    oracle = TarotOracle(ai_config.hub.provider(), config.user_name)
    return await oracle.check_connection()
