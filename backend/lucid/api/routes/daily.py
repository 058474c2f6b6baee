"""Daily Routes — today's energy check: read, draw, reset."""

from fastapi import APIRouter, Depends

from lucid.schemas.daily import DailyDrawRequest, DailyResponse
from lucid.services.daily_ritual import DailyRitual
from lucid.api.dependencies import get_daily_ritual, require_api_key

router = APIRouter(prefix="/api/v1/daily", tags=["daily"])


@router.get("", response_model=DailyResponse)
async def get_today(ritual: DailyRitual = Depends(get_daily_ritual)):
    day, record = await ritual.get_today()
    return DailyResponse(date_key=day, record=record)


@router.post(
    "/draw", response_model=DailyResponse,
    dependencies=[Depends(require_api_key)],
)
async def draw_today(
    body: DailyDrawRequest | None = None,
    ritual: DailyRitual = Depends(get_daily_ritual),
):
    day, record = await ritual.draw(body.indices if body else None)
    return DailyResponse(date_key=day, record=record)


@router.delete("", response_model=DailyResponse)
async def reset_today(ritual: DailyRitual = Depends(get_daily_ritual)):
    return DailyResponse(date_key=await ritual.reset())
