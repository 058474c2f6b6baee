"""Catalog Routes — static spread definitions and the 78-card deck."""

from fastapi import APIRouter

from lucid.core.deck import card_image_url, generate_tarot_deck
from lucid.core.spreads import list_spreads
from lucid.schemas.readings import DeckCard, DeckResponse, SpreadListResponse

router = APIRouter(prefix="/api/v1", tags=["catalog"])


@router.get("/spreads", response_model=SpreadListResponse)
async def get_spreads():
    return SpreadListResponse(spreads=list_spreads())


@router.get("/deck", response_model=DeckResponse)
async def get_deck():
    return DeckResponse(cards=[
        DeckCard(**card.model_dump(), image_url=card_image_url(card))
        for card in generate_tarot_deck()
    ])
