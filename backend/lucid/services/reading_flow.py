"""Reading Flow — question to spread to draw to interpretation to archived session.

Invariants:
    - A standard draw picks exactly spread.card_count distinct cards from one shuffled deck
    - four_elements draws one card from each elemental deck, positions 火/水/风/土
    - Card i receives card_meanings[i], or "" when the model returned fewer
    - A new session starts with empty chat history and no feedback, and is archived
    - Chat sends the full history (user turn included) with the interpretation as context
"""

import logging
import random
import uuid

from lucid.core.date_keys import now_millis
from lucid.core.deck import (
    build_elemental_decks, draw_cards, generate_tarot_deck, shuffle_deck,
)
from lucid.core.domain_types import ChatRole, Element
from lucid.core.errors import ValidationError
from lucid.core.records import ChatMessage, ReadingSession, Spread, TarotCard
from lucid.core.spreads import FOUR_ELEMENTS_SPREAD_ID, get_spread, list_spreads
from lucid.services.reading_archive import ReadingArchive
from lucid.services.tarot_oracle import TarotOracle

logger = logging.getLogger(__name__)


class ReadingFlow:
    def __init__(
        self,
        oracle: TarotOracle,
        archive: ReadingArchive,
        rng: random.Random | None = None,
    ):
        self.oracle = oracle
        self.archive = archive
        self.rng = rng or random.Random()

    async def recommend(self, question: str) -> list[str]:
        return await self.oracle.recommend_spread(question, list_spreads())

    def draw(
        self,
        spread: Spread,
        indices: list[int] | None = None,
        element_indices: dict[Element, int] | None = None,
    ) -> list[TarotCard]:
        """Shuffle and pick; omitted picks are chosen at random."""
        if spread.id == FOUR_ELEMENTS_SPREAD_ID:
            return self._draw_elemental(element_indices or {})

        deck = shuffle_deck(generate_tarot_deck(), self.rng)
        if indices is None:
            indices = self.rng.sample(range(len(deck)), spread.card_count)
        elif len(indices) != spread.card_count:
            raise ValidationError(
                f"Spread '{spread.id}' needs {spread.card_count} cards, got {len(indices)}",
                "indices",
            )
        return draw_cards(deck, indices, [p.name for p in spread.positions])

    def _draw_elemental(self, picks: dict[Element, int]) -> list[TarotCard]:
        decks = build_elemental_decks(self.rng)
        cards = []
        for element in Element:
            deck = decks[element]
            idx = picks.get(element)
            if idx is None:
                idx = self.rng.randrange(len(deck))
            cards.extend(draw_cards(deck, [idx], [element.position_name]))
        return cards

    async def create_reading(
        self,
        question: str,
        spread_id: str,
        indices: list[int] | None = None,
        element_indices: dict[Element, int] | None = None,
    ) -> ReadingSession:
        spread = get_spread(spread_id)
        cards = self.draw(spread, indices, element_indices)
        result = await self.oracle.generate_full_reading(question, spread, cards)

        meanings = result.card_meanings
        session = ReadingSession(
            id=str(uuid.uuid4()),
            date=now_millis(),
            question=question,
            spread_id=spread.id,
            spread_name=spread.name,
            cards=[
                c.model_copy(update={"meaning": meanings[i] if i < len(meanings) else ""})
                for i, c in enumerate(cards)
            ],
            interpretation=result.interpretation,
        )
        await self.archive.add(session)
        logger.info(
            f"Reading created with spread {spread.id}",
            extra={"session_id": session.id},
        )
        return session

    async def chat(
        self, session_id: str, message: str,
    ) -> tuple[ChatMessage, ReadingSession]:
        session = await self.archive.get(session_id)
        user_msg = ChatMessage(role=ChatRole.USER, text=message)
        history = [*session.chat_history, user_msg]
        reply = await self.oracle.chat_with_tarot(history, session.interpretation)
        model_msg = ChatMessage(role=ChatRole.MODEL, text=reply)
        updated = await self.archive.append_chat(session_id, [user_msg, model_msg])
        return model_msg, updated
