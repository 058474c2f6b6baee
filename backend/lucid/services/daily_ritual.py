"""Daily Ritual — one three-card energy check (body, mind, spirit) per calendar day.

Invariants:
    - At most one DailyRecord per day, stored under lucid_daily_<YYYY/M/D>
    - Drawing replaces today's record; reset deletes it
    - The practice is generated from the reading: "<guidance>. Cards: a, b, c"
"""

import logging
import random
from typing import Callable

from lucid.core.date_keys import now_millis, today_key
from lucid.core.deck import draw_cards, generate_tarot_deck, shuffle_deck
from lucid.core.domain_types import DAILY_POSITIONS, DateKey
from lucid.core.errors import ValidationError
from lucid.core.prompts import build_practice_context
from lucid.core.records import DailyRecord
from lucid.core.repository_protocols import KeyValueStore
from lucid.services.tarot_oracle import TarotOracle

logger = logging.getLogger(__name__)

DAILY_KEY_PREFIX = "lucid_daily_"


def daily_storage_key(day: DateKey) -> str:
    return f"{DAILY_KEY_PREFIX}{day}"


class DailyRitual:
    def __init__(
        self,
        store: KeyValueStore,
        oracle: TarotOracle,
        rng: random.Random | None = None,
        today: Callable[[], DateKey] = today_key,
    ):
        self.store = store
        self.oracle = oracle
        self.rng = rng or random.Random()
        self.today = today

    async def get_today(self) -> tuple[DateKey, DailyRecord | None]:
        day = self.today()
        raw = await self.store.get(daily_storage_key(day))
        if not raw:
            return day, None
        try:
            return day, DailyRecord.model_validate_json(raw)
        except ValueError as e:
            logger.error(
                f"Daily record unreadable, ignoring: {e}", extra={"date_key": day},
            )
            return day, None

    async def draw(self, indices: list[int] | None = None) -> tuple[DateKey, DailyRecord]:
        """Shuffle, pick three cards, then generate the reading and the practice."""
        deck = shuffle_deck(generate_tarot_deck(), self.rng)
        if indices is None:
            indices = self.rng.sample(range(len(deck)), len(DAILY_POSITIONS))
        elif len(indices) != len(DAILY_POSITIONS):
            raise ValidationError(
                f"Daily draw needs {len(DAILY_POSITIONS)} cards, got {len(indices)}",
                "indices",
            )
        cards = draw_cards(deck, indices, list(DAILY_POSITIONS))

        reading = await self.oracle.generate_daily_reading(cards)
        practice = await self.oracle.generate_daily_practice(
            build_practice_context(reading.guidance, reading.cards),
        )
        record = DailyRecord(
            date=now_millis(), reading=reading, practice=practice,
        )

        day = self.today()
        await self.store.set(daily_storage_key(day), record.model_dump_json())
        logger.info("Daily record saved", extra={"date_key": day})
        return day, record

    async def reset(self) -> DateKey:
        day = self.today()
        await self.store.delete(daily_storage_key(day))
        return day
