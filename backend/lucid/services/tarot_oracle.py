"""Tarot Oracle — every LLM-backed operation, each with a fixed fallback.

Invariants:
    - No operation propagates provider or parse failures: it logs and falls back
    - Model output always goes through parse_json_or (fence/prose tolerant)
    - String fields are normalized with sanitize_string
    - check_connection is the only operation that reports the failure message

Design Decisions:
    - Provider-agnostic: one ChatProvider, the adapter owns JSON-mode wiring
    - Fallback texts are part of the contract (UI renders them verbatim)
"""

import logging
from dataclasses import dataclass

from lucid.core.domain_types import DEFAULT_USER_NAME, Provider
from lucid.core.errors import LucidError
from lucid.core.json_extract import parse_json_or
from lucid.core.prompts import (
    DAILY_SYSTEM, JOURNAL_SYSTEM, PRACTICE_SYSTEM, READING_SYSTEM,
    RECOMMEND_SYSTEM,
    build_chat_system_prompt, build_daily_practice_prompt,
    build_daily_reading_prompt, build_full_reading_prompt,
    build_journal_prompt, build_recommend_spread_prompt, chat_turns,
)
from lucid.core.records import (
    ChatMessage, DailyPractice, DailyReading, JournalAnalysis, Spread, TarotCard,
)
from lucid.core.repository_protocols import ChatProvider
from lucid.core.sanitize import sanitize_list, sanitize_string
from lucid.schemas.config import ConnectionResult

logger = logging.getLogger(__name__)

MAX_RECOMMENDATIONS = 3

# ─── Fallbacks ──────────────────────────────────────────────────

CONNECTION_FAILED = "连接失败"
CLOUDED_INTERPRETATION = (
    "The stars are clouded. Please try interpreting the cards with your intuition."
)
UNCLEAR_MEANING = "Energy unclear"
CHAT_INTERRUPTED = "Connection interrupted."
CHAT_EMPTY_REPLY = "Info retrieved."
DAILY_GUIDANCE_FALLBACK = "Trust your intuition today."
DAILY_MEANING_DEFAULT = "Energy"
DAILY_MEANING_FALLBACK = "..."
PRACTICE_FALLBACK = DailyPractice(
    energy_status="Peace",
    todays_affirmation="I am calm.",
    action_step="Breathe deeply 3 times.",
)


@dataclass
class FullReading:
    interpretation: str
    card_meanings: list[str]


class TarotOracle:
    """Prompts the active provider and turns replies into domain records."""

    def __init__(self, provider: ChatProvider, user_name: str = DEFAULT_USER_NAME):
        self.provider = provider
        self.user_name = user_name or DEFAULT_USER_NAME

    async def check_connection(self) -> ConnectionResult:
        try:
            await self.provider.ping()
            return ConnectionResult(success=True)
        except LucidError as e:
            logger.warning(
                f"Connection check failed: {e.message}",
                extra={"provider": self.provider.name, "error_code": e.code},
            )
            return ConnectionResult(success=False, message=e.message or CONNECTION_FAILED)

    async def recommend_spread(self, question: str, spreads: list[Spread]) -> list[str]:
        """Up to three spread ids; the first catalog spread when the model is no help."""
        fallback = [spreads[0].id]
        raw = await self._ask(
            "recommend_spread", RECOMMEND_SYSTEM,
            build_recommend_spread_prompt(question, spreads),
        )
        if raw is None:
            return fallback
        parsed = parse_json_or(raw, None)
        if isinstance(parsed, list) and parsed:
            return [sanitize_string(s) for s in parsed[:MAX_RECOMMENDATIONS]]
        return fallback

    async def generate_full_reading(
        self, question: str, spread: Spread, cards: list[TarotCard],
    ) -> FullReading:
        fallback = FullReading(
            interpretation=CLOUDED_INTERPRETATION,
            card_meanings=[UNCLEAR_MEANING for _ in cards],
        )
        raw = await self._ask(
            "generate_full_reading", READING_SYSTEM,
            build_full_reading_prompt(question, spread, cards, self.user_name),
        )
        parsed = _as_object(raw)
        if parsed is None:
            return fallback
        meanings = parsed.get("cardMeanings")
        return FullReading(
            interpretation=sanitize_string(parsed.get("interpretation")),
            card_meanings=(
                [sanitize_string(m) for m in meanings] if isinstance(meanings, list) else []
            ),
        )

    async def chat_with_tarot(
        self, history: list[ChatMessage], reading_context: str,
    ) -> str:
        """Free-text follow-up; the reading itself rides in the system prompt."""
        try:
            reply = await self.provider.send_prompt(
                build_chat_system_prompt(reading_context), chat_turns(history),
            )
        except LucidError as e:
            self._log_failure("chat_with_tarot", e)
            return CHAT_INTERRUPTED
        if not reply and self.provider.name == Provider.GEMINI.value:
            return CHAT_EMPTY_REPLY
        return reply

    async def generate_daily_reading(self, cards: list[TarotCard]) -> DailyReading:
        raw = await self._ask(
            "generate_daily_reading", DAILY_SYSTEM,
            build_daily_reading_prompt(cards, self.user_name),
        )
        parsed = _as_object(raw)
        if parsed is None:
            return DailyReading(
                guidance=DAILY_GUIDANCE_FALLBACK,
                cards=[c.model_copy(update={"meaning": DAILY_MEANING_FALLBACK}) for c in cards],
            )
        meanings = parsed.get("cardMeanings")
        if not isinstance(meanings, list):
            meanings = []
        return DailyReading(
            guidance=sanitize_string(parsed.get("guidance")),
            cards=[
                c.model_copy(update={
                    "meaning": (
                        sanitize_string(meanings[i]) if i < len(meanings) else ""
                    ) or DAILY_MEANING_DEFAULT,
                })
                for i, c in enumerate(cards)
            ],
        )

    async def generate_daily_practice(self, context: str) -> DailyPractice:
        raw = await self._ask(
            "generate_daily_practice", PRACTICE_SYSTEM,
            build_daily_practice_prompt(context, self.user_name),
        )
        parsed = _as_object(raw)
        if parsed is None:
            return PRACTICE_FALLBACK.model_copy()
        return DailyPractice(
            energy_status=sanitize_string(parsed.get("energyStatus")),
            todays_affirmation=sanitize_string(parsed.get("todaysAffirmation")),
            action_step=sanitize_string(parsed.get("actionStep")),
        )

    async def analyze_journal_entry(self, content: str) -> JournalAnalysis | None:
        """None on failure: the caller keeps the draft and archives nothing."""
        raw = await self._ask(
            "analyze_journal_entry", JOURNAL_SYSTEM, build_journal_prompt(content),
        )
        parsed = _as_object(raw)
        if parsed is None:
            return None
        return JournalAnalysis(
            emotional_state=sanitize_list(parsed.get("emotionalState")),
            blocks_identified=sanitize_list(parsed.get("blocksIdentified")),
            high_self_traits=sanitize_list(parsed.get("highSelfTraits")),
            summary=sanitize_string(parsed.get("summary")),
            tomorrows_advice=sanitize_string(parsed.get("tomorrowsAdvice")),
        )

    async def _ask(self, operation: str, system_text: str, prompt: str) -> str | None:
        """JSON-mode call; None when the provider failed."""
        try:
            return await self.provider.send_prompt(system_text, prompt, json_mode=True)
        except LucidError as e:
            self._log_failure(operation, e)
            return None

    def _log_failure(self, operation: str, e: LucidError) -> None:
        logger.error(
            f"{operation} failed, using fallback: {e.message}",
            extra={
                "provider": self.provider.name,
                "operation": operation,
                "error_code": e.code,
            },
        )


def _as_object(raw: str | None) -> dict | None:
    """Parsed JSON object, {} for any other JSON value, None when unusable."""
    if raw is None:
        return None
    parsed = parse_json_or(raw, None)
    if parsed is None:
        return None
    return parsed if isinstance(parsed, dict) else {}
